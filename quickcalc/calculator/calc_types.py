#!/usr/bin/env python3
"""
Closed enumerations shared by the calculator engine and the REST layer.

Unit names, calculator types and percentage operations are str enums so that
pydantic validates them at the HTTP boundary and the engine can match on them
exhaustively.
"""

from enum import Enum


class CalculatorType( str, Enum ):
    """Calculator that produced a history record."""
    BASIC      = "basic"
    AGE        = "age"
    WEIGHT     = "weight"
    PERCENTAGE = "percentage"
    TIME       = "time"
    LENGTH     = "length"


class Dimension( str, Enum ):
    """Family of mutually convertible units."""
    WEIGHT = "weight"
    LENGTH = "length"
    TIME   = "time"


class WeightUnit( str, Enum ):
    """Weight units, base = kilograms."""
    KG = "kg"
    G  = "g"
    LB = "lb"
    OZ = "oz"
    ST = "st"


class LengthUnit( str, Enum ):
    """Length units, base = meters."""
    M  = "m"
    CM = "cm"
    MM = "mm"
    KM = "km"
    IN = "in"
    FT = "ft"
    YD = "yd"
    MI = "mi"


class TimeUnit( str, Enum ):
    """Time units, base = seconds."""
    SECONDS = "seconds"
    MINUTES = "minutes"
    HOURS   = "hours"
    DAYS    = "days"
    WEEKS   = "weeks"
    MONTHS  = "months"
    YEARS   = "years"


class PercentageOperation( str, Enum ):
    """Supported percentage calculations."""
    PERCENTAGE_OF         = "percentage_of"
    PERCENTAGE_CHANGE     = "percentage_change"
    PERCENTAGE_DIFFERENCE = "percentage_difference"
