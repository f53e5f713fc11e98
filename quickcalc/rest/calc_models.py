"""
Pydantic Models for Calculator and History Endpoints.

Request and response models for the six calculators and the calculation
history. JSON keys are camelCase on the wire (birthDate, fromUnit, ...) and
snake_case in Python; either spelling is accepted on input.
"""

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from quickcalc.calculator.calc_types import CalculatorType, LengthUnit, PercentageOperation, TimeUnit, WeightUnit
from quickcalc.calculator.conversion_tables import resolve_alias


class CamelModel( BaseModel ):
    """Base model: camelCase aliases, population by field name allowed."""
    model_config = ConfigDict( alias_generator=to_camel, populate_by_name=True )


def _canonical_unit( value ):
    # "pounds", "Miles", "hrs" → "lb", "mi", "hours"
    if isinstance( value, str ):
        return resolve_alias( value )
    return value


# Request Models

class BasicRequest( CamelModel ):
    """
    Basic calculator request.

    Requires:
        - expression: digits, + - * / . ( ) and spaces only
    """
    expression: str = Field(
        ...,
        description="Arithmetic expression",
        examples=[ "(2 + 3) * 4" ]
    )


class AgeRequest( CamelModel ):
    """
    Age calculator request.

    Requires:
        - birth_date: ISO date or datetime string
        - calc_date: Optional ISO date or datetime string (defaults to today)
    """
    birth_date: str = Field(
        ...,
        description="Birth date",
        examples=[ "1990-05-15" ]
    )
    calc_date: Optional[str] = Field(
        default=None,
        description="Date to calculate the age on (defaults to today)",
        examples=[ "2024-05-15" ]
    )


class WeightRequest( CamelModel ):
    """
    Weight calculator request.

    Requires:
        - weight: finite number > 0
        - unit: kg, g, lb, oz or st (spelled-out names accepted)
    """
    weight: float = Field( ..., gt=0, allow_inf_nan=False, description="Weight to convert", examples=[ 70 ] )
    unit: WeightUnit = Field( ..., description="Unit of the weight", examples=[ "kg" ] )

    @field_validator( "unit", mode="before" )
    @classmethod
    def canonical_unit( cls, value ):
        return _canonical_unit( value )


class PercentageRequest( CamelModel ):
    """
    Percentage calculator request.

    Requires:
        - value, percentage: finite numbers
        - calculation_type: percentage_of, percentage_change or percentage_difference
    """
    value: float = Field( ..., allow_inf_nan=False, description="The value", examples=[ 200 ] )
    percentage: float = Field( ..., allow_inf_nan=False, description="The percentage, or the base value", examples=[ 15 ] )
    calculation_type: PercentageOperation = Field( ..., description="Which percentage calculation to run" )


class TimeRequest( CamelModel ):
    """
    Time calculator request.

    Requires:
        - time: finite number > 0
        - from_unit, to_unit: seconds, minutes, hours, days, weeks, months or years
    """
    time: float = Field( ..., gt=0, allow_inf_nan=False, description="Duration to convert", examples=[ 2 ] )
    from_unit: TimeUnit = Field( ..., description="Unit of the duration" )
    to_unit: TimeUnit = Field( ..., description="Target unit" )

    @field_validator( "from_unit", "to_unit", mode="before" )
    @classmethod
    def canonical_unit( cls, value ):
        return _canonical_unit( value )


class LengthRequest( CamelModel ):
    """
    Length calculator request.

    Requires:
        - length: finite number > 0
        - from_unit, to_unit: m, cm, mm, km, in, ft, yd or mi
    """
    length: float = Field( ..., gt=0, allow_inf_nan=False, description="Length to convert", examples=[ 1 ] )
    from_unit: LengthUnit = Field( ..., description="Unit of the length" )
    to_unit: LengthUnit = Field( ..., description="Target unit" )

    @field_validator( "from_unit", "to_unit", mode="before" )
    @classmethod
    def canonical_unit( cls, value ):
        return _canonical_unit( value )


class HistoryCreateRequest( CamelModel ):
    """
    Manually recorded history entry.

    Requires:
        - type: one of the calculator types
        - calculation, result: non-blank strings
    """
    type: CalculatorType = Field( ..., description="Calculator that produced the entry" )
    calculation: str = Field( ..., min_length=1, description="What was calculated", examples=[ "2 + 3" ] )
    result: str = Field( ..., min_length=1, description="Displayed result", examples=[ "5" ] )

    @field_validator( "calculation", "result" )
    @classmethod
    def not_blank( cls, value ):
        if not value.strip():
            raise ValueError( "must not be blank" )
        return value


# Response Models

class ResultResponse( CamelModel ):
    """Single numeric result (basic and percentage calculators)."""
    result: float


class AgeResponse( CamelModel ):
    """Age calculator response."""
    years: int
    months: int
    days: int
    total_days: int
    total_weeks: int
    days_until_birthday: int
    next_birthday: str = Field( ..., description="ISO date of the next birthday" )


class WeightResponse( CamelModel ):
    """The weight in every weight unit."""
    kg: float
    g: float
    lb: float
    oz: float
    st: float


class ConversionResponse( CamelModel ):
    """Target conversion plus the value in every unit of the dimension."""
    result: float
    conversions: Dict[str, float]


class CalculationRecordResponse( CamelModel ):
    """One history record."""
    id: int
    type: CalculatorType
    calculation: str
    result: str
    timestamp: datetime


class HistoryStatsResponse( CamelModel ):
    """Usage summary of the history."""
    total: int
    by_type: Dict[str, int]
    most_used_type: Optional[CalculatorType] = None
    today_count: int


class MessageResponse( CamelModel ):
    """Plain acknowledgement or error message."""
    message: str
