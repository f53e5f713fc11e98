#!/usr/bin/env python3
"""
Pure Python calculation functions for the QuickCalc calculators.

Domains, all deterministic and side-effect free:
    - to_base() / from_base() — Hub-and-spoke primitives per dimension
    - convert()               — One value between two units of the same dimension
    - convert_to_all()        — One value expressed in every unit of its dimension
    - convert_weight()        — Weight calculator (all five units)
    - convert_length()        — Length calculator (target + all eight units)
    - convert_time()          — Time calculator (target + all seven units)
    - calculate_percentage()  — percentage_of / percentage_change / percentage_difference

Errors are raised as CalcValidationError; positivity of magnitudes is the
caller's concern, the conversion math itself is sign-agnostic.
"""

import math

from quickcalc.calculator.calc_types import Dimension, PercentageOperation
from quickcalc.calculator.calc_exceptions import CalcValidationError
from quickcalc.calculator.conversion_tables import resolve_alias, find_dimension, units_for


def _require_finite( value, label="value" ):
    """
    Coerce value to float and reject NaN/infinity.

    Raises:
        - CalcValidationError if value is not a finite real number
    """
    if isinstance( value, bool ):
        raise CalcValidationError( f"{label} must be a number" )
    try:
        number = float( value )
    except ( TypeError, ValueError ):
        raise CalcValidationError( f"{label} must be a number" )

    if not math.isfinite( number ):
        raise CalcValidationError( f"{label} must be a finite number" )

    return number


def _lookup_unit( unit, dimension=None ):
    """
    Resolve a unit name and find its factor table.

    Requires:
        - unit is a string or unit enum member
        - dimension is None or the Dimension the unit must belong to

    Ensures:
        - Returns ( canonical_unit, factor_table, dimension )

    Raises:
        - CalcValidationError for unknown units or a dimension mismatch
    """
    canonical        = resolve_alias( unit )
    table, found_dim = find_dimension( canonical )

    if table is None:
        raise CalcValidationError( f"Unknown unit: {unit}" )

    if dimension is not None and found_dim != Dimension( dimension ):
        raise CalcValidationError( f"Unit [{unit}] is not a {Dimension( dimension ).value} unit" )

    return canonical, table, found_dim


def to_base( value, unit, dimension=None ):
    """
    Express value in the base unit of its dimension (kg, m or seconds).

    Requires:
        - value is a finite real number
        - unit is a known unit, optionally constrained to dimension

    Ensures:
        - Returns value * factor( unit )

    Raises:
        - CalcValidationError for non-finite values or unknown units
    """
    number = _require_finite( value )
    canonical, table, _ = _lookup_unit( unit, dimension )

    return number * table[ canonical ]


def from_base( base_value, unit, dimension=None ):
    """
    Express a base-unit value in unit.

    Requires:
        - base_value is a finite real number in the base unit
        - unit is a known unit, optionally constrained to dimension

    Ensures:
        - Returns base_value / factor( unit )

    Raises:
        - CalcValidationError for non-finite values or unknown units
    """
    number = _require_finite( base_value )
    canonical, table, _ = _lookup_unit( unit, dimension )

    return number / table[ canonical ]


def convert( value, from_unit, to_unit ):
    """
    Convert a numeric value between two units in the same dimension.

    Requires:
        - value is a finite real number
        - from_unit and to_unit are known units of one dimension

    Ensures:
        - Returns from_base( to_base( value, from_unit ), to_unit )
        - Returns value unchanged when both units resolve to the same unit

    Raises:
        - CalcValidationError for unknown units, mixed dimensions or non-finite values
    """
    number = _require_finite( value )

    from_canonical, _, from_dim = _lookup_unit( from_unit )
    to_canonical,   _, to_dim   = _lookup_unit( to_unit )

    if from_dim != to_dim:
        raise CalcValidationError( f"Cannot convert between {from_dim.value} and {to_dim.value}." )

    if from_canonical == to_canonical:
        return number

    return from_base( to_base( number, from_canonical ), to_canonical )


def convert_to_all( value, from_unit, dimension=None ):
    """
    Express a value in every unit of its dimension.

    Requires:
        - value is a finite real number
        - from_unit is a known unit, optionally constrained to dimension

    Ensures:
        - Returns { unit: converted_value } in table order, base unit first
        - The entry for from_unit equals value exactly
    """
    number = _require_finite( value )
    from_canonical, _, found_dim = _lookup_unit( from_unit, dimension )

    base_value  = to_base( number, from_canonical )
    conversions = { }
    for unit in units_for( found_dim ):
        if unit.value == from_canonical:
            conversions[ unit.value ] = number
        else:
            conversions[ unit.value ] = from_base( base_value, unit )

    return conversions


def convert_weight( weight, unit ):
    """
    Weight calculator: one weight expressed in kg, g, lb, oz and st.

    Requires:
        - weight is a finite real number (callers reject non-positive input)
        - unit is a weight unit

    Ensures:
        - Returns { "kg", "g", "lb", "oz", "st" } conversions
    """
    return convert_to_all( weight, unit, dimension=Dimension.WEIGHT )


def _convert_with_target( value, from_unit, to_unit, dimension ):
    conversions = convert_to_all( value, from_unit, dimension=dimension )
    to_canonical, _, _ = _lookup_unit( to_unit, dimension )

    return {
        "result"      : conversions[ to_canonical ],
        "conversions" : conversions
    }


def convert_length( length, from_unit, to_unit ):
    """
    Length calculator: target conversion plus every length unit.

    Requires:
        - length is a finite real number (callers reject non-positive input)
        - from_unit and to_unit are length units

    Ensures:
        - Returns { "result": float, "conversions": { m, cm, mm, km, in, ft, yd, mi } }
    """
    return _convert_with_target( length, from_unit, to_unit, Dimension.LENGTH )


def convert_time( time, from_unit, to_unit ):
    """
    Time calculator: target conversion plus every time unit.

    Months are 30 days and years are 365 days.

    Requires:
        - time is a finite real number (callers reject non-positive input)
        - from_unit and to_unit are time units

    Ensures:
        - Returns { "result": float, "conversions": { seconds ... years } }
    """
    return _convert_with_target( time, from_unit, to_unit, Dimension.TIME )


def calculate_percentage( value, percentage, calculation_type ):
    """
    Percentage calculator.

    Formulas:
        percentage_of         — percentage / 100 * value      (10 % of 100 = 10)
        percentage_change     — ( value - percentage ) / percentage * 100
                                (from 90 to 100 = 11.11 % increase; percentage holds the old value)
        percentage_difference — value / percentage * 100      (10 is 20 % of 50)

    Requires:
        - value and percentage are finite real numbers
        - calculation_type is a PercentageOperation or its string value

    Ensures:
        - Returns the float result

    Raises:
        - CalcValidationError for unknown operations, non-finite input or a zero
          percentage for change/difference
    """
    value      = _require_finite( value, "value" )
    percentage = _require_finite( percentage, "percentage" )

    try:
        operation = PercentageOperation( getattr( calculation_type, "value", calculation_type ) )
    except ValueError:
        raise CalcValidationError( f"Invalid calculation type: {calculation_type}" )

    if operation == PercentageOperation.PERCENTAGE_OF:
        return ( percentage / 100 ) * value

    if percentage == 0:
        raise CalcValidationError( f"Cannot compute {operation.value} against a zero base" )

    if operation == PercentageOperation.PERCENTAGE_CHANGE:
        return ( ( value - percentage ) / percentage ) * 100

    return ( value / percentage ) * 100


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing calc_operations module..." )
    passed = True

    try:
        weights = convert_weight( 1, "kg" )
        assert weights[ "kg" ] == 1
        assert abs( weights[ "g" ] - 1000 ) < 1e-9
        assert abs( weights[ "lb" ] - 2.2046 ) < 0.0001
        assert abs( weights[ "oz" ] - 35.274 ) < 0.001
        assert abs( weights[ "st" ] - 0.1575 ) < 0.0001
        print( f"  ✓ convert_weight: 1 kg → {weights}" )

        length = convert_length( 1, "mi", "km" )
        assert abs( length[ "result" ] - 1.60934 ) < 1e-9
        assert len( length[ "conversions" ] ) == 8
        print( f"  ✓ convert_length: 1 mi → {length[ 'result' ]} km" )

        time = convert_time( 2, "hours", "minutes" )
        assert time[ "result" ] == 120
        assert abs( time[ "conversions" ][ "days" ] - 2 / 24 ) < 1e-12
        print( f"  ✓ convert_time: 2 hours → {time[ 'result' ]} minutes" )

        assert convert( 5, "m", "meters" ) == 5
        print( "  ✓ convert: same unit → identity" )

        try:
            convert( 1, "km", "kg" )
            assert False, "Should have raised CalcValidationError"
        except CalcValidationError:
            pass
        print( "  ✓ convert: cross-dimension error" )

        assert abs( calculate_percentage( 100, 10, "percentage_of" ) - 10 ) < 1e-9
        assert abs( calculate_percentage( 100, 90, "percentage_change" ) - 11.1111 ) < 0.0001
        assert abs( calculate_percentage( 10, 50, "percentage_difference" ) - 20 ) < 1e-9
        print( "  ✓ calculate_percentage: of / change / difference" )

        print( "✓ calc_operations module smoke test PASSED" )

    except Exception as e:
        print( f"✗ calc_operations module smoke test FAILED: {e}" )
        import traceback
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
