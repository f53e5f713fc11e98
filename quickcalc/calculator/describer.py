#!/usr/bin/env python3
"""
Human-readable history descriptions for each calculator.

Every describe_*() function takes the inputs and the output of one calculator
and returns a ( calculation, result ) pair of display strings, which is what
a history record stores.
"""

import math

from quickcalc.calculator.calc_types import PercentageOperation
from quickcalc.calculator.conversion_tables import resolve_alias


def format_number( value ):
    """
    Format a number for display.

    Requires:
        - value is an int or float

    Ensures:
        - Integral values print without a decimal point
        - abs( value ) >= 100 keeps at most 2 decimals, smaller values at most 6
        - Trailing zeros are stripped
        - inf and nan print as "Infinity", "-Infinity" and "NaN"
    """
    if isinstance( value, float ) and math.isnan( value ):
        return "NaN"
    if isinstance( value, float ) and math.isinf( value ):
        return "Infinity" if value > 0 else "-Infinity"

    if value == int( value ):
        return f"{int( value )}"

    # Smart rounding for display
    if abs( value ) >= 100:
        display = f"{value:.2f}"
    else:
        display = f"{value:.6f}"

    display = display.rstrip( "0" ).rstrip( "." )

    # very small values can round away entirely
    return display if display not in ( "0", "-0" ) else f"{value:.6g}"


def describe_basic( expression, result ):
    """Basic calculator: the expression as typed and its value."""
    return expression.strip(), format_number( result )


def describe_age( birth, reference, age ):
    """
    Age calculator.

    Requires:
        - birth and reference are date or datetime objects
        - age is an AgeResult

    Ensures:
        - calculation reads "From YYYY-MM-DD to YYYY-MM-DD"
        - result reads "N years, N months, N days"
    """
    calculation = f"From {birth.strftime( '%Y-%m-%d' )} to {reference.strftime( '%Y-%m-%d' )}"
    result      = f"{age.years} years, {age.months} months, {age.days} days"

    return calculation, result


def describe_weight( weight, unit, conversions ):
    """
    Weight calculator.

    Ensures:
        - calculation reads "<weight> <unit>"
        - result lists every conversion, e.g. "1 kg = 1000 g = 2.204623 lb ..."
    """
    unit   = resolve_alias( unit )
    result = " = ".join( f"{format_number( value )} {name}" for name, value in conversions.items() )

    return f"{format_number( weight )} {unit}", result


def describe_percentage( value, percentage, calculation_type, result ):
    """
    Percentage calculator.

    Ensures:
        - percentage_of reads "P% of V"
        - percentage_change reads "Change from P to V" with a signed percent result
        - percentage_difference reads "V as a percentage of P"
    """
    operation = PercentageOperation( getattr( calculation_type, "value", calculation_type ) )
    value_display      = format_number( value )
    percentage_display = format_number( percentage )

    if operation == PercentageOperation.PERCENTAGE_OF:
        return f"{percentage_display}% of {value_display}", format_number( result )

    if operation == PercentageOperation.PERCENTAGE_CHANGE:
        return f"Change from {percentage_display} to {value_display}", f"{result:+.2f}%"

    return f"{value_display} as a percentage of {percentage_display}", f"{format_number( result )}%"


def _describe_conversion( amount, from_unit, to_unit, result ):
    from_unit = resolve_alias( from_unit )
    to_unit   = resolve_alias( to_unit )

    return f"{format_number( amount )} {from_unit} to {to_unit}", f"{format_number( result )} {to_unit}"


def describe_time( time, from_unit, to_unit, result ):
    """Time calculator: "2 hours to minutes" → "120 minutes"."""
    return _describe_conversion( time, from_unit, to_unit, result )


def describe_length( length, from_unit, to_unit, result ):
    """Length calculator: "1 mi to km" → "1.60934 km"."""
    return _describe_conversion( length, from_unit, to_unit, result )


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing describer module..." )
    passed = True

    try:
        assert format_number( 14.0 ) == "14"
        assert format_number( 2.20462262 ) == "2.204623"
        assert format_number( 1234.5678 ) == "1234.57"
        assert format_number( float( "inf" ) ) == "Infinity"
        print( "  ✓ format_number" )

        assert describe_basic( " 2 + 3 ", 5.0 ) == ( "2 + 3", "5" )
        assert describe_length( 1, "mi", "km", 1.60934 ) == ( "1 mi to km", "1.60934 km" )
        assert describe_percentage( 100, 10, "percentage_of", 10.0 ) == ( "10% of 100", "10" )
        assert describe_percentage( 100, 90, "percentage_change", 11.1111 )[ 1 ] == "+11.11%"
        print( "  ✓ describe_* pairs" )

        print( "✓ describer module smoke test PASSED" )

    except Exception as e:
        print( f"✗ describer module smoke test FAILED: {e}" )
        import traceback
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
