"""
Unit tests for the calculation operations.

Tests:
- to_base / from_base and convert() round trips
- Identity conversion and cross-dimension rejection
- Weight, length and time calculator outputs
- Percentage formulas and zero-base rejection
"""

import math
import unittest

from quickcalc.calculator import calc_operations as ops
from quickcalc.calculator.calc_exceptions import CalcValidationError
from quickcalc.calculator.calc_types import Dimension, LengthUnit, PercentageOperation, TimeUnit, WeightUnit


class TestCalcOperations( unittest.TestCase ):
    """
    Unit tests for calc_operations.

    Ensures:
        - Conversions agree with the factor tables
        - Invalid input raises CalcValidationError
    """

    def test_to_base_and_from_base( self ):
        self.assertAlmostEqual( ops.to_base( 2, "lb" ), 0.90718474 )
        self.assertAlmostEqual( ops.from_base( 1000, "km" ), 1.0 )
        self.assertAlmostEqual( ops.to_base( 1, "weeks", dimension=Dimension.TIME ), 604800 )

    def test_to_base_rejects_wrong_dimension( self ):
        with self.assertRaises( CalcValidationError ):
            ops.to_base( 1, "kg", dimension=Dimension.LENGTH )

    def test_convert_identity_is_exact( self ):
        for value in [ 0.1, 1e-12, 123456.789, -3.5 ]:
            self.assertEqual( ops.convert( value, "ft", "ft" ), value )
            self.assertEqual( ops.convert( value, "feet", LengthUnit.FT ), value )

    def test_convert_round_trip( self ):
        for unit_from, unit_to in [ ( "kg", "oz" ), ( "mi", "mm" ), ( "years", "seconds" ), ( "st", "g" ) ]:
            there = ops.convert( 7.25, unit_from, unit_to )
            back  = ops.convert( there, unit_to, unit_from )
            self.assertAlmostEqual( back, 7.25, places=9 )

    def test_convert_cross_dimension_raises( self ):
        with self.assertRaises( CalcValidationError ):
            ops.convert( 1, "km", "kg" )

    def test_convert_unknown_unit_raises( self ):
        with self.assertRaises( CalcValidationError ):
            ops.convert( 1, "furlong", "m" )

    def test_non_finite_values_raise( self ):
        for bad in [ math.inf, -math.inf, math.nan, "abc", None, True ]:
            with self.assertRaises( CalcValidationError ):
                ops.convert( bad, "m", "cm" )

    def test_convert_weight( self ):
        weights = ops.convert_weight( 1, WeightUnit.KG )

        self.assertEqual( list( weights ), [ "kg", "g", "lb", "oz", "st" ] )
        self.assertEqual( weights[ "kg" ], 1 )
        self.assertAlmostEqual( weights[ "g" ], 1000 )
        self.assertAlmostEqual( weights[ "lb" ], 2.20462262, places=6 )
        self.assertAlmostEqual( weights[ "oz" ], 35.2739619, places=5 )
        self.assertAlmostEqual( weights[ "st" ], 0.157473044, places=6 )

    def test_convert_weight_keeps_input_exact( self ):
        weights = ops.convert_weight( 12.3, "lb" )
        self.assertEqual( weights[ "lb" ], 12.3 )

    def test_convert_weight_rejects_length_unit( self ):
        with self.assertRaises( CalcValidationError ):
            ops.convert_weight( 1, "m" )

    def test_convert_length( self ):
        converted = ops.convert_length( 1, "mi", "km" )

        self.assertAlmostEqual( converted[ "result" ], 1.60934 )
        self.assertEqual( len( converted[ "conversions" ] ), 8 )
        self.assertEqual( converted[ "conversions" ][ "mi" ], 1 )
        self.assertAlmostEqual( converted[ "conversions" ][ "ft" ], 5280.0, places=1 )

    def test_convert_length_same_unit( self ):
        converted = ops.convert_length( 42.5, "cm", "cm" )
        self.assertEqual( converted[ "result" ], 42.5 )

    def test_convert_time( self ):
        converted = ops.convert_time( 2, TimeUnit.HOURS, TimeUnit.MINUTES )

        self.assertAlmostEqual( converted[ "result" ], 120 )
        self.assertEqual( len( converted[ "conversions" ] ), 7 )
        self.assertAlmostEqual( converted[ "conversions" ][ "seconds" ], 7200 )

    def test_convert_time_month_and_year_approximations( self ):
        self.assertAlmostEqual( ops.convert_time( 1, "months", "days" )[ "result" ], 30 )
        self.assertAlmostEqual( ops.convert_time( 1, "years", "days" )[ "result" ], 365 )

    def test_percentage_of( self ):
        self.assertAlmostEqual( ops.calculate_percentage( 100, 10, PercentageOperation.PERCENTAGE_OF ), 10 )
        self.assertAlmostEqual( ops.calculate_percentage( 200, 15, "percentage_of" ), 30 )
        self.assertEqual( ops.calculate_percentage( 50, 0, "percentage_of" ), 0 )

    def test_percentage_change( self ):
        self.assertAlmostEqual( ops.calculate_percentage( 100, 90, "percentage_change" ), 11.111111, places=5 )
        self.assertAlmostEqual( ops.calculate_percentage( 50, 100, "percentage_change" ), -50 )

    def test_percentage_difference( self ):
        self.assertAlmostEqual( ops.calculate_percentage( 10, 50, "percentage_difference" ), 20 )

    def test_percentage_zero_base_raises( self ):
        for operation in [ "percentage_change", "percentage_difference" ]:
            with self.assertRaises( CalcValidationError ):
                ops.calculate_percentage( 10, 0, operation )

    def test_percentage_unknown_operation_raises( self ):
        with self.assertRaises( CalcValidationError ):
            ops.calculate_percentage( 10, 5, "percentage_squared" )


def isolated_unit_test():
    from quickcalc.tests.unit.unit_test_utilities import run_isolated_test_case
    return run_isolated_test_case( TestCalcOperations, "Calc Operations" )


if __name__ == "__main__":
    success, duration, message = isolated_unit_test()
    status = "✅ PASS" if success else "❌ FAIL"
    print( f"\n{status} Calc operations unit tests completed in {duration:.3f}s" )
    print( f"Result: {message}" )
