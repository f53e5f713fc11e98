"""
Unit tests for age and birthday arithmetic.

Tests:
- Year/month/day remainder with day and month borrowing
- Elapsed day and week totals
- Next birthday countdown, including the birthday itself and Feb 29
- Date order validation and ISO date parsing
"""

import unittest
from datetime import date, datetime, timedelta, timezone

from quickcalc.calculator.age_arithmetic import AgeResult, calculate_age, parse_date_string
from quickcalc.calculator.calc_exceptions import CalcValidationError, InvalidDateOrderError


class TestAgeArithmetic( unittest.TestCase ):
    """
    Unit tests for age_arithmetic.

    Ensures:
        - calculate_age() agrees with hand-computed calendar differences
        - parse_date_string() accepts ISO input only
    """

    def test_simple_age( self ):
        result = calculate_age( date( 2000, 1, 1 ), date( 2024, 6, 15 ) )

        self.assertEqual( ( result.years, result.months, result.days ), ( 24, 5, 14 ) )
        self.assertEqual( result.total_days, ( date( 2024, 6, 15 ) - date( 2000, 1, 1 ) ).days )
        self.assertEqual( result.total_weeks, result.total_days // 7 )

    def test_day_borrow_uses_previous_month_length( self ):
        # March 1st minus Jan 31st borrows February's 29 days in a leap year
        result = calculate_age( date( 2023, 1, 31 ), date( 2024, 3, 1 ) )
        self.assertEqual( ( result.years, result.months, result.days ), ( 1, 0, 30 ) )

        result = calculate_age( date( 2023, 1, 31 ), date( 2023, 3, 1 ) )
        self.assertEqual( ( result.years, result.months, result.days ), ( 0, 0, 29 ) )

    def test_month_borrow( self ):
        result = calculate_age( date( 1990, 11, 20 ), date( 2024, 2, 10 ) )
        self.assertEqual( ( result.years, result.months, result.days ), ( 33, 2, 21 ) )

    def test_january_borrows_from_december( self ):
        result = calculate_age( date( 2020, 12, 25 ), date( 2021, 1, 5 ) )
        self.assertEqual( ( result.years, result.months, result.days ), ( 0, 0, 11 ) )

    def test_same_day( self ):
        result = calculate_age( date( 1990, 3, 20 ), date( 1990, 3, 20 ) )

        self.assertEqual( ( result.years, result.months, result.days ), ( 0, 0, 0 ) )
        self.assertEqual( result.total_days, 0 )
        self.assertEqual( result.total_weeks, 0 )
        self.assertEqual( result.next_birthday, date( 1990, 3, 20 ) )
        self.assertEqual( result.days_until_birthday, 0 )

    def test_birthday_is_today( self ):
        result = calculate_age( datetime( 1980, 7, 4 ), datetime( 2024, 7, 4, 15, 30 ) )

        self.assertEqual( result.years, 44 )
        self.assertEqual( result.next_birthday, date( 2024, 7, 4 ) )
        self.assertEqual( result.days_until_birthday, 0 )

    def test_birthday_already_passed_rolls_forward( self ):
        result = calculate_age( date( 1985, 2, 10 ), date( 2024, 2, 11 ) )

        self.assertEqual( result.next_birthday, date( 2025, 2, 10 ) )
        self.assertEqual( result.days_until_birthday, 365 )

    def test_birthday_later_this_year( self ):
        result = calculate_age( date( 1985, 12, 25 ), date( 2024, 12, 1 ) )

        self.assertEqual( result.next_birthday, date( 2024, 12, 25 ) )
        self.assertEqual( result.days_until_birthday, 24 )

    def test_birthday_countdown_counts_calendar_dates( self ):
        # midday on the eve of the birthday is still one date away
        result = calculate_age( date( 2000, 6, 16 ), datetime( 2024, 6, 15, 12, 0 ) )

        self.assertEqual( result.next_birthday, date( 2024, 6, 16 ) )
        self.assertEqual( result.days_until_birthday, 1 )

    def test_leap_day_birthday_in_common_year( self ):
        result = calculate_age( date( 2000, 2, 29 ), date( 2023, 2, 1 ) )

        self.assertEqual( result.next_birthday, date( 2023, 3, 1 ) )
        self.assertEqual( result.days_until_birthday, 28 )

    def test_leap_day_birthday_in_leap_year( self ):
        result = calculate_age( date( 2000, 2, 29 ), date( 2024, 2, 1 ) )
        self.assertEqual( result.next_birthday, date( 2024, 2, 29 ) )

    def test_partial_days_floor( self ):
        result = calculate_age( datetime( 2024, 1, 1, 12, 0 ), datetime( 2024, 1, 3, 11, 59 ) )
        self.assertEqual( result.total_days, 1 )

    def test_aware_datetimes_keep_wall_clock( self ):
        birth  = datetime( 2000, 1, 1, tzinfo=timezone( timedelta( hours=5 ) ) )
        result = calculate_age( birth, datetime( 2000, 1, 11 ) )
        self.assertEqual( result.total_days, 10 )

    def test_invariants_hold_over_a_range( self ):
        birth = date( 1996, 2, 29 )
        for offset in range( 0, 3000, 37 ):
            reference = birth + timedelta( days=offset )
            result    = calculate_age( birth, reference )

            self.assertGreaterEqual( result.days_until_birthday, 0 )
            self.assertLess( result.days_until_birthday, 367 )
            self.assertGreaterEqual( result.next_birthday, reference )
            self.assertTrue( 0 <= result.months < 12 )
            self.assertTrue( 0 <= result.days < 31 )
            self.assertEqual( result.total_days, offset )

    def test_birth_after_reference_raises( self ):
        with self.assertRaises( InvalidDateOrderError ) as context:
            calculate_age( date( 2030, 1, 1 ), date( 2020, 1, 1 ) )

        self.assertEqual( context.exception.message, "Birth date cannot be in the future of calculation date" )
        self.assertEqual( context.exception.status_code, 400 )

    def test_default_reference_is_now( self ):
        result = calculate_age( date( 2000, 1, 1 ) )
        self.assertGreater( result.years, 20 )

    def test_to_dict( self ):
        result = calculate_age( date( 2000, 1, 1 ), date( 2000, 1, 15 ) )
        as_dict = result.to_dict()

        self.assertIsInstance( result, AgeResult )
        self.assertEqual( as_dict[ "total_days" ], 14 )
        self.assertEqual( as_dict[ "next_birthday" ], "2001-01-01" )

    def test_parse_date_string( self ):
        self.assertEqual( parse_date_string( "2000-01-31" ), datetime( 2000, 1, 31 ) )
        self.assertEqual( parse_date_string( "2000-01-31T08:30:00" ), datetime( 2000, 1, 31, 8, 30 ) )
        self.assertEqual( parse_date_string( "2000-01-31T08:30:00Z" ), datetime( 2000, 1, 31, 8, 30 ) )

    def test_parse_date_string_rejects_garbage( self ):
        for bad in [ "", "   ", "yesterday", "2000-13-01", "31/01/2000", None ]:
            with self.assertRaises( CalcValidationError ) as context:
                parse_date_string( bad, label="birth date" )
            self.assertEqual( context.exception.message, "Invalid birth date" )


def isolated_unit_test():
    from quickcalc.tests.unit.unit_test_utilities import run_isolated_test_case
    return run_isolated_test_case( TestAgeArithmetic, "Age Arithmetic" )


if __name__ == "__main__":
    success, duration, message = isolated_unit_test()
    status = "✅ PASS" if success else "❌ FAIL"
    print( f"\n{status} Age arithmetic unit tests completed in {duration:.3f}s" )
    print( f"Result: {message}" )
