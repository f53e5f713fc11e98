#!/usr/bin/env python3
"""
Calendar-aware age and birthday arithmetic for the Age calculator.

Functions:
    calculate_age:     years/months/days remainder, elapsed totals and next-birthday countdown
    parse_date_string: ISO date or datetime text → naive datetime
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional, Union

import quickcalc.utils.util as du
from quickcalc.calculator.calc_exceptions import CalcValidationError, InvalidDateOrderError

DateLike = Union[ date, datetime ]

ONE_DAY = timedelta( days=1 )


@dataclass( frozen=True )
class AgeResult:
    """
    Result of an age calculation.

    years, months and days are the calendar remainder (not totals); total_days
    and total_weeks are absolute elapsed counts. days_until_birthday is 0 when
    the reference date is the birthday itself.
    """
    years               : int
    months              : int
    days                : int
    total_days          : int
    total_weeks         : int
    next_birthday       : date
    days_until_birthday : int

    def to_dict( self ) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "years"               : self.years,
            "months"              : self.months,
            "days"                : self.days,
            "total_days"          : self.total_days,
            "total_weeks"         : self.total_weeks,
            "next_birthday"       : self.next_birthday.isoformat(),
            "days_until_birthday" : self.days_until_birthday,
        }


def _as_datetime( value: DateLike ) -> datetime:
    # plain dates mean midnight; aware datetimes keep their wall-clock value
    if isinstance( value, datetime ):
        return value.replace( tzinfo=None )
    return datetime( value.year, value.month, value.day )


def _days_in_previous_month( year: int, month: int ) -> int:
    if month == 1:
        return calendar.monthrange( year - 1, 12 )[ 1 ]
    return calendar.monthrange( year, month - 1 )[ 1 ]


def _birthday_in_year( birth: datetime, year: int ) -> date:
    """
    Place the birth month/day in year.

    Ensures:
        - Feb 29 birthdays land on Mar 1 in common years
    """
    if birth.month == 2 and birth.day == 29 and not calendar.isleap( year ):
        return date( year, 3, 1 )
    return date( year, birth.month, birth.day )


def calculate_age( birth: DateLike, reference: Optional[DateLike] = None, tz_name: str = "America/New_York", debug: bool = False ) -> AgeResult:
    """
    Calculate an age between a birth date and a reference date.

    Requires:
        - birth is a date or datetime (naive, local wall-clock)
        - reference is a date, datetime or None for "now" in tz_name

    Ensures:
        - years/months/days recombine to the calendar difference, borrowing the
          length of the month before the reference month when days go negative
          (and of the month before that, if days are still negative)
        - total_days is floor( |reference - birth| / one day ), total_weeks = total_days // 7
        - next_birthday is on or after the reference date
        - days_until_birthday counts calendar dates from the reference date: >= 0, and 0 on the birthday

    Raises:
        - InvalidDateOrderError if birth is strictly later than reference
    """
    birth_dt = _as_datetime( birth )
    if reference is None:
        ref_dt = du.get_current_local_datetime( tz_name )
    else:
        ref_dt = _as_datetime( reference )

    if debug: print( f"age_arithmetic.calculate_age: birth [{birth_dt}] reference [{ref_dt}]" )

    if birth_dt > ref_dt:
        raise InvalidDateOrderError( "Birth date cannot be in the future of calculation date" )

    years  = ref_dt.year  - birth_dt.year
    months = ref_dt.month - birth_dt.month
    days   = ref_dt.day   - birth_dt.day

    # a 31st birth day can outrun a short preceding month, so keep borrowing
    borrow_year, borrow_month = ref_dt.year, ref_dt.month
    while days < 0:
        months -= 1
        days   += _days_in_previous_month( borrow_year, borrow_month )
        borrow_year, borrow_month = ( borrow_year - 1, 12 ) if borrow_month == 1 else ( borrow_year, borrow_month - 1 )

    if months < 0:
        years  -= 1
        months += 12

    total_days  = abs( ref_dt - birth_dt ) // ONE_DAY
    total_weeks = total_days // 7

    ref_date      = ref_dt.date()
    next_birthday = _birthday_in_year( birth_dt, ref_date.year )
    if next_birthday < ref_date:
        next_birthday = _birthday_in_year( birth_dt, ref_date.year + 1 )

    days_until_birthday = ( next_birthday - ref_date ).days

    return AgeResult(
        years               = years,
        months              = months,
        days                = days,
        total_days          = total_days,
        total_weeks         = total_weeks,
        next_birthday       = next_birthday,
        days_until_birthday = days_until_birthday
    )


def parse_date_string( text: str, label: str = "date" ) -> datetime:
    """
    Parse an ISO date ("2000-01-31") or datetime ("2000-01-31T08:30:00") string.

    Requires:
        - text is a string

    Ensures:
        - Returns a naive datetime; any timezone offset is dropped and the
          wall-clock value kept
        - Plain dates parse to midnight

    Raises:
        - CalcValidationError( "Invalid <label>" ) for anything unparsable
    """
    if not isinstance( text, str ) or not text.strip():
        raise CalcValidationError( f"Invalid {label}" )

    candidate = text.strip()
    if candidate.endswith( "Z" ):
        candidate = candidate[ :-1 ] + "+00:00"

    try:
        parsed = datetime.fromisoformat( candidate )
    except ValueError:
        raise CalcValidationError( f"Invalid {label}" )

    return parsed.replace( tzinfo=None )


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing age_arithmetic module..." )
    passed = True

    try:
        result = calculate_age( date( 2000, 1, 1 ), date( 2024, 6, 15 ) )
        assert ( result.years, result.months, result.days ) == ( 24, 5, 14 )
        print( f"  ✓ calculate_age: 2000-01-01 → 2024-06-15 = {result.years}y {result.months}m {result.days}d" )

        result = calculate_age( date( 1990, 3, 20 ), date( 1990, 3, 20 ) )
        assert result.total_days == 0 and result.days_until_birthday == 0
        print( "  ✓ calculate_age: same day → zeros" )

        try:
            calculate_age( date( 2030, 1, 1 ), date( 2020, 1, 1 ) )
            assert False, "Should have raised InvalidDateOrderError"
        except InvalidDateOrderError:
            pass
        print( "  ✓ calculate_age: birth after reference raises" )

        assert parse_date_string( "2000-01-31" ) == datetime( 2000, 1, 31 )
        print( "  ✓ parse_date_string: ISO date" )

        print( "✓ age_arithmetic module smoke test PASSED" )

    except Exception as e:
        print( f"✗ age_arithmetic module smoke test FAILED: {e}" )
        import traceback
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
