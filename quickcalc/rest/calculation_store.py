#!/usr/bin/env python3
"""
In-memory calculation history for the QuickCalc service.

One CalculationStore is created per application and handed to routers through
app.state; there is no module-level instance. Records are immutable, ids are
assigned from a counter that is never reset, and every public method takes the
store lock so each call is atomic with respect to the others.
"""

import threading
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

import quickcalc.utils.util as du
from quickcalc.calculator.calc_types import CalculatorType
from quickcalc.calculator.calc_exceptions import CalcValidationError, RecordNotFoundError


@dataclass( frozen=True )
class CalculationRecord:
    """
    One completed calculation.

    Requires:
        - id is unique within its store
        - timestamp is a timezone-aware UTC datetime

    Ensures:
        - Immutable once created
    """
    id          : int
    type        : CalculatorType
    calculation : str
    result      : str
    timestamp   : datetime

    def to_dict( self ) -> dict:
        """Serialize to a JSON-compatible dict."""
        return {
            "id"          : self.id,
            "type"        : self.type.value,
            "calculation" : self.calculation,
            "result"      : self.result,
            "timestamp"   : self.timestamp.isoformat(),
        }


def _utc_now() -> datetime:
    return du.get_current_datetime_raw( "UTC" )


class CalculationStore:
    """
    Thread-safe, process-lifetime history of calculations.

    Requires:
        - clock, when given, returns timezone-aware datetimes

    Ensures:
        - ids are strictly increasing in insertion order and never reused,
          not even after clear()
        - list() returns newest first; equal timestamps order by id, newest first
        - size() never exceeds the number of append() calls

    Example:
        store  = CalculationStore()
        record = store.append( "basic", "2 + 3", "5" )
        store.list( limit=5 )
    """

    def __init__( self, clock: Optional[Callable[[], datetime]] = None, debug: bool = False ) -> None:
        self.debug         = debug
        self._clock        = clock or _utc_now
        self._records      = OrderedDict()
        self._push_counter = 0
        self._lock         = threading.Lock()

    def append( self, calc_type, calculation: str, result: str ) -> CalculationRecord:
        """
        Record a completed calculation.

        Requires:
            - calc_type is a CalculatorType or its string value
            - calculation and result are strings

        Ensures:
            - Returns the new record with the next id and the current UTC time
            - The record is visible to every later list() call

        Raises:
            - CalcValidationError for an unknown calculator type
        """
        calc_type = _as_calculator_type( calc_type )

        with self._lock:
            self._push_counter += 1
            record = CalculationRecord(
                id          = self._push_counter,
                type        = calc_type,
                calculation = str( calculation ),
                result      = str( result ),
                timestamp   = self._clock()
            )
            self._records[ record.id ] = record

        if self.debug: print( f"CalculationStore.append: [{record.id}] {calc_type.value} [{du.truncate_string( record.calculation )}]" )

        return record

    def list( self, limit: int = 10, calc_type=None ) -> list[CalculationRecord]:
        """
        List the most recent calculations.

        Requires:
            - limit is a positive int
            - calc_type is None or a CalculatorType (or its string value)

        Ensures:
            - Returns at most limit records, newest first
            - Only records of calc_type when one is given

        Raises:
            - CalcValidationError if limit is not a positive int or calc_type is unknown
        """
        if isinstance( limit, bool ) or not isinstance( limit, int ) or limit < 1:
            raise CalcValidationError( "limit must be a positive integer" )

        if calc_type is not None:
            calc_type = _as_calculator_type( calc_type )

        with self._lock:
            records = list( self._records.values() )

        if calc_type is not None:
            records = [ record for record in records if record.type == calc_type ]

        records.sort( key=lambda record: ( record.timestamp, record.id ), reverse=True )

        return records[ :limit ]

    def clear( self ) -> int:
        """
        Remove every record.

        Ensures:
            - Store is empty afterwards; calling it again is a no-op
            - Returns the number of records removed
        """
        with self._lock:
            removed = len( self._records )
            self._records.clear()

        if self.debug: print( f"CalculationStore.clear: removed {removed} record(s)" )

        return removed

    def remove_by_id( self, record_id: int ) -> CalculationRecord:
        """
        Remove one record.

        Raises:
            - RecordNotFoundError if no record has record_id
        """
        with self._lock:
            record = self._records.pop( record_id, None )

        if record is None:
            raise RecordNotFoundError( record_id )

        return record

    def get_by_id( self, record_id: int ) -> CalculationRecord:
        """
        Fetch one record.

        Raises:
            - RecordNotFoundError if no record has record_id
        """
        with self._lock:
            record = self._records.get( record_id )

        if record is None:
            raise RecordNotFoundError( record_id )

        return record

    def size( self ) -> int:
        with self._lock:
            return len( self._records )

    def summarize( self, today: Optional[date] = None ) -> dict:
        """
        Usage summary for the analytics view.

        Requires:
            - today is None (use the store clock) or a date compared against
              each record's UTC date

        Ensures:
            - Returns { total, by_type, most_used_type, today_count }
            - by_type lists every calculator type, zero counts included
            - most_used_type is None for an empty store; ties go to the type
              listed first in CalculatorType
        """
        if today is None:
            today = self._clock().date()

        with self._lock:
            records = list( self._records.values() )

        by_type = { calc_type.value: 0 for calc_type in CalculatorType }
        for record in records:
            by_type[ record.type.value ] += 1

        most_used_type = None
        if records:
            most_used_type = max( by_type, key=lambda name: by_type[ name ] )

        return {
            "total"          : len( records ),
            "by_type"        : by_type,
            "most_used_type" : most_used_type,
            "today_count"    : sum( 1 for record in records if record.timestamp.date() == today ),
        }


def _as_calculator_type( calc_type ) -> CalculatorType:
    try:
        return CalculatorType( getattr( calc_type, "value", calc_type ) )
    except ValueError:
        raise CalcValidationError( f"Invalid calculation type: {calc_type}" )


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    du.print_banner( "CalculationStore Smoke Test", prepend_nl=True )
    passed = True

    try:
        store = CalculationStore( debug=True )
        first  = store.append( "basic", "2 + 3", "5" )
        second = store.append( CalculatorType.WEIGHT, "1 kg", "2.204623 lb" )
        assert second.id == first.id + 1
        print( "  ✓ append assigns sequential ids" )

        assert [ record.id for record in store.list( limit=10 ) ] == [ second.id, first.id ]
        assert [ record.id for record in store.list( calc_type="basic" ) ] == [ first.id ]
        print( "  ✓ list newest first, with type filter" )

        summary = store.summarize()
        assert summary[ "total" ] == 2 and summary[ "today_count" ] == 2
        print( f"  ✓ summarize: {summary}" )

        store.clear()
        assert store.size() == 0
        assert store.append( "age", "From 2000-01-01 to 2024-01-01", "24 years, 0 months, 0 days" ).id == second.id + 1
        print( "  ✓ clear keeps the id counter" )

        print( "✓ CalculationStore smoke test PASSED" )

    except Exception as e:
        du.print_stack_trace( e, explanation="Smoke test failed", caller="calculation_store.quick_smoke_test()" )
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
