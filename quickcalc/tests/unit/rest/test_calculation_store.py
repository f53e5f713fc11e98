"""
Unit tests for CalculationStore.

Tests the in-memory calculation history including:
- Sequential id assignment that survives clear()
- Newest-first listing with limits, timestamp ties and type filtering
- Removal and lookup by id
- Usage summaries
- Concurrent appends from several threads
"""

import threading
import unittest
from datetime import date, datetime, timedelta, timezone

from quickcalc.calculator.calc_exceptions import CalcValidationError, RecordNotFoundError
from quickcalc.calculator.calc_types import CalculatorType
from quickcalc.rest.calculation_store import CalculationRecord, CalculationStore


class SteppingClock:
    """Deterministic clock: every call advances by step."""

    def __init__( self, start: datetime, step: timedelta = timedelta( seconds=1 ) ):
        self.now  = start
        self.step = step

    def __call__( self ) -> datetime:
        current   = self.now
        self.now += self.step
        return current


class TestCalculationStore( unittest.TestCase ):
    """
    Unit tests for CalculationStore.

    Ensures:
        - All CalculationStore operations are validated in isolation
        - Time is controlled through an injected clock
    """

    def setUp( self ):
        self.start = datetime( 2024, 6, 1, 12, 0, tzinfo=timezone.utc )
        self.store = CalculationStore( clock=SteppingClock( self.start ) )

    def test_append_assigns_sequential_ids( self ):
        first  = self.store.append( "basic", "2 + 3", "5" )
        second = self.store.append( CalculatorType.AGE, "From 2000-01-01 to 2024-01-01", "24 years, 0 months, 0 days" )

        self.assertIsInstance( first, CalculationRecord )
        self.assertEqual( ( first.id, second.id ), ( 1, 2 ) )
        self.assertEqual( first.type, CalculatorType.BASIC )
        self.assertEqual( first.timestamp, self.start )
        self.assertEqual( self.store.size(), 2 )

    def test_append_rejects_unknown_type( self ):
        with self.assertRaises( CalcValidationError ):
            self.store.append( "scientific", "sin(1)", "0.84" )

    def test_records_are_immutable( self ):
        record = self.store.append( "basic", "1 + 1", "2" )
        with self.assertRaises( Exception ):
            record.result = "3"

    def test_list_newest_first_with_limit( self ):
        for i in range( 15 ):
            self.store.append( "basic", f"{i} + 0", f"{i}" )

        records = self.store.list()
        self.assertEqual( len( records ), 10 )
        self.assertEqual( [ record.id for record in records ], list( range( 15, 5, -1 ) ) )

        self.assertEqual( [ record.id for record in self.store.list( limit=3 ) ], [ 15, 14, 13 ] )
        self.assertEqual( len( self.store.list( limit=100 ) ), 15 )

    def test_list_orders_timestamp_ties_by_id( self ):
        store = CalculationStore( clock=lambda: self.start )
        for i in range( 4 ):
            store.append( "basic", f"{i}", f"{i}" )

        self.assertEqual( [ record.id for record in store.list() ], [ 4, 3, 2, 1 ] )

    def test_list_is_sorted_by_timestamp( self ):
        times = iter( [ self.start, self.start - timedelta( hours=1 ), self.start + timedelta( hours=1 ) ] )
        store = CalculationStore( clock=lambda: next( times ) )
        for i in range( 3 ):
            store.append( "basic", f"{i}", f"{i}" )

        self.assertEqual( [ record.id for record in store.list() ], [ 3, 1, 2 ] )

    def test_list_filters_by_type( self ):
        self.store.append( "basic", "1 + 1", "2" )
        self.store.append( "weight", "1 kg", "..." )
        self.store.append( "basic", "2 + 2", "4" )

        basics = self.store.list( calc_type=CalculatorType.BASIC )
        self.assertEqual( [ record.id for record in basics ], [ 3, 1 ] )
        self.assertEqual( [ record.id for record in self.store.list( calc_type="weight" ) ], [ 2 ] )
        self.assertEqual( self.store.list( calc_type="length" ), [ ] )

    def test_list_rejects_bad_limits( self ):
        for bad in [ 0, -1, 2.5, "10", True ]:
            with self.assertRaises( CalcValidationError, msg=repr( bad ) ):
                self.store.list( limit=bad )

    def test_list_returns_snapshot( self ):
        self.store.append( "basic", "1 + 1", "2" )
        snapshot = self.store.list()
        self.store.append( "basic", "2 + 2", "4" )

        self.assertEqual( len( snapshot ), 1 )

    def test_clear_is_idempotent_and_ids_not_reused( self ):
        self.store.append( "basic", "1 + 1", "2" )
        self.store.append( "basic", "2 + 2", "4" )

        self.assertEqual( self.store.clear(), 2 )
        self.assertEqual( self.store.clear(), 0 )
        self.assertEqual( self.store.list(), [ ] )

        self.assertEqual( self.store.append( "basic", "3 + 3", "6" ).id, 3 )

    def test_remove_by_id( self ):
        self.store.append( "basic", "1 + 1", "2" )
        second = self.store.append( "basic", "2 + 2", "4" )

        removed = self.store.remove_by_id( second.id )
        self.assertEqual( removed, second )
        self.assertEqual( [ record.id for record in self.store.list() ], [ 1 ] )

        with self.assertRaises( RecordNotFoundError ) as context:
            self.store.remove_by_id( second.id )
        self.assertEqual( context.exception.status_code, 404 )
        self.assertEqual( context.exception.record_id, second.id )

    def test_get_by_id( self ):
        record = self.store.append( "length", "1 mi to km", "1.60934 km" )

        self.assertEqual( self.store.get_by_id( record.id ), record )
        with self.assertRaises( RecordNotFoundError ):
            self.store.get_by_id( 999 )

    def test_to_dict( self ):
        record = self.store.append( "time", "2 hours to minutes", "120 minutes" )

        self.assertEqual( record.to_dict(), {
            "id"          : 1,
            "type"        : "time",
            "calculation" : "2 hours to minutes",
            "result"      : "120 minutes",
            "timestamp"   : "2024-06-01T12:00:00+00:00",
        } )

    def test_summarize_empty( self ):
        summary = self.store.summarize( today=date( 2024, 6, 1 ) )

        self.assertEqual( summary[ "total" ], 0 )
        self.assertIsNone( summary[ "most_used_type" ] )
        self.assertEqual( summary[ "today_count" ], 0 )
        self.assertEqual( set( summary[ "by_type" ] ), { calc_type.value for calc_type in CalculatorType } )

    def test_summarize( self ):
        store = CalculationStore( clock=SteppingClock( self.start, step=timedelta( hours=10 ) ) )
        store.append( "basic", "1 + 1", "2" )           # 2024-06-01 12:00
        store.append( "weight", "1 kg", "..." )          # 2024-06-01 22:00
        store.append( "weight", "2 kg", "..." )          # 2024-06-02 08:00

        summary = store.summarize( today=date( 2024, 6, 1 ) )

        self.assertEqual( summary[ "total" ], 3 )
        self.assertEqual( summary[ "by_type" ][ "weight" ], 2 )
        self.assertEqual( summary[ "by_type" ][ "basic" ], 1 )
        self.assertEqual( summary[ "by_type" ][ "age" ], 0 )
        self.assertEqual( summary[ "most_used_type" ], "weight" )
        self.assertEqual( summary[ "today_count" ], 2 )

    def test_summarize_tie_goes_to_first_type( self ):
        self.store.append( "length", "1 m to cm", "100 cm" )
        self.store.append( "basic", "1 + 1", "2" )

        self.assertEqual( self.store.summarize()[ "most_used_type" ], "basic" )

    def test_concurrent_appends( self ):
        store         = CalculationStore()
        threads_count = 8
        per_thread    = 50

        def worker():
            for i in range( per_thread ):
                store.append( "basic", f"{i} + 1", f"{i + 1}" )

        threads = [ threading.Thread( target=worker ) for _ in range( threads_count ) ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        records = store.list( limit=threads_count * per_thread )
        ids     = sorted( record.id for record in records )

        self.assertEqual( store.size(), threads_count * per_thread )
        self.assertEqual( ids, list( range( 1, threads_count * per_thread + 1 ) ) )


def isolated_unit_test():
    from quickcalc.tests.unit.unit_test_utilities import run_isolated_test_case
    return run_isolated_test_case( TestCalculationStore, "Calculation Store" )


if __name__ == "__main__":
    success, duration, message = isolated_unit_test()
    status = "✅ PASS" if success else "❌ FAIL"
    print( f"\n{status} CalculationStore unit tests completed in {duration:.3f}s" )
    print( f"Result: {message}" )
