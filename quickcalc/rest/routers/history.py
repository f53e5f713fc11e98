"""
Calculation history API endpoints.

List, record, clear and delete past calculations, plus the usage summary
behind the analytics view. Backed by the application's CalculationStore.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from quickcalc.calculator.calc_types import CalculatorType
from quickcalc.config.configuration_manager import ConfigurationManager
from quickcalc.rest.calculation_store import CalculationStore
from quickcalc.rest.calc_models import CalculationRecordResponse, HistoryCreateRequest, HistoryStatsResponse, MessageResponse
from quickcalc.rest.dependencies.config import get_calculation_store, get_config_manager

logger = logging.getLogger( __name__ )

router = APIRouter( prefix="/api/calculator/history", tags=[ "history" ] )


@router.get( "", response_model=List[CalculationRecordResponse] )
async def list_history(
    limit: Optional[int] = Query( None, ge=1, description="Maximum number of records (defaults to 'history default limit')" ),
    type: Optional[CalculatorType] = Query( None, description="Only records of this calculator type" ),
    config_mgr: ConfigurationManager = Depends( get_config_manager ),
    store: CalculationStore = Depends( get_calculation_store )
):
    """
    List the most recent calculations, newest first.

    Requires:
        - limit, when given, is a positive integer

    Ensures:
        - Returns at most limit records, filtered by type when given
    """
    if limit is None:
        limit = config_mgr.get( "history default limit", default=10, silent=True, return_type="int" )

    return [ record.to_dict() for record in store.list( limit=limit, calc_type=type ) ]


@router.post( "", response_model=CalculationRecordResponse, status_code=201 )
async def add_history( request: HistoryCreateRequest, store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Record a calculation.

    Ensures:
        - Returns the stored record with its id and timestamp
    """
    record = store.append( request.type, request.calculation, request.result )
    logger.info( f"Recorded calculation [{record.id}] type [{record.type.value}]" )

    return record.to_dict()


@router.delete( "", response_model=MessageResponse )
async def clear_history( store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Remove every record. Ids are not reused afterwards.
    """
    removed = store.clear()
    logger.info( f"Cleared calculation history, {removed} record(s) removed" )

    return MessageResponse( message="Calculation history cleared" )


@router.get( "/stats", response_model=HistoryStatsResponse )
async def history_stats( store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Usage summary: totals per calculator type, most used type and today's count.
    """
    return HistoryStatsResponse( **store.summarize() )


@router.get( "/{record_id}", response_model=CalculationRecordResponse )
async def get_history_record( record_id: int, store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Fetch one record.

    Raises:
        - RecordNotFoundError (404) when no record has record_id
    """
    return store.get_by_id( record_id ).to_dict()


@router.delete( "/{record_id}", response_model=MessageResponse )
async def delete_history_record( record_id: int, store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Delete one record.

    Raises:
        - RecordNotFoundError (404) when no record has record_id
    """
    record = store.remove_by_id( record_id )
    logger.info( f"Deleted calculation [{record.id}]" )

    return MessageResponse( message=f"Calculation [{record.id}] deleted" )
