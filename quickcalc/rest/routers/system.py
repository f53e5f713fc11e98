"""
System health monitoring endpoints.
"""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from quickcalc import __version__
from quickcalc.rest.calculation_store import CalculationStore
from quickcalc.rest.dependencies.config import get_calculation_store

router = APIRouter( tags=[ "system" ] )


@router.get( "/", response_class=JSONResponse )
async def health_check( store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Basic health check endpoint for service status monitoring.

    Ensures:
        - Returns healthy status with service identification and version
        - Includes current timestamp in ISO format and the history size
    """
    return {
        "status"        : "healthy",
        "service"       : "quickcalc",
        "timestamp"     : datetime.now().isoformat(),
        "version"       : __version__,
        "historyCount"  : store.size()
    }


@router.get( "/health", response_class=JSONResponse )
async def health():
    """
    Simplified health endpoint for lightweight monitoring checks.
    """
    return {
        "status"    : "ok",
        "timestamp" : datetime.now().isoformat()
    }
