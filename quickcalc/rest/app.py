"""
FastAPI application factory for the QuickCalc service.

create_app() wires the routers, parks the configuration manager and the
calculation store on app.state and installs the exception handlers that turn
every error into a {"message": ...} body:

    CalcError subclasses    → their status_code (400 / 404 / 500)
    RequestValidationError  → 400
    HTTPException           → its status code (unknown routes, wrong methods)
    anything else           → 500, logged with traceback
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from quickcalc import __version__
from quickcalc.calculator.calc_exceptions import CalcError
from quickcalc.config.configuration_manager import ConfigurationManager, DEFAULT_ENV_VAR_NAME
from quickcalc.rest.calculation_store import CalculationStore
from quickcalc.rest.routers import calculator, history, system

logger = logging.getLogger( __name__ )


def _format_validation_errors( exc: RequestValidationError ) -> str:
    """
    Flatten pydantic errors into one line.

    Ensures:
        - Returns "Validation error: <field>: <msg>; ..." with body/query prefixes dropped
    """
    parts = [ ]
    for error in exc.errors():
        location = [ str( item ) for item in error.get( "loc", () ) if item not in ( "body", "query", "path" ) ]
        field    = ".".join( location )
        parts.append( f"{field}: {error.get( 'msg' )}" if field else f"{error.get( 'msg' )}" )

    return "Validation error: " + "; ".join( parts )


async def calc_error_handler( request: Request, exc: CalcError ):
    if exc.status_code >= 500:
        logger.error( f"{request.method} {request.url.path} failed: {exc.message}" )
    else:
        logger.debug( f"{request.method} {request.url.path} rejected [{exc.status_code}]: {exc.message}" )

    return JSONResponse( status_code=exc.status_code, content={ "message": exc.message } )


async def validation_error_handler( request: Request, exc: RequestValidationError ):
    message = _format_validation_errors( exc )
    logger.debug( f"{request.method} {request.url.path} rejected [400]: {message}" )

    return JSONResponse( status_code=400, content={ "message": message } )


async def http_error_handler( request: Request, exc: StarletteHTTPException ):
    return JSONResponse( status_code=exc.status_code, content={ "message": str( exc.detail ) }, headers=getattr( exc, "headers", None ) )


async def global_exception_handler( request: Request, exc: Exception ):
    logger.error( f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc )

    return JSONResponse( status_code=500, content={ "message": "Internal server error" } )


def create_app( config_mgr: Optional[ConfigurationManager] = None, store: Optional[CalculationStore] = None ) -> FastAPI:
    """
    Build the QuickCalc FastAPI application.

    Requires:
        - config_mgr is None or a loaded ConfigurationManager
        - store is None or a CalculationStore

    Ensures:
        - A ConfigurationManager is read from QUICKCALC_CONFIG_MGR_CLI_ARGS when none is given
        - A fresh CalculationStore is created when none is given
        - Both are reachable from request handlers through app.state
        - Calculator, history and system routers are mounted
    """
    if config_mgr is None:
        config_mgr = ConfigurationManager( env_var_name=DEFAULT_ENV_VAR_NAME )

    debug = config_mgr.get( "app debug", default=False, silent=True, return_type="boolean" )
    if store is None:
        store = CalculationStore( debug=debug and config_mgr.get( "app verbose", default=False, silent=True, return_type="boolean" ) )

    app = FastAPI(
        title       = "QuickCalc",
        description = "Basic, age, weight, percentage, time and length calculators with calculation history",
        version     = __version__
    )

    app.state.config_mgr        = config_mgr
    app.state.calculation_store = store

    app.add_exception_handler( CalcError, calc_error_handler )
    app.add_exception_handler( RequestValidationError, validation_error_handler )
    app.add_exception_handler( StarletteHTTPException, http_error_handler )
    app.add_exception_handler( Exception, global_exception_handler )

    app.include_router( system.router )
    app.include_router( calculator.router )
    app.include_router( history.router )

    logger.info( f"QuickCalc app created, config block [{config_mgr.config_block_id}]" )

    return app
