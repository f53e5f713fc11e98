"""
Calculator API endpoints.

One POST endpoint per calculator under /api/calculator. Each validates its
payload with a pydantic model, runs the matching engine function and returns
the result; engine errors propagate as CalcError subclasses and are turned
into {"message": ...} responses by the application's exception handlers.

When "calc auto record history" is enabled every successful calculation is
also appended to the calculation history.
"""

import logging
import math

from fastapi import APIRouter, Depends

import quickcalc.utils.util as du
from quickcalc.calculator import age_arithmetic, calc_operations, describer
from quickcalc.calculator.calc_exceptions import CalcValidationError
from quickcalc.calculator.calc_types import CalculatorType
from quickcalc.calculator.expression_evaluator import evaluate_expression
from quickcalc.config.configuration_manager import ConfigurationManager
from quickcalc.rest.calculation_store import CalculationStore
from quickcalc.rest.calc_models import (
    AgeRequest, AgeResponse, BasicRequest, ConversionResponse, LengthRequest,
    PercentageRequest, ResultResponse, TimeRequest, WeightRequest, WeightResponse
)
from quickcalc.rest.dependencies.config import get_calculation_store, get_config_manager

logger = logging.getLogger( __name__ )

router = APIRouter( prefix="/api/calculator", tags=[ "calculator" ] )


def _auto_record( config_mgr: ConfigurationManager, store: CalculationStore, calc_type: CalculatorType, described: tuple ) -> None:
    """
    Append a described calculation to the history if auto recording is on.

    Requires:
        - described is a ( calculation, result ) pair of strings
    """
    if not config_mgr.get( "calc auto record history", default=False, silent=True, return_type="boolean" ):
        return

    calculation, result = described
    record = store.append( calc_type, calculation, result )
    logger.debug( f"Auto-recorded calculation [{record.id}] type [{calc_type.value}]" )


@router.post( "/basic", response_model=ResultResponse )
async def basic( request: BasicRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Evaluate an arithmetic expression.

    Requires:
        - request.expression uses digits, + - * / . ( ) and spaces only
        - request.expression is no longer than "calc max expression length"

    Ensures:
        - Returns {"result": float}

    Raises:
        - InvalidExpressionError (400) for anything the evaluator rejects
        - CalcValidationError (400) for an overlong expression or a result that
          is not finite (division by zero)
    """
    max_length = config_mgr.get( "calc max expression length", default=256, silent=True, return_type="int" )
    if len( request.expression ) > max_length:
        raise CalcValidationError( f"Expression is longer than {max_length} characters" )

    result = evaluate_expression( request.expression )
    if not math.isfinite( result ):
        raise CalcValidationError( "Result is not a finite number" )

    _auto_record( config_mgr, store, CalculatorType.BASIC, describer.describe_basic( request.expression, result ) )

    return ResultResponse( result=result )


@router.post( "/age", response_model=AgeResponse )
async def age( request: AgeRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Calculate an age between two dates.

    Requires:
        - request.birth_date is an ISO date or datetime string
        - request.calc_date is None (now in "app timezone") or an ISO date or datetime string

    Ensures:
        - Returns years/months/days, totals and the next-birthday countdown

    Raises:
        - CalcValidationError (400) for unparsable dates
        - InvalidDateOrderError (400) when the birth date is after the calculation date
    """
    birth = age_arithmetic.parse_date_string( request.birth_date, label="birth date" )

    if request.calc_date:
        reference = age_arithmetic.parse_date_string( request.calc_date, label="calculation date" )
    else:
        tz_name   = config_mgr.get( "app timezone", default="America/New_York", silent=True )
        reference = du.get_current_local_datetime( tz_name )

    result = age_arithmetic.calculate_age( birth, reference )

    _auto_record( config_mgr, store, CalculatorType.AGE, describer.describe_age( birth, reference, result ) )

    return AgeResponse( **result.to_dict() )


@router.post( "/weight", response_model=WeightResponse )
async def weight( request: WeightRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Express a weight in kg, g, lb, oz and st.

    Ensures:
        - Returns {"kg", "g", "lb", "oz", "st"}; the input unit's entry equals the input
    """
    conversions = calc_operations.convert_weight( request.weight, request.unit )

    _auto_record( config_mgr, store, CalculatorType.WEIGHT, describer.describe_weight( request.weight, request.unit, conversions ) )

    return WeightResponse( **conversions )


@router.post( "/percentage", response_model=ResultResponse )
async def percentage( request: PercentageRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Run one of the percentage calculations.

    Raises:
        - CalcValidationError (400) for a zero base with percentage_change or percentage_difference
    """
    result = calc_operations.calculate_percentage( request.value, request.percentage, request.calculation_type )

    _auto_record(
        config_mgr, store, CalculatorType.PERCENTAGE,
        describer.describe_percentage( request.value, request.percentage, request.calculation_type, result )
    )

    return ResultResponse( result=result )


@router.post( "/time", response_model=ConversionResponse )
async def time( request: TimeRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Convert a duration, also expressed in every time unit.

    Ensures:
        - Returns {"result": float, "conversions": {seconds ... years}}
    """
    converted = calc_operations.convert_time( request.time, request.from_unit, request.to_unit )

    _auto_record(
        config_mgr, store, CalculatorType.TIME,
        describer.describe_time( request.time, request.from_unit, request.to_unit, converted[ "result" ] )
    )

    return ConversionResponse( **converted )


@router.post( "/length", response_model=ConversionResponse )
async def length( request: LengthRequest, config_mgr: ConfigurationManager = Depends( get_config_manager ), store: CalculationStore = Depends( get_calculation_store ) ):
    """
    Convert a length, also expressed in every length unit.

    Ensures:
        - Returns {"result": float, "conversions": {m, cm, mm, km, in, ft, yd, mi}}
    """
    converted = calc_operations.convert_length( request.length, request.from_unit, request.to_unit )

    _auto_record(
        config_mgr, store, CalculatorType.LENGTH,
        describer.describe_length( request.length, request.from_unit, request.to_unit, converted[ "result" ] )
    )

    return ConversionResponse( **converted )
