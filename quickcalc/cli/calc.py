#!/usr/bin/env python3
"""
Command-line front end to the QuickCalc calculator engine.

Runs the same calculations as the REST endpoints, locally and without a
server:

    quickcalc basic "(2 + 3) * 4"
    quickcalc age 1990-05-15 --on 2024-05-15
    quickcalc weight 70 kg
    quickcalc percentage 200 15 percentage_of
    quickcalc time 2 hours minutes
    quickcalc length 1 mi km
"""

import argparse
import json
import math
import sys

import quickcalc.utils.util as du
from quickcalc.calculator import age_arithmetic, calc_operations, describer
from quickcalc.calculator.calc_exceptions import CalcError, CalcValidationError
from quickcalc.calculator.calc_types import PercentageOperation
from quickcalc.calculator.expression_evaluator import evaluate_expression
from quickcalc.config.configuration_manager import ConfigurationManager, DEFAULT_ENV_VAR_NAME


def _run_basic( args, config_mgr ):
    result = evaluate_expression( args.expression, debug=args.debug )
    if not math.isfinite( result ):
        raise CalcValidationError( "Result is not a finite number" )

    return describer.describe_basic( args.expression, result ), { "result": result }


def _run_age( args, config_mgr ):
    birth = age_arithmetic.parse_date_string( args.birth_date, label="birth date" )
    if args.on:
        reference = age_arithmetic.parse_date_string( args.on, label="calculation date" )
    else:
        reference = du.get_current_local_datetime( config_mgr.get( "app timezone", default="America/New_York", silent=True ) )

    age = age_arithmetic.calculate_age( birth, reference, debug=args.debug )

    return describer.describe_age( birth, reference, age ), age.to_dict()


def _run_weight( args, config_mgr ):
    _require_positive( args.weight, "weight" )
    conversions = calc_operations.convert_weight( args.weight, args.unit )

    return describer.describe_weight( args.weight, args.unit, conversions ), conversions


def _run_percentage( args, config_mgr ):
    result = calc_operations.calculate_percentage( args.value, args.percentage, args.calculation_type )

    return describer.describe_percentage( args.value, args.percentage, args.calculation_type, result ), { "result": result }


def _run_time( args, config_mgr ):
    _require_positive( args.time, "time" )
    converted = calc_operations.convert_time( args.time, args.from_unit, args.to_unit )

    return describer.describe_time( args.time, args.from_unit, args.to_unit, converted[ "result" ] ), converted


def _run_length( args, config_mgr ):
    _require_positive( args.length, "length" )
    converted = calc_operations.convert_length( args.length, args.from_unit, args.to_unit )

    return describer.describe_length( args.length, args.from_unit, args.to_unit, converted[ "result" ] ), converted


def _require_positive( value, label ):
    if not value > 0:
        raise CalcValidationError( f"{label} must be greater than 0" )


def build_parser():
    """
    Build the argument parser with one sub-command per calculator.
    """
    parser = argparse.ArgumentParser(
        description="QuickCalc command-line calculator",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument( "--json", action="store_true", help="Print the raw result as JSON" )
    parser.add_argument( "--debug", action="store_true", help="Enable debug output" )

    subparsers = parser.add_subparsers( dest="calculator", required=True )

    basic = subparsers.add_parser( "basic", help="Evaluate an arithmetic expression" )
    basic.add_argument( "expression", help="Digits, + - * / . ( ) and spaces" )
    basic.set_defaults( handler=_run_basic )

    age = subparsers.add_parser( "age", help="Age between a birth date and today (or --on)" )
    age.add_argument( "birth_date", help="ISO date, e.g. 1990-05-15" )
    age.add_argument( "--on", help="Calculate the age on this ISO date instead of today" )
    age.set_defaults( handler=_run_age )

    weight = subparsers.add_parser( "weight", help="Express a weight in every weight unit" )
    weight.add_argument( "weight", type=float )
    weight.add_argument( "unit", help="kg, g, lb, oz or st (spelled-out names accepted)" )
    weight.set_defaults( handler=_run_weight )

    percentage = subparsers.add_parser( "percentage", help="Percentage of, change or difference" )
    percentage.add_argument( "value", type=float )
    percentage.add_argument( "percentage", type=float )
    percentage.add_argument( "calculation_type", choices=[ operation.value for operation in PercentageOperation ] )
    percentage.set_defaults( handler=_run_percentage )

    for name, help_text, handler in [
        ( "time",   "Convert a duration between time units", _run_time ),
        ( "length", "Convert a length between length units", _run_length ),
    ]:
        sub = subparsers.add_parser( name, help=help_text )
        sub.add_argument( name, type=float )
        sub.add_argument( "from_unit" )
        sub.add_argument( "to_unit" )
        sub.set_defaults( handler=handler )

    return parser


def main( argv=None ):
    """
    CLI entry point for the command-line calculator.

    Ensures:
        - Prints "<calculation> = <result>" or, with --json, the raw result
        - Returns 0 on success and 1 when the engine rejects the input
    """
    args       = build_parser().parse_args( argv )
    config_mgr = ConfigurationManager( env_var_name=DEFAULT_ENV_VAR_NAME )

    try:
        ( calculation, result ), raw = args.handler( args, config_mgr )
    except CalcError as e:
        print( f"Error: {e.message}", file=sys.stderr )
        return 1

    if args.json:
        print( json.dumps( raw, indent=2 ) )
    else:
        print( f"{calculation} = {result}" )

    return 0


if __name__ == "__main__":
    sys.exit( main() )
