#!/usr/bin/env python3
"""
Start the QuickCalc REST server under uvicorn.

Configuration comes from quickcalc/conf/quickcalc-app.ini; pick another block
or file, or override single keys, through QUICKCALC_CONFIG_MGR_CLI_ARGS:

    QUICKCALC_CONFIG_MGR_CLI_ARGS="config_block_id=development server+port=8080" quickcalc-server

Command line flags win over both.
"""

import argparse
import logging
import sys

import uvicorn

import quickcalc.utils.util as du
from quickcalc.config.configuration_manager import ConfigurationManager, DEFAULT_ENV_VAR_NAME
from quickcalc.rest.app import create_app

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger( __name__ )


def build_parser():
    """
    Build the argument parser for the server launcher.

    Ensures:
        - Every flag defaults to None so unset flags fall back to configuration
    """
    parser = argparse.ArgumentParser(
        description="Run the QuickCalc calculator web service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  %(prog)s
  %(prog)s --port 8080 --log-level DEBUG

Environment Variables:
  {DEFAULT_ENV_VAR_NAME}   name=value configuration overrides ('+' for spaces in names)
        """
    )

    parser.add_argument(
        "--host",
        help="Interface to bind (default: 'server host' from configuration)"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Port to listen on (default: 'server port' from configuration)"
    )

    parser.add_argument(
        "--log-level",
        choices=[ "DEBUG", "INFO", "WARNING", "ERROR" ],
        help="Logging level (default: 'app log level' from configuration)"
    )

    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the active configuration and exit"
    )

    return parser


def main( argv=None ):
    """
    CLI entry point for the QuickCalc server.

    Requires:
        - quickcalc/conf/quickcalc-app.ini (or the file named in the environment) exists

    Ensures:
        - Logging is configured once with the resolved level
        - The app is served by uvicorn until interrupted
        - Returns 0 on a clean shutdown
    """
    args = build_parser().parse_args( argv )

    cli_args = { }
    if args.host is not None:      cli_args[ "server host" ]   = args.host
    if args.port is not None:      cli_args[ "server port" ]   = str( args.port )
    if args.log_level is not None: cli_args[ "app log level" ] = args.log_level

    config_mgr = ConfigurationManager( env_var_name=DEFAULT_ENV_VAR_NAME, cli_args=cli_args )

    if args.print_config:
        config_mgr.print_configuration( brackets=True )
        return 0

    log_level = config_mgr.get( "app log level", default="INFO" ).upper()
    host      = config_mgr.get( "server host", default="127.0.0.1" )
    port      = config_mgr.get( "server port", default=5000, return_type="int" )

    logging.basicConfig( level=log_level, format=LOG_FORMAT )

    if config_mgr.get( "app debug", default=False, return_type="boolean" ):
        du.print_banner( f"QuickCalc server, config block [{config_mgr.config_block_id}]", prepend_nl=True )
        config_mgr.print_configuration( brackets=True )

    app = create_app( config_mgr=config_mgr )

    logger.info( f"Starting QuickCalc on {host}:{port}" )

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level.lower(),
        access_log=True
    )

    return 0


if __name__ == "__main__":
    sys.exit( main() )
