import configparser
import os
import json
import ast
from typing import Optional, Union, Any, Callable

import quickcalc.utils.util as du

DEFAULT_CONFIG_FILE   = "quickcalc-app.ini"
DEFAULT_SPLAINER_FILE = "quickcalc-app-splainer.ini"
DEFAULT_ENV_VAR_NAME  = "QUICKCALC_CONFIG_MGR_CLI_ARGS"

def singleton( cls: type ) -> Callable[..., Any]:
    """
    Decorator that implements the Singleton pattern.

    Requires:
        - cls is a valid class type

    Ensures:
        - Only one instance of cls is created
        - All calls return the same instance
        - Provides a reset method for testing

    Raises:
        - None
    """

    instances = { }

    def wrapper( *args: Any, **kwargs: Any ) -> Any:

        # Check for the special _reset_singleton flag for testing
        if kwargs.pop( "_reset_singleton", False ) and cls in instances:
            print( "Resetting ConfigurationManager() singleton for testing..." )
            del instances[ cls ]

        if cls not in instances:
            instances[ cls ] = cls( *args, **kwargs )
        elif instances[ cls ].debug:
            print( "Reusing ConfigurationManager() singleton..." )

        return instances[ cls ]

    def reset_for_testing():
        """Reset the singleton instance for testing purposes"""
        if cls in instances:
            del instances[ cls ]
            return True
        return False

    wrapper.reset_for_testing = reset_for_testing

    return wrapper

@singleton
class ConfigurationManager():
    """
    Manages application configuration loaded from an INI file.

    Values are read from a single configuration block. Every block other than
    'default' inherits the keys of the 'default' block, name=value overrides
    can be supplied through an environment variable or a dictionary, and a
    companion "splainer" INI file documents what each key means.
    """

    def __init__( self, env_var_name: Optional[str]=None, config_path: Optional[str]=None, splainer_path: Optional[str]=None, config_block_id: str="default", debug: bool=False, verbose: bool=False, silent: bool=True, mute_splainer: bool=True, cli_args: Optional[dict[str, str]]=None ) -> None:
        """
        Initialize the configuration manager.

        Requires:
            - If env_var_name is provided, the variable may hold space delimited name=value pairs
            - config_path and splainer_path must be valid file paths if provided

        Ensures:
            - Configuration is loaded from the given paths, or from the files shipped in quickcalc/conf
            - Environment variable pairs named config_path, splainer_path and config_block_id select the files and block
            - All remaining environment pairs, then cli_args, override configuration values

        Raises:
            - FileNotFoundError if config_path or splainer_path don't exist
            - KeyError if config_block_id doesn't exist in configuration
        """
        self.debug           = debug
        self.verbose         = verbose
        self.silent          = silent
        self.mute_splainer   = mute_splainer

        env_args = { }
        if env_var_name is not None and os.environ.get( env_var_name ):

            if not silent: print( f"Using environment variable [{env_var_name}] to instantiate configuration manager" )
            env_args = du.get_name_value_pairs( os.environ[ env_var_name ].split( " " ) )

            config_path     = env_args.pop( "config_path", config_path )
            splainer_path   = env_args.pop( "splainer_path", splainer_path )
            config_block_id = env_args.pop( "config_block_id", config_block_id )

        self.config_path     = config_path   or du.get_package_conf_path( DEFAULT_CONFIG_FILE )
        self.splainer_path   = splainer_path or du.get_package_conf_path( DEFAULT_SPLAINER_FILE )
        self.config_block_id = config_block_id

        # explicit cli_args win over the environment
        overrides = dict( env_args )
        if cli_args is not None: overrides.update( cli_args )

        # set by call below
        self.config          = None
        self.splainer        = None

        self.init( cli_args=overrides )

    def init( self, cli_args: Optional[dict[str, str]]=None ) -> None:
        """
        Initialize or reinitialize the configuration.

        Requires:
            - self.config_path and self.splainer_path point at existing files

        Ensures:
            - Configuration is loaded from self.config_path
            - Default values are applied
            - CLI overrides are processed
            - Splainer definitions are loaded

        Raises:
            - FileNotFoundError if paths don't exist
            - KeyError if self.config_block_id not found
        """
        du.sanity_check_file_path( self.config_path,   silent=self.silent )
        du.sanity_check_file_path( self.splainer_path, silent=self.silent )

        if not self.silent:
            du.print_banner( f"Initializing configuration_manager [{self.config_path}]", prepend_nl=True, end="\n" )
            print( f"Splainer path [{self.splainer_path}]", end="\n\n" )

        self.config = configparser.ConfigParser()
        self.config.read( self.config_path )

        self._sanity_check_config_block( self.config_block_id )

        if not self.silent: self.print_sections()
        self._calculate_defaults()
        self._override_configuration( cli_args )
        self._load_splainer_definitions()

    def _override_configuration( self, cli_args: Optional[dict[str, str]] ) -> None:
        """
        Override configuration values with CLI arguments.

        Requires:
            - cli_args is None or a dictionary of key-value pairs

        Ensures:
            - Configuration values are updated with cli_args values
            - config_path and config_block_id are not overridden (immutable)
        """
        if not cli_args:
            if self.debug: print( "Skipping cli_args processing" )
            return

        for key, value in cli_args.items():

            if key in ( "config_path", "splainer_path", "config_block_id" ):
                if not self.silent: print( f"Skipping override of [{key}], it's immutable" )
                continue

            if not self.silent: print( f"Overriding [{key}] with [{value}]" )
            self.set_config( key, value )

    def _calculate_defaults( self ) -> None:
        """
        Apply default values to the current configuration block.

        Requires:
            - self.config is initialized with sections

        Ensures:
            - All keys from 'default' section are added to current block
            - Existing keys in current block are not overwritten
            - Nothing happens if current block is 'default' or there is no 'default' block
        """
        if self.config_block_id == "default" or "default" not in self.config.sections():
            return

        for key in self.config.options( "default" ):

            if not self.config.has_option( self.config_block_id, key ):
                if self.debug and self.verbose: print( f"Inserting default key [{key}] into [{self.config_block_id}]" )
                self.config.set( self.config_block_id, key, self.config.get( "default", key ) )

    def _sanity_check_config_block( self, block_id: str ) -> None:
        """
        Verify that a configuration block exists.

        Raises:
            - KeyError with descriptive message if block not found
        """
        if block_id not in self.config.sections():
            raise KeyError( f"Configuration block doesn't exist: [{block_id}] Check spelling?" )

    def print_sections( self ) -> None:
        """
        Print all configuration sections to console, current block marked with an asterisk.
        """
        sections = sorted( self.config.sections() )

        du.print_banner( "Sections, '*' = current block ID" )

        for section in sections:
            print( "*" if section == self.config_block_id else " ", section )

        print()

    def set_config( self, config_key: str, value: Any ) -> None:
        """
        Set or update a configuration value in the current block.

        Requires:
            - config_key is a non-empty string
            - value can be converted to string
        """
        self.config.set( self.config_block_id, config_key, str( value ) )

    def exists( self, config_key: str ) -> bool:
        """
        Check whether a key exists in the current configuration block.
        """
        # configparser lowercases all keys internally
        return config_key.lower() in self.config.options( self.config_block_id )

    def get_keys( self ) -> list[str]:
        """
        Get all keys in the current configuration block.
        """
        return self.config.options( self.config_block_id )

    def print_configuration( self, brackets: bool=True, prefixes: Optional[list[str]]=None ) -> None:
        """
        Print configuration key-value pairs to console, sorted by key.

        Requires:
            - self.config and self.config_block_id are initialized

        Ensures:
            - Optionally filters by key prefixes
            - Values optionally wrapped in brackets
        """
        keys = self.get_keys()

        if prefixes:
            keys = [ key for key in keys if any( key.startswith( prefix ) for prefix in prefixes ) ]
            if len( keys ) == 0:
                print( "No configuration keys to print" )
                return

        du.print_banner( f"Configuration for [{self.config_block_id}]", end="\n" )

        max_len = max( len( key ) for key in keys ) + 2
        for key in sorted( keys ):
            value = self.config.get( self.config_block_id, key )
            if brackets:
                print( f"{( '[' + key + ']' ).rjust( max_len, ' ' )} = [{value}]" )
            else:
                print( f"{key.rjust( max_len, ' ' )} = {value}" )
        print()

    def get( self, key: str, default: Union[str, int, float, bool, list]="@@@_None_@@@", silent: bool=False, return_type: str="string" ) -> Optional[Union[str, int, float, bool, list, dict]]:
        """
        Get a configuration value with optional type conversion.

        Requires:
            - key is a non-empty string
            - return_type is one of: 'boolean', 'float', 'int', 'string', 'list-string', 'json', 'dict'

        Ensures:
            - Returns typed value if key exists
            - Returns typed default if key doesn't exist and default provided
            - Returns None if key doesn't exist and no default
            - Provides splainer explanation for missing keys unless silent or muted

        Raises:
            - ValueError if return_type is invalid
            - JSON/AST parsing errors for json/dict types
        """
        if self.exists( key ):
            return self._get_typed_value( self.config.get( self.config_block_id, key ), return_type )

        if not silent and not self.mute_splainer:
            du.print_banner( f"Key [{key}] NOT found", end="\n" )
            self.splain_me( key )

        if default != "@@@_None_@@@":
            return self._get_typed_value( default, return_type )

        return None

    def _get_typed_value( self, value: Any, return_type: str ) -> Union[str, int, float, bool, list, dict]:
        """
        Convert a configuration value to the requested type.

        Requires:
            - value can be converted to the requested type
            - return_type is a valid type identifier (case-insensitive)

        Ensures:
            - Booleans accept True/False in any case, as strings or bools
            - list-string splits on ', '

        Raises:
            - ValueError if return_type is invalid
        """
        return_type = return_type.lower()

        if return_type == "boolean":
            return value is True or str( value ).strip().lower() == "true"
        elif return_type == "float":
            return float( value )
        elif return_type.startswith( "int" ):
            return int( value )
        elif return_type.startswith( "str" ):
            return value
        elif return_type == "list-string":
            return value.split( ", " )
        elif return_type == "json":
            return json.loads( value )
        elif return_type == "dict":
            return ast.literal_eval( value )
        else:
            raise ValueError( f"Return type [{return_type}] is invalid.  Accepts: 'boolean', 'float', 'int', 'string', 'list-string', 'json' and 'dict'" )

    def splain_me( self, key: str, end: str="\n\n" ) -> None:
        """
        Explain a configuration key using the splainer documentation.
        """
        if self.splainer.has_option( "default", key ):
            print( f"'Splainer says: [{key}] = {self.splainer.get( 'default', key )}", end=end )
        else:
            print( f"'Splainer says: ¿WUH? The key [{key}] NOT found in the splainer file. Check spelling?", end=end )

    def _load_splainer_definitions( self ) -> None:
        """
        Load explanatory documentation for configuration keys.

        Ensures:
            - self.splainer is populated with a ConfigParser object
        """
        if not self.silent: du.print_banner( f"Loading splainer file [{self.splainer_path}]..." )
        splainer = configparser.ConfigParser()
        splainer.read( self.splainer_path )

        self.splainer = splainer

def quick_smoke_test():
    """Quick smoke test to validate ConfigurationManager functionality."""

    du.print_banner( "ConfigurationManager Smoke Test", prepend_nl=True )
    passed = True

    try:
        config_mgr = ConfigurationManager( env_var_name=DEFAULT_ENV_VAR_NAME, _reset_singleton=True )
        config_mgr.print_configuration( brackets=True )

        assert config_mgr.get( "server port", return_type="int" ) > 0
        print( "  ✓ server port is an int" )

        assert config_mgr.get( "no such key", default=7, silent=True, return_type="int" ) == 7
        print( "  ✓ missing key returns typed default" )

        print( "✓ ConfigurationManager smoke test PASSED" )

    except Exception as e:
        du.print_stack_trace( e, explanation="Smoke test failed", caller="configuration_manager.quick_smoke_test()" )
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
