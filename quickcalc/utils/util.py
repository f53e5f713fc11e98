import os
import sys
import traceback
from datetime import datetime as dt

import pytz


def get_current_datetime_raw( tz_name: str = "America/New_York" ) -> dt:
    """
    Get a timezone-aware datetime object for the current time in a specified timezone.

    Requires:
        - tz_name is a valid timezone string recognized by pytz

    Ensures:
        - Returns a datetime object localized to the specified timezone

    Args:
        tz_name: The name of the timezone (default: "America/New_York")

    Returns:
        A timezone-aware datetime object

    Raises:
        pytz.exceptions.UnknownTimeZoneError: If tz_name is not a valid timezone
    """
    tz = pytz.timezone( tz_name )

    return dt.now( tz )

def get_current_local_datetime( tz_name: str = "America/New_York" ) -> dt:
    """
    Get the wall-clock time in a timezone as a naive datetime.

    Requires:
        - tz_name is a valid timezone string recognized by pytz

    Ensures:
        - Returns the local date and time of tz_name with tzinfo stripped
        - Result is comparable with naive dates parsed from user input

    Raises:
        pytz.exceptions.UnknownTimeZoneError: If tz_name is not a valid timezone
    """
    return get_current_datetime_raw( tz_name ).replace( tzinfo=None )

def get_name_value_pairs( arg_list: list[str], decode_spaces: bool = True, debug: bool = False ) -> dict[str, str]:
    """
    Parses a list of strings -- name=value -- into dictionary format { "name":"value" }

    Requires:
        - arg_list is a list of strings

    Ensures:
        - Returns dictionary mapping names to values
        - Only processes strings containing "="
        - Splits on the first "=" only, so values may contain "="
        - Converts "+" to spaces in names and values when decode_spaces is True

    Args:
        arg_list: Space delimited input from CLI or environment variable
        decode_spaces: Whether to turn "+" into " " (default: True)
        debug: Whether to print debug information

    Returns:
        Dictionary of name=value pairs
    """
    name_value_pairs = { }

    for i, arg in enumerate( arg_list ):

        if "=" not in arg:
            if debug: print( f"[{i}]th arg [{arg}] SKIPPING, name=value format not found" )
            continue

        name, value = arg.split( "=", 1 )
        if decode_spaces:
            name  = name.replace( "+", " " )
            value = value.replace( "+", " " )

        name_value_pairs[ name.strip() ] = value.strip()
        if debug: print( f"[{i}]th arg [{name}] = [{value}]" )

    return name_value_pairs

def print_banner( msg: str, expletive: bool = False, chunk: str = "¡@#!-$?%^_¿", end: str = "\n\n", prepend_nl: bool = False ) -> None:
    """
    Print a message to console with decorative header/footer lines.

    Requires:
        - msg is a string to display in the banner
        - chunk is a string used for decoration in expletive mode

    Ensures:
        - Prints the message with decorative lines above and below
        - Uses expletive decoration style if expletive=True
        - Prepends a newline if prepend_nl=True

    Args:
        msg: The message to print in the banner
        expletive: Whether to use "cartoon-style" error decoration (default: False)
        chunk: The string to use for expletive decoration (default: "¡@#!-$?%^_¿")
        end: The string to print after the banner (default: "\n\n")
        prepend_nl: Whether to print a newline before the banner (default: False)
    """
    if prepend_nl: print()

    max_len = 120
    bar_str = ""
    if expletive:
        while len( bar_str ) < max_len:
            bar_str += chunk
    else:
        bar_str = "-" * max_len

    print( bar_str )
    if expletive:
        print( chunk )
        print( chunk, msg )
        print( chunk )
    else:
        print( "-", msg )
    print( bar_str, end=end )

def get_package_conf_path( file_name: str ) -> str:
    """
    Build the absolute path of a file shipped in the quickcalc/conf directory.

    Requires:
        - file_name is a bare file name

    Ensures:
        - Returns an absolute path inside the package's conf directory
        - Does not check that the file exists
    """
    package_dir = os.path.dirname( os.path.dirname( os.path.abspath( __file__ ) ) )
    return os.path.join( package_dir, "conf", file_name )

def truncate_string( string: str, max_len: int = 64 ) -> str:
    """
    Truncate a string to a maximum length, appending an ellipsis when cut.

    Requires:
        - string is a str
        - max_len is a positive integer

    Ensures:
        - Returns string unchanged when it fits
        - Otherwise returns the first max_len characters followed by "..."
    """
    if len( string ) > max_len:
        return string[ :max_len ] + "..."
    return string

def print_stack_trace( exception: Exception, explanation: str = "Unknown reason", caller: str = "Unknown caller", prepend_nl: bool = True ) -> None:
    """
    Print a formatted stack trace for an exception.

    Requires:
        - exception is an Exception object with a traceback
        - explanation and caller are strings describing the error context

    Ensures:
        - Prints a banner with error message
        - Prints the full stack trace from the exception
    """
    msg = f"ERROR: {explanation} in {caller}"
    print_banner( msg, prepend_nl=prepend_nl, expletive=True )
    stack_trace = traceback.format_tb( exception.__traceback__ )
    for line in stack_trace: print( line )

def sanity_check_file_path( file_path: str, silent: bool = False ) -> None:
    """
    Check if a file exists and raise an error if not.

    Requires:
        - file_path is a string path to check

    Ensures:
        - Prints success message if file exists and silent is False

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if not os.path.isfile( file_path ):
        raise FileNotFoundError( f"That file doesn't exist: [{file_path}] Please correct path to file" )

    if not silent: print( f"File exists! [{file_path}]" )

def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing util module..." )
    passed = True

    try:
        pairs = get_name_value_pairs( [ "app+debug=True", "server+port=8080", "junk" ] )
        assert pairs == { "app debug": "True", "server port": "8080" }
        print( "  ✓ get_name_value_pairs decodes spaces" )

        assert truncate_string( "abcdef", max_len=3 ) == "abc..."
        print( "  ✓ truncate_string" )

        now = get_current_local_datetime( "UTC" )
        assert now.tzinfo is None
        print( f"  ✓ get_current_local_datetime: {now}" )

        print( "✓ util module smoke test PASSED" )

    except Exception as e:
        print( f"✗ util module smoke test FAILED: {e}" )
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    sys.exit( 0 if success else 1 )
