from typing import Optional, Dict, Any

class CalcError( Exception ):
    """
    Base exception for all calculator engine and history store errors.

    Requires:
        - message is a descriptive, human-readable error message
        - error_code is optional error identifier
        - metadata is optional additional context

    Ensures:
        - exception includes message and optional context
        - metadata is always a dictionary
        - status_code is the HTTP status the REST layer reports
    """

    status_code = 500

    def __init__( self, message: str, error_code: Optional[str] = None, metadata: Optional[Dict[str, Any]] = None ):
        super().__init__( message )
        self.message    = message
        self.error_code = error_code
        self.metadata   = metadata or {}

class CalcValidationError( CalcError ):
    """
    Malformed or out-of-range input.

    Used for:
        - Unknown units or units from different dimensions
        - Non-finite numbers
        - Unparsable dates
        - Non-positive history limits
    """
    status_code = 400

class InvalidExpressionError( CalcValidationError ):
    """
    Arithmetic expression rejected by the basic calculator.

    Used for:
        - Characters outside digits, + - * / . ( ) and space
        - Grammar failures: unbalanced parentheses, operator run-ons, dangling operators
    """
    pass

class InvalidDateOrderError( CalcValidationError ):
    """Birth date falls after the reference date."""
    pass

class RecordNotFoundError( CalcError ):
    """
    No history record with the requested id.

    Requires:
        - record_id is the id that was looked up

    Ensures:
        - record_id is kept for callers that want to report it
    """
    status_code = 404

    def __init__( self, record_id: int, **kwargs ):
        super().__init__( f"Calculation [{record_id}] not found", **kwargs )
        self.record_id = record_id

class UnexpectedCalcError( CalcError ):
    """Anything else; should not normally occur given the pure-function design."""
    status_code = 500
