#!/usr/bin/env python3
"""
Constrained arithmetic evaluator for the Basic calculator.

A small tokenizer plus recursive-descent parser over the grammar:

    expression := term   ( ( "+" | "-" ) term )*
    term       := factor ( ( "*" | "/" ) factor )*
    factor     := ( "+" | "-" ) factor | NUMBER | "(" expression ")"
    NUMBER     := digits [ "." digits ] | "." digits | digits "."

Only digits, + - * / . ( ) and spaces are accepted. Nothing is ever handed to
eval(), exec() or compile(), so no input can do anything beyond arithmetic.
Division by zero follows IEEE 754: ±inf, or nan for 0/0.
"""

import math
from dataclasses import dataclass

import regex as re

from quickcalc.calculator.calc_exceptions import InvalidExpressionError

ALLOWED_PATTERN = re.compile( r"[0-9+\-*/.() ]+" )
TOKEN_PATTERN   = re.compile( r"\s*(?:(\d+\.?\d*|\.\d+)|(\S))" )

# Adjacent pairs that would be a different operator (increment, decrement, power)
RUN_ON_PATTERN  = re.compile( r"\+\+|--|\*\*" )

MAX_NESTING = 64

INVALID_MESSAGE = "Invalid expression"


@dataclass( frozen=True )
class Token:
    """One lexical token: kind is "number" or "op", text is the raw source."""
    kind     : str
    text     : str
    position : int


def tokenize( expression ):
    """
    Split an expression string into number and operator tokens.

    Requires:
        - expression is a string

    Ensures:
        - Returns a non-empty list of Token objects in source order
        - Number tokens hold well-formed decimal literals

    Raises:
        - InvalidExpressionError for disallowed characters, blank input,
          malformed numbers or operator run-ons
    """
    if not isinstance( expression, str ) or not ALLOWED_PATTERN.fullmatch( expression ):
        raise InvalidExpressionError( INVALID_MESSAGE )

    if not expression.strip():
        raise InvalidExpressionError( INVALID_MESSAGE )

    if RUN_ON_PATTERN.search( expression ):
        raise InvalidExpressionError( INVALID_MESSAGE )

    tokens = [ ]
    for match in TOKEN_PATTERN.finditer( expression ):

        number, symbol = match.group( 1 ), match.group( 2 )
        if number is not None:
            # "1.2.3" and "1 2" tokenize as two adjacent numbers; the parser rejects them
            tokens.append( Token( "number", number, match.start( 1 ) ) )
        elif symbol is not None:
            if symbol == ".":
                raise InvalidExpressionError( INVALID_MESSAGE )
            tokens.append( Token( "op", symbol, match.start( 2 ) ) )

    return tokens


def _ieee_divide( numerator, denominator ):
    if denominator != 0:
        return numerator / denominator
    if numerator == 0 or math.isnan( numerator ):
        return math.nan
    return math.copysign( math.inf, numerator ) * math.copysign( 1.0, denominator )


class _Parser:
    """
    Recursive-descent evaluator over a token list.

    Each grammar rule is one method; evaluation happens while parsing, so the
    parser never builds a tree.
    """

    def __init__( self, tokens, debug=False ):
        self.tokens   = tokens
        self.position = 0
        self.depth    = 0
        self.debug    = debug

    def _peek( self ):
        if self.position < len( self.tokens ):
            return self.tokens[ self.position ]
        return None

    def _advance( self ):
        token = self._peek()
        if token is None:
            raise InvalidExpressionError( INVALID_MESSAGE )
        self.position += 1
        return token

    def _peek_op( self, *symbols ):
        token = self._peek()
        return token is not None and token.kind == "op" and token.text in symbols

    def parse( self ):
        value = self._expression()
        if self._peek() is not None:
            if self.debug: print( f"expression_evaluator: trailing token [{self._peek().text}]" )
            raise InvalidExpressionError( INVALID_MESSAGE )
        return value

    def _expression( self ):
        value = self._term()
        while self._peek_op( "+", "-" ):
            operator = self._advance().text
            right    = self._term()
            value    = value + right if operator == "+" else value - right
        return value

    def _term( self ):
        value = self._factor()
        while self._peek_op( "*", "/" ):
            operator = self._advance().text
            right    = self._factor()
            value    = value * right if operator == "*" else _ieee_divide( value, right )
        return value

    def _factor( self ):
        self.depth += 1
        if self.depth > MAX_NESTING:
            raise InvalidExpressionError( INVALID_MESSAGE )

        try:
            token = self._advance()

            if token.kind == "number":
                return float( token.text )

            if token.text == "+":
                return self._factor()

            if token.text == "-":
                return -self._factor()

            if token.text == "(":
                value = self._expression()
                if not self._peek_op( ")" ):
                    raise InvalidExpressionError( INVALID_MESSAGE )
                self._advance()
                return value

            raise InvalidExpressionError( INVALID_MESSAGE )

        finally:
            self.depth -= 1


def evaluate_expression( expression, debug=False ):
    """
    Evaluate a constrained arithmetic expression.

    Requires:
        - expression is a string

    Ensures:
        - Returns a float computed with standard precedence: unary sign, then
          * and /, then + and -, left to right within a level
        - Division by zero yields ±inf or nan instead of raising

    Raises:
        - InvalidExpressionError for any character outside the allowed set or
          any grammar failure
    """
    tokens = tokenize( expression )
    if debug: print( f"expression_evaluator.evaluate_expression: {[ t.text for t in tokens ]}" )

    return _Parser( tokens, debug=debug ).parse()


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing expression_evaluator module..." )
    passed = True

    try:
        assert evaluate_expression( "2 + 3 * 4" ) == 14
        assert evaluate_expression( "(2 + 3) * 4" ) == 20
        assert evaluate_expression( "10 / 4 - 1" ) == 1.5
        assert evaluate_expression( "-(3 - 5)" ) == 2
        print( "  ✓ precedence, parentheses and unary minus" )

        assert evaluate_expression( "1 / 0" ) == math.inf
        assert math.isnan( evaluate_expression( "0 / 0" ) )
        print( "  ✓ IEEE division by zero" )

        for bad in [ "2 + ", "2 + alert(1)", "(1 + 2", "1.2.3", "2 ** 3", "" ]:
            try:
                evaluate_expression( bad )
                assert False, f"Should have rejected [{bad}]"
            except InvalidExpressionError:
                pass
        print( "  ✓ invalid expressions rejected" )

        print( "✓ expression_evaluator module smoke test PASSED" )

    except Exception as e:
        print( f"✗ expression_evaluator module smoke test FAILED: {e}" )
        import traceback
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
