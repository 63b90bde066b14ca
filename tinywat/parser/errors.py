"""
Error handling for the tinywat parser.

Parsing stops at the first error: there is no recovery and no partial AST.

Author: xwest
"""

from typing import List, Optional, Union

from ..lexer.tokens import Token, TokenType, describe
from ..lexer.errors import CompileError, shorten_input


class ParseError(CompileError):
    """
    Exception raised when an expected token or category is absent.

    Carries what was expected and the unconsumed input at that point.
    """

    def __init__(
        self,
        expected: str,
        remaining: str,
        message: Optional[str] = None,
        code: str = "P001",
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.expected = expected
        self.remaining = remaining.lstrip()
        if message is None:
            message = f"Expected {expected} at '{shorten_input(self.remaining)}'"
        super().__init__(
            message,
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unknown variable",
    "P003": "Integer literal out of range",
    "P004": "Nesting too deep",
}


def create_unexpected_token_error(expected: Union[TokenType, str], found: Optional[Token],
                                  remaining: str) -> ParseError:
    """Create an error for an unexpected token."""
    expected_str = describe(expected) if isinstance(expected, TokenType) else expected

    if found is None:
        help_text = f"The parser expected {expected_str} but the input ended."
    else:
        help_text = f"The parser expected {expected_str} here, but found '{found.lexeme}'."

    suggestions = []
    if isinstance(expected, TokenType) and expected in (TokenType.RIGHT_PAREN, TokenType.RIGHT_BRACE):
        suggestions.append(f"Add a closing {expected_str}")

    return ParseError(
        expected=expected_str,
        remaining=remaining,
        code="P001",
        help_text=help_text,
        suggestions=suggestions or None
    )


def create_unknown_variable_error(name: str, function_name: str, remaining: str) -> ParseError:
    """Create an error for a name that is neither a parameter nor a call."""
    return ParseError(
        expected=f"a parameter of '{function_name}'",
        remaining=remaining,
        message=f"Unknown variable '{name}' in function '{function_name}' at '{shorten_input(remaining.lstrip())}'",
        code="P002",
        help_text="Only the enclosing function's parameters can be referenced by name.",
        suggestions=[f"Add '{name}' to the parameter list of '{function_name}'",
                     f"Write '{name}(...)' to call a function"]
    )


def create_literal_range_error(value: int, remaining: str) -> ParseError:
    """Create an error for an integer literal that does not fit in an i32."""
    return ParseError(
        expected="an i32 literal",
        remaining=remaining,
        message=f"Integer literal {value} does not fit in i32 at '{shorten_input(remaining.lstrip())}'",
        code="P003",
        help_text="Integer literals must be at most 2147483647."
    )


def create_nesting_error(remaining: str) -> ParseError:
    """Create an error for input nested deeper than the parser can follow."""
    return ParseError(
        expected="a shallower expression",
        remaining=remaining,
        message=f"Expression nested too deeply at '{shorten_input(remaining.lstrip())}'",
        code="P004",
        help_text="Split long operator chains or deep nesting across functions."
    )
