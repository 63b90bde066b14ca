"""
Token definitions for the tinywat lexer.

The language only has a handful of tokens:
- Keywords (fn, if, then, else)
- Punctuation and the seven binary operators
- Literals (decimal integers) and identifiers

Author: xwest
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Optional


class TokenType(Enum):
    """Enumeration of all token types in tinywat."""

    # ========================================================================
    # Keywords
    # ========================================================================
    FN = auto()                     # fn
    IF = auto()                     # if
    THEN = auto()                   # then
    ELSE = auto()                   # else

    # ========================================================================
    # Punctuation
    # ========================================================================
    LEFT_PAREN = auto()             # (
    RIGHT_PAREN = auto()            # )
    LEFT_BRACE = auto()             # {
    RIGHT_BRACE = auto()            # }
    COMMA = auto()                  # ,

    # ========================================================================
    # Operators
    # ========================================================================
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    MULTIPLY = auto()               # *
    DIVIDE = auto()                 # /
    MODULO = auto()                 # %
    GREATER_THAN = auto()           # >
    LESS_THAN = auto()              # <

    # ========================================================================
    # Literal-carrying tokens
    # ========================================================================
    IDENTIFIER = auto()             # add, x_1
    INTEGER = auto()                # 42


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token.

    Tokens are transient: the parser inspects one and drops it. Only
    IDENTIFIER and INTEGER tokens carry a value.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any = None               # int for INTEGER, str for IDENTIFIER

    def __str__(self) -> str:
        if self.value is not None and self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    @property
    def is_operator(self) -> bool:
        """Check if this token is a binary operator."""
        return self.type in BINARY_OPERATORS


# Single-character punctuation and operators. These are tried before keywords
# and identifiers, so none of them can ever start a name.
PUNCTUATION = {
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.DIVIDE,
    '%': TokenType.MODULO,
    '>': TokenType.GREATER_THAN,
    '<': TokenType.LESS_THAN,
}

# Keywords are matched as prefixes, in this order.
KEYWORDS = {
    'fn': TokenType.FN,
    'if': TokenType.IF,
    'then': TokenType.THEN,
    'else': TokenType.ELSE,
}

BINARY_OPERATORS = frozenset({
    TokenType.PLUS,
    TokenType.MINUS,
    TokenType.MULTIPLY,
    TokenType.DIVIDE,
    TokenType.MODULO,
    TokenType.GREATER_THAN,
    TokenType.LESS_THAN,
})


def describe(token_type: TokenType) -> str:
    """Human-readable name for a token type, used in error messages."""
    for text, candidate in PUNCTUATION.items():
        if candidate == token_type:
            return f"'{text}'"
    for text, candidate in KEYWORDS.items():
        if candidate == token_type:
            return f"'{text}'"
    if token_type == TokenType.IDENTIFIER:
        return "identifier"
    if token_type == TokenType.INTEGER:
        return "integer literal"
    return token_type.name


def lookup_punctuation(char: str) -> Optional[TokenType]:
    """Return the token type for a punctuation character, if any."""
    return PUNCTUATION.get(char)
