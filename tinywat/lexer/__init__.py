"""
tinywat Lexer Package

Implements the tokenizer for tinywat source text.

Key Features:
- Cursor over the remaining input, threaded through every call
- One-token lookahead (peek) without consumption
- Punctuation always takes priority over keywords and identifiers

Author: xwest
"""

from .tokens import Token, TokenType
from .lexer import Cursor, Lexer, next_token, tokenize_string
from .errors import CompileError, Diagnostic, LexError, LexErrorKind

__all__ = [
    "Cursor",
    "Lexer",
    "Token",
    "TokenType",
    "next_token",
    "tokenize_string",
    "CompileError",
    "Diagnostic",
    "LexError",
    "LexErrorKind",
]
