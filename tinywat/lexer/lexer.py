"""
tinywat Lexer - turns the remaining source text into tokens

There is no token list: the parser pulls one token at a time from a cursor
over whatever input is left, peeking when it needs to choose between
productions.

xwest
"""

import re
from typing import List

from .tokens import Token, TokenType, KEYWORDS, lookup_punctuation
from .errors import LexError


class Cursor:
    """
    The remaining, not yet consumed, source text.

    Lexer calls either consume a token (advance) or leave the cursor exactly
    as it was (peek, or failure).
    """

    def __init__(self, source: str):
        self.text = source

    def advance(self, count: int):
        """Drop `count` characters after any leading whitespace."""
        self.text = self.text.lstrip()[count:]

    def at_end(self) -> bool:
        """True when only whitespace is left."""
        return not self.text.strip()

    def __repr__(self) -> str:
        return f"Cursor({self.text!r})"


_INTEGER_PATTERN = re.compile(r'[0-9]+')
_IDENTIFIER_PATTERN = re.compile(r'[A-Za-z0-9_]+')


def next_token(cursor: Cursor, peek: bool = False) -> Token:
    """
    Classify the next token in the cursor.

    Classifiers are tried in order: punctuation, keyword prefix, integer,
    identifier.

    Args:
        cursor: Remaining input
        peek: If true, leave the cursor unchanged

    Returns:
        The next token

    Raises:
        LexError: If no classifier matches (including at end of input)
    """
    text = cursor.text.lstrip()
    token = _classify(text)

    if not peek:
        cursor.advance(len(token.lexeme))

    return token


def _classify(text: str) -> Token:
    if not text:
        raise LexError(text)

    token_type = lookup_punctuation(text[0])
    if token_type is not None:
        return Token(token_type, text[0])

    for keyword, token_type in KEYWORDS.items():
        if text.startswith(keyword):
            return Token(token_type, keyword)

    match = _INTEGER_PATTERN.match(text)
    if match:
        lexeme = match.group(0)
        return Token(TokenType.INTEGER, lexeme, int(lexeme))

    match = _IDENTIFIER_PATTERN.match(text)
    if match:
        lexeme = match.group(0)
        return Token(TokenType.IDENTIFIER, lexeme, lexeme)

    raise LexError(text)


class Lexer:
    """
    tinywat lexical analyzer.

    Thin object wrapper around a Cursor so callers that want a stream
    (the parser, the CLI token dump) don't thread the cursor themselves.
    """

    def __init__(self, source: str):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
        """
        self.cursor = Cursor(source)

    def next_token(self, peek: bool = False) -> Token:
        return next_token(self.cursor, peek)

    def peek(self) -> Token:
        return next_token(self.cursor, peek=True)

    def at_end(self) -> bool:
        return self.cursor.at_end()

    def tokenize(self) -> List[Token]:
        """
        Consume the rest of the input.

        Returns:
            Every remaining token, in order

        Raises:
            LexError: On the first character no classifier accepts
        """
        tokens = []
        while not self.at_end():
            tokens.append(self.next_token())
        return tokens


def tokenize_string(source: str) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string

    Returns:
        List of tokens

    Raises:
        LexError: If lexing fails
    """
    return Lexer(source).tokenize()
