"""
Error handling for the tinywat lexer.

Defines the Diagnostic record shared by every compiler stage, the
CompileError base exception, and the lexer's own LexError.

Author: xwest
"""

from enum import Enum
from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base record for compiler diagnostics (errors, warnings)."""
    message: str
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            result = f"{severity_prefix}[{self.code}]: {self.message}\n"
        else:
            result = f"{severity_prefix}: {self.message}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class CompileError(Exception):
    """
    Base class for fatal compiler errors.

    The exception message is the short, one-line description; the attached
    diagnostic holds the longer report.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message=message,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return self.message


class LexErrorKind(Enum):
    """Reasons the lexer can fail."""
    NO_TOKEN = "NoToken"


class LexError(CompileError):
    """
    Raised when no token classifier matches the remaining input.

    The cursor is left untouched; `remaining` holds the text (with leading
    whitespace stripped) where lexing stopped.
    """

    def __init__(self, remaining: str, kind: LexErrorKind = LexErrorKind.NO_TOKEN):
        self.kind = kind
        self.remaining = remaining
        if remaining:
            message = f"No token at '{shorten_input(remaining)}'"
            help_text = f"The character '{remaining[0]}' does not start any token."
        else:
            message = "No token at end of input"
            help_text = "The input ended where another token was required."
        super().__init__(message, code="L001", help_text=help_text)


def shorten_input(text: str, limit: int = 40) -> str:
    """Shorten remaining input for one-line messages."""
    text = " ".join(text.split())
    if len(text) > limit:
        return text[:limit] + "..."
    return text


# Common error codes for categorization
ERROR_CODES = {
    "L001": "No token matches the remaining input",
}
