"""
Type warnings for tinywat.

Type errors never stop compilation: an ill-typed node infers to the NONE
sentinel and the emitted type tag degrades to `none`. These warnings only
make that visible to the user.

Author: xwest
"""

from typing import Optional, List

from ..lexer.errors import Diagnostic
from ..parser.ast_nodes import ASTNode


class TypeWarning:
    """
    Represents a type problem that doesn't stop compilation.
    """

    def __init__(
        self,
        message: str,
        node: Optional[ASTNode] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        self.message = message
        self.node = node
        self.diagnostic = Diagnostic(
            message=message,
            severity="warning",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    def __str__(self) -> str:
        return str(self.diagnostic)

    def __repr__(self) -> str:
        return f"TypeWarning({self.code!r}, {self.message!r})"


WARNING_CODES = {
    "W001": "Function type does not check",
    "W002": "Call to undefined function",
}


def create_function_type_warning(function_name: str, declared: str, inferred: str,
                                 node: Optional[ASTNode] = None) -> TypeWarning:
    """Create a warning for a function whose body does not match its declared type."""
    return TypeWarning(
        message=f"Function '{function_name}' is declared {declared} but its body is {inferred}",
        node=node,
        code="W001",
        help_text="The result clause is emitted from the body type, so it will read "
                  f"'(result {inferred})'."
    )


def create_undefined_function_warning(callee: str, caller: str,
                                      node: Optional[ASTNode] = None) -> TypeWarning:
    """Create a warning for a call to a name that no function defines."""
    return TypeWarning(
        message=f"Function '{caller}' calls undefined function '{callee}'",
        node=node,
        code="W002",
        help_text="Calls to unknown functions have type none.",
        suggestions=[f"Define 'fn {callee}(...)' in the same program"]
    )
