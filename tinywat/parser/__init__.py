"""
tinywat Parser Package

Implements a recursive descent parser for tinywat. It reads tokens directly
from a cursor over the source and produces an immutable AST.

Key Features:
- One method per grammar rule, single-token lookahead
- Flat, right-nesting binary operator chains
- Parameter references resolved to positional indices at parse time

Author: xwest
"""

from .ast_nodes import *
from .parser import Parser, parse, parse_program
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser", "parse", "parse_program",

    # AST nodes
    "ASTNode", "ASTVisitor",
    "Program", "Function", "Parameter",
    "Literal", "Local", "BinaryOp", "If", "Call", "Expression",
    "Type", "BinaryOperator", "FunctionTable", "lookup_function", "walk",
    "postorder",

    # Error handling
    "ParseError",
]
