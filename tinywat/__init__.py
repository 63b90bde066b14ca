"""
tinywat Compiler Package

A front end for a minimal expression language. It translates source text
into a textual stack-machine module: S-expression instructions grouped into
exported functions.

Architecture:
    tinywat/
    ├── lexer/           # Cursor and tokenizer
    ├── parser/          # Recursive descent parser and AST
    ├── analyzer/        # Structural type inference
    └── codegen/         # Module text emitter

Author: xwest
License: MIT
"""

__version__ = "0.1.0"
__author__ = "xwest"
__license__ = "MIT"

from .lexer import Cursor, Lexer, LexError, CompileError
from .parser import Parser, ParseError, parse, parse_program
from .analyzer import infer_type, collect_type_warnings
from .codegen import render
from .driver import CompilationResult, compile_source, compile_with_diagnostics

__all__ = [
    # Pipeline
    "compile_source",
    "compile_with_diagnostics",
    "CompilationResult",

    # Stages
    "Cursor",
    "Lexer",
    "Parser",
    "parse",
    "parse_program",
    "infer_type",
    "collect_type_warnings",
    "render",

    # Errors
    "CompileError",
    "LexError",
    "ParseError",

    # Version info
    "__version__",
    "__author__",
    "__license__",
]
