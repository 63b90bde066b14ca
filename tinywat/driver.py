"""
Compilation pipeline for tinywat.

source -> parse -> Program -> render -> module text

Author: xwest
"""

from dataclasses import dataclass, field
from typing import List

from .parser.ast_nodes import Program
from .parser.parser import parse
from .analyzer.errors import TypeWarning
from .analyzer.type_inference import collect_type_warnings
from .codegen.wat_emitter import render


@dataclass
class CompilationResult:
    """Results of compiling one source buffer."""
    ast: Program
    output: str
    warnings: List[TypeWarning] = field(default_factory=list)

    def has_warnings(self) -> bool:
        """Check if type inference found any silent type errors."""
        return len(self.warnings) > 0


def compile_source(source: str) -> str:
    """
    Compile a source buffer to module text.

    Args:
        source: tinywat source code

    Returns:
        The rendered module

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
    """
    return render(parse(source))


def compile_with_diagnostics(source: str) -> CompilationResult:
    """
    Compile a source buffer and collect type warnings.

    Warnings never change the output; the text is the same as
    compile_source() would return.
    """
    program = parse(source)
    return CompilationResult(
        ast=program,
        output=render(program),
        warnings=collect_type_warnings(program)
    )
