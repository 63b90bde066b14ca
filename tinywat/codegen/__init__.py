"""
tinywat Code Generation Package

Renders the AST as the textual stack-machine module format consumed by the
downstream assembler.

Author: xwest
"""

from .wat_emitter import WatEmitter, render

__all__ = [
    "WatEmitter",
    "render",
]
