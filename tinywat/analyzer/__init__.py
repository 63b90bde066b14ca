"""
tinywat Analyzer Package

Structural type inference over the AST, plus the non-fatal type warnings
derived from it.

Author: xwest
"""

from .type_inference import TypeInferencer, infer_type, collect_type_warnings
from .errors import TypeWarning

__all__ = [
    "TypeInferencer",
    "infer_type",
    "collect_type_warnings",
    "TypeWarning",
]
