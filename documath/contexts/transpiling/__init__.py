"""
Transpiling Context

Responsibilities:
- Rewrites LaTeX equation sources into Word's linear equation format
- Owns the ordered rewrite pipeline and its lookup tables
- Reports constructs that pass through unrecognized

Owns: LaTeX -> linear format rewriting
Never: Decides where equations sit in the document
"""

from documath.contexts.transpiling.equation_patterns import MatrixKind
from documath.contexts.transpiling.rewrite_rules import REWRITE_PIPELINE, RewriteRule
from documath.contexts.transpiling.transpiler import (
    find_unrecognized_commands,
    trace_transpile,
    transpile,
)

__all__ = [
    "transpile",
    "trace_transpile",
    "find_unrecognized_commands",
    "REWRITE_PIPELINE",
    "RewriteRule",
    "MatrixKind",
]
