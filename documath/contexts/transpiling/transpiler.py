"""
Equation Transpiler

Rewrites a LaTeX equation body into Word's linear equation format by running
it through the ordered rewrite pipeline.

The transpiler is total: it never raises on string input. Constructs it does
not recognise are carried through verbatim and reported at DEBUG level.
"""

import re
from typing import List, Sequence, Tuple

from documath.contexts.transpiling.equation_patterns import EquationRegex
from documath.contexts.transpiling.logger import _log_debug
from documath.contexts.transpiling.rewrite_rules import REWRITE_PIPELINE, RewriteRule


def transpile(latex: str, pipeline: Sequence[RewriteRule] = REWRITE_PIPELINE) -> str:
    """
    Rewrite LaTeX into the linear equation format.

    Args:
        latex: Equation source without $ delimiters
        pipeline: Rules to apply in order (defaults to the full pipeline)

    Returns:
        Equation string for Word's equation editor

    Examples:
        >>> transpile(r"\\frac{1}{2}")
        '(1)/(2)'
        >>> transpile(r"\\sqrt[3]{x}")
        '\\\\root(3&x)'
        >>> transpile(r"x_{i}^{2}")
        'x_i^2'
    """
    result = latex
    for rule in pipeline:
        result = rule.apply(result)

    leftover = find_unrecognized_commands(result)
    if leftover:
        _log_debug(f"Passed through unrecognized commands {leftover} in {result!r}")

    return result


def trace_transpile(latex: str) -> List[Tuple[str, str]]:
    """
    Run the pipeline and record the string after every rule.

    Returns:
        List of (rule_name, output) pairs in pipeline order; the last output
        equals transpile(latex)
    """
    steps = []
    result = latex
    for rule in REWRITE_PIPELINE:
        result = rule.apply(result)
        steps.append((rule.name, result))
    return steps


def find_unrecognized_commands(equation: str) -> List[str]:
    """
    List brace-argument commands still present after transpiling.

    These are LaTeX commands no rule rewrites (e.g. \\text, \\mathbf); they
    appear verbatim in the output.

    Example:
        >>> find_unrecognized_commands(r"\\mathbf{v} + \\text{if } x")
        ['mathbf', 'text']
    """
    return sorted(set(re.findall(EquationRegex.LEFTOVER_COMMAND, equation)))
