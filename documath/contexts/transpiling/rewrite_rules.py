"""
Equation Rewrite Rules

Each rule is a pure str -> str transform that rewrites one family of LaTeX
constructs into Word's linear equation format. REWRITE_PIPELINE lists them in
the order they must run; later rules see the output of earlier ones:

- Line breaks become the row separator before matrices are read, so matrix
  rows already use '@'.
- Fractions, roots, accents and functions are rewritten before scripts, so
  script arguments rarely contain braces by the time they are read.
- Single-character script parentheses are collapsed last.

Rules never raise. A construct whose braces do not balance is left as it is.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from documath.contexts.transpiling.equation_patterns import (
    AUTO_SIZED_DELIMITERS,
    MATRIX_DELIMITERS,
    ROW_SEPARATOR,
    EquationRegex,
    MatrixKind,
)
from documath.utils.text_processing import extract_brace_arguments

_AUTO_SIZED_PATTERN = "|".join(
    re.escape(command) for command in sorted(AUTO_SIZED_DELIMITERS, key=len, reverse=True)
)


def replace_command(
    text: str,
    head_pattern: str,
    arg_count: int,
    render: Callable[[re.Match, List[str]], str],
) -> str:
    """
    Replace every command head followed by arg_count balanced brace groups.

    Arguments are rewritten by the same replacement before render sees them,
    so nested occurrences (\\frac inside \\frac) are handled. A head whose
    arguments cannot be read is copied through and scanning resumes after it.

    Args:
        text: Equation source
        head_pattern: Regex matching the command up to its first '{'
        arg_count: Number of brace groups the command takes
        render: Builds the replacement from the head match and rewritten arguments

    Returns:
        Rewritten text
    """
    regex = re.compile(head_pattern)
    pieces = []
    pos = 0

    while True:
        match = regex.search(text, pos)
        if match is None:
            break
        try:
            args, end = extract_brace_arguments(text, match.end(), arg_count)
        except ValueError:
            pieces.append(text[pos : match.end()])
            pos = match.end()
            continue

        rewritten = [replace_command(arg, head_pattern, arg_count, render) for arg in args]
        pieces.append(text[pos : match.start()])
        pieces.append(render(match, rewritten))
        pos = end

    pieces.append(text[pos:])
    return "".join(pieces)


# ============================================================================
# Rules
# ============================================================================


def trim_whitespace(latex: str) -> str:
    return latex.strip()


def normalize_line_breaks(latex: str) -> str:
    """\\\\ becomes the row separator '@'."""
    return re.sub(EquationRegex.LINE_BREAK, ROW_SEPARATOR, latex)


def strip_auto_sized_delimiters(latex: str) -> str:
    """\\left( ... \\right) becomes ( ... ), and likewise for the other delimiters."""
    return re.sub(_AUTO_SIZED_PATTERN, lambda m: AUTO_SIZED_DELIMITERS[m.group(0)], latex)


def normalize_function_calls(latex: str) -> str:
    """\\sin{x} becomes \\sin(x)."""
    return replace_command(
        latex,
        EquationRegex.FUNCTION_HEAD,
        1,
        lambda match, args: f"\\{match.group(1)}({args[0]})",
    )


def rewrite_fractions(latex: str) -> str:
    """\\frac{A}{B} becomes (A)/(B); \\binom{A}{B} becomes (A\\atop B)."""
    latex = replace_command(
        latex,
        EquationRegex.FRACTION_HEAD,
        2,
        lambda match, args: f"({args[0]})/({args[1]})",
    )
    return replace_command(
        latex,
        EquationRegex.BINOMIAL_HEAD,
        2,
        lambda match, args: f"({args[0]}\\atop {args[1]})",
    )


def rewrite_roots(latex: str) -> str:
    """\\sqrt[n]{x} becomes \\root(n&x); \\sqrt{x} becomes \\sqrt(x)."""
    latex = replace_command(
        latex,
        EquationRegex.INDEXED_ROOT_HEAD,
        1,
        lambda match, args: f"\\root({match.group(1)}&{args[0]})",
    )
    return replace_command(
        latex,
        EquationRegex.SQUARE_ROOT_HEAD,
        1,
        lambda match, args: f"\\sqrt({args[0]})",
    )


def rewrite_accents(latex: str) -> str:
    """\\vec{v} becomes \\vec(v), and likewise for the other accents."""
    return replace_command(
        latex,
        EquationRegex.ACCENT_HEAD,
        1,
        lambda match, args: f"\\{match.group(1)}({args[0]})",
    )


def _render_matrix(match: re.Match) -> str:
    opening, closing = MATRIX_DELIMITERS[MatrixKind(match.group(1))]
    rows = normalize_line_breaks(match.group(2).strip())
    return f"{opening}{rows}{closing}"


def rewrite_matrices(latex: str) -> str:
    """
    Rewrite matrix environments using the delimiter table.

    Environments are replaced innermost first until none are left, so a
    matrix nested in another matrix is rewritten before its parent.
    """
    regex = re.compile(EquationRegex.MATRIX_ENV)
    while True:
        rewritten = regex.sub(_render_matrix, latex)
        if rewritten == latex:
            return rewritten
        latex = rewritten


def _script_replacer(marker: str) -> Callable[[re.Match, List[str]], str]:
    return lambda match, args: f"{marker}({args[0]})"


def _read_combined_scripts(latex: str, start: int) -> Optional[Tuple[str, str, int]]:
    """Read {a}^{b} at start; None when the text there is not that shape."""
    try:
        (sub,), sub_end = extract_brace_arguments(latex, start, 1)
        if not latex.startswith("^", sub_end):
            return None
        (sup,), end = extract_brace_arguments(latex, sub_end + 1, 1)
    except ValueError:
        return None
    return sub, sup, end


def _rewrite_combined_scripts(latex: str) -> str:
    """X_{a}^{b} becomes X_(a)^(b)."""
    regex = re.compile(EquationRegex.SUBSCRIPT_HEAD)
    pieces = []
    pos = 0

    while True:
        match = regex.search(latex, pos)
        if match is None:
            break
        scripts = _read_combined_scripts(latex, match.end())
        if scripts is None:
            pieces.append(latex[pos : match.end()])
            pos = match.end()
            continue

        sub, sup, end = scripts
        pieces.append(latex[pos : match.start()])
        pieces.append(
            f"_({_rewrite_combined_scripts(sub)})^({_rewrite_combined_scripts(sup)})"
        )
        pos = end

    pieces.append(latex[pos:])
    return "".join(pieces)


def rewrite_scripts(latex: str) -> str:
    """
    Brace-delimited scripts become parenthesised scripts.

    The combined subscript-then-superscript form is handled first; after it
    the superscript's base is ')' and no longer qualifies on its own.
    """
    latex = _rewrite_combined_scripts(latex)
    latex = replace_command(latex, EquationRegex.SUBSCRIPT_HEAD, 1, _script_replacer("_"))
    return replace_command(latex, EquationRegex.SUPERSCRIPT_HEAD, 1, _script_replacer("^"))


def collapse_single_char_scripts(latex: str) -> str:
    """x_(i) becomes x_i and v^(2) becomes v^2."""
    return re.sub(EquationRegex.SINGLE_CHAR_SCRIPT, r"\1\2", latex)


# ============================================================================
# Pipeline
# ============================================================================


@dataclass(frozen=True)
class RewriteRule:
    """A named step of the rewrite pipeline."""

    name: str
    apply: Callable[[str], str]


REWRITE_PIPELINE = (
    RewriteRule("trim_whitespace", trim_whitespace),
    RewriteRule("normalize_line_breaks", normalize_line_breaks),
    RewriteRule("strip_auto_sized_delimiters", strip_auto_sized_delimiters),
    RewriteRule("normalize_function_calls", normalize_function_calls),
    RewriteRule("rewrite_fractions", rewrite_fractions),
    RewriteRule("rewrite_roots", rewrite_roots),
    RewriteRule("rewrite_accents", rewrite_accents),
    RewriteRule("rewrite_matrices", rewrite_matrices),
    RewriteRule("rewrite_scripts", rewrite_scripts),
    RewriteRule("collapse_single_char_scripts", collapse_single_char_scripts),
)
