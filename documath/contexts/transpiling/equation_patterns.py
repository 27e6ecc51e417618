"""
Equation Pattern Constants

LaTeX patterns matched by the rewrite rules and the lookup tables that map
LaTeX constructs onto Word's linear equation format. Adding a matrix
delimiter style, a named function or an accent is a table edit here.

Pattern strings are grouped into frozen dataclasses and used directly with
the re module. Command heads end in a (?=\\{) lookahead so the brace
arguments can be read with balanced-delimiter scanning.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple

# Linear-format structural tokens
ROW_SEPARATOR = "@"
COLUMN_SEPARATOR = "&"

# Functions written as \sin{x} that become \sin(x)
FUNCTION_NAMES: Tuple[str, ...] = ("sin", "cos", "tan", "lim", "log", "ln", "det", "exp")

# Accents and decorations written as \vec{v} that become \vec(v)
ACCENT_NAMES: Tuple[str, ...] = ("vec", "hat", "bar", "dot", "ddot", "tilde")

# \left / \right sizing commands reduced to their bare delimiter
AUTO_SIZED_DELIMITERS: Dict[str, str] = {
    r"\left(": "(",
    r"\right)": ")",
    r"\left[": "[",
    r"\right]": "]",
    r"\left\{": r"\{",
    r"\right\}": r"\}",
    r"\left{": "{",
    r"\right}": "}",
    r"\left\|": "‖",
    r"\right\|": "‖",
    r"\left|": "|",
    r"\right|": "|",
    r"\left.": "",
    r"\right.": "",
}


class MatrixKind(Enum):
    """Matrix environments, keyed by the letter before 'matrix'."""

    PLAIN = ""
    PAREN = "p"
    BRACKET = "b"
    BAR = "v"
    DOUBLE_BAR = "V"


# Opening and closing text wrapped around the matrix body
MATRIX_DELIMITERS: Dict[MatrixKind, Tuple[str, str]] = {
    MatrixKind.PLAIN: ("\\matrix(", ")"),
    MatrixKind.PAREN: ("(", ")"),
    MatrixKind.BRACKET: ("[", "]"),
    MatrixKind.BAR: ("|", "|"),
    MatrixKind.DOUBLE_BAR: ("‖", "‖"),
}


def _alternation(names) -> str:
    return "|".join(names)


_MATRIX_LETTERS = _alternation(kind.value for kind in MatrixKind)


@dataclass(frozen=True)
class EquationRegex:
    """
    Regex patterns for the rewrite rules, in pipeline order.

    Heads that take brace arguments stop before the first '{'.
    """

    LINE_BREAK: str = r"\\\\"
    FUNCTION_HEAD: str = r"\\(" + _alternation(FUNCTION_NAMES) + r")\s*(?=\{)"
    FRACTION_HEAD: str = r"\\frac(?=\{)"
    BINOMIAL_HEAD: str = r"\\binom(?=\{)"
    INDEXED_ROOT_HEAD: str = r"\\sqrt\[([^\]]*)\](?=\{)"
    SQUARE_ROOT_HEAD: str = r"\\sqrt(?=\{)"
    ACCENT_HEAD: str = r"\\(" + _alternation(ACCENT_NAMES) + r")(?=\{)"
    # Innermost matrix only: the body may hold other environments but no matrix
    MATRIX_ENV: str = (
        r"\\begin\{(" + _MATRIX_LETTERS + r")matrix\}"
        r"((?:(?!\\begin\{(?:" + _MATRIX_LETTERS + r")matrix\})[\s\S])*?)"
        r"\\end\{\1matrix\}"
    )
    # Script marker attached to an identifier or command (letter or backslash before it)
    SUBSCRIPT_HEAD: str = r"(?<=[a-zA-Z\\])_(?=\{)"
    SUPERSCRIPT_HEAD: str = r"(?<=[a-zA-Z\\])\^(?=\{)"
    SINGLE_CHAR_SCRIPT: str = r"([_^])\(([^()])\)"
    # Brace-argument commands left over after the pipeline
    LEFTOVER_COMMAND: str = r"\\([a-zA-Z]+)\{"
