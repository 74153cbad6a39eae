"""Formatting — человекочитаемые и LaTeX представления."""

from .builders import (
    Fragment,
    HumanStringBuilder,
    HumanStringToolkit,
    LatexBuilder,
    LatexToolkit,
    MathBuilder,
    TextFragment,
    render_operand,
)
from .formatter import StringFormatter

__all__ = [
    "Fragment",
    "TextFragment",
    "MathBuilder",
    "HumanStringBuilder",
    "LatexBuilder",
    "HumanStringToolkit",
    "LatexToolkit",
    "render_operand",
    "StringFormatter",
]
