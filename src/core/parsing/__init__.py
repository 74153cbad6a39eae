"""Parsing — нормализация ввода и классификация литералов.

Порядок:
- InputNormalizer: пробелы между цифрами, хвостовые нули, серии знаков
- LiteralParser: direct → scientific → fraction → residual sign run
"""

from .literal_parser import (
    DirectLiteralClassifier,
    FractionClassifier,
    LiteralKind,
    LiteralParser,
    ParseResult,
    ScientificClassifier,
    from_decimal,
    parse,
)
from .normalizer import collapse_signs, normalize, strip_fraction_zeros

__all__ = [
    "normalize",
    "collapse_signs",
    "strip_fraction_zeros",
    "LiteralParser",
    "LiteralKind",
    "ParseResult",
    "DirectLiteralClassifier",
    "ScientificClassifier",
    "FractionClassifier",
    "from_decimal",
    "parse",
]
