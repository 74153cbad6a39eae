"""SmartNumber — фасад разбора чисел из произвольной текстовой записи.

Поток данных:
    raw text → normalize → LiteralParser → CanonicalNumber
             → производные представления (кэшируются)
"""

from src.core.domain import FractionView, SmartNumberConfig
from src.core.exceptions import (
    DivisionByZeroError,
    InvalidInputError,
    NumberError,
    PrecisionOverflowError,
)
from src.core.math.rounding import RoundingMode

from .smart_number import DerivedViewCache, SmartNumber

__all__ = [
    "SmartNumber",
    "DerivedViewCache",
    "SmartNumberConfig",
    "FractionView",
    "RoundingMode",
    "NumberError",
    "InvalidInputError",
    "DivisionByZeroError",
    "PrecisionOverflowError",
]
