"""
Domain models and value objects.

Contains the canonical number representation, fraction view and
configuration model.
"""

from src.core.domain.canonical import (
    CanonicalNumber,
    DecimalValue,
    IntegerValue,
    NumberKind,
    RationalValue,
)
from src.core.domain.config import DEFAULT_ACCURACY, SmartNumberConfig
from src.core.domain.fraction_view import FractionView

__all__ = [
    # Canonical form
    "CanonicalNumber",
    "NumberKind",
    "IntegerValue",
    "DecimalValue",
    "RationalValue",
    # Views
    "FractionView",
    # Config
    "DEFAULT_ACCURACY",
    "SmartNumberConfig",
]
