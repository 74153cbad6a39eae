"""
FractionView — индексируемое представление дроби [numerator, denominator]
"""

from fractions import Fraction
from typing import NamedTuple

from src.core.math.numerical_safeguards import format_integer


class FractionView(NamedTuple):
    """
    Пара (numerator, denominator) с доступом по индексу.

    Examples:
        >>> view = FractionView(5, 2)
        >>> view[0], view[1]
        (5, 2)
        >>> str(view)
        '5/2'
    """

    numerator: int
    denominator: int

    @property
    def is_whole(self) -> bool:
        """Знаменатель равен 1."""
        return self.denominator == 1

    def to_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{format_integer(self.numerator)}/{format_integer(self.denominator)}"
