"""
CanonicalNumber — каноническая форма разобранного числа

Tagged union из трёх неизменяемых вариантов:
- IntegerValue(value)                     — целое произвольной длины
- DecimalValue(unscaled, scale)           — value = unscaled × 10^-scale
- RationalValue(numerator, denominator)   — denominator > 0

RationalValue может быть несокращённой ("6/8" остаётся 6/8): сокращение —
свойство конкретного представления, а не хранимого значения.

Текстовые формы (str/repr) строятся через Decimal и не упираются в лимит
длины при преобразовании int → str.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Union

from src.core.exceptions import DivisionByZeroError
from src.core.math.numerical_safeguards import format_integer, scaled_decimal, strip_trailing_zeros


class NumberKind(str, Enum):
    """Тег варианта канонической формы."""

    INTEGER = "integer"
    DECIMAL = "decimal"
    RATIONAL = "rational"


# =============================================================================
# ВАРИАНТЫ
# =============================================================================


@dataclass(frozen=True)
class IntegerValue:
    """Целое произвольной длины."""

    value: int

    @property
    def kind(self) -> NumberKind:
        return NumberKind.INTEGER

    def to_fraction(self) -> Fraction:
        return Fraction(self.value)

    def to_decimal(self) -> Decimal:
        return Decimal(self.value)

    def __str__(self) -> str:
        return format_integer(self.value)

    def __repr__(self) -> str:
        return f"IntegerValue(value={format_integer(self.value)})"


@dataclass(frozen=True)
class DecimalValue:
    """
    Десятичное число unscaled × 10^-scale.

    Attributes:
        unscaled: Все цифры числа как целое (несёт знак)
        scale: Число цифр после десятичной точки (>= 0)
    """

    unscaled: int
    scale: int

    def __post_init__(self) -> None:
        if self.scale < 0:
            raise ValueError(f"scale must be non-negative, got {self.scale}")

    @classmethod
    def from_decimal(cls, value: Decimal) -> "DecimalValue":
        """
        Построение из конечного Decimal (хвостовые нули отбрасываются).

        Examples:
            >>> DecimalValue.from_decimal(Decimal("-2.50"))
            DecimalValue(unscaled=-25, scale=1)
        """
        sign_bit, digits, exponent = strip_trailing_zeros(value).as_tuple()
        if exponent >= 0:
            return cls(int(Decimal((sign_bit, digits, exponent))), 0)
        return cls(int(Decimal((sign_bit, digits, 0))), -exponent)

    @property
    def kind(self) -> NumberKind:
        return NumberKind.DECIMAL

    def to_fraction(self) -> Fraction:
        return Fraction(self.unscaled, 10**self.scale)

    def to_decimal(self) -> Decimal:
        return scaled_decimal(self.unscaled, self.scale)

    def __str__(self) -> str:
        digits = format_integer(abs(self.unscaled)).rjust(self.scale + 1, "0")
        sign = "-" if self.unscaled < 0 else ""
        if self.scale == 0:
            return f"{sign}{digits}"
        return f"{sign}{digits[:-self.scale]}.{digits[-self.scale:]}"

    def __repr__(self) -> str:
        return f"DecimalValue(unscaled={format_integer(self.unscaled)}, scale={self.scale})"


@dataclass(frozen=True)
class RationalValue:
    """
    Дробь numerator / denominator, не обязательно сокращённая.

    Инвариант: denominator > 0 (знак всегда в числителе).
    """

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.denominator == 0:
            raise DivisionByZeroError(format_integer(self.numerator), "0")
        if self.denominator < 0:
            raise ValueError(
                f"denominator must be positive, got {self.denominator} "
                f"(use RationalValue.of() to normalize the sign)"
            )

    @classmethod
    def of(cls, numerator: int, denominator: int) -> "RationalValue":
        """
        Построение с переносом знака в числитель (без сокращения).

        Raises:
            DivisionByZeroError: Если denominator == 0

        Examples:
            >>> RationalValue.of(3, -6)
            RationalValue(numerator=-3, denominator=6)
        """
        if denominator == 0:
            raise DivisionByZeroError(format_integer(numerator), "0")
        if denominator < 0:
            numerator, denominator = -numerator, -denominator
        return cls(numerator, denominator)

    @property
    def kind(self) -> NumberKind:
        return NumberKind.RATIONAL

    @property
    def is_simplified(self) -> bool:
        """gcd(|numerator|, denominator) == 1."""
        return Fraction(self.numerator, self.denominator).denominator == self.denominator

    def to_fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    def __str__(self) -> str:
        return f"{format_integer(self.numerator)}/{format_integer(self.denominator)}"

    def __repr__(self) -> str:
        return (
            f"RationalValue(numerator={format_integer(self.numerator)}, "
            f"denominator={format_integer(self.denominator)})"
        )


CanonicalNumber = Union[IntegerValue, DecimalValue, RationalValue]
