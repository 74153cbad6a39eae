"""
StringFormatter — текстовые представления канонического значения

Приоритет представлений:
1. RationalValue → сокращённая дробь "n/d" (\\frac{n}{d}),
   либо целое, если сокращённый знаменатель равен 1
2. IntegerValue → цифры целого
3. DecimalValue → позиционная десятичная запись, усечённая до accuracy
   дробных цифр, без хвостовых нулей и без экспоненты
"""

from src.core.domain.canonical import CanonicalNumber, DecimalValue, IntegerValue, RationalValue
from src.core.domain.config import DEFAULT_ACCURACY
from src.core.formatting.builders import HumanStringBuilder, LatexBuilder, LatexToolkit
from src.core.math.numerical_safeguards import format_decimal, format_integer, truncate_decimal
from src.core.math.rational_reducer import EXACT_REDUCE_FALLBACK_LIMIT, exact_reduce


class StringFormatter:
    """Рендер CanonicalNumber в человекочитаемую строку и LaTeX."""

    def __init__(
        self,
        accuracy: int = DEFAULT_ACCURACY,
        exact_reduce_fallback_limit: int = EXACT_REDUCE_FALLBACK_LIMIT,
    ):
        self.accuracy = accuracy
        self.exact_reduce_fallback_limit = exact_reduce_fallback_limit

    def _reduced(self, value: RationalValue) -> tuple[int, int]:
        return exact_reduce(
            value.numerator, value.denominator, self.exact_reduce_fallback_limit
        )

    def _decimal_text(self, value: DecimalValue) -> str:
        return format_decimal(truncate_decimal(value.to_decimal(), self.accuracy))

    def human_text(self, value: CanonicalNumber) -> str:
        """
        Человекочитаемая строка (валидный ввод SmartNumber).

        Examples:
            >>> StringFormatter().human_text(RationalValue(6, 8))
            '3/4'
            >>> StringFormatter().human_text(DecimalValue(25, 1))
            '2.5'
        """
        if isinstance(value, RationalValue):
            numerator, denominator = self._reduced(value)
            if denominator == 1:
                return format_integer(numerator)
            return f"{format_integer(numerator)}/{format_integer(denominator)}"
        if isinstance(value, IntegerValue):
            return format_integer(value.value)
        return self._decimal_text(value)

    def latex_text(self, value: CanonicalNumber) -> str:
        """
        LaTeX фрагмент; отрицательная дробь выносит знак за \\frac.

        Examples:
            >>> StringFormatter().latex_text(RationalValue(-3, 4))
            '-\\\\frac{3}{4}'
        """
        if isinstance(value, RationalValue):
            numerator, denominator = self._reduced(value)
            if denominator == 1:
                return format_integer(numerator)
            sign = "-" if numerator < 0 else ""
            return sign + LatexToolkit.frac(
                format_integer(abs(numerator)), format_integer(denominator)
            )
        if isinstance(value, IntegerValue):
            return format_integer(value.value)
        return self._decimal_text(value)

    def human_string(self, value: CanonicalNumber) -> HumanStringBuilder:
        return HumanStringBuilder(self.human_text(value))

    def latex(self, value: CanonicalNumber) -> LatexBuilder:
        return LatexBuilder(self.latex_text(value))
