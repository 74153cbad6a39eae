"""
SmartNumber — фасад над разбором числа и его производными представлениями

Хранит:
- исходный ввод пользователя (input)
- каноническое значение (value) после InputNormalizer → LiteralParser
- DerivedViewCache — лениво вычисляемые и запоминаемые представления

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Конструирование all-or-nothing: либо полностью валидный экземпляр,
   либо исключение парсера
2. Экземпляр неизменяем после конструирования
3. Каждое поле кэша вычисляется не более одного раза (per-instance lock),
   повторные вызовы возвращают тот же объект
4. Проверки нуля и знака точные (без epsilon)
"""

import decimal
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from src.core.domain.canonical import (
    CanonicalNumber,
    DecimalValue,
    IntegerValue,
    NumberKind,
    RationalValue,
)
from src.core.domain.config import SmartNumberConfig
from src.core.domain.fraction_view import FractionView
from src.core.exceptions import PrecisionOverflowError
from src.core.formatting.builders import HumanStringBuilder, LatexBuilder
from src.core.formatting.formatter import StringFormatter
from src.core.math.numerical_safeguards import (
    decimal_context,
    fits_signed_bits,
    format_decimal,
    format_integer,
    is_negative,
    is_positive,
    is_zero,
    round_decimal_to_integer,
    round_fraction_to_integer,
    scaled_decimal,
    sign,
    strip_trailing_zeros,
    truncate_decimal,
)
from src.core.math.rational_reducer import approximate_reduce, exact_reduce
from src.core.math.rounding import RoundingMode
from src.core.parsing.literal_parser import LiteralKind, LiteralParser
from src.core.parsing.normalizer import normalize

# Ширина native int по умолчанию
NATIVE_INT_BITS = 64


@dataclass
class DerivedViewCache:
    """Запомненные производные представления (None — ещё не вычислено)."""

    integer_floor: int | None = None
    integral: bool | None = None
    float_value: float | None = None
    decimal_value: Decimal | None = None
    fraction: FractionView | None = None
    fraction_simplified: FractionView | None = None
    rational: RationalValue | None = None
    rational_simplified: RationalValue | None = None
    human_string: HumanStringBuilder | None = None
    latex: LatexBuilder | None = None


class SmartNumber:
    """
    Число, разобранное из произвольной текстовой записи.

    Поддерживаемые форматы: 123456789, 12345.6789, 1.5e3, 5/8, "---6",
    "1 000 000", "2.500".

    Examples:
        >>> number = SmartNumber(None, "6/8")
        >>> number.as_fraction()
        FractionView(numerator=6, denominator=8)
        >>> number.as_fraction(simplify=True)
        FractionView(numerator=3, denominator=4)
        >>> str(SmartNumber(None, "2.500"))
        '2.5'
    """

    def __init__(
        self,
        accuracy: int | None,
        number: str,
        config: SmartNumberConfig | None = None,
    ):
        """
        Разбор ввода в каноническое значение.

        Args:
            accuracy: Число дробных цифр (None — из config или 100)
            number: Текстовая запись числа
            config: Дополнительные параметры (опционально)

        Raises:
            pydantic.ValidationError: Невалидная accuracy/config
            InvalidInputError: Текст вне поддерживаемых грамматик
            DivisionByZeroError: Нулевой знаменатель явной дроби
        """
        if config is None:
            config = SmartNumberConfig() if accuracy is None else SmartNumberConfig(accuracy=accuracy)
        elif accuracy is not None:
            config = SmartNumberConfig(**{**config.model_dump(), "accuracy": accuracy})

        normalized = normalize(number)
        result = LiteralParser(config.accuracy).parse(normalized)

        self._config = config
        self._input = number
        self._normalized = result.text
        self._value: CanonicalNumber = result.value
        self._literal_kind = result.literal_kind
        self._formatter = StringFormatter(config.accuracy, config.exact_reduce_fallback_limit)
        self._cache = DerivedViewCache()
        self._lock = threading.RLock()

    # =========================================================================
    # БАЗОВЫЕ СВОЙСТВА
    # =========================================================================

    @property
    def input(self) -> str:
        """Исходный ввод пользователя."""
        return self._input

    @property
    def normalized_input(self) -> str:
        """Текст, принятый LiteralParser."""
        return self._normalized

    @property
    def accuracy(self) -> int:
        return self._config.accuracy

    @property
    def config(self) -> SmartNumberConfig:
        return self._config

    @property
    def value(self) -> CanonicalNumber:
        """Каноническое значение."""
        return self._value

    @property
    def kind(self) -> NumberKind:
        return self._value.kind

    @property
    def literal_kind(self) -> LiteralKind:
        return self._literal_kind

    # =========================================================================
    # ЦЕЛЫЕ
    # =========================================================================

    def as_integer(self, rounding: RoundingMode = RoundingMode.FLOOR) -> int:
        """
        Округление значения до целого (по умолчанию FLOOR).

        Запоминается только результат FLOOR; остальные режимы вычисляются
        при каждом вызове.

        Examples:
            >>> SmartNumber(None, "-2.5").as_integer()
            -3
            >>> SmartNumber(None, "-2.5").as_integer(RoundingMode.HALF_UP)
            -3
            >>> SmartNumber(None, "7/2").as_integer(RoundingMode.DOWN)
            3
        """
        value = self._value
        if isinstance(value, IntegerValue):
            return value.value
        if rounding != RoundingMode.FLOOR:
            return self._round_to_integer(rounding)

        cached = self._cache.integer_floor
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.integer_floor is None:
                self._cache.integer_floor = self._round_to_integer(RoundingMode.FLOOR)
            return self._cache.integer_floor

    def _round_to_integer(self, rounding: RoundingMode) -> int:
        value = self._value
        if isinstance(value, DecimalValue):
            return round_decimal_to_integer(value.to_decimal(), rounding)
        return round_fraction_to_integer(value.to_fraction(), rounding)

    def as_native_int(
        self,
        rounding: RoundingMode = RoundingMode.FLOOR,
        bits: int = NATIVE_INT_BITS,
    ) -> int:
        """
        Целое, гарантированно помещающееся в знаковый тип шириной bits.

        Raises:
            PrecisionOverflowError: Если округлённое значение не помещается
        """
        integer = self.as_integer(rounding)
        if not fits_signed_bits(integer, bits):
            raise PrecisionOverflowError(integer, bits)
        return integer

    def as_absolute_integer(
        self,
        rounding: RoundingMode = RoundingMode.FLOOR,
        bits: int = NATIVE_INT_BITS,
    ) -> int:
        """
        Модуль округлённого целого в пределах знакового типа шириной bits.

        Raises:
            PrecisionOverflowError: Если модуль не помещается
        """
        integer = abs(self.as_integer(rounding))
        if not fits_signed_bits(integer, bits):
            raise PrecisionOverflowError(integer, bits)
        return integer

    # =========================================================================
    # ДЕСЯТИЧНЫЕ
    # =========================================================================

    def as_float(self) -> float:
        """
        ВНИМАНИЕ: float — только приближение. Для точных вычислений
        используйте as_decimal() или as_rational().

        Raises:
            OverflowError: Если значение не представимо во float
        """
        cached = self._cache.float_value
        if cached is not None:
            return cached

        with self._lock:
            if self._cache.float_value is None:
                self._cache.float_value = float(self._value.to_fraction())
            return self._cache.float_value

    def _compute_decimal(self) -> Decimal:
        value = self._value
        accuracy = self.accuracy

        if isinstance(value, IntegerValue):
            return Decimal(value.value)
        if isinstance(value, DecimalValue):
            return strip_trailing_zeros(truncate_decimal(value.to_decimal(), accuracy))

        # Рациональное: n × 10^accuracy // d с усечением к нулю
        quotient = abs(value.numerator) * 10**accuracy // value.denominator
        if value.numerator < 0:
            quotient = -quotient
        return strip_trailing_zeros(scaled_decimal(quotient, accuracy))

    def as_decimal(self) -> Decimal:
        """
        Десятичное разложение, усечённое до accuracy дробных цифр.

        Examples:
            >>> SmartNumber(5, "1/3").as_decimal()
            Decimal('0.33333')
            >>> SmartNumber(None, "1/4").as_decimal()
            Decimal('0.25')
        """
        cached = self._cache.decimal_value
        if cached is not None:
            return cached

        with self._lock:
            if self._cache.decimal_value is None:
                self._cache.decimal_value = self._compute_decimal()
            return self._cache.decimal_value

    # =========================================================================
    # ДРОБИ
    # =========================================================================

    def _resolve_simplify(self, simplify: bool | None) -> bool:
        """None: явную дробь не сокращать, всё остальное сокращать."""
        if simplify is None:
            return self._value.kind != NumberKind.RATIONAL
        return simplify

    def _compute_rational(self) -> RationalValue:
        value = self._value
        if isinstance(value, RationalValue):
            return value
        if isinstance(value, IntegerValue):
            return RationalValue(value.value, 1)
        return RationalValue(value.unscaled, 10**value.scale)

    def _compute_rational_simplified(self) -> RationalValue:
        value = self._value
        config = self._config

        if isinstance(value, IntegerValue):
            return RationalValue(value.value, 1)
        if isinstance(value, RationalValue):
            numerator, denominator = exact_reduce(
                value.numerator, value.denominator, config.exact_reduce_fallback_limit
            )
        else:
            numerator, denominator = approximate_reduce(
                value.to_decimal(),
                config.approximation_tolerance,
                config.max_approximation_iterations,
            )
        return RationalValue(numerator, denominator)

    def as_rational(self, simplify: bool | None = None) -> RationalValue:
        """
        Рациональное представление.

        Args:
            simplify: True — сократить; False — как есть; None — не сокращать
                явную дробь из ввода, остальное сократить

        Decimal сокращается аппроксимацией цепной дробью, integer/rational —
        точно.
        """
        if self._resolve_simplify(simplify):
            cached = self._cache.rational_simplified
            if cached is not None:
                return cached
            with self._lock:
                if self._cache.rational_simplified is None:
                    self._cache.rational_simplified = self._compute_rational_simplified()
                return self._cache.rational_simplified

        cached = self._cache.rational
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.rational is None:
                self._cache.rational = self._compute_rational()
            return self._cache.rational

    def as_fraction(self, simplify: bool | None = None) -> FractionView:
        """
        Дробь как индексируемая пара [numerator, denominator].

        Например "2.5" → (5, 2). Семантика simplify как в as_rational().
        """
        if self._resolve_simplify(simplify):
            cached = self._cache.fraction_simplified
            if cached is not None:
                return cached
            with self._lock:
                if self._cache.fraction_simplified is None:
                    rational = self.as_rational(True)
                    self._cache.fraction_simplified = FractionView(
                        rational.numerator, rational.denominator
                    )
                return self._cache.fraction_simplified

        cached = self._cache.fraction
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.fraction is None:
                rational = self.as_rational(False)
                self._cache.fraction = FractionView(rational.numerator, rational.denominator)
            return self._cache.fraction

    # =========================================================================
    # ПРОВЕРКИ
    # =========================================================================

    def is_integer(self) -> bool:
        """
        Значение представимо без дробной части.

        Для Decimal выполняется округление до целого с ловушкой Inexact:
        если отброшен ненулевой остаток — это не целое.
        Результат запоминается.
        """
        cached = self._cache.integral
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.integral is None:
                self._cache.integral = self._compute_integral()
            return self._cache.integral

    def _compute_integral(self) -> bool:
        value = self._value
        if isinstance(value, IntegerValue):
            return True
        if isinstance(value, RationalValue):
            return value.numerator % value.denominator == 0

        exact = value.to_decimal()
        context = decimal_context(len(exact.as_tuple().digits))
        context.traps[decimal.Inexact] = True
        try:
            exact.to_integral_exact(context=context)
        except decimal.Inexact:
            return False
        return True

    def is_float(self) -> bool:
        return not self.is_integer()

    def is_zero(self) -> bool:
        """Точная проверка: "0.0000000000001" не ноль."""
        return is_zero(self._value.to_fraction())

    def is_positive(self) -> bool:
        return is_positive(self._value.to_fraction())

    def is_negative(self) -> bool:
        return is_negative(self._value.to_fraction())

    # =========================================================================
    # СТРОКИ
    # =========================================================================

    def to_human_string(self) -> HumanStringBuilder:
        """Человекочитаемое представление (валидный ввод SmartNumber)."""
        cached = self._cache.human_string
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.human_string is None:
                self._cache.human_string = self._formatter.human_string(self._value)
            return self._cache.human_string

    def to_latex(self) -> LatexBuilder:
        """Представление в LaTeX; дробь предпочтительнее десятичной записи."""
        cached = self._cache.latex
        if cached is not None:
            return cached
        with self._lock:
            if self._cache.latex is None:
                self._cache.latex = self._formatter.latex(self._value)
            return self._cache.latex

    def to_string(self) -> str:
        return str(self)

    def to_snapshot(self) -> dict[str, Any]:
        """
        Снимок всех представлений; целые передаются строками, чтобы не
        терять точность в JSON.
        """
        fraction = self.as_fraction(False)
        fraction_simplified = self.as_fraction(True)
        return {
            "input": self._input,
            "normalized_input": self._normalized,
            "kind": self.kind.value,
            "literal_kind": self._literal_kind.value,
            "accuracy": self.accuracy,
            "integer": format_integer(self.as_integer()),
            "decimal": format_decimal(self.as_decimal()),
            "fraction": [
                format_integer(fraction.numerator),
                format_integer(fraction.denominator),
            ],
            "fraction_simplified": [
                format_integer(fraction_simplified.numerator),
                format_integer(fraction_simplified.denominator),
            ],
            "human_string": self.to_human_string().render(),
            "latex": self.to_latex().render(),
            "is_integer": self.is_integer(),
            "sign": sign(self._value.to_fraction()),
        }

    def __str__(self) -> str:
        return self.to_human_string().render()

    def __repr__(self) -> str:
        return f"SmartNumber({self._input!r}, value={self._value!r})"
