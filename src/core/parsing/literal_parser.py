"""
LiteralParser — классификация нормализованного текста и построение
канонического значения

Классификаторы с фиксированным порядком (первый совпавший побеждает):
- 1: Direct literal      — целое или десятичное ("-12", "3.25", ".5")
- 2: Scientific notation — mantissa (e|E) exponent ("1.5e3", "2E-0.5")
- 3: Explicit fraction   — x / y ("6/8", "1.5 / -2")
- 4: Residual sign run   — "---6" при вызове без InputNormalizer

ПРИОРИТЕТ:
Грамматики пересекаются лишь внешне ("1.5e3" похоже на усечённый десятичный
литерал), поэтому каждый классификатор требует совпадения всей строки, а
порядок фиксирован. Частичные совпадения не принимаются.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Explicit fraction не проходит через десятичное промежуточное значение
2. Нулевой знаменатель (включая "0.000") → DivisionByZeroError
3. Любой текст вне грамматик → InvalidInputError с этим текстом
"""

import decimal
import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Final

from src.core.domain.canonical import (
    CanonicalNumber,
    DecimalValue,
    IntegerValue,
    RationalValue,
)
from src.core.domain.config import DEFAULT_ACCURACY
from src.core.exceptions import DivisionByZeroError, InvalidInputError
from src.core.math.numerical_safeguards import (
    decimal_context,
    truncate_decimal,
    validate_non_negative_int,
)
from src.core.parsing.normalizer import collapse_signs

logger = logging.getLogger(__name__)

# =============================================================================
# ГРАММАТИКА
# =============================================================================

# Десятичный литерал: необязательный знак, цифры, не более одной точки
_DECIMAL_LITERAL: Final[str] = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"

_DIRECT_RE = re.compile(rf"^{_DECIMAL_LITERAL}$")
_SCIENTIFIC_RE = re.compile(
    rf"^(?P<mantissa>{_DECIMAL_LITERAL})[eE](?P<exponent>{_DECIMAL_LITERAL})$"
)
_FRACTION_RE = re.compile(rf"^(?P<x>{_DECIMAL_LITERAL})\s*/\s*(?P<y>{_DECIMAL_LITERAL})$")
_SIGN_RUN_RE = re.compile(r"^(?P<signs>[+-]{2,})(?P<rest>\d.*)$", re.DOTALL)

# Максимальный положительный показатель научной записи (число цифр результата)
MAX_SCIENTIFIC_EXPONENT: Final[int] = 1_000_000


class LiteralKind(str, Enum):
    """Классификатор, принявший литерал."""

    DIRECT = "direct"
    SCIENTIFIC = "scientific"
    FRACTION = "fraction"


@dataclass(frozen=True)
class ParseResult:
    """Результат разбора."""

    value: CanonicalNumber
    literal_kind: LiteralKind
    text: str


# =============================================================================
# ПРЕОБРАЗОВАНИЯ
# =============================================================================


def from_decimal(value: Decimal) -> CanonicalNumber:
    """
    Каноническая форма конечного Decimal: IntegerValue если дробной части
    нет, иначе DecimalValue.

    Examples:
        >>> from_decimal(Decimal("1500.0"))
        IntegerValue(value=1500)
        >>> from_decimal(Decimal("0.25"))
        DecimalValue(unscaled=25, scale=2)
    """
    decimal_value = DecimalValue.from_decimal(value)
    if decimal_value.scale == 0:
        return IntegerValue(decimal_value.unscaled)
    return decimal_value


# =============================================================================
# КЛАССИФИКАТОРЫ
# =============================================================================


class DirectLiteralClassifier:
    """1: Целое или десятичное — делегируется конструктору Decimal."""

    kind = LiteralKind.DIRECT

    def parse(self, text: str, accuracy: int) -> CanonicalNumber | None:
        if _DIRECT_RE.match(text) is None:
            return None
        try:
            value = Decimal(text)
        except decimal.InvalidOperation:
            return None
        return from_decimal(value)


class ScientificClassifier:
    """
    2: mantissa × 10^exponent.

    Целый показатель применяется точно (scaleb), дробный вычисляется
    Decimal.__pow__ с точностью accuracy + целые цифры результата.
    Результат усекается до accuracy дробных цифр.
    """

    kind = LiteralKind.SCIENTIFIC

    def parse(self, text: str, accuracy: int) -> CanonicalNumber | None:
        match = _SCIENTIFIC_RE.match(text)
        if match is None:
            return None

        mantissa = Decimal(match["mantissa"])
        exponent = Decimal(match["exponent"])

        if exponent > MAX_SCIENTIFIC_EXPONENT:
            raise InvalidInputError(text)

        integer_digits = max(int(exponent) + mantissa.adjusted() + 1, 1)
        precision = integer_digits + accuracy + len(mantissa.as_tuple().digits)

        try:
            with decimal.localcontext(decimal_context(precision)):
                if exponent == exponent.to_integral_value():
                    result = mantissa.scaleb(int(exponent))
                else:
                    result = mantissa * (Decimal(10) ** exponent)
        except decimal.DecimalException:
            raise InvalidInputError(text) from None

        return from_decimal(truncate_decimal(result, accuracy))


class FractionClassifier:
    """
    3: x / y без десятичного промежуточного значения.

    Обе части приводятся к общему масштабу 10^s, поэтому несокращённое
    представление целочисленное: "1.5/2" → 15/20.
    """

    kind = LiteralKind.FRACTION

    def parse(self, text: str, accuracy: int) -> CanonicalNumber | None:
        match = _FRACTION_RE.match(text)
        if match is None:
            return None

        x = DecimalValue.from_decimal(Decimal(match["x"]))
        y = DecimalValue.from_decimal(Decimal(match["y"]))

        if y.unscaled == 0:
            raise DivisionByZeroError(match["x"], match["y"])

        scale = max(x.scale, y.scale)
        numerator = x.unscaled * 10 ** (scale - x.scale)
        denominator = y.unscaled * 10 ** (scale - y.scale)

        return RationalValue.of(numerator, denominator)


# =============================================================================
# PARSER
# =============================================================================


class LiteralParser:
    """
    Упорядоченный список классификаторов.

    Порядок проверок:
    1. DirectLiteralClassifier
    2. ScientificClassifier
    3. FractionClassifier
    4. Residual sign run → рекурсия на схлопнутом тексте
    5. InvalidInputError
    """

    def __init__(self, accuracy: int = DEFAULT_ACCURACY):
        """
        Args:
            accuracy: Число дробных цифр для научной записи
        """
        validate_non_negative_int(accuracy, "accuracy")
        self.accuracy = accuracy
        self.classifiers = (
            DirectLiteralClassifier(),
            ScientificClassifier(),
            FractionClassifier(),
        )

    def parse(self, text: str) -> ParseResult:
        """
        Разбор нормализованного текста.

        Args:
            text: Текст после InputNormalizer

        Returns:
            ParseResult с каноническим значением

        Raises:
            InvalidInputError: Текст вне поддерживаемых грамматик
            DivisionByZeroError: Нулевой знаменатель явной дроби
        """
        for classifier in self.classifiers:
            value = classifier.parse(text, self.accuracy)
            if value is not None:
                logger.debug(
                    "Literal %r accepted as %s (%s)",
                    text,
                    classifier.kind.value,
                    value.kind.value,
                )
                return ParseResult(value=value, literal_kind=classifier.kind, text=text)

        match = _SIGN_RUN_RE.match(text)
        if match is not None:
            return self.parse(collapse_signs(match["signs"]) + match["rest"])

        raise InvalidInputError(text)


def parse(text: str, accuracy: int = DEFAULT_ACCURACY) -> CanonicalNumber:
    """
    Shortcut: каноническое значение нормализованного текста.

    Examples:
        >>> parse("6/8")
        RationalValue(numerator=6, denominator=8)
        >>> parse("1.5e3")
        IntegerValue(value=1500)
    """
    return LiteralParser(accuracy).parse(text).value
