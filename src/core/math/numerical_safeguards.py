"""
Numerical Safeguards — точные примитивы поверх decimal/fractions

Модуль обеспечивает точность всех операций над каноническими значениями:
- Точные проверки знака и нуля (без epsilon)
- Контекст decimal с достаточной точностью для заданного числа цифр
- Усечение Decimal до заданного числа дробных цифр
- Точное округление Fraction до целого по любому RoundingMode
- Позиционное форматирование Decimal (без экспоненциальной записи)
- Точное построение Decimal и запись целых любой длины
- Валидация параметров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Проверки нуля и знака точные: 0.0000000000001 НЕ ноль
2. Никаких промежуточных float в точных путях
3. Все операции детерминированы и воспроизводимы
4. Ни одно значение не округляется до точности контекста по умолчанию
"""

import decimal
import math
from decimal import Decimal
from fractions import Fraction
from typing import Final, Union

from src.core.math.rounding import RoundingMode

# Точное число, с которым работают проверки
ExactNumber = Union[int, Decimal, Fraction]

# Запас точности decimal-контекста сверх требуемого числа цифр
DECIMAL_GUARD_DIGITS: Final[int] = 8

# Представители дробной части для округления Fraction через decimal:
# результат округления зависит только от floor и от сравнения остатка с 1/2
_BELOW_HALF: Final[Decimal] = Decimal("0.25")
_HALF: Final[Decimal] = Decimal("0.5")
_ABOVE_HALF: Final[Decimal] = Decimal("0.75")


# =============================================================================
# ТОЧНЫЕ ПРОВЕРКИ ЗНАКА
# =============================================================================


def sign(value: ExactNumber) -> int:
    """
    Точный знак значения.

    Returns:
        -1, 0 или +1

    Examples:
        >>> sign(Decimal("-0.5"))
        -1
        >>> sign(Fraction(0, 7))
        0
    """
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


def is_zero(value: ExactNumber) -> bool:
    """
    Точная проверка на ноль.

    Examples:
        >>> is_zero(Decimal("0.0000000000001"))
        False
        >>> is_zero(Decimal("-0.000"))
        True
    """
    return value == 0


def is_positive(value: ExactNumber) -> bool:
    """Точная проверка value > 0."""
    return value > 0


def is_negative(value: ExactNumber) -> bool:
    """Точная проверка value < 0."""
    return value < 0


# =============================================================================
# DECIMAL КОНТЕКСТ
# =============================================================================


def decimal_context(precision: int) -> decimal.Context:
    """
    Изолированный decimal-контекст с заданной точностью.

    Экспонента не ограничена, чтобы большие литералы не давали Overflow.

    Args:
        precision: Число значащих цифр (без учёта guard digits)

    Returns:
        Context для использования в decimal.localcontext()
    """
    return decimal.Context(
        prec=max(precision, 1) + DECIMAL_GUARD_DIGITS,
        rounding=decimal.ROUND_HALF_EVEN,
        Emax=decimal.MAX_EMAX,
        Emin=decimal.MIN_EMIN,
        traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
    )


def digit_count(value: int) -> int:
    """
    Число десятичных цифр |value| (для нуля 1).

    Считается через Decimal.adjusted(), без int → str: преобразование
    длинных целых в строку ограничено интерпретатором.

    Examples:
        >>> digit_count(-12345)
        5
        >>> digit_count(0)
        1
    """
    return Decimal(value).adjusted() + 1


def scaled_decimal(unscaled: int, scale: int) -> Decimal:
    """
    Точное значение unscaled × 10^-scale.

    Decimal строится из кортежа цифр, поэтому результат не округляется
    до точности текущего контекста (в отличие от scaleb).

    Examples:
        >>> scaled_decimal(-25, 1)
        Decimal('-2.5')
        >>> scaled_decimal(12345678901234567890123456789012345, 5)
        Decimal('123456789012345678901234567890.12345')
    """
    sign_bit, digits, exponent = Decimal(unscaled).as_tuple()
    return Decimal((sign_bit, digits, exponent - scale))


def format_integer(value: int) -> str:
    """
    Десятичная запись целого любой длины.

    str(int) поднимает ValueError для целых длиннее
    sys.get_int_max_str_digits(); запись через Decimal этого ограничения
    не имеет.

    Examples:
        >>> format_integer(-42)
        '-42'
    """
    return str(Decimal(value))


def digits_required(value: Decimal, places: int) -> int:
    """
    Число значащих цифр, достаточное для представления value с places
    дробными цифрами.
    """
    integer_digits = max(value.adjusted() + 1, 1) if value else 1
    return integer_digits + max(places, 0)


def truncate_decimal(value: Decimal, places: int) -> Decimal:
    """
    Усечение (ROUND_DOWN) до places дробных цифр.

    Args:
        value: Исходное значение
        places: Число сохраняемых дробных цифр (>= 0)

    Returns:
        Усечённое значение; если цифр меньше places, значение не меняется

    Examples:
        >>> truncate_decimal(Decimal("3.14159"), 2)
        Decimal('3.14')
        >>> truncate_decimal(Decimal("-2.5"), 0)
        Decimal('-2')
        >>> truncate_decimal(Decimal("2.5"), 10)
        Decimal('2.5')
    """
    validate_non_negative_int(places, "places")

    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and -exponent <= places:
        return value

    with decimal.localcontext(decimal_context(digits_required(value, places))):
        return value.quantize(Decimal(1).scaleb(-places), rounding=decimal.ROUND_DOWN)


def strip_trailing_zeros(value: Decimal) -> Decimal:
    """
    Удаление незначащих нулей дробной части без перехода в экспоненту.

    Examples:
        >>> strip_trailing_zeros(Decimal("2.500"))
        Decimal('2.5')
        >>> strip_trailing_zeros(Decimal("1500.0"))
        Decimal('1500')
    """
    sign_bit, digits, exponent = value.as_tuple()
    if not isinstance(exponent, int) or exponent >= 0:
        return value

    digits = list(digits)
    while exponent < 0 and len(digits) > 1 and digits[-1] == 0:
        digits.pop()
        exponent += 1

    if all(d == 0 for d in digits):
        return Decimal(0)

    return Decimal((sign_bit, tuple(digits), exponent))


def format_decimal(value: Decimal) -> str:
    """
    Позиционная запись Decimal без хвостовых нулей.

    Examples:
        >>> format_decimal(Decimal("1E-7"))
        '0.0000001'
        >>> format_decimal(Decimal("-0.0"))
        '0'
    """
    if value == 0:
        return "0"
    return format(strip_trailing_zeros(value), "f")


# =============================================================================
# ТОЧНОЕ ОКРУГЛЕНИЕ
# =============================================================================


def round_decimal_to_integer(value: Decimal, mode: RoundingMode) -> int:
    """Округление Decimal до целого по режиму mode (делегируется в decimal)."""
    with decimal.localcontext(decimal_context(digits_required(value, 0))):
        return int(value.to_integral_value(rounding=mode.value))


def round_fraction_to_integer(value: Fraction, mode: RoundingMode) -> int:
    """
    Точное округление Fraction до целого.

    Остаток от floor сравнивается с 1/2 точно, затем floor плюс
    представитель остатка округляется средствами decimal. Так любой режим
    decimal работает для рациональных значений без потери точности.

    Examples:
        >>> round_fraction_to_integer(Fraction(-23, 10), RoundingMode.FLOOR)
        -3
        >>> round_fraction_to_integer(Fraction(5, 2), RoundingMode.HALF_EVEN)
        2
    """
    floor_part = math.floor(value)
    remainder = value - floor_part

    if remainder == 0:
        return floor_part

    if remainder < Fraction(1, 2):
        representative = _BELOW_HALF
    elif remainder == Fraction(1, 2):
        representative = _HALF
    else:
        representative = _ABOVE_HALF

    precision = digit_count(floor_part) + 2
    with decimal.localcontext(decimal_context(precision)):
        return int(
            (Decimal(floor_part) + representative).to_integral_value(
                rounding=mode.value
            )
        )


def fits_signed_bits(value: int, bits: int) -> bool:
    """Помещается ли value в знаковое целое шириной bits."""
    limit = 1 << (bits - 1)
    return -limit <= value < limit


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_non_negative_int(value: int, name: str) -> None:
    """
    Валидация, что значение — неотрицательное целое.

    Raises:
        ValueError: Если value не int или value < 0
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an integer, got {value!r}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_tolerance(tolerance: float, name: str = "tolerance") -> None:
    """
    Валидация относительной толерантности: 0 < tolerance < 1.

    Raises:
        ValueError: Если tolerance вне (0, 1) или NaN/Inf
    """
    if not math.isfinite(tolerance):
        raise ValueError(f"{name} must be a valid float (not NaN/Inf), got {tolerance}")

    if not 0 < tolerance < 1:
        raise ValueError(f"{name} must be in (0, 1), got {tolerance}")
