"""
RationalReducer — сокращение дробей

Два алгоритма, выбор делает вызывающий код:
- exact_reduce: точное сокращение пары (numerator, denominator) методом
  trial division по таблице простых (для integer/rational источников)
- approximate_reduce: поиск наилучшей рациональной аппроксимации Decimal
  через цепные дроби (для decimal источников)

ПОСТУСЛОВИЯ (оба алгоритма):
1. denominator > 0
2. gcd(|numerator|, denominator) == 1

ФОРМУЛЫ (цепная дробь):
    a_i = floor(b_i)
    h_i = a_i * h_{i-1} + h_{i-2}
    k_i = a_i * k_{i-1} + k_{i-2}
    b_{i+1} = 1 / (b_i - a_i)

    Останов: b_i - a_i <= tolerance
          или |x - h_i/k_i| <= |x| * tolerance
"""

import logging
import math
from decimal import Decimal
from fractions import Fraction
from typing import Final, NamedTuple

from src.core.exceptions import DivisionByZeroError
from src.core.math.numerical_safeguards import (
    format_integer,
    validate_non_negative_int,
    validate_tolerance,
)
from src.core.math.primes import PrimeTable

logger = logging.getLogger(__name__)

# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность аппроксимации по умолчанию
APPROXIMATION_TOLERANCE_DEFAULT: Final[float] = 1e-8

# Потолок итераций цепной дроби
APPROXIMATION_MAX_ITERATIONS: Final[int] = 64

# Ниже этого модуля дробь строится напрямую как unscaled / 10^scale,
# без цепной дроби (не менее трёх ведущих нулей после точки)
SMALL_MAGNITUDE_THRESHOLD: Final[Decimal] = Decimal("0.001")

# Сколько нечётных делителей за пределами таблицы простых пробовать
# до точного завершения через целочисленный gcd
EXACT_REDUCE_FALLBACK_LIMIT: Final[int] = 100_000


# =============================================================================
# RESULT
# =============================================================================


class ApproximationResult(NamedTuple):
    """
    Результат аппроксимации цепной дробью.

    Attributes:
        numerator: Числитель (несёт знак)
        denominator: Знаменатель (> 0)
        error: Достигнутая абсолютная ошибка |x - numerator/denominator|
        converged: False если достигнут потолок итераций
    """

    numerator: int
    denominator: int
    error: Fraction
    converged: bool


# =============================================================================
# EXACT REDUCE
# =============================================================================


def _divide_out(numerator: int, denominator: int, p: int) -> tuple[int, int]:
    """Делит оба операнда на p, пока p делит оба."""
    while numerator % p == 0 and denominator % p == 0:
        numerator //= p
        denominator //= p
    return numerator, denominator


def exact_reduce(
    numerator: int,
    denominator: int,
    fallback_limit: int = EXACT_REDUCE_FALLBACK_LIMIT,
) -> tuple[int, int]:
    """
    Точное сокращение дроби методом trial division.

    Алгоритм:
    1. Знак переносится в числитель, знаменатель становится положительным
    2. Меньший операнд раскладывается trial division по таблице простых
       в порядке возрастания; каждое простое, делящее оба операнда,
       выносится полностью
    3. После таблицы перебираются последовательные нечётные числа
       (не более fallback_limit штук)
    4. Остаток разложения > 1 — простое число, проверяется напрямую
    5. Если лимит перебора исчерпан, оставшийся общий делитель выносится
       точным целочисленным gcd

    Args:
        numerator: Числитель
        denominator: Знаменатель (!= 0)
        fallback_limit: Лимит нечётных делителей после таблицы простых

    Returns:
        (numerator, denominator) в несократимом виде, denominator > 0

    Raises:
        DivisionByZeroError: Если denominator == 0

    Examples:
        >>> exact_reduce(6, 8)
        (3, 4)
        >>> exact_reduce(3, -6)
        (-1, 2)
        >>> exact_reduce(0, 5)
        (0, 1)
    """
    if denominator == 0:
        raise DivisionByZeroError(format_integer(numerator), "0")
    validate_non_negative_int(fallback_limit, "fallback_limit")

    if denominator < 0:
        numerator, denominator = -numerator, -denominator

    if numerator == 0:
        return (0, 1)

    negative = numerator < 0
    numerator = abs(numerator)

    # Точная проверка делимости целых (без float)
    if numerator % denominator == 0:
        return ((-1 if negative else 1) * (numerator // denominator), 1)

    # cofactor: неразложенная часть меньшего операнда
    cofactor = min(numerator, denominator)

    for p in PrimeTable.get():
        if p * p > cofactor:
            break
        if cofactor % p:
            continue
        while cofactor % p == 0:
            cofactor //= p
        numerator, denominator = _divide_out(numerator, denominator, p)
        if numerator == 1 or denominator == 1:
            return ((-1 if negative else 1) * numerator, denominator)
    else:
        candidate = PrimeTable.largest() + 2
        tried = 0
        while candidate * candidate <= cofactor:
            if tried >= fallback_limit:
                logger.debug(
                    "exact_reduce: fallback limit %d reached, completing with exact gcd",
                    fallback_limit,
                )
                common = math.gcd(numerator, denominator)
                numerator //= common
                denominator //= common
                cofactor = 1
                break
            if cofactor % candidate == 0:
                while cofactor % candidate == 0:
                    cofactor //= candidate
                numerator, denominator = _divide_out(numerator, denominator, candidate)
            candidate += 2
            tried += 1

    if cofactor > 1:
        numerator, denominator = _divide_out(numerator, denominator, cofactor)

    return ((-1 if negative else 1) * numerator, denominator)


# =============================================================================
# APPROXIMATE REDUCE
# =============================================================================


def continued_fraction_approximation(
    value: Decimal,
    tolerance: float = APPROXIMATION_TOLERANCE_DEFAULT,
    max_iterations: int = APPROXIMATION_MAX_ITERATIONS,
) -> ApproximationResult:
    """
    Наилучшая рациональная аппроксимация Decimal с отчётом о точности.

    Никогда не поднимает ошибку для конечного value: при достижении потолка
    итераций возвращает лучшую найденную подходящую дробь с
    converged=False и пишет WARNING в лог.

    Args:
        value: Аппроксимируемое значение (конечное)
        tolerance: Относительная толерантность (0 < tolerance < 1)
        max_iterations: Потолок итераций (>= 1)

    Returns:
        ApproximationResult

    Examples:
        >>> continued_fraction_approximation(Decimal("2.5"))[:2]
        (5, 2)
        >>> continued_fraction_approximation(Decimal("-0.75"))[:2]
        (-3, 4)
    """
    validate_tolerance(tolerance)
    if max_iterations < 1:
        raise ValueError(f"max_iterations must be >= 1, got {max_iterations}")

    if value.is_zero():
        return ApproximationResult(0, 1, Fraction(0), True)

    negative = value < 0
    target = abs(Fraction(value))

    # Малые значения: прямое представление unscaled / 10^scale
    if abs(value) < SMALL_MAGNITUDE_THRESHOLD:
        numerator, denominator = exact_reduce(target.numerator, target.denominator)
        return ApproximationResult(
            -numerator if negative else numerator, denominator, Fraction(0), True
        )

    tol = Fraction(tolerance)
    bound = target * tol

    h, h_prev = 1, 0
    k, k_prev = 0, 1
    b = target
    converged = False

    for _ in range(max_iterations):
        a = math.floor(b)
        h, h_prev = a * h + h_prev, h
        k, k_prev = a * k + k_prev, k

        remainder = b - a
        if abs(target - Fraction(h, k)) <= bound or remainder <= tol:
            converged = True
            break
        b = 1 / remainder

    error = abs(target - Fraction(h, k))
    if not converged:
        logger.warning(
            "Continued fraction cap reached after %d iterations for %s: "
            "returning %s/%s with error %s",
            max_iterations,
            value,
            format_integer(h),
            format_integer(k),
            float(error),
        )

    return ApproximationResult(-h if negative else h, k, error, converged)


def approximate_reduce(
    value: Decimal,
    tolerance: float = APPROXIMATION_TOLERANCE_DEFAULT,
    max_iterations: int = APPROXIMATION_MAX_ITERATIONS,
) -> tuple[int, int]:
    """
    Наилучшая рациональная аппроксимация Decimal как пара (n, d).

    Обёртка над continued_fraction_approximation без отчёта о точности.

    Examples:
        >>> approximate_reduce(Decimal("0.333333333333"))
        (1, 3)
        >>> approximate_reduce(Decimal("0"))
        (0, 1)
    """
    result = continued_fraction_approximation(value, tolerance, max_iterations)
    return (result.numerator, result.denominator)
