"""
Тесты для модуля RationalReducer

Проверяет:
1. exact_reduce: знак, несократимость, точное равенство, идемпотентность
2. exact_reduce: делители за пределами таблицы простых и fallback
3. approximate_reduce: цепная дробь, малые значения, ноль
4. Потолок итераций: лучшая подходящая дробь + WARNING
"""

import logging
import math
from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.exceptions import DivisionByZeroError
from src.core.math.rational_reducer import (
    APPROXIMATION_TOLERANCE_DEFAULT,
    ApproximationResult,
    approximate_reduce,
    continued_fraction_approximation,
    exact_reduce,
)

# Простые числа больше наибольшего простого в таблице (9973)
P1 = 10007
P2 = 10009
P3 = 10037

EXACT_CASES = [
    (6, 8),
    (3, -6),
    (-6, -8),
    (10, 5),
    (2, 8),
    (7, 1),
    (1, 7),
    (-1, 1),
    (360, 84),
    (2**40 * 3, 2**35 * 9),
    (97 * 89 * 4, 89 * 6),
    (3 * P1, 5 * P1),
    (P1 * P2, P1 * P3),
    (-(P1 * P2 * 12), P1 * P2 * 18),
    (123456789012345678901234567890, 987654321098765432109876543210),
]


# =============================================================================
# EXACT REDUCE
# =============================================================================


class TestExactReduce:
    """Тесты для exact_reduce"""

    def test_simple_fraction(self) -> None:
        assert exact_reduce(6, 8) == (3, 4)

    def test_sign_moves_to_numerator(self) -> None:
        """Знаменатель всегда положительный"""
        assert exact_reduce(3, -6) == (-1, 2)
        assert exact_reduce(-3, 6) == (-1, 2)
        assert exact_reduce(-6, -8) == (3, 4)

    def test_zero_numerator(self) -> None:
        assert exact_reduce(0, 5) == (0, 1)
        assert exact_reduce(0, -5) == (0, 1)

    def test_whole_result(self) -> None:
        assert exact_reduce(10, 5) == (2, 1)
        assert exact_reduce(-12, 4) == (-3, 1)

    def test_already_reduced(self) -> None:
        assert exact_reduce(3, 4) == (3, 4)
        assert exact_reduce(1, 7) == (1, 7)

    def test_zero_denominator_raises(self) -> None:
        with pytest.raises(DivisionByZeroError, match="by zero"):
            exact_reduce(5, 0)

    def test_negative_fallback_limit_raises(self) -> None:
        with pytest.raises(ValueError, match="fallback_limit must be non-negative"):
            exact_reduce(6, 8, fallback_limit=-1)

    @pytest.mark.parametrize("numerator,denominator", EXACT_CASES)
    def test_invariants(self, numerator: int, denominator: int) -> None:
        """denominator > 0, gcd == 1, значение не меняется"""
        n, d = exact_reduce(numerator, denominator)

        assert d > 0
        assert math.gcd(abs(n), d) == 1
        assert Fraction(n, d) == Fraction(numerator, denominator)

    @pytest.mark.parametrize("numerator,denominator", EXACT_CASES)
    def test_idempotent(self, numerator: int, denominator: int) -> None:
        once = exact_reduce(numerator, denominator)
        assert exact_reduce(*once) == once

    def test_common_prime_beyond_table(self) -> None:
        """Общий простой делитель больше таблицы"""
        assert exact_reduce(3 * P1, 5 * P1) == (3, 5)

    def test_odd_trial_fallback(self) -> None:
        """Таблица исчерпана — перебор нечётных за её пределами"""
        assert exact_reduce(P1 * P2, P1 * P3) == (P2, P3)

    @pytest.mark.parametrize("limit", [0, 1, 10])
    def test_fallback_limit_completes_exactly(self, limit: int) -> None:
        """После исчерпания лимита общий делитель выносится точно"""
        n, d = exact_reduce(P1 * P2 * 2, P1 * P3 * 4, fallback_limit=limit)

        assert (n, d) == (P2, 2 * P3)
        assert math.gcd(n, d) == 1


# =============================================================================
# APPROXIMATE REDUCE
# =============================================================================


class TestApproximateReduce:
    """Тесты для approximate_reduce"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2.5", (5, 2)),
            ("-0.75", (-3, 4)),
            ("0.1", (1, 10)),
            ("0.333333333333", (1, 3)),
            ("-1.5", (-3, 2)),
            ("42", (42, 1)),
            ("0.125", (1, 8)),
        ],
    )
    def test_known_values(self, value: str, expected: tuple[int, int]) -> None:
        assert approximate_reduce(Decimal(value)) == expected

    def test_zero(self) -> None:
        assert approximate_reduce(Decimal("0")) == (0, 1)
        assert approximate_reduce(Decimal("-0.000")) == (0, 1)

    def test_small_magnitude_is_exact(self) -> None:
        """Три и более ведущих нуля — прямое представление num / 10^k"""
        assert approximate_reduce(Decimal("0.0001")) == (1, 10000)
        assert approximate_reduce(Decimal("-0.000125")) == (-1, 8000)
        assert approximate_reduce(Decimal("0.000123")) == (123, 1000000)

    @pytest.mark.parametrize(
        "value",
        ["3.14159", "2.718281828459045", "1234.5678", "-0.8660254", "0.0123456789", "99999.99999"],
    )
    def test_tolerance_invariant(self, value: str) -> None:
        """|x - n/d| <= |x| * tol, denominator > 0, gcd == 1"""
        x = Fraction(Decimal(value))
        result = continued_fraction_approximation(Decimal(value))

        assert result.converged
        assert result.denominator > 0
        assert math.gcd(abs(result.numerator), result.denominator) == 1
        assert abs(x - Fraction(result.numerator, result.denominator)) <= abs(x) * Fraction(
            APPROXIMATION_TOLERANCE_DEFAULT
        )

    def test_sign_applied_to_numerator(self) -> None:
        n, d = approximate_reduce(Decimal("-2.5"))
        assert n == -5
        assert d == 2

    def test_invalid_tolerance_raises(self) -> None:
        with pytest.raises(ValueError, match="tolerance must be in"):
            approximate_reduce(Decimal("1.5"), tolerance=0.0)

        with pytest.raises(ValueError, match="tolerance must be in"):
            approximate_reduce(Decimal("1.5"), tolerance=1.5)

    def test_invalid_iterations_raises(self) -> None:
        with pytest.raises(ValueError, match="max_iterations"):
            approximate_reduce(Decimal("1.5"), max_iterations=0)


class TestContinuedFractionCap:
    """Тесты для потолка итераций"""

    def test_cap_returns_best_convergent(self, caplog) -> None:
        """Потолок достигнут — лучшая найденная дробь, converged=False"""
        with caplog.at_level(logging.WARNING):
            result = continued_fraction_approximation(
                Decimal("3.14159265358979"), max_iterations=1
            )

        assert isinstance(result, ApproximationResult)
        assert (result.numerator, result.denominator) == (3, 1)
        assert result.converged is False
        assert result.error == abs(Fraction(Decimal("3.14159265358979")) - 3)
        assert "cap reached" in caplog.text

    def test_more_iterations_improve_result(self) -> None:
        """Каждая следующая подходящая дробь ближе"""
        value = Decimal("3.14159265358979")
        errors = [
            continued_fraction_approximation(value, max_iterations=i).error
            for i in range(1, 5)
        ]
        assert errors == sorted(errors, reverse=True)

    def test_converged_result_reports_error(self) -> None:
        result = continued_fraction_approximation(Decimal("2.5"))
        assert result.converged is True
        assert result.error == 0
