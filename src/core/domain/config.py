"""
SmartNumberConfig — конфигурация разбора и производных представлений

Immutable Pydantic модель. Значения по умолчанию совпадают с константами
модулей math, поэтому SmartNumber без конфигурации ведёт себя так же, как
прямые вызовы exact_reduce/approximate_reduce.
"""

from typing import Final

from pydantic import BaseModel, Field

from src.core.math.rational_reducer import (
    APPROXIMATION_MAX_ITERATIONS,
    APPROXIMATION_TOLERANCE_DEFAULT,
    EXACT_REDUCE_FALLBACK_LIMIT,
)

# Число дробных цифр по умолчанию
DEFAULT_ACCURACY: Final[int] = 100


class SmartNumberConfig(BaseModel):
    """
    Параметры SmartNumber.

    accuracy ограничивает длину десятичного разложения и промежуточную
    точность научной записи, но не величину целых (целые не ограничены).
    """

    accuracy: int = Field(
        DEFAULT_ACCURACY, ge=0, description="Число дробных цифр десятичного разложения"
    )
    approximation_tolerance: float = Field(
        APPROXIMATION_TOLERANCE_DEFAULT,
        gt=0,
        lt=1,
        description="Относительная толерантность decimal → fraction",
    )
    max_approximation_iterations: int = Field(
        APPROXIMATION_MAX_ITERATIONS, ge=1, description="Потолок итераций цепной дроби"
    )
    exact_reduce_fallback_limit: int = Field(
        EXACT_REDUCE_FALLBACK_LIMIT,
        ge=0,
        description="Нечётные делители после таблицы простых до точного gcd",
    )

    model_config = {"frozen": True}
