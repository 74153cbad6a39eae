"""
Core math modules

Точные численные примитивы и алгоритмы сокращения дробей.
"""

# Numerical Safeguards
from src.core.math.numerical_safeguards import (
    DECIMAL_GUARD_DIGITS,
    ExactNumber,
    # Exact comparisons
    is_negative,
    is_positive,
    is_zero,
    sign,
    # Decimal helpers
    decimal_context,
    digit_count,
    format_decimal,
    format_integer,
    scaled_decimal,
    strip_trailing_zeros,
    truncate_decimal,
    # Rounding
    fits_signed_bits,
    round_decimal_to_integer,
    round_fraction_to_integer,
    # Validation
    validate_non_negative_int,
    validate_tolerance,
)

# Rounding modes
from src.core.math.rounding import RoundingMode

# Prime table
from src.core.math.primes import PRIME_TABLE_LIMIT, PrimeTable, get_primes, sieve_primes

# Rational reducer
from src.core.math.rational_reducer import (
    APPROXIMATION_MAX_ITERATIONS,
    APPROXIMATION_TOLERANCE_DEFAULT,
    EXACT_REDUCE_FALLBACK_LIMIT,
    SMALL_MAGNITUDE_THRESHOLD,
    ApproximationResult,
    approximate_reduce,
    continued_fraction_approximation,
    exact_reduce,
)

__all__ = [
    # Numerical Safeguards: Constants & types
    "DECIMAL_GUARD_DIGITS",
    "ExactNumber",
    # Numerical Safeguards: Exact comparisons
    "is_negative",
    "is_positive",
    "is_zero",
    "sign",
    # Numerical Safeguards: Decimal helpers
    "decimal_context",
    "digit_count",
    "format_decimal",
    "format_integer",
    "scaled_decimal",
    "strip_trailing_zeros",
    "truncate_decimal",
    # Numerical Safeguards: Rounding
    "fits_signed_bits",
    "round_decimal_to_integer",
    "round_fraction_to_integer",
    # Numerical Safeguards: Validation
    "validate_non_negative_int",
    "validate_tolerance",
    # Rounding modes
    "RoundingMode",
    # Prime table
    "PRIME_TABLE_LIMIT",
    "PrimeTable",
    "get_primes",
    "sieve_primes",
    # Rational reducer: Constants
    "APPROXIMATION_MAX_ITERATIONS",
    "APPROXIMATION_TOLERANCE_DEFAULT",
    "EXACT_REDUCE_FALLBACK_LIMIT",
    "SMALL_MAGNITUDE_THRESHOLD",
    # Rational reducer: Types
    "ApproximationResult",
    # Rational reducer: Functions
    "approximate_reduce",
    "continued_fraction_approximation",
    "exact_reduce",
]
