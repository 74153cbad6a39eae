"""
PrimeTable — таблица малых простых чисел для trial division

Неизменяемая возрастающая последовательность простых чисел, общая для всего
процесса. Строится лениво при первом обращении (решето Эратосфена) и далее
только читается.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Таблица строится ровно один раз, даже при конкурентном первом обращении
2. После публикации таблица неизменяема (tuple)
3. Чтение после публикации не берёт блокировку
"""

import logging
import threading
from typing import Final

logger = logging.getLogger(__name__)

# Верхняя граница (исключительно) для простых чисел в таблице
PRIME_TABLE_LIMIT: Final[int] = 10_000


# =============================================================================
# РЕШЕТО
# =============================================================================


def sieve_primes(limit: int) -> tuple[int, ...]:
    """
    Все простые числа < limit (решето Эратосфена).

    Args:
        limit: Верхняя граница (исключительно)

    Returns:
        Возрастающий tuple простых чисел

    Examples:
        >>> sieve_primes(20)
        (2, 3, 5, 7, 11, 13, 17, 19)
        >>> sieve_primes(2)
        ()
    """
    if limit < 3:
        return ()

    is_prime = bytearray([1]) * limit
    is_prime[0] = is_prime[1] = 0

    p = 2
    while p * p < limit:
        if is_prime[p]:
            is_prime[p * p :: p] = bytearray(len(range(p * p, limit, p)))
        p += 1

    return tuple(i for i in range(limit) if is_prime[i])


# =============================================================================
# PROCESS-WIDE SINGLETON
# =============================================================================


class PrimeTable:
    """
    Ленивый process-wide синглтон таблицы простых чисел.

    Публикация через double-checked locking: первый поток строит таблицу под
    блокировкой, остальные читают готовый tuple без блокировки.
    """

    _primes: tuple[int, ...] | None = None
    _lock = threading.Lock()

    @classmethod
    def get(cls) -> tuple[int, ...]:
        """
        Возвращает таблицу простых, строя её при первом вызове.

        Returns:
            Возрастающий tuple простых чисел < PRIME_TABLE_LIMIT
        """
        primes = cls._primes
        if primes is not None:
            return primes

        with cls._lock:
            if cls._primes is None:
                cls._primes = sieve_primes(PRIME_TABLE_LIMIT)
                logger.debug(
                    "Prime table built: %d primes below %d",
                    len(cls._primes),
                    PRIME_TABLE_LIMIT,
                )
            return cls._primes

    @classmethod
    def largest(cls) -> int:
        """Наибольшее простое в таблице."""
        return cls.get()[-1]


def get_primes() -> tuple[int, ...]:
    """Shortcut для PrimeTable.get()."""
    return PrimeTable.get()
