"""
Тесты для модуля PrimeTable

Проверяет:
1. Решето Эратосфена
2. Ленивое построение и неизменяемость таблицы
3. Единственное построение при конкурентном первом обращении
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

import src.core.math.primes as primes_module
from src.core.math.primes import PRIME_TABLE_LIMIT, PrimeTable, get_primes, sieve_primes


class TestSievePrimes:
    """Тесты для sieve_primes"""

    def test_small_limit(self) -> None:
        """Простые ниже 20"""
        assert sieve_primes(20) == (2, 3, 5, 7, 11, 13, 17, 19)

    def test_limit_is_exclusive(self) -> None:
        """Граница не включается"""
        assert sieve_primes(13) == (2, 3, 5, 7, 11)
        assert sieve_primes(14) == (2, 3, 5, 7, 11, 13)

    @pytest.mark.parametrize("limit", [-5, 0, 1, 2])
    def test_degenerate_limits(self, limit: int) -> None:
        """Нет простых ниже 3 (кроме пустого результата)"""
        assert sieve_primes(limit) == ()

    def test_limit_three(self) -> None:
        assert sieve_primes(3) == (2,)

    def test_count_below_thousand(self) -> None:
        """168 простых ниже 1000"""
        assert len(sieve_primes(1000)) == 168


class TestPrimeTable:
    """Тесты для PrimeTable"""

    def test_table_is_ascending_tuple(self) -> None:
        table = PrimeTable.get()
        assert isinstance(table, tuple)
        assert list(table) == sorted(table)
        assert table[:5] == (2, 3, 5, 7, 11)

    def test_table_bounded_by_limit(self) -> None:
        table = PrimeTable.get()
        assert table[-1] < PRIME_TABLE_LIMIT
        assert PrimeTable.largest() == 9973

    def test_same_object_on_every_call(self) -> None:
        """Таблица публикуется один раз"""
        assert PrimeTable.get() is PrimeTable.get()
        assert get_primes() is PrimeTable.get()

    def test_concurrent_first_use_builds_once(self, monkeypatch) -> None:
        """Конкурентное первое обращение строит таблицу ровно один раз"""
        calls = []
        original = primes_module.sieve_primes

        def counting_sieve(limit: int) -> tuple[int, ...]:
            calls.append(limit)
            return original(limit)

        monkeypatch.setattr(PrimeTable, "_primes", None)
        monkeypatch.setattr(primes_module, "sieve_primes", counting_sieve)

        with ThreadPoolExecutor(max_workers=8) as pool:
            tables = list(pool.map(lambda _: PrimeTable.get(), range(32)))

        assert len(calls) == 1
        assert all(table is tables[0] for table in tables)
