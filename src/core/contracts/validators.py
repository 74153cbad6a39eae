"""
Snapshot Contract Validators

Проверка снимков SmartNumber.to_snapshot() против JSON Schema контракта
schema/smart_number.json (jsonschema, Draft 2020-12).

Проверка двухступенчатая:
1. Структура и форматы полей: JSON Schema
2. Согласованность полей, которую схема не выражает: sign и is_integer
   должны следовать из несокращённой дроби fraction

Целые в снимке передаются строками и разбираются через Decimal, поэтому
длина числа не ограничена лимитом int ← str интерпретатора.
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Protocol

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

# Имя контракта снимка (файл schema/smart_number.json)
SNAPSHOT_SCHEMA = "smart_number"


class SupportsSnapshot(Protocol):
    def to_snapshot(self) -> Dict[str, Any]: ...


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик и кэш схем из каталога schema/ рядом с модулем.

    Каждая схема проходит meta-валидацию Draft 2020-12 один раз при первой
    загрузке.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# СОГЛАСОВАННОСТЬ ПОЛЕЙ
# =============================================================================


def _consistency_errors(snapshot: Dict[str, Any]) -> List[str]:
    """Нарушения согласованности структурно валидного снимка."""
    numerator, denominator = (int(Decimal(part)) for part in snapshot["fraction"])
    problems = []

    expected_sign = (numerator > 0) - (numerator < 0)
    if snapshot["sign"] != expected_sign:
        problems.append(
            f"$.sign: {snapshot['sign']} contradicts fraction sign {expected_sign}"
        )

    expected_integer = numerator % denominator == 0
    if snapshot["is_integer"] != expected_integer:
        problems.append(
            f"$.is_integer: {snapshot['is_integer']} contradicts fraction "
            f"{snapshot['fraction'][0]}/{snapshot['fraction'][1]}"
        )

    return problems


# =============================================================================
# SNAPSHOT VALIDATOR
# =============================================================================


class SnapshotValidator:
    """
    Валидатор снимков SmartNumber.

    Examples:
        >>> validator = SnapshotValidator()
        >>> validator.errors(SmartNumber(None, "6/8").to_snapshot())
        []
    """

    def __init__(self, loader: SchemaLoader | None = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(SNAPSHOT_SCHEMA)
        self.validator = Draft202012Validator(self.schema)

    def errors(self, snapshot: Dict[str, Any]) -> List[str]:
        """
        Все нарушения в виде "<json path>: <сообщение>", по порядку путей.

        Согласованность проверяется только у структурно валидного снимка.
        """
        schema_errors = sorted(self.validator.iter_errors(snapshot), key=lambda e: e.json_path)
        if schema_errors:
            return [f"{error.json_path}: {error.message}" for error in schema_errors]
        return _consistency_errors(snapshot)

    def validate(self, snapshot: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Снимок не соответствует схеме или противоречив
        """
        self.validator.validate(snapshot)
        problems = _consistency_errors(snapshot)
        if problems:
            raise ValidationError(problems[0])

    def validate_number(self, number: SupportsSnapshot) -> Dict[str, Any]:
        """
        Снимок числа, прошедший валидацию.

        Raises:
            ValidationError: Снимок не соответствует контракту
        """
        snapshot = number.to_snapshot()
        self.validate(snapshot)
        return snapshot


def validate_smart_number(snapshot: Dict[str, Any]) -> None:
    """
    Валидация снимка SmartNumber.

    Raises:
        ValidationError: Снимок не соответствует контракту
    """
    SnapshotValidator().validate(snapshot)
