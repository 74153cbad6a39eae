"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидатора снимков SmartNumber:
- Валидность самой схемы
- Валидация снимков, построенных SmartNumber.to_snapshot()
- Детекция нарушений required полей
- Детекция нарушений типов
- Детекция нарушений constraints (enum/pattern/minimum)
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import SchemaLoader, SnapshotValidator, validate_smart_number
from src.smartnumber import SmartNumber


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_snapshot():
    """Валидный снимок явной дроби."""
    return SmartNumber(None, "6/8").to_snapshot()


# =============================================================================
# TESTS - SCHEMA LOADING
# =============================================================================


def test_schema_loader_loads_schema():
    """Проверка загрузки схемы."""
    loader = SchemaLoader()
    schema = loader.load_schema("smart_number")

    assert schema["title"] == "SmartNumber snapshot"
    assert "fraction_simplified" in schema["required"]


def test_schema_loader_caches_schemas():
    """Проверка кэширования схем."""
    loader = SchemaLoader()

    schema1 = loader.load_schema("smart_number")
    schema2 = loader.load_schema("smart_number")

    # Должен вернуть тот же объект (кэш)
    assert schema1 is schema2


def test_schema_loader_raises_on_missing_schema():
    """Проверка ошибки при отсутствующей схеме."""
    loader = SchemaLoader()

    with pytest.raises(FileNotFoundError):
        loader.load_schema("non_existent_schema")


def test_schema_loader_raises_on_missing_directory(tmp_path):
    """Проверка ошибки при отсутствующей директории схем."""
    with pytest.raises(RuntimeError, match="Schema directory not found"):
        SchemaLoader(tmp_path / "missing")


def test_schema_loader_rejects_invalid_schema(tmp_path):
    """Схема, не проходящая meta-валидацию, отклоняется."""
    (tmp_path / "broken.json").write_text(json.dumps({"type": 42}), encoding="utf-8")
    loader = SchemaLoader(tmp_path)

    with pytest.raises(ValueError, match="Invalid JSON Schema in broken.json"):
        loader.load_schema("broken")


# =============================================================================
# TESTS - SNAPSHOT CONTENT
# =============================================================================


def test_snapshot_content(valid_snapshot):
    """Снимок содержит все представления явной дроби."""
    assert valid_snapshot == {
        "input": "6/8",
        "normalized_input": "6/8",
        "kind": "rational",
        "literal_kind": "fraction",
        "accuracy": 100,
        "integer": "0",
        "decimal": "0.75",
        "fraction": ["6", "8"],
        "fraction_simplified": ["3", "4"],
        "human_string": "3/4",
        "latex": "\\frac{3}{4}",
        "is_integer": False,
        "sign": 1,
    }


def test_snapshot_is_json_serializable(valid_snapshot):
    """Снимок сериализуется в JSON без потерь."""
    assert json.loads(json.dumps(valid_snapshot)) == valid_snapshot


@pytest.mark.parametrize(
    "text",
    [
        "0",
        "-2.5",
        "1.5e3",
        "1e-200",
        "---6",
        "1 000 000",
        "-7/3",
        "0.0000000000001",
        "123456789012345678901234567890",
    ],
)
def test_snapshots_of_all_formats_are_valid(text):
    """Снимки любых поддерживаемых форматов соответствуют схеме."""
    validate_smart_number(SmartNumber(None, text).to_snapshot())


def test_snapshot_of_low_accuracy_is_valid():
    """Усечение до нуля даёт "0", а не "-0" или "0.000"."""
    snapshot = SmartNumber(3, "-0.0000001").to_snapshot()

    assert snapshot["decimal"] == "0"
    assert snapshot["sign"] == -1
    validate_smart_number(snapshot)


# =============================================================================
# TESTS - SNAPSHOT VALIDATION
# =============================================================================


def test_validator_accepts_valid_data(valid_snapshot):
    """Валидация правильного снимка."""
    validator = SnapshotValidator()
    validator.validate(valid_snapshot)  # Не должно выбросить исключение
    assert validator.errors(valid_snapshot) == []


def test_rejects_missing_required_field(valid_snapshot):
    """Валидация отклоняет данные без обязательных полей."""
    validator = SnapshotValidator()

    data = valid_snapshot.copy()
    del data["latex"]

    with pytest.raises(ValidationError) as exc_info:
        validator.validate(data)
    assert "'latex' is a required property" in str(exc_info.value)


def test_rejects_additional_property(valid_snapshot):
    """Лишние поля запрещены."""
    data = valid_snapshot.copy()
    data["float"] = 0.75

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_rejects_integer_as_number(valid_snapshot):
    """Целые передаются строками, а не JSON-числами."""
    data = valid_snapshot.copy()
    data["integer"] = 0

    with pytest.raises(ValidationError) as exc_info:
        validate_smart_number(data)
    assert "is not of type 'string'" in str(exc_info.value)


def test_rejects_invalid_kind(valid_snapshot):
    data = valid_snapshot.copy()
    data["kind"] = "complex"

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_rejects_zero_denominator(valid_snapshot):
    """Знаменатель строго положительный."""
    data = valid_snapshot.copy()
    data["fraction"] = ["6", "0"]

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_rejects_negative_denominator(valid_snapshot):
    data = valid_snapshot.copy()
    data["fraction_simplified"] = ["3", "-4"]

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_rejects_trailing_zeros_in_decimal(valid_snapshot):
    data = valid_snapshot.copy()
    data["decimal"] = "0.750"

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_rejects_negative_accuracy(valid_snapshot):
    data = valid_snapshot.copy()
    data["accuracy"] = -1

    with pytest.raises(ValidationError):
        validate_smart_number(data)


def test_errors_lists_every_violation(valid_snapshot):
    """errors возвращает все нарушения сразу, по порядку путей."""
    data = valid_snapshot.copy()
    data["sign"] = 2
    data["is_integer"] = "no"

    errors = SnapshotValidator().errors(data)

    assert len(errors) == 2
    assert errors[0].startswith("$.is_integer: ")
    assert errors[1].startswith("$.sign: ")


# =============================================================================
# TESTS - FIELD CONSISTENCY
# =============================================================================


def test_rejects_sign_contradicting_fraction(valid_snapshot):
    """Структурно валидный знак, не совпадающий со знаком дроби."""
    data = valid_snapshot.copy()
    data["sign"] = -1

    with pytest.raises(ValidationError, match="contradicts fraction sign 1"):
        validate_smart_number(data)
    assert SnapshotValidator().errors(data) == ["$.sign: -1 contradicts fraction sign 1"]


def test_rejects_is_integer_contradicting_fraction(valid_snapshot):
    data = valid_snapshot.copy()
    data["is_integer"] = True

    errors = SnapshotValidator().errors(data)

    assert errors == ["$.is_integer: True contradicts fraction 6/8"]


def test_consistency_skipped_for_structurally_invalid_snapshot(valid_snapshot):
    """Нулевой знаменатель отклоняется схемой, до разбора дроби."""
    data = valid_snapshot.copy()
    data["fraction"] = ["6", "0"]
    data["sign"] = -1

    errors = SnapshotValidator().errors(data)

    assert len(errors) == 1
    assert errors[0].startswith("$.fraction[1]: ")


def test_validate_number_returns_snapshot():
    number = SmartNumber(None, "-2.5")

    snapshot = SnapshotValidator().validate_number(number)

    assert snapshot == number.to_snapshot()
    assert snapshot["fraction"] == ["-25", "10"]


@pytest.mark.parametrize(
    "text",
    [
        "0.12345678901234567890123456789012345",
        "-12345678901234567890123456789012345.5",
        "1" * 5000,
        "-" + "1" * 5000 + "/7",
        "1e5000",
    ],
)
def test_snapshots_of_long_values_are_valid(text):
    """Значения длиннее 28 цифр и лимита int → str дают валидный снимок."""
    snapshot = SnapshotValidator().validate_number(SmartNumber(None, text))

    assert json.loads(json.dumps(snapshot)) == snapshot
