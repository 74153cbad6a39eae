"""
Contract Validation Module

Модуль для валидации JSON снимков SmartNumber.
"""

from .validators import (
    SNAPSHOT_SCHEMA,
    SchemaLoader,
    SnapshotValidator,
    validate_smart_number,
)

__all__ = [
    # Constants
    "SNAPSHOT_SCHEMA",
    # Classes
    "SchemaLoader",
    "SnapshotValidator",
    # Functions
    "validate_smart_number",
]
