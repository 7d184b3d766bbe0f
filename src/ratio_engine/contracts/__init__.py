"""
Record Contract Validation Module

Модуль для валидации формы записей Amount и Ratio по JSON Schema.
"""

from .validators import (
    AmountRecordValidator,
    RatioRecordValidator,
    RecordValidator,
    SchemaLoader,
    validate_amount_record,
    validate_ratio_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "RecordValidator",
    "AmountRecordValidator",
    "RatioRecordValidator",
    # Functions
    "validate_amount_record",
    "validate_ratio_record",
]
