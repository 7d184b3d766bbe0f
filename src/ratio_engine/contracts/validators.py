"""
JSON Schema Record Validators

Модуль для валидации формы in-memory записей Amount и Ratio, пришедших в виде
обычных dict (например, pass-by-copy записи от внешнего кода).
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- amount.json: {brand, value}, value — целое >= 0
- ratio.json: ровно {numerator, denominator}, оба — Amount

Схемы проверяют только форму. Identity brand проверяется в Python.
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.validators import extend

from src.ratio_engine.errors import format_operand


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'ratio')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-валидацию
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# RECORD VALIDATOR CLASS
# =============================================================================


def _minimum(validator, minimum, instance, schema):
    """Keyword minimum: сообщение не преобразует большие int в str."""
    if not validator.is_type(instance, "number"):
        return
    if instance < minimum:
        yield ValidationError(
            f"{format_operand(instance)} is less than the minimum of {minimum!r}"
        )


RecordSchemaValidator = extend(Draft202012Validator, validators={"minimum": _minimum})


# =============================================================================
# RECORD VALIDATORS
# =============================================================================


class RecordValidator:
    """
    Базовый класс для валидаторов записей.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = RecordSchemaValidator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация записи против схемы.

        Raises:
            ValidationError: Если запись не соответствует схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Итератор по всем ошибкам валидации."""
        return self.validator.iter_errors(data)


class AmountRecordValidator(RecordValidator):
    def __init__(self):
        super().__init__("amount")


class RatioRecordValidator(RecordValidator):
    def __init__(self):
        super().__init__("ratio")


# Валидаторы stateless, переиспользуем экземпляры
_AMOUNT_VALIDATOR = AmountRecordValidator()
_RATIO_VALIDATOR = RatioRecordValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_amount_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи Amount.

    Raises:
        ValidationError: Если запись не соответствует схеме
    """
    _AMOUNT_VALIDATOR.validate(data)


def validate_ratio_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи Ratio.

    Raises:
        ValidationError: Если запись не соответствует схеме
    """
    _RATIO_VALIDATOR.validate(data)
