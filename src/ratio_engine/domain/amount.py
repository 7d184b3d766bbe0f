"""
Amount — количество, помеченное brand

Immutable Pydantic модель {brand, value} и минимальная алгебра над ней:
- make_amount: построение с проверкой brand и NaturalValue
- coerce_amount: приведение Amount или записи {brand, value} с проверкой brand
- is_equal_amount: сравнение количеств одного brand
- make_empty / is_empty: нулевое количество

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. value — int >= 0 (strict: bool, float, str не принимаются)
2. brand — экземпляр Brand, сравнение по identity
3. Модель frozen: любое изменение создаёт новый экземпляр
"""

from collections.abc import Mapping
from typing import Any, Union

from jsonschema import ValidationError as SchemaValidationError
from pydantic import BaseModel, Field, ValidationError

from src.ratio_engine.contracts import validate_amount_record
from src.ratio_engine.errors import BrandMismatch, InvalidAmount, format_operand

from .brand import Brand

# =============================================================================
# AMOUNT MODEL
# =============================================================================


class Amount(BaseModel):
    """
    Количество актива.

    Immutable модель (frozen=True). Равенство структурное: brand (по identity)
    и value.
    """

    brand: Brand = Field(..., description="Brand актива")
    value: int = Field(..., ge=0, description="NaturalValue (int >= 0)")

    model_config = {
        "frozen": True,
        "strict": True,
        "extra": "forbid",
        "arbitrary_types_allowed": True,
    }


AmountLike = Union[Amount, Mapping[str, Any]]


# =============================================================================
# AMOUNT ALGEBRA
# =============================================================================


def make_amount(brand: Brand, value: int) -> Amount:
    """
    Построение Amount.

    Args:
        brand: Brand актива
        value: NaturalValue

    Returns:
        Новый Amount

    Raises:
        InvalidAmount: Если brand не Brand или value не NaturalValue
    """
    try:
        return Amount(brand=brand, value=value)
    except ValidationError as err:
        raise InvalidAmount(
            f"Cannot make an amount of {format_operand(brand)} "
            f"with value {format_operand(value)}: "
            f"{err.error_count()} validation error(s)"
        ) from err


def as_amount(amount: AmountLike) -> Amount:
    """
    Нормализация Amount или записи {brand, value} в Amount.

    Raises:
        InvalidAmount: Если запись не соответствует форме Amount
    """
    if isinstance(amount, Amount):
        return amount
    if not isinstance(amount, Mapping):
        raise InvalidAmount(f"Expected an Amount record, got {format_operand(amount)}")

    try:
        validate_amount_record(dict(amount))
    except SchemaValidationError as err:
        raise InvalidAmount(
            f"Invalid amount record {format_operand(dict(amount))}: {err.message}"
        ) from err

    return make_amount(amount["brand"], amount["value"])


def coerce_amount(brand: Brand, amount: AmountLike) -> Amount:
    """
    Приведение количества к ожидаемому brand.

    Args:
        brand: Ожидаемый brand
        amount: Amount или запись {brand, value}

    Returns:
        Валидный Amount данного brand

    Raises:
        BrandMismatch: Если brand количества не совпадает с ожидаемым
        InvalidAmount: Если запись невалидна
    """
    coerced = as_amount(amount)
    if coerced.brand is not brand:
        raise BrandMismatch(
            f"amount's brand {coerced.brand!r} must match the expected brand {brand!r}"
        )
    return coerced


def is_equal_amount(left: AmountLike, right: AmountLike) -> bool:
    """
    Равенство двух количеств одного brand.

    Raises:
        BrandMismatch: Если brand различаются
    """
    left_amount = as_amount(left)
    right_amount = coerce_amount(left_amount.brand, right)
    return left_amount.value == right_amount.value


def make_empty(brand: Brand) -> Amount:
    return make_amount(brand, 0)


def is_empty(amount: AmountLike) -> bool:
    return as_amount(amount).value == 0
