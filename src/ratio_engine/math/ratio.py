"""
Ratio Algebra — точная арифметика отношений типизированных количеств

Ratio представляет дробь numerator / denominator, где оба поля — Amount.
Ratio одного brand — множитель, применимый только к этому brand (комиссии,
пороги). Ratio двух brand — курс обмена, применимый только в одном
направлении. Проверка brand гарантирует, что ratio не применяется к чужим
количествам и курсы не используются в обратную сторону.

Соглашение о вызове: операция привязана к ratio, а не к количеству:
    [floor|ceil]_multiply_by(amount, ratio)   amount * ratio
    [floor|ceil]_divide_by(amount, ratio)     amount / ratio

Каждая операция, возвращающая Amount, заканчивается целочисленным делением,
поэтому нужен режим округления. Для натуральных чисел достаточно трёх:
- floor: вниз
- ceil: вверх
- без префикса: round half to even (минимальное смещение)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. denominator.value > 0 у любого Ratio
2. add_ratios / subtract_ratios не сокращают дробь (точность важнее размера)
3. Float не используется ни в одной операции
"""

from collections.abc import Mapping
from typing import Any, Callable, Final, Union

from jsonschema import ValidationError as SchemaValidationError
from pydantic import ValidationError

from src.ratio_engine.contracts import validate_ratio_record
from src.ratio_engine.domain import (
    Amount,
    AmountLike,
    Brand,
    Ratio,
    as_amount,
    make_amount,
)
from src.ratio_engine.errors import (
    BrandMismatch,
    InvalidAmount,
    InvalidRatioShape,
    NoCancelableBrand,
    RangeError,
    ZeroDenominator,
    format_operand,
)
from src.ratio_engine.math.safe_nat import (
    add,
    bankers_divide,
    ceil_divide,
    floor_divide,
    is_gte,
    multiply,
    subtract,
)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Знаменатель по умолчанию: make_ratio(5, brand) == 5%
PERCENT: Final[int] = 100

RatioLike = Union[Ratio, Mapping[str, Any]]

_DivideOp = Callable[[int, int], int]


# =============================================================================
# ПОСТРОЕНИЕ И ВАЛИДАЦИЯ
# =============================================================================


def make_ratio(
    numerator: int,
    numerator_brand: Brand,
    denominator: int = PERCENT,
    denominator_brand: Brand | None = None,
) -> Ratio:
    """
    Построение Ratio.

    Args:
        numerator: Значение числителя (NaturalValue)
        numerator_brand: Brand числителя
        denominator: Значение знаменателя (default: PERCENT = 100)
        denominator_brand: Brand знаменателя (default: numerator_brand)

    Returns:
        Новый Ratio

    Raises:
        ZeroDenominator: Если denominator <= 0
        InvalidAmount: Если значения или brand невалидны
    """
    if denominator_brand is None:
        denominator_brand = numerator_brand

    if isinstance(denominator, int) and denominator <= 0:
        raise ZeroDenominator(
            f"No infinite ratios! Denominator was {format_operand(denominator)} "
            f"{denominator_brand!r}"
        )

    return Ratio(
        numerator=make_amount(numerator_brand, numerator),
        denominator=make_amount(denominator_brand, denominator),
    )


def make_ratio_from_amounts(numerator_amount: AmountLike, denominator_amount: AmountLike) -> Ratio:
    numerator_amount = as_amount(numerator_amount)
    denominator_amount = as_amount(denominator_amount)
    return make_ratio(
        numerator_amount.value,
        numerator_amount.brand,
        denominator_amount.value,
        denominator_amount.brand,
    )


def _amount_record(field: Any) -> Any:
    if isinstance(field, Amount):
        return {"brand": field.brand, "value": field.value}
    if isinstance(field, Mapping):
        return dict(field)
    return field


def assert_is_ratio(ratio: RatioLike) -> Ratio:
    """
    Проверка, что значение — корректная запись Ratio.

    Принимает Ratio или dict ровно с двумя полями numerator/denominator,
    каждое из которых — Amount или запись {brand, value} с NaturalValue.

    Args:
        ratio: Проверяемое значение

    Returns:
        Валидный Ratio (для dict строится новый экземпляр)

    Raises:
        InvalidRatioShape: Если форма или значения не соответствуют Ratio
    """
    if isinstance(ratio, Ratio):
        return ratio

    if not isinstance(ratio, Mapping):
        raise InvalidRatioShape(
            f"Parameter must be a Ratio record, not {format_operand(ratio)}"
        )

    record = {name: _amount_record(field) for name, field in ratio.items()}
    try:
        validate_ratio_record(record)
    except SchemaValidationError as err:
        raise InvalidRatioShape(f"Parameter must be a Ratio record: {err.message}") from err

    try:
        return Ratio(
            numerator=make_amount(record["numerator"]["brand"], record["numerator"]["value"]),
            denominator=make_amount(
                record["denominator"]["brand"], record["denominator"]["value"]
            ),
        )
    except (InvalidAmount, ValidationError) as err:
        raise InvalidRatioShape(
            f"Parameter must be a valid Ratio record: {format_operand(ratio)}"
        ) from err


# =============================================================================
# AMOUNT × RATIO
# =============================================================================


def _multiply_helper(amount: AmountLike, ratio: RatioLike, divide_op: _DivideOp) -> Amount:
    amount = as_amount(amount)
    ratio = assert_is_ratio(ratio)
    if amount.brand is not ratio.denominator.brand:
        raise BrandMismatch(
            f"amount's brand {amount.brand!r} must match ratio's denominator "
            f"{ratio.denominator.brand!r}"
        )

    return make_amount(
        ratio.numerator.brand,
        divide_op(multiply(amount.value, ratio.numerator.value), ratio.denominator.value),
    )


def floor_multiply_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    return _multiply_helper(amount, ratio, floor_divide)


def ceil_multiply_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    return _multiply_helper(amount, ratio, ceil_divide)


def multiply_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    """
    amount × ratio с банковским округлением.

    Brand amount должен совпадать с brand знаменателя ratio, результат
    получает brand числителя.

    Raises:
        BrandMismatch: Если brand amount != ratio.denominator.brand
    """
    return _multiply_helper(amount, ratio, bankers_divide)


def _divide_helper(amount: AmountLike, ratio: RatioLike, divide_op: _DivideOp) -> Amount:
    amount = as_amount(amount)
    ratio = assert_is_ratio(ratio)
    if amount.brand is not ratio.numerator.brand:
        raise BrandMismatch(
            f"amount's brand {amount.brand!r} must match ratio's numerator "
            f"{ratio.numerator.brand!r}"
        )

    return make_amount(
        ratio.denominator.brand,
        divide_op(multiply(amount.value, ratio.denominator.value), ratio.numerator.value),
    )


def floor_divide_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    return _divide_helper(amount, ratio, floor_divide)


def ceil_divide_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    return _divide_helper(amount, ratio, ceil_divide)


def divide_by(amount: AmountLike, ratio: RatioLike) -> Amount:
    """
    amount / ratio с банковским округлением.

    Brand amount должен совпадать с brand числителя ratio, результат
    получает brand знаменателя.

    Raises:
        BrandMismatch: Если brand amount != ratio.numerator.brand
        DivideByZero: Если числитель ratio равен нулю
    """
    return _divide_helper(amount, ratio, bankers_divide)


# =============================================================================
# RATIO × RATIO
# =============================================================================


def invert_ratio(ratio: RatioLike) -> Ratio:
    ratio = assert_is_ratio(ratio)
    return make_ratio(
        ratio.denominator.value,
        ratio.denominator.brand,
        ratio.numerator.value,
        ratio.numerator.brand,
    )


def _assert_matching_brands(left: Ratio, right: Ratio) -> None:
    if left.numerator.brand is not right.numerator.brand:
        raise BrandMismatch(
            f"numerator brands must match: {left.numerator.brand!r} {right.numerator.brand!r}"
        )
    if left.denominator.brand is not right.denominator.brand:
        raise BrandMismatch(
            f"denominator brands must match: {left.denominator.brand!r} "
            f"{right.denominator.brand!r}"
        )


def add_ratios(left: RatioLike, right: RatioLike) -> Ratio:
    """
    Сумма двух ratio с одинаковыми brand.

    Результат не сокращается:
        a/x + b/y = (a·y + b·x) / (x·y)

    Raises:
        BrandMismatch: Если brand числителей или знаменателей различаются
    """
    right = assert_is_ratio(right)
    left = assert_is_ratio(left)
    _assert_matching_brands(left, right)

    return make_ratio(
        add(
            multiply(left.numerator.value, right.denominator.value),
            multiply(left.denominator.value, right.numerator.value),
        ),
        left.numerator.brand,
        multiply(left.denominator.value, right.denominator.value),
        left.denominator.brand,
    )


def subtract_ratios(left: RatioLike, right: RatioLike) -> Ratio:
    """
    Разность двух ratio с одинаковыми brand (без сокращения).

    Raises:
        BrandMismatch: Если brand числителей или знаменателей различаются
        Underflow: Если right > left
    """
    right = assert_is_ratio(right)
    left = assert_is_ratio(left)
    _assert_matching_brands(left, right)

    return make_ratio(
        subtract(
            multiply(left.numerator.value, right.denominator.value),
            multiply(left.denominator.value, right.numerator.value),
        ),
        left.numerator.brand,
        multiply(left.denominator.value, right.denominator.value),
        left.denominator.brand,
    )


def _remaining_brands(left: Ratio, right: Ratio) -> tuple[Brand, Brand]:
    # Предпочитаем brand левого операнда
    if right.numerator.brand is right.denominator.brand:
        return left.numerator.brand, left.denominator.brand
    if right.numerator.brand is left.denominator.brand:
        return left.numerator.brand, right.denominator.brand
    if left.numerator.brand is right.denominator.brand:
        return right.numerator.brand, left.denominator.brand
    if left.numerator.brand is left.denominator.brand:
        return right.numerator.brand, right.denominator.brand
    raise NoCancelableBrand(
        f"at least one brand must cancel out: "
        f"{left.numerator.brand!r}/{left.denominator.brand!r} "
        f"{right.numerator.brand!r}/{right.denominator.brand!r}"
    )


def multiply_ratios(left: RatioLike, right: RatioLike) -> Ratio:
    """
    Произведение двух ratio с сокращением brand.

    Порядок выбора оставшихся brand (первое совпадение):
    1. right одного brand       → (left.num, left.den)
    2. right.num == left.den    → (left.num, right.den)
    3. left.num == right.den    → (right.num, left.den)
    4. left одного brand        → (right.num, right.den)

    Raises:
        NoCancelableBrand: Если ни одно правило не подходит
    """
    right = assert_is_ratio(right)
    left = assert_is_ratio(left)

    numerator_brand, denominator_brand = _remaining_brands(left, right)
    return make_ratio(
        multiply(left.numerator.value, right.numerator.value),
        numerator_brand,
        multiply(left.denominator.value, right.denominator.value),
        denominator_brand,
    )


def _assert_single_brand(ratio: Ratio, operation: str) -> None:
    if ratio.numerator.brand is not ratio.denominator.brand:
        raise BrandMismatch(
            f"{operation} only supports ratios with a single brand, but "
            f"{ratio.numerator.brand!r} doesn't match {ratio.denominator.brand!r}"
        )


def one_minus(ratio: RatioLike) -> Ratio:
    """
    1 - ratio для ratio в [0, 1].

    Raises:
        BrandMismatch: Если ratio не одного brand
        RangeError: Если ratio > 1
    """
    ratio = assert_is_ratio(ratio)
    _assert_single_brand(ratio, "one_minus")
    if ratio.numerator.value > ratio.denominator.value:
        raise RangeError(
            f"Parameter must be less than or equal to 1: "
            f"{format_operand(ratio.numerator.value)}/"
            f"{format_operand(ratio.denominator.value)}"
        )
    return make_ratio(
        subtract(ratio.denominator.value, ratio.numerator.value),
        ratio.numerator.brand,
        ratio.denominator.value,
        ratio.numerator.brand,
    )


def one_plus(ratio: RatioLike) -> Ratio:
    ratio = assert_is_ratio(ratio)
    _assert_single_brand(ratio, "one_plus")
    return make_ratio(
        add(ratio.denominator.value, ratio.numerator.value),
        ratio.numerator.brand,
        ratio.denominator.value,
        ratio.numerator.brand,
    )


# =============================================================================
# СРАВНЕНИЕ
# =============================================================================


def ratio_gte(left: RatioLike, right: RatioLike) -> bool:
    """
    left >= right (математическое сравнение через перекрёстное умножение).

    Проверка brand:
    - совпадают brand числителей → должны совпадать brand знаменателей
    - иначе, если left одного brand → right тоже должен быть одного brand

    Raises:
        BrandMismatch: При несовместимых brand
    """
    left = assert_is_ratio(left)
    right = assert_is_ratio(right)

    if left.numerator.brand is right.numerator.brand:
        if left.denominator.brand is not right.denominator.brand:
            raise BrandMismatch(
                f"numerator brands match, but denominator brands don't: "
                f"{left.denominator.brand!r} {right.denominator.brand!r}"
            )
    elif left.numerator.brand is left.denominator.brand:
        if right.numerator.brand is not right.denominator.brand:
            raise BrandMismatch(
                f"lefthand brands match, but righthand brands don't: "
                f"{right.numerator.brand!r} {right.denominator.brand!r}"
            )

    return is_gte(
        multiply(left.numerator.value, right.denominator.value),
        multiply(right.numerator.value, left.denominator.value),
    )


def ratios_same(left: RatioLike, right: RatioLike) -> bool:
    """
    True только если ratio структурно идентичны.

    Эквивалентные, но по-разному записанные ratio (1/2 и 2/4) — не same.
    Различные brand дают False.
    """
    left = assert_is_ratio(left)
    right = assert_is_ratio(right)
    return left.numerator == right.numerator and left.denominator == right.denominator


# =============================================================================
# КВАНТОВАНИЕ
# =============================================================================


def quantize(ratio: RatioLike, new_denominator: int) -> Ratio:
    """
    Эквивалентный ratio с новым знаменателем.

    new_num = bankers_divide(old_num * new_den, old_den)

    Examples:
        1/3 → quantize(9) → 3/9
        2/3 → quantize(100) → 67/100

    Raises:
        ZeroDenominator: Если new_denominator <= 0
    """
    ratio = assert_is_ratio(ratio)
    if isinstance(new_denominator, int) and new_denominator <= 0:
        raise ZeroDenominator(
            f"No infinite ratios! Denominator was {format_operand(new_denominator)} "
            f"{ratio.denominator.brand!r}"
        )
    old_denominator = ratio.denominator.value
    old_numerator = ratio.numerator.value

    if new_denominator == old_denominator:
        new_numerator = old_numerator
    else:
        new_numerator = bankers_divide(
            multiply(old_numerator, new_denominator), old_denominator
        )

    return make_ratio(
        new_numerator,
        ratio.numerator.brand,
        new_denominator,
        ratio.denominator.brand,
    )
