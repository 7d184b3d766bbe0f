"""
Decimal Parsing — десятичный текст ↔ точный Ratio

Текстовый контракт для числового ввода:
    ^(\\d+)(\\.(\\d*))?$
Одна или более цифр целой части, опциональная дробная часть. Знак, экспонента,
пробелы и не-ASCII цифры не допускаются.

- parse_ratio: "1.25" → 125/100 (знаменатель = 10 ** число дробных цифр)
- assert_parsable_number: та же грамматика как guard
- format_ratio: Ratio → десятичная строка, только целочисленная арифметика
- ratio_to_number: float приближение ТОЛЬКО для отображения и оценок

Длина числа не ограничена: цифры переводятся в int и обратно блоками, поэтому
лимит sys.get_int_max_str_digits() не применяется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. parse_ratio и format_ratio не используют float
2. ratio_to_number никогда не участвует в точных вычислениях
"""

import logging
import math
import re
from typing import Final, Union

from src.ratio_engine.domain import Brand, Ratio
from src.ratio_engine.errors import InvalidNumericFormat, format_operand
from src.ratio_engine.math.ratio import RatioLike, assert_is_ratio, make_ratio
from src.ratio_engine.math.safe_nat import assert_nat, bankers_divide, exponentiate

logger = logging.getLogger(__name__)

# fullmatch: '$' в Python пропускает завершающий '\n'
NUMERIC_RE: Final[re.Pattern[str]] = re.compile(r"(\d+)(?:\.(\d*))?", re.ASCII)

# Число дробных знаков format_ratio по умолчанию
DEFAULT_FORMAT_PLACES: Final[int] = 8

# Размер блока цифр: меньше минимально допустимого лимита int ↔ str (640)
DIGIT_CHUNK: Final[int] = 500

ParsableNumber = Union[int, float, str]


# =============================================================================
# ЦИФРЫ ↔ INT
# =============================================================================


def _digits_to_int(digits: str) -> int:
    value = 0
    for start in range(0, len(digits), DIGIT_CHUNK):
        chunk = digits[start : start + DIGIT_CHUNK]
        value = value * exponentiate(10, len(chunk)) + int(chunk)
    return value


def _int_to_digits(value: int) -> str:
    """Десятичная запись NaturalValue любой длины."""
    scale = exponentiate(10, DIGIT_CHUNK)
    chunks = []
    while value >= scale:
        value, low = divmod(value, scale)
        chunks.append(str(low).rjust(DIGIT_CHUNK, "0"))
    chunks.append(str(value))
    return "".join(reversed(chunks))


def _numeric_text(numeric: object) -> str:
    if isinstance(numeric, int) and not isinstance(numeric, bool):
        if numeric < 0:
            return "-" + _int_to_digits(-numeric)
        return _int_to_digits(numeric)
    return f"{numeric}"


# =============================================================================
# PARSING
# =============================================================================


def _match_numeric(numeric: object) -> re.Match[str]:
    match = NUMERIC_RE.fullmatch(_numeric_text(numeric))
    if match is None:
        logger.debug("Rejected numeric specimen %s", format_operand(numeric))
        raise InvalidNumericFormat(f"Invalid numeric data: {format_operand(numeric)}")
    return match


def parse_ratio(
    numeric: ParsableNumber,
    numerator_brand: Brand,
    denominator_brand: Brand | None = None,
) -> Ratio:
    """
    Построение Ratio из десятичного числа.

    Args:
        numeric: Число или его строковое представление
        numerator_brand: Brand числителя
        denominator_brand: Brand знаменателя (default: numerator_brand)

    Returns:
        Ratio без сокращения: "1.50" → 150/100

    Raises:
        InvalidNumericFormat: Если str(numeric) не соответствует грамматике

    Examples:
        >>> parse_ratio("1.25", usd).numerator.value
        125
        >>> parse_ratio(3, usd).denominator.value
        1
    """
    whole, part = _match_numeric(numeric).groups()
    part = part or ""
    return make_ratio(
        _digits_to_int(f"{whole}{part}"),
        numerator_brand,
        exponentiate(10, len(part)),
        denominator_brand,
    )


def assert_parsable_number(specimen: object) -> None:
    """
    Guard: str(specimen) соответствует десятичной грамматике.

    Raises:
        InvalidNumericFormat: Если не соответствует
    """
    _match_numeric(specimen)


# =============================================================================
# FORMATTING
# =============================================================================


def format_ratio(ratio: RatioLike, places: int = DEFAULT_FORMAT_PLACES) -> str:
    """
    Точная десятичная запись значения ratio.

    Значение округляется half to even до places дробных знаков. Вычисление
    целочисленное, результат удовлетворяет грамматике parse_ratio.

    Args:
        ratio: Ratio для форматирования
        places: Число дробных знаков (NaturalValue)

    Returns:
        Десятичная строка, например "0.33333333"

    Examples:
        >>> format_ratio(make_ratio(1, usd, 3, usd), places=4)
        '0.3333'
        >>> format_ratio(make_ratio(5, usd, 2, usd), places=0)
        '2'
    """
    ratio = assert_is_ratio(ratio)
    assert_nat(places, "places")

    scale = exponentiate(10, places)
    scaled = bankers_divide(ratio.numerator.value * scale, ratio.denominator.value)
    whole, fraction = divmod(scaled, scale)
    if places == 0:
        return _int_to_digits(whole)
    return f"{_int_to_digits(whole)}.{_int_to_digits(fraction).rjust(places, '0')}"


def ratio_to_number(ratio: RatioLike) -> float:
    """
    Приближение ratio числом float.

    ВНИМАНИЕ: результат неточен и предназначен только для отображения и
    оценок. Никогда не используйте его в расчётах settlement. Значение за
    пределами диапазона float возвращается как math.inf.
    """
    ratio = assert_is_ratio(ratio)
    try:
        return ratio.numerator.value / ratio.denominator.value
    except OverflowError:
        return math.inf
