"""
Errors — Иерархия исключений ratio engine

Все ошибки синхронные и не ретраятся: они сигнализируют о нарушении контракта
вызывающей стороной, а не о временном сбое. Каждое исключение наследуется от
RatioEngineError и от ближайшего builtin-исключения.
"""

from typing import Final


class RatioEngineError(Exception):
    """Базовый класс всех ошибок ratio engine."""


# =============================================================================
# BRAND / SHAPE
# =============================================================================


class BrandMismatch(RatioEngineError, ValueError):
    """
    Brand операнда не совпадает с ожидаемой стороной ratio.

    Сообщение всегда называет оба brand.
    """


class NoCancelableBrand(RatioEngineError, ValueError):
    """multiply_ratios не нашёл ни одной пары сокращающихся brand."""


class InvalidRatioShape(RatioEngineError, TypeError):
    """Значение не является записью numerator/denominator из валидных Amount."""


class InvalidAmount(RatioEngineError, ValueError):
    """Amount не может быть построен или приведён (неверный brand или value)."""


# =============================================================================
# ARITHMETIC
# =============================================================================


class InvalidNatValue(RatioEngineError, ValueError):
    """Операнд не является натуральным числом (int >= 0, не bool)."""


class Underflow(RatioEngineError, ArithmeticError):
    """Вычитание дало бы отрицательное NaturalValue."""


class DivideByZero(RatioEngineError, ZeroDivisionError):
    """Деление на ноль."""


class ZeroDenominator(RatioEngineError, ValueError):
    """Ratio с denominator.value <= 0 (бесконечные ratio запрещены)."""


class RangeError(RatioEngineError, ValueError):
    """Значение вне допустимого диапазона (например, one_minus для ratio > 1)."""


# =============================================================================
# PARSING
# =============================================================================


class InvalidNumericFormat(RatioEngineError, ValueError):
    """Строковое представление числа не соответствует десятичной грамматике."""


# =============================================================================
# ФОРМАТИРОВАНИЕ ОПЕРАНДОВ
# =============================================================================

# Порог, выше которого int в сообщении заменяется на его длину в битах.
# Преобразование int → str ограничено sys.get_int_max_str_digits() (от 640 цифр).
MAX_SHOWN_BITS: Final[int] = 256


def format_operand(value: object) -> str:
    """
    Представление операнда для сообщения об ошибке.

    Большие int описываются длиной в битах: построение сообщения не должно
    зависеть от лимита преобразования int → str и подменять ошибку движка
    на ValueError.

    Examples:
        >>> format_operand(42)
        '42'
        >>> format_operand(-(2**300))
        '<-int of 301 bits>'
    """
    if isinstance(value, int) and not isinstance(value, bool):
        bits = value.bit_length()
        if bits > MAX_SHOWN_BITS:
            sign = "-" if value < 0 else ""
            return f"<{sign}int of {bits} bits>"
    try:
        return repr(value)
    except ValueError:
        # Вложенный int сверх лимита (например, внутри dict)
        return f"<{type(value).__name__}>"
