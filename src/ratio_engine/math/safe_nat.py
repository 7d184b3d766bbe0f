"""
Safe Natural Math — защищённая арифметика натуральных чисел

Модуль обеспечивает точные операции над NaturalValue (int >= 0, произвольной
точности), на которых построены все вычисления с Ratio:
- Сложение, умножение, возведение в степень
- Вычитание с защитой от ухода ниже нуля (Underflow)
- Три режима целочисленного деления: floor, ceil, banker's (round half to even)
- Сравнение

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат никогда не бывает отрицательным
2. Float никогда не участвует в вычислениях
3. bool, float, str, Decimal не являются NaturalValue
4. Все операции детерминированы и воспроизводимы на любой платформе
"""

from src.ratio_engine.errors import (
    DivideByZero,
    InvalidNatValue,
    Underflow,
    format_operand,
)

# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_nat(value: object) -> bool:
    """
    Проверка, является ли значение NaturalValue.

    bool явно исключён, хотя в Python это подкласс int.

    Examples:
        >>> is_nat(0)
        True
        >>> is_nat(-1)
        False
        >>> is_nat(True)
        False
        >>> is_nat(1.0)
        False
    """
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def assert_nat(value: object, name: str = "value") -> int:
    """
    Валидация NaturalValue.

    Args:
        value: Проверяемое значение
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        value без изменений

    Raises:
        InvalidNatValue: Если value не int >= 0
    """
    if not is_nat(value):
        raise InvalidNatValue(f"{name} must be a NatValue, not {format_operand(value)}")
    return value  # type: ignore[return-value]


# =============================================================================
# БАЗОВЫЕ ОПЕРАЦИИ
# =============================================================================


def add(a: int, b: int) -> int:
    return assert_nat(a, "a") + assert_nat(b, "b")


def subtract(a: int, b: int) -> int:
    """
    Вычитание a - b.

    Raises:
        Underflow: Если b > a
    """
    assert_nat(a, "a")
    assert_nat(b, "b")
    if b > a:
        raise Underflow(f"{format_operand(a)} - {format_operand(b)} is negative")
    return a - b


def multiply(a: int, b: int) -> int:
    return assert_nat(a, "a") * assert_nat(b, "b")


def exponentiate(base: int, exp: int) -> int:
    """Возведение base в натуральную степень exp."""
    return assert_nat(base, "base") ** assert_nat(exp, "exp")


def is_gte(a: int, b: int) -> bool:
    return assert_nat(a, "a") >= assert_nat(b, "b")


# =============================================================================
# ДЕЛЕНИЕ
# =============================================================================


def _check_divisor(a: int, b: int) -> None:
    assert_nat(a, "a")
    assert_nat(b, "b")
    if b == 0:
        raise DivideByZero(f"Cannot divide {format_operand(a)} by zero")


def floor_divide(a: int, b: int) -> int:
    """
    Деление с округлением вниз.

    Examples:
        >>> floor_divide(7, 2)
        3
    """
    _check_divisor(a, b)
    return a // b


def ceil_divide(a: int, b: int) -> int:
    """
    Деление с округлением вверх.

    Examples:
        >>> ceil_divide(7, 2)
        4
        >>> ceil_divide(6, 2)
        3
    """
    _check_divisor(a, b)
    return -(-a // b)


def bankers_divide(a: int, b: int) -> int:
    """
    Деление с банковским округлением (round half to even).

    Минимизирует систематическое смещение при многократном округлении.

    Алгоритм:
        q = floor(a / b), r = a - q * b
        2r < b  → q
        2r > b  → q + 1
        2r == b → q если q чётное, иначе q + 1

    Examples:
        >>> bankers_divide(5, 2)  # 2.5 → 2
        2
        >>> bankers_divide(7, 2)  # 3.5 → 4
        4
        >>> bankers_divide(8, 3)  # 2.67 → 3
        3
    """
    _check_divisor(a, b)
    q, r = divmod(a, b)
    twice_r = 2 * r
    if twice_r < b:
        return q
    if twice_r > b:
        return q + 1
    # Ровно половина
    return q if q % 2 == 0 else q + 1
