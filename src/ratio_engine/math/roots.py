"""
Root Solver — дробное возведение ratio в степень

Вычисляет base ** (en / ed) для Ratio base и Ratio exponent:
    A = bn ** en,  B = bd ** en
    result ≈ root_ed(A) / root_ed(B), квантованный к 10 ** precision

Два независимых алгоритма извлечения целочисленного корня:
- Newton: x_{k+1} = ((ed - 1)·x_k + v / x_k^(ed-1)) / ed, банковское деление,
  итерации пока последовательность строго убывает
- Binary: бинарный поиск наибольшего x в [1, v] с x^ed <= v (floor root)

Оба алгоритма усекают корень до целого ДО квантования, поэтому их результаты
могут отличаться на 1 в извлечённом корне. Это ожидаемое поведение.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Только целочисленная арифметика (детерминизм между репликами)
2. Проверка brand намеренно разрешающая: BrandMismatch только если НИ ОДНО
   из условий совпадения brand не выполнено
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Final, Optional

from src.ratio_engine.domain import Ratio
from src.ratio_engine.errors import BrandMismatch
from src.ratio_engine.math.ratio import RatioLike, assert_is_ratio, make_ratio, quantize
from src.ratio_engine.math.safe_nat import (
    add,
    assert_nat,
    bankers_divide,
    exponentiate,
    multiply,
    subtract,
)

logger = logging.getLogger(__name__)

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Число десятичных знаков результата по умолчанию (знаменатель 10 ** 8)
DEFAULT_ROOT_PRECISION: Final[int] = 8


# =============================================================================
# CONFIG
# =============================================================================


class RootMethod(str, Enum):
    """Алгоритм извлечения корня"""

    NEWTON = "newton"
    BINARY = "binary"


@dataclass(frozen=True)
class RootSolverConfig:
    """Конфигурация exponentiate_ratios.

    precision — число десятичных знаков результата (NaturalValue).
    """

    precision: int = DEFAULT_ROOT_PRECISION
    method: RootMethod = RootMethod.NEWTON

    def __post_init__(self) -> None:
        assert_nat(self.precision, "precision")
        if not isinstance(self.method, RootMethod):
            raise ValueError(f"method must be a RootMethod, got {self.method!r}")


# =============================================================================
# ИЗВЛЕЧЕНИЕ КОРНЯ
# =============================================================================


def _newton_step(value: int, root: int, root_minus_one: int, x: int) -> int:
    return bankers_divide(
        add(
            multiply(root_minus_one, x),
            bankers_divide(value, exponentiate(x, root_minus_one)),
        ),
        root,
    )


def newton_root(value: int, root: int) -> int:
    """
    Целочисленный корень степени root методом Ньютона.

    Начинает с x_0 = value и останавливается, как только следующая итерация
    не меньше текущей.

    Examples:
        >>> newton_root(4, 2)
        2
        >>> newton_root(27, 3)
        3
    """
    assert_nat(value, "value")
    if value == 0:
        return 0
    root_minus_one = subtract(root, 1)

    x_prev = value
    x_next = _newton_step(value, root, root_minus_one, x_prev)
    iterations = 1
    while x_next < x_prev:
        x_prev = x_next
        x_next = _newton_step(value, root, root_minus_one, x_prev)
        iterations += 1

    logger.debug("newton_root(%d-th) converged after %d iterations", root, iterations)
    return x_prev


def binary_root(value: int, root: int) -> int:
    """
    Floor корня степени root бинарным поиском по [1, value].

    Для value == 0 возвращает 0.
    """
    assert_nat(value, "value")
    assert_nat(root, "root")
    low = 1
    high = value
    iterations = 0
    while low <= high:
        iterations += 1
        mid = bankers_divide(add(low, high), 2)
        mid_pow = exponentiate(mid, root)
        if mid_pow == value:
            logger.debug("binary_root(%d-th) exact after %d iterations", root, iterations)
            return mid
        if mid_pow < value:
            low = add(mid, 1)
        else:
            high = mid - 1

    logger.debug("binary_root(%d-th) bracketed after %d iterations", root, iterations)
    return low - 1


# =============================================================================
# ВОЗВЕДЕНИЕ В СТЕПЕНЬ
# =============================================================================


def _exponentiate_with(
    base: RatioLike,
    exponent: RatioLike,
    precision: int,
    root_fn: Callable[[int, int], int],
) -> Ratio:
    base = assert_is_ratio(base)
    exponent = assert_is_ratio(exponent)
    assert_nat(precision, "precision")

    # Разрешающая проверка (дизъюнкция): отклоняет только полностью несвязанные brand
    if not (
        base.numerator.brand is base.denominator.brand
        or base.numerator.brand is exponent.numerator.brand
        or base.denominator.brand is exponent.denominator.brand
    ):
        raise BrandMismatch(
            f"base and exponent ratios must have the same brand: "
            f"base {base.numerator.brand!r}/{base.denominator.brand!r}, "
            f"exponent {exponent.numerator.brand!r}/{exponent.denominator.brand!r}"
        )

    numerator_powered = exponentiate(base.numerator.value, exponent.numerator.value)
    denominator_powered = exponentiate(base.denominator.value, exponent.numerator.value)

    numerator_root = root_fn(numerator_powered, exponent.denominator.value)
    denominator_root = root_fn(denominator_powered, exponent.denominator.value)

    return quantize(
        make_ratio(
            numerator_root,
            base.numerator.brand,
            denominator_root,
            base.denominator.brand,
        ),
        exponentiate(10, precision),
    )


def exponentiate_ratios_newton(
    base: RatioLike,
    exponent: RatioLike,
    precision: int = DEFAULT_ROOT_PRECISION,
) -> Ratio:
    """
    base ** exponent через метод Ньютона.

    Args:
        base: Основание
        exponent: Показатель (en / ed)
        precision: Число десятичных знаков результата

    Returns:
        Ratio со знаменателем 10 ** precision

    Raises:
        BrandMismatch: Если brand base и exponent полностью несвязаны
        InvalidNatValue: Если precision не NaturalValue

    Examples:
        >>> exponentiate_ratios_newton(make_ratio(4, b, 1, b), make_ratio(1, b, 2, b))
        2.00000000  # 200000000 / 100000000
    """
    return _exponentiate_with(base, exponent, precision, newton_root)


def exponentiate_ratios_binary(
    base: RatioLike,
    exponent: RatioLike,
    precision: int = DEFAULT_ROOT_PRECISION,
) -> Ratio:
    """base ** exponent через бинарный поиск (floor root). См. exponentiate_ratios_newton."""
    return _exponentiate_with(base, exponent, precision, binary_root)


_METHODS: Final[dict[RootMethod, Callable[[RatioLike, RatioLike, int], Ratio]]] = {
    RootMethod.NEWTON: exponentiate_ratios_newton,
    RootMethod.BINARY: exponentiate_ratios_binary,
}


def exponentiate_ratios(
    base: RatioLike,
    exponent: RatioLike,
    config: Optional[RootSolverConfig] = None,
) -> Ratio:
    """
    base ** exponent выбранным в config алгоритмом.

    Args:
        base: Основание
        exponent: Показатель
        config: Конфигурация (default: RootSolverConfig())
    """
    config = config or RootSolverConfig()
    return _METHODS[config.method](base, exponent, config.precision)
