"""
Тесты для Root Solver

Проверяет:
1. Целочисленные корни (Newton и binary search)
2. Дробное возведение ratio в степень, квантование к 10 ** precision
3. Разрешающую проверку brand
4. RootSolverConfig и выбор алгоритма
"""

import dataclasses
import logging
import math

import pytest

from src.ratio_engine.domain import Brand
from src.ratio_engine.errors import BrandMismatch, InvalidNatValue, InvalidRatioShape
from src.ratio_engine.math.ratio import make_ratio
from src.ratio_engine.math.roots import (
    DEFAULT_ROOT_PRECISION,
    RootMethod,
    RootSolverConfig,
    binary_root,
    exponentiate_ratios,
    exponentiate_ratios_binary,
    exponentiate_ratios_newton,
    newton_root,
)


@pytest.fixture
def usd() -> Brand:
    return Brand("USD")


@pytest.fixture
def atom() -> Brand:
    return Brand("ATOM")


@pytest.fixture
def eth() -> Brand:
    return Brand("ETH")


SOLVERS = [exponentiate_ratios_newton, exponentiate_ratios_binary]


# =============================================================================
# ТЕСТЫ: Целочисленные корни
# =============================================================================


class TestNewtonRoot:
    """Тесты newton_root"""

    def test_perfect_powers(self) -> None:
        assert newton_root(4, 2) == 2
        assert newton_root(9, 2) == 3
        assert newton_root(27, 3) == 3
        assert newton_root(10**20, 2) == 10**10

    def test_zero_and_one(self) -> None:
        assert newton_root(0, 2) == 0
        assert newton_root(1, 2) == 1
        assert newton_root(1, 5) == 1

    def test_first_root_is_identity(self) -> None:
        assert newton_root(12345, 1) == 12345

    def test_rounds_not_floors(self) -> None:
        """Банковское деление в итерации: sqrt(2) → 2"""
        assert newton_root(2, 2) == 2

    def test_square_root_close_to_floor(self) -> None:
        for value in range(1, 300):
            assert abs(newton_root(value, 2) - math.isqrt(value)) <= 1

    def test_negative_value(self) -> None:
        with pytest.raises(InvalidNatValue):
            newton_root(-4, 2)

    def test_convergence_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="src.ratio_engine.math.roots"):
            newton_root(10**6, 2)
        assert "converged" in caplog.text


class TestBinaryRoot:
    """Тесты binary_root: floor корня"""

    def test_perfect_powers(self) -> None:
        assert binary_root(4, 2) == 2
        assert binary_root(27, 3) == 3
        assert binary_root(10**20, 2) == 10**10

    def test_floor(self) -> None:
        assert binary_root(2, 2) == 1
        assert binary_root(10, 2) == 3
        assert binary_root(26, 3) == 2

    def test_zero(self) -> None:
        assert binary_root(0, 2) == 0

    def test_matches_isqrt(self) -> None:
        for value in range(0, 300):
            assert binary_root(value, 2) == math.isqrt(value)

    def test_cube_root_is_floor(self) -> None:
        for value in range(1, 300):
            root = binary_root(value, 3)
            assert root**3 <= value < (root + 1) ** 3

    def test_methods_may_differ_by_one(self) -> None:
        assert newton_root(2, 2) - binary_root(2, 2) == 1


# =============================================================================
# ТЕСТЫ: Возведение ratio в степень
# =============================================================================


class TestExponentiateRatios:
    """Тесты exponentiate_ratios_newton / exponentiate_ratios_binary"""

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_square_root_of_four(self, solver, usd: Brand) -> None:
        result = solver(make_ratio(4, usd, 1, usd), make_ratio(1, usd, 2, usd))
        assert result == make_ratio(2 * 10**8, usd, 10**8, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_square_root_of_fraction(self, solver, usd: Brand) -> None:
        result = solver(make_ratio(9, usd, 4, usd), make_ratio(1, usd, 2, usd))
        assert result == make_ratio(150000000, usd, 10**8, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_three_halves(self, solver, usd: Brand) -> None:
        """(4/9) ** (3/2) = 8/27 ≈ 0.29629630"""
        result = solver(make_ratio(4, usd, 9, usd), make_ratio(3, usd, 2, usd))
        assert result == make_ratio(29629630, usd, 10**8, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_integer_exponent(self, solver, usd: Brand) -> None:
        result = solver(make_ratio(3, usd, 2, usd), make_ratio(2, usd, 1, usd))
        assert result == make_ratio(225000000, usd, 10**8, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_zero_exponent(self, solver, usd: Brand) -> None:
        result = solver(make_ratio(7, usd, 3, usd), make_ratio(0, usd, 1, usd))
        assert result == make_ratio(10**8, usd, 10**8, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_precision(self, solver, usd: Brand) -> None:
        base = make_ratio(9, usd, 4, usd)
        exponent = make_ratio(1, usd, 2, usd)
        assert solver(base, exponent, 0) == make_ratio(2, usd, 1, usd)  # 1.5 → 2
        assert solver(base, exponent, 2) == make_ratio(150, usd, 100, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_negative_precision(self, solver, usd: Brand) -> None:
        with pytest.raises(InvalidNatValue, match="precision"):
            solver(make_ratio(4, usd, 1, usd), make_ratio(1, usd, 2, usd), -1)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_result_keeps_base_brands(self, solver, usd: Brand, atom: Brand) -> None:
        result = solver(make_ratio(4, atom, 1, usd), make_ratio(1, atom, 2, atom))
        assert result.numerator.brand is atom
        assert result.denominator.brand is usd

    def test_methods_diverge_on_truncated_root(self, usd: Brand) -> None:
        base = make_ratio(2, usd, 1, usd)
        exponent = make_ratio(1, usd, 2, usd)
        assert exponentiate_ratios_newton(base, exponent, 0) == make_ratio(2, usd, 1, usd)
        assert exponentiate_ratios_binary(base, exponent, 0) == make_ratio(1, usd, 1, usd)

    def test_default_precision(self) -> None:
        assert DEFAULT_ROOT_PRECISION == 8

    def test_record_inputs(self, usd: Brand) -> None:
        base = {"numerator": {"brand": usd, "value": 4}, "denominator": {"brand": usd, "value": 1}}
        exponent = {"numerator": {"brand": usd, "value": 1}, "denominator": {"brand": usd, "value": 2}}
        assert exponentiate_ratios_newton(base, exponent, 0) == make_ratio(2, usd, 1, usd)

    def test_invalid_record(self, usd: Brand) -> None:
        with pytest.raises(InvalidRatioShape):
            exponentiate_ratios_newton({"numerator": 4}, make_ratio(1, usd, 2, usd))


class TestRootBrandCheck:
    """Проверка brand намеренно разрешающая"""

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_single_brand_base(self, solver, usd: Brand, atom: Brand) -> None:
        result = solver(make_ratio(4, usd, 1, usd), make_ratio(1, atom, 2, atom), 0)
        assert result == make_ratio(2, usd, 1, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_numerators_match(self, solver, usd: Brand, atom: Brand, eth: Brand) -> None:
        result = solver(make_ratio(4, atom, 1, usd), make_ratio(1, atom, 2, eth), 0)
        assert result == make_ratio(2, atom, 1, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_denominators_match(self, solver, usd: Brand, atom: Brand, eth: Brand) -> None:
        result = solver(make_ratio(9, atom, 4, usd), make_ratio(1, eth, 2, usd), 2)
        assert result == make_ratio(150, atom, 100, usd)

    @pytest.mark.parametrize("solver", SOLVERS)
    def test_unrelated_brands(self, solver, usd: Brand, atom: Brand, eth: Brand) -> None:
        with pytest.raises(BrandMismatch, match="must have the same brand"):
            solver(make_ratio(4, atom, 1, usd), make_ratio(1, eth, 2, eth))


# =============================================================================
# ТЕСТЫ: Конфигурация
# =============================================================================


class TestRootSolverConfig:
    """Тесты RootSolverConfig и exponentiate_ratios"""

    def test_defaults(self) -> None:
        config = RootSolverConfig()
        assert config.precision == DEFAULT_ROOT_PRECISION
        assert config.method is RootMethod.NEWTON

    def test_frozen(self) -> None:
        config = RootSolverConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.precision = 4  # type: ignore[misc]

    def test_negative_precision(self) -> None:
        with pytest.raises(InvalidNatValue):
            RootSolverConfig(precision=-1)

    def test_method_must_be_enum(self) -> None:
        with pytest.raises(ValueError, match="RootMethod"):
            RootSolverConfig(method="newton")  # type: ignore[arg-type]

    def test_dispatch_default_is_newton(self, usd: Brand) -> None:
        base = make_ratio(9, usd, 4, usd)
        exponent = make_ratio(1, usd, 2, usd)
        assert exponentiate_ratios(base, exponent) == exponentiate_ratios_newton(base, exponent)

    def test_dispatch_by_method(self, usd: Brand) -> None:
        base = make_ratio(2, usd, 1, usd)
        exponent = make_ratio(1, usd, 2, usd)
        newton = RootSolverConfig(precision=0, method=RootMethod.NEWTON)
        binary = RootSolverConfig(precision=0, method=RootMethod.BINARY)
        assert exponentiate_ratios(base, exponent, newton) == make_ratio(2, usd, 1, usd)
        assert exponentiate_ratios(base, exponent, binary) == make_ratio(1, usd, 1, usd)
