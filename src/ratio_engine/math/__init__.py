"""
Core math modules для ratio engine

Точная арифметика натуральных чисел и отношений типизированных количеств.
"""

# Safe Natural Math
from src.ratio_engine.math.safe_nat import (
    add,
    assert_nat,
    bankers_divide,
    ceil_divide,
    exponentiate,
    floor_divide,
    is_gte,
    is_nat,
    multiply,
    subtract,
)

# Ratio Algebra
from src.ratio_engine.math.ratio import (
    PERCENT,
    RatioLike,
    add_ratios,
    assert_is_ratio,
    ceil_divide_by,
    ceil_multiply_by,
    divide_by,
    floor_divide_by,
    floor_multiply_by,
    invert_ratio,
    make_ratio,
    make_ratio_from_amounts,
    multiply_by,
    multiply_ratios,
    one_minus,
    one_plus,
    quantize,
    ratio_gte,
    ratios_same,
    subtract_ratios,
)

# Decimal Parsing
from src.ratio_engine.math.parsing import (
    DEFAULT_FORMAT_PLACES,
    NUMERIC_RE,
    assert_parsable_number,
    format_ratio,
    parse_ratio,
    ratio_to_number,
)

# Root Solver
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

__all__ = [
    # Safe Natural Math
    "add",
    "assert_nat",
    "bankers_divide",
    "ceil_divide",
    "exponentiate",
    "floor_divide",
    "is_gte",
    "is_nat",
    "multiply",
    "subtract",
    # Ratio Algebra: Constants
    "PERCENT",
    # Ratio Algebra: Types
    "RatioLike",
    # Ratio Algebra: Functions
    "add_ratios",
    "assert_is_ratio",
    "ceil_divide_by",
    "ceil_multiply_by",
    "divide_by",
    "floor_divide_by",
    "floor_multiply_by",
    "invert_ratio",
    "make_ratio",
    "make_ratio_from_amounts",
    "multiply_by",
    "multiply_ratios",
    "one_minus",
    "one_plus",
    "quantize",
    "ratio_gte",
    "ratios_same",
    "subtract_ratios",
    # Decimal Parsing
    "DEFAULT_FORMAT_PLACES",
    "NUMERIC_RE",
    "assert_parsable_number",
    "format_ratio",
    "parse_ratio",
    "ratio_to_number",
    # Root Solver: Constants
    "DEFAULT_ROOT_PRECISION",
    # Root Solver: Types
    "RootMethod",
    "RootSolverConfig",
    # Root Solver: Functions
    "binary_root",
    "exponentiate_ratios",
    "exponentiate_ratios_binary",
    "exponentiate_ratios_newton",
    "newton_root",
]
