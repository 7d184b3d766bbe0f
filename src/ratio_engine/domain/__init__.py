"""
Domain models and value objects.

Contains the typed-quantity value objects: Brand, Amount, Ratio.
"""

from src.ratio_engine.domain.amount import (
    Amount,
    AmountLike,
    as_amount,
    coerce_amount,
    is_empty,
    is_equal_amount,
    make_amount,
    make_empty,
)
from src.ratio_engine.domain.brand import Brand
from src.ratio_engine.domain.ratio import Ratio

__all__ = [
    # Brand
    "Brand",
    # Amount model
    "Amount",
    "AmountLike",
    # Amount algebra
    "as_amount",
    "coerce_amount",
    "is_empty",
    "is_equal_amount",
    "make_amount",
    "make_empty",
    # Ratio model
    "Ratio",
]
