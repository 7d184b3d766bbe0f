"""
Ratio — точная дробь из двух Amount

Immutable Pydantic модель {numerator, denominator}. Brand путешествуют вместе
со своими количествами: ratio одного brand — множитель, ratio двух brand —
курс обмена.
"""

from pydantic import BaseModel, Field, field_validator

from .amount import Amount


class Ratio(BaseModel):
    """
    Модель точного отношения numerator / denominator.

    Immutable модель (frozen=True), ровно два поля. Равенство структурное:
    1/2 и 2/4 — разные Ratio (см. ratios_same).
    """

    numerator: Amount = Field(..., description="Числитель")
    denominator: Amount = Field(..., description="Знаменатель (value > 0)")

    model_config = {"frozen": True, "strict": True, "extra": "forbid"}

    @field_validator("denominator")
    @classmethod
    def validate_denominator_positive(cls, v: Amount) -> Amount:
        """Бесконечные ratio запрещены."""
        if v.value <= 0:
            raise ValueError(f"No infinite ratios! Denominator was 0 {v.brand!r}")
        return v
