"""Score model for one cell of the option x criteria matrix."""

from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from decision_master.models.base import BaseEntity

MIN_SCORE = 1.0
MAX_SCORE = 10.0
DEFAULT_SCORE = 5.0


def clamp_score(value: float) -> float:
    """Clamp a raw score value into the 1.0-10.0 range."""
    return max(MIN_SCORE, min(MAX_SCORE, float(value)))


class Score(BaseEntity):
    """The rating of one option against one criterion.

    The value is clamped rather than rejected, both at construction and
    on every later assignment.
    """

    value: float = Field(
        default=DEFAULT_SCORE,
        description="Rating between 1.0 and 10.0",
    )
    option_id: UUID | None = Field(default=None, description="Rated option")
    criterion_id: UUID | None = Field(default=None, description="Criterion rated against")

    @field_validator("value", mode="before")
    @classmethod
    def _clamp_value(cls, value: Any) -> float:
        return clamp_score(value)
