"""Criterion model for weighted evaluation factors."""

from typing import Any
from uuid import UUID

from pydantic import Field, field_validator

from decision_master.models.base import BaseEntity
from decision_master.models.score import Score

MIN_WEIGHT = 1
MAX_WEIGHT = 10
DEFAULT_WEIGHT = 5


def clamp_weight(weight: int) -> int:
    """Clamp a raw weight into the 1-10 range."""
    return max(MIN_WEIGHT, min(MAX_WEIGHT, int(weight)))


class Criterion(BaseEntity):
    """One weighted factor used to evaluate options.

    Scores are shared with the owning options; they are excluded from
    serialization here so a dumped decision lists each score once.
    """

    name: str = Field(description="Criterion name, unique within its decision")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Importance from 1 to 10")
    decision_id: UUID | None = Field(default=None, description="Owning decision")
    scores: list[Score] = Field(default_factory=list, exclude=True)

    @field_validator("weight", mode="before")
    @classmethod
    def _clamp_weight(cls, value: Any) -> int:
        return clamp_weight(value)
