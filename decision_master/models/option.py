"""Option model for candidates under consideration."""

from collections.abc import Iterable
from uuid import UUID

from pydantic import Field

from decision_master.models.base import BaseEntity
from decision_master.models.criterion import Criterion
from decision_master.models.score import Score


class Option(BaseEntity):
    """One candidate choice being evaluated.

    ``total_score`` is a cached weighted total. It is only correct after
    the scoring engine recomputes it; editing a score leaves it stale.
    """

    name: str = Field(description="Option name, unique within its decision")
    total_score: float = Field(default=0.0, description="Cached weighted total")
    decision_id: UUID | None = Field(default=None, description="Owning decision")
    scores: list[Score] = Field(default_factory=list)

    def score_for(self, criterion_id: UUID) -> Score | None:
        """Get this option's score for a criterion, if one was recorded."""
        for score in self.scores:
            if score.criterion_id == criterion_id:
                return score
        return None

    @property
    def scored_criterion_ids(self) -> set[UUID]:
        """Criterion IDs this option has a score for."""
        return {s.criterion_id for s in self.scores if s.criterion_id is not None}

    def is_scored_against(self, criteria: Iterable[Criterion]) -> bool:
        """Check that this option has exactly one score per given criterion."""
        expected = {c.id for c in criteria}
        return self.scored_criterion_ids == expected and len(self.scores) == len(
            expected
        )
