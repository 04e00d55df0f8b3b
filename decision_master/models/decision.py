"""Decision model for a weighted-choice session."""

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import Field

from decision_master.models.base import BaseEntity
from decision_master.models.criterion import Criterion
from decision_master.models.option import Option
from decision_master.models.score import Score


class ScoringMethod(str, Enum):
    """Scoring method used by a decision."""

    MATRIX = "Matrix"


class Decision(BaseEntity):
    """A structured choice session owning options and criteria.

    Decisions own their options and criteria; removing either one also
    drops the scores recorded against it. Field values are not guarded
    beyond whitespace stripping, so callers run the validation rules
    before mutating.
    """

    title: str = Field(description="What is being decided")
    goal: str = Field(default="", description="Optional longer description")
    is_completed: bool = Field(default=False, description="Marked done by the user")
    selected_method: str = Field(
        default=ScoringMethod.MATRIX.value,
        description="Scoring method tag",
    )
    options: list[Option] = Field(default_factory=list)
    criteria: list[Criterion] = Field(default_factory=list)

    @property
    def creation_date(self) -> datetime:
        """Alias for the creation timestamp."""
        return self.created_at

    @property
    def status_label(self) -> str:
        """Human readable completion status."""
        return "Completed" if self.is_completed else "In Progress"

    def get_option(self, option_id: UUID) -> Option | None:
        """Find an option by ID."""
        return next((o for o in self.options if o.id == option_id), None)

    def get_criterion(self, criterion_id: UUID) -> Criterion | None:
        """Find a criterion by ID."""
        return next((c for c in self.criteria if c.id == criterion_id), None)

    def add_option(self, option: Option, index: int | None = None) -> Option:
        """Attach an option, re-linking any scores it already carries.

        Args:
            option: Option to attach
            index: Position to insert at (appends when None)

        Returns:
            The attached option
        """
        option.decision_id = self.id
        if index is None:
            self.options.append(option)
        else:
            self.options.insert(index, option)

        for score in option.scores:
            criterion = self.get_criterion(score.criterion_id)
            if criterion is not None and score not in criterion.scores:
                criterion.scores.append(score)
        return option

    def add_criterion(self, criterion: Criterion, index: int | None = None) -> Criterion:
        """Attach a criterion, re-linking any scores it already carries."""
        criterion.decision_id = self.id
        if index is None:
            self.criteria.append(criterion)
        else:
            self.criteria.insert(index, criterion)

        for score in criterion.scores:
            option = self.get_option(score.option_id)
            if option is not None and score not in option.scores:
                option.scores.append(score)
        return criterion

    def remove_option(self, option_id: UUID) -> Option | None:
        """Detach an option and its scores.

        The removed option keeps its own score list so it can be
        re-attached with ``add_option``.
        """
        option = self.get_option(option_id)
        if option is None:
            return None

        self.options.remove(option)
        for criterion in self.criteria:
            criterion.scores = [s for s in criterion.scores if s.option_id != option_id]
        return option

    def remove_criterion(self, criterion_id: UUID) -> Criterion | None:
        """Detach a criterion and its scores."""
        criterion = self.get_criterion(criterion_id)
        if criterion is None:
            return None

        self.criteria.remove(criterion)
        for option in self.options:
            option.scores = [s for s in option.scores if s.criterion_id != criterion_id]
        return criterion

    def score_for(self, option_id: UUID, criterion_id: UUID) -> Score | None:
        """Get the score for an (option, criterion) pair."""
        option = self.get_option(option_id)
        if option is None:
            return None
        return option.score_for(criterion_id)

    def set_score(self, option: Option, criterion: Criterion, value: float) -> Score:
        """Record a score, updating the existing one for the pair if present.

        Raises:
            ValueError: If the option or criterion belongs to another decision
        """
        if self.get_option(option.id) is not option:
            msg = f"Option {option.id} is not part of decision {self.id}"
            raise ValueError(msg)
        if self.get_criterion(criterion.id) is not criterion:
            msg = f"Criterion {criterion.id} is not part of decision {self.id}"
            raise ValueError(msg)

        existing = option.score_for(criterion.id)
        if existing is not None:
            existing.value = value
            return existing

        score = Score(value=value, option_id=option.id, criterion_id=criterion.id)
        option.scores.append(score)
        criterion.scores.append(score)
        return score

    def remove_score(self, score: Score) -> None:
        """Detach a score from both sides of the matrix."""
        option = self.get_option(score.option_id)
        if option is not None:
            option.scores = [s for s in option.scores if s is not score]
        criterion = self.get_criterion(score.criterion_id)
        if criterion is not None:
            criterion.scores = [s for s in criterion.scores if s is not score]

    @property
    def option_names(self) -> list[str]:
        """Trimmed option names in insertion order."""
        return [o.name.strip() for o in self.options]

    @property
    def criteria_names(self) -> list[str]:
        """Trimmed criteria names in insertion order."""
        return [c.name.strip() for c in self.criteria]

    @property
    def score_count(self) -> int:
        """Number of recorded scores across all options."""
        return sum(len(o.scores) for o in self.options)

    @property
    def winner(self) -> Option | None:
        """Option with the highest cached total, once scoring is complete.

        Returns None when there are no options or any option lacks a
        score for some criterion. Ties go to the earliest option.
        """
        if not self.options:
            return None
        if not all(o.is_scored_against(self.criteria) for o in self.options):
            return None

        best = self.options[0]
        for option in self.options[1:]:
            if option.total_score > best.total_score:
                best = option
        return best
