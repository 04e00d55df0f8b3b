"""Weighted-sum scoring for decision options.

Totals are cached on each Option and recomputed in a batch at explicit
checkpoints (scoring finished, before results or export). Recording a
single score never updates a cached total on its own.
"""

from uuid import UUID

from pydantic import BaseModel, Field

from decision_master.models.criterion import Criterion
from decision_master.models.decision import Decision
from decision_master.models.option import Option


class RankedOption(BaseModel):
    """One option's position in the final ranking."""

    rank: int = Field(ge=1, description="1-based position, ties keep insertion order")
    option_id: UUID = Field(description="Ranked option")
    name: str = Field(description="Option name")
    total_score: float = Field(description="Weighted total")
    share_percent: float = Field(
        description="Share of the sum of all totals (0 when the sum is 0)",
    )


def calculate_option_total(option: Option, criteria: list[Criterion]) -> float:
    """Compute and store an option's weighted total.

    Criteria without a recorded score contribute nothing, so partial
    totals are allowed.

    Args:
        option: Option to score
        criteria: The decision's criteria

    Returns:
        The new total, also written to ``option.total_score``
    """
    total = 0.0
    for criterion in criteria:
        score = option.score_for(criterion.id)
        if score is not None:
            total += score.value * criterion.weight
    option.total_score = total
    return total


def recompute_totals(decision: Decision) -> dict[UUID, float]:
    """Recompute every option's cached total.

    Returns:
        Mapping of option ID to its new total
    """
    return {
        option.id: calculate_option_total(option, decision.criteria)
        for option in decision.options
    }


def is_option_scored(option: Option, criteria: list[Criterion]) -> bool:
    """Check an option has one score for each of the given criteria."""
    return option.is_scored_against(criteria)


def is_scoring_complete(decision: Decision) -> bool:
    """Check every option has full scoring coverage."""
    return bool(decision.options) and all(
        is_option_scored(option, decision.criteria) for option in decision.options
    )


def winner(decision: Decision) -> Option | None:
    """Get the decision's winner, or None while scoring is incomplete."""
    return decision.winner


def scoring_progress(decision: Decision) -> float:
    """Fraction of the option x criteria matrix that has scores.

    Returns:
        Value in [0.0, 1.0]; 0.0 when options or criteria are empty
    """
    expected = len(decision.options) * len(decision.criteria)
    if expected == 0:
        return 0.0
    return decision.score_count / expected


def rank_options(decision: Decision) -> list[RankedOption]:
    """Rank options by cached total, highest first.

    Ties keep insertion order. Call ``recompute_totals`` first for
    totals that reflect the current scores.
    """
    ordered = sorted(
        enumerate(decision.options),
        key=lambda pair: (-pair[1].total_score, pair[0]),
    )
    total_sum = sum(option.total_score for option in decision.options)

    ranking = []
    for position, (_, option) in enumerate(ordered, start=1):
        share = (option.total_score / total_sum) * 100 if total_sum > 0 else 0.0
        ranking.append(
            RankedOption(
                rank=position,
                option_id=option.id,
                name=option.name,
                total_score=option.total_score,
                share_percent=share,
            )
        )
    return ranking
