"""Cross-decision summary statistics.

Read-only aggregation over a collection of decisions for the
statistics dashboard.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import date, datetime, timedelta, tzinfo

from pydantic import BaseModel, Field

from decision_master.models.decision import Decision, ScoringMethod

DEFAULT_RECENT_WINDOW_DAYS = 7


class DecisionStatistics(BaseModel):
    """Summary counts across all decisions."""

    total_decisions: int = Field(default=0, description="All decisions")
    completed_decisions: int = Field(default=0, description="Decisions marked completed")
    active_decisions: int = Field(default=0, description="Decisions still in progress")
    total_options: int = Field(default=0, description="Options across all decisions")
    total_criteria: int = Field(default=0, description="Criteria across all decisions")
    average_options: float = Field(default=0.0, description="Options per decision")
    average_criteria: float = Field(default=0.0, description="Criteria per decision")
    most_used_method: str = Field(
        default=ScoringMethod.MATRIX.value,
        description="Most frequent scoring method",
    )
    recent_decisions: int = Field(
        default=0,
        description="Decisions created within the trailing window, today included",
    )


def local_date(moment: datetime, tz: tzinfo | None = None) -> date:
    """Calendar date of a timestamp in the given (or system local) timezone.

    Naive timestamps are taken to already be local.
    """
    if moment.tzinfo is None:
        return moment.date()
    return moment.astimezone(tz).date()


def is_recent(
    decision: Decision,
    today: date,
    window_days: int = DEFAULT_RECENT_WINDOW_DAYS,
    tz: tzinfo | None = None,
) -> bool:
    """Check a decision was created in the last ``window_days`` calendar days.

    The window ends with today and counts today as its first day, so the
    default covers today and the six days before it. Future dates are not
    recent.
    """
    created = local_date(decision.created_at, tz)
    return today - timedelta(days=window_days - 1) <= created <= today


def get_statistics(
    decisions: Sequence[Decision],
    today: date | None = None,
    window_days: int = DEFAULT_RECENT_WINDOW_DAYS,
    tz: tzinfo | None = None,
) -> DecisionStatistics:
    """Compute summary statistics for a collection of decisions.

    Args:
        decisions: Decisions to summarize
        today: Reference day for the recent window (default: local today)
        window_days: Calendar days in the recent window, today included
        tz: Timezone for calendar dates (default: system local)

    Returns:
        DecisionStatistics; all zero for an empty collection
    """
    today = today or datetime.now(tz).date()

    total = len(decisions)
    completed = sum(1 for d in decisions if d.is_completed)
    total_options = sum(len(d.options) for d in decisions)
    total_criteria = sum(len(d.criteria) for d in decisions)

    # Counter keeps first-seen order, so ties go to the earliest method
    methods = Counter(d.selected_method for d in decisions)
    most_used = (
        methods.most_common(1)[0][0] if methods else ScoringMethod.MATRIX.value
    )

    return DecisionStatistics(
        total_decisions=total,
        completed_decisions=completed,
        active_decisions=total - completed,
        total_options=total_options,
        total_criteria=total_criteria,
        average_options=total_options / total if total else 0.0,
        average_criteria=total_criteria / total if total else 0.0,
        most_used_method=most_used,
        recent_decisions=sum(
            1 for d in decisions if is_recent(d, today, window_days, tz)
        ),
    )
