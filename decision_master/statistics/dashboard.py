"""Dashboard queries: filtering, sorting and cross-decision comparison."""

from collections.abc import Sequence
from datetime import date, datetime, tzinfo
from typing import Literal

from pydantic import BaseModel, Field

from decision_master.models.decision import Decision
from decision_master.scoring.engine import scoring_progress
from decision_master.statistics.aggregator import DEFAULT_RECENT_WINDOW_DAYS, is_recent

StatusFilter = Literal["all", "active", "completed", "recent"]
SortOrder = Literal["date", "title", "progress"]


class ComparisonSummary(BaseModel):
    """Comparison of winners across decisions."""

    decisions_with_winner: int = Field(default=0, description="Decisions with a winner")
    average_winning_score: float = Field(
        default=0.0, description="Mean total score of the winners"
    )
    highest_winner: str | None = Field(
        default=None,
        description="Best winner as 'name (score)', None if no decision has one",
    )
    total_options: int = Field(default=0, description="Options across all decisions")


def filter_decisions(
    decisions: Sequence[Decision],
    status: StatusFilter = "all",
    search: str | None = None,
    sort: SortOrder = "date",
    today: date | None = None,
    window_days: int = DEFAULT_RECENT_WINDOW_DAYS,
    tz: tzinfo | None = None,
) -> list[Decision]:
    """Filter, search and sort decisions for the dashboard list.

    Args:
        decisions: All decisions
        status: all, active, completed, or recent
        search: Case-insensitive text matched against title and goal
        sort: date (newest first), title (A-Z), or progress (most scored first)
        today: Reference day for the recent filter
        window_days: Length of the recent window
        tz: Timezone for calendar dates

    Returns:
        New list of matching decisions
    """
    today = today or datetime.now(tz).date()
    result = list(decisions)

    if status == "active":
        result = [d for d in result if not d.is_completed]
    elif status == "completed":
        result = [d for d in result if d.is_completed]
    elif status == "recent":
        result = [d for d in result if is_recent(d, today, window_days, tz)]

    if search:
        needle = search.casefold()
        result = [
            d
            for d in result
            if needle in d.title.casefold() or needle in d.goal.casefold()
        ]

    if sort == "date":
        result.sort(key=lambda d: d.created_at, reverse=True)
    elif sort == "title":
        result.sort(key=lambda d: d.title)
    elif sort == "progress":
        result.sort(key=scoring_progress, reverse=True)

    return result


def compare_decisions(decisions: Sequence[Decision]) -> ComparisonSummary:
    """Summarize winners across decisions."""
    winners = [d.winner for d in decisions]
    winners = [w for w in winners if w is not None]

    highest = None
    if winners:
        best = max(winners, key=lambda w: w.total_score)
        highest = f"{best.name} ({int(best.total_score)})"

    return ComparisonSummary(
        decisions_with_winner=len(winners),
        average_winning_score=(
            sum(w.total_score for w in winners) / len(winners) if winners else 0.0
        ),
        highest_winner=highest,
        total_options=sum(len(d.options) for d in decisions),
    )
