"""Statistics and dashboard queries over collections of decisions."""

from decision_master.statistics.aggregator import (
    DEFAULT_RECENT_WINDOW_DAYS,
    DecisionStatistics,
    get_statistics,
    is_recent,
    local_date,
)
from decision_master.statistics.dashboard import (
    ComparisonSummary,
    SortOrder,
    StatusFilter,
    compare_decisions,
    filter_decisions,
)

__all__ = [
    "DEFAULT_RECENT_WINDOW_DAYS",
    "ComparisonSummary",
    "DecisionStatistics",
    "SortOrder",
    "StatusFilter",
    "compare_decisions",
    "filter_decisions",
    "get_statistics",
    "is_recent",
    "local_date",
]
