"""Weighted-sum scoring engine."""

from decision_master.scoring.engine import (
    RankedOption,
    calculate_option_total,
    is_option_scored,
    is_scoring_complete,
    rank_options,
    recompute_totals,
    scoring_progress,
    winner,
)

__all__ = [
    "RankedOption",
    "calculate_option_total",
    "is_option_scored",
    "is_scoring_complete",
    "rank_options",
    "recompute_totals",
    "scoring_progress",
    "winner",
]
