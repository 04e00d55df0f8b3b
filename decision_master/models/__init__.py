"""Domain models for Decision Master.

This module exports all entities of the decision matrix:
- BaseEntity: Base class with id, timestamps
- Decision: A choice session owning options and criteria
- Option: A candidate being evaluated
- Criterion: A weighted evaluation factor
- Score: The rating of one option against one criterion
"""

from decision_master.models.base import BaseEntity
from decision_master.models.criterion import (
    DEFAULT_WEIGHT,
    MAX_WEIGHT,
    MIN_WEIGHT,
    Criterion,
    clamp_weight,
)
from decision_master.models.decision import Decision, ScoringMethod
from decision_master.models.option import Option
from decision_master.models.score import (
    DEFAULT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    Score,
    clamp_score,
)

__all__ = [
    # Base
    "BaseEntity",
    # Decision
    "Decision",
    "ScoringMethod",
    # Matrix
    "Option",
    "Criterion",
    "Score",
    # Bounds
    "MIN_WEIGHT",
    "MAX_WEIGHT",
    "DEFAULT_WEIGHT",
    "MIN_SCORE",
    "MAX_SCORE",
    "DEFAULT_SCORE",
    "clamp_weight",
    "clamp_score",
]
