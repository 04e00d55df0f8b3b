"""Repository layer for data access."""

from decision_master.repositories.decision_repo import (
    DecisionRepository,
    DecisionStore,
    PersistenceError,
)

__all__ = ["DecisionRepository", "DecisionStore", "PersistenceError"]
