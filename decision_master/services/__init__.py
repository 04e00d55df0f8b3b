"""Decision workflow service and its application errors."""

from decision_master.services.decision_service import DecisionService
from decision_master.services.errors import (
    AppError,
    DeleteFailedError,
    NotFoundError,
    SaveFailedError,
    ValidationFailedError,
)

__all__ = [
    "AppError",
    "DecisionService",
    "DeleteFailedError",
    "NotFoundError",
    "SaveFailedError",
    "ValidationFailedError",
]
