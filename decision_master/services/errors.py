"""Application errors raised by the decision workflow."""

from uuid import UUID


class AppError(Exception):
    """Base class for errors shown to the user."""

    prefix = "An error occurred"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def description(self) -> str:
        """User-facing description including the error category."""
        return f"{self.prefix}: {self.message}"


class ValidationFailedError(AppError):
    """A validation rule rejected the requested change."""

    prefix = "Validation error"


class SaveFailedError(AppError):
    """Persisting a change failed; the in-memory change was rolled back."""

    prefix = "Failed to save"


class DeleteFailedError(AppError):
    """Persisting a deletion failed; the in-memory change was rolled back."""

    prefix = "Failed to delete"


class NotFoundError(AppError):
    """A decision, option or criterion does not exist."""

    prefix = "Not found"

    def __init__(self, entity: str, entity_id: UUID):
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id
