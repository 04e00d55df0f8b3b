"""Validation rules applied before the decision model is mutated.

Every rule is a pure function. Simple range checks return a bool; name
and structure checks return a ValidationResult carrying the failure code
and a message suitable for showing to the user.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from decision_master.models.criterion import MAX_WEIGHT, MIN_WEIGHT
from decision_master.models.decision import Decision
from decision_master.models.score import MAX_SCORE, MIN_SCORE

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_GOAL_LENGTH = 500
MIN_OPTIONS = 2
MAX_OPTIONS = 20
MIN_CRITERIA = 1
MAX_CRITERIA = 15


class ValidationFailure(str, Enum):
    """Reason a validation rule rejected its input."""

    EMPTY = "empty"
    TOO_SHORT = "too_short"
    TOO_LONG = "too_long"
    DUPLICATE = "duplicate"
    TOO_FEW_OPTIONS = "too_few_options"
    TOO_MANY_OPTIONS = "too_many_options"
    NO_CRITERIA = "no_criteria"
    TOO_MANY_CRITERIA = "too_many_criteria"
    DUPLICATE_OPTION_NAMES = "duplicate_option_names"
    DUPLICATE_CRITERIA_NAMES = "duplicate_criteria_names"


class ValidationResult(BaseModel):
    """Outcome of a validation rule."""

    model_config = ConfigDict(frozen=True)

    is_valid: bool = Field(description="Whether the input passed")
    failure: ValidationFailure | None = Field(
        default=None, description="Failure code when rejected"
    )
    message: str | None = Field(default=None, description="User-facing reason")

    @classmethod
    def ok(cls) -> "ValidationResult":
        """Create a passing result."""
        return cls(is_valid=True)

    @classmethod
    def fail(cls, failure: ValidationFailure, message: str) -> "ValidationResult":
        """Create a failing result."""
        return cls(is_valid=False, failure=failure, message=message)

    @property
    def error_message(self) -> str | None:
        """Message for a failed result, None on success."""
        return None if self.is_valid else self.message


def validate_decision_title(title: str) -> bool:
    """Check a decision title is 2-100 characters once trimmed."""
    trimmed = title.strip()
    return MIN_NAME_LENGTH <= len(trimmed) <= MAX_NAME_LENGTH


def validate_goal(goal: str) -> bool:
    """Check a goal fits in 500 characters once trimmed."""
    return len(goal.strip()) <= MAX_GOAL_LENGTH


def _validate_name(name: str, existing: list[str], label: str) -> ValidationResult:
    trimmed = name.strip()

    if not trimmed:
        return ValidationResult.fail(
            ValidationFailure.EMPTY, f"{label} name cannot be empty"
        )
    if len(trimmed) < MIN_NAME_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.TOO_SHORT,
            f"{label} name must be at least {MIN_NAME_LENGTH} characters",
        )
    if len(trimmed) > MAX_NAME_LENGTH:
        return ValidationResult.fail(
            ValidationFailure.TOO_LONG,
            f"{label} name cannot exceed {MAX_NAME_LENGTH} characters",
        )
    if trimmed in existing:
        return ValidationResult.fail(
            ValidationFailure.DUPLICATE, f"This {label.lower()} already exists"
        )
    return ValidationResult.ok()


def validate_option_name(name: str, existing_options: list[str]) -> ValidationResult:
    """Validate a new option name against the decision's existing names.

    Duplicate detection is a case-sensitive exact match against the
    already trimmed existing names.

    Args:
        name: Candidate option name
        existing_options: Trimmed names of the decision's options

    Returns:
        ValidationResult with EMPTY, TOO_SHORT, TOO_LONG or DUPLICATE on failure
    """
    return _validate_name(name, existing_options, "Option")


def validate_criteria_name(name: str, existing_criteria: list[str]) -> ValidationResult:
    """Validate a new criterion name against the decision's existing names."""
    return _validate_name(name, existing_criteria, "Criteria")


def validate_weight(weight: int) -> bool:
    """Check a weight is within 1-10."""
    return MIN_WEIGHT <= weight <= MAX_WEIGHT


def validate_score(score: float) -> bool:
    """Check a score value is within 1.0-10.0."""
    return MIN_SCORE <= score <= MAX_SCORE


def _has_duplicates(names: list[str]) -> bool:
    return len(names) != len(set(names))


def validate_decision_flow(decision: Decision) -> ValidationResult:
    """Check a decision is ready to be scored.

    Args:
        decision: Decision with its options and criteria

    Returns:
        ValidationResult; the first failing structural rule wins
    """
    option_count = len(decision.options)
    if option_count < MIN_OPTIONS:
        return ValidationResult.fail(
            ValidationFailure.TOO_FEW_OPTIONS,
            f"At least {MIN_OPTIONS} options are required",
        )
    if option_count > MAX_OPTIONS:
        return ValidationResult.fail(
            ValidationFailure.TOO_MANY_OPTIONS,
            f"Maximum {MAX_OPTIONS} options allowed",
        )

    criteria_count = len(decision.criteria)
    if criteria_count < MIN_CRITERIA:
        return ValidationResult.fail(
            ValidationFailure.NO_CRITERIA, "At least 1 criterion is required"
        )
    if criteria_count > MAX_CRITERIA:
        return ValidationResult.fail(
            ValidationFailure.TOO_MANY_CRITERIA,
            f"Maximum {MAX_CRITERIA} criteria allowed",
        )

    if _has_duplicates(decision.option_names):
        return ValidationResult.fail(
            ValidationFailure.DUPLICATE_OPTION_NAMES,
            "Duplicate option names are not allowed",
        )
    if _has_duplicates(decision.criteria_names):
        return ValidationResult.fail(
            ValidationFailure.DUPLICATE_CRITERIA_NAMES,
            "Duplicate criteria names are not allowed",
        )

    return ValidationResult.ok()
