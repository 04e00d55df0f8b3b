"""Pre-mutation validation rules for decisions, options and criteria."""

from decision_master.validation.rules import (
    MAX_CRITERIA,
    MAX_GOAL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_OPTIONS,
    MIN_CRITERIA,
    MIN_NAME_LENGTH,
    MIN_OPTIONS,
    ValidationFailure,
    ValidationResult,
    validate_criteria_name,
    validate_decision_flow,
    validate_decision_title,
    validate_goal,
    validate_option_name,
    validate_score,
    validate_weight,
)

__all__ = [
    "MAX_CRITERIA",
    "MAX_GOAL_LENGTH",
    "MAX_NAME_LENGTH",
    "MAX_OPTIONS",
    "MIN_CRITERIA",
    "MIN_NAME_LENGTH",
    "MIN_OPTIONS",
    "ValidationFailure",
    "ValidationResult",
    "validate_criteria_name",
    "validate_decision_flow",
    "validate_decision_title",
    "validate_goal",
    "validate_option_name",
    "validate_score",
    "validate_weight",
]
