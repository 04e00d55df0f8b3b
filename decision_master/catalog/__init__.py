"""Catalog of built-in decision templates."""

from decision_master.catalog.templates import (
    TEMPLATES,
    DecisionTemplate,
    TemplateCriterion,
    create_decision_from_template,
    get_template,
)

__all__ = [
    "TEMPLATES",
    "DecisionTemplate",
    "TemplateCriterion",
    "create_decision_from_template",
    "get_template",
]
