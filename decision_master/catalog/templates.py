"""Built-in decision templates.

Each template pre-fills a decision with placeholder options and a set
of weighted criteria for a common kind of choice.
"""

from pydantic import BaseModel, ConfigDict, Field

from decision_master.models.criterion import Criterion
from decision_master.models.decision import Decision, ScoringMethod
from decision_master.models.option import Option


class TemplateCriterion(BaseModel):
    """A criterion definition within a template."""

    model_config = ConfigDict(frozen=True)

    name: str
    weight: int = Field(ge=1, le=10)


class DecisionTemplate(BaseModel):
    """A canned decision with options and weighted criteria."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Template name, used as the decision title")
    description: str = Field(description="Used as the decision goal")
    icon: str = Field(description="Icon identifier for clients")
    options: list[str] = Field(description="Placeholder option names")
    criteria: list[TemplateCriterion] = Field(description="Weighted criteria")


def _template(
    name: str,
    description: str,
    icon: str,
    options: list[str],
    criteria: list[tuple[str, int]],
) -> DecisionTemplate:
    return DecisionTemplate(
        name=name,
        description=description,
        icon=icon,
        options=options,
        criteria=[TemplateCriterion(name=n, weight=w) for n, w in criteria],
    )


TEMPLATES: list[DecisionTemplate] = [
    _template(
        "Job Selection",
        "Choose between job offers",
        "briefcase.fill",
        ["Company A", "Company B", "Company C"],
        [
            ("Salary", 9),
            ("Work-Life Balance", 8),
            ("Career Growth", 7),
            ("Location", 6),
            ("Benefits", 7),
            ("Company Culture", 8),
        ],
    ),
    _template(
        "Apartment Rental",
        "Find the perfect apartment",
        "house.fill",
        ["Apartment A", "Apartment B", "Apartment C"],
        [
            ("Price", 9),
            ("Location", 8),
            ("Size", 7),
            ("Amenities", 6),
            ("Transportation", 7),
            ("Safety", 9),
        ],
    ),
    _template(
        "Vacation Destination",
        "Plan your next trip",
        "airplane",
        ["Destination A", "Destination B", "Destination C"],
        [
            ("Cost", 8),
            ("Weather", 7),
            ("Activities", 8),
            ("Culture", 6),
            ("Food", 7),
            ("Accessibility", 6),
        ],
    ),
    _template(
        "Car Purchase",
        "Select your next vehicle",
        "car.fill",
        ["Car A", "Car B", "Car C"],
        [
            ("Price", 9),
            ("Fuel Efficiency", 8),
            ("Reliability", 9),
            ("Features", 7),
            ("Safety Rating", 9),
            ("Resale Value", 6),
        ],
    ),
    _template(
        "University Choice",
        "Choose your educational path",
        "graduationcap.fill",
        ["University A", "University B", "University C"],
        [
            ("Academic Reputation", 9),
            ("Cost", 8),
            ("Location", 7),
            ("Program Quality", 9),
            ("Campus Life", 6),
            ("Career Services", 7),
        ],
    ),
    _template(
        "Restaurant Selection",
        "Pick where to dine",
        "fork.knife",
        ["Restaurant A", "Restaurant B", "Restaurant C"],
        [
            ("Food Quality", 9),
            ("Price", 7),
            ("Ambiance", 6),
            ("Service", 7),
            ("Location", 6),
            ("Dietary Options", 5),
        ],
    ),
]


def get_template(name: str) -> DecisionTemplate | None:
    """Look up a template by name (case-insensitive)."""
    wanted = name.strip().casefold()
    return next((t for t in TEMPLATES if t.name.casefold() == wanted), None)


def create_decision_from_template(template: DecisionTemplate) -> Decision:
    """Build a new, unsaved decision pre-filled from a template."""
    decision = Decision(
        title=template.name,
        goal=template.description,
        selected_method=ScoringMethod.MATRIX.value,
    )
    for option_name in template.options:
        decision.add_option(Option(name=option_name))
    for item in template.criteria:
        decision.add_criterion(Criterion(name=item.name, weight=item.weight))
    return decision
