"""Pytest configuration and fixtures."""

from datetime import UTC, datetime
from uuid import UUID

import pytest

from decision_master.models.criterion import Criterion
from decision_master.models.decision import Decision
from decision_master.models.option import Option
from decision_master.repositories.decision_repo import PersistenceError


class InMemoryStore:
    """DecisionStore keeping decisions in a dict, with switchable failures."""

    def __init__(self):
        self.decisions: dict[UUID, Decision] = {}
        self.fail_saves = False
        self.fail_deletes = False
        self.save_calls = 0

    async def save(self, decision: Decision) -> None:
        self.save_calls += 1
        if self.fail_saves:
            raise PersistenceError("disk full")
        self.decisions[decision.id] = decision

    async def delete(self, decision_id: UUID) -> bool:
        if self.fail_deletes:
            raise PersistenceError("database is locked")
        return self.decisions.pop(decision_id, None) is not None

    async def get(self, decision_id: UUID) -> Decision | None:
        return self.decisions.get(decision_id)

    async def list_all(self) -> list[Decision]:
        return sorted(
            self.decisions.values(), key=lambda d: d.created_at, reverse=True
        )


@pytest.fixture
def store() -> InMemoryStore:
    """Create an empty in-memory store."""
    return InMemoryStore()


@pytest.fixture
def created_at() -> datetime:
    """Fixed creation timestamp for export tests."""
    return datetime(2026, 1, 18, 14, 5, tzinfo=UTC)


@pytest.fixture
def car_decision(created_at: datetime) -> Decision:
    """'Pick a car' with options A and B, one criterion and full scores."""
    decision = Decision(title="Pick a car", created_at=created_at)
    option_a = decision.add_option(Option(name="A"))
    option_b = decision.add_option(Option(name="B"))
    price = decision.add_criterion(Criterion(name="Price", weight=10))
    decision.set_score(option_a, price, 8.0)
    decision.set_score(option_b, price, 3.0)
    return decision


@pytest.fixture
def matrix_decision(created_at: datetime) -> Decision:
    """Three options and two criteria, fully scored."""
    decision = Decision(
        title="Choose a laptop",
        goal="Replace the old work machine",
        created_at=created_at,
    )
    options = [decision.add_option(Option(name=n)) for n in ("Alpha", "Beta", "Gamma")]
    cost = decision.add_criterion(Criterion(name="Cost", weight=8))
    battery = decision.add_criterion(Criterion(name="Battery Life", weight=3))

    for option, (cost_score, battery_score) in zip(
        options, [(7.0, 9.0), (9.0, 4.0), (5.0, 10.0)], strict=True
    ):
        decision.set_score(option, cost, cost_score)
        decision.set_score(option, battery, battery_score)
    return decision
