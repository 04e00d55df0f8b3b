"""Tests for DecisionService."""

from uuid import uuid4

import pytest

from decision_master.catalog import get_template
from decision_master.models import Decision
from decision_master.services import (
    DecisionService,
    DeleteFailedError,
    NotFoundError,
    SaveFailedError,
    ValidationFailedError,
)


@pytest.fixture
def service(store):
    """Create a DecisionService over the in-memory store."""
    return DecisionService(store)


@pytest.fixture
async def saved_car(store, car_decision) -> Decision:
    """The car decision, already persisted."""
    await store.save(car_decision)
    store.save_calls = 0
    return car_decision


class TestCreateDecision:
    """Tests for creating decisions."""

    async def test_creates_and_saves(self, service, store):
        """A valid title creates a saved decision."""
        decision = await service.create_decision("  Where to live  ", goal="Short commute")

        assert decision.title == "Where to live"
        assert store.decisions[decision.id] is decision
        assert decision.is_completed is False

    @pytest.mark.parametrize("title", ["", "x", "t" * 101])
    async def test_rejects_bad_title(self, service, store, title):
        """Titles outside 2-100 characters are rejected before saving."""
        with pytest.raises(ValidationFailedError):
            await service.create_decision(title)
        assert store.save_calls == 0

    async def test_rejects_long_goal(self, service):
        """Goals over 500 characters are rejected."""
        with pytest.raises(ValidationFailedError):
            await service.create_decision("Title", goal="g" * 501)

    async def test_save_failure(self, service, store):
        """A rejected save surfaces as SaveFailedError."""
        store.fail_saves = True
        with pytest.raises(SaveFailedError) as exc_info:
            await service.create_decision("Title")
        assert exc_info.value.description.startswith("Failed to save")
        assert store.decisions == {}

    async def test_from_template(self, service, store):
        """Templates produce a saved, pre-filled decision."""
        decision = await service.create_from_template(get_template("Apartment Rental"))

        assert decision.id in store.decisions
        assert len(decision.options) == 3
        assert len(decision.criteria) == 6


class TestGetDecision:
    """Tests for loading decisions."""

    async def test_not_found(self, service):
        """Unknown IDs raise NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.get_decision(uuid4())

    async def test_list(self, service, saved_car):
        """Listing returns stored decisions."""
        assert await service.list_decisions() == [saved_car]


class TestOptions:
    """Tests for adding and removing options."""

    async def test_add_option(self, service, store, saved_car):
        """A valid option is appended and saved."""
        option = await service.add_option(saved_car, " Car C ")

        assert option.name == "Car C"
        assert saved_car.option_names == ["A", "B", "Car C"]
        assert option.decision_id == saved_car.id
        assert store.save_calls == 1

    async def test_duplicate_is_rejected(self, service, store, saved_car):
        """Exact duplicates are rejected without saving."""
        await service.add_option(saved_car, "Car C")
        store.save_calls = 0

        with pytest.raises(ValidationFailedError, match="already exists"):
            await service.add_option(saved_car, "Car C")
        assert store.save_calls == 0
        assert saved_car.option_names == ["A", "B", "Car C"]

    async def test_option_limit(self, service, saved_car):
        """A 21st option is rejected."""
        for i in range(18):
            await service.add_option(saved_car, f"Option {i}")
        assert len(saved_car.options) == 20

        with pytest.raises(ValidationFailedError, match="Maximum 20 options"):
            await service.add_option(saved_car, "One too many")
        assert len(saved_car.options) == 20

    async def test_add_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save removes the new option again."""
        store.fail_saves = True
        with pytest.raises(SaveFailedError):
            await service.add_option(saved_car, "Car C")
        assert saved_car.option_names == ["A", "B"]

    async def test_remove_option_drops_scores(self, service, saved_car):
        """Removing an option removes its scores from the criteria too."""
        option_a = saved_car.options[0]
        await service.remove_option(saved_car, option_a.id)

        assert saved_car.option_names == ["B"]
        assert len(saved_car.criteria[0].scores) == 1

    async def test_remove_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save restores the option, in place, with its scores."""
        option_a = saved_car.options[0]
        store.fail_saves = True

        with pytest.raises(DeleteFailedError):
            await service.remove_option(saved_car, option_a.id)

        assert saved_car.option_names == ["A", "B"]
        assert saved_car.score_for(option_a.id, saved_car.criteria[0].id).value == 8.0
        assert len(saved_car.criteria[0].scores) == 2

    async def test_remove_unknown_option(self, service, saved_car):
        """Removing an option the decision does not have raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.remove_option(saved_car, uuid4())


class TestCriteria:
    """Tests for adding and removing criteria."""

    async def test_add_criterion(self, service, saved_car):
        """A valid criterion is appended with its weight."""
        criterion = await service.add_criterion(saved_car, "Comfort", weight=7)

        assert saved_car.criteria_names == ["Price", "Comfort"]
        assert criterion.weight == 7

    async def test_default_weight(self, service, saved_car):
        """Weight defaults to 5."""
        criterion = await service.add_criterion(saved_car, "Comfort")
        assert criterion.weight == 5

    @pytest.mark.parametrize("weight", [0, 11])
    async def test_rejects_bad_weight(self, service, saved_car, weight):
        """Weights outside 1-10 are rejected."""
        with pytest.raises(ValidationFailedError):
            await service.add_criterion(saved_car, "Comfort", weight=weight)
        assert saved_car.criteria_names == ["Price"]

    async def test_criteria_limit(self, service, saved_car):
        """A 16th criterion is rejected."""
        for i in range(14):
            await service.add_criterion(saved_car, f"Criterion {i}")

        with pytest.raises(ValidationFailedError, match="Maximum 15 criteria"):
            await service.add_criterion(saved_car, "One too many")

    async def test_add_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save removes the new criterion again."""
        store.fail_saves = True
        with pytest.raises(SaveFailedError):
            await service.add_criterion(saved_car, "Comfort")
        assert saved_car.criteria_names == ["Price"]

    async def test_remove_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save restores the criterion with its scores."""
        price = saved_car.criteria[0]
        store.fail_saves = True

        with pytest.raises(DeleteFailedError):
            await service.remove_criterion(saved_car, price.id)

        assert saved_car.criteria_names == ["Price"]
        assert all(o.score_for(price.id) is not None for o in saved_car.options)

    async def test_remove_criterion(self, service, saved_car):
        """Removing a criterion removes the scores recorded against it."""
        price = saved_car.criteria[0]
        await service.remove_criterion(saved_car, price.id)

        assert saved_car.criteria == []
        assert saved_car.score_count == 0


class TestScores:
    """Tests for recording scores."""

    async def test_updates_existing_score(self, service, saved_car):
        """Setting a score twice keeps one score per pair."""
        option_a = saved_car.options[0]
        price = saved_car.criteria[0]

        await service.set_score(saved_car, option_a.id, price.id, 6.0)

        assert saved_car.score_count == 2
        assert option_a.score_for(price.id).value == 6.0

    async def test_does_not_touch_cached_total(self, service, saved_car):
        """Scores are saved without recomputing totals."""
        option_a = saved_car.options[0]
        await service.set_score(saved_car, option_a.id, saved_car.criteria[0].id, 6.0)
        assert option_a.total_score == 0.0

    @pytest.mark.parametrize("value", [0.5, 10.5])
    async def test_rejects_out_of_range(self, service, saved_car, value):
        """Scores outside 1-10 are rejected."""
        with pytest.raises(ValidationFailedError):
            await service.set_score(
                saved_car, saved_car.options[0].id, saved_car.criteria[0].id, value
            )

    async def test_unknown_criterion(self, service, saved_car):
        """Scoring against a foreign criterion raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.set_score(saved_car, saved_car.options[0].id, uuid4(), 5.0)

    async def test_update_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save restores the previous value."""
        option_a = saved_car.options[0]
        price = saved_car.criteria[0]
        store.fail_saves = True

        with pytest.raises(SaveFailedError):
            await service.set_score(saved_car, option_a.id, price.id, 2.0)
        assert option_a.score_for(price.id).value == 8.0

    async def test_new_score_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save removes a newly created score."""
        comfort = await service.add_criterion(saved_car, "Comfort")
        store.fail_saves = True

        with pytest.raises(SaveFailedError):
            await service.set_score(saved_car, saved_car.options[0].id, comfort.id, 4.0)
        assert saved_car.options[0].score_for(comfort.id) is None
        assert comfort.scores == []


class TestCalculateScores:
    """Tests for calculating totals."""

    async def test_calculates_and_saves(self, service, store, saved_car):
        """Totals are recomputed and persisted."""
        totals = await service.calculate_scores(saved_car)

        option_a, option_b = saved_car.options
        assert totals == {option_a.id: 80.0, option_b.id: 30.0}
        assert store.save_calls == 1
        assert saved_car.is_completed is False

    async def test_mark_completed(self, service, saved_car):
        """Calculation can also complete the decision."""
        await service.calculate_scores(saved_car, mark_completed=True)
        assert saved_car.is_completed is True
        assert saved_car.status_label == "Completed"

    async def test_noop_without_criteria(self, service, store):
        """Nothing to score means nothing is saved."""
        decision = await service.create_decision("Empty")
        store.save_calls = 0

        assert await service.calculate_scores(decision) == {}
        assert store.save_calls == 0

    async def test_mark_completed_without_criteria(self, service, store):
        """Completion is still saved when there is nothing to total."""
        decision = await service.create_decision("Empty")
        store.save_calls = 0

        assert await service.calculate_scores(decision, mark_completed=True) == {}
        assert decision.is_completed is True
        assert store.save_calls == 1

    async def test_mark_completed_without_criteria_rolls_back(self, service, store):
        """A failed save leaves the empty decision in progress."""
        decision = await service.create_decision("Empty")
        store.fail_saves = True

        with pytest.raises(SaveFailedError):
            await service.calculate_scores(decision, mark_completed=True)
        assert decision.is_completed is False

    async def test_rolls_back_on_save_failure(self, service, store, saved_car):
        """A failed save restores the previous totals and status."""
        store.fail_saves = True
        with pytest.raises(SaveFailedError):
            await service.calculate_scores(saved_car, mark_completed=True)

        assert [o.total_score for o in saved_car.options] == [0.0, 0.0]
        assert saved_car.is_completed is False


class TestCompletionAndDeletion:
    """Tests for completing and deleting decisions."""

    async def test_mark_completed_rolls_back(self, service, store, saved_car):
        """A failed save reverts the completion flag."""
        store.fail_saves = True
        with pytest.raises(SaveFailedError):
            await service.mark_completed(saved_car)
        assert saved_car.is_completed is False

    async def test_delete(self, service, store, saved_car):
        """Deleting removes the decision from the store."""
        await service.delete_decision(saved_car.id)
        assert saved_car.id not in store.decisions

    async def test_delete_missing(self, service):
        """Deleting an unknown decision raises NotFoundError."""
        with pytest.raises(NotFoundError):
            await service.delete_decision(uuid4())

    async def test_delete_failure(self, service, store, saved_car):
        """A failed delete keeps the decision and raises DeleteFailedError."""
        store.fail_deletes = True
        with pytest.raises(DeleteFailedError):
            await service.delete_decision(saved_car.id)
        assert saved_car.id in store.decisions
