"""Tests for the weighted-sum scoring engine."""

import pytest

from decision_master.models import Criterion, Decision, Option
from decision_master.scoring import (
    calculate_option_total,
    is_option_scored,
    is_scoring_complete,
    rank_options,
    recompute_totals,
    scoring_progress,
    winner,
)


class TestCalculateOptionTotal:
    """Tests for calculate_option_total."""

    def test_sums_value_times_weight(self, matrix_decision):
        """Total is the sum of value x weight over criteria."""
        alpha = matrix_decision.options[0]
        total = calculate_option_total(alpha, matrix_decision.criteria)
        assert total == pytest.approx(7.0 * 8 + 9.0 * 3)
        assert alpha.total_score == pytest.approx(83.0)

    def test_missing_scores_contribute_zero(self):
        """Partial scoring yields a partial total."""
        decision = Decision(title="Partial")
        option = decision.add_option(Option(name="Only"))
        price = decision.add_criterion(Criterion(name="Price", weight=4))
        decision.add_criterion(Criterion(name="Style", weight=9))
        decision.set_score(option, price, 2.5)

        assert calculate_option_total(option, decision.criteria) == pytest.approx(10.0)

    def test_no_criteria_gives_zero(self):
        """An option scored against nothing totals zero."""
        option = Option(name="Lonely", total_score=12.0)
        assert calculate_option_total(option, []) == 0.0
        assert option.total_score == 0.0

    def test_overwrites_previous_total(self, car_decision):
        """Recalculation replaces the cached value."""
        option = car_decision.options[0]
        option.total_score = 999.0
        calculate_option_total(option, car_decision.criteria)
        assert option.total_score == pytest.approx(80.0)


class TestRecomputeTotals:
    """Tests for recompute_totals."""

    def test_car_scenario(self, car_decision):
        """A=8 and B=3 on Price (weight 10) give 80 and 30."""
        totals = recompute_totals(car_decision)
        option_a, option_b = car_decision.options

        assert totals == {option_a.id: pytest.approx(80.0), option_b.id: pytest.approx(30.0)}
        assert winner(car_decision) is option_a

    def test_totals_are_stale_until_recomputed(self, car_decision):
        """Changing a score leaves the cached total untouched."""
        recompute_totals(car_decision)
        option_a = car_decision.options[0]
        car_decision.set_score(option_a, car_decision.criteria[0], 1.0)

        assert option_a.total_score == pytest.approx(80.0)
        recompute_totals(car_decision)
        assert option_a.total_score == pytest.approx(10.0)

    def test_matrix_winner(self, matrix_decision):
        """The highest recomputed total wins."""
        recompute_totals(matrix_decision)
        assert winner(matrix_decision).name == "Beta"


class TestCoverage:
    """Tests for scoring coverage checks."""

    def test_option_scored(self, car_decision):
        """An option with one score per criterion is scored."""
        assert is_option_scored(car_decision.options[0], car_decision.criteria) is True

    def test_complete_when_every_option_scored(self, car_decision):
        """Scoring is complete when every option is covered."""
        assert is_scoring_complete(car_decision) is True

    def test_incomplete_after_adding_criterion(self, car_decision):
        """A new unscored criterion makes scoring incomplete."""
        car_decision.add_criterion(Criterion(name="Comfort"))
        assert is_scoring_complete(car_decision) is False
        assert winner(car_decision) is None

    def test_empty_decision_is_not_complete(self):
        """No options means nothing to complete."""
        assert is_scoring_complete(Decision(title="Empty")) is False

    def test_winner_available_once_coverage_restored(self, car_decision):
        """Scoring the new criterion for every option restores the winner."""
        comfort = car_decision.add_criterion(Criterion(name="Comfort", weight=1))
        car_decision.set_score(car_decision.options[0], comfort, 1.0)
        assert winner(car_decision) is None

        car_decision.set_score(car_decision.options[1], comfort, 10.0)
        recompute_totals(car_decision)
        assert winner(car_decision) is car_decision.options[0]


class TestScoringProgress:
    """Tests for scoring_progress."""

    def test_full_matrix(self, matrix_decision):
        """A fully scored matrix is at 1.0."""
        assert scoring_progress(matrix_decision) == 1.0

    def test_partial_matrix(self, car_decision):
        """Half the cells scored is 0.5."""
        car_decision.add_criterion(Criterion(name="Comfort"))
        assert scoring_progress(car_decision) == pytest.approx(0.5)

    def test_empty_matrix(self):
        """No options or criteria is 0.0, not a division error."""
        assert scoring_progress(Decision(title="Empty")) == 0.0


class TestRankOptions:
    """Tests for rank_options."""

    def test_orders_by_total_descending(self, matrix_decision):
        """Ranking lists the best option first."""
        recompute_totals(matrix_decision)
        ranking = rank_options(matrix_decision)

        assert [r.name for r in ranking] == ["Beta", "Alpha", "Gamma"]
        assert [r.rank for r in ranking] == [1, 2, 3]

    def test_share_of_total(self, car_decision):
        """Shares are percentages of the total sum."""
        recompute_totals(car_decision)
        ranking = rank_options(car_decision)

        assert ranking[0].share_percent == pytest.approx(80 / 110 * 100)
        assert sum(r.share_percent for r in ranking) == pytest.approx(100.0)

    def test_ties_keep_insertion_order(self, car_decision):
        """Equal totals keep insertion order."""
        for option in car_decision.options:
            option.total_score = 42.0
        assert [r.name for r in rank_options(car_decision)] == ["A", "B"]

    def test_zero_sum_has_zero_shares(self, car_decision):
        """Unscored totals produce 0% shares."""
        assert all(r.share_percent == 0.0 for r in rank_options(car_decision))
