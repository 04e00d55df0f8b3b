"""Decision workflow service.

Applies the validate -> mutate -> persist sequence for every change to a
decision. When the store rejects a save, the in-memory mutation that was
just applied is undone so the model never diverges from what is stored.
"""

from uuid import UUID

import structlog

from decision_master.catalog.templates import (
    DecisionTemplate,
    create_decision_from_template,
)
from decision_master.models.criterion import DEFAULT_WEIGHT, Criterion
from decision_master.models.decision import Decision
from decision_master.models.option import Option
from decision_master.models.score import Score
from decision_master.repositories.decision_repo import DecisionStore, PersistenceError
from decision_master.scoring.engine import recompute_totals
from decision_master.services.errors import (
    DeleteFailedError,
    NotFoundError,
    SaveFailedError,
    ValidationFailedError,
)
from decision_master.validation.rules import (
    MAX_CRITERIA,
    MAX_GOAL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_OPTIONS,
    MIN_NAME_LENGTH,
    validate_criteria_name,
    validate_decision_title,
    validate_goal,
    validate_option_name,
    validate_score,
    validate_weight,
)

logger = structlog.get_logger()


class DecisionService:
    """Gatekeeper for all decision mutations.

    Every method validates input first, mutates the given decision in
    place, then saves it through the store. Validation failures raise
    ValidationFailedError before anything changes.
    """

    def __init__(self, store: DecisionStore):
        """Initialize the service.

        Args:
            store: Persistence boundary for decisions
        """
        self._store = store

    async def get_decision(self, decision_id: UUID) -> Decision:
        """Load a decision.

        Raises:
            NotFoundError: If no decision has this ID
        """
        decision = await self._store.get(decision_id)
        if decision is None:
            raise NotFoundError("Decision", decision_id)
        return decision

    async def list_decisions(self) -> list[Decision]:
        """Load all decisions, newest first."""
        return await self._store.list_all()

    async def create_decision(self, title: str, goal: str = "") -> Decision:
        """Create and save a new decision.

        Raises:
            ValidationFailedError: If the title or goal is out of bounds
            SaveFailedError: If the decision could not be saved
        """
        if not validate_decision_title(title):
            raise ValidationFailedError(
                f"Title must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters"
            )
        if not validate_goal(goal):
            raise ValidationFailedError(
                f"Goal cannot exceed {MAX_GOAL_LENGTH} characters"
            )

        decision = Decision(title=title.strip(), goal=goal.strip())
        await self._save(decision, "decision")
        logger.info("decision created", decision_id=str(decision.id), title=decision.title)
        return decision

    async def create_from_template(self, template: DecisionTemplate) -> Decision:
        """Create and save a decision pre-filled from a template."""
        decision = create_decision_from_template(template)
        await self._save(decision, "template decision")
        logger.info(
            "decision created from template",
            decision_id=str(decision.id),
            template=template.name,
        )
        return decision

    async def add_option(self, decision: Decision, name: str) -> Option:
        """Validate, append and save a new option.

        Raises:
            ValidationFailedError: If the name is invalid or the option limit is hit
            SaveFailedError: If saving failed (the option is removed again)
        """
        result = validate_option_name(name, decision.option_names)
        if not result.is_valid:
            raise ValidationFailedError(result.message)
        if len(decision.options) >= MAX_OPTIONS:
            raise ValidationFailedError(f"Maximum {MAX_OPTIONS} options allowed")

        option = decision.add_option(Option(name=name.strip()))
        try:
            await self._save(decision, "option")
        except SaveFailedError:
            decision.remove_option(option.id)
            raise

        logger.info("option added", decision_id=str(decision.id), option=option.name)
        return option

    async def remove_option(self, decision: Decision, option_id: UUID) -> Option:
        """Remove an option with its scores and save.

        Raises:
            NotFoundError: If the option is not part of the decision
            DeleteFailedError: If saving failed (the option is restored)
        """
        option = decision.get_option(option_id)
        if option is None:
            raise NotFoundError("Option", option_id)

        index = decision.options.index(option)
        decision.remove_option(option_id)
        try:
            await self._save(decision, "option", deleting=True)
        except DeleteFailedError:
            decision.add_option(option, index)
            raise

        logger.info("option removed", decision_id=str(decision.id), option=option.name)
        return option

    async def add_criterion(
        self,
        decision: Decision,
        name: str,
        weight: int = DEFAULT_WEIGHT,
    ) -> Criterion:
        """Validate, append and save a new criterion.

        Raises:
            ValidationFailedError: If the name or weight is invalid, or the
                criteria limit is hit
            SaveFailedError: If saving failed (the criterion is removed again)
        """
        result = validate_criteria_name(name, decision.criteria_names)
        if not result.is_valid:
            raise ValidationFailedError(result.message)
        if not validate_weight(weight):
            raise ValidationFailedError("Weight must be between 1 and 10")
        if len(decision.criteria) >= MAX_CRITERIA:
            raise ValidationFailedError(f"Maximum {MAX_CRITERIA} criteria allowed")

        criterion = decision.add_criterion(Criterion(name=name.strip(), weight=weight))
        try:
            await self._save(decision, "criterion")
        except SaveFailedError:
            decision.remove_criterion(criterion.id)
            raise

        logger.info(
            "criterion added",
            decision_id=str(decision.id),
            criterion=criterion.name,
            weight=criterion.weight,
        )
        return criterion

    async def remove_criterion(self, decision: Decision, criterion_id: UUID) -> Criterion:
        """Remove a criterion with its scores and save.

        Raises:
            NotFoundError: If the criterion is not part of the decision
            DeleteFailedError: If saving failed (the criterion is restored)
        """
        criterion = decision.get_criterion(criterion_id)
        if criterion is None:
            raise NotFoundError("Criterion", criterion_id)

        index = decision.criteria.index(criterion)
        decision.remove_criterion(criterion_id)
        try:
            await self._save(decision, "criterion", deleting=True)
        except DeleteFailedError:
            decision.add_criterion(criterion, index)
            raise

        logger.info(
            "criterion removed", decision_id=str(decision.id), criterion=criterion.name
        )
        return criterion

    async def set_score(
        self,
        decision: Decision,
        option_id: UUID,
        criterion_id: UUID,
        value: float,
    ) -> Score:
        """Record a score, updating the existing one for the pair in place.

        The option's cached total is not updated; call ``calculate_scores``
        once scoring is finished.

        Raises:
            ValidationFailedError: If the value is outside 1.0-10.0
            NotFoundError: If the option or criterion is not part of the decision
            SaveFailedError: If saving failed (the previous value is restored)
        """
        if not validate_score(value):
            raise ValidationFailedError("Score must be between 1 and 10")

        option = decision.get_option(option_id)
        if option is None:
            raise NotFoundError("Option", option_id)
        criterion = decision.get_criterion(criterion_id)
        if criterion is None:
            raise NotFoundError("Criterion", criterion_id)

        existing = option.score_for(criterion_id)
        previous = existing.value if existing is not None else None

        score = decision.set_score(option, criterion, value)
        try:
            await self._save(decision, "score")
        except SaveFailedError:
            if previous is None:
                decision.remove_score(score)
            else:
                score.value = previous
            raise

        return score

    async def calculate_scores(
        self,
        decision: Decision,
        mark_completed: bool = False,
    ) -> dict[UUID, float]:
        """Recompute every option's total and save.

        With no options or no criteria there is nothing to total. The
        decision is still marked completed when ``mark_completed`` is set.

        Args:
            decision: Decision to score
            mark_completed: Also mark the decision as completed

        Returns:
            Mapping of option ID to its new total

        Raises:
            SaveFailedError: If saving failed (totals and status are restored)
        """
        if not decision.options or not decision.criteria:
            if mark_completed and not decision.is_completed:
                await self.mark_completed(decision)
            return {}

        previous_totals = {o.id: o.total_score for o in decision.options}
        was_completed = decision.is_completed

        totals = recompute_totals(decision)
        if mark_completed:
            decision.is_completed = True

        try:
            await self._save(decision, "scores")
        except SaveFailedError:
            for option in decision.options:
                option.total_score = previous_totals[option.id]
            decision.is_completed = was_completed
            raise

        logger.info(
            "scores calculated",
            decision_id=str(decision.id),
            options=len(totals),
            completed=decision.is_completed,
        )
        return totals

    async def mark_completed(self, decision: Decision) -> Decision:
        """Mark a decision as completed and save.

        Raises:
            SaveFailedError: If saving failed (the flag is reverted)
        """
        was_completed = decision.is_completed
        decision.is_completed = True
        try:
            await self._save(decision, "decision")
        except SaveFailedError:
            decision.is_completed = was_completed
            raise
        return decision

    async def delete_decision(self, decision_id: UUID) -> None:
        """Delete a decision and everything it owns.

        Raises:
            NotFoundError: If no decision has this ID
            DeleteFailedError: If the store rejected the deletion
        """
        try:
            deleted = await self._store.delete(decision_id)
        except PersistenceError as e:
            logger.warning("decision delete failed", decision_id=str(decision_id))
            raise DeleteFailedError(str(e)) from e

        if not deleted:
            raise NotFoundError("Decision", decision_id)
        logger.info("decision deleted", decision_id=str(decision_id))

    async def _save(
        self,
        decision: Decision,
        what: str,
        deleting: bool = False,
    ) -> None:
        """Save through the store, translating failures into app errors."""
        try:
            await self._store.save(decision)
        except PersistenceError as e:
            logger.warning(
                "save failed, rolling back",
                decision_id=str(decision.id),
                change=what,
                error=str(e),
            )
            if deleting:
                raise DeleteFailedError(f"{what}: {e}") from e
            raise SaveFailedError(f"{what}: {e}") from e
