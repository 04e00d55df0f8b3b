"""Repository persisting decisions with their options, criteria and scores.

A decision is saved as a whole aggregate: each save rewrites the
decision's child rows in one batch, and deleting a decision removes its
options, criteria and scores with it.
"""

import logging
from datetime import datetime
from typing import Protocol, runtime_checkable
from uuid import UUID

from decision_master.db.turso import Statement, TursoClient
from decision_master.models.criterion import Criterion
from decision_master.models.decision import Decision
from decision_master.models.option import Option
from decision_master.models.score import Score

logger = logging.getLogger(__name__)

TABLES = ("decisions", "options", "criteria", "scores")


class PersistenceError(Exception):
    """Raised when the database rejects a save or delete."""


@runtime_checkable
class DecisionStore(Protocol):
    """Persistence boundary for decisions.

    Stores implement this protocol for structural subtyping - they
    don't need to inherit, just implement the methods.
    """

    async def save(self, decision: Decision) -> None:
        """Persist the decision and all of its children.

        Raises:
            PersistenceError: If the write fails
        """
        ...

    async def delete(self, decision_id: UUID) -> bool:
        """Delete a decision and its children.

        Returns:
            True if a decision was deleted, False if not found
        """
        ...

    async def get(self, decision_id: UUID) -> Decision | None:
        """Load one decision, or None if not found."""
        ...

    async def list_all(self) -> list[Decision]:
        """Load every decision, newest first."""
        ...


class DecisionRepository:
    """SQLite-backed DecisionStore using TursoClient."""

    def __init__(self, db_client: TursoClient):
        """Initialize repository with database client.

        Args:
            db_client: TursoClient instance for database operations
        """
        self._db = db_client

    async def initialize(self) -> None:
        """Create decision tables if they don't exist."""
        await self._db.execute_batch(
            [
                """
            CREATE TABLE IF NOT EXISTS decisions (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                goal TEXT NOT NULL DEFAULT '',
                created_at TEXT NOT NULL,
                is_completed INTEGER NOT NULL DEFAULT 0,
                selected_method TEXT NOT NULL DEFAULT 'Matrix'
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS options (
                id TEXT PRIMARY KEY,
                decision_id TEXT NOT NULL,
                name TEXT NOT NULL,
                total_score REAL NOT NULL DEFAULT 0,
                position INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS criteria (
                id TEXT PRIMARY KEY,
                decision_id TEXT NOT NULL,
                name TEXT NOT NULL,
                weight INTEGER NOT NULL DEFAULT 5,
                position INTEGER NOT NULL,
                created_at TEXT NOT NULL
            )
            """,
                """
            CREATE TABLE IF NOT EXISTS scores (
                id TEXT PRIMARY KEY,
                decision_id TEXT NOT NULL,
                option_id TEXT NOT NULL,
                criterion_id TEXT NOT NULL,
                value REAL NOT NULL,
                created_at TEXT NOT NULL
            )
            """,
                "CREATE INDEX IF NOT EXISTS idx_options_decision ON options(decision_id)",
                "CREATE INDEX IF NOT EXISTS idx_criteria_decision ON criteria(decision_id)",
                "CREATE INDEX IF NOT EXISTS idx_scores_decision ON scores(decision_id)",
            ]
        )

    async def missing_tables(self) -> list[str]:
        """Names of decision tables not yet created, in creation order."""
        result = await self._db.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table'"
        )
        present = {row[0] for row in result.rows}
        return [table for table in TABLES if table not in present]

    async def save(self, decision: Decision) -> None:
        """Upsert a decision and replace its children.

        Raises:
            PersistenceError: If the batch fails
        """
        decision_id = str(decision.id)
        statements: list[Statement] = [
            (
                """
                INSERT INTO decisions
                    (id, title, goal, created_at, is_completed, selected_method)
                VALUES (?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    title = excluded.title,
                    goal = excluded.goal,
                    is_completed = excluded.is_completed,
                    selected_method = excluded.selected_method
                """,
                [
                    decision_id,
                    decision.title,
                    decision.goal,
                    decision.created_at.isoformat(),
                    int(decision.is_completed),
                    decision.selected_method,
                ],
            ),
            ("DELETE FROM scores WHERE decision_id = ?", [decision_id]),
            ("DELETE FROM options WHERE decision_id = ?", [decision_id]),
            ("DELETE FROM criteria WHERE decision_id = ?", [decision_id]),
        ]

        for position, option in enumerate(decision.options):
            statements.append(
                (
                    """
                    INSERT INTO options
                        (id, decision_id, name, total_score, position, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        str(option.id),
                        decision_id,
                        option.name,
                        option.total_score,
                        position,
                        option.created_at.isoformat(),
                    ],
                )
            )
            for score in option.scores:
                statements.append(
                    (
                        """
                        INSERT INTO scores
                            (id, decision_id, option_id, criterion_id, value, created_at)
                        VALUES (?, ?, ?, ?, ?, ?)
                        """,
                        [
                            str(score.id),
                            decision_id,
                            str(score.option_id),
                            str(score.criterion_id),
                            score.value,
                            score.created_at.isoformat(),
                        ],
                    )
                )

        for position, criterion in enumerate(decision.criteria):
            statements.append(
                (
                    """
                    INSERT INTO criteria
                        (id, decision_id, name, weight, position, created_at)
                    VALUES (?, ?, ?, ?, ?, ?)
                    """,
                    [
                        str(criterion.id),
                        decision_id,
                        criterion.name,
                        criterion.weight,
                        position,
                        criterion.created_at.isoformat(),
                    ],
                )
            )

        try:
            await self._db.execute_batch(statements)
        except Exception as e:
            logger.error(f"Failed to save decision {decision_id}: {e}")
            raise PersistenceError(f"Failed to save decision: {e}") from e

    async def delete(self, decision_id: UUID) -> bool:
        """Delete a decision along with its options, criteria and scores.

        Raises:
            PersistenceError: If the batch fails
        """
        key = str(decision_id)
        try:
            results = await self._db.execute_batch(
                [
                    ("DELETE FROM scores WHERE decision_id = ?", [key]),
                    ("DELETE FROM options WHERE decision_id = ?", [key]),
                    ("DELETE FROM criteria WHERE decision_id = ?", [key]),
                    ("DELETE FROM decisions WHERE id = ?", [key]),
                ]
            )
        except Exception as e:
            logger.error(f"Failed to delete decision {key}: {e}")
            raise PersistenceError(f"Failed to delete decision: {e}") from e
        return results[-1].rows_affected > 0

    async def get(self, decision_id: UUID) -> Decision | None:
        """Load a decision with its children, or None if not found."""
        result = await self._db.execute(
            """
            SELECT id, title, goal, created_at, is_completed, selected_method
            FROM decisions
            WHERE id = ?
            """,
            [str(decision_id)],
        )
        if not result.rows:
            return None
        decisions = await self._load([result.rows[0]])
        return decisions[0]

    async def list_all(self) -> list[Decision]:
        """Load all decisions, newest first."""
        result = await self._db.execute(
            """
            SELECT id, title, goal, created_at, is_completed, selected_method
            FROM decisions
            ORDER BY created_at DESC
            """
        )
        return await self._load(result.rows)

    async def _load(self, decision_rows) -> list[Decision]:
        """Rebuild decisions and attach their options, criteria and scores."""
        decisions = {
            row[0]: Decision(
                id=UUID(row[0]),
                title=row[1],
                goal=row[2],
                created_at=datetime.fromisoformat(row[3]),
                is_completed=bool(row[4]),
                selected_method=row[5],
            )
            for row in decision_rows
        }
        if not decisions:
            return []

        keys = list(decisions)
        placeholders = ", ".join("?" for _ in keys)

        criteria_rows = await self._db.execute(
            f"""
            SELECT id, decision_id, name, weight, created_at
            FROM criteria
            WHERE decision_id IN ({placeholders})
            ORDER BY position
            """,
            keys,
        )
        for row in criteria_rows.rows:
            decisions[row[1]].add_criterion(
                Criterion(
                    id=UUID(row[0]),
                    name=row[2],
                    weight=row[3],
                    created_at=datetime.fromisoformat(row[4]),
                )
            )

        option_rows = await self._db.execute(
            f"""
            SELECT id, decision_id, name, total_score, created_at
            FROM options
            WHERE decision_id IN ({placeholders})
            ORDER BY position
            """,
            keys,
        )
        for row in option_rows.rows:
            decisions[row[1]].add_option(
                Option(
                    id=UUID(row[0]),
                    name=row[2],
                    total_score=row[3],
                    created_at=datetime.fromisoformat(row[4]),
                )
            )

        score_rows = await self._db.execute(
            f"""
            SELECT id, decision_id, option_id, criterion_id, value, created_at
            FROM scores
            WHERE decision_id IN ({placeholders})
            ORDER BY created_at
            """,
            keys,
        )
        for row in score_rows.rows:
            decision = decisions[row[1]]
            option = decision.get_option(UUID(row[2]))
            criterion = decision.get_criterion(UUID(row[3]))
            if option is None or criterion is None:
                logger.warning(f"Skipping orphaned score {row[0]}")
                continue
            score = Score(
                id=UUID(row[0]),
                option_id=option.id,
                criterion_id=criterion.id,
                value=row[4],
                created_at=datetime.fromisoformat(row[5]),
            )
            option.scores.append(score)
            criterion.scores.append(score)

        return [decisions[key] for key in keys]
