"""Tabular (CSV) export of a decision and its scores."""

import csv
import io
from dataclasses import dataclass
from datetime import tzinfo

from decision_master.export.formatter import format_numeric, report_timezone
from decision_master.models.decision import Decision

SCORES_SECTION = "Scores"
SCORES_HEADER = ["Option", "Criteria", "Score", "Weight", "Weighted Score"]


@dataclass(frozen=True)
class ScoreRow:
    """One flattened (option, criterion) row of the Scores section."""

    option: str
    criterion: str
    score: float
    weight: int
    weighted: float


def export_table(decision: Decision, tz: tzinfo | None = None) -> str:
    """Export a decision as CSV.

    Sections: key/value header, Options (name, cached total), Criteria
    (name, weight) and Scores with one row per recorded score. Pairs
    without a score are omitted rather than zero-filled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    created = format_numeric(decision.created_at, tz or report_timezone())

    writer.writerow(["Decision", decision.title])
    writer.writerow(["Goal", decision.goal])
    writer.writerow(["Method", decision.selected_method])
    writer.writerow(["Created", created])
    writer.writerow(["Status", decision.status_label])
    writer.writerow([])

    writer.writerow(["Options"])
    for option in decision.options:
        writer.writerow([option.name, option.total_score])
    writer.writerow([])

    writer.writerow(["Criteria"])
    for criterion in decision.criteria:
        writer.writerow([criterion.name, criterion.weight])
    writer.writerow([])

    writer.writerow([SCORES_SECTION])
    writer.writerow(SCORES_HEADER)
    for row in score_rows(decision):
        writer.writerow(
            [row.option, row.criterion, row.score, row.weight, row.weighted]
        )

    return buffer.getvalue()


def score_rows(decision: Decision) -> list[ScoreRow]:
    """Flatten recorded scores in option-major, criterion-minor order."""
    rows = []
    for option in decision.options:
        for criterion in decision.criteria:
            score = option.score_for(criterion.id)
            if score is None:
                continue
            rows.append(
                ScoreRow(
                    option=option.name,
                    criterion=criterion.name,
                    score=score.value,
                    weight=criterion.weight,
                    weighted=score.value * criterion.weight,
                )
            )
    return rows


def parse_table_scores(text: str) -> list[ScoreRow]:
    """Read the Scores section back out of a tabular export.

    Raises:
        ValueError: If the Scores section or its header is missing
    """
    records = list(csv.reader(io.StringIO(text)))

    try:
        start = records.index([SCORES_SECTION])
    except ValueError:
        msg = "Export has no Scores section"
        raise ValueError(msg) from None

    if records[start + 1 : start + 2] != [SCORES_HEADER]:
        msg = "Scores section header is missing"
        raise ValueError(msg)

    rows = []
    for record in records[start + 2 :]:
        if not record:
            break
        option, criterion, score, weight, weighted = record
        rows.append(
            ScoreRow(
                option=option,
                criterion=criterion,
                score=float(score),
                weight=int(weight),
                weighted=float(weighted),
            )
        )
    return rows
