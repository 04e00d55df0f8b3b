"""Text and tabular export of decisions."""

from decision_master.export.formatter import ReportRenderer, export_text
from decision_master.export.table import (
    ScoreRow,
    export_table,
    parse_table_scores,
    score_rows,
)

__all__ = [
    "ReportRenderer",
    "ScoreRow",
    "export_table",
    "export_text",
    "parse_table_scores",
    "score_rows",
]
