"""Plain-text decision report rendered from a Jinja2 template.

The scoring matrix uses fixed-width, left-aligned columns: 20 characters
for the option name, 8 per criterion and 12 for the row total. Values
wider than their column are truncated, never wrapped.
"""

from datetime import datetime, tzinfo
from pathlib import Path
from zoneinfo import ZoneInfo

from jinja2 import Environment, FileSystemLoader, select_autoescape

from decision_master.config import settings
from decision_master.models.decision import Decision

TEMPLATE_DIR = Path(__file__).parent / "templates"
REPORT_TEMPLATE = "decision_report.txt.j2"

HEAVY_RULE = "═" * 39
LIGHT_RULE = "─" * 39
MATRIX_RULE_CHAR = "─"

NAME_WIDTH = 20
CRITERION_WIDTH = 8
TOTAL_WIDTH = 12
MISSING_CELL = "-"


def pad(value: str, width: int) -> str:
    """Left-align text in a fixed-width column, truncating overflow."""
    return value[:width].ljust(width)


def report_timezone() -> tzinfo | None:
    """Timezone configured for export timestamps, None for system local."""
    if settings.report_timezone:
        return ZoneInfo(settings.report_timezone)
    return None


def _to_report_time(moment: datetime, tz: tzinfo | None) -> datetime:
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(tz)


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_abbreviated(moment: datetime, tz: tzinfo | None = None) -> str:
    """Format a timestamp like 'Oct 19, 2026 at 3:04 PM'."""
    local = _to_report_time(moment, tz)
    return f"{local:%b} {local.day}, {local.year} at {_clock(local)}"


def format_numeric(moment: datetime, tz: tzinfo | None = None) -> str:
    """Format a timestamp like '10/19/2026, 3:04 PM'."""
    local = _to_report_time(moment, tz)
    return f"{local.month}/{local.day}/{local.year}, {_clock(local)}"


def build_matrix(decision: Decision) -> dict | None:
    """Lay out the scoring matrix as fixed-width lines.

    Row totals are summed from the recorded scores, not read from the
    cached option totals.

    Returns:
        Dict with header, separator and rows, or None when the decision
        has no options or no criteria
    """
    if not decision.options or not decision.criteria:
        return None

    header = pad("Option/Criteria", NAME_WIDTH)
    header += "".join(pad(c.name, CRITERION_WIDTH) for c in decision.criteria)
    header += pad("Total", TOTAL_WIDTH)

    width = NAME_WIDTH + len(decision.criteria) * CRITERION_WIDTH + TOTAL_WIDTH
    rows = []
    for option in decision.options:
        row = pad(option.name, NAME_WIDTH)
        total = 0.0
        for criterion in decision.criteria:
            score = option.score_for(criterion.id)
            if score is None:
                row += pad(MISSING_CELL, CRITERION_WIDTH)
                continue
            weighted = score.value * criterion.weight
            total += weighted
            row += pad(f"{weighted:.1f}", CRITERION_WIDTH)
        row += pad(f"{total:.1f}", TOTAL_WIDTH)
        rows.append(row)

    return {
        "header": header,
        "separator": MATRIX_RULE_CHAR * width,
        "rows": rows,
    }


class ReportRenderer:
    """Render decision reports from Jinja2 templates."""

    def __init__(self, template_dir: str | Path = TEMPLATE_DIR):
        """Initialize renderer with template directory.

        Args:
            template_dir: Path to directory containing .j2 templates.
                          Defaults to the templates bundled with this package.
        """
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "htm"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def build_context(self, decision: Decision, tz: tzinfo | None = None) -> dict:
        """Collect everything the report template needs."""
        winner = decision.winner
        return {
            "heavy_rule": HEAVY_RULE,
            "light_rule": LIGHT_RULE,
            "title": decision.title,
            "goal": decision.goal,
            "method": decision.selected_method,
            "created": format_abbreviated(decision.created_at, tz),
            "status": decision.status_label,
            "options": [o.name for o in decision.options],
            "criteria": [
                {"name": c.name, "weight": c.weight} for c in decision.criteria
            ],
            "matrix": build_matrix(decision),
            "winner": (
                {"name": winner.name, "score": int(winner.total_score)}
                if winner is not None
                else None
            ),
        }

    def render(
        self,
        decision: Decision,
        tz: tzinfo | None = None,
        template_name: str = REPORT_TEMPLATE,
    ) -> str:
        """Render the text report for a decision.

        Raises:
            TemplateNotFound: If the template file doesn't exist
        """
        template = self.env.get_template(template_name)
        return template.render(self.build_context(decision, tz))


def export_text(decision: Decision, tz: tzinfo | None = None) -> str:
    """Render a decision as a human-readable text report.

    The winner trailer appears only when every option is fully scored.
    Uses the configured report timezone when ``tz`` is not given.
    """
    return ReportRenderer().render(decision, tz or report_timezone())
