"""Statistics API endpoints for the dashboard."""

from fastapi import APIRouter, Depends

from decision_master.api.decisions import get_decision_service
from decision_master.config import settings
from decision_master.export.formatter import report_timezone
from decision_master.services.decision_service import DecisionService
from decision_master.statistics.aggregator import DecisionStatistics, get_statistics
from decision_master.statistics.dashboard import ComparisonSummary, compare_decisions

router = APIRouter(prefix="/statistics", tags=["statistics"])


@router.get("", response_model=DecisionStatistics)
async def statistics(
    service: DecisionService = Depends(get_decision_service),
) -> DecisionStatistics:
    """Get summary counts across all decisions."""
    decisions = await service.list_decisions()
    return get_statistics(
        decisions,
        window_days=settings.recent_window_days,
        tz=report_timezone(),
    )


@router.get("/comparison", response_model=ComparisonSummary)
async def comparison(
    service: DecisionService = Depends(get_decision_service),
) -> ComparisonSummary:
    """Compare winners across all decisions.

    Uses the stored totals; decisions are compared as last calculated.
    """
    decisions = await service.list_decisions()
    return compare_decisions(decisions)
