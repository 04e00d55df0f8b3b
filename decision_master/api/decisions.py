"""Decision API endpoints for building, scoring and exporting decisions."""

from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from decision_master.config import settings
from decision_master.export.formatter import export_text, report_timezone
from decision_master.export.table import export_table
from decision_master.models.criterion import DEFAULT_WEIGHT, Criterion
from decision_master.models.decision import Decision
from decision_master.models.option import Option
from decision_master.models.score import Score
from decision_master.scoring.engine import (
    RankedOption,
    is_scoring_complete,
    rank_options,
    recompute_totals,
    scoring_progress,
)
from decision_master.services.decision_service import DecisionService
from decision_master.services.errors import AppError, NotFoundError, ValidationFailedError
from decision_master.statistics.dashboard import filter_decisions
from decision_master.validation.rules import ValidationResult, validate_decision_flow

router = APIRouter(prefix="/decisions", tags=["decisions"])


# Pydantic models for request/response
class CreateDecisionRequest(BaseModel):
    """Request body for creating a decision."""

    title: str = Field(description="What is being decided")
    goal: str = Field(default="", description="Optional longer description")


class AddOptionRequest(BaseModel):
    """Request body for adding an option."""

    name: str = Field(description="Option name")


class AddCriterionRequest(BaseModel):
    """Request body for adding a criterion."""

    name: str = Field(description="Criterion name")
    weight: int = Field(default=DEFAULT_WEIGHT, description="Importance from 1 to 10")


class SetScoreRequest(BaseModel):
    """Request body for recording a score."""

    option_id: UUID = Field(description="Option being rated")
    criterion_id: UUID = Field(description="Criterion rated against")
    value: float = Field(description="Rating from 1 to 10")


class CalculateRequest(BaseModel):
    """Request body for recomputing totals."""

    mark_completed: bool = Field(
        default=False, description="Also mark the decision as completed"
    )


class CalculateResponse(BaseModel):
    """Totals after recomputation."""

    decision_id: UUID
    totals: dict[UUID, float] = Field(description="Total score per option ID")
    is_completed: bool


class ResultsResponse(BaseModel):
    """Ranking and winner for a decision."""

    decision_id: UUID
    is_complete: bool = Field(description="Every option is fully scored")
    progress: float = Field(description="Fraction of the matrix that has scores")
    winner: RankedOption | None = Field(
        default=None, description="Top option once scoring is complete"
    )
    ranking: list[RankedOption] = Field(default_factory=list)


def get_decision_service(request: Request) -> DecisionService:
    """Get DecisionService from app state."""
    if not hasattr(request.app.state, "decision_service"):
        raise HTTPException(status_code=500, detail="DecisionService not initialized")
    return request.app.state.decision_service


def to_http_error(error: AppError) -> HTTPException:
    """Map an application error to an HTTP error response."""
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=error.message)
    if isinstance(error, ValidationFailedError):
        return HTTPException(status_code=422, detail=error.message)
    return HTTPException(status_code=500, detail=error.description)


async def load_decision(
    decision_id: UUID,
    service: DecisionService = Depends(get_decision_service),
) -> Decision:
    """Dependency loading the decision named in the path."""
    try:
        return await service.get_decision(decision_id)
    except AppError as e:
        raise to_http_error(e) from e


@router.post("", response_model=Decision, status_code=201)
async def create_decision(
    body: CreateDecisionRequest,
    service: DecisionService = Depends(get_decision_service),
) -> Decision:
    """Create a new decision from a title and optional goal."""
    try:
        return await service.create_decision(body.title, body.goal)
    except AppError as e:
        raise to_http_error(e) from e


@router.get("", response_model=list[Decision])
async def list_decisions(
    status: Literal["all", "active", "completed", "recent"] = Query(
        default="all", description="Filter by completion status or recency"
    ),
    search: str | None = Query(default=None, description="Match title or goal"),
    sort: Literal["date", "title", "progress"] = Query(
        default="date", description="Sort order"
    ),
    service: DecisionService = Depends(get_decision_service),
) -> list[Decision]:
    """List decisions for the dashboard."""
    decisions = await service.list_decisions()
    return filter_decisions(
        decisions,
        status=status,
        search=search,
        sort=sort,
        window_days=settings.recent_window_days,
        tz=report_timezone(),
    )


@router.get("/{decision_id}", response_model=Decision)
async def get_decision(decision: Decision = Depends(load_decision)) -> Decision:
    """Get one decision with its options, criteria and scores."""
    return decision


@router.delete("/{decision_id}", status_code=204)
async def delete_decision(
    decision_id: UUID,
    service: DecisionService = Depends(get_decision_service),
) -> None:
    """Delete a decision and everything it owns."""
    try:
        await service.delete_decision(decision_id)
    except AppError as e:
        raise to_http_error(e) from e


@router.post("/{decision_id}/options", response_model=Option, status_code=201)
async def add_option(
    body: AddOptionRequest,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> Option:
    """Add an option to a decision."""
    try:
        return await service.add_option(decision, body.name)
    except AppError as e:
        raise to_http_error(e) from e


@router.delete("/{decision_id}/options/{option_id}", status_code=204)
async def remove_option(
    option_id: UUID,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> None:
    """Remove an option and its scores."""
    try:
        await service.remove_option(decision, option_id)
    except AppError as e:
        raise to_http_error(e) from e


@router.post("/{decision_id}/criteria", response_model=Criterion, status_code=201)
async def add_criterion(
    body: AddCriterionRequest,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> Criterion:
    """Add a weighted criterion to a decision."""
    try:
        return await service.add_criterion(decision, body.name, body.weight)
    except AppError as e:
        raise to_http_error(e) from e


@router.delete("/{decision_id}/criteria/{criterion_id}", status_code=204)
async def remove_criterion(
    criterion_id: UUID,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> None:
    """Remove a criterion and its scores."""
    try:
        await service.remove_criterion(decision, criterion_id)
    except AppError as e:
        raise to_http_error(e) from e


@router.put("/{decision_id}/scores", response_model=Score)
async def set_score(
    body: SetScoreRequest,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> Score:
    """Record or update the score for an (option, criterion) pair."""
    try:
        return await service.set_score(
            decision, body.option_id, body.criterion_id, body.value
        )
    except AppError as e:
        raise to_http_error(e) from e


@router.post("/{decision_id}/calculate", response_model=CalculateResponse)
async def calculate(
    body: CalculateRequest | None = None,
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> CalculateResponse:
    """Recompute option totals, optionally marking the decision completed."""
    mark_completed = body.mark_completed if body else False
    try:
        totals = await service.calculate_scores(decision, mark_completed)
    except AppError as e:
        raise to_http_error(e) from e
    return CalculateResponse(
        decision_id=decision.id,
        totals=totals,
        is_completed=decision.is_completed,
    )


@router.post("/{decision_id}/complete", response_model=Decision)
async def complete_decision(
    decision: Decision = Depends(load_decision),
    service: DecisionService = Depends(get_decision_service),
) -> Decision:
    """Mark a decision as completed."""
    try:
        return await service.mark_completed(decision)
    except AppError as e:
        raise to_http_error(e) from e


@router.get("/{decision_id}/results", response_model=ResultsResponse)
async def get_results(decision: Decision = Depends(load_decision)) -> ResultsResponse:
    """Get the ranking and winner from freshly computed totals."""
    recompute_totals(decision)
    ranking = rank_options(decision)
    winner = decision.winner

    return ResultsResponse(
        decision_id=decision.id,
        is_complete=is_scoring_complete(decision),
        progress=scoring_progress(decision),
        winner=next((r for r in ranking if r.option_id == winner.id), None)
        if winner
        else None,
        ranking=ranking,
    )


@router.get("/{decision_id}/validate", response_model=ValidationResult)
async def validate_flow(decision: Decision = Depends(load_decision)) -> ValidationResult:
    """Check the decision has enough options and criteria to be scored."""
    return validate_decision_flow(decision)


@router.get("/{decision_id}/export/text", response_class=PlainTextResponse)
async def export_decision_text(decision: Decision = Depends(load_decision)) -> str:
    """Export the decision as a text report."""
    recompute_totals(decision)
    return export_text(decision)


@router.get("/{decision_id}/export/csv", response_class=PlainTextResponse)
async def export_decision_csv(decision: Decision = Depends(load_decision)):
    """Export the decision as CSV."""
    recompute_totals(decision)
    return PlainTextResponse(export_table(decision), media_type="text/csv")
