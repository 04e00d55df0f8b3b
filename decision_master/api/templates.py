"""Template API endpoints for starting decisions from the catalog."""

from fastapi import APIRouter, Depends, HTTPException

from decision_master.api.decisions import get_decision_service, to_http_error
from decision_master.catalog.templates import TEMPLATES, DecisionTemplate, get_template
from decision_master.models.decision import Decision
from decision_master.services.decision_service import DecisionService
from decision_master.services.errors import AppError

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=list[DecisionTemplate])
async def list_templates() -> list[DecisionTemplate]:
    """List the built-in decision templates."""
    return TEMPLATES


@router.post("/{name}/decisions", response_model=Decision, status_code=201)
async def create_from_template(
    name: str,
    service: DecisionService = Depends(get_decision_service),
) -> Decision:
    """Create a decision pre-filled from a template."""
    template = get_template(name)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template {name} not found")
    try:
        return await service.create_from_template(template)
    except AppError as e:
        raise to_http_error(e) from e
