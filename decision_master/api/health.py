"""Health endpoints reporting whether decisions can be stored and scored."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from decision_master.config import settings
from decision_master.repositories.decision_repo import DecisionRepository

router = APIRouter(prefix="/health", tags=["health"])

OK = "ok"
FAILED = "failed"
NOT_CONFIGURED = "not_configured"


class HealthResponse(BaseModel):
    """Service identity and uptime check."""

    status: str
    service: str = Field(description="Application name")
    version: str
    environment: str
    timestamp: datetime


class LivenessResponse(BaseModel):
    """Process liveness."""

    status: str


class ReadinessResponse(BaseModel):
    """Readiness of each dependency needed to serve decisions."""

    status: str = Field(description="ready when every check is ok")
    checks: dict[str, str] = Field(
        description="database, decision_tables and decision_service states"
    )
    missing_tables: list[str] = Field(
        default_factory=list, description="Decision tables not created yet"
    )


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Report the running service and version."""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        environment=settings.app_env,
        timestamp=datetime.now(UTC),
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness() -> LivenessResponse:
    """The process is up."""
    return LivenessResponse(status="alive")


@router.get("/ready", response_model=ReadinessResponse)
async def readiness(request: Request) -> ReadinessResponse:
    """Check the database, the decision tables and the service wiring.

    Tables are only inspected once the database answers.
    """
    state = request.app.state
    checks = {
        "database": NOT_CONFIGURED,
        "decision_tables": NOT_CONFIGURED,
        "decision_service": OK if hasattr(state, "decision_service") else NOT_CONFIGURED,
    }
    missing: list[str] = []

    db = getattr(state, "db", None)
    if db is not None:
        checks["database"] = OK if await db.is_healthy() else FAILED

    repository: DecisionRepository | None = getattr(state, "decision_repo", None)
    if repository is not None and checks["database"] == OK:
        missing = await repository.missing_tables()
        checks["decision_tables"] = FAILED if missing else OK

    status = "ready" if all(v == OK for v in checks.values()) else "not_ready"
    return ReadinessResponse(status=status, checks=checks, missing_tables=missing)
