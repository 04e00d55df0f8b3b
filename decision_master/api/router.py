"""API router aggregation."""

from fastapi import APIRouter

from decision_master.api.decisions import router as decisions_router
from decision_master.api.health import router as health_router
from decision_master.api.statistics import router as statistics_router
from decision_master.api.templates import router as templates_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(decisions_router)
# Dashboard statistics across all decisions
api_router.include_router(statistics_router)
# Built-in templates create decisions through the same service
api_router.include_router(templates_router)
