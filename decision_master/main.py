"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from decision_master.api.router import api_router
from decision_master.config import settings
from decision_master.db.turso import TursoClient
from decision_master.repositories.decision_repo import DecisionRepository
from decision_master.services.decision_service import DecisionService

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan management.

    Startup:
    - Initialize database connection
    - Create decision tables
    - Initialize decision service

    Shutdown:
    - Close database connection
    """
    logger.info(f"Starting {settings.app_name}...")

    db = TursoClient()
    await db.connect()
    app.state.db = db
    logger.info(f"Database connected: {db.url}")

    repository = DecisionRepository(db)
    await repository.initialize()
    app.state.decision_repo = repository
    logger.info("Decision repository initialized")

    app.state.decision_service = DecisionService(repository)
    logger.info("DecisionService initialized")

    yield

    logger.info(f"Shutting down {settings.app_name}...")
    await db.close()
    logger.info("Database connection closed")


app = FastAPI(
    title=settings.app_name,
    description="Weighted decision matrix scoring",
    version=settings.app_version,
    lifespan=lifespan,
)

app.include_router(api_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "decision_master.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
