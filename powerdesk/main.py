"""FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from powerdesk.api.routes import api_router
from powerdesk.core.config import settings
from powerdesk.core.database import Base, engine
from powerdesk.core.logging import configure_logging

# Import models for Base.metadata.create_all - order matters for foreign keys
from powerdesk.models import (  # noqa: F401
    property,
    meter,
    meter_multiplier,
    grid_tariff,
    reading,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan manager."""
    configure_logging()
    Base.metadata.create_all(bind=engine)
    logger.info("%s %s started", settings.PROJECT_NAME, settings.VERSION)
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="Electricity metering, tariffs and analytics for facility properties",
    lifespan=lifespan,
)

app.include_router(api_router, prefix="/api")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "powerdesk.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
