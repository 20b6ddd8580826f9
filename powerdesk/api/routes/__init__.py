"""API routes package."""

from fastapi import APIRouter

from powerdesk.api.routes import (
    analytics,
    export,
    health,
    meters,
    multipliers,
    properties,
    readings,
    tariffs,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(properties.router)
api_router.include_router(meters.router)
api_router.include_router(multipliers.router)
api_router.include_router(tariffs.router)
api_router.include_router(readings.router)
api_router.include_router(export.router)
api_router.include_router(analytics.router)
