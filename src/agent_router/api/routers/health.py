"""Health check router

Endpoints:
- GET /health: Service status, version and active routing strategy

Does not touch the registry or any backend, so it stays green while a model
or vector backend is down.
"""

from fastapi import APIRouter

from ...config import settings
from ..contracts import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """API health check"""
    return HealthResponse(
        status="healthy",
        service=settings.app_name,
        version=settings.app_version,
        strategy=settings.router_strategy,
    )
