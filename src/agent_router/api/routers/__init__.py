"""API router exports"""

from .health import router as health_router
from .routing import router as routing_router

__all__ = ["health_router", "routing_router"]
