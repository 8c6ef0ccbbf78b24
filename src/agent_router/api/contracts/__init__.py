from .health import HealthResponse
from .routing import RouteRequest, RouteResponse

__all__ = [
    "HealthResponse",
    "RouteRequest",
    "RouteResponse",
]
