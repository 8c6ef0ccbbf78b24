"""Health check contract"""

from pydantic import BaseModel

from ...domain.domain_type import RoutingStrategy


class HealthResponse(BaseModel):
    """Liveness plus the routing strategy this instance was started with"""

    status: str
    service: str
    version: str
    strategy: RoutingStrategy
