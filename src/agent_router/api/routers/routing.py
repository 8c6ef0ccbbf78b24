"""Routing API Router - thin HTTP layer over the configured resolver.

Endpoints are plain ``def``: resolvers block on model and embedding calls,
so FastAPI runs them on its worker thread pool.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from ...domain.agent_spec import AgentRoutingSpec
from ...domain.message import Context, UserMessage
from ...domain.result import Failure
from ...domain.spec_filter import NameSpecFilter, SpecFilter, VersionSpecFilter
from ...service.resolver import AgentRoutingSpecsResolver
from ...service.spec_provider import AgentRoutingSpecsProvider
from ..contracts import RouteRequest, RouteResponse
from ..deps import get_resolver, get_spec_provider

router = APIRouter(tags=["routing"])


@router.get("/agents", response_model=list[AgentRoutingSpec])
def list_agents(
    provider: Annotated[AgentRoutingSpecsProvider, Depends(get_spec_provider)],
) -> list[AgentRoutingSpec]:
    """List registered agents, sorted by name."""
    result = provider.provide()
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail=result.reason.message)
    return sorted(result.value, key=lambda spec: spec.name)


@router.post("/route", response_model=RouteResponse)
def route(
    request: RouteRequest,
    resolver: Annotated[AgentRoutingSpecsResolver, Depends(get_resolver)],
) -> RouteResponse:
    """
    Route an utterance to an agent.

    1. Map optional agent_name / version to spec filters
    2. Resolve with the configured strategy
    3. Map the outcome: agent → 200, no match → 404, failure → 500
    """
    filters: list[SpecFilter] = []
    if request.agent_name:
        filters.append(NameSpecFilter(value=request.agent_name))
    if request.version:
        filters.append(VersionSpecFilter(value=request.version))

    result = resolver.resolve(
        filters,
        Context(previous_messages=tuple(request.previous_messages)),
        UserMessage(content=request.text),
    )
    if isinstance(result, Failure):
        raise HTTPException(status_code=500, detail=result.reason.message)

    spec = result.value
    if spec is None:
        raise HTTPException(status_code=404, detail="No agent matched the request")
    return RouteResponse(agent=spec, address=spec.primary_address)
