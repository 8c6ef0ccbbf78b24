"""Routing API contracts - use domain types directly."""

from __future__ import annotations

from pydantic import BaseModel, Field

from ...domain.agent_spec import Address, AgentRoutingSpec
from ...domain.message import ChatMessage


class RouteRequest(BaseModel):
    """Utterance to route, with optional history and candidate filters."""

    text: str = Field(
        min_length=1,
        max_length=10_000,
        description="User utterance to route",
        examples=["Everytime I try to pay. I get an error"],
    )
    previous_messages: list[ChatMessage] = Field(
        default_factory=list,
        description="Earlier conversation turns, oldest first",
        examples=[[{"role": "assistant", "content": "Hello, how can I help?"}]],
    )
    agent_name: str | None = Field(
        default=None,
        description="Restrict candidates to the agent with this name",
    )
    version: str | None = Field(
        default=None,
        description="Restrict candidates to agents with this version",
        examples=["1.0.0"],
    )


class RouteResponse(BaseModel):
    """Chosen agent and the address the caller should forward to."""

    agent: AgentRoutingSpec
    address: Address
