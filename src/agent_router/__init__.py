"""Agent router package exports."""

from .config import Settings, settings
from .domain import AgentRoutingSpec, Context, Failure, Success, UserMessage
from .service import (
    AgentRoutingSpecsResolver,
    HybridAgentRoutingSpecsResolver,
    LLMAgentRoutingSpecsResolver,
    VectorAgentRoutingSpecsResolver,
)

__all__ = [
    "AgentRoutingSpec",
    "AgentRoutingSpecsResolver",
    "Context",
    "Failure",
    "HybridAgentRoutingSpecsResolver",
    "LLMAgentRoutingSpecsResolver",
    "Settings",
    "Success",
    "UserMessage",
    "VectorAgentRoutingSpecsResolver",
    "settings",
]
