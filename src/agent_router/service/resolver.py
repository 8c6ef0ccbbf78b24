"""Resolution Strategies - Turn (filters, context, input) into an Agent.

All strategies share one skeleton (AgentRoutingSpecsResolver.resolve):

    1. provider.provide(filters)        → candidate specs
    2. strategy step(s)                  → agent name (or None)
    3. exact-name lookup in candidates   → AgentRoutingSpec | None

Outcomes:
    Success(spec)   an agent was chosen
    Success(None)   nothing matched (named agent not a candidate, empty store)
    Failure(ResolverError)  something broke; ``.cause`` holds the original error

Strategies:
    - LLMAgentRoutingSpecsResolver: prompt → model → parse {"agentName": ...}
    - VectorAgentRoutingSpecsResolver: embed input → nearest-example vote
    - HybridAgentRoutingSpecsResolver: prompt → model restates intent →
      vector vote on the restated query
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Protocol, TypeAlias

from loguru import logger
from pydantic import ValidationError

from ..domain.agent_spec import AgentRoutingSpec, find_spec
from ..domain.errors import ResolverError
from ..domain.message import ChatMessage, Context, SystemMessage, UserMessage
from ..domain.prompt import (
    AgentSelection,
    DefaultModelPromptProvider,
    FencedAnswerProcessor,
    IntentPromptProvider,
    ModelPromptProvider,
    ModelResponseProcessor,
)
from ..domain.result import Failure, Success
from ..domain.spec_filter import SpecFilter
from ..domain.vector import VectorSearchRequest
from .model_client import ModelClient
from .spec_provider import AgentRoutingSpecsProvider
from .vector_client import VectorSearchClient

ResolveResult: TypeAlias = "Success[AgentRoutingSpec | None] | Failure[ResolverError]"


def build_messages(prompt: str, context: Context, input: UserMessage) -> list[ChatMessage]:
    """System prompt first, then the prior conversation, then the new input."""
    return [SystemMessage(content=prompt), *context.previous_messages, input]


class AgentRoutingSpecsResolver(ABC):
    """Base resolver: provider unwrap, error boundary and final lookup."""

    def __init__(self, provider: AgentRoutingSpecsProvider):
        self.provider = provider

    def resolve(
        self,
        filters: Iterable[SpecFilter],
        context: Context,
        input: UserMessage,
    ) -> ResolveResult:
        strategy = type(self).__name__
        logger.debug("Resolving agent: strategy={}, input={!r}", strategy, input.content)
        try:
            provided = self.provider.provide(filters)
            if isinstance(provided, Failure):
                logger.error("Agent spec provider failed: {}", provided.reason)
                return Failure(reason=ResolverError("Failed to provide agent routing specs", provided.reason))
            specs = provided.value
            logger.debug("Candidate agents: {}", sorted(spec.name for spec in specs))

            result = self._resolve(specs, context, input)
        except Exception as e:
            logger.error("Agent resolution failed: strategy={}, error={}", strategy, e)
            return Failure(reason=ResolverError("Failed to resolve agent routing spec", e))

        if isinstance(result, Failure):
            logger.error("Agent resolution failed: strategy={}, error={}", strategy, result.reason)
        else:
            logger.info(
                "Agent resolved: strategy={}, agent={}",
                strategy,
                result.value.name if result.value else None,
            )
        return result

    def resolve_default(self, context: Context, input: UserMessage) -> ResolveResult:
        return self.resolve((), context, input)

    @abstractmethod
    def _resolve(
        self,
        specs: frozenset[AgentRoutingSpec],
        context: Context,
        input: UserMessage,
    ) -> ResolveResult: ...


class LLMAgentRoutingSpecsResolver(AgentRoutingSpecsResolver):
    """Ask a language model to name the agent.

    A reply naming an agent outside the candidates is ``Success(None)``.
    A reply that is not ``{"agentName": ...}`` JSON is a ResolverError.
    """

    def __init__(
        self,
        provider: AgentRoutingSpecsProvider,
        model_client: ModelClient,
        prompt_provider: ModelPromptProvider | None = None,
        response_processor: ModelResponseProcessor | None = None,
    ):
        super().__init__(provider)
        self.model_client = model_client
        self.prompt_provider = prompt_provider or DefaultModelPromptProvider()
        self.response_processor = response_processor or FencedAnswerProcessor()

    def _resolve(
        self,
        specs: frozenset[AgentRoutingSpec],
        context: Context,
        input: UserMessage,
    ) -> ResolveResult:
        prompt = self.prompt_provider.provide_prompt(context, specs, input)
        if isinstance(prompt, Failure):
            return Failure(reason=ResolverError("Failed to build routing prompt", prompt.reason))

        reply = self.model_client.call(build_messages(prompt.value, context, input))
        if isinstance(reply, Failure):
            return Failure(reason=ResolverError("Model call failed", reply.reason))

        body = self.response_processor.process(reply.value.content)
        logger.debug("Model reply: {!r}", body)
        try:
            selection = AgentSelection.model_validate_json(body)
        except ValidationError as e:
            return Failure(reason=ResolverError(f"Model reply is not a valid agent selection: {body!r}", e))
        return Success(value=find_spec(specs, selection.agent_name))


class VectorAgentRoutingSpecsResolver(AgentRoutingSpecsResolver):
    """Pick the agent whose seeded examples are nearest to the input."""

    def __init__(self, provider: AgentRoutingSpecsProvider, vector_client: VectorSearchClient):
        super().__init__(provider)
        self.vector_client = vector_client

    def _resolve(
        self,
        specs: frozenset[AgentRoutingSpec],
        context: Context,
        input: UserMessage,
    ) -> ResolveResult:
        found = self.vector_client.find(VectorSearchRequest(query=input.content, context=context), specs)
        if isinstance(found, Failure):
            return Failure(reason=ResolverError("Vector search failed", found.reason))
        return Success(value=find_spec(specs, found.value.agent_name if found.value else None))


class ModelResponseToQuery(Protocol):
    """Derives the vector query from the hybrid model's free-text reply."""

    def convert(self, model_response: str, context: Context) -> VectorSearchRequest: ...


class PassThroughQueryConverter:
    """Use the model reply verbatim as the query."""

    def convert(self, model_response: str, context: Context) -> VectorSearchRequest:
        return VectorSearchRequest(query=model_response, context=context)


class HybridAgentRoutingSpecsResolver(AgentRoutingSpecsResolver):
    """Model distills intent, similarity search picks the agent.

    The query converter runs on every call. Filters only narrow the
    candidate set; they play no part in building the query.
    """

    def __init__(
        self,
        provider: AgentRoutingSpecsProvider,
        model_client: ModelClient,
        vector_client: VectorSearchClient,
        prompt_provider: ModelPromptProvider | None = None,
        query_converter: ModelResponseToQuery | None = None,
    ):
        super().__init__(provider)
        self.model_client = model_client
        self.vector_client = vector_client
        self.prompt_provider = prompt_provider or IntentPromptProvider()
        self.query_converter = query_converter or PassThroughQueryConverter()

    def _resolve(
        self,
        specs: frozenset[AgentRoutingSpec],
        context: Context,
        input: UserMessage,
    ) -> ResolveResult:
        prompt = self.prompt_provider.provide_prompt(context, specs, input)
        if isinstance(prompt, Failure):
            return Failure(reason=ResolverError("Failed to build intent prompt", prompt.reason))

        reply = self.model_client.call(build_messages(prompt.value, context, input))
        if isinstance(reply, Failure):
            return Failure(reason=ResolverError("Model call failed", reply.reason))

        request = self.query_converter.convert(reply.value.content, context)
        logger.debug("Hybrid vector query: {!r}", request.query)

        found = self.vector_client.find(request, specs)
        if isinstance(found, Failure):
            return Failure(reason=ResolverError("Vector search failed", found.reason))
        return Success(value=find_spec(specs, found.value.agent_name if found.value else None))


__all__ = [
    "AgentRoutingSpecsResolver",
    "HybridAgentRoutingSpecsResolver",
    "LLMAgentRoutingSpecsResolver",
    "ModelResponseToQuery",
    "PassThroughQueryConverter",
    "ResolveResult",
    "VectorAgentRoutingSpecsResolver",
    "build_messages",
]
