"""Domain Layer - Routing Models, Results and Pure Algorithms.

Everything here is immutable and free of I/O apart from reading local files
on request (registry, seed and prompt files). Backends live in the service
layer.

Key Components:
    - AgentRoutingSpec / AgentRegistry: what can be routed to
    - SpecFilter: candidate narrowing (name, version)
    - ChatMessage / Context: conversation input
    - Success / Failure: value-or-error container returned by every operation
    - Prompt providers and reply processing for model-driven routing
    - cosine_similarity / majority_vote for similarity-driven routing
"""

from .agent_spec import Address, AgentRegistry, AgentRoutingSpec, Capability, find_spec
from .domain_type import (
    AgentListFormat,
    EmbeddingProvider,
    MessageRole,
    ModelProvider,
    ResultStatus,
    RoutingStrategy,
)
from .errors import (
    EmbeddingError,
    ModelClientError,
    ProviderError,
    ResolverError,
    RouterError,
    VectorError,
)
from .message import AssistantMessage, ChatMessage, Context, SystemMessage, UserMessage, chat_message
from .prompt import (
    AgentSelection,
    DefaultModelPromptProvider,
    ExternalModelPromptProvider,
    FencedAnswerProcessor,
    IntentPromptProvider,
    ModelPromptProvider,
    ModelResponseProcessor,
    render_agents_json,
    render_agents_xml,
)
from .result import Failure, Result, ResultBlock, Success, result_of
from .spec_filter import NameSpecFilter, SpecFilter, VersionSpecFilter, apply_filters
from .vector import (
    VectorDocument,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSeedRequest,
    cosine_similarity,
    load_seed_requests,
    majority_vote,
)

__all__ = [
    "Address",
    "AgentListFormat",
    "AgentRegistry",
    "AgentRoutingSpec",
    "AgentSelection",
    "AssistantMessage",
    "Capability",
    "ChatMessage",
    "Context",
    "DefaultModelPromptProvider",
    "EmbeddingError",
    "EmbeddingProvider",
    "ExternalModelPromptProvider",
    "Failure",
    "FencedAnswerProcessor",
    "IntentPromptProvider",
    "MessageRole",
    "ModelClientError",
    "ModelPromptProvider",
    "ModelProvider",
    "ModelResponseProcessor",
    "NameSpecFilter",
    "ProviderError",
    "ResolverError",
    "Result",
    "ResultBlock",
    "ResultStatus",
    "RouterError",
    "RoutingStrategy",
    "SpecFilter",
    "Success",
    "SystemMessage",
    "UserMessage",
    "VectorDocument",
    "VectorError",
    "VectorSearchRequest",
    "VectorSearchResponse",
    "VectorSeedRequest",
    "VersionSpecFilter",
    "apply_filters",
    "chat_message",
    "cosine_similarity",
    "find_spec",
    "load_seed_requests",
    "majority_vote",
    "render_agents_json",
    "render_agents_xml",
    "result_of",
]
