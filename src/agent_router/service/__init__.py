"""Service Layer - Backends and Resolution Strategies.

Backends (spec providers, model, embedding and vector clients) sit behind
small Protocols so resolvers can be composed with real or fake clients.
"""

from .batch import BatchRecord, resolve_batch
from .embedding import EmbeddingClient, OllamaEmbeddingClient, OpenAIEmbeddingClient
from .model_client import ModelClient, ModelClientProperties, PydanticAIModelClient, create_chat_model
from .resolver import (
    AgentRoutingSpecsResolver,
    HybridAgentRoutingSpecsResolver,
    LLMAgentRoutingSpecsResolver,
    ModelResponseToQuery,
    PassThroughQueryConverter,
    VectorAgentRoutingSpecsResolver,
)
from .spec_provider import AgentRoutingSpecsProvider, InMemorySpecProvider, JsonSpecProvider
from .vector_client import (
    InMemoryVectorClient,
    QdrantVectorClient,
    VectorSearchClient,
    VectorSeedClient,
)

__all__ = [
    "AgentRoutingSpecsProvider",
    "AgentRoutingSpecsResolver",
    "BatchRecord",
    "EmbeddingClient",
    "HybridAgentRoutingSpecsResolver",
    "InMemorySpecProvider",
    "InMemoryVectorClient",
    "JsonSpecProvider",
    "LLMAgentRoutingSpecsResolver",
    "ModelClient",
    "ModelClientProperties",
    "ModelResponseToQuery",
    "OllamaEmbeddingClient",
    "OpenAIEmbeddingClient",
    "PassThroughQueryConverter",
    "PydanticAIModelClient",
    "QdrantVectorClient",
    "VectorAgentRoutingSpecsResolver",
    "VectorSearchClient",
    "VectorSeedClient",
    "create_chat_model",
    "resolve_batch",
]
