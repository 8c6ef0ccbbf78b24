"""API dependency wiring - builds the configured resolver once per process."""

from functools import lru_cache
from pathlib import Path

from loguru import logger

from ..config import settings
from ..domain.domain_type import EmbeddingProvider, RoutingStrategy
from ..domain.prompt import (
    DefaultModelPromptProvider,
    ExternalModelPromptProvider,
    IntentPromptProvider,
    ModelPromptProvider,
)
from ..domain.vector import load_seed_requests
from ..service.embedding import EmbeddingClient, OllamaEmbeddingClient, OpenAIEmbeddingClient
from ..service.model_client import ModelClient, ModelClientProperties, PydanticAIModelClient
from ..service.resolver import (
    AgentRoutingSpecsResolver,
    HybridAgentRoutingSpecsResolver,
    LLMAgentRoutingSpecsResolver,
    VectorAgentRoutingSpecsResolver,
)
from ..service.spec_provider import JsonSpecProvider
from ..service.vector_client import InMemoryVectorClient, QdrantVectorClient, VectorSearchClient


@lru_cache(maxsize=1)
def get_spec_provider() -> JsonSpecProvider:
    """Agent registry from AGENT_REGISTRY_PATH (cached singleton)."""
    return JsonSpecProvider(Path(settings.agent_registry_path))


@lru_cache(maxsize=1)
def get_model_client() -> ModelClient:
    """Chat model client from MODEL_* settings (cached singleton)."""
    properties = ModelClientProperties(
        provider=settings.model_provider,
        api_key=settings.model_api_key,
        base_url=settings.model_base_url,
        model=settings.model_name,
        max_tokens=settings.model_max_tokens,
        temperature=settings.model_temperature,
        response_format=settings.model_response_format,
        top_k=settings.model_top_k,
        top_p=settings.model_top_p,
    )
    return PydanticAIModelClient.from_properties(properties)


@lru_cache(maxsize=1)
def get_embedding_client() -> EmbeddingClient:
    """Embedding client from EMBEDDING_* settings (cached singleton)."""
    if settings.embedding_provider == EmbeddingProvider.OPENAI:
        return OpenAIEmbeddingClient(
            url=settings.embedding_url,
            model=settings.embedding_model,
            api_key=settings.embedding_api_key,
            batch_size=settings.embedding_batch_size,
        )
    return OllamaEmbeddingClient(host=settings.embedding_url, model=settings.embedding_model)


@lru_cache(maxsize=1)
def get_vector_client() -> VectorSearchClient:
    """Seeded vector store (cached singleton).

    The in-memory store is seeded from VECTOR_SEED_PATH on every start. A
    Qdrant collection is seeded while it holds no points; seeding upserts
    by stable point id, so a retry after a failed seed does not duplicate.
    """
    seed_path = Path(settings.vector_seed_path)
    if settings.vector_backend == "qdrant":
        from qdrant_client import QdrantClient

        qdrant = QdrantClient(url=settings.qdrant_url)
        client = QdrantVectorClient(
            qdrant,
            get_embedding_client(),
            collection=settings.qdrant_collection,
            top_k=settings.vector_limit,
            threshold=settings.qdrant_threshold,
        )
        if client.point_count() == 0:
            logger.info("Seeding Qdrant collection from {}", seed_path)
            client.seed(load_seed_requests(seed_path)).get_or_throw()
        return client
    return InMemoryVectorClient.from_seed_file(seed_path, get_embedding_client(), limit=settings.vector_limit)


def _prompt_provider(fallback: ModelPromptProvider) -> ModelPromptProvider:
    if settings.prompt_file_path:
        return ExternalModelPromptProvider(Path(settings.prompt_file_path), settings.prompt_list_format)
    return fallback


@lru_cache(maxsize=1)
def get_resolver() -> AgentRoutingSpecsResolver:
    """Resolver for ROUTER_STRATEGY (cached singleton)."""
    logger.info("Building resolver: strategy={}", settings.router_strategy)
    match settings.router_strategy:
        case RoutingStrategy.LLM:
            return LLMAgentRoutingSpecsResolver(
                get_spec_provider(),
                get_model_client(),
                prompt_provider=_prompt_provider(DefaultModelPromptProvider()),
            )
        case RoutingStrategy.VECTOR:
            return VectorAgentRoutingSpecsResolver(get_spec_provider(), get_vector_client())
        case RoutingStrategy.HYBRID:
            return HybridAgentRoutingSpecsResolver(
                get_spec_provider(),
                get_model_client(),
                get_vector_client(),
                prompt_provider=_prompt_provider(IntentPromptProvider()),
            )
