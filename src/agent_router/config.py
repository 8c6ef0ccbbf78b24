"""Application Configuration

Type-safe configuration using Pydantic Settings, read from environment
variables and ``.env``. Defaults target a local development setup (Ollama on
localhost, sample registry and seed files under ``data/``).

Only this module and ``api.deps`` read configuration. Domain and service
classes receive explicit constructor arguments.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings

from .domain.domain_type import AgentListFormat, EmbeddingProvider, ModelProvider, RoutingStrategy


class Settings(BaseSettings):
    """Application settings from environment variables"""

    # =============================================================================
    # APPLICATION
    # =============================================================================

    app_name: str = Field(default="agent-router", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    app_description: str = Field(
        default="Routes user utterances to the best-matching registered agent",
        alias="APP_DESCRIPTION",
    )
    environment: str = Field(default="development", alias="ENVIRONMENT")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # CORS Settings
    cors_origins: str = Field(default="", alias="CORS_ORIGINS")
    cors_credentials: bool = Field(default=False, alias="CORS_CREDENTIALS")
    cors_methods: str = Field(default="GET,POST", alias="CORS_METHODS")
    cors_headers: str = Field(default="*", alias="CORS_HEADERS")

    # =============================================================================
    # ROUTING
    # =============================================================================

    router_strategy: RoutingStrategy = Field(default=RoutingStrategy.LLM, alias="ROUTER_STRATEGY")
    agent_registry_path: str = Field(default="data/agents.json", alias="AGENT_REGISTRY_PATH")
    vector_seed_path: str = Field(default="data/seed.json", alias="VECTOR_SEED_PATH")

    # External prompt template; built-in prompt when unset
    prompt_file_path: str | None = Field(default=None, alias="PROMPT_FILE_PATH")
    prompt_list_format: AgentListFormat = Field(default=AgentListFormat.XML, alias="PROMPT_LIST_FORMAT")

    # =============================================================================
    # LLM CONFIGURATION
    # =============================================================================

    model_provider: ModelProvider = Field(default=ModelProvider.OLLAMA, alias="MODEL_PROVIDER")
    model_name: str = Field(default="llama3.2", alias="MODEL_NAME")
    model_base_url: str | None = Field(default=None, alias="MODEL_BASE_URL")
    model_api_key: str | None = Field(default=None, alias="MODEL_API_KEY")
    model_max_tokens: int = Field(default=2000, alias="MODEL_MAX_TOKENS")
    model_temperature: float = Field(default=0.0, alias="MODEL_TEMPERATURE")
    model_response_format: str | None = Field(default=None, alias="MODEL_RESPONSE_FORMAT")
    model_top_k: int | None = Field(default=None, alias="MODEL_TOP_K")
    model_top_p: float | None = Field(default=None, alias="MODEL_TOP_P")

    # =============================================================================
    # EMBEDDINGS & VECTOR SEARCH
    # =============================================================================

    embedding_provider: EmbeddingProvider = Field(default=EmbeddingProvider.OLLAMA, alias="EMBEDDING_PROVIDER")
    embedding_url: str = Field(default="http://localhost:11434", alias="EMBEDDING_URL")
    embedding_model: str = Field(default="all-minilm", alias="EMBEDDING_MODEL")
    embedding_api_key: str | None = Field(default=None, alias="EMBEDDING_API_KEY")
    embedding_batch_size: int = Field(default=300, alias="EMBEDDING_BATCH_SIZE")

    # "memory" keeps seeded documents in process, "qdrant" uses QDRANT_URL
    vector_backend: str = Field(default="memory", alias="VECTOR_BACKEND")
    vector_limit: int = Field(default=5, alias="VECTOR_LIMIT")

    # Qdrant - Vector database
    qdrant_url: str = Field(default="http://localhost:6333", alias="QDRANT_URL")
    qdrant_collection: str = Field(default="agent_routes", alias="QDRANT_COLLECTION")
    qdrant_threshold: float = Field(default=0.5, alias="QDRANT_THRESHOLD")

    # The "model_" prefix is ours, not pydantic's namespace
    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
        "protected_namespaces": (),
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
