"""Domain Type System - Core Enumerations.

Defines type-safe constants using Python's StrEnum for routing concepts.
Using StrEnum instead of plain Enum provides automatic string coercion
and better JSON serialization without custom encoders.
"""

from enum import StrEnum


class MessageRole(StrEnum):
    """Conversation Roles.

    Discriminator values for the ChatMessage union. Every consumer of a
    message (prompt assembly, provider translation) matches on these.
    """

    USER = "user"
    SYSTEM = "system"
    ASSISTANT = "assistant"


class ModelProvider(StrEnum):
    """LLM Backend Identifiers.

    Supported backends for the model client factory.

    Providers:
        OPENAI: api.openai.com (or Azure-style OpenAI endpoints via base_url)
        ANTHROPIC: Claude models
        GEMINI: Google Gemini models
        OLLAMA: Local models served by Ollama
        OTHER: Any OpenAI-compatible endpoint (base_url required)
    """

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GEMINI = "gemini"
    OLLAMA = "ollama"
    OTHER = "other"


class EmbeddingProvider(StrEnum):
    """Embedding Backend Identifiers."""

    OLLAMA = "ollama"
    OPENAI = "openai"


class AgentListFormat(StrEnum):
    """Serialization of the candidate agents inside a routing prompt.

    The value doubles as the placeholder keyword in external prompt
    templates: a template containing ``${agents_list_xml}`` receives the
    XML rendering, ``${agents_list_json}`` the JSON rendering.
    """

    XML = "agents_list_xml"
    JSON = "agents_list_json"

    @property
    def placeholder(self) -> str:
        return "${" + self.value + "}"


class RoutingStrategy(StrEnum):
    """Resolution strategies selectable from configuration."""

    LLM = "llm"
    VECTOR = "vector"
    HYBRID = "hybrid"


class ResultStatus(StrEnum):
    """Discriminator for the Success | Failure union."""

    SUCCESS = "success"
    FAILURE = "failure"


__all__ = [
    "AgentListFormat",
    "EmbeddingProvider",
    "MessageRole",
    "ModelProvider",
    "ResultStatus",
    "RoutingStrategy",
]
