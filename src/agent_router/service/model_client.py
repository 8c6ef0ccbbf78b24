"""Model Client - One Chat Completion per Routing Decision.

Wraps a Pydantic AI model behind the router's ``call(messages)`` contract.
Routing needs a single request/response exchange, not an agent loop, so the
client uses Pydantic AI's direct API (``model_request_sync``) and translates
router messages into Pydantic AI's native message types:

    SystemMessage    → SystemPromptPart  ┐ merged into one ModelRequest
    UserMessage      → UserPromptPart    ┘ while adjacent
    AssistantMessage → ModelResponse(TextPart)

Every backend failure (auth, transport, decoding) comes back as
``Failure(ModelClientError)``. Nothing raw leaks to the resolver.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, assert_never

from loguru import logger
from pydantic import BaseModel, ConfigDict
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelRequestPart,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.settings import ModelSettings

from ..domain.domain_type import ModelProvider
from ..domain.errors import ModelClientError
from ..domain.message import AssistantMessage, ChatMessage, SystemMessage, UserMessage
from ..domain.result import Failure, Success

if TYPE_CHECKING:
    from pydantic_ai.models import Model

OPENAI_BASE_URL = "https://api.openai.com/v1"
OLLAMA_BASE_URL = "http://localhost:11434/v1"


class ModelClient(Protocol):
    def call(self, messages: Sequence[ChatMessage]) -> Success[AssistantMessage] | Failure[ModelClientError]: ...


class ModelClientProperties(BaseModel):
    """Backend selection and sampling settings for a chat model.

    Attributes:
        provider: Which backend family to talk to
        api_key: Credential for the backend (not needed for Ollama)
        base_url: Endpoint override; required for the ``other`` provider
        model: Backend model name
        max_tokens: Completion budget
        temperature: Sampling temperature
        response_format: OpenAI-style response format type (e.g. "json_object")
        top_k: Top-K sampling, for backends that accept it
        top_p: Nucleus sampling
    """

    provider: ModelProvider
    api_key: str | None = None
    base_url: str | None = None
    model: str
    max_tokens: int = 2000
    temperature: float = 0.0
    response_format: str | None = None
    top_k: int | None = None
    top_p: float | None = None

    model_config = ConfigDict(frozen=True)

    @classmethod
    def openai_defaults(cls, api_key: str) -> ModelClientProperties:
        """Small, deterministic OpenAI setup in JSON mode."""
        return cls(
            provider=ModelProvider.OPENAI,
            api_key=api_key,
            base_url=OPENAI_BASE_URL,
            model="gpt-4o-mini",
            max_tokens=200,
            temperature=0.0,
            response_format="json_object",
        )

    def to_model_settings(self) -> ModelSettings:
        settings = ModelSettings(max_tokens=self.max_tokens, temperature=self.temperature)
        if self.top_p is not None:
            settings["top_p"] = self.top_p
        extra_body: dict[str, object] = {}
        if self.response_format:
            extra_body["response_format"] = {"type": self.response_format}
        if self.top_k is not None:
            extra_body["top_k"] = self.top_k
        if extra_body:
            settings["extra_body"] = extra_body
        return settings


def create_chat_model(properties: ModelClientProperties) -> Model:
    """Build the Pydantic AI model for ``properties.provider``.

    Raises:
        ValueError: If the provider is ``other`` without a base_url, or unknown
    """
    logger.debug("Creating chat model: provider={}, model={}", properties.provider, properties.model)

    match properties.provider:
        case ModelProvider.OPENAI:
            from pydantic_ai.models.openai import OpenAIChatModel
            from pydantic_ai.providers.openai import OpenAIProvider

            return OpenAIChatModel(
                properties.model,
                provider=OpenAIProvider(base_url=properties.base_url, api_key=properties.api_key),
            )
        case ModelProvider.ANTHROPIC:
            from pydantic_ai.models.anthropic import AnthropicModel
            from pydantic_ai.providers.anthropic import AnthropicProvider

            return AnthropicModel(properties.model, provider=AnthropicProvider(api_key=properties.api_key))
        case ModelProvider.GEMINI:
            from pydantic_ai.models.google import GoogleModel
            from pydantic_ai.providers.google import GoogleProvider

            return GoogleModel(properties.model, provider=GoogleProvider(api_key=properties.api_key))
        case ModelProvider.OLLAMA:
            from pydantic_ai.models.openai import OpenAIChatModel
            from pydantic_ai.providers.ollama import OllamaProvider

            return OpenAIChatModel(
                properties.model,
                provider=OllamaProvider(base_url=properties.base_url or OLLAMA_BASE_URL),
            )
        case ModelProvider.OTHER:
            if not properties.base_url:
                raise ValueError("base_url is required for the 'other' provider")
            from pydantic_ai.models.openai import OpenAIChatModel
            from pydantic_ai.providers.openai import OpenAIProvider

            return OpenAIChatModel(
                properties.model,
                provider=OpenAIProvider(base_url=properties.base_url, api_key=properties.api_key),
            )
        case _:
            raise ValueError(f"Unknown model provider: {properties.provider}")


def to_model_messages(messages: Sequence[ChatMessage]) -> list[ModelMessage]:
    """Translate router messages into Pydantic AI request/response messages."""
    model_messages: list[ModelMessage] = []
    for message in messages:
        part: ModelRequestPart
        match message:
            case SystemMessage():
                part = SystemPromptPart(content=message.content)
            case UserMessage():
                part = UserPromptPart(content=message.content)
            case AssistantMessage():
                model_messages.append(ModelResponse(parts=[TextPart(content=message.content)]))
                continue
            case _:
                assert_never(message)
        if model_messages and isinstance(model_messages[-1], ModelRequest):
            model_messages[-1] = ModelRequest(parts=[*model_messages[-1].parts, part])
        else:
            model_messages.append(ModelRequest(parts=[part]))
    return model_messages


def response_text(response: ModelResponse) -> str:
    return "".join(part.content for part in response.parts if isinstance(part, TextPart))


class PydanticAIModelClient:
    """ModelClient backed by any Pydantic AI model.

    Usage:
        >>> client = PydanticAIModelClient.from_properties(ModelClientProperties.openai_defaults(key))
        >>> client.call([SystemMessage(content=prompt), UserMessage(content="hi")])
    """

    def __init__(self, model: Model | str, settings: ModelSettings | None = None):
        self.model = model
        self.settings = settings

    @classmethod
    def from_properties(cls, properties: ModelClientProperties) -> PydanticAIModelClient:
        return cls(create_chat_model(properties), properties.to_model_settings())

    def call(self, messages: Sequence[ChatMessage]) -> Success[AssistantMessage] | Failure[ModelClientError]:
        from pydantic_ai.direct import model_request_sync

        try:
            response = model_request_sync(self.model, to_model_messages(messages), model_settings=self.settings)
        except Exception as e:
            logger.error("Model call failed: {}", e)
            return Failure(reason=ModelClientError(f"Failed to call model: {e}", e))
        return Success(value=AssistantMessage(content=response_text(response)))


__all__ = [
    "ModelClient",
    "ModelClientProperties",
    "PydanticAIModelClient",
    "create_chat_model",
    "response_text",
    "to_model_messages",
]
