"""
Tests for the Pydantic AI model client.

These tests demonstrate:
- Using Pydantic AI's FunctionModel as the backend (no network)
- Message translation to Pydantic AI request/response messages
- Backend exceptions come back as Failure(ModelClientError)
"""

import pytest
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from agent_router.domain.domain_type import ModelProvider
from agent_router.domain.errors import ModelClientError, ResolverError
from agent_router.domain.message import AssistantMessage, SystemMessage, UserMessage
from agent_router.domain.result import Failure, Success
from agent_router.service.model_client import (
    ModelClientProperties,
    PydanticAIModelClient,
    create_chat_model,
    to_model_messages,
)


class TestMessageTranslation:
    def test_adjacent_system_and_user_share_one_request(self):
        messages = to_model_messages([SystemMessage(content="prompt"), UserMessage(content="hi")])

        assert len(messages) == 1
        assert isinstance(messages[0], ModelRequest)
        assert [type(part) for part in messages[0].parts] == [SystemPromptPart, UserPromptPart]

    def test_assistant_turn_becomes_model_response(self):
        messages = to_model_messages(
            [SystemMessage(content="prompt"), AssistantMessage(content="Hello"), UserMessage(content="hi")]
        )

        assert [type(m) for m in messages] == [ModelRequest, ModelResponse, ModelRequest]
        assert isinstance(messages[1], ModelResponse)
        assert messages[1].parts == [TextPart(content="Hello")]


class TestPydanticAIModelClient:
    def test_returns_assistant_message_with_model_text(self):
        received: list[list[ModelMessage]] = []

        def reply(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            received.append(messages)
            return ModelResponse(parts=[TextPart(content='{"agentName": "agent1"}')])

        client = PydanticAIModelClient(FunctionModel(reply))

        result = client.call([SystemMessage(content="prompt"), UserMessage(content="Where is my order?")])

        assert result == Success(value=AssistantMessage(content='{"agentName": "agent1"}'))
        user_parts = [p for p in received[0][-1].parts if isinstance(p, UserPromptPart)]
        assert user_parts[0].content == "Where is my order?"

    def test_backend_exception_is_model_client_failure(self):
        def broken(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise ConnectionError("connection refused")

        client = PydanticAIModelClient(FunctionModel(broken))

        result = client.call([UserMessage(content="hi")])

        assert isinstance(result, Failure)
        assert isinstance(result.reason, ModelClientError)
        assert isinstance(result.reason, ResolverError)
        assert isinstance(result.reason.cause, ConnectionError)


class TestModelClientProperties:
    def test_openai_defaults(self):
        properties = ModelClientProperties.openai_defaults("sk-test")

        assert properties.provider == ModelProvider.OPENAI
        assert properties.model == "gpt-4o-mini"
        assert properties.max_tokens == 200
        assert properties.response_format == "json_object"

    def test_model_settings_carry_sampling_and_format(self):
        properties = ModelClientProperties(
            provider=ModelProvider.OTHER,
            base_url="http://llm.local/v1",
            model="m",
            response_format="json_object",
            top_k=40,
            top_p=0.9,
        )

        settings = properties.to_model_settings()

        assert settings["max_tokens"] == 2000
        assert settings["temperature"] == 0.0
        assert settings["top_p"] == 0.9
        assert settings["extra_body"] == {"response_format": {"type": "json_object"}, "top_k": 40}

    def test_plain_settings_have_no_extra_body(self):
        settings = ModelClientProperties(provider=ModelProvider.OLLAMA, model="llama3.2").to_model_settings()

        assert "extra_body" not in settings


class TestCreateChatModel:
    def test_other_provider_requires_base_url(self):
        with pytest.raises(ValueError, match="base_url is required"):
            create_chat_model(ModelClientProperties(provider=ModelProvider.OTHER, model="m"))

    @pytest.mark.parametrize("provider", [ModelProvider.OPENAI, ModelProvider.OLLAMA, ModelProvider.OTHER])
    def test_openai_compatible_providers_build_named_model(self, provider: ModelProvider):
        properties = ModelClientProperties(
            provider=provider,
            api_key="sk-test",
            base_url="http://llm.local/v1",
            model="my-model",
        )

        model = create_chat_model(properties)

        assert model.model_name == "my-model"
