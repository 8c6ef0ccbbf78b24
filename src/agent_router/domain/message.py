"""Chat Messages and Conversation Context.

Messages are a discriminated union on ``role``. Pydantic picks the variant
from the role value during validation, and consumers translate them with an
exhaustive ``match`` (see PydanticAIModelClient).

Usage:
    >>> chat_message("Hi", "user")
    UserMessage(role=<MessageRole.USER: 'user'>, content='Hi')
    >>> Context(previous_messages=(AssistantMessage(content="Hello"),))
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .domain_type import MessageRole


class UserMessage(BaseModel):
    role: Literal[MessageRole.USER] = MessageRole.USER
    content: str

    model_config = ConfigDict(frozen=True)


class SystemMessage(BaseModel):
    role: Literal[MessageRole.SYSTEM] = MessageRole.SYSTEM
    content: str

    model_config = ConfigDict(frozen=True)


class AssistantMessage(BaseModel):
    role: Literal[MessageRole.ASSISTANT] = MessageRole.ASSISTANT
    content: str

    model_config = ConfigDict(frozen=True)


ChatMessage = Annotated[
    UserMessage | SystemMessage | AssistantMessage,
    Field(discriminator="role"),
]

_chat_message_adapter: TypeAdapter[UserMessage | SystemMessage | AssistantMessage] = TypeAdapter(ChatMessage)


def chat_message(content: str, role: str) -> UserMessage | SystemMessage | AssistantMessage:
    """Build the message variant matching ``role``.

    Raises:
        ValueError: If role is not one of user, system, assistant
    """
    try:
        message_role = MessageRole(role)
    except ValueError as e:
        raise ValueError(f"Invalid role: {role}") from e
    return _chat_message_adapter.validate_python({"role": message_role, "content": content})


class Context(BaseModel):
    """Read-only conversation history preceding the current input."""

    previous_messages: tuple[ChatMessage, ...] = ()

    model_config = ConfigDict(frozen=True)


__all__ = [
    "AssistantMessage",
    "ChatMessage",
    "Context",
    "SystemMessage",
    "UserMessage",
    "chat_message",
]
