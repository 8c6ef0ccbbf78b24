"""Routing Prompts - Agent List Rendering, Prompt Providers and Reply Parsing.

The LLM strategy shows the model every candidate agent and asks it to answer
with ``{"agentName": "<name>"}``. This module owns both halves of that
conversation:

    Outbound: render_agents_xml / render_agents_json → ModelPromptProvider
    Inbound:  ModelResponseProcessor (strip fences / answer tags) → AgentSelection

Prompt Providers:
    - DefaultModelPromptProvider: built-in instructions + XML agent list
    - ExternalModelPromptProvider: template file with a ${agents_list_xml}
      or ${agents_list_json} placeholder
    - IntentPromptProvider: asks for a short restatement of the user's intent
      (the first half of hybrid routing)
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol
from xml.sax.saxutils import escape

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .agent_spec import AgentRoutingSpec
from .domain_type import AgentListFormat
from .errors import ResolverError
from .message import Context, UserMessage
from .result import Failure, Success

DEFAULT_ROUTING_PROMPT = """
You are an AI tasked with selecting the most suitable agent to address a user query based on the agents' capabilities.
You will be provided with a list of agents and their capabilities, followed by a user query.
Your goal is to analyze the query and match it with the most appropriate agent.

First, here is the list of agents and their capabilities:

{agents}

To select the most suitable agent, follow these steps:

1. Carefully read and understand the user query.
2. Review the list of agents and their capabilities.
3. Analyze how well each agent's capabilities match the requirements of the user query.
4. Consider relevance, expertise and specificity of each agent's capabilities for the query.
5. Select the agent whose capabilities best align with the user's needs.

Once you have determined the most suitable agent, provide your answer in the following JSON format:

<answer>
```json
{{"agentName": "name-of-agent"}}
```
</answer>

Ensure that the agent name you provide exactly matches the name given in the agents list.
Do not include any additional explanation or justification in your response; only provide the JSON object as specified.
""".strip()

INTENT_PROMPT = """
Restate what the user wants to achieve in one short sentence.

Use the conversation so far to resolve references such as "it" or "that one".
Describe the need itself, in plain words, the way a help-desk ticket title would.
Do not answer the question. Do not name or choose an agent.

For orientation, these are the kinds of requests that can be handled:

{agents}
""".strip()


def _sorted_specs(specs: Iterable[AgentRoutingSpec]) -> list[AgentRoutingSpec]:
    return sorted(specs, key=lambda spec: (spec.name, spec.version))


def render_agents_xml(specs: Iterable[AgentRoutingSpec]) -> str:
    """Render specs as an ``<agents_list>`` block, sorted by name.

    Text content is XML-escaped so descriptions cannot break the markup.
    """
    lines = ["<agents_list>"]
    for spec in _sorted_specs(specs):
        lines.append("<agent>")
        lines.append(f"<name>{escape(spec.name)}</name>")
        lines.append(f"<description>{escape(spec.description)}</description>")
        lines.append("<capabilities>")
        for capability in sorted(spec.capabilities, key=lambda c: c.name):
            lines.append("<capability>")
            lines.append(f"<name>{escape(capability.name)}</name>")
            lines.append(f"<description>{escape(capability.description)}</description>")
            lines.append("</capability>")
        lines.append("</capabilities>")
        lines.append("</agent>")
    lines.append("</agents_list>")
    return "\n".join(lines)


_spec_list_adapter = TypeAdapter(list[AgentRoutingSpec])


def render_agents_json(specs: Iterable[AgentRoutingSpec]) -> str:
    """Render specs in the registry JSON format, sorted by name."""
    return _spec_list_adapter.dump_json(_sorted_specs(specs)).decode()


def render_agents(specs: Iterable[AgentRoutingSpec], list_format: AgentListFormat) -> str:
    match list_format:
        case AgentListFormat.XML:
            return render_agents_xml(specs)
        case AgentListFormat.JSON:
            return render_agents_json(specs)


class ModelPromptProvider(Protocol):
    """Builds the system prompt for one routing call."""

    def provide_prompt(
        self,
        context: Context,
        specs: frozenset[AgentRoutingSpec],
        input: UserMessage,
    ) -> Success[str] | Failure[ResolverError]: ...


class DefaultModelPromptProvider:
    """Built-in routing instructions with the candidates as XML.

    The prompt asks for a JSON answer, so pair it with a JSON response
    format on the model where the backend supports one.
    """

    def provide_prompt(
        self,
        context: Context,
        specs: frozenset[AgentRoutingSpec],
        input: UserMessage,
    ) -> Success[str] | Failure[ResolverError]:
        return Success(value=DEFAULT_ROUTING_PROMPT.format(agents=render_agents_xml(specs)))


class ExternalModelPromptProvider:
    """Prompt template read from disk on every call.

    The placeholder matching ``list_format`` is replaced with the rendered
    candidate list. Other text, including other ``${...}`` markers, is left
    untouched.
    """

    def __init__(self, prompt_file_path: Path, list_format: AgentListFormat = AgentListFormat.XML):
        self.prompt_file_path = Path(prompt_file_path)
        self.list_format = list_format

    def provide_prompt(
        self,
        context: Context,
        specs: frozenset[AgentRoutingSpec],
        input: UserMessage,
    ) -> Success[str] | Failure[ResolverError]:
        try:
            template = self.prompt_file_path.read_text(encoding="utf-8")
        except OSError as e:
            return Failure(reason=ResolverError(f"Failed to read prompt file: {self.prompt_file_path}", e))
        rendered = render_agents(specs, self.list_format)
        return Success(value=template.replace(self.list_format.placeholder, rendered))


class IntentPromptProvider:
    """Asks the model to distill the user's need into a short query text."""

    def provide_prompt(
        self,
        context: Context,
        specs: frozenset[AgentRoutingSpec],
        input: UserMessage,
    ) -> Success[str] | Failure[ResolverError]:
        return Success(value=INTENT_PROMPT.format(agents=render_agents_xml(specs)))


class ModelResponseProcessor(Protocol):
    """Turns raw model text into the JSON body the resolver parses."""

    def process(self, model_response: str) -> str: ...


class FencedAnswerProcessor:
    """Strip markdown code fences and ``<answer>`` tags around a reply.

    Examples:
        '```json\\n{"agentName": "a"}\\n```'  → '{"agentName": "a"}'
        '<answer>{"agentName": "a"}</answer>' → '{"agentName": "a"}'
    """

    def process(self, model_response: str) -> str:
        response = model_response.strip()
        if "```json" in response:
            response = _between(response, "```json", "```")
        elif "```" in response:
            response = _between(response, "```", "```")
        if "<answer>" in response:
            response = _between(response, "<answer>", "</answer>")
        return response


def _between(text: str, start: str, end: str) -> str:
    after = text.split(start, 1)[1]
    return after.split(end, 1)[0].strip()


class AgentSelection(BaseModel):
    """Parsed routing reply. Unknown keys in the reply are ignored."""

    agent_name: str = Field(alias="agentName")

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


__all__ = [
    "DEFAULT_ROUTING_PROMPT",
    "INTENT_PROMPT",
    "AgentSelection",
    "DefaultModelPromptProvider",
    "ExternalModelPromptProvider",
    "FencedAnswerProcessor",
    "IntentPromptProvider",
    "ModelPromptProvider",
    "ModelResponseProcessor",
    "render_agents",
    "render_agents_json",
    "render_agents_xml",
]
