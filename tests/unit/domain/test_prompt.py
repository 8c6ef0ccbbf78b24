"""
Tests for routing prompts and reply processing.

These tests demonstrate:
- Agent list rendering is deterministic and escapes markup
- External templates get exactly their placeholder replaced
- Reply processing strips fences and answer tags before parsing
"""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from agent_router.domain.agent_spec import AgentRoutingSpec
from agent_router.domain.domain_type import AgentListFormat
from agent_router.domain.errors import ResolverError
from agent_router.domain.message import Context, UserMessage
from agent_router.domain.prompt import (
    AgentSelection,
    DefaultModelPromptProvider,
    ExternalModelPromptProvider,
    FencedAnswerProcessor,
    IntentPromptProvider,
    render_agents_json,
    render_agents_xml,
)
from agent_router.domain.result import Failure, Success

INPUT = UserMessage(content="Where is my order?")


class TestAgentListRendering:
    def test_xml_lists_agents_sorted_by_name(self, offer_spec: AgentRoutingSpec, order_spec: AgentRoutingSpec):
        xml = render_agents_xml({order_spec, offer_spec})

        assert xml.startswith("<agents_list>")
        assert xml.endswith("</agents_list>")
        assert xml.index("<name>offer-agent</name>") < xml.index("<name>order-agent</name>")
        assert "<name>view-offers</name>" in xml

    def test_xml_escapes_markup_in_descriptions(self, spec_factory):
        spec = spec_factory("agent-1", description="Q&A for <b>bold</b> users")

        xml = render_agents_xml({spec})

        assert "<description>Q&amp;A for &lt;b&gt;bold&lt;/b&gt; users</description>" in xml

    def test_json_uses_registry_format(self, offer_spec: AgentRoutingSpec):
        data = json.loads(render_agents_json({offer_spec}))

        assert data[0]["name"] == "offer-agent"
        assert data[0]["addresses"] == [{"protocol": "http", "uri": "http://localhost:8081/agents/offer-agent"}]


class TestPromptProviders:
    def test_default_prompt_embeds_agents_and_answer_format(self, offer_spec: AgentRoutingSpec):
        result = DefaultModelPromptProvider().provide_prompt(Context(), frozenset({offer_spec}), INPUT)

        assert isinstance(result, Success)
        assert "<name>offer-agent</name>" in result.value
        assert '{"agentName": "name-of-agent"}' in result.value

    def test_intent_prompt_does_not_ask_for_agent_name(self, offer_spec: AgentRoutingSpec):
        result = IntentPromptProvider().provide_prompt(Context(), frozenset({offer_spec}), INPUT)

        assert isinstance(result, Success)
        assert "agentName" not in result.value
        assert "<name>offer-agent</name>" in result.value

    @pytest.mark.parametrize(
        ("list_format", "marker"),
        [(AgentListFormat.XML, "<agents_list>"), (AgentListFormat.JSON, '"name":"offer-agent"')],
    )
    def test_external_template_replaces_its_placeholder(
        self,
        tmp_path: Path,
        offer_spec: AgentRoutingSpec,
        list_format: AgentListFormat,
        marker: str,
    ):
        template = tmp_path / "prompt.txt"
        template.write_text("Agents:\n${agents_list_xml}\n${agents_list_json}\nPick one.")

        result = ExternalModelPromptProvider(template, list_format).provide_prompt(
            Context(), frozenset({offer_spec}), INPUT
        )

        assert isinstance(result, Success)
        assert marker in result.value
        assert list_format.placeholder not in result.value
        assert result.value.startswith("Agents:\n")
        assert result.value.endswith("\nPick one.")

    def test_external_template_missing_file_is_failure(self, tmp_path: Path, offer_spec: AgentRoutingSpec):
        provider = ExternalModelPromptProvider(tmp_path / "missing.txt")

        result = provider.provide_prompt(Context(), frozenset({offer_spec}), INPUT)

        assert isinstance(result, Failure)
        assert isinstance(result.reason, ResolverError)
        assert "missing.txt" in result.reason.message


class TestFencedAnswerProcessor:
    @pytest.mark.parametrize(
        "reply",
        [
            '{"agentName": "agent1"}',
            '  {"agentName": "agent1"}\n',
            '```json\n{"agentName": "agent1"}\n```',
            '```\n{"agentName": "agent1"}\n```',
            '<answer>{"agentName": "agent1"}</answer>',
            '<answer>\n```json\n{"agentName": "agent1"}\n```\n</answer>',
            'Sure!\n```json\n{"agentName": "agent1"}\n```\nHope that helps.',
        ],
    )
    def test_strips_wrapping(self, reply: str):
        assert FencedAnswerProcessor().process(reply) == '{"agentName": "agent1"}'


class TestAgentSelection:
    def test_parses_alias_and_ignores_extra_keys(self):
        selection = AgentSelection.model_validate_json('{"agentName": "agent1", "confidence": 0.9}')

        assert selection.agent_name == "agent1"

    def test_rejects_non_json(self):
        with pytest.raises(ValidationError):
            AgentSelection.model_validate_json("the order agent, obviously")
