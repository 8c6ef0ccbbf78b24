"""
Integration tests for the routing endpoints.

Demonstrates:
- Swapping the cached resolver via app.dependency_overrides (no model calls)
- Outcome mapping: agent → 200, no match → 404, failure → 500
- Contract validation: Pydantic rejects malformed requests with 422
"""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from agent_router.api.deps import get_resolver, get_spec_provider
from agent_router.domain.errors import ProviderError
from agent_router.domain.result import Failure
from agent_router.main import app
from agent_router.service.resolver import LLMAgentRoutingSpecsResolver
from agent_router.service.spec_provider import InMemorySpecProvider

from tests.fakes import FakeModelClient


class BrokenProvider:
    def provide(self, filters=()):
        return Failure(reason=ProviderError("registry unavailable"))


@pytest.fixture
def model() -> FakeModelClient:
    return FakeModelClient('{"agentName": "offer-agent"}')


@pytest.fixture
def client(spec_provider: InMemorySpecProvider, model: FakeModelClient) -> Iterator[TestClient]:
    """Test client whose resolver is an LLM resolver over the fake model."""
    app.dependency_overrides[get_spec_provider] = lambda: spec_provider
    app.dependency_overrides[get_resolver] = lambda: LLMAgentRoutingSpecsResolver(spec_provider, model)
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_route_returns_agent_and_address(client: TestClient):
    """
    Demonstrates: The happy path end to end through the HTTP layer.
    """
    response = client.post("/route", json={"text": "What offers do you have for me?"})

    assert response.status_code == 200
    data = response.json()
    assert data["agent"]["name"] == "offer-agent"
    assert data["address"] == {"protocol": "http", "uri": "http://localhost:8081/agents/offer-agent"}


def test_previous_messages_reach_the_model(client: TestClient, model: FakeModelClient):
    client.post(
        "/route",
        json={
            "text": "Show me that one",
            "previous_messages": [
                {"role": "user", "content": "Any deals?"},
                {"role": "assistant", "content": "We have two offers."},
            ],
        },
    )

    sent = model.calls[0]
    assert [m.role for m in sent] == ["system", "user", "assistant", "user"]
    assert sent[-1].content == "Show me that one"


def test_filter_excluding_the_answer_gives_404(client: TestClient):
    response = client.post("/route", json={"text": "Any offers?", "agent_name": "order-agent"})

    assert response.status_code == 404
    assert response.json()["detail"] == "No agent matched the request"


def test_version_filter_is_applied(client: TestClient, model: FakeModelClient):
    client.post("/route", json={"text": "Any offers?", "version": "2.0.0"})

    prompt = model.calls[0][0].content
    assert "order-agent" in prompt
    assert "offer-agent" not in prompt


def test_resolver_failure_gives_500(spec_provider: InMemorySpecProvider):
    failing = LLMAgentRoutingSpecsResolver(spec_provider, FakeModelClient(error=ConnectionError("down")))
    app.dependency_overrides[get_resolver] = lambda: failing
    try:
        response = TestClient(app).post("/route", json={"text": "Any offers?"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "Model call failed"


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"text": ""},
        {"text": "hi", "previous_messages": [{"role": "robot", "content": "beep"}]},
    ],
)
def test_malformed_request_is_422(client: TestClient, body: dict):
    assert client.post("/route", json=body).status_code == 422


def test_list_agents_sorted_by_name(client: TestClient):
    response = client.get("/agents")

    assert response.status_code == 200
    assert [agent["name"] for agent in response.json()] == ["offer-agent", "order-agent"]


def test_list_agents_provider_failure_gives_500():
    app.dependency_overrides[get_spec_provider] = BrokenProvider
    try:
        response = TestClient(app).get("/agents")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json()["detail"] == "registry unavailable"
