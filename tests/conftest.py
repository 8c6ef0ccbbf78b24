"""
Shared test fixtures and configuration.

Environment strategy:
- All tests load .env.test before the package is imported, so settings
  never point at real backends
- Backends are replaced by the fakes in tests/fakes.py; they implement the
  client protocols the resolvers depend on
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent
load_dotenv(ROOT / ".env.test", override=True)

from agent_router.domain.agent_spec import Address, AgentRoutingSpec, Capability
from agent_router.service.spec_provider import InMemorySpecProvider

from tests.fakes import FakeEmbeddingClient, FakeModelClient


def make_spec(name: str, version: str = "1.0.0", description: str = "") -> AgentRoutingSpec:
    return AgentRoutingSpec.create(
        name=name,
        version=version,
        description=description,
        addresses=[Address(uri=f"http://localhost:8081/agents/{name}")],
    )


@pytest.fixture
def spec_factory() -> Callable[..., AgentRoutingSpec]:
    """Build a minimal spec: name, version, one http address."""
    return make_spec


@pytest.fixture
def offer_spec() -> AgentRoutingSpec:
    """Agent that handles offers and plan upgrades."""
    return AgentRoutingSpec.create(
        name="offer-agent",
        version="1.0.0",
        description="Presents current offers and plan upgrades",
        capabilities=[Capability.create("view-offers", "Show available offers", "1.0.0")],
        addresses=[Address(uri="http://localhost:8081/agents/offer-agent")],
    )


@pytest.fixture
def order_spec() -> AgentRoutingSpec:
    """Agent that places and tracks orders."""
    return AgentRoutingSpec.create(
        name="order-agent",
        version="2.0.0",
        description="Places, tracks and cancels orders",
        capabilities=[Capability.create("track-order", "Report delivery status", "1.0.0")],
        addresses=[Address(uri="http://localhost:8081/agents/order-agent")],
    )


@pytest.fixture
def spec_provider(offer_spec: AgentRoutingSpec, order_spec: AgentRoutingSpec) -> InMemorySpecProvider:
    """In-memory provider holding offer-agent and order-agent."""
    return InMemorySpecProvider().add(offer_spec).add(order_spec)


@pytest.fixture
def model_client_factory() -> Callable[..., FakeModelClient]:
    """Build a FakeModelClient with the given replies."""
    return FakeModelClient


@pytest.fixture
def embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient()


@pytest.fixture
def failing_embedding_client() -> FakeEmbeddingClient:
    return FakeEmbeddingClient(fail=True)


@pytest.fixture
def registry_path() -> Path:
    """The sample agent registry shipped with the repo."""
    return ROOT / "data" / "agents.json"


@pytest.fixture
def seed_path() -> Path:
    """The sample vector seed file shipped with the repo."""
    return ROOT / "data" / "seed.json"
