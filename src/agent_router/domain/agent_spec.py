"""Agent Registry Model - Routing Specifications for Registered Agents.

An AgentRoutingSpec describes one agent a request can be routed to: who it
is (name, version), what it can do (capabilities) and how to reach it
(addresses). Specs are loaded once by a provider and never mutated.

Architecture:
    AgentRegistry: Root container, loaded from the registry JSON file
    └─ AgentRoutingSpec: One agent (unique by name within a registry)
       ├─ Capability: Declared skill (name, description, version)
       └─ Address: How to reach the agent (protocol + uri)

Key Features:
    - Fail-fast validation: blank name/version or no address is rejected at
      construction, whichever path constructs the spec (factory, JSON, direct)
    - Structural equality: frozen models hash by value, so frozensets
      deduplicate identical specs
    - Lossless JSON round-trip through the registry file format
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, RootModel, model_validator


class Capability(BaseModel):
    """Declared skill of an agent. Pure value, no identity."""

    name: str
    description: str
    version: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def create(cls, name: str = "", description: str = "", version: str = "") -> Capability:
        return cls(name=name, description=description, version=version)


class Address(BaseModel):
    """Endpoint of an agent. Not dereferenced by the router."""

    protocol: str = "http"
    uri: str

    model_config = ConfigDict(frozen=True)


class AgentRoutingSpec(BaseModel):
    """Routing Specification of a Single Agent.

    Attributes:
        name: Unique key within a candidate set, matched exactly by resolvers
        description: Free text shown to the language model
        version: Agent version, used by VersionSpecFilter
        capabilities: What the agent can do
        addresses: Where the agent lives (at least one)

    Invariants:
        - name and version are non-blank
        - addresses is non-empty

    Example:
        >>> spec = AgentRoutingSpec.create(
        ...     name="offer-agent",
        ...     version="1.0.0",
        ...     description="Handles offers",
        ...     addresses=[Address(uri="/agents/offer-agent")],
        ... )
    """

    name: str
    description: str
    version: str
    capabilities: frozenset[Capability]
    addresses: frozenset[Address]

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_required_identity(self) -> AgentRoutingSpec:
        """Reject specs that could never be routed to.

        Raises:
            ValueError: If name or version is blank, or no address is given
        """
        if not self.name.strip():
            raise ValueError("name cannot be blank")
        if not self.version.strip():
            raise ValueError("version cannot be blank")
        if not self.addresses:
            raise ValueError("address cannot be empty")
        return self

    @classmethod
    def create(
        cls,
        *,
        name: str,
        version: str,
        addresses: Iterable[Address],
        description: str = "",
        capabilities: Iterable[Capability] = (),
    ) -> AgentRoutingSpec:
        """Factory with the defaults a programmatic registry usually wants."""
        return cls(
            name=name,
            description=description,
            version=version,
            capabilities=frozenset(capabilities),
            addresses=frozenset(addresses),
        )

    @property
    def primary_address(self) -> Address:
        """Deterministic pick among addresses (sorted by protocol, uri)."""
        return min(self.addresses, key=lambda a: (a.protocol, a.uri))


class AgentRegistry(RootModel[frozenset[AgentRoutingSpec]]):
    """Set of agent specs - wraps frozenset for JSON loading and lookups."""

    root: frozenset[AgentRoutingSpec] = frozenset()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_unique_names(self) -> AgentRegistry:
        """Names are the lookup key, so two different specs may not share one.

        Raises:
            ValueError: If a name appears on more than one spec
        """
        all_names = [spec.name for spec in self.root]
        unique_names = set(all_names)

        if len(all_names) != len(unique_names):
            duplicates = [name for name in unique_names if all_names.count(name) > 1]
            raise ValueError(f"Duplicate agent names in registry: {sorted(duplicates)}")
        return self

    @classmethod
    def from_json(cls, data: str | bytes) -> AgentRegistry:
        """Parse the registry format: a JSON array of agent objects."""
        return cls.model_validate_json(data)

    @classmethod
    def from_json_file(cls, path: Path) -> AgentRegistry:
        """Load and validate a registry file."""
        return cls.from_json(path.read_text(encoding="utf-8"))

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)

    def names(self) -> frozenset[str]:
        return frozenset(spec.name for spec in self.root)

    def find(self, name: str) -> AgentRoutingSpec | None:
        return find_spec(self.root, name)


def find_spec(specs: Iterable[AgentRoutingSpec], name: str | None) -> AgentRoutingSpec | None:
    """Exact-name lookup. None when the name is absent or not a candidate."""
    if name is None:
        return None
    return next((spec for spec in specs if spec.name == name), None)


__all__ = [
    "Address",
    "AgentRegistry",
    "AgentRoutingSpec",
    "Capability",
    "find_spec",
]
