"""Spec Providers - Source of Candidate Agents.

Contract: ``provide(filters=()) → Success[frozenset[AgentRoutingSpec]] | Failure[ProviderError]``

Filters are folded left to right over the full set. A filter that raises
yields ``Failure(ProviderError)`` carrying the filter's message.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Protocol

from loguru import logger
from pydantic import ValidationError

from ..domain.agent_spec import AgentRegistry, AgentRoutingSpec
from ..domain.errors import ProviderError
from ..domain.result import Failure, Success
from ..domain.spec_filter import SpecFilter, apply_filters


class AgentRoutingSpecsProvider(Protocol):
    def provide(
        self, filters: Iterable[SpecFilter] = ()
    ) -> Success[frozenset[AgentRoutingSpec]] | Failure[ProviderError]: ...


def _filtered(
    specs: frozenset[AgentRoutingSpec],
    filters: Iterable[SpecFilter],
) -> Success[frozenset[AgentRoutingSpec]] | Failure[ProviderError]:
    try:
        return Success(value=apply_filters(specs, filters))
    except Exception as e:
        logger.error("Spec filter failed: {}", e)
        return Failure(reason=ProviderError(str(e), e))


class JsonSpecProvider:
    """Registry loaded once from a JSON file at construction.

    Raises:
        ProviderError: If the file is missing or not a valid registry
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        try:
            self.registry = AgentRegistry.from_json_file(self.path)
        except OSError as e:
            raise ProviderError(f"Failed to read agent registry: {self.path}", e) from e
        except ValidationError as e:
            raise ProviderError(f"Invalid agent registry: {self.path}", e) from e
        logger.info("Loaded agent registry: path={}, agents={}", self.path, len(self.registry.root))

    @property
    def specs(self) -> frozenset[AgentRoutingSpec]:
        return self.registry.root

    def provide(
        self, filters: Iterable[SpecFilter] = ()
    ) -> Success[frozenset[AgentRoutingSpec]] | Failure[ProviderError]:
        return _filtered(self.specs, filters)


class InMemorySpecProvider:
    """Programmatic registry.

    Usage:
        >>> provider = InMemorySpecProvider().add(offer_spec).add(order_spec)
    """

    def __init__(self, specs: Iterable[AgentRoutingSpec] = ()):
        self._specs: frozenset[AgentRoutingSpec] = frozenset(specs)

    @property
    def specs(self) -> frozenset[AgentRoutingSpec]:
        return self._specs

    def add(self, spec: AgentRoutingSpec) -> InMemorySpecProvider:
        self._specs = self._specs | {spec}
        return self

    def provide(
        self, filters: Iterable[SpecFilter] = ()
    ) -> Success[frozenset[AgentRoutingSpec]] | Failure[ProviderError]:
        return _filtered(self._specs, filters)


__all__ = [
    "AgentRoutingSpecsProvider",
    "InMemorySpecProvider",
    "JsonSpecProvider",
]
