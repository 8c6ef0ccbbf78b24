"""Spec Filters - Narrow the Candidate Agent Set Before Routing.

A filter is any callable ``frozenset[AgentRoutingSpec] -> frozenset[AgentRoutingSpec]``.
Providers fold the supplied filters left to right, so ``[f, g]`` yields
``g(f(specs))``.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import reduce
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from .agent_spec import AgentRoutingSpec


@runtime_checkable
class SpecFilter(Protocol):
    def __call__(self, specs: frozenset[AgentRoutingSpec]) -> frozenset[AgentRoutingSpec]: ...


class NameSpecFilter(BaseModel):
    """Keep only the spec whose name equals ``value``."""

    value: str

    model_config = ConfigDict(frozen=True)

    def __call__(self, specs: frozenset[AgentRoutingSpec]) -> frozenset[AgentRoutingSpec]:
        return frozenset(spec for spec in specs if spec.name == self.value)


class VersionSpecFilter(BaseModel):
    """Keep only specs whose version equals ``value``."""

    value: str

    model_config = ConfigDict(frozen=True)

    def __call__(self, specs: frozenset[AgentRoutingSpec]) -> frozenset[AgentRoutingSpec]:
        return frozenset(spec for spec in specs if spec.version == self.value)


def apply_filters(
    specs: frozenset[AgentRoutingSpec],
    filters: Iterable[SpecFilter] = (),
) -> frozenset[AgentRoutingSpec]:
    """Fold ``filters`` over ``specs`` in iteration order.

    Exceptions raised by a filter propagate; providers turn them into
    ProviderError.
    """
    return reduce(lambda acc, spec_filter: spec_filter(acc), filters, specs)


__all__ = [
    "NameSpecFilter",
    "SpecFilter",
    "VersionSpecFilter",
    "apply_filters",
]
