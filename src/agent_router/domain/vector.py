"""Vector Routing Model - Documents, Requests and the Ranking Math.

Similarity routing stores example utterances per agent, embeds the incoming
query and lets the nearest examples vote:

    1. Rank stored documents by cosine similarity to the query (descending)
    2. Keep the top ``limit`` documents
    3. Group them by agent - the largest group wins, ties go to the group
       whose first document ranked highest

Winning by group size rather than top score means a single lucky example
cannot outvote several consistent ones.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from .message import Context


class VectorDocument(BaseModel):
    """Stored example utterance with its embedding."""

    text: str
    vector: tuple[float, ...]
    agent_name: str

    model_config = ConfigDict(frozen=True)


class VectorSeedRequest(BaseModel):
    """Example utterance to embed for an agent. Seed files use ``agentName``."""

    agent_name: str = Field(alias="agentName")
    text: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class VectorSearchRequest(BaseModel):
    query: str
    context: Context = Context()

    model_config = ConfigDict(frozen=True)


class VectorSearchResponse(BaseModel):
    """Best matching stored text and the agent it belongs to."""

    text: str
    agent_name: str

    model_config = ConfigDict(frozen=True)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine of the angle between ``a`` and ``b``.

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors differ in length
    """
    if len(a) != len(b):
        raise ValueError(f"Vectors must be the same length ({len(a)} != {len(b)})")
    dot = sum(x * y for x, y in zip(a, b, strict=True))
    magnitude = math.sqrt(sum(x * x for x in a)) * math.sqrt(sum(y * y for y in b))
    if magnitude == 0.0:
        return 0.0
    return dot / magnitude


def group_by_agent(ranked: Sequence[VectorSearchResponse]) -> dict[str, list[VectorSearchResponse]]:
    """Group responses by agent name, preserving first-seen order."""
    groups: dict[str, list[VectorSearchResponse]] = {}
    for response in ranked:
        groups.setdefault(response.agent_name, []).append(response)
    return groups


def majority_vote(ranked: Sequence[VectorSearchResponse]) -> list[VectorSearchResponse] | None:
    """Return the winning agent's responses in rank order, or None if empty.

    ``max`` keeps the first maximal group, and dict order is first-seen rank
    order, so ties resolve to the agent that appeared first.
    """
    groups = group_by_agent(ranked)
    if not groups:
        return None
    return max(groups.values(), key=len)


_seed_list_adapter = TypeAdapter(list[VectorSeedRequest])


def load_seed_requests(path: Path) -> list[VectorSeedRequest]:
    """Read a seed file: a JSON array of ``{agentName, text}`` objects."""
    return _seed_list_adapter.validate_json(Path(path).read_text(encoding="utf-8"))


__all__ = [
    "VectorDocument",
    "VectorSearchRequest",
    "VectorSearchResponse",
    "VectorSeedRequest",
    "cosine_similarity",
    "group_by_agent",
    "load_seed_requests",
    "majority_vote",
]
