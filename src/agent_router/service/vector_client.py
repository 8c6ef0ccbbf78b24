"""Vector Clients - Seed Example Utterances, Find the Voting Winner.

Contracts:
    VectorSeedClient.seed(requests)      → Success[None] | Failure[VectorError]
    VectorSearchClient.find(request, specs)
        → Success[VectorSearchResponse | None] | Failure[VectorError]

Implementations:
    - InMemoryVectorClient: tuple of VectorDocument held in process, ranked
      with cosine_similarity and decided by majority_vote
    - QdrantVectorClient: same vote over Qdrant query results, with the
      candidate agent names pushed down as a payload filter

``find`` only ever returns agents from ``specs``. No candidates, an empty
store or no hit above threshold is ``Success(None)``.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol
from uuid import NAMESPACE_URL, uuid5

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from ..domain.agent_spec import AgentRoutingSpec
from ..domain.errors import VectorError
from ..domain.result import Failure, Success
from ..domain.vector import (
    VectorDocument,
    VectorSearchRequest,
    VectorSearchResponse,
    VectorSeedRequest,
    cosine_similarity,
    load_seed_requests,
    majority_vote,
)
from .embedding import EmbeddingClient

if TYPE_CHECKING:
    from qdrant_client import QdrantClient

AGENT_FIELD_NAME = "agentName"
TEXT_FIELD_NAME = "text"


def point_id(request: VectorSeedRequest) -> str:
    """Stable point id per (agent, text), so re-seeding overwrites instead of duplicating."""
    return str(uuid5(NAMESPACE_URL, f"{request.agent_name}\n{request.text}"))


class VectorSeedClient(Protocol):
    def seed(self, requests: Sequence[VectorSeedRequest]) -> Success[None] | Failure[VectorError]: ...


class VectorSearchClient(Protocol):
    def find(
        self,
        request: VectorSearchRequest,
        specs: frozenset[AgentRoutingSpec],
    ) -> Success[VectorSearchResponse | None] | Failure[VectorError]: ...


def _embed_all(
    embedding_client: EmbeddingClient,
    requests: Sequence[VectorSeedRequest],
) -> Success[list[list[float]]] | Failure[VectorError]:
    result = embedding_client.batch_embed([request.text for request in requests])
    if isinstance(result, Failure):
        return Failure(reason=VectorError("Failed to embed seed texts", result.reason))
    if len(result.value) != len(requests):
        return Failure(reason=VectorError(f"Expected {len(requests)} embeddings, got {len(result.value)}"))
    return result


class InMemoryVectorClient:
    """Process-local vector store.

    Documents live in an immutable tuple that is replaced wholesale under a
    lock on each seed. ``find`` reads one snapshot of the tuple, so it sees
    either none or all of a concurrent seed batch.
    """

    def __init__(self, embedding_client: EmbeddingClient, limit: int = 5):
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.embedding_client = embedding_client
        self.limit = limit
        self._documents: tuple[VectorDocument, ...] = ()
        self._lock = threading.Lock()

    @classmethod
    def from_seed_file(
        cls,
        path: Path,
        embedding_client: EmbeddingClient,
        limit: int = 5,
    ) -> InMemoryVectorClient:
        """Build a store and seed it from a JSON file of ``{agentName, text}``.

        Raises:
            VectorError: If the file cannot be read or embedded
        """
        try:
            requests = load_seed_requests(path)
        except (OSError, ValueError) as e:
            raise VectorError(f"Failed to load seed file: {path}", e) from e
        client = cls(embedding_client, limit=limit)
        client.seed(requests).get_or_throw()
        logger.info("Seeded in-memory vector store: documents={}, path={}", len(requests), path)
        return client

    @property
    def documents(self) -> tuple[VectorDocument, ...]:
        return self._documents

    def seed(self, requests: Sequence[VectorSeedRequest]) -> Success[None] | Failure[VectorError]:
        if not requests:
            return Success(value=None)
        embedded = _embed_all(self.embedding_client, requests)
        if isinstance(embedded, Failure):
            return embedded
        batch = tuple(
            VectorDocument(text=request.text, vector=tuple(vector), agent_name=request.agent_name)
            for request, vector in zip(requests, embedded.value, strict=True)
        )
        with self._lock:
            self._documents = self._documents + batch
        logger.debug("Appended {} documents to in-memory vector store", len(batch))
        return Success(value=None)

    def find(
        self,
        request: VectorSearchRequest,
        specs: frozenset[AgentRoutingSpec],
    ) -> Success[VectorSearchResponse | None] | Failure[VectorError]:
        names = {spec.name for spec in specs}
        candidates = [doc for doc in self._documents if doc.agent_name in names]
        if not candidates:
            return Success(value=None)

        embedded = self.embedding_client.embed(request.query)
        if isinstance(embedded, Failure):
            return Failure(reason=VectorError("Failed to embed query", embedded.reason))
        query_vector = embedded.value

        try:
            scored = [(cosine_similarity(query_vector, doc.vector), doc) for doc in candidates]
        except ValueError as e:
            return Failure(reason=VectorError("Query embedding does not match stored dimension", e))
        scored.sort(key=lambda item: item[0], reverse=True)

        ranked = [
            VectorSearchResponse(text=doc.text, agent_name=doc.agent_name) for _, doc in scored[: self.limit]
        ]
        winner = majority_vote(ranked)
        return Success(value=winner[0] if winner else None)


class QdrantVectorConfig(BaseModel):
    """Qdrant collection and search settings.

    Attributes:
        collection: Collection holding the seeded utterances
        top_k: Points retrieved per query before voting
        threshold: Minimum cosine score for a point to count
    """

    collection: str
    top_k: int = Field(default=5, gt=0)
    threshold: float = Field(default=0.5, ge=0.0, le=1.0)

    model_config = ConfigDict(frozen=True)


class QdrantVectorClient:
    """Seed and search backed by a Qdrant collection.

    The collection is created on first seed, sized from the first embedding,
    with cosine distance. Each point stores ``{agentName, text}`` as payload.
    """

    def __init__(
        self,
        qdrant: QdrantClient,
        embedding_client: EmbeddingClient,
        collection: str,
        top_k: int = 5,
        threshold: float = 0.5,
    ):
        self.config = QdrantVectorConfig(collection=collection, top_k=top_k, threshold=threshold)
        self.qdrant = qdrant
        self.embedding_client = embedding_client

    def _ensure_collection(self, dimension: int) -> None:
        from qdrant_client.models import Distance, VectorParams

        if self.qdrant.collection_exists(self.config.collection):
            return
        logger.info("Creating Qdrant collection: name={}, dimension={}", self.config.collection, dimension)
        self.qdrant.create_collection(
            collection_name=self.config.collection,
            vectors_config=VectorParams(size=dimension, distance=Distance.COSINE),
        )

    def point_count(self) -> int:
        """Points stored in the collection; 0 when it does not exist yet."""
        if not self.qdrant.collection_exists(self.config.collection):
            return 0
        return self.qdrant.count(collection_name=self.config.collection, exact=True).count

    def seed(self, requests: Sequence[VectorSeedRequest]) -> Success[None] | Failure[VectorError]:
        """Upsert one point per request. Safe to retry after a failure."""
        if not requests:
            return Success(value=None)
        embedded = _embed_all(self.embedding_client, requests)
        if isinstance(embedded, Failure):
            return embedded
        try:
            from qdrant_client.models import PointStruct

            self._ensure_collection(len(embedded.value[0]))
            points = [
                PointStruct(
                    id=point_id(request),
                    vector=vector,
                    payload={AGENT_FIELD_NAME: request.agent_name, TEXT_FIELD_NAME: request.text},
                )
                for request, vector in zip(requests, embedded.value, strict=True)
            ]
            self.qdrant.upsert(collection_name=self.config.collection, points=points)
        except Exception as e:
            logger.error("Qdrant seed failed: collection={}, error={}", self.config.collection, e)
            return Failure(reason=VectorError(f"Failed to seed collection {self.config.collection}", e))
        return Success(value=None)

    def find(
        self,
        request: VectorSearchRequest,
        specs: frozenset[AgentRoutingSpec],
    ) -> Success[VectorSearchResponse | None] | Failure[VectorError]:
        names = sorted(spec.name for spec in specs)
        if not names:
            return Success(value=None)

        embedded = self.embedding_client.embed(request.query)
        if isinstance(embedded, Failure):
            return Failure(reason=VectorError("Failed to embed query", embedded.reason))

        try:
            from qdrant_client.models import FieldCondition, Filter, MatchAny

            if not self.qdrant.collection_exists(self.config.collection):
                return Success(value=None)
            points = self.qdrant.query_points(
                collection_name=self.config.collection,
                query=embedded.value,
                query_filter=Filter(must=[FieldCondition(key=AGENT_FIELD_NAME, match=MatchAny(any=names))]),
                limit=self.config.top_k,
                score_threshold=self.config.threshold,
                with_payload=True,
            ).points
        except Exception as e:
            logger.error("Qdrant search failed: collection={}, error={}", self.config.collection, e)
            return Failure(reason=VectorError(f"Failed to search collection {self.config.collection}", e))

        ranked = [
            VectorSearchResponse(
                text=str((point.payload or {}).get(TEXT_FIELD_NAME, "")),
                agent_name=str((point.payload or {}).get(AGENT_FIELD_NAME, "")),
            )
            for point in points
        ]
        winner = majority_vote([response for response in ranked if response.agent_name in names])
        if winner is None:
            return Success(value=None)
        return Success(
            value=VectorSearchResponse(
                text="\n".join(response.text for response in winner),
                agent_name=winner[0].agent_name,
            )
        )


__all__ = [
    "AGENT_FIELD_NAME",
    "InMemoryVectorClient",
    "QdrantVectorClient",
    "QdrantVectorConfig",
    "TEXT_FIELD_NAME",
    "VectorSearchClient",
    "VectorSeedClient",
    "point_id",
]
