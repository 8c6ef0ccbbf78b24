"""Embedding Clients - Text to Dense Vectors.

Contract:
    embed(text)         → Success[list[float]] | Failure[EmbeddingError]
    batch_embed(texts)  → Success[list[list[float]]] | Failure[EmbeddingError]

``batch_embed`` returns one vector per input text, in input order.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

import httpx
from loguru import logger

from ..domain.errors import EmbeddingError
from ..domain.result import Failure, Success

if TYPE_CHECKING:
    import ollama

DEFAULT_OLLAMA_HOST = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "all-minilm"
DEFAULT_OPENAI_EMBEDDINGS_URL = "https://api.openai.com/v1/embeddings"
DEFAULT_OPENAI_MODEL = "text-embedding-3-small"


class EmbeddingClient(Protocol):
    def embed(self, text: str) -> Success[list[float]] | Failure[EmbeddingError]: ...

    def batch_embed(self, texts: Sequence[str]) -> Success[list[list[float]]] | Failure[EmbeddingError]: ...


class OllamaEmbeddingClient:
    """Embeddings from a local Ollama server (lazy client)."""

    def __init__(
        self,
        host: str = DEFAULT_OLLAMA_HOST,
        model: str = DEFAULT_OLLAMA_MODEL,
        client: ollama.Client | None = None,
    ):
        self.host = host
        self.model = model
        self._client = client

    def get_client(self) -> ollama.Client:
        if self._client is None:
            import ollama

            self._client = ollama.Client(host=self.host)
        return self._client

    def embed(self, text: str) -> Success[list[float]] | Failure[EmbeddingError]:
        result = self.batch_embed([text])
        if isinstance(result, Failure):
            return result
        return Success(value=result.value[0])

    def batch_embed(self, texts: Sequence[str]) -> Success[list[list[float]]] | Failure[EmbeddingError]:
        if not texts:
            return Success(value=[])
        try:
            response = self.get_client().embed(model=self.model, input=list(texts))
            vectors = [list(vector) for vector in response["embeddings"]]
        except Exception as e:
            logger.error("Ollama embedding failed: model={}, error={}", self.model, e)
            return Failure(reason=EmbeddingError(f"Failed to embed with ollama model {self.model}", e))
        if len(vectors) != len(texts):
            return Failure(reason=EmbeddingError(f"Expected {len(texts)} embeddings, got {len(vectors)}"))
        return Success(value=vectors)


class OpenAIEmbeddingClient:
    """Embeddings from an OpenAI-compatible ``/embeddings`` endpoint.

    Texts are sent in chunks of ``batch_size``. Each response item carries an
    ``index`` and the vectors are reassembled in that order, so a server that
    returns items shuffled still yields input order.

    Attributes:
        url: Full embeddings endpoint URL
        model: Embedding model name
        api_key: Bearer token (omitted from the request when None)
        batch_size: Maximum texts per request
        http_client: Injected httpx client (tests pass one with a MockTransport)
    """

    def __init__(
        self,
        url: str = DEFAULT_OPENAI_EMBEDDINGS_URL,
        model: str = DEFAULT_OPENAI_MODEL,
        api_key: str | None = None,
        batch_size: int = 300,
        http_client: httpx.Client | None = None,
        timeout: float = 30.0,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.url = url
        self.model = model
        self.api_key = api_key
        self.batch_size = batch_size
        self._http = http_client or httpx.Client(timeout=timeout)

    def _headers(self) -> dict[str, str]:
        if self.api_key is None:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def _embed_chunk(self, chunk: Sequence[str]) -> list[list[float]]:
        response = self._http.post(
            self.url,
            json={"model": self.model, "input": list(chunk)},
            headers=self._headers(),
        )
        response.raise_for_status()
        items = sorted(response.json()["data"], key=lambda item: item["index"])
        return [list(item["embedding"]) for item in items]

    def embed(self, text: str) -> Success[list[float]] | Failure[EmbeddingError]:
        result = self.batch_embed([text])
        if isinstance(result, Failure):
            return result
        return Success(value=result.value[0])

    def batch_embed(self, texts: Sequence[str]) -> Success[list[list[float]]] | Failure[EmbeddingError]:
        vectors: list[list[float]] = []
        try:
            for start in range(0, len(texts), self.batch_size):
                chunk = texts[start : start + self.batch_size]
                logger.debug("Embedding chunk: offset={}, size={}", start, len(chunk))
                vectors.extend(self._embed_chunk(chunk))
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            logger.error("OpenAI embedding failed: model={}, error={}", self.model, e)
            return Failure(reason=EmbeddingError(f"Failed to embed with model {self.model}", e))
        if len(vectors) != len(texts):
            return Failure(reason=EmbeddingError(f"Expected {len(texts)} embeddings, got {len(vectors)}"))
        return Success(value=vectors)

    def close(self) -> None:
        self._http.close()


__all__ = [
    "EmbeddingClient",
    "OllamaEmbeddingClient",
    "OpenAIEmbeddingClient",
]
