"""Error Taxonomy - Typed Failures Carried Inside Result.

Every fallible routing operation returns ``Failure(reason=<one of these>)``
instead of raising. Lower-level errors are wrapped as they cross a boundary,
and the original cause is kept both as ``.cause`` and as ``__cause__`` so
tracebacks rendered by loguru show the whole chain.

Hierarchy:
    RouterError
    ├─ ProviderError      registry load or filter failure
    ├─ ResolverError      umbrella at the resolve() boundary
    │  └─ ModelClientError   language model backend failure
    ├─ EmbeddingError     embedding backend failure
    └─ VectorError        vector seed or search failure
"""

from __future__ import annotations


class RouterError(Exception):
    """Base error with a message and an optional wrapped cause."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.__cause__ = cause

    def __repr__(self) -> str:
        if self.cause is None:
            return f"{type(self).__name__}({self.message!r})"
        return f"{type(self).__name__}({self.message!r}, cause={self.cause!r})"


class ProviderError(RouterError):
    """Agent registry could not be read, parsed or filtered."""


class ResolverError(RouterError):
    """Routing resolution failed (transport, parse, provider or search)."""


class ModelClientError(ResolverError):
    """Language model call failed."""


class EmbeddingError(RouterError):
    """Embedding backend call failed."""


class VectorError(RouterError):
    """Vector seed or search failed."""


__all__ = [
    "EmbeddingError",
    "ModelClientError",
    "ProviderError",
    "ResolverError",
    "RouterError",
    "VectorError",
]
