"""Result - Value-or-Error Container Used Instead of Raising.

Every routing operation (provide, call, embed, seed, find, resolve) returns
``Success`` or ``Failure``. Callers branch on the variant instead of catching
exceptions, so "no agent matched" (``Success(value=None)``) and "routing
broke" (``Failure``) can never be confused.

Key Concepts:
    - Discriminated union on ``status`` (same pattern as pipeline stages)
    - Combinators: map, map_failure, on_failure, get_or_throw, get_or_none
    - Scoped builder: result_of(body) with fail_with / ensure /
      ensure_not_null / finally_ helpers

Example:
    >>> result = provider.provide(filters)
    >>> if isinstance(result, Failure):
    ...     return Failure(reason=ResolverError("Failed to resolve", result.reason))
    >>> specs = result.value
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, Literal, NoReturn, TypeAlias, TypeVar

from pydantic import BaseModel, ConfigDict

from .domain_type import ResultStatus

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
E = TypeVar("E", bound=Exception)
F = TypeVar("F", bound=Exception)


class Success(BaseModel, Generic[T]):
    """Successful outcome carrying a value.

    ``value`` may legitimately be ``None``: for resolvers that means
    "no agent matched", which is a valid terminal state, not an error.
    """

    status: Literal[ResultStatus.SUCCESS] = ResultStatus.SUCCESS
    value: T

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_success(self) -> bool:
        return True

    @property
    def is_failure(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(value=fn(self.value))

    def map_failure(self, fn: Callable[[Any], F]) -> Success[T]:
        return self

    def on_failure(self, fn: Callable[[Any], object]) -> Success[T]:
        return self

    def get_or_throw(self) -> T:
        return self.value

    def get_or_none(self) -> T | None:
        return self.value


class Failure(BaseModel, Generic[E]):
    """Failed outcome carrying a typed error.

    ``get_or_none`` yields ``None`` here, which reads the same as a
    ``Success(value=None)``. Callers that must tell them apart check the
    variant (``isinstance``) or use ``map``.
    """

    status: Literal[ResultStatus.FAILURE] = ResultStatus.FAILURE
    reason: E

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    @property
    def is_success(self) -> bool:
        return False

    @property
    def is_failure(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], U]) -> Failure[E]:
        return self

    def map_failure(self, fn: Callable[[E], F]) -> Failure[F]:
        return Failure(reason=fn(self.reason))

    def on_failure(self, fn: Callable[[E], object]) -> Failure[E]:
        fn(self.reason)
        return self

    def get_or_throw(self) -> NoReturn:
        raise self.reason

    def get_or_none(self) -> None:
        return None


Result: TypeAlias = "Success[T] | Failure[E]"


class ResultShortCircuit(Exception):
    """Raised by ResultBlock helpers to leave a result_of body early.

    Carries the block that raised it so nested blocks only catch their own.
    """

    def __init__(self, block: ResultBlock[Any, Any], reason: Exception):
        super().__init__(str(reason))
        self.block = block
        self.reason = reason


class ResultBlock(Generic[T, E]):
    """Helpers available inside a ``result_of`` body."""

    def __init__(self) -> None:
        self._finalizers: list[Callable[[], object]] = []

    def fail_with(self, error: Callable[[], E]) -> NoReturn:
        raise ResultShortCircuit(self, error())

    def ensure(self, predicate: bool, error: Callable[[], E]) -> None:
        if not predicate:
            self.fail_with(error)

    def ensure_not_null(self, value: V | None, error: Callable[[], E]) -> V:
        if value is None:
            self.fail_with(error)
        return value

    def finally_(self, fn: Callable[[], object]) -> None:
        """Register cleanup that runs after the body on both paths."""
        self._finalizers.append(fn)

    def _run_finalizers(self) -> None:
        for fn in self._finalizers:
            fn()


def result_of(body: Callable[[ResultBlock[T, E]], T]) -> Success[T] | Failure[E]:
    """Run ``body`` and wrap its return value as Success.

    Only short-circuits raised through this block's helpers become Failure.
    Any other exception is a propagation bug and is re-raised unchanged.

    Example:
        >>> def body(block):
        ...     spec = block.ensure_not_null(registry.find(name), lambda: ProviderError("unknown"))
        ...     return spec.addresses
        >>> result_of(body)
    """
    block: ResultBlock[T, E] = ResultBlock()
    try:
        return Success(value=body(block))
    except ResultShortCircuit as short:
        if short.block is not block:
            raise
        return Failure(reason=short.reason)
    finally:
        block._run_finalizers()


__all__ = [
    "Failure",
    "Result",
    "ResultBlock",
    "ResultShortCircuit",
    "Success",
    "result_of",
]
