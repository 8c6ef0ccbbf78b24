"""Batch Resolution - Route Many Utterances with Bounded Concurrency.

Used for offline evaluation of a resolver against a list of utterances.
Each input is resolved on a worker thread; results reach the sink one at a
time under a single writer lock, so sinks need no locking of their own.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor

from loguru import logger
from pydantic import BaseModel, ConfigDict

from ..domain.message import Context, UserMessage
from ..domain.result import Failure
from ..domain.spec_filter import SpecFilter
from .resolver import AgentRoutingSpecsResolver


class BatchRecord(BaseModel):
    """Outcome for one input: the chosen agent name or the error message."""

    input: str
    agent_name: str | None = None
    error: str | None = None

    model_config = ConfigDict(frozen=True)


def resolve_batch(
    resolver: AgentRoutingSpecsResolver,
    inputs: Iterable[str],
    sink: Callable[[BatchRecord], object],
    max_concurrency: int = 10,
    filters: Iterable[SpecFilter] = (),
    context: Context | None = None,
) -> int:
    """Resolve every input and hand each BatchRecord to ``sink``.

    Records arrive in completion order, not input order.

    Returns:
        Number of inputs processed
    """
    if max_concurrency <= 0:
        raise ValueError("max_concurrency must be positive")
    shared_filters = tuple(filters)
    shared_context = context or Context()
    write_lock = threading.Lock()

    def work(text: str) -> None:
        result = resolver.resolve(shared_filters, shared_context, UserMessage(content=text))
        if isinstance(result, Failure):
            record = BatchRecord(input=text, error=result.reason.message)
        else:
            record = BatchRecord(input=text, agent_name=result.value.name if result.value else None)
        with write_lock:
            sink(record)

    with ThreadPoolExecutor(max_workers=max_concurrency) as pool:
        futures = [pool.submit(work, text) for text in inputs]
        for future in futures:
            future.result()

    logger.info("Batch resolution finished: inputs={}, concurrency={}", len(futures), max_concurrency)
    return len(futures)


__all__ = ["BatchRecord", "resolve_batch"]
