"""Drain an asynchronous sample stream into an accumulator."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable

from .accumulator import DEFAULT_THRESHOLD, ApdexAccumulator, check_hit_rate

logger = logging.getLogger(__name__)


async def collect(
    samples: AsyncIterable[Any],
    threshold: float = DEFAULT_THRESHOLD,
    assumed_hit_rate: float | None = None,
) -> ApdexAccumulator:
    """Consume *samples* until exhausted and return the resulting Apdex.

    Items may be ``Sample`` values or anything ``as_sample`` accepts. With
    *assumed_hit_rate* the stream is treated as cache misses, as in
    :meth:`ApdexAccumulator.with_hit_rate`.
    """
    if assumed_hit_rate is not None:
        check_hit_rate(assumed_hit_rate)

    apdex = ApdexAccumulator(threshold)
    async for sample in samples:
        apdex.insert(sample)
    logger.debug("Collected %d samples from stream", apdex.total)

    if assumed_hit_rate is not None:
        apdex.add_cache_hits(assumed_hit_rate)
    return apdex
