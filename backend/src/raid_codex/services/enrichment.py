"""Bounded-parallel, rate-limited enrichment of catalog entries.

Items are processed in fixed-size batches with `asyncio.gather`, sleeping a
fixed delay between batches to respect third-party rate limits. A fetch
that raises or returns nothing counts as "no data" for that item only, and
an `apply` that raises on a malformed result fails only that item.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class EnrichmentSummary:
    """Counts from an enrichment run."""

    attempted: int = 0
    filled: int = 0
    empty: int = 0
    failed: int = 0


async def run_enrichment(
    items: Sequence[T],
    fetch: Callable[[T], Awaitable[Any]],
    apply: Callable[[T, Any], None],
    batch_size: int = 20,
    batch_delay: float = 0.5,
    on_batch_complete: Optional[Callable[[int], None]] = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> EnrichmentSummary:
    """Fetch enrichment data for each item and apply non-empty results.

    Args:
        items: Entries to enrich
        fetch: Async fetcher for one entry
        apply: Called with (item, result) when the result is non-empty
        batch_size: Maximum concurrent fetches
        batch_delay: Seconds to wait between batches
        on_batch_complete: Called with the number of items processed so far
        sleep: Awaitable sleep (injected by tests)

    Returns:
        EnrichmentSummary with filled/empty/failed counts
    """
    batch_size = max(1, batch_size)
    summary = EnrichmentSummary()

    async def guarded(item: T) -> tuple[Any, bool]:
        try:
            return await fetch(item), False
        except Exception as e:
            logger.warning(f"Enrichment fetch failed for {getattr(item, 'name', item)}: {e}")
            return None, True

    for start in range(0, len(items), batch_size):
        batch = items[start:start + batch_size]
        results = await asyncio.gather(*(guarded(item) for item in batch))

        for item, (result, failed) in zip(batch, results):
            summary.attempted += 1
            if failed:
                summary.failed += 1
            elif result:
                try:
                    apply(item, result)
                except Exception as e:
                    logger.warning(f"Enrichment apply failed for {getattr(item, 'name', item)}: {e}")
                    summary.failed += 1
                    continue
                summary.filled += 1
            else:
                summary.empty += 1

        processed = min(start + batch_size, len(items))
        if on_batch_complete is not None:
            on_batch_complete(processed)
        if processed < len(items):
            await sleep(batch_delay)

    logger.info(
        f"Enrichment: {summary.filled} filled, {summary.empty} empty, "
        f"{summary.failed} failed of {summary.attempted}"
    )
    return summary
