#!/usr/bin/env python3
"""
Transaction Fetcher

Retrieves financial mutations for a reporting period one chunk at a time,
pausing between chunks to stay under the Moneybird rate limit.
"""

import logging
import time
from collections.abc import Callable
from typing import Protocol

from ..core.dates import DEFAULT_CHUNK_DAYS, DateRange
from .models import FinancialMutation

logger = logging.getLogger(__name__)


class MutationSource(Protocol):
    """Anything that can return mutations for an inclusive period."""

    def get_financial_mutations(self, start, end) -> list[FinancialMutation]: ...


def fetch_mutations(
    client: MutationSource,
    period: DateRange,
    chunk_days: int = DEFAULT_CHUNK_DAYS,
    delay: float = 0.0,
    sleep: Callable[[float], None] = time.sleep,
) -> list[FinancialMutation]:
    """
    Fetch all mutations in ``period``, chunk by chunk.

    Chunks are fetched strictly in order. Any failure propagates and aborts
    the run; a partial month is never reported.

    Args:
        client: Mutation source (normally MoneybirdClient)
        period: Inclusive reporting period
        chunk_days: Maximum days per request
        delay: Seconds to wait between consecutive chunk requests
        sleep: Sleep function (injectable for tests)

    Returns:
        Mutations of all chunks, in chunk order
    """
    chunks = period.chunks(chunk_days)
    logger.info("Fetching transactions for %s in %d chunk(s)", period, len(chunks))

    mutations: list[FinancialMutation] = []
    for number, (chunk_start, chunk_end) in enumerate(chunks, start=1):
        if number > 1 and delay > 0:
            sleep(delay)

        chunk_mutations = client.get_financial_mutations(chunk_start, chunk_end)
        logger.info(
            "Chunk %d: %s to %s: %d transactions",
            number,
            chunk_start.isoformat(),
            chunk_end.isoformat(),
            len(chunk_mutations),
        )
        mutations.extend(chunk_mutations)

    logger.info("Total: %d transactions", len(mutations))
    return mutations
