"""
Multi-type query aggregation against the primary resolver.
"""

import asyncio
import logging
import time
from typing import Optional

from ..config import ResolverEndpoint
from ..models import SUPPORTED_RECORD_TYPES, DomainResultSet, RecordTypeResult, ResolverOutcome
from .transport import ResolverTransport

logger = logging.getLogger(__name__)


class QueryAggregator:
    """Queries every supported record type for a domain in parallel."""

    def __init__(self, primary: ResolverEndpoint, transport: Optional[ResolverTransport] = None):
        """
        Initialize the aggregator.

        Args:
            primary: Resolver whose answers are authoritative for the rules
            transport: ResolverTransport to use (a default one is created if omitted)
        """
        self.primary = primary
        self.transport = transport or ResolverTransport()

    async def query_all_types(self, domain: str) -> DomainResultSet:
        """
        Query all supported record types from the primary resolver.

        Waits for every query to finish. A failed query leaves that type with
        an empty record list instead of aborting the aggregation.

        Args:
            domain: Syntactically valid domain name

        Returns:
            DomainResultSet with one entry per supported record type
        """
        logger.info(f"Querying {len(SUPPORTED_RECORD_TYPES)} record types for {domain} via {self.primary.name}")
        start_time = time.time()

        tasks = [
            self.transport.query(domain, record_type, self.primary)
            for record_type in SUPPORTED_RECORD_TYPES
        ]
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)

        results = {}
        for record_type, outcome in zip(SUPPORTED_RECORD_TYPES, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"Primary query for {domain} ({record_type}) raised: {outcome}", exc_info=outcome)
                outcome = ResolverOutcome.failure(
                    resolver=self.primary.name,
                    error=str(outcome) or type(outcome).__name__
                )
            elif outcome.failed:
                logger.warning(f"Primary query for {domain} ({record_type}) failed: {outcome.error}")
            results[record_type] = RecordTypeResult(
                record_type=record_type,
                primary_records=list(outcome.records)
            )

        logger.debug(f"Queried all record types for {domain} in {time.time() - start_time:.2f}s")

        return DomainResultSet(domain=domain, results=results)
