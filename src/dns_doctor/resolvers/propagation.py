"""
Propagation checker for comparing one record type across multiple DoH resolvers.

This module queries every configured resolver in parallel for the same
(domain, record type) pair and collects one independent outcome per resolver.
"""

import asyncio
import logging
import time
from typing import Dict, List, Optional

from ..config import ResolverEndpoint
from ..models import ResolverOutcome, record_type_code
from .transport import ResolverTransport

logger = logging.getLogger(__name__)


class PropagationChecker:
    """Checks record propagation across a fixed set of DoH resolvers."""

    def __init__(self, resolvers: List[ResolverEndpoint], transport: Optional[ResolverTransport] = None):
        """Initialize propagation checker.

        Args:
            resolvers: Resolvers to query, including the primary
            transport: ResolverTransport to use (a default one is created if omitted)
        """
        self.resolvers = list(resolvers)
        self.transport = transport or ResolverTransport()

        logger.debug(f"Initialized PropagationChecker with {len(self.resolvers)} resolvers")

    async def check_propagation(self, domain: str, record_type: str) -> Dict[str, ResolverOutcome]:
        """Query every resolver for the given record and collect the outcomes.

        All resolvers are queried in parallel and the call returns only once
        every query has completed or failed. One resolver's failure has no
        effect on the others.

        Args:
            domain: Domain name to check
            record_type: DNS record type (A, AAAA, CNAME, MX, NS, TXT, SOA, CAA)

        Returns:
            Mapping of resolver name to ResolverOutcome

        Raises:
            ValueError: If record_type is not supported
        """
        record_type = record_type.upper()
        record_type_code(record_type)

        logger.info(f"Checking propagation for {domain} ({record_type}) across {len(self.resolvers)} resolvers")
        start_time = time.time()

        tasks = [
            self.transport.query(domain, record_type, resolver)
            for resolver in self.resolvers
        ]
        query_results = await asyncio.gather(*tasks, return_exceptions=True)

        propagation: Dict[str, ResolverOutcome] = {}
        for resolver, result in zip(self.resolvers, query_results):
            if isinstance(result, Exception):
                logger.error(f"Query failed for resolver {resolver.name}: {result}", exc_info=result)
                propagation[resolver.name] = ResolverOutcome.failure(
                    resolver=resolver.name,
                    error=str(result) or type(result).__name__
                )
            else:
                propagation[resolver.name] = result

        failed = sum(1 for outcome in propagation.values() if outcome.failed)
        total_time = time.time() - start_time
        logger.info(
            f"Propagation check for {domain} ({record_type}) completed in {total_time:.2f}s "
            f"({failed}/{len(propagation)} resolver(s) failed)"
        )

        return propagation
