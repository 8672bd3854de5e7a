"""
Executor layer for DNS diagnostics.

Orchestrates record aggregation, propagation checks and rule analysis for
one or more domains, and handles per-domain failures gracefully.
"""

import asyncio
import logging
import time
from typing import List, Optional, TYPE_CHECKING

from .analyzer import analyze, build_rules
from .config import DoctorConfig
from .models import DiagnosticRun, DomainResultSet
from .resolvers import PropagationChecker, QueryAggregator, ResolverTransport
from .validation import validate_domain

if TYPE_CHECKING:
    from .console.output import ConsoleManager


logger = logging.getLogger(__name__)


class DiagnosticExecutor:
    """
    Executor for running DNS diagnostics.

    Wires the transport, aggregator, propagation checker and rule pipeline
    from a DoctorConfig and runs them per domain.
    """

    # Maximum number of domains to diagnose concurrently
    MAX_CONCURRENT_DOMAINS = 10

    def __init__(self, config: Optional[DoctorConfig] = None, console_manager: Optional['ConsoleManager'] = None):
        """
        Initialize the executor.

        Args:
            config: DoctorConfig with resolvers, timeout and TTL thresholds
            console_manager: Optional ConsoleManager for progress display
        """
        self.config = config or DoctorConfig()
        self.console_manager = console_manager

        self.transport = ResolverTransport(timeout=self.config.timeout)
        self.aggregator = QueryAggregator(self.config.primary_resolver, transport=self.transport)
        self.propagation_checker = PropagationChecker(self.config.resolvers, transport=self.transport)
        self.rules = build_rules(ttl_min=self.config.ttl_min, ttl_max=self.config.ttl_max)

    async def query_with_propagation(self, domain: str) -> DomainResultSet:
        """
        Query all record types, then check propagation for types that have records.

        Propagation checks for different record types run concurrently, each
        starting after the primary results are known.

        Args:
            domain: Syntactically valid domain name

        Returns:
            DomainResultSet with propagation filled in for non-empty types
        """
        result_set = await self.aggregator.query_all_types(domain)

        record_types = [record_type for record_type, result in result_set.items() if result.has_records]
        logger.debug(f"Checking propagation for {domain}: {', '.join(record_types) or 'no record types'}")

        propagations = await asyncio.gather(*[
            self.propagation_checker.check_propagation(domain, record_type)
            for record_type in record_types
        ])

        for record_type, propagation in zip(record_types, propagations):
            result_set[record_type].propagation = propagation

        return result_set

    async def diagnose(self, domain: str) -> DiagnosticRun:
        """
        Run the full diagnostic pipeline for a single domain.

        Args:
            domain: Domain name (trailing dot tolerated)

        Returns:
            DiagnosticRun with raw results and the diagnostic report

        Raises:
            ValueError: If the domain is not syntactically valid
        """
        domain = validate_domain(domain)
        logger.info(f"Starting diagnostics for {domain}")
        start_time = time.time()

        result_set = await self.query_with_propagation(domain)
        report = analyze(result_set, rules=self.rules)

        execution_time = time.time() - start_time
        logger.info(f"Completed diagnostics for {domain} in {execution_time:.2f}s")

        return DiagnosticRun(
            domain=domain,
            results=result_set,
            report=report,
            execution_time=execution_time
        )

    async def diagnose_all(self, domains: List[str]) -> List[DiagnosticRun]:
        """
        Diagnose several domains concurrently.

        Runs are bounded by a semaphore. A domain whose run raises is logged
        and left out of the returned list.

        Args:
            domains: Validated domain names

        Returns:
            DiagnosticRun objects in input order, minus failed domains
        """
        logger.info(f"Starting diagnostics for {len(domains)} domain(s)")
        start_time = time.time()

        progress_tracker = None
        if self.console_manager and len(domains) > 1:
            from .console.progress import ProgressTracker
            progress_tracker = ProgressTracker(self.console_manager.console, len(domains))
            progress_tracker.start()

        semaphore = asyncio.Semaphore(self.MAX_CONCURRENT_DOMAINS)

        async def bounded_diagnose(domain: str) -> DiagnosticRun:
            """Diagnose one domain with semaphore limit and progress updates."""
            async with semaphore:
                if progress_tracker:
                    progress_tracker.update_domain(domain)

                try:
                    run = await self.diagnose(domain)
                except Exception:
                    if progress_tracker:
                        progress_tracker.fail_domain(domain)
                    raise

                if progress_tracker:
                    progress_tracker.complete_domain(domain, errors=run.report.summary.errors)

                return run

        results = await asyncio.gather(
            *[bounded_diagnose(domain) for domain in domains],
            return_exceptions=True
        )

        runs = []
        for domain, result in zip(domains, results):
            if isinstance(result, Exception):
                logger.error(f"Failed to diagnose {domain}: {result}", exc_info=result)
                if self.console_manager:
                    self.console_manager.print_error(
                        f"Diagnostics failed for {domain}: {result}",
                        details={'domain': domain, 'error_type': type(result).__name__},
                        exception=result
                    )
            else:
                runs.append(result)

        total_time = time.time() - start_time
        if progress_tracker:
            progress_tracker.finish(total_time)

        logger.info(f"Completed diagnostics for {len(runs)}/{len(domains)} domain(s) in {total_time:.2f}s")

        return runs
