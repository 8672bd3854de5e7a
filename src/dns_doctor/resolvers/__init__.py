"""
Resolver modules for DNS-over-HTTPS lookups.

Single-resolver transport, multi-type aggregation and multi-resolver
propagation checks.
"""

from .transport import ResolverTransport, parse_answer, parse_txt_data
from .aggregator import QueryAggregator
from .propagation import PropagationChecker

__all__ = ['ResolverTransport', 'QueryAggregator', 'PropagationChecker', 'parse_answer', 'parse_txt_data']
