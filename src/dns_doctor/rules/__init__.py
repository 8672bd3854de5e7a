"""
Diagnostic rules.

Each rule is a pure function taking a DomainResultSet and returning a list
of Issues. DEFAULT_RULES lists them in execution order.
"""

from typing import Callable, List

from ..models import DomainResultSet, Issue
from .nameservers import check_ns_mismatch, check_cname_at_apex
from .records import check_missing_aaaa, check_ttl_bounds, check_dnssec
from .email import check_email_setup, check_spf_syntax, validate_spf

Rule = Callable[[DomainResultSet], List[Issue]]

DEFAULT_RULES: List[Rule] = [
    check_ns_mismatch,
    check_cname_at_apex,
    check_missing_aaaa,
    check_email_setup,
    check_spf_syntax,
    check_ttl_bounds,
    check_dnssec,
]

__all__ = [
    'Rule',
    'DEFAULT_RULES',
    'check_ns_mismatch',
    'check_cname_at_apex',
    'check_missing_aaaa',
    'check_email_setup',
    'check_spf_syntax',
    'check_ttl_bounds',
    'check_dnssec',
    'validate_spf',
]
