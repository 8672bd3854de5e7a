"""
Nameserver and apex rules.

Checks NS consistency across resolvers and CNAME records at the zone apex.
"""

from typing import Dict, List, Set

from ..models import DomainResultSet, Issue


def _ns_set(records) -> Set[str]:
    return {record.data.lower() for record in records}


def check_ns_mismatch(result_set: DomainResultSet) -> List[Issue]:
    """
    Compare the primary NS set against every resolver's NS set.

    Sets are compared by membership only; record order is irrelevant.
    Resolvers whose query failed are left out of the comparison.

    Returns:
        A single ns_mismatch error covering all divergent resolvers, or nothing
    """
    ns_result = result_set['NS']
    if not ns_result.primary_records:
        return []

    primary_ns = _ns_set(ns_result.primary_records)

    resolver_ns: Dict[str, Set[str]] = {}
    mismatched = []
    for resolver, outcome in ns_result.propagation.items():
        if outcome.failed:
            continue

        ns_set = _ns_set(outcome.records)
        resolver_ns[resolver] = ns_set
        if ns_set != primary_ns:
            mismatched.append(resolver)

    if not mismatched:
        return []

    return [Issue(
        kind='ns_mismatch',
        severity=Issue.ERROR,
        message='NS records differ across DNS resolvers',
        details={
            'primary': sorted(primary_ns),
            'resolvers': {name: sorted(ns_set) for name, ns_set in resolver_ns.items()},
            'mismatched_resolvers': mismatched,
        }
    )]


def _is_apex_name(name: str) -> bool:
    name = name.lower()
    return name == '@' or name.endswith('.')


def check_cname_at_apex(result_set: DomainResultSet) -> List[Issue]:
    """Flag an apex CNAME that coexists with A or AAAA records."""
    cname_records = result_set.records('CNAME')
    if not cname_records:
        return []

    # Owner names come back fully qualified, so a trailing root label
    # or "@" is what marks the apex here.
    cname_at_apex = any(_is_apex_name(record.name) for record in cname_records)
    has_address = bool(result_set.records('A')) or bool(result_set.records('AAAA'))

    if not (cname_at_apex and has_address):
        return []

    return [Issue(
        kind='cname_at_apex',
        severity=Issue.ERROR,
        message='CNAME record found at apex (root domain) alongside address records',
        details={
            'cname_records': [record.to_dict() for record in cname_records],
        }
    )]
