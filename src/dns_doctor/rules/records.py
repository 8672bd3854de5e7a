"""
Record-level rules: IPv6 readiness, TTL bounds and the DNSSEC disclosure.
"""

from typing import List

from ..config import DEFAULT_TTL_MAX, DEFAULT_TTL_MIN
from ..models import DomainResultSet, Issue


def check_missing_aaaa(result_set: DomainResultSet) -> List[Issue]:
    """Warn when a domain has A records but no AAAA records."""
    a_records = result_set.records('A')
    if not a_records or result_set.records('AAAA'):
        return []

    return [Issue(
        kind='missing_aaaa',
        severity=Issue.WARNING,
        message='Domain has A records but no AAAA records - not IPv6 ready',
        details={
            'a_records': len(a_records),
            'aaaa_records': 0,
        }
    )]


def check_ttl_bounds(
    result_set: DomainResultSet,
    ttl_min: int = DEFAULT_TTL_MIN,
    ttl_max: int = DEFAULT_TTL_MAX
) -> List[Issue]:
    """
    Check the TTL of every primary record against the recommended range.

    Args:
        result_set: Aggregated DNS results
        ttl_min: TTLs below this emit a ttl_too_low warning
        ttl_max: TTLs above this emit a ttl_too_high info

    Returns:
        One issue per out-of-range record
    """
    issues = []

    for record_type, result in result_set.items():
        for record in result.primary_records:
            ttl = record.ttl

            if ttl < ttl_min:
                issues.append(Issue(
                    kind='ttl_too_low',
                    severity=Issue.WARNING,
                    message=f"TTL too low ({ttl}s) for {record_type} record - may cause excessive DNS queries",
                    details={
                        'record_type': record_type,
                        'name': record.name,
                        'ttl': ttl,
                        'recommended': f">= {ttl_min}s",
                    }
                ))
            elif ttl > ttl_max:
                issues.append(Issue(
                    kind='ttl_too_high',
                    severity=Issue.INFO,
                    message=f"TTL very high ({ttl}s) for {record_type} record - changes will take longer to propagate",
                    details={
                        'record_type': record_type,
                        'name': record.name,
                        'ttl': ttl,
                        'recommended': f"<= {ttl_max}s",
                    }
                ))

    return issues


def check_dnssec(result_set: DomainResultSet) -> List[Issue]:
    """Disclose that signature validation is not performed."""
    return [Issue(
        kind='dnssec_check',
        severity=Issue.INFO,
        message='DNSSEC status is not validated - signature and authenticated-denial checks are not performed',
        details={
            'note': 'DNSSEC validation requires RRSIG/DNSKEY queries and chain-of-trust verification',
        }
    )]
