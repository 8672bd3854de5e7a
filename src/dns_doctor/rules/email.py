"""
Email authentication rules.

Checks that MX-bearing domains publish SPF and DMARC policies and that
SPF records use known mechanisms.
"""

import re
from typing import List

from ..models import DomainResultSet, Issue, Record

SPF_TAG = 'v=spf1'
DMARC_TAG = 'v=dmarc1'

# Optional qualifier followed by a known mechanism or modifier name (prefix match)
SPF_TERM_REGEX = re.compile(r'^[+\-~?]?(all|include|a|mx|ptr|ip4|ip6|exists|redirect|exp)', re.IGNORECASE)


def is_spf_record(data: str) -> bool:
    return data.lower().startswith(SPF_TAG)


def is_dmarc_record(data: str) -> bool:
    return data.lower().startswith(DMARC_TAG)


def validate_spf(spf_record: str) -> bool:
    """
    Validate SPF record syntax.

    Every whitespace-separated term after the version tag must start with
    an optional qualifier and a known mechanism or modifier name.

    Args:
        spf_record: SPF record text

    Returns:
        True if valid, False otherwise
    """
    if not is_spf_record(spf_record):
        return False

    for term in spf_record.split()[1:]:
        if term == 'all':
            continue
        if not SPF_TERM_REGEX.match(term):
            return False

    return True


def check_email_setup(result_set: DomainResultSet) -> List[Issue]:
    """Check for missing MX/TXT records and for SPF/DMARC on mail domains."""
    mx_records = result_set.records('MX')
    txt_records = result_set.records('TXT')

    if not mx_records and not txt_records:
        return [Issue(
            kind='missing_email_setup',
            severity=Issue.INFO,
            message='No MX or TXT records found - domain may not be configured for email',
        )]

    if not mx_records:
        return []

    issues = []
    if not any(is_spf_record(record.data) for record in txt_records):
        issues.append(Issue(
            kind='missing_spf',
            severity=Issue.WARNING,
            message='MX records present but no SPF record found',
        ))
    if not any(is_dmarc_record(record.data) for record in txt_records):
        issues.append(Issue(
            kind='missing_dmarc',
            severity=Issue.INFO,
            message='MX records present but no DMARC record found',
        ))

    return issues


def _spf_records(txt_records: List[Record]) -> List[Record]:
    return [record for record in txt_records if is_spf_record(record.data)]


def check_spf_syntax(result_set: DomainResultSet) -> List[Issue]:
    """Emit one spf_syntax_error per SPF record containing an unknown term."""
    issues = []
    for record in _spf_records(result_set.records('TXT')):
        if validate_spf(record.data):
            continue
        issues.append(Issue(
            kind='spf_syntax_error',
            severity=Issue.ERROR,
            message='SPF record has syntax errors',
            details={'record': record.data}
        ))

    return issues
