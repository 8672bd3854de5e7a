"""
Rule engine for DNS diagnostics.

Runs the fixed, ordered rule pipeline over a DomainResultSet and merges the
issues into a DiagnosticReport.
"""

import functools
import logging
from typing import List, Optional

from .config import DEFAULT_TTL_MAX, DEFAULT_TTL_MIN
from .models import DiagnosticReport, DomainResultSet, Issue
from .rules import DEFAULT_RULES, Rule, check_ttl_bounds

logger = logging.getLogger(__name__)


def build_rules(ttl_min: int = DEFAULT_TTL_MIN, ttl_max: int = DEFAULT_TTL_MAX) -> List[Rule]:
    """
    Build the rule pipeline with the given TTL thresholds.

    Args:
        ttl_min: Lower TTL bound in seconds
        ttl_max: Upper TTL bound in seconds

    Returns:
        Rules in execution order
    """
    if ttl_min == DEFAULT_TTL_MIN and ttl_max == DEFAULT_TTL_MAX:
        return list(DEFAULT_RULES)

    ttl_rule = functools.partial(check_ttl_bounds, ttl_min=ttl_min, ttl_max=ttl_max)
    return [ttl_rule if rule is check_ttl_bounds else rule for rule in DEFAULT_RULES]


def analyze(result_set: DomainResultSet, rules: Optional[List[Rule]] = None) -> DiagnosticReport:
    """
    Run every rule over the result set and summarize the findings.

    Rules are pure, so analyzing the same result set twice yields equal
    reports. Issues keep rule execution order and are not deduplicated.

    Args:
        result_set: Aggregated DNS results for one domain
        rules: Rule pipeline to run (defaults to DEFAULT_RULES)

    Returns:
        DiagnosticReport with ordered issues and severity counts
    """
    if rules is None:
        rules = DEFAULT_RULES

    issues: List[Issue] = []
    for rule in rules:
        found = rule(result_set)
        if found:
            logger.debug(f"{_rule_name(rule)} found {len(found)} issue(s) for {result_set.domain}")
        issues.extend(found)

    report = DiagnosticReport.from_issues(issues)
    logger.info(
        f"Analysis of {result_set.domain}: {report.summary.errors} error(s), "
        f"{report.summary.warnings} warning(s), {report.summary.info} info"
    )
    return report


def _rule_name(rule: Rule) -> str:
    if isinstance(rule, functools.partial):
        rule = rule.func
    return getattr(rule, '__name__', repr(rule))
