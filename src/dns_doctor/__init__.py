"""
DNS Doctor

Resolves a domain's DNS records across multiple DNS-over-HTTPS resolvers and
runs a rule-based analysis to surface common misconfigurations.
"""

__version__ = "0.1.0"

from .models import (
    SUPPORTED_RECORD_TYPES,
    Record,
    ResolverOutcome,
    RecordTypeResult,
    DomainResultSet,
    Issue,
    DiagnosticSummary,
    DiagnosticReport,
    DiagnosticRun,
)
from .config import DoctorConfig, ResolverEndpoint, load_config, validate_config, get_default_config_path
from .resolvers import ResolverTransport, QueryAggregator, PropagationChecker
from .analyzer import analyze, build_rules
from .executor import DiagnosticExecutor
from .validation import validate_domain, is_valid_domain, normalize_domain

__all__ = [
    'SUPPORTED_RECORD_TYPES',
    'Record',
    'ResolverOutcome',
    'RecordTypeResult',
    'DomainResultSet',
    'Issue',
    'DiagnosticSummary',
    'DiagnosticReport',
    'DiagnosticRun',
    'DoctorConfig',
    'ResolverEndpoint',
    'load_config',
    'validate_config',
    'get_default_config_path',
    'ResolverTransport',
    'QueryAggregator',
    'PropagationChecker',
    'analyze',
    'build_rules',
    'DiagnosticExecutor',
    'validate_domain',
    'is_valid_domain',
    'normalize_domain',
]
