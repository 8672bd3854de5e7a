"""Data models for DNS resolution results and diagnostic reports."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

import dns.rdatatype


# Record types queried for every domain, in reporting order
SUPPORTED_RECORD_TYPES = ('A', 'AAAA', 'CNAME', 'MX', 'NS', 'TXT', 'SOA', 'CAA')


def record_type_code(record_type: str) -> int:
    """Get the numeric DNS type code for a supported record type.

    Args:
        record_type: Record type mnemonic (A, AAAA, CNAME, MX, NS, TXT, SOA, CAA)

    Returns:
        Numeric type code from the DNS type registry (e.g. 28 for AAAA)

    Raises:
        ValueError: If record_type is not one of the supported types
    """
    normalized = record_type.upper()
    if normalized not in SUPPORTED_RECORD_TYPES:
        raise ValueError(
            f"Invalid record type '{record_type}'. "
            f"Supported types: {', '.join(SUPPORTED_RECORD_TYPES)}"
        )
    return int(dns.rdatatype.from_text(normalized))


def record_type_name(code: int) -> str:
    """Get the mnemonic for a numeric DNS type code (e.g. 'TYPE65534' if unknown)."""
    return dns.rdatatype.to_text(code)


@dataclass(frozen=True)
class Record:
    """A single DNS resource record as returned by a resolver."""
    name: str  # Owner name, usually with trailing root dot
    type: str  # Record type mnemonic
    ttl: int  # Time-to-live in seconds
    data: str  # Type-specific payload as text

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "ttl": self.ttl,
            "data": self.data,
        }


@dataclass
class ResolverOutcome:
    """Result of one resolver query for one (domain, record type) pair.

    Either ``records`` holds the answer or ``error`` holds the failure cause.
    A failed outcome never carries records.

    Attributes:
        resolver: Resolver identity (configured name, not URL)
        records: Records from the answer section (empty on failure)
        error: Human-readable failure cause, None on success
        response_time: Query duration in seconds
        dns_status: DNS response code from the JSON body (0 = NOERROR), None on failure
    """
    resolver: str
    records: List[Record] = field(default_factory=list)
    error: Optional[str] = None
    response_time: float = 0.0
    dns_status: Optional[int] = None

    def __post_init__(self):
        if self.error is not None and self.records:
            raise ValueError("A failed resolver outcome cannot carry records")

    @classmethod
    def success(
        cls,
        resolver: str,
        records: List[Record],
        response_time: float = 0.0,
        dns_status: Optional[int] = 0
    ) -> 'ResolverOutcome':
        return cls(
            resolver=resolver,
            records=list(records),
            response_time=response_time,
            dns_status=dns_status
        )

    @classmethod
    def failure(cls, resolver: str, error: str, response_time: float = 0.0) -> 'ResolverOutcome':
        return cls(resolver=resolver, error=error, response_time=response_time)

    @property
    def failed(self) -> bool:
        """Check if the query could not be completed."""
        return self.error is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "resolver": self.resolver,
            "records": [record.to_dict() for record in self.records],
            "has_error": self.failed,
            "response_time": self.response_time,
        }
        if self.failed:
            data["error"] = self.error
        else:
            data["dns_status"] = self.dns_status
        return data


@dataclass
class RecordTypeResult:
    """Primary-resolver records and per-resolver propagation for one record type."""
    record_type: str
    primary_records: List[Record] = field(default_factory=list)
    propagation: Dict[str, ResolverOutcome] = field(default_factory=dict)

    @property
    def has_records(self) -> bool:
        return len(self.primary_records) > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "record_type": self.record_type,
            "primary_records": [record.to_dict() for record in self.primary_records],
            "propagation": {
                name: outcome.to_dict() for name, outcome in self.propagation.items()
            },
        }


class DomainResultSet:
    """Mapping of record type to RecordTypeResult for one domain.

    Every supported record type has an entry, even when nothing was found.
    Iteration follows SUPPORTED_RECORD_TYPES order.
    """

    def __init__(self, domain: str, results: Optional[Dict[str, RecordTypeResult]] = None):
        """Initialize result set.

        Args:
            domain: The queried domain
            results: Optional pre-populated results keyed by record type; missing
                     types are filled with empty results

        Raises:
            ValueError: If results contains a key that is not a supported record type
        """
        self.domain = domain
        results = results or {}

        unknown = set(results) - set(SUPPORTED_RECORD_TYPES)
        if unknown:
            raise ValueError(f"Unsupported record type(s) in result set: {', '.join(sorted(unknown))}")

        self._results: Dict[str, RecordTypeResult] = {}
        for record_type in SUPPORTED_RECORD_TYPES:
            self._results[record_type] = results.get(record_type) or RecordTypeResult(record_type=record_type)

    def __getitem__(self, record_type: str) -> RecordTypeResult:
        return self._results[record_type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._results)

    def __len__(self) -> int:
        return len(self._results)

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._results

    def items(self):
        return self._results.items()

    def records(self, record_type: str) -> List[Record]:
        """Get primary-resolver records for a record type."""
        return self._results[record_type].primary_records

    def to_dict(self) -> Dict[str, Any]:
        return {record_type: result.to_dict() for record_type, result in self._results.items()}


@dataclass(frozen=True)
class Issue:
    """A single diagnostic finding."""
    kind: str
    severity: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict, hash=False)

    # Severity constants
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.kind,
            "severity": self.severity,
            "message": self.message,
        }
        if self.details:
            data["details"] = self.details
        return data


@dataclass(frozen=True)
class DiagnosticSummary:
    """Issue counts by severity."""
    errors: int = 0
    warnings: int = 0
    info: int = 0

    @property
    def total(self) -> int:
        return self.errors + self.warnings + self.info

    def to_dict(self) -> Dict[str, int]:
        return {"errors": self.errors, "warnings": self.warnings, "info": self.info}


@dataclass
class DiagnosticReport:
    """Ordered issues from the rule engine plus a severity summary."""
    issues: List[Issue] = field(default_factory=list)
    summary: DiagnosticSummary = field(default_factory=DiagnosticSummary)

    @classmethod
    def from_issues(cls, issues: List[Issue]) -> 'DiagnosticReport':
        """Build a report, counting severities in a single pass."""
        counts = {Issue.ERROR: 0, Issue.WARNING: 0, Issue.INFO: 0}
        for issue in issues:
            if issue.severity not in counts:
                raise ValueError(f"Unknown issue severity '{issue.severity}' for {issue.kind}")
            counts[issue.severity] += 1

        return cls(
            issues=list(issues),
            summary=DiagnosticSummary(
                errors=counts[Issue.ERROR],
                warnings=counts[Issue.WARNING],
                info=counts[Issue.INFO]
            )
        )

    @property
    def has_errors(self) -> bool:
        return self.summary.errors > 0

    def issues_of_kind(self, kind: str) -> List[Issue]:
        return [issue for issue in self.issues if issue.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "issues": [issue.to_dict() for issue in self.issues],
            "summary": self.summary.to_dict(),
        }


@dataclass
class DiagnosticRun:
    """Complete diagnostic run for one domain, as handed to downstream consumers."""
    domain: str
    results: DomainResultSet
    report: DiagnosticReport
    execution_time: float = 0.0
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "dns_results": self.results.to_dict(),
            "diagnostics": self.report.to_dict(),
            "timestamp": self.timestamp.isoformat(),
            "execution_time": self.execution_time,
        }
