"""Shared fixtures and builders for DNS Doctor tests."""

import asyncio
from typing import Dict, List, Optional

import pytest

from dns_doctor.config import ResolverEndpoint
from dns_doctor.models import (
    DomainResultSet,
    Record,
    RecordTypeResult,
    ResolverOutcome,
)


def make_record(record_type: str, data: str, ttl: int = 3600, name: str = "example.com.") -> Record:
    """Build a Record with sensible defaults."""
    return Record(name=name, type=record_type, ttl=ttl, data=data)


def make_result_set(
    records: Optional[Dict[str, List[Record]]] = None,
    propagation: Optional[Dict[str, Dict[str, ResolverOutcome]]] = None,
    domain: str = "example.com"
) -> DomainResultSet:
    """Build a DomainResultSet from per-type record lists and propagation maps."""
    records = records or {}
    propagation = propagation or {}
    results = {}
    for record_type in set(records) | set(propagation):
        results[record_type] = RecordTypeResult(
            record_type=record_type,
            primary_records=list(records.get(record_type, [])),
            propagation=dict(propagation.get(record_type, {}))
        )
    return DomainResultSet(domain=domain, results=results)


class FakeTransport:
    """Transport returning canned outcomes keyed by (resolver, record type)."""

    def __init__(self, answers=None, failures=None, delays=None, raises=None):
        self.answers = answers or {}
        self.failures = failures or set()
        self.delays = delays or {}
        self.raises = raises or set()
        self.calls = []

    async def query(self, domain, record_type, resolver):
        self.calls.append((domain, record_type, resolver.name))
        delay = self.delays.get(resolver.name)
        if delay:
            await asyncio.sleep(delay)
        if resolver.name in self.raises:
            raise RuntimeError(f"{resolver.name} exploded")
        if (resolver.name, record_type) in self.failures or resolver.name in self.failures:
            return ResolverOutcome.failure(resolver=resolver.name, error="Query timeout (>5.0s)")
        records = self.answers.get((resolver.name, record_type), [])
        return ResolverOutcome.success(resolver=resolver.name, records=records)


HEALTHY_RECORDS = {
    'A': [make_record('A', '93.184.216.34')],
    'AAAA': [make_record('AAAA', '2606:2800:220:1:248:1893:25c8:1946')],
    'MX': [make_record('MX', '10 mail.example.com.')],
    'NS': [
        make_record('NS', 'ns1.example.com.'),
        make_record('NS', 'ns2.example.com.'),
    ],
    'TXT': [
        make_record('TXT', 'v=spf1 include:_spf.example.com -all'),
        make_record('TXT', 'v=DMARC1; p=reject'),
    ],
}


@pytest.fixture
def resolvers() -> List[ResolverEndpoint]:
    return [
        ResolverEndpoint(name='cloudflare', url='https://cloudflare-dns.com/dns-query'),
        ResolverEndpoint(name='google', url='https://dns.google/resolve'),
        ResolverEndpoint(name='quad9', url='https://dns.quad9.net/dns-query'),
    ]


@pytest.fixture
def healthy_result_set() -> DomainResultSet:
    """A fully consistent domain: every resolver agrees on every record type."""
    propagation = {
        record_type: {
            name: ResolverOutcome.success(resolver=name, records=records)
            for name in ('cloudflare', 'google', 'quad9')
        }
        for record_type, records in HEALTHY_RECORDS.items()
    }
    return make_result_set(HEALTHY_RECORDS, propagation)
