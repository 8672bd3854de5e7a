"""Tests for domain name validation."""

import pytest

from dns_doctor.validation import is_valid_domain, normalize_domain, validate_domain


@pytest.mark.parametrize("domain", [
    'example.com',
    'sub.example.com',
    'my-site.example.co.uk',
    'EXAMPLE.COM',
    'example.com.',
    'xn--bcher-kva.example',
    '  example.org  ',
])
def test_valid_domains(domain):
    assert is_valid_domain(domain)


@pytest.mark.parametrize("domain", [
    '',
    'localhost',
    'example',
    '-example.com',
    'example-.com',
    'exa mple.com',
    'example..com',
    'example.c',
    'example.123',
    'http://example.com',
    'a' * 64 + '.com',
    ('a' * 60 + '.') * 5 + 'com',
])
def test_invalid_domains(domain):
    assert not is_valid_domain(domain)


def test_non_string_is_invalid():
    assert not is_valid_domain(None)


def test_normalize_domain():
    assert normalize_domain(' Example.COM. ') == 'example.com'


def test_validate_domain_returns_normalized():
    assert validate_domain('WWW.Example.com.') == 'www.example.com'


def test_validate_domain_rejects_invalid():
    with pytest.raises(ValueError, match="Invalid domain format: 'not a domain'"):
        validate_domain('not a domain')
