"""Syntactic domain name validation."""

import re

# Label/TLD syntax: 1-63 char labels, no leading/trailing hyphen, alphabetic TLD
DOMAIN_REGEX = re.compile(r'^([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,}$', re.IGNORECASE)

MAX_DOMAIN_LENGTH = 253


def normalize_domain(domain: str) -> str:
    """Trim whitespace, strip a single trailing dot and lower-case."""
    normalized = domain.strip()
    if normalized.endswith('.'):
        normalized = normalized[:-1]
    return normalized.lower()


def is_valid_domain(domain: str) -> bool:
    """Check whether a domain string has valid label/TLD syntax."""
    if not domain or not isinstance(domain, str):
        return False

    normalized = normalize_domain(domain)
    if len(normalized) > MAX_DOMAIN_LENGTH:
        return False

    return DOMAIN_REGEX.match(normalized) is not None


def validate_domain(domain: str) -> str:
    """
    Validate a domain and return its normalized form.

    Args:
        domain: Domain name as entered (trailing dot tolerated)

    Returns:
        Normalized domain name

    Raises:
        ValueError: If the domain is not syntactically valid
    """
    if not is_valid_domain(domain):
        raise ValueError(f"Invalid domain format: '{domain}'")
    return normalize_domain(domain)
