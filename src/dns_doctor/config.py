"""Configuration management for DNS diagnostics."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional
from urllib.parse import urlparse

import yaml


@dataclass
class ResolverEndpoint:
    """A named DNS-over-HTTPS resolver that answers JSON queries."""
    name: str  # Stable identity used as the propagation key
    url: str  # Query URL, e.g. https://dns.google/resolve

    def __post_init__(self):
        """Validate endpoint after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Resolver name cannot be empty")
        self.name = self.name.strip()

        if not self.url:
            raise ValueError(f"Resolver '{self.name}': URL cannot be empty")

        parsed = urlparse(self.url)
        if parsed.scheme not in ("http", "https"):
            raise ValueError(
                f"Resolver '{self.name}': URL scheme must be http or https, got: {parsed.scheme or 'none'}"
            )
        if not parsed.netloc:
            raise ValueError(f"Resolver '{self.name}': URL must include a host: {self.url}")


DEFAULT_RESOLVERS = [
    ('cloudflare', 'https://cloudflare-dns.com/dns-query'),
    ('google', 'https://dns.google/resolve'),
    ('quad9', 'https://dns.quad9.net/dns-query'),
]

DEFAULT_PRIMARY = 'cloudflare'
DEFAULT_TIMEOUT = 5.0

# TTL thresholds for diagnostics (seconds)
DEFAULT_TTL_MIN = 300
DEFAULT_TTL_MAX = 86400


def _default_resolvers() -> List[ResolverEndpoint]:
    return [ResolverEndpoint(name=name, url=url) for name, url in DEFAULT_RESOLVERS]


@dataclass
class DoctorConfig:
    """Complete diagnostic configuration."""

    resolvers: List[ResolverEndpoint] = field(default_factory=_default_resolvers)
    primary: str = DEFAULT_PRIMARY
    timeout: float = DEFAULT_TIMEOUT
    ttl_min: int = DEFAULT_TTL_MIN
    ttl_max: int = DEFAULT_TTL_MAX

    @property
    def primary_resolver(self) -> ResolverEndpoint:
        """Get the resolver designated as primary."""
        for resolver in self.resolvers:
            if resolver.name == self.primary:
                return resolver
        raise ValueError(f"Primary resolver '{self.primary}' is not configured")


def get_default_config_path() -> Optional[str]:
    """
    Find default configuration file in current directory.

    Looks for dns-doctor.yaml first, then dns-doctor.json.

    Returns:
        Path to configuration file if found, None otherwise.
    """
    for candidate in ('dns-doctor.yaml', 'dns-doctor.yml', 'dns-doctor.json'):
        path = Path(candidate)
        if path.exists():
            return str(path)

    return None


def load_config(file_path: str) -> DoctorConfig:
    """
    Load and parse configuration file (YAML or JSON).

    Expected YAML format:
        primary: cloudflare
        timeout: 5
        ttl:
          min: 300
          max: 86400
        resolvers:
          - name: cloudflare
            url: https://cloudflare-dns.com/dns-query
          - name: google
            url: https://dns.google/resolve

    Every key is optional; omitted keys keep their defaults.

    Args:
        file_path: Path to configuration file

    Returns:
        Parsed and validated DoctorConfig

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is invalid or validation fails
    """
    path = Path(file_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(content)
        elif path.suffix == '.json':
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported file format: {path.suffix}. Use .yaml, .yml, or .json")

        if data is None:
            raise ValueError("Configuration file is empty")
        if not isinstance(data, dict):
            raise ValueError("Configuration must be an object/dictionary")

        config = DoctorConfig()

        if 'resolvers' in data:
            config.resolvers = _parse_resolvers(data['resolvers'])

        if 'primary' in data:
            primary = data['primary']
            if not isinstance(primary, str) or not primary.strip():
                raise ValueError("'primary' must be a non-empty string")
            config.primary = primary.strip()

        if 'timeout' in data:
            timeout = data['timeout']
            if isinstance(timeout, bool) or not isinstance(timeout, (int, float)):
                raise ValueError("'timeout' must be a number")
            config.timeout = float(timeout)

        ttl = data.get('ttl', {})
        if not isinstance(ttl, dict):
            raise ValueError("'ttl' must be an object/dictionary")
        if 'min' in ttl:
            config.ttl_min = _parse_int(ttl['min'], 'ttl.min')
        if 'max' in ttl:
            config.ttl_max = _parse_int(ttl['max'], 'ttl.max')

        validate_config(config)

        return config

    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML syntax: {str(e)}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON syntax at line {e.lineno}, column {e.colno}: {e.msg}")


def _parse_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{key}' must be an integer")
    return value


def _parse_resolvers(resolvers_data: Any) -> List[ResolverEndpoint]:
    if not isinstance(resolvers_data, list):
        raise ValueError("'resolvers' must be a list")

    resolvers = []
    for idx, resolver_data in enumerate(resolvers_data):
        if not isinstance(resolver_data, dict):
            raise ValueError(f"Resolver at index {idx} must be an object/dictionary")

        name = resolver_data.get('name')
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Resolver at index {idx} is missing required 'name' field")

        url = resolver_data.get('url')
        if not isinstance(url, str) or not url.strip():
            raise ValueError(f"Resolver '{name}' is missing required 'url' field")

        resolvers.append(ResolverEndpoint(name=name, url=url.strip()))

    return resolvers


def validate_config(config: DoctorConfig) -> None:
    """
    Validate diagnostic configuration.

    Args:
        config: DoctorConfig to validate

    Raises:
        ValueError: If validation fails with descriptive error message
    """
    if not config.resolvers:
        raise ValueError("At least one resolver must be configured")

    names = [resolver.name for resolver in config.resolvers]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate resolver name(s): {', '.join(duplicates)}")

    if config.primary not in names:
        raise ValueError(
            f"Primary resolver '{config.primary}' is not configured. "
            f"Configured resolvers are: {', '.join(names)}"
        )

    if config.timeout <= 0:
        raise ValueError(f"Timeout must be positive, got {config.timeout}")

    if config.ttl_min < 0:
        raise ValueError(f"TTL minimum must not be negative, got {config.ttl_min}")

    if config.ttl_min >= config.ttl_max:
        raise ValueError(
            f"TTL minimum ({config.ttl_min}) must be lower than TTL maximum ({config.ttl_max})"
        )
