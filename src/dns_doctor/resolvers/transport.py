"""
DNS-over-HTTPS transport for single resolver queries.

Issues one JSON DoH query (application/dns-json) of one record type against
one resolver and turns every transport failure into a failed ResolverOutcome.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List

import aiohttp

from ..config import DEFAULT_TIMEOUT, ResolverEndpoint
from ..models import Record, ResolverOutcome, record_type_code, record_type_name

logger = logging.getLogger(__name__)


DNS_JSON_CONTENT_TYPE = 'application/dns-json'


def parse_txt_data(data: str) -> str:
    """Unquote a TXT payload, joining multiple character-strings into one value.

    Resolvers render TXT data as one or more quoted strings, e.g.
    '"v=spf1 include:_spf.example.com" " -all"'. Inside quotes, a backslash
    escapes the next character and \\DDD encodes one byte in decimal
    (\\059 is ';'). Unquoted input is returned as is.
    """
    text = data.strip()
    if not text.startswith('"'):
        return text

    parts = []
    current = bytearray()
    in_quotes = False
    i = 0

    while i < len(text):
        char = text[i]
        if in_quotes and char == '\\':
            digits = text[i + 1:i + 4]
            if len(digits) == 3 and digits.isascii() and digits.isdigit() and int(digits) <= 255:
                current.append(int(digits))
                i += 4
                continue
            current.extend(text[i + 1:i + 2].encode('utf-8'))
            i += 2
            continue
        if char == '"':
            if in_quotes:
                parts.append(current.decode('utf-8', errors='replace'))
                current = bytearray()
            in_quotes = not in_quotes
        elif in_quotes:
            current.extend(char.encode('utf-8'))
        i += 1

    if current:
        parts.append(current.decode('utf-8', errors='replace'))

    return ''.join(parts)


def parse_answer(answer: Any) -> List[Record]:
    """
    Parse the Answer section of a JSON DoH response into Records.

    Args:
        answer: Value of the response's "Answer" key (list of dicts)

    Returns:
        List of Record objects in answer order

    Raises:
        ValueError: If the answer section is malformed
    """
    if answer is None:
        return []
    if not isinstance(answer, list):
        raise ValueError(f"Malformed Answer section: expected list, got {type(answer).__name__}")

    records = []
    for entry in answer:
        if not isinstance(entry, dict):
            raise ValueError(f"Malformed answer entry: {entry!r}")
        try:
            type_name = record_type_name(int(entry['type']))
            data = str(entry['data'])
            if type_name == 'TXT':
                data = parse_txt_data(data)
            records.append(Record(
                name=str(entry['name']),
                type=type_name,
                ttl=int(entry['TTL']),
                data=data
            ))
        except (KeyError, TypeError, OverflowError) as e:
            raise ValueError(f"Malformed answer entry {entry!r}: {e}") from e

    return records


class ResolverTransport:
    """Queries a single DoH resolver for a single record type."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize the transport.

        Args:
            timeout: Maximum time in seconds for one resolver query
        """
        self.timeout = timeout

    async def query(self, domain: str, record_type: str, resolver: ResolverEndpoint) -> ResolverOutcome:
        """
        Query one resolver for one record type.

        Transport failures (HTTP errors, timeouts, unparsable bodies) are
        returned as failed outcomes and never raised.

        Args:
            domain: Syntactically valid domain name
            record_type: One of the supported record types
            resolver: Resolver endpoint to query

        Returns:
            ResolverOutcome with records or a failure cause

        Raises:
            ValueError: If record_type is not supported
        """
        record_type = record_type.upper()
        type_code = record_type_code(record_type)
        params = {'name': domain, 'type': str(type_code)}

        start_time = time.time()
        logger.debug(f"Querying {resolver.name} for {domain} ({record_type})")

        try:
            body = await self._fetch_json(resolver.url, params)
            if not isinstance(body, dict):
                raise ValueError(f"Expected JSON object, got {type(body).__name__}")

            records = parse_answer(body.get('Answer'))
            dns_status = body.get('Status')
            response_time = time.time() - start_time

            if dns_status:
                logger.debug(f"{resolver.name} returned DNS status {dns_status} for {domain} ({record_type})")

            return ResolverOutcome.success(
                resolver=resolver.name,
                records=records,
                response_time=response_time,
                dns_status=dns_status
            )

        except asyncio.TimeoutError:
            response_time = time.time() - start_time
            logger.warning(f"DoH query timeout for {domain} ({record_type}) on {resolver.name}")
            return ResolverOutcome.failure(
                resolver=resolver.name,
                error=f"Query timeout (>{self.timeout}s)",
                response_time=response_time
            )

        except aiohttp.ClientResponseError as e:
            response_time = time.time() - start_time
            logger.warning(f"DoH query failed for {domain} ({record_type}) on {resolver.name}: HTTP {e.status}")
            return ResolverOutcome.failure(
                resolver=resolver.name,
                error=f"HTTP {e.status}: {e.message}",
                response_time=response_time
            )

        except aiohttp.ClientError as e:
            response_time = time.time() - start_time
            logger.warning(f"DoH query failed for {domain} ({record_type}) on {resolver.name}: {e}")
            return ResolverOutcome.failure(
                resolver=resolver.name,
                error=str(e) or type(e).__name__,
                response_time=response_time
            )

        except ValueError as e:
            # Body was not JSON or the answer section was malformed
            response_time = time.time() - start_time
            logger.warning(f"Invalid DoH response for {domain} ({record_type}) from {resolver.name}: {e}")
            return ResolverOutcome.failure(
                resolver=resolver.name,
                error=f"Invalid response: {e}",
                response_time=response_time
            )

    async def _fetch_json(self, url: str, params: Dict[str, str]) -> Any:
        """
        Send the GET request and decode the JSON body.

        Args:
            url: Resolver query URL
            params: Query string parameters (name, type)

        Returns:
            Decoded JSON body

        Raises:
            aiohttp.ClientError: If the request fails or returns a non-2xx status
            asyncio.TimeoutError: If the request times out
            ValueError: If the body is not valid JSON
        """
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.get(
                url,
                params=params,
                headers={'Accept': DNS_JSON_CONTENT_TYPE}
            ) as response:
                response.raise_for_status()
                # Resolvers disagree on the response content type, so don't enforce it
                return await response.json(content_type=None)
