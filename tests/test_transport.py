"""
Tests for the DoH resolver transport.

Most tests stub the HTTP layer by patching ResolverTransport._fetch_json;
TestHTTPExchange runs the real aiohttp client against a local server.
"""

import asyncio
import json
from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, Mock, patch

import aiohttp
import pytest
from aiohttp import test_utils, web

from dns_doctor.config import ResolverEndpoint
from dns_doctor.resolvers.transport import ResolverTransport, parse_answer, parse_txt_data


GOOGLE = ResolverEndpoint(name='google', url='https://dns.google/resolve')


@pytest.fixture
def transport():
    """Create a ResolverTransport instance for testing."""
    return ResolverTransport(timeout=2.0)


class TestParseTxtData:
    """Tests for TXT payload unquoting."""

    def test_single_quoted_string(self):
        assert parse_txt_data('"v=spf1 -all"') == 'v=spf1 -all'

    def test_multiple_strings_are_joined(self):
        assert parse_txt_data('"v=spf1 include:_spf.example.com" " -all"') == 'v=spf1 include:_spf.example.com -all'

    def test_escaped_quote(self):
        assert parse_txt_data('"say \\"hi\\""') == 'say "hi"'

    def test_unquoted_value_unchanged(self):
        assert parse_txt_data('v=DMARC1; p=none') == 'v=DMARC1; p=none'

    def test_decimal_escape_is_decoded(self):
        assert parse_txt_data('"v=DMARC1\\059 p=none"') == 'v=DMARC1; p=none'

    def test_decimal_escapes_form_utf8(self):
        assert parse_txt_data('"caf\\195\\169"') == 'caf\u00e9'

    def test_short_digit_run_is_literal(self):
        assert parse_txt_data('"a\\12"') == 'a12'


class TestParseAnswer:
    """Tests for Answer section parsing."""

    def test_parses_records(self):
        records = parse_answer([
            {'name': 'example.com.', 'type': 1, 'TTL': 300, 'data': '192.0.2.1'},
            {'name': 'example.com.', 'type': 16, 'TTL': 3600, 'data': '"v=spf1 -all"'},
        ])

        assert [(r.type, r.ttl, r.data) for r in records] == [
            ('A', 300, '192.0.2.1'),
            ('TXT', 3600, 'v=spf1 -all'),
        ]

    def test_missing_answer_is_empty(self):
        assert parse_answer(None) == []

    def test_non_list_answer_raises(self):
        with pytest.raises(ValueError):
            parse_answer({'name': 'example.com.'})

    def test_entry_missing_field_raises(self):
        with pytest.raises(ValueError, match="Malformed answer entry"):
            parse_answer([{'name': 'example.com.', 'type': 1, 'data': '192.0.2.1'}])

    def test_infinite_ttl_raises_value_error(self):
        answer = json.loads('[{"name": "example.com.", "type": 1, "TTL": 1e999, "data": "192.0.2.1"}]')

        with pytest.raises(ValueError, match="Malformed answer entry"):
            parse_answer(answer)


class TestResolverTransport:
    """Tests for ResolverTransport.query."""

    @pytest.mark.asyncio
    async def test_successful_query(self, transport):
        body = {
            'Status': 0,
            'Answer': [{'name': 'example.com.', 'type': 28, 'TTL': 300, 'data': '2001:db8::1'}],
        }

        with patch.object(transport, '_fetch_json', new=AsyncMock(return_value=body)) as mock_fetch:
            outcome = await transport.query('example.com', 'AAAA', GOOGLE)

        mock_fetch.assert_awaited_once_with('https://dns.google/resolve', {'name': 'example.com', 'type': '28'})
        assert outcome.resolver == 'google'
        assert not outcome.failed
        assert outcome.dns_status == 0
        assert outcome.records[0].data == '2001:db8::1'
        assert outcome.records[0].type == 'AAAA'

    @pytest.mark.asyncio
    async def test_dns_error_status_is_empty_success(self, transport):
        """NXDOMAIN without an Answer section is an empty answer, not a failure."""
        with patch.object(transport, '_fetch_json', new=AsyncMock(return_value={'Status': 3})):
            outcome = await transport.query('missing.example.com', 'A', GOOGLE)

        assert not outcome.failed
        assert outcome.records == []
        assert outcome.dns_status == 3

    @pytest.mark.asyncio
    async def test_timeout_becomes_failure(self, transport):
        with patch.object(transport, '_fetch_json', new=AsyncMock(side_effect=asyncio.TimeoutError())):
            outcome = await transport.query('example.com', 'A', GOOGLE)

        assert outcome.failed
        assert 'timeout' in outcome.error.lower()
        assert outcome.records == []

    @pytest.mark.asyncio
    async def test_http_error_becomes_failure(self, transport):
        error = aiohttp.ClientResponseError(
            request_info=Mock(),
            history=(),
            status=503,
            message='Service Unavailable'
        )

        with patch.object(transport, '_fetch_json', new=AsyncMock(side_effect=error)):
            outcome = await transport.query('example.com', 'MX', GOOGLE)

        assert outcome.failed
        assert outcome.error == 'HTTP 503: Service Unavailable'

    @pytest.mark.asyncio
    async def test_connection_error_becomes_failure(self, transport):
        error = aiohttp.ClientConnectionError('Connection refused')

        with patch.object(transport, '_fetch_json', new=AsyncMock(side_effect=error)):
            outcome = await transport.query('example.com', 'NS', GOOGLE)

        assert outcome.failed
        assert 'Connection refused' in outcome.error

    @pytest.mark.asyncio
    async def test_invalid_json_becomes_failure(self, transport):
        error = json.JSONDecodeError('Expecting value', '<html>', 0)

        with patch.object(transport, '_fetch_json', new=AsyncMock(side_effect=error)):
            outcome = await transport.query('example.com', 'TXT', GOOGLE)

        assert outcome.failed
        assert outcome.error.startswith('Invalid response')

    @pytest.mark.asyncio
    async def test_non_object_body_becomes_failure(self, transport):
        with patch.object(transport, '_fetch_json', new=AsyncMock(return_value=['unexpected'])):
            outcome = await transport.query('example.com', 'A', GOOGLE)

        assert outcome.failed

    @pytest.mark.asyncio
    async def test_malformed_answer_becomes_failure(self, transport):
        body = {'Status': 0, 'Answer': [{'name': 'example.com.'}]}

        with patch.object(transport, '_fetch_json', new=AsyncMock(return_value=body)):
            outcome = await transport.query('example.com', 'A', GOOGLE)

        assert outcome.failed

    @pytest.mark.asyncio
    async def test_unsupported_record_type_raises(self, transport):
        with patch.object(transport, '_fetch_json', new=AsyncMock()) as mock_fetch:
            with pytest.raises(ValueError, match="Invalid record type"):
                await transport.query('example.com', 'PTR', GOOGLE)

        mock_fetch.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unrepresentable_ttl_becomes_failure(self, transport):
        body = json.loads(
            '{"Status": 0, "Answer": [{"name": "example.com.", "type": 1, "TTL": 1e999, "data": "192.0.2.1"}]}'
        )

        with patch.object(transport, '_fetch_json', new=AsyncMock(return_value=body)):
            outcome = await transport.query('example.com', 'A', GOOGLE)

        assert outcome.failed
        assert outcome.error.startswith('Invalid response')


@asynccontextmanager
async def doh_server(handler):
    """Serve handler at /dns-query on a local port and yield a matching endpoint."""
    app = web.Application()
    app.router.add_get('/dns-query', handler)
    server = test_utils.TestServer(app)
    await server.start_server()
    try:
        yield ResolverEndpoint(name='local', url=str(server.make_url('/dns-query')))
    finally:
        await server.close()


class TestHTTPExchange:
    """Tests for the aiohttp request path against a local DoH server."""

    @pytest.mark.asyncio
    async def test_request_shape_and_answer(self):
        seen = []

        async def handler(request):
            seen.append((dict(request.query), request.headers.get('Accept')))
            return web.json_response(
                {'Status': 0, 'Answer': [{'name': 'example.com.', 'type': 15, 'TTL': 3600, 'data': '10 mail.example.com.'}]},
                content_type='application/dns-json'
            )

        async with doh_server(handler) as endpoint:
            outcome = await ResolverTransport(timeout=2.0).query('example.com', 'MX', endpoint)

        assert seen == [({'name': 'example.com', 'type': '15'}, 'application/dns-json')]
        assert not outcome.failed
        assert outcome.resolver == 'local'
        assert outcome.records[0].data == '10 mail.example.com.'

    @pytest.mark.asyncio
    async def test_slow_resolver_times_out(self):
        async def handler(request):
            await asyncio.sleep(1)
            return web.json_response({'Status': 0})

        async with doh_server(handler) as endpoint:
            outcome = await ResolverTransport(timeout=0.2).query('example.com', 'A', endpoint)

        assert outcome.failed
        assert outcome.error == 'Query timeout (>0.2s)'
        assert outcome.response_time < 1

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        async def handler(request):
            return web.Response(status=503)

        async with doh_server(handler) as endpoint:
            outcome = await ResolverTransport(timeout=2.0).query('example.com', 'A', endpoint)

        assert outcome.failed
        assert outcome.error == 'HTTP 503: Service Unavailable'

    @pytest.mark.asyncio
    async def test_non_json_body(self):
        async def handler(request):
            return web.Response(text='<html>resolver maintenance</html>', content_type='text/html')

        async with doh_server(handler) as endpoint:
            outcome = await ResolverTransport(timeout=2.0).query('example.com', 'TXT', endpoint)

        assert outcome.failed
        assert outcome.error.startswith('Invalid response')

    @pytest.mark.asyncio
    async def test_unreachable_resolver(self):
        async def handler(request):
            return web.json_response({'Status': 0})

        async with doh_server(handler) as endpoint:
            pass

        outcome = await ResolverTransport(timeout=2.0).query('example.com', 'A', endpoint)

        assert outcome.failed
        assert outcome.records == []
