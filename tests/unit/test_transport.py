"""Tests for the aiohttp transport that do not touch the network."""
import aiohttp
import pytest

from igmobile.core.api import AiohttpTransport, APIConfig, HttpResponse, Transport
from igmobile.core.api.request import FormBody, MultipartBody, MultipartPart, RequestDescriptor
from igmobile.core.exceptions import DecodeError

COOKIES = [
    {'name': 'csrftoken', 'value': 'abc', 'domain': 'i.instagram.com', 'path': '/'},
    {'name': 'sessionid', 'value': 'sid', 'domain': 'i.instagram.com', 'path': '/'},
]


class TestHttpResponse:
    """Tests for HttpResponse."""

    def test_json(self):
        assert HttpResponse(200, b'{"status": "ok"}').json() == {'status': 'ok'}

    def test_invalid_json(self):
        with pytest.raises(DecodeError) as exc_info:
            HttpResponse(200, b'<html>').json()

        assert exc_info.value.body == '<html>'

    @pytest.mark.parametrize('status, ok', [(200, True), (204, True), (302, False), (400, False), (500, False)])
    def test_is_success(self, status, ok):
        assert HttpResponse(status).is_success is ok


class TestCookies:
    """Cookie snapshot handling."""

    def test_implements_protocol(self):
        assert isinstance(AiohttpTransport(), Transport)

    def test_pending_cookies_before_session(self):
        transport = AiohttpTransport(APIConfig.default())
        transport.import_cookies(COOKIES)

        assert transport.get_cookie('csrftoken') == 'abc'
        assert transport.get_cookie('missing') is None
        assert transport.export_cookies() == COOKIES

    @pytest.mark.asyncio
    async def test_cookies_move_into_jar(self):
        transport = AiohttpTransport(APIConfig.default())
        transport.import_cookies(COOKIES)

        await transport._ensure_session()
        try:
            assert transport.get_cookie('sessionid') == 'sid'
            assert {c['name'] for c in transport.export_cookies()} == {'csrftoken', 'sessionid'}
        finally:
            await transport.close()


class TestBuildBody:
    """Descriptor bodies become aiohttp payloads."""

    def test_no_body(self):
        request = RequestDescriptor('GET', 'https://i.instagram.com/')

        assert AiohttpTransport()._build_body(request) is None

    def test_form(self):
        request = RequestDescriptor('POST', 'https://i.instagram.com/', body=FormBody((('a', '1'),)))

        assert isinstance(AiohttpTransport()._build_body(request), aiohttp.FormData)

    def test_multipart_keeps_boundary(self):
        body = MultipartBody(
            parts=(
                MultipartPart('upload_id', '123'),
                MultipartPart('video', b'\x00\x01', filename='pending_media_123.mp4'),
            ),
            boundary='123-456',
        )
        request = RequestDescriptor('POST', 'https://i.instagram.com/', body=body)

        writer = AiohttpTransport()._build_body(request)

        assert isinstance(writer, aiohttp.MultipartWriter)
        assert writer.boundary == '123-456'
