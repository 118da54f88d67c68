"""
HTTP transport.

Executes request descriptors and owns the cookie jar that carries the
session between calls.
"""
import asyncio
from dataclasses import dataclass, field
from http.cookies import SimpleCookie
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable
import json

import aiohttp
from yarl import URL

from .config import APIConfig
from .request.request_builder import RequestDescriptor, FormBody, MultipartBody
from ..exceptions import TransportError, DecodeError
from ..logging import get_logger, truncate


@dataclass
class HttpResponse:
    """
    Raw HTTP response.

    Attributes:
        status: HTTP status code
        body: Response body bytes
        headers: Response headers
    """
    status: int
    body: bytes = b''
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def json(self) -> Any:
        """
        Decode body as JSON.

        Raises:
            DecodeError: If the body is not valid JSON
        """
        try:
            return json.loads(self.text)
        except ValueError as e:
            raise DecodeError(f"Invalid JSON response: {e}", body=self.text) from e


@runtime_checkable
class Transport(Protocol):
    """
    Protocol for HTTP transports.

    A transport must keep cookies across calls and expose them so the
    csrf token can be read after the first unauthenticated request.
    """

    async def send(self, request: RequestDescriptor) -> HttpResponse:
        """
        Execute a request.

        Raises:
            TransportError: On connection level failures
        """
        ...

    def get_cookie(self, name: str) -> Optional[str]:
        """Value of a cookie for the API host, or None."""
        ...

    def export_cookies(self) -> List[Dict[str, str]]:
        """Snapshot of the cookie jar."""
        ...

    def import_cookies(self, cookies: List[Dict[str, str]]) -> None:
        """Restore a snapshot produced by export_cookies."""
        ...

    async def close(self) -> None:
        """Release resources."""
        ...


class AiohttpTransport:
    """
    Transport backed by aiohttp.

    Example:
        >>> async with AiohttpTransport(APIConfig.default()) as transport:
        ...     response = await transport.send(descriptor)
    """

    def __init__(self, config: Optional[APIConfig] = None):
        """
        Initialize transport.

        Args:
            config: API configuration (uses defaults if not provided)
        """
        self._config = config or APIConfig.default()
        self._session: Optional[aiohttp.ClientSession] = None
        self._connector: Optional[aiohttp.TCPConnector] = None
        self._cookie_jar: Optional[aiohttp.CookieJar] = None
        # Cookies imported before the jar exists (jar needs a running loop)
        self._pending_cookies: List[Dict[str, str]] = []
        self._logger = get_logger('igmobile.transport')

    @property
    def config(self) -> APIConfig:
        return self._config

    async def __aenter__(self) -> 'AiohttpTransport':
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        """Ensure session is created and open."""
        if self._cookie_jar is None:
            self._cookie_jar = aiohttp.CookieJar()
            if self._pending_cookies:
                self._load_into_jar(self._pending_cookies)
                self._pending_cookies = []

        if self._session is None or self._session.closed:
            self._connector = aiohttp.TCPConnector(
                **self._config.get_connector_kwargs()
            )
            self._session = aiohttp.ClientSession(
                connector=self._connector,
                cookie_jar=self._cookie_jar,
                **self._config.get_session_kwargs()
            )
        return self._session

    async def close(self) -> None:
        """Close session and release resources."""
        if self._session and not self._session.closed:
            await self._session.close()
        self._session = None

        if self._connector and not self._connector.closed:
            await self._connector.close()
        self._connector = None

    def _build_body(self, request: RequestDescriptor) -> Any:
        body = request.body
        if body is None:
            return None

        if isinstance(body, MultipartBody):
            writer = aiohttp.MultipartWriter('form-data', boundary=body.boundary)
            for part in body.parts:
                payload = writer.append(part.data, dict(part.headers) or None)
                if part.filename:
                    payload.set_content_disposition(
                        'form-data', name=part.name, filename=part.filename
                    )
                else:
                    payload.set_content_disposition('form-data', name=part.name)
            return writer

        if isinstance(body, FormBody):
            return aiohttp.FormData(list(body.fields))

        raise TypeError(f"Unsupported body type: {type(body).__name__}")

    async def send(self, request: RequestDescriptor) -> HttpResponse:
        """
        Execute a request descriptor.

        Args:
            request: Descriptor built by RequestBuilder

        Returns:
            HttpResponse (any status)

        Raises:
            TransportError: On connection errors and timeouts
        """
        session = await self._ensure_session()

        if self._config.request_delay > 0:
            await asyncio.sleep(self._config.request_delay)

        proxy = self._config.proxy.to_aiohttp_proxy() if self._config.proxy else None

        self._logger.debug(f"{request.method} {request.uri}")

        try:
            async with session.request(
                request.method,
                request.uri,
                headers=list(request.headers),
                data=self._build_body(request),
                proxy=proxy
            ) as resp:
                body = await resp.read()
                response = HttpResponse(
                    status=resp.status,
                    body=body,
                    headers=dict(resp.headers)
                )
        except asyncio.TimeoutError as e:
            raise TransportError(f"Request timed out: {request.method} {request.uri}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"Connection error: {e}") from e

        self._logger.debug(f"Response {response.status}: {truncate(response.text)}")
        return response

    def _jar_morsels(self):
        if self._cookie_jar is None:
            return []
        return list(self._cookie_jar)

    def get_cookie(self, name: str) -> Optional[str]:
        for morsel in self._jar_morsels():
            if morsel.key == name:
                return morsel.value
        for cookie in self._pending_cookies:
            if cookie['name'] == name:
                return cookie['value']
        return None

    def export_cookies(self) -> List[Dict[str, str]]:
        """Snapshot the cookie jar as a list of plain dicts."""
        if self._cookie_jar is None:
            return [dict(cookie) for cookie in self._pending_cookies]
        return [
            {
                'name': morsel.key,
                'value': morsel.value,
                'domain': morsel['domain'],
                'path': morsel['path'] or '/',
            }
            for morsel in self._jar_morsels()
        ]

    def import_cookies(self, cookies: List[Dict[str, str]]) -> None:
        """Restore cookies from export_cookies()."""
        if self._cookie_jar is None:
            self._pending_cookies = [dict(cookie) for cookie in cookies]
            return
        self._load_into_jar(cookies)

    def _load_into_jar(self, cookies: List[Dict[str, str]]) -> None:
        response_url = URL(self._config.base_url)
        for cookie in cookies:
            simple = SimpleCookie()
            simple[cookie['name']] = cookie['value']
            if cookie.get('domain'):
                simple[cookie['name']]['domain'] = cookie['domain']
            simple[cookie['name']]['path'] = cookie.get('path') or '/'
            self._cookie_jar.update_cookies(simple, response_url=response_url)
