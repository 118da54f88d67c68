"""Pytest fixtures for igmobile tests."""
import json
import random

import pytest

from igmobile import InstaClient
from igmobile.core.api import (
    APIConfig,
    EndpointCatalog,
    HttpResponse,
    RequestBuilder,
    RequestHandler,
)
from igmobile.core.device import create_device
from igmobile.core.models import UserShort
from igmobile.core.session import SessionState


def json_response(data, status=200):
    """HttpResponse with a JSON body."""
    return HttpResponse(status=status, body=json.dumps(data).encode('utf-8'))


class FakeTransport:
    """
    Scripted in-memory transport.

    Each send pops the next scripted item: an HttpResponse, an exception to
    raise, or a callable receiving the request and returning either.
    """

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []
        self.cookies = {}
        self.closed = False

    def queue(self, *responses):
        self.responses.extend(responses)

    async def send(self, request):
        self.calls.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.uri}")
        item = self.responses.pop(0)
        if callable(item) and not isinstance(item, (HttpResponse, BaseException)):
            item = item(request)
        if isinstance(item, BaseException):
            raise item
        return item

    def get_cookie(self, name):
        return self.cookies.get(name)

    def export_cookies(self):
        return [
            {'name': name, 'value': value, 'domain': 'i.instagram.com', 'path': '/'}
            for name, value in self.cookies.items()
        ]

    def import_cookies(self, cookies):
        for cookie in cookies:
            self.cookies[cookie['name']] = cookie['value']

    async def close(self):
        self.closed = True


@pytest.fixture
def config():
    return APIConfig.default()


@pytest.fixture
def device():
    """Deterministic Pixel XL identity."""
    return create_device('pixel-xl', rng=random.Random(7))


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def builder(config):
    return RequestBuilder(config)


@pytest.fixture
def endpoints(config):
    return EndpointCatalog(config)


@pytest.fixture
def handler(transport):
    return RequestHandler(transport)


@pytest.fixture
def logged_in_session():
    """Session as left by a successful login."""
    return SessionState(
        username='someone',
        password='secret',
        csrf_token='csrf123',
        rank_token='42_phone',
        logged_in_user=UserShort(pk='42', username='someone'),
        is_authenticated=True,
    )


@pytest.fixture
def client(transport, device, config):
    """Client with credentials, not logged in."""
    return InstaClient('someone', 'secret', device=device, config=config, transport=transport)


@pytest.fixture
def logged_in_client(client):
    """Client whose session is authenticated as 'someone' (pk 42)."""
    session = client.session
    session.set_csrf_token('csrf123')
    session.apply_login(UserShort(pk='42', username='someone'), str(client.device.phone_id))
    return client


@pytest.fixture
def make_response():
    """json_response(data, status=200) factory."""
    return json_response


@pytest.fixture
def transport_factory():
    """Builds additional FakeTransports."""
    return FakeTransport
