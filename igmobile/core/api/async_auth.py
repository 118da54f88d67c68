"""
Async authentication service.

Login: first contact to obtain the csrftoken cookie, then a signed
accounts/login/ call. The session is written only once the login round
trip has completed, so an abandoned login leaves it untouched.
"""
from typing import Optional

from .endpoints import EndpointCatalog
from .payloads import LoginPayload
from .request import RequestBuilder, RequestHandler, ResponseHandler
from ..constants import CSRFTOKEN
from ..device import DeviceIdentity
from ..models import LoginResponse, StatusResponse
from ..results import Result, ResultKind
from ..session import SessionState
from ..logging import get_logger


class AsyncAuthService:
    """
    Asynchronous authentication service.

    Handles login and logout for one device and session.
    """

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        endpoints: EndpointCatalog,
        device: DeviceIdentity,
        session: SessionState
    ):
        """
        Initialize auth service.

        Args:
            handler: Request handler (owns the transport)
            builder: Request builder
            endpoints: Endpoint catalog
            device: Device identity
            session: Session state to authenticate
        """
        self._handler = handler
        self._builder = builder
        self._endpoints = endpoints
        self._device = device
        self._session = session
        self._logger = get_logger('igmobile.auth')

    async def _fetch_csrf_token(self) -> Result[str]:
        request = self._builder.build_plain_request('GET', self._endpoints.base_url, self._device)
        sent = await self._handler.execute(request)
        if not sent.succeeded:
            return sent.forward()
        token = self._handler.transport.get_cookie(CSRFTOKEN)
        if not token:
            self._logger.warning("No csrftoken cookie after first contact")
        return Result.success(token or '')

    async def login(self) -> Result[bool]:
        """
        Login with the configured credentials.

        Returns:
            Result[bool]: True when the server returned the configured user

        Raises:
            PreconditionError: If user name or password is missing
        """
        self._session.ensure_credentials()
        username = self._session.username

        csrf = await self._fetch_csrf_token()
        if not csrf.succeeded:
            return csrf.forward()

        payload = LoginPayload.create(
            self._device,
            username,
            self._session.password,
            csrf.value
        )
        request = self._builder.build_signed_request(
            'POST', self._endpoints.login(), self._device, payload
        )
        self._logger.info(f"Logging in as {username}")
        decoded = await self._handler.fetch(request, LoginResponse.from_dict)
        if not decoded.succeeded:
            self._logger.error(f"Login failed: {decoded.message}")
            return decoded.forward()

        login: LoginResponse = decoded.value
        # Server rotates the token on login
        token: Optional[str] = self._handler.transport.get_cookie(CSRFTOKEN) or csrf.value

        if self._session.is_authenticated:
            self._session.invalidate()
        self._session.set_csrf_token(token)

        if login.logged_in_user is None or not self._session.apply_login(
            login.logged_in_user, str(self._device.phone_id)
        ):
            returned = login.logged_in_user.username if login.logged_in_user else None
            return Result.fail(
                f"Login returned user {returned!r}, expected {username!r}",
                kind=ResultKind.PROTOCOL
            )

        self._logger.info(f"Logged in as {username} ({self._session.user_id})")
        return Result.success(True)

    async def logout(self) -> Result[bool]:
        """
        Logout and invalidate the session.

        Raises:
            PreconditionError: If not logged in
        """
        self._session.ensure_credentials()
        self._session.ensure_authenticated()

        request = self._builder.build_plain_request('GET', self._endpoints.logout(), self._device)
        decoded = await self._handler.fetch(request, StatusResponse.from_dict)
        if not decoded.succeeded:
            return decoded.forward()

        status: StatusResponse = decoded.value
        if not status.is_ok:
            return Result.fail(status.message or f"Logout status: {status.status}")

        self._session.invalidate()
        self._logger.info("Logged out")
        return Result.success(True)
