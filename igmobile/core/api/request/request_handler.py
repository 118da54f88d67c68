"""Request handler: sends descriptors through a transport."""
from typing import Any, TypeVar

from .request_builder import RequestDescriptor
from .response_handler import ResponseHandler, Decoder
from ...exceptions import TransportError
from ...results import Result
from ...logging import get_logger

T = TypeVar('T')


class RequestHandler:
    """
    Executes requests and reports the outcome as a Result.

    No retries: a failed call is reported once, with the status and raw
    body of the response.
    """

    def __init__(self, transport):
        """
        Initializes request handler.

        Args:
            transport: Object implementing the Transport protocol
        """
        self.transport = transport
        self.logger = get_logger('igmobile.request')

    async def execute(self, request: RequestDescriptor) -> Result[Any]:
        """Send a request; transport failures become a failed Result."""
        try:
            response = await self.transport.send(request)
        except TransportError as e:
            self.logger.error(f"{request.method} {request.uri} failed: {e}")
            return Result.from_exception(e)
        return Result.success(response)

    async def fetch(self, request: RequestDescriptor, decoder: Decoder) -> Result[T]:
        """Send a request and decode a 2xx body with decoder."""
        sent = await self.execute(request)
        if not sent.succeeded:
            return sent.forward()
        return ResponseHandler.decode(sent.value, decoder)

    async def fetch_ok(self, request: RequestDescriptor) -> Result[bool]:
        """Send a request whose only interesting outcome is a 2xx status."""
        sent = await self.execute(request)
        if not sent.succeeded:
            return sent.forward()
        checked = ResponseHandler.check_status(sent.value)
        if not checked.succeeded:
            return checked.forward()
        return Result.success(True)
