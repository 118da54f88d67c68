"""Response handler for API responses."""
from typing import Any, Callable, Dict, TypeVar

from ...exceptions import IgException
from ...results import Result, ResultKind
from ...logging import get_logger, truncate

T = TypeVar('T')

Decoder = Callable[[Dict[str, Any]], T]

logger = get_logger('igmobile.response')


class ResponseHandler:
    """Turns raw responses into Results."""

    @staticmethod
    def check_status(response) -> Result[Any]:
        """Success when the status is 2xx, otherwise an unexpected-response failure."""
        if response.is_success:
            return Result.success(response)
        logger.debug(f"Unexpected status {response.status}: {truncate(response.text)}")
        return Result.unexpected_response(response.status, response.text)

    @staticmethod
    def parse_response(response) -> Any:
        """
        Parses JSON response.

        Raises:
            DecodeError: On malformed JSON
        """
        return response.json()

    @staticmethod
    def decode(response, decoder: Decoder) -> Result[T]:
        """
        Check status and decode the body.

        Args:
            response: HttpResponse
            decoder: Callable turning the parsed JSON into a response shape

        Returns:
            Result with the decoded value, or the failure
        """
        checked = ResponseHandler.check_status(response)
        if not checked.succeeded:
            return checked.forward()

        try:
            data = ResponseHandler.parse_response(response)
            return Result.success(decoder(data))
        except IgException as e:
            return Result.from_exception(e)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            return Result.fail(
                f"Failed to decode response: {e}",
                kind=ResultKind.PROTOCOL,
                body=response.text,
                exception=e
            )
