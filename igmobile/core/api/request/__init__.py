"""Request building, sending and response decoding."""
from .request_handler import RequestHandler
from .request_builder import (
    RequestBuilder,
    RequestDescriptor,
    FormBody,
    SignedBody,
    MultipartBody,
    MultipartPart,
)
from .response_handler import ResponseHandler

__all__ = [
    'RequestHandler',
    'RequestBuilder',
    'RequestDescriptor',
    'FormBody',
    'SignedBody',
    'MultipartBody',
    'MultipartPart',
    'ResponseHandler',
]
