"""Mobile API: configuration, transport, requests, endpoints and auth."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, UploadConfig
from .transport import Transport, HttpResponse, AiohttpTransport
from .endpoints import EndpointCatalog
from .request import (
    RequestHandler,
    RequestBuilder,
    RequestDescriptor,
    FormBody,
    SignedBody,
    MultipartBody,
    MultipartPart,
    ResponseHandler,
)
from .async_auth import AsyncAuthService

__all__ = [
    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'UploadConfig',

    # Transport
    'Transport',
    'HttpResponse',
    'AiohttpTransport',

    # Requests
    'EndpointCatalog',
    'RequestHandler',
    'RequestBuilder',
    'RequestDescriptor',
    'FormBody',
    'SignedBody',
    'MultipartBody',
    'MultipartPart',
    'ResponseHandler',

    # Auth
    'AsyncAuthService',
]
