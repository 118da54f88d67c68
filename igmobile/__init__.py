"""
igmobile - Async Python client for a mobile app's private API.

Usage:
    >>> from igmobile import InstaClient
    >>>
    >>> async with InstaClient("someone", "secret") as client:
    ...     await client.login()
    ...     followers = await client.fetch_followers("someone", max_pages=3)
"""
import logging
from .client import InstaClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    UploadConfig,
    Transport,
    HttpResponse,
    AiohttpTransport,
)

# Results and errors
from .core.results import Result, ResultKind
from .core.exceptions import (
    IgException,
    PreconditionError,
    InvalidArgumentError,
    TransportError,
    UnexpectedStatusError,
    ProtocolError,
    DecodeError,
    SessionLockedError,
)

# Device and session management
from .core.device import DeviceIdentity, create_device
from .core.session import (
    SessionState,
    StateData,
    SessionStorage,
    SQLiteSession,
    MemorySession,
)

# Media
from .core.upload import InstaImage, InstaVideo, UploadProgress, UploadState
from .core.pagination import AggregatedPage, PageCursor

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for igmobile modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'igmobile',
        'igmobile.client',
        'igmobile.auth',
        'igmobile.request',
        'igmobile.response',
        'igmobile.transport',
        'igmobile.pagination',
        'igmobile.upload',
        'igmobile.upload.chunk',
        'igmobile.upload.file',
        'igmobile.upload.photo',
        'igmobile.upload.negotiation',
        'igmobile.upload.configure',
        'igmobile.upload.coordinator',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'InstaClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'UploadConfig',
    'Transport',
    'HttpResponse',
    'AiohttpTransport',
    'Result',
    'ResultKind',
    'IgException',
    'PreconditionError',
    'InvalidArgumentError',
    'TransportError',
    'UnexpectedStatusError',
    'ProtocolError',
    'DecodeError',
    'SessionLockedError',
    'DeviceIdentity',
    'create_device',
    'SessionState',
    'StateData',
    'SessionStorage',
    'SQLiteSession',
    'MemorySession',
    'InstaImage',
    'InstaVideo',
    'UploadProgress',
    'UploadState',
    'AggregatedPage',
    'PageCursor',
    'setup_logging',
]
