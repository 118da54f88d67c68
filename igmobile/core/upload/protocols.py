"""
Protocol definitions for upload module.

Interfaces for the pluggable parts of the upload pipeline.
"""
from pathlib import Path
from typing import Any, List, Optional, Protocol, Union

from .models import ChunkRange, UploadSession
from ..results import Result


class ChunkingStrategy(Protocol):
    """
    Protocol for payload chunking strategies.

    Allows different chunking algorithms to be plugged in.
    """

    def calculate_chunks(self, total_length: int) -> List[ChunkRange]:
        """
        Calculate chunk boundaries for a payload.

        Args:
            total_length: Payload size in bytes

        Returns:
            Ordered chunk ranges covering [0, total_length)
        """
        ...


class MediaReaderProtocol(Protocol):
    """Protocol for loading media bytes."""

    async def read(self, source: Union[str, Path], data: Optional[bytes] = None) -> bytes:
        """
        Load media bytes.

        Args:
            source: Local path or http(s) URL
            data: Bytes already in memory, returned as is

        Raises:
            InvalidArgumentError: If the media cannot be read or is empty
        """
        ...


class ChunkUploaderProtocol(Protocol):
    """Protocol for chunk upload operations."""

    async def upload_chunk(self, session: UploadSession, chunk: ChunkRange, data: bytes) -> Result[Any]:
        """
        Upload one chunk to the destination negotiated for its index.

        Returns:
            Result with the response; a non-success status is a failure
            carrying the raw response
        """
        ...
