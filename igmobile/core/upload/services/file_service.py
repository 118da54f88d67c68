"""
Media validation and reading services.

Local files are read with aiofiles; http(s) sources are downloaded.
"""
import asyncio
from pathlib import Path
from typing import Optional, Tuple, Union

import aiofiles
import aiohttp

from ...exceptions import InvalidArgumentError, TransportError
from ...logging import get_logger


def is_remote(source: Union[str, Path]) -> bool:
    return isinstance(source, str) and source.lower().startswith(('http://', 'https://'))


class MediaValidator:
    """
    Validates local media before upload.

    Responsibilities:
    - Check file existence
    - Verify file is not a directory
    - Get file size
    """

    def validate(self, file_path: Union[str, Path]) -> Tuple[Path, int]:
        """
        Validate a local file for upload.

        Args:
            file_path: Path to the file

        Returns:
            Tuple of (validated Path, file size in bytes)

        Raises:
            InvalidArgumentError: If the file is missing or not a regular file
        """
        path = Path(file_path) if isinstance(file_path, str) else file_path

        if not path.exists():
            raise InvalidArgumentError(f"File not found: {path}")

        if not path.is_file():
            raise InvalidArgumentError(f"Path is not a file: {path}")

        return path, path.stat().st_size

    def validate_size(self, size: int) -> None:
        """
        Raises:
            InvalidArgumentError: If the media is empty
        """
        if size == 0:
            raise InvalidArgumentError("Cannot upload empty media")


class AsyncMediaReader:
    """
    Asynchronous media reader.

    Reuses one HTTP session for downloads; closes it only if it created it.
    """

    DEFAULT_TIMEOUT = 120

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        timeout: int = DEFAULT_TIMEOUT
    ):
        """
        Initialize media reader.

        Args:
            session: Optional shared session for downloads
            timeout: Download timeout in seconds
        """
        self._session = session
        self._owns_session = False
        self._timeout = timeout
        self._validator = MediaValidator()
        self._logger = get_logger('igmobile.upload.file')

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout)
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None

    async def read_file(self, file_path: Union[str, Path]) -> bytes:
        """
        Read an entire local file.

        Raises:
            InvalidArgumentError: If the file is missing, unreadable or empty
        """
        path, size = self._validator.validate(file_path)
        self._validator.validate_size(size)
        try:
            async with aiofiles.open(path, 'rb') as f:
                data = await f.read()
        except OSError as e:
            raise InvalidArgumentError(f"Cannot read {path}: {e}") from e
        self._logger.debug(f"Read {path.name} ({len(data)} bytes)")
        return data

    async def download(self, url: str) -> bytes:
        """
        Download remote media.

        Raises:
            InvalidArgumentError: If the download fails or returns no data
            TransportError: If the download times out
        """
        session = await self._get_session()
        try:
            async with session.get(url) as response:
                response.raise_for_status()
                data = await response.read()
        except asyncio.TimeoutError as e:
            raise TransportError(f"Download timed out: {url}") from e
        except aiohttp.ClientError as e:
            raise InvalidArgumentError(f"Cannot download {url}: {e}") from e
        self._validator.validate_size(len(data))
        self._logger.debug(f"Downloaded {url} ({len(data)} bytes)")
        return data

    async def read(self, source: Union[str, Path], data: Optional[bytes] = None) -> bytes:
        """
        Load media bytes from memory, a URL or a local path.

        Raises:
            InvalidArgumentError: If the media cannot be read or is empty
            TransportError: If a remote download times out
        """
        if data is not None:
            self._validator.validate_size(len(data))
            return data
        if not source:
            raise InvalidArgumentError("Media has neither data nor uri")
        if is_remote(source):
            return await self.download(source)
        return await self.read_file(source)
