"""
Chunk upload service.

Sends video chunks to the destinations negotiated for an upload session.
"""
import time
from typing import Any, Callable, List, Optional

from ..models import ChunkRange, UploadSession
from .photo_service import BINARY_PART_HEADERS
from ...api.request import MultipartPart, RequestBuilder, RequestHandler, ResponseHandler
from ...constants import COOKIE2_VALUE, HEADER_COOKIE2, HEADER_CONTENT_RANGE, HEADER_JOB, HEADER_SESSION_ID
from ...device import DeviceIdentity
from ...results import Result
from ...logging import get_logger


class ChunkUploader:
    """
    Uploads the chunks of one video, strictly in order.

    Responsibilities:
    - Send each chunk to its negotiated url/job
    - Stop at the first rejected chunk
    - Record acknowledged chunks on the session
    """

    def __init__(self, handler: RequestHandler, builder: RequestBuilder, device: DeviceIdentity):
        """
        Initialize chunk uploader.

        Args:
            handler: Request handler
            builder: Request builder
            device: Device identity
        """
        self._handler = handler
        self._builder = builder
        self._device = device
        self._logger = get_logger('igmobile.upload.chunk')

    def build_request(self, session: UploadSession, chunk: ChunkRange, data: bytes):
        destination = session.destination(chunk.index)
        parts = [
            MultipartPart(HEADER_COOKIE2, COOKIE2_VALUE),
            MultipartPart(HEADER_SESSION_ID, session.session_id),
            MultipartPart(HEADER_JOB, destination.job),
            MultipartPart(
                'video',
                data,
                filename=f"pending_media_{session.upload_id}.mp4",
                headers=BINARY_PART_HEADERS + ((HEADER_CONTENT_RANGE, chunk.content_range),)
            ),
        ]
        return self._builder.build_multipart_request(
            destination.url,
            self._device,
            parts,
            boundary=session.session_id,
            extra_headers=[
                (HEADER_SESSION_ID, session.session_id),
                (HEADER_JOB, destination.job),
            ]
        )

    async def upload_chunk(self, session: UploadSession, chunk: ChunkRange, data: bytes) -> Result[Any]:
        """
        Upload a single chunk.

        Args:
            session: Upload session with negotiated destinations
            chunk: Range being sent
            data: Chunk bytes (exactly chunk.size bytes)

        Returns:
            Result with the HttpResponse; a non-success status is a
            failure carrying the raw response
        """
        if len(data) != chunk.size:
            raise ValueError(f"Chunk {chunk.index} holds {len(data)} bytes, expected {chunk.size}")

        chunk_size_kb = chunk.size / 1024
        request = self.build_request(session, chunk, data)

        upload_start = time.time()
        self._logger.debug(f"Uploading chunk {chunk.index} ({chunk.content_range}, {chunk_size_kb:.1f} KB)")

        sent = await self._handler.execute(request)
        if not sent.succeeded:
            self._logger.error(f"Chunk {chunk.index} upload failed: {sent.message}")
            return sent.forward()

        checked = ResponseHandler.check_status(sent.value)
        upload_time = time.time() - upload_start
        if not checked.succeeded:
            self._logger.error(f"Chunk {chunk.index} rejected after {upload_time:.2f}s: status {sent.value.status}")
            return checked

        session.acknowledge(chunk.index)
        self._logger.debug(f"Chunk {chunk.index} uploaded in {upload_time:.2f}s")
        return checked

    async def upload_all(
        self,
        session: UploadSession,
        chunks: List[ChunkRange],
        data: bytes,
        on_chunk: Optional[Callable[[ChunkRange], None]] = None
    ) -> Result[Any]:
        """
        Upload chunks sequentially; chunk i+1 starts after chunk i is acknowledged.

        Returns:
            Result of the last chunk, or the first failure
        """
        result: Result[Any] = Result.success(None)
        for chunk in chunks:
            result = await self.upload_chunk(session, chunk, chunk.slice(data))
            if not result.succeeded:
                return result
            if on_chunk:
                on_chunk(chunk)
        return result
