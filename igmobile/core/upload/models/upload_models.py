"""
Data models for upload module.

Media inputs, chunk ranges, the per-call upload session and progress.
"""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Set, Union

from ...constants import MEDIA_TYPE_VIDEO


@dataclass
class InstaImage:
    """
    Image to upload.

    Attributes:
        uri: Local path (or http(s) URL) of a JPEG
        width: Pixel width (read from the image when 0)
        height: Pixel height (read from the image when 0)
        data: Raw bytes, used instead of uri when given
    """
    uri: Union[str, Path] = ''
    width: int = 0
    height: int = 0
    data: Optional[bytes] = None


@dataclass
class InstaVideo:
    """
    Video to upload.

    Attributes:
        uri: Local path or http(s) URL of an MP4
        width: Pixel width
        height: Pixel height
        media_type: Media type sent at negotiation (2 for video)
        duration_ms: Duration; read from the MP4 header when None
        data: Raw bytes, used instead of uri when given
    """
    uri: Union[str, Path] = ''
    width: int = 0
    height: int = 0
    media_type: int = MEDIA_TYPE_VIDEO
    duration_ms: Optional[int] = None
    data: Optional[bytes] = None


@dataclass(frozen=True)
class ChunkRange:
    """
    Byte range of one chunk.

    Attributes:
        index: Chunk index
        start: First byte offset
        end: Offset after the last byte (exclusive)
        total_length: Size of the whole payload
    """
    index: int
    start: int
    end: int
    total_length: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start

    @property
    def content_range(self) -> str:
        """Content-Range header value ('bytes {start}-{last}/{total}')."""
        return f"bytes {self.start}-{self.end - 1}/{self.total_length}"

    def slice(self, data: bytes) -> bytes:
        return data[self.start:self.end]


@dataclass(frozen=True)
class UploadDestination:
    """Per-chunk destination from the negotiation response."""
    url: str
    job: str


class UploadState(str, Enum):
    """Video upload states. FAILED is absorbing."""
    NEGOTIATING = 'negotiating'
    CHUNK_UPLOADING = 'chunk_uploading'
    THUMBNAIL_UPLOADING = 'thumbnail_uploading'
    CONFIGURING = 'configuring'
    DONE = 'done'
    FAILED = 'failed'


@dataclass
class UploadSession:
    """
    State of one upload call. Never reused across calls.

    Attributes:
        upload_id: Client generated id (epoch milliseconds)
        session_id: '{upload_id}-' + 9 digits, shared by every chunk
        destinations: Chunk destinations by index
        acknowledged: Indexes of chunks the server accepted
        state: Current state
        failure: Reason, once FAILED
    """
    upload_id: str
    session_id: str
    destinations: List[UploadDestination] = field(default_factory=list)
    acknowledged: Set[int] = field(default_factory=set)
    state: UploadState = UploadState.NEGOTIATING
    failure: str = ''

    def destination(self, index: int) -> UploadDestination:
        return self.destinations[index]

    def acknowledge(self, index: int) -> None:
        self.acknowledged.add(index)

    @property
    def is_failed(self) -> bool:
        return self.state == UploadState.FAILED


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        state: Current upload state
        total_chunks: Total number of chunks
        uploaded_chunks: Number of acknowledged chunks
        total_bytes: Payload size
        uploaded_bytes: Bytes acknowledged so far
    """
    state: UploadState
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_bytes == 0:
            return 0.0
        return (self.uploaded_bytes / self.total_bytes) * 100

    @property
    def is_complete(self) -> bool:
        return self.uploaded_chunks >= self.total_chunks
