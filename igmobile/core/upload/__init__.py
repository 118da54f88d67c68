"""
Media upload module.

Photos: one multipart upload, then configure.
Videos: negotiate, two sequential chunks, thumbnail, configure.
"""
from .models import (
    InstaImage,
    InstaVideo,
    ChunkRange,
    UploadDestination,
    UploadState,
    UploadSession,
    UploadProgress,
)
from .strategies import BaseChunkingStrategy, TwoPartChunkingStrategy
from .services import read_mp4_duration_ms, image_dimensions, AsyncMediaReader
from .coordinator import UploadCoordinator, generate_upload_id, generate_session_id

__all__ = [
    'InstaImage',
    'InstaVideo',
    'ChunkRange',
    'UploadDestination',
    'UploadState',
    'UploadSession',
    'UploadProgress',
    'BaseChunkingStrategy',
    'TwoPartChunkingStrategy',
    'read_mp4_duration_ms',
    'image_dimensions',
    'AsyncMediaReader',
    'UploadCoordinator',
    'generate_upload_id',
    'generate_session_id',
]
