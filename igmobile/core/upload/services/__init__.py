"""Upload services."""
from .file_service import MediaValidator, AsyncMediaReader
from .media_info import image_dimensions, read_mp4_duration_ms
from .photo_service import PhotoUploader
from .negotiation_service import VideoNegotiator
from .chunk_service import ChunkUploader
from .configure_service import MediaConfigurator

__all__ = [
    'MediaValidator',
    'AsyncMediaReader',
    'image_dimensions',
    'read_mp4_duration_ms',
    'PhotoUploader',
    'VideoNegotiator',
    'ChunkUploader',
    'MediaConfigurator',
]
