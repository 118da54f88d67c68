"""Upload data models."""
from .upload_models import (
    InstaImage,
    InstaVideo,
    ChunkRange,
    UploadDestination,
    UploadState,
    UploadSession,
    UploadProgress,
)
from .configure_models import (
    DevicePayload,
    PhotoEdits,
    SourceSize,
    ConfigurePhotoPayload,
    ConfigureStoryPhotoPayload,
    VideoClip,
    ConfigureVideoPayload,
    ConfigureStoryVideoPayload,
)

__all__ = [
    'InstaImage',
    'InstaVideo',
    'ChunkRange',
    'UploadDestination',
    'UploadState',
    'UploadSession',
    'UploadProgress',
    'DevicePayload',
    'PhotoEdits',
    'SourceSize',
    'ConfigurePhotoPayload',
    'ConfigureStoryPhotoPayload',
    'VideoClip',
    'ConfigureVideoPayload',
    'ConfigureStoryVideoPayload',
]
