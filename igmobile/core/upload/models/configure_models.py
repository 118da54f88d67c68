"""
Configure payloads.

Signed bodies for media/configure/ and media/configure_to_story/.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ...api.payloads import AuthenticatedPayload
from ...device import DeviceIdentity
from ...exceptions import InvalidArgumentError


@dataclass
class DevicePayload:
    manufacturer: str
    model: str
    android_version: str
    android_release: str

    @classmethod
    def from_device(cls, device: DeviceIdentity) -> 'DevicePayload':
        """
        Raises:
            InvalidArgumentError: If the fingerprint's Android release is unknown
        """
        version = device.android_version
        if version is None:
            raise InvalidArgumentError("Unsupported android version")
        # version number and api level, in this order
        return cls(
            manufacturer=device.hardware_manufacturer,
            model=device.hardware_model,
            android_version=version.version_number,
            android_release=version.api_level,
        )


@dataclass
class PhotoEdits:
    crop_original_size: List[int]
    crop_center: List[float] = field(default_factory=lambda: [0.0, -0.0])
    crop_zoom: int = 1


@dataclass
class SourceSize:
    source_width: int
    source_height: int


@dataclass
class ConfigurePhotoPayload(AuthenticatedPayload):
    caption: str
    upload_id: str
    device: DevicePayload
    edits: PhotoEdits
    extra: SourceSize
    media_folder: str = 'Camera'
    source_type: str = '4'


@dataclass
class ConfigureStoryPhotoPayload(AuthenticatedPayload):
    caption: str
    upload_id: str
    source_type: str = '1'
    edits: Dict[str, Any] = field(default_factory=dict)
    disable_comments: bool = False
    configure_mode: int = 1
    camera_position: str = 'unknown'


@dataclass
class VideoClip:
    length: float
    original_length: float
    cinema: str = 'unsupported'
    source_type: str = 'camera'
    start_time: int = 0
    trim_type: int = 0
    camera_position: str = 'back'


@dataclass
class ConfigureVideoPayload(AuthenticatedPayload):
    caption: str
    upload_id: str
    duration: float
    length: float
    client_timestamp: str
    device: DevicePayload
    clips: List[VideoClip]
    video_result: str = 'deprecated'
    audio_muted: bool = False
    trim_type: int = 0
    source_type: str = 'camera'
    mas_opt_in: str = 'NOT_PROMPTED'
    disable_comments: bool = False
    filter_type: int = 0
    poster_frame_index: int = 0
    geotag_enabled: bool = False
    camera_position: str = 'unknown'
    edits: Dict[str, Any] = field(default_factory=lambda: {'filter_strength': 1})


@dataclass
class ConfigureStoryVideoPayload(AuthenticatedPayload):
    upload_id: str
    length: float
    device: DevicePayload
    extra: SourceSize
    story_media_creation_date: int
    client_shared_at: int
    client_timestamp: int
    caption: str = ''
    video_result: str = 'deprecated'
    poster_frame_index: int = 0
    audio_muted: bool = False
    filter_type: int = 0
    source_type: str = '4'
    configure_mode: int = 1
