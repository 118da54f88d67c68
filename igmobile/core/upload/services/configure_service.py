"""
Configure service.

Publishes uploaded media: builds the signed configure bodies for timeline
and story posts and decodes the created media.
"""
import random
import time
from typing import Callable, Optional

from ..models import (
    InstaImage,
    InstaVideo,
    DevicePayload,
    PhotoEdits,
    SourceSize,
    ConfigurePhotoPayload,
    ConfigureStoryPhotoPayload,
    VideoClip,
    ConfigureVideoPayload,
    ConfigureStoryVideoPayload,
)
from ...api.endpoints import EndpointCatalog
from ...api.request import RequestBuilder, RequestHandler
from ...device import DeviceIdentity
from ...exceptions import InvalidArgumentError
from ...models import MediaItem, decode_media
from ...results import Result
from ...session import SessionState
from ...logging import get_logger


class MediaConfigurator:
    """
    Configures uploaded media.

    Reads the csrf token and user id from the session; never writes it.
    """

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        endpoints: EndpointCatalog,
        device: DeviceIdentity,
        session: SessionState,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None
    ):
        self._handler = handler
        self._builder = builder
        self._endpoints = endpoints
        self._device = device
        self._session = session
        self._clock = clock
        self._rng = rng or random.Random()
        self._logger = get_logger('igmobile.upload.configure')

    def _auth_fields(self) -> dict:
        return {
            '_uuid': str(self._device.device_guid),
            '_uid': self._session.user_id,
            '_csrftoken': self._session.csrf_token,
        }

    def photo_payload(self, upload_id: str, image: InstaImage, caption: str) -> ConfigurePhotoPayload:
        """
        Raises:
            InvalidArgumentError: If the device's Android release is unknown
        """
        return ConfigurePhotoPayload(
            **self._auth_fields(),
            caption=caption,
            upload_id=upload_id,
            device=DevicePayload.from_device(self._device),
            edits=PhotoEdits(crop_original_size=[image.width, image.height]),
            extra=SourceSize(source_width=image.width, source_height=image.height),
        )

    def story_photo_payload(self, upload_id: str, caption: str) -> ConfigureStoryPhotoPayload:
        return ConfigureStoryPhotoPayload(
            **self._auth_fields(),
            caption=caption,
            upload_id=upload_id,
        )

    def video_payload(
        self,
        upload_id: str,
        video: InstaVideo,
        duration_ms: int,
        caption: str
    ) -> ConfigureVideoPayload:
        """
        Raises:
            InvalidArgumentError: If the device's Android release is unknown
        """
        seconds = duration_ms / 1000
        return ConfigureVideoPayload(
            **self._auth_fields(),
            caption=caption,
            upload_id=upload_id,
            duration=seconds,
            length=seconds,
            client_timestamp=str(int(self._clock())),
            device=DevicePayload.from_device(self._device),
            clips=[VideoClip(length=seconds, original_length=seconds)],
        )

    def story_video_payload(
        self,
        upload_id: str,
        video: InstaVideo,
        duration_ms: int,
        caption: str = ''
    ) -> ConfigureStoryVideoPayload:
        """
        Raises:
            InvalidArgumentError: If the device's Android release is unknown
        """
        now = int(self._clock())
        return ConfigureStoryVideoPayload(
            **self._auth_fields(),
            upload_id=upload_id,
            length=duration_ms / 1000,
            device=DevicePayload.from_device(self._device),
            extra=SourceSize(source_width=video.width, source_height=video.height),
            story_media_creation_date=now - self._rng.randint(10, 20),
            client_shared_at=now - self._rng.randint(3, 10),
            client_timestamp=now,
            caption=caption,
        )

    async def _configure(self, uri: str, payload) -> Result[MediaItem]:
        request = self._builder.build_signed_request('POST', uri, self._device, payload)
        result = await self._handler.fetch(request, decode_media)
        if not result.succeeded:
            self._logger.error(f"Configure {payload.upload_id} failed: {result.message}")
        return result

    async def configure_photo(self, upload_id: str, image: InstaImage, caption: str) -> Result[MediaItem]:
        try:
            payload = self.photo_payload(upload_id, image, caption)
        except InvalidArgumentError as e:
            return Result.from_exception(e)
        return await self._configure(self._endpoints.configure_photo(), payload)

    async def configure_story_photo(self, upload_id: str, caption: str) -> Result[MediaItem]:
        payload = self.story_photo_payload(upload_id, caption)
        return await self._configure(self._endpoints.configure_story_photo(), payload)

    async def configure_video(
        self,
        upload_id: str,
        video: InstaVideo,
        duration_ms: int,
        caption: str
    ) -> Result[MediaItem]:
        try:
            payload = self.video_payload(upload_id, video, duration_ms, caption)
        except InvalidArgumentError as e:
            return Result.from_exception(e)
        return await self._configure(self._endpoints.configure_video(), payload)

    async def configure_story_video(
        self,
        upload_id: str,
        video: InstaVideo,
        duration_ms: int,
        caption: str = ''
    ) -> Result[MediaItem]:
        try:
            payload = self.story_video_payload(upload_id, video, duration_ms, caption)
        except InvalidArgumentError as e:
            return Result.from_exception(e)
        return await self._configure(self._endpoints.configure_story_video(), payload)
