"""
Video upload negotiation.

Asks upload/video/ for the per-chunk destinations of a new upload.
"""
from typing import List

from ..models import InstaVideo, UploadDestination, UploadSession
from ...api.endpoints import EndpointCatalog
from ...api.request import MultipartPart, RequestBuilder, RequestHandler
from ...constants import VIDEO_CHUNK_COUNT
from ...device import DeviceIdentity
from ...models import VideoUploadUrls
from ...results import Result, ResultKind
from ...logging import get_logger


class VideoNegotiator:
    """Negotiates chunk destinations for one upload session."""

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        endpoints: EndpointCatalog,
        device: DeviceIdentity
    ):
        self._handler = handler
        self._builder = builder
        self._endpoints = endpoints
        self._device = device
        self._logger = get_logger('igmobile.upload.negotiation')

    def build_request(
        self,
        session: UploadSession,
        video: InstaVideo,
        csrf_token: str,
        duration_ms: int,
        timeline: bool = True
    ):
        parts = [
            MultipartPart('upload_id', session.upload_id),
            MultipartPart('_uuid', str(self._device.device_guid)),
            MultipartPart('_csrftoken', csrf_token),
            MultipartPart('media_type', str(video.media_type)),
        ]
        if timeline:
            parts.extend([
                MultipartPart('upload_media_duration_ms', str(duration_ms)),
                MultipartPart('upload_media_height', str(video.height)),
                MultipartPart('upload_media_width', str(video.width)),
            ])
        return self._builder.build_multipart_request(
            self._endpoints.upload_video(), self._device, parts, boundary=session.upload_id
        )

    async def negotiate(
        self,
        session: UploadSession,
        video: InstaVideo,
        csrf_token: str,
        duration_ms: int,
        timeline: bool = True
    ) -> Result[List[UploadDestination]]:
        """
        Request chunk destinations.

        Args:
            session: Upload session (upload id)
            video: Video being uploaded
            csrf_token: Current csrf token
            duration_ms: Video duration sent for timeline uploads
            timeline: False for stories (no duration/size fields)

        Returns:
            Result with one destination per chunk index
        """
        request = self.build_request(session, video, csrf_token, duration_ms, timeline)
        decoded = await self._handler.fetch(request, VideoUploadUrls.from_dict)
        if not decoded.succeeded:
            return decoded.forward()

        urls = decoded.value.urls
        usable = [entry for entry in urls[:VIDEO_CHUNK_COUNT] if entry.url and entry.job]
        if len(usable) < VIDEO_CHUNK_COUNT:
            self._logger.error(f"Negotiation returned {len(urls)} upload urls, {len(usable)} usable")
            return Result.fail(
                f"Negotiation returned {len(usable)} usable upload urls, {VIDEO_CHUNK_COUNT} required",
                kind=ResultKind.PROTOCOL
            )

        destinations = [UploadDestination(entry.url, entry.job) for entry in urls]
        self._logger.debug(f"Upload {session.upload_id}: {len(destinations)} destinations")
        return Result.success(destinations)
