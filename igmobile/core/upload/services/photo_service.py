"""
Photo upload service.

Sends image bytes to upload/photo/. Used for photos and for video
thumbnails (same upload id as the video).
"""
from typing import Optional

from ...api.config import UploadConfig
from ...api.endpoints import EndpointCatalog
from ...api.request import MultipartPart, RequestBuilder, RequestHandler
from ...device import DeviceIdentity
from ...models import PhotoUploadResponse
from ...results import Result
from ...logging import get_logger

BINARY_PART_HEADERS = (
    ('Content-Transfer-Encoding', 'binary'),
    ('Content-Type', 'application/octet-stream'),
)


class PhotoUploader:
    """Uploads one image per call."""

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        endpoints: EndpointCatalog,
        device: DeviceIdentity,
        config: Optional[UploadConfig] = None
    ):
        self._handler = handler
        self._builder = builder
        self._endpoints = endpoints
        self._device = device
        self._config = config or UploadConfig()
        self._logger = get_logger('igmobile.upload.photo')

    def build_request(self, upload_id: str, data: bytes, csrf_token: str):
        parts = [
            MultipartPart('upload_id', upload_id),
            MultipartPart('_uuid', str(self._device.device_guid)),
            MultipartPart('_csrftoken', csrf_token),
            MultipartPart('image_compression', self._config.image_compression),
            MultipartPart(
                'photo',
                data,
                filename=f"pending_media_{upload_id}.jpg",
                headers=BINARY_PART_HEADERS
            ),
        ]
        return self._builder.build_multipart_request(
            self._endpoints.upload_photo(), self._device, parts, boundary=upload_id
        )

    async def upload(self, upload_id: str, data: bytes, csrf_token: str) -> Result[PhotoUploadResponse]:
        """
        Upload image bytes under upload_id.

        Args:
            upload_id: Upload id shared with the configure call
            data: JPEG bytes
            csrf_token: Current csrf token

        Returns:
            Result[PhotoUploadResponse]
        """
        self._logger.debug(f"Uploading photo {upload_id} ({len(data)} bytes)")
        request = self.build_request(upload_id, data, csrf_token)
        return await self._handler.fetch(request, PhotoUploadResponse.from_dict)
