"""
Upload coordinator.

Orchestrates photo and video uploads using injected services.

Video uploads run a fixed sequence of states:

    NEGOTIATING -> CHUNK_UPLOADING -> THUMBNAIL_UPLOADING -> CONFIGURING -> DONE

Any failure moves the session to FAILED and ends the call. A thumbnail
failure is the one exception: it is logged and configure still runs.
"""
import random
import time
from typing import Callable, List, Optional

from .models import (
    InstaImage,
    InstaVideo,
    ChunkRange,
    UploadSession,
    UploadState,
    UploadProgress,
)
from .protocols import ChunkingStrategy, MediaReaderProtocol
from .strategies import TwoPartChunkingStrategy
from .services import (
    AsyncMediaReader,
    PhotoUploader,
    VideoNegotiator,
    ChunkUploader,
    MediaConfigurator,
    image_dimensions,
    read_mp4_duration_ms,
)
from ..api.config import UploadConfig
from ..api.endpoints import EndpointCatalog
from ..api.request import RequestBuilder, RequestHandler
from ..device import DeviceIdentity
from ..exceptions import IgException
from ..models import MediaItem
from ..results import Result
from ..session import SessionState
from ..logging import get_logger

logger = get_logger('igmobile.upload.coordinator')

ProgressCallback = Callable[[UploadProgress], None]


def generate_upload_id(clock: Callable[[], float] = time.time) -> str:
    """Upload id: current epoch time in milliseconds."""
    return str(int(clock() * 1000))


def generate_session_id(upload_id: str, rng: Optional[random.Random] = None) -> str:
    """Chunk session id: '{upload_id}-' followed by 9 random digits."""
    rng = rng or random.Random()
    return f"{upload_id}-" + ''.join(str(rng.randint(0, 9)) for _ in range(9))


class UploadCoordinator:
    """
    Coordinates media uploads.

    Uses dependency injection for all components, making it:
    - Testable (fake transport, fixed clock and rng)
    - Extensible (swap chunking strategy or media reader)

    Every call builds its own UploadSession; nothing is shared between
    calls.
    """

    def __init__(
        self,
        handler: RequestHandler,
        builder: RequestBuilder,
        endpoints: EndpointCatalog,
        device: DeviceIdentity,
        session: SessionState,
        config: Optional[UploadConfig] = None,
        chunking_strategy: Optional[ChunkingStrategy] = None,
        media_reader: Optional[MediaReaderProtocol] = None,
        progress_callback: Optional[ProgressCallback] = None,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize upload coordinator.

        Args:
            handler: Request handler
            builder: Request builder
            endpoints: Endpoint catalog
            device: Device identity
            session: Session state (read only)
            config: Upload settings
            chunking_strategy: Strategy for splitting videos
            media_reader: Loads media bytes
            progress_callback: Called on every state change and chunk
            clock: Time source (seconds)
            rng: Random source for session ids and story timestamps
        """
        self._session = session
        self._config = config or UploadConfig()
        self._chunking = chunking_strategy or TwoPartChunkingStrategy(self._config.chunk_size)
        self._reader = media_reader or AsyncMediaReader()
        self._progress_callback = progress_callback
        self._clock = clock
        self._rng = rng or random.Random()

        self._photos = PhotoUploader(handler, builder, endpoints, device, self._config)
        self._negotiator = VideoNegotiator(handler, builder, endpoints, device)
        self._chunks = ChunkUploader(handler, builder, device)
        self._configurator = MediaConfigurator(
            handler, builder, endpoints, device, session, clock=clock, rng=self._rng
        )

    async def close(self) -> None:
        close = getattr(self._reader, 'close', None)
        if close:
            await close()

    def _new_session(self) -> UploadSession:
        upload_id = generate_upload_id(self._clock)
        return UploadSession(upload_id, generate_session_id(upload_id, self._rng))

    def _notify(self, progress: UploadProgress) -> None:
        if self._progress_callback:
            self._progress_callback(progress)

    def _transition(self, session: UploadSession, state: UploadState, progress: UploadProgress) -> None:
        if session.is_failed:
            # FAILED is terminal
            return
        logger.debug(f"Upload {session.upload_id}: {session.state.value} -> {state.value}")
        session.state = state
        progress.state = state
        self._notify(progress)

    def _fail(self, session: UploadSession, progress: UploadProgress, result: Result) -> Result:
        session.failure = result.message
        logger.error(f"Upload {session.upload_id} failed while {session.state.value}: {result.message}")
        self._transition(session, UploadState.FAILED, progress)
        return result.forward()

    # Photos

    async def _load_image(self, image: InstaImage) -> bytes:
        data = await self._reader.read(image.uri, image.data)
        if not image.width or not image.height:
            image.width, image.height = image_dimensions(data)
        return data

    async def _upload_image(self, image: InstaImage) -> Result[str]:
        try:
            data = await self._load_image(image)
        except IgException as e:
            return Result.from_exception(e)

        upload_id = generate_upload_id(self._clock)
        logger.info(f"Uploading photo {upload_id} ({len(data) / 1024:.1f} KB)")
        uploaded = await self._photos.upload(upload_id, data, self._session.csrf_token)
        if not uploaded.succeeded:
            logger.error(f"Photo upload {upload_id} failed: {uploaded.message}")
            return uploaded.forward()
        return Result.success(upload_id)

    async def upload_photo(self, image: InstaImage, caption: str = '') -> Result[MediaItem]:
        """
        Upload and configure a timeline photo.

        Args:
            image: Image to upload
            caption: Post caption

        Returns:
            Result with the created media
        """
        uploaded = await self._upload_image(image)
        if not uploaded.succeeded:
            return uploaded.forward()
        return await self._configurator.configure_photo(uploaded.value, image, caption)

    async def upload_story_photo(self, image: InstaImage, caption: str = '') -> Result[MediaItem]:
        """Upload a photo and configure it as a story."""
        uploaded = await self._upload_image(image)
        if not uploaded.succeeded:
            return uploaded.forward()
        return await self._configurator.configure_story_photo(uploaded.value, caption)

    # Videos

    async def _upload_thumbnail(self, session: UploadSession, thumbnail: Optional[InstaImage]) -> None:
        if thumbnail is None:
            logger.debug(f"Upload {session.upload_id}: no thumbnail")
            return
        try:
            data = await self._load_image(thumbnail)
        except IgException as e:
            logger.warning(f"Upload {session.upload_id}: thumbnail skipped: {e}")
            return
        uploaded = await self._photos.upload(session.upload_id, data, self._session.csrf_token)
        if not uploaded.succeeded:
            logger.warning(f"Upload {session.upload_id}: thumbnail upload failed: {uploaded.message}")

    async def _upload_video(
        self,
        video: InstaVideo,
        thumbnail: Optional[InstaImage],
        caption: str,
        story: bool
    ) -> Result[MediaItem]:
        try:
            data = await self._reader.read(video.uri, video.data)
            chunks: List[ChunkRange] = self._chunking.calculate_chunks(len(data))
        except IgException as e:
            return Result.from_exception(e)

        duration_ms = video.duration_ms or read_mp4_duration_ms(data) or self._config.default_video_duration_ms
        session = self._new_session()
        progress = UploadProgress(session.state, total_chunks=len(chunks), total_bytes=len(data))
        logger.info(
            f"Uploading video {session.upload_id} ({len(data) / 1024:.1f} KB, "
            f"{len(chunks)} chunks, {duration_ms} ms)"
        )
        self._notify(progress)

        negotiated = await self._negotiator.negotiate(
            session, video, self._session.csrf_token, duration_ms, timeline=not story
        )
        if not negotiated.succeeded:
            return self._fail(session, progress, negotiated)
        session.destinations = negotiated.value

        self._transition(session, UploadState.CHUNK_UPLOADING, progress)

        def on_chunk(chunk: ChunkRange) -> None:
            progress.uploaded_chunks += 1
            progress.uploaded_bytes += chunk.size
            if progress.is_complete:
                logger.debug(f"Upload {session.upload_id}: all {progress.total_chunks} chunks acknowledged")
            self._notify(progress)

        sent = await self._chunks.upload_all(session, chunks, data, on_chunk=on_chunk)
        if not sent.succeeded:
            return self._fail(session, progress, sent)

        self._transition(session, UploadState.THUMBNAIL_UPLOADING, progress)
        await self._upload_thumbnail(session, thumbnail)

        self._transition(session, UploadState.CONFIGURING, progress)
        if story:
            configured = await self._configurator.configure_story_video(
                session.upload_id, video, duration_ms, caption
            )
        else:
            configured = await self._configurator.configure_video(session.upload_id, video, duration_ms, caption)
        if not configured.succeeded:
            return self._fail(session, progress, configured)

        self._transition(session, UploadState.DONE, progress)
        logger.info(f"Upload {session.upload_id} done: media {configured.value.pk}")
        return configured

    async def upload_video(
        self,
        video: InstaVideo,
        thumbnail: Optional[InstaImage] = None,
        caption: str = ''
    ) -> Result[MediaItem]:
        """
        Upload and configure a timeline video.

        Args:
            video: Video to upload (at least one chunk long)
            thumbnail: Cover image; failures here do not stop the upload
            caption: Post caption

        Returns:
            Result with the created media
        """
        return await self._upload_video(video, thumbnail, caption, story=False)

    async def upload_story_video(
        self,
        video: InstaVideo,
        thumbnail: Optional[InstaImage] = None,
        caption: str = ''
    ) -> Result[MediaItem]:
        """Upload a video and configure it as a story."""
        return await self._upload_video(video, thumbnail, caption, story=True)
