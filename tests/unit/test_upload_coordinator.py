"""
Unit tests for the upload coordinator.

Drives complete photo and video uploads through a scripted transport.
"""
import asyncio
import json
import random
from dataclasses import replace

import pytest

from igmobile.core.api import HttpResponse
from igmobile.core.exceptions import TransportError, UnexpectedStatusError
from igmobile.core.results import ResultKind
from igmobile.core.upload import (
    AsyncMediaReader,
    InstaImage,
    InstaVideo,
    UploadCoordinator,
    UploadProgress,
    UploadSession,
    UploadState,
)

NOW = 1500000000.0
UPLOAD_ID = '1500000000000'
VIDEO = b'\x01' * 500000

NEGOTIATED = {
    'status': 'ok',
    'upload_id': UPLOAD_ID,
    'video_upload_urls': [
        {'url': 'https://upload.example/0', 'job': 'job-0', 'expires': 1.0},
        {'url': 'https://upload.example/1', 'job': 'job-1', 'expires': 1.0},
    ],
}
CONFIGURED = {'status': 'ok', 'media': {'pk': 999, 'id': '999_42', 'media_type': 2}}


def _signed_payload(request):
    envelope = dict(request.body.fields)['signed_body']
    return json.loads(envelope.split('.', 1)[1])


def _parts(request):
    return {part.name: part for part in request.body.parts}


class TimingOutSession:
    """HTTP session whose requests never finish in time."""

    def get(self, url):
        raise asyncio.TimeoutError()


@pytest.fixture
def progress():
    return []


@pytest.fixture
def coordinator(handler, builder, endpoints, device, logged_in_session, progress):
    return UploadCoordinator(
        handler,
        builder,
        endpoints,
        device,
        logged_in_session,
        progress_callback=lambda p: progress.append((p.state, p.uploaded_chunks)),
        clock=lambda: NOW,
        rng=random.Random(3),
    )


@pytest.fixture
def video():
    return InstaVideo(width=720, height=1280, data=VIDEO)


@pytest.fixture
def thumbnail():
    return InstaImage(width=720, height=1280, data=b'\xff\xd8thumb')


class TestVideoUpload:
    """Tests for timeline video uploads."""

    @pytest.mark.asyncio
    async def test_happy_path_request_sequence(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok', 'upload_id': UPLOAD_ID}),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_video(video, thumbnail, caption='hi')

        assert result.succeeded
        assert result.value.pk == '999'
        uris = [call.uri for call in transport.calls]
        assert uris[0].endswith('upload/video/')
        assert uris[1] == 'https://upload.example/0'
        assert uris[2] == 'https://upload.example/1'
        assert uris[3].endswith('upload/photo/')
        assert uris[4].endswith('media/configure/?video=1')

    @pytest.mark.asyncio
    async def test_negotiation_fields(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(make_response({'video_upload_urls': []}))

        await coordinator.upload_video(video, thumbnail)

        parts = _parts(transport.calls[0])
        assert parts['upload_id'].data == UPLOAD_ID
        assert parts['_csrftoken'].data == 'csrf123'
        assert parts['media_type'].data == '2'
        assert parts['upload_media_duration_ms'].data == '22400'
        assert parts['upload_media_width'].data == '720'
        assert parts['upload_media_height'].data == '1280'

    @pytest.mark.asyncio
    async def test_chunk_requests(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok'}),
            make_response(CONFIGURED),
        )

        await coordinator.upload_video(video, thumbnail)

        first, second = transport.calls[1], transport.calls[2]
        session_id = first.header('Session-ID')
        assert session_id.startswith(UPLOAD_ID + '-')
        assert second.header('Session-ID') == session_id
        assert first.header('job') == 'job-0'
        assert second.header('job') == 'job-1'

        first_video = _parts(first)['video']
        second_video = _parts(second)['video']
        assert dict(first_video.headers)['Content-Range'] == 'bytes 0-204799/500000'
        assert dict(second_video.headers)['Content-Range'] == 'bytes 204800-499999/500000'
        assert dict(first_video.headers)['Content-Type'] == 'application/octet-stream'
        assert len(first_video.data) == 204800
        assert len(second_video.data) == 295200
        assert first_video.filename == f'pending_media_{UPLOAD_ID}.mp4'
        assert _parts(first)['Session-ID'].data == session_id
        assert _parts(second)['job'].data == 'job-1'

    @pytest.mark.asyncio
    async def test_chunk_zero_failure_stops_upload(self, coordinator, transport, make_response, video, thumbnail, progress):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(500, b'chunk rejected'),
        )

        result = await coordinator.upload_video(video, thumbnail)

        assert not result.succeeded
        assert result.kind == ResultKind.UNEXPECTED_STATUS
        assert result.info.status_code == 500
        assert result.info.body == 'chunk rejected'
        assert isinstance(result.info.exception, UnexpectedStatusError)
        chunk_calls = [c for c in transport.calls if c.uri.startswith('https://upload.example/')]
        assert len(chunk_calls) == 1
        assert len(transport.calls) == 2
        assert progress[-1][0] == UploadState.FAILED

    @pytest.mark.asyncio
    async def test_thumbnail_failure_does_not_block_configure(self, coordinator, transport, make_response, video, thumbnail, progress):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            HttpResponse(500, b'thumbnail rejected'),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_video(video, thumbnail)

        assert result.succeeded
        assert transport.calls[-1].uri.endswith('media/configure/?video=1')
        assert progress[-1][0] == UploadState.DONE

    @pytest.mark.asyncio
    async def test_progress_states(self, coordinator, transport, make_response, video, thumbnail, progress):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok'}),
            make_response(CONFIGURED),
        )

        await coordinator.upload_video(video, thumbnail)

        assert progress == [
            (UploadState.NEGOTIATING, 0),
            (UploadState.CHUNK_UPLOADING, 0),
            (UploadState.CHUNK_UPLOADING, 1),
            (UploadState.CHUNK_UPLOADING, 2),
            (UploadState.THUMBNAIL_UPLOADING, 2),
            (UploadState.CONFIGURING, 2),
            (UploadState.DONE, 2),
        ]

    @pytest.mark.asyncio
    async def test_configure_payload(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok'}),
            make_response(CONFIGURED),
        )

        await coordinator.upload_video(video, thumbnail, caption='hello')

        payload = _signed_payload(transport.calls[-1])
        assert payload['upload_id'] == UPLOAD_ID
        assert payload['caption'] == 'hello'
        assert payload['_uid'] == '42'
        assert payload['_csrftoken'] == 'csrf123'
        assert payload['video_result'] == 'deprecated'
        assert payload['duration'] == 22.4
        assert payload['client_timestamp'] == '1500000000'
        assert payload['device']['android_version'] == '7.1'
        assert payload['device']['android_release'] == '25'
        assert payload['clips'][0]['length'] == 22.4
        assert payload['edits'] == {'filter_strength': 1}

    @pytest.mark.asyncio
    async def test_negotiation_without_two_destinations(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(make_response({'video_upload_urls': [{'url': 'https://upload.example/0', 'job': 'j'}]}))

        result = await coordinator.upload_video(video, thumbnail)

        assert not result.succeeded
        assert result.kind == ResultKind.PROTOCOL
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_video_exactly_one_chunk(self, coordinator, transport, make_response, thumbnail):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok'}),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_video(InstaVideo(width=1, height=1, data=b'\x02' * 204800), thumbnail)

        assert result.succeeded
        first_video = _parts(transport.calls[1])['video']
        second_video = _parts(transport.calls[2])['video']
        assert len(first_video.data) == 204800
        assert second_video.data == b''
        assert dict(second_video.headers)['Content-Range'] == 'bytes 204800-204799/204800'

    @pytest.mark.asyncio
    async def test_video_shorter_than_one_chunk(self, coordinator, transport, thumbnail):
        result = await coordinator.upload_video(InstaVideo(width=1, height=1, data=b'\x00' * 1000), thumbnail)

        assert not result.succeeded
        assert result.kind == ResultKind.INVALID_ARGUMENT
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_remote_video_timeout(self, handler, builder, endpoints, device, logged_in_session, transport):
        reader = AsyncMediaReader(session=TimingOutSession())
        coordinator = UploadCoordinator(handler, builder, endpoints, device, logged_in_session, media_reader=reader)

        result = await coordinator.upload_video(InstaVideo(uri='https://cdn.example/v.mp4'))

        assert not result.succeeded
        assert result.kind == ResultKind.TRANSPORT
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_progress_complete_after_last_chunk(self, handler, builder, endpoints, device, logged_in_session, transport, make_response, video):
        snapshots = []
        coordinator = UploadCoordinator(
            handler, builder, endpoints, device, logged_in_session,
            progress_callback=lambda p: snapshots.append((p.state, p.uploaded_chunks, p.is_complete)),
        )
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_video(video)

        assert result.succeeded
        chunk_updates = [s for s in snapshots if s[0] == UploadState.CHUNK_UPLOADING]
        assert [s[2] for s in chunk_updates] == [False, False, True]
        assert snapshots[-1] == (UploadState.DONE, 2, True)

    @pytest.mark.asyncio
    async def test_no_thumbnail_skips_photo_upload(self, coordinator, transport, make_response, video):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_video(video)

        assert result.succeeded
        assert not any(c.uri.endswith('upload/photo/') for c in transport.calls)


class TestStoryVideoUpload:
    """Tests for story video uploads."""

    @pytest.mark.asyncio
    async def test_story_sequence_and_payload(self, coordinator, transport, make_response, video, thumbnail):
        transport.queue(
            make_response(NEGOTIATED),
            HttpResponse(200, b'{}'),
            HttpResponse(200, b'{}'),
            make_response({'status': 'ok'}),
            make_response(CONFIGURED),
        )

        result = await coordinator.upload_story_video(video, thumbnail)

        assert result.succeeded
        assert 'upload_media_duration_ms' not in _parts(transport.calls[0])
        assert transport.calls[-1].uri.endswith('media/configure_to_story/?video=1')
        payload = _signed_payload(transport.calls[-1])
        assert payload['source_type'] == '4'
        assert payload['configure_mode'] == 1
        assert payload['extra'] == {'source_width': 720, 'source_height': 1280}
        assert 1500000000 - 20 <= payload['story_media_creation_date'] <= 1500000000 - 10
        assert 1500000000 - 10 <= payload['client_shared_at'] <= 1500000000 - 3
        assert payload['client_timestamp'] == 1500000000


class TestPhotoUpload:
    """Tests for photo uploads."""

    @pytest.mark.asyncio
    async def test_photo_upload_and_configure(self, coordinator, transport, make_response):
        transport.queue(
            make_response({'status': 'ok', 'upload_id': UPLOAD_ID}),
            make_response({'status': 'ok', 'media': {'pk': 5, 'id': '5_42'}}),
        )
        image = InstaImage(width=640, height=480, data=b'\xff\xd8jpeg')

        result = await coordinator.upload_photo(image, caption='pic')

        assert result.succeeded
        assert result.value.pk == '5'
        upload, configure = transport.calls
        parts = _parts(upload)
        assert parts['upload_id'].data == UPLOAD_ID
        assert parts['photo'].filename == f'pending_media_{UPLOAD_ID}.jpg'
        assert json.loads(parts['image_compression'].data)['quality'] == '87'
        assert configure.uri.endswith('media/configure/')
        payload = _signed_payload(configure)
        assert payload['edits']['crop_original_size'] == [640, 480]
        assert payload['extra'] == {'source_width': 640, 'source_height': 480}
        assert payload['media_folder'] == 'Camera'

    @pytest.mark.asyncio
    async def test_failed_photo_upload_skips_configure(self, coordinator, transport, make_response):
        transport.queue(make_response({'status': 'fail'}, status=400))

        result = await coordinator.upload_photo(InstaImage(width=1, height=1, data=b'x'))

        assert not result.succeeded
        assert result.kind == ResultKind.UNEXPECTED_STATUS
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_story_photo_payload(self, coordinator, transport, make_response):
        transport.queue(
            make_response({'status': 'ok'}),
            make_response({'status': 'ok', 'media': {'pk': 6, 'id': '6_42'}}),
        )

        result = await coordinator.upload_story_photo(InstaImage(width=1, height=1, data=b'x'))

        assert result.succeeded
        assert transport.calls[-1].uri.endswith('media/configure_to_story/')
        payload = _signed_payload(transport.calls[-1])
        assert payload['source_type'] == '1'
        assert payload['camera_position'] == 'unknown'

    @pytest.mark.asyncio
    async def test_unknown_android_version(self, handler, builder, endpoints, device, logged_in_session, transport, make_response):
        odd_device = replace(device, firmware_fingerprint='vendor/x/x:99.0/B/1:user/release-keys')
        coordinator = UploadCoordinator(handler, builder, endpoints, odd_device, logged_in_session)
        transport.queue(make_response({'status': 'ok'}))

        result = await coordinator.upload_photo(InstaImage(width=1, height=1, data=b'x'))

        assert not result.succeeded
        assert result.kind == ResultKind.INVALID_ARGUMENT
        assert result.message == "Unsupported android version"
        assert len(transport.calls) == 1

    @pytest.mark.asyncio
    async def test_missing_local_file(self, coordinator, transport, tmp_path):
        result = await coordinator.upload_photo(InstaImage(uri=str(tmp_path / 'missing.jpg')))

        assert result.kind == ResultKind.INVALID_ARGUMENT
        assert transport.calls == []

    @pytest.mark.asyncio
    async def test_local_file_dimensions_from_pillow(self, coordinator, transport, make_response, tmp_path):
        from PIL import Image

        path = tmp_path / 'photo.jpg'
        Image.new('RGB', (32, 16)).save(path, format='JPEG')
        transport.queue(
            make_response({'status': 'ok'}),
            make_response({'status': 'ok', 'media': {'pk': 7, 'id': '7_42'}}),
        )

        result = await coordinator.upload_photo(InstaImage(uri=str(path)))

        assert result.succeeded
        assert _signed_payload(transport.calls[-1])['edits']['crop_original_size'] == [32, 16]


class TestMediaReader:
    """Remote media download failures."""

    @pytest.mark.asyncio
    async def test_download_timeout_is_transport_error(self):
        reader = AsyncMediaReader(session=TimingOutSession())

        with pytest.raises(TransportError):
            await reader.read('https://cdn.example/v.mp4')


class TestTransitions:
    """Session state changes."""

    def test_failed_is_terminal(self, coordinator, progress):
        session = UploadSession('1', '1-000000000', state=UploadState.FAILED)
        snapshot = UploadProgress(UploadState.FAILED, total_chunks=2)

        coordinator._transition(session, UploadState.DONE, snapshot)

        assert session.is_failed
        assert snapshot.state == UploadState.FAILED
        assert progress == []
