"""
InstaClient - High-level async client for the mobile API.

Example:
    >>> async with InstaClient("someone", "secret") as client:
    ...     login = await client.login()
    ...     if login.succeeded:
    ...         feed = await client.fetch_feed(max_pages=2)
    ...         for media in feed.value:
    ...             print(media.code)
"""
import io
import uuid
from typing import Any, Awaitable, Callable, List, Optional, Tuple, TypeVar

from .core.api import (
    APIConfig,
    AiohttpTransport,
    AsyncAuthService,
    EndpointCatalog,
    RequestBuilder,
    RequestDescriptor,
    RequestHandler,
    ResponseHandler,
    Transport,
)
from .core.api.payloads import (
    AuthenticatedPayload,
    MediaPayload,
    FriendshipPayload,
    CommentPayload,
    EditMediaPayload,
    ChangePasswordPayload,
)
from .core.crypto import comment_breadcrumb
from .core.device import DeviceIdentity, create_device
from .core.exceptions import IgException, PreconditionError
from .core.models import (
    User,
    FriendshipStatus,
    MediaItem,
    Comment,
    DirectInbox,
    DirectThread,
    Recipients,
    Reel,
    StoryTray,
    StatusResponse,
    FeedResponse,
    UserListResponse,
    CommentListResponse,
    ActivityResponse,
    LikersResponse,
    SearchUsersResponse,
    DeleteMediaResponse,
    decode_user,
    decode_media,
)
from .core.pagination import AggregatedPage, Page, paginate
from .core.results import Result, ResultKind
from .core.session import MemorySession, SessionState, SessionStorage, StateData
from .core.upload import InstaImage, InstaVideo, UploadCoordinator, UploadProgress
from .core.logging import get_logger

T = TypeVar('T')

logger = get_logger('igmobile.client')


class InstaClient:
    """
    High-level async client.

    Every operation returns a Result. The only exception that escapes an
    operation is PreconditionError (missing credentials, not logged in),
    raised before anything is sent.

    With custom configuration:
        >>> config = APIConfig.with_proxy("http://127.0.0.1:8888")
        >>> client = InstaClient("someone", "secret", config=config)
    """

    def __init__(
        self,
        username: str = '',
        password: str = '',
        *,
        device: Optional[DeviceIdentity] = None,
        config: Optional[APIConfig] = None,
        transport: Optional[Transport] = None,
        storage: Optional[SessionStorage] = None,
        progress_callback: Optional[Callable[[UploadProgress], None]] = None
    ):
        """
        Initialize client.

        Args:
            username: Account user name
            password: Account password
            device: Device identity (a random catalog device when omitted)
            config: Optional API configuration
            transport: Transport (AiohttpTransport when omitted)
            storage: Where save_session/load_session keep state
            progress_callback: Called with UploadProgress during video uploads
        """
        self._config = config or APIConfig.default()
        self._device = device or create_device(app_version=self._config.app_version)
        self._session = SessionState(username=username, password=password)
        self._transport = transport or AiohttpTransport(self._config)
        self._storage = storage or MemorySession()
        self._progress_callback = progress_callback

        self._builder = RequestBuilder(self._config)
        self._endpoints = EndpointCatalog(self._config)
        self._handler = RequestHandler(self._transport)
        self._wire()

    def _wire(self) -> None:
        """(Re)create the services bound to the current device and session."""
        self._auth = AsyncAuthService(
            self._handler, self._builder, self._endpoints, self._device, self._session
        )
        self._uploads = UploadCoordinator(
            self._handler,
            self._builder,
            self._endpoints,
            self._device,
            self._session,
            config=self._config.upload,
            progress_callback=self._progress_callback,
        )

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def device(self) -> DeviceIdentity:
        return self._device

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def config(self) -> APIConfig:
        return self._config

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def __aenter__(self) -> 'InstaClient':
        """Enter async context - resumes a stored session if there is one."""
        if self._storage.exists():
            self.load_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._uploads.close()
        await self._transport.close()
        self._storage.close()

    # =========================================================================
    # State persistence
    # =========================================================================

    def _state_data(self) -> StateData:
        return StateData(
            device=self._device,
            is_authenticated=self._session.is_authenticated,
            session=self._session,
            cookies=self._transport.export_cookies(),
        )

    def _apply_state(self, data: StateData) -> None:
        self._device = data.device
        self._session = data.session
        self._session.is_authenticated = data.is_authenticated and data.session.logged_in_user is not None
        self._transport.import_cookies(data.cookies)
        self._wire()

    def get_state_data(self) -> io.BytesIO:
        """
        Snapshot device, session and cookies as one JSON record.

        Returns:
            BytesIO positioned at the start
        """
        stream = io.BytesIO(self._state_data().to_json().encode('utf-8'))
        stream.seek(0)
        return stream

    def load_state_data(self, stream: io.BytesIO) -> None:
        """
        Restore a record written by get_state_data.

        Raises:
            ValueError: If the stream does not hold a valid record
        """
        raw = stream.read()
        if isinstance(raw, bytes):
            raw = raw.decode('utf-8')
        self._apply_state(StateData.from_json(raw))
        logger.info(f"State loaded for {self._session.username or 'anonymous'}")

    def save_session(self) -> None:
        """Persist the current state to the configured storage."""
        data = self._state_data()
        data.update_timestamp()
        self._storage.save(data)

    def load_session(self) -> bool:
        """
        Restore state from the configured storage.

        Returns:
            True if a stored record was applied
        """
        data = self._storage.load()
        if data is None:
            return False
        self._apply_state(data)
        logger.info(f"Session resumed for {self._session.username or 'anonymous'}")
        return True

    # =========================================================================
    # Internals
    # =========================================================================

    def _require_login(self) -> None:
        self._session.ensure_credentials()
        self._session.ensure_authenticated()

    async def _boundary(self, operation: str, call: Awaitable[Result[T]]) -> Result[T]:
        """Await an operation body, converting escaped exceptions to a Result."""
        try:
            return await call
        except PreconditionError:
            raise
        except (IgException, ValueError) as e:
            logger.error(f"{operation} failed: {e}")
            return Result.from_exception(e)

    def _auth_fields(self) -> dict:
        return {
            '_uuid': str(self._device.device_guid),
            '_uid': self._session.user_id,
            '_csrftoken': self._session.csrf_token,
        }

    def _get(self, uri: str) -> RequestDescriptor:
        return self._builder.build_plain_request('GET', uri, self._device)

    def _signed(self, uri: str, payload: Any) -> RequestDescriptor:
        return self._builder.build_signed_request('POST', uri, self._device, payload)

    async def _status(self, request: RequestDescriptor) -> Result[bool]:
        decoded = await self._handler.fetch(request, StatusResponse.from_dict)
        if not decoded.succeeded:
            return decoded.forward()
        status: StatusResponse = decoded.value
        if not status.is_ok:
            return Result.fail(status.message or f"Status: {status.status}")
        return Result.success(True)

    async def _fetch_page(self, uri: str, decoder: Callable[[dict], Any]) -> Result[Page[Any]]:
        decoded = await self._handler.fetch(self._get(uri), decoder)
        return decoded.map(lambda response: response.to_page())

    async def _paginate(
        self,
        max_pages: int,
        uri_for: Callable[[Optional[str]], str],
        decoder: Callable[[dict], Any]
    ) -> Result[AggregatedPage[Any]]:
        """Drive pagination over one endpoint; uri_for(None) is the first page."""
        return await paginate(
            max_pages,
            lambda: self._fetch_page(uri_for(None), decoder),
            lambda token: self._fetch_page(uri_for(token), decoder),
        )

    async def _resolve_user_id(self, username: str) -> Result[str]:
        found = await self._find_user(username)
        return found.map(lambda user: user.pk)

    # =========================================================================
    # Authentication
    # =========================================================================

    async def login(self) -> Result[bool]:
        """
        Login with the configured credentials.

        Raises:
            PreconditionError: If user name or password is missing
        """
        self._session.ensure_credentials()
        return await self._boundary('login', self._auth.login())

    async def logout(self) -> Result[bool]:
        """
        Logout; on success the session is invalidated.

        Raises:
            PreconditionError: If not logged in
        """
        self._require_login()
        return await self._boundary('logout', self._auth.logout())

    # =========================================================================
    # Users
    # =========================================================================

    async def _find_user(self, username: str) -> Result[User]:
        decoded = await self._handler.fetch(
            self._get(self._endpoints.search_users(username)),
            SearchUsersResponse.from_dict
        )
        if not decoded.succeeded:
            return decoded.forward()
        user = decoded.value.find(username)
        if user is None:
            return Result.fail(f"Can't find this user: {username}")
        return Result.success(user)

    async def get_user(self, username: str) -> Result[User]:
        """Search users and return the exact user name match."""
        self._require_login()
        return await self._boundary('get_user', self._find_user(username))

    async def get_current_user(self) -> Result[User]:
        """Profile of the logged in user."""
        self._require_login()
        request = self._builder.build_plain_request(
            'POST', self._endpoints.current_user(), self._device, self._auth_fields()
        )
        return await self._boundary('get_current_user', self._handler.fetch(request, decode_user))

    async def get_friendship_status(self, user_id: str) -> Result[FriendshipStatus]:
        self._require_login()
        return await self._boundary(
            'get_friendship_status',
            self._handler.fetch(self._get(self._endpoints.friendship_status(user_id)), FriendshipStatus.from_dict)
        )

    async def follow(self, user_id: str) -> Result[FriendshipStatus]:
        self._require_login()
        request = self._signed(
            self._endpoints.follow_user(user_id),
            FriendshipPayload(**self._auth_fields(), user_id=str(user_id))
        )
        return await self._boundary('follow', self._handler.fetch(request, FriendshipStatus.from_dict))

    async def unfollow(self, user_id: str) -> Result[FriendshipStatus]:
        self._require_login()
        request = self._signed(
            self._endpoints.unfollow_user(user_id),
            FriendshipPayload(**self._auth_fields(), user_id=str(user_id))
        )
        return await self._boundary('unfollow', self._handler.fetch(request, FriendshipStatus.from_dict))

    # =========================================================================
    # Account
    # =========================================================================

    async def set_account_private(self) -> Result[User]:
        self._require_login()
        request = self._builder.build_plain_request(
            'POST', self._endpoints.set_account_private(), self._device, self._auth_fields()
        )
        return await self._boundary('set_account_private', self._handler.fetch(request, decode_user))

    async def set_account_public(self) -> Result[User]:
        self._require_login()
        request = self._builder.build_plain_request(
            'POST', self._endpoints.set_account_public(), self._device, self._auth_fields()
        )
        return await self._boundary('set_account_public', self._handler.fetch(request, decode_user))

    async def change_password(self, old_password: str, new_password: str) -> Result[bool]:
        """
        Change the account password.

        Returns:
            INVALID_ARGUMENT failure, without a request, when both are equal
        """
        self._require_login()
        if old_password == new_password:
            return Result.fail(
                "The old password should not the same of the new password",
                kind=ResultKind.INVALID_ARGUMENT
            )
        request = self._signed(
            self._endpoints.change_password(),
            ChangePasswordPayload(
                **self._auth_fields(),
                old_password=old_password,
                new_password1=new_password,
                new_password2=new_password,
            )
        )
        return await self._boundary('change_password', self._status(request))

    # =========================================================================
    # Media
    # =========================================================================

    async def get_media_by_id(self, media_id: str) -> Result[MediaItem]:
        self._require_login()
        return await self._boundary(
            'get_media_by_id',
            self._handler.fetch(self._get(self._endpoints.media_info(media_id)), decode_media)
        )

    async def get_media_likers(self, media_id: str) -> Result[LikersResponse]:
        self._require_login()
        return await self._boundary(
            'get_media_likers',
            self._handler.fetch(self._get(self._endpoints.media_likers(media_id)), LikersResponse.from_dict)
        )

    async def like(self, media_id: str) -> Result[bool]:
        self._require_login()
        request = self._signed(
            self._endpoints.like_media(media_id),
            MediaPayload(**self._auth_fields(), media_id=media_id)
        )
        return await self._boundary('like', self._status(request))

    async def unlike(self, media_id: str) -> Result[bool]:
        self._require_login()
        request = self._signed(
            self._endpoints.unlike_media(media_id),
            MediaPayload(**self._auth_fields(), media_id=media_id)
        )
        return await self._boundary('unlike', self._status(request))

    async def comment_media(self, media_id: str, text: str) -> Result[Comment]:
        self._require_login()
        request = self._signed(
            self._endpoints.post_comment(media_id),
            CommentPayload(
                **self._auth_fields(),
                user_breadcrumb=comment_breadcrumb(text),
                idempotence_token=str(uuid.uuid4()),
                comment_text=text,
            )
        )
        return await self._boundary('comment_media', self._handler.fetch(request, Comment.from_dict))

    async def delete_comment(self, media_id: str, comment_id: str) -> Result[bool]:
        self._require_login()
        request = self._signed(
            self._endpoints.delete_comment(media_id, comment_id),
            AuthenticatedPayload(**self._auth_fields())
        )
        return await self._boundary('delete_comment', self._status(request))

    async def edit_media(self, media_id: str, caption: str) -> Result[MediaItem]:
        self._require_login()
        request = self._signed(
            self._endpoints.edit_media(media_id),
            EditMediaPayload(**self._auth_fields(), caption_text=caption)
        )
        return await self._boundary('edit_media', self._handler.fetch(request, decode_media))

    async def delete_media(self, media_id: str, media_type: int = 1) -> Result[bool]:
        """
        Returns:
            Result[bool]: the server's did_delete flag
        """
        self._require_login()
        request = self._signed(
            self._endpoints.delete_media(media_id, media_type),
            MediaPayload(**self._auth_fields(), media_id=media_id)
        )
        decoded = self._handler.fetch(request, DeleteMediaResponse.from_dict)
        result = await self._boundary('delete_media', decoded)
        return result.map(lambda response: response.did_delete)

    # =========================================================================
    # Paginated collections
    # =========================================================================

    async def fetch_feed(self, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        """
        Timeline feed.

        Args:
            max_pages: Page cap; 0 fetches until the cursor is exhausted
        """
        self._require_login()
        return await self._boundary(
            'fetch_feed',
            self._paginate(max_pages, self._endpoints.timeline_feed, FeedResponse.from_dict)
        )

    async def fetch_explore_feed(self, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        self._require_login()
        return await self._boundary(
            'fetch_explore_feed',
            self._paginate(max_pages, self._endpoints.explore_feed, FeedResponse.from_dict)
        )

    async def fetch_liked_feed(self, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        self._require_login()
        return await self._boundary(
            'fetch_liked_feed',
            self._paginate(max_pages, self._endpoints.liked_feed, FeedResponse.from_dict)
        )

    async def fetch_tag_feed(self, tag: str, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        self._require_login()
        return await self._boundary(
            'fetch_tag_feed',
            self._paginate(
                max_pages,
                lambda max_id: self._endpoints.tag_feed(tag, max_id),
                FeedResponse.from_dict
            )
        )

    async def _fetch_for_user(
        self,
        username: str,
        max_pages: int,
        uri_for: Callable[[str, Optional[str]], str],
        decoder: Callable[[dict], Any]
    ) -> Result[AggregatedPage[Any]]:
        resolved = await self._resolve_user_id(username)
        if not resolved.succeeded:
            return resolved.forward()
        user_id = resolved.value
        return await self._paginate(max_pages, lambda max_id: uri_for(user_id, max_id), decoder)

    async def fetch_user_media(self, username: str, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        self._require_login()
        return await self._boundary(
            'fetch_user_media',
            self._fetch_for_user(username, max_pages, self._endpoints.user_media, FeedResponse.from_dict)
        )

    async def fetch_user_tags(self, username: str, max_pages: int = 0) -> Result[AggregatedPage[MediaItem]]:
        self._require_login()
        rank_token = self._session.rank_token
        return await self._boundary(
            'fetch_user_tags',
            self._fetch_for_user(
                username,
                max_pages,
                lambda user_id, max_id: self._endpoints.user_tags(user_id, rank_token, max_id),
                FeedResponse.from_dict
            )
        )

    async def fetch_followers(self, username: str, max_pages: int = 0) -> Result[AggregatedPage[Any]]:
        self._require_login()
        rank_token = self._session.rank_token
        return await self._boundary(
            'fetch_followers',
            self._fetch_for_user(
                username,
                max_pages,
                lambda user_id, max_id: self._endpoints.user_followers(user_id, rank_token, max_id),
                UserListResponse.from_dict
            )
        )

    async def fetch_following(self, username: str, max_pages: int = 0) -> Result[AggregatedPage[Any]]:
        self._require_login()
        rank_token = self._session.rank_token
        return await self._boundary(
            'fetch_following',
            self._fetch_for_user(
                username,
                max_pages,
                lambda user_id, max_id: self._endpoints.user_following(user_id, rank_token, max_id),
                UserListResponse.from_dict
            )
        )

    async def fetch_current_user_followers(self, max_pages: int = 0) -> Result[AggregatedPage[Any]]:
        self._require_login()
        user_id = self._session.user_id
        rank_token = self._session.rank_token
        return await self._boundary(
            'fetch_current_user_followers',
            self._paginate(
                max_pages,
                lambda max_id: self._endpoints.user_followers(user_id, rank_token, max_id),
                UserListResponse.from_dict
            )
        )

    async def fetch_comments(self, media_id: str, max_pages: int = 0) -> Result[AggregatedPage[Comment]]:
        self._require_login()
        return await self._boundary(
            'fetch_comments',
            self._paginate(
                max_pages,
                lambda max_id: self._endpoints.media_comments(media_id, max_id),
                CommentListResponse.from_dict
            )
        )

    async def fetch_recent_activity(self, max_pages: int = 0) -> Result[AggregatedPage[Any]]:
        self._require_login()
        return await self._boundary(
            'fetch_recent_activity',
            self._paginate(max_pages, self._endpoints.recent_activity, ActivityResponse.from_dict)
        )

    async def fetch_following_activity(self, max_pages: int = 0) -> Result[AggregatedPage[Any]]:
        self._require_login()
        return await self._boundary(
            'fetch_following_activity',
            self._paginate(max_pages, self._endpoints.following_activity, ActivityResponse.from_dict)
        )

    # =========================================================================
    # Direct messages
    # =========================================================================

    async def get_direct_inbox(self) -> Result[DirectInbox]:
        self._require_login()
        return await self._boundary(
            'get_direct_inbox',
            self._handler.fetch(self._get(self._endpoints.direct_inbox()), DirectInbox.from_dict)
        )

    async def get_direct_thread(self, thread_id: str) -> Result[DirectThread]:
        self._require_login()
        return await self._boundary(
            'get_direct_thread',
            self._handler.fetch(self._get(self._endpoints.direct_thread(thread_id)), DirectThread.from_dict)
        )

    async def send_direct_message(
        self,
        text: str,
        recipients: Optional[List[str]] = None,
        thread_ids: Optional[List[str]] = None
    ) -> Result[bool]:
        """
        Send a text message to users and/or existing threads.

        Args:
            text: Message text
            recipients: User ids
            thread_ids: Thread ids
        """
        self._require_login()
        if not recipients and not thread_ids:
            return Result.fail(
                "Please provide at least one recipient or thread.",
                kind=ResultKind.INVALID_ARGUMENT
            )
        fields: List[Tuple[str, str]] = [('text', text)]
        if recipients:
            fields.append(('recipient_users', f"[[{','.join(recipients)}]]"))
        if thread_ids:
            fields.append(('thread_ids', f"[{','.join(thread_ids)}]"))
        request = self._builder.build_plain_request(
            'POST', self._endpoints.direct_send_text(), self._device, fields
        )
        return await self._boundary('send_direct_message', self._status(request))

    async def get_recent_recipients(self) -> Result[Recipients]:
        self._require_login()
        return await self._boundary(
            'get_recent_recipients',
            self._handler.fetch(self._get(self._endpoints.recent_recipients()), Recipients.from_dict)
        )

    async def get_ranked_recipients(self) -> Result[Recipients]:
        self._require_login()
        return await self._boundary(
            'get_ranked_recipients',
            self._handler.fetch(self._get(self._endpoints.ranked_recipients()), Recipients.from_dict)
        )

    # =========================================================================
    # Stories
    # =========================================================================

    async def get_story_feed(self) -> Result[StoryTray]:
        self._require_login()
        return await self._boundary(
            'get_story_feed',
            self._handler.fetch(self._get(self._endpoints.story_feed()), StoryTray.from_dict)
        )

    async def get_user_story(self, user_id: str) -> Result[Reel]:
        self._require_login()
        return await self._boundary(
            'get_user_story',
            self._handler.fetch(self._get(self._endpoints.user_story(user_id)), Reel.from_dict)
        )

    # =========================================================================
    # Uploads
    # =========================================================================

    async def upload_photo(self, image: InstaImage, caption: str = '') -> Result[MediaItem]:
        self._require_login()
        return await self._boundary('upload_photo', self._uploads.upload_photo(image, caption))

    async def upload_story_photo(self, image: InstaImage, caption: str = '') -> Result[MediaItem]:
        self._require_login()
        return await self._boundary('upload_story_photo', self._uploads.upload_story_photo(image, caption))

    async def upload_video(
        self,
        video: InstaVideo,
        thumbnail: Optional[InstaImage] = None,
        caption: str = ''
    ) -> Result[MediaItem]:
        """
        Upload a timeline video: negotiate, two chunks, thumbnail, configure.

        Returns:
            Result with the created media; the failing step's result otherwise
        """
        self._require_login()
        return await self._boundary('upload_video', self._uploads.upload_video(video, thumbnail, caption))

    async def upload_story_video(
        self,
        video: InstaVideo,
        thumbnail: Optional[InstaImage] = None,
        caption: str = ''
    ) -> Result[MediaItem]:
        self._require_login()
        return await self._boundary(
            'upload_story_video',
            self._uploads.upload_story_video(video, thumbnail, caption)
        )

    # =========================================================================
    # Checkpoint
    # =========================================================================

    async def checkpoint(self, url: str) -> Result[str]:
        """
        Open a checkpoint challenge URL.

        Returns:
            Result with the raw response body
        """
        self._require_login()
        if not url:
            return Result.fail("Empty checkpoint URL", kind=ResultKind.INVALID_ARGUMENT)
        return await self._boundary('checkpoint', self._checkpoint_body(url))

    async def _checkpoint_body(self, url: str) -> Result[str]:
        sent = await self._handler.execute(self._get(url))
        if not sent.succeeded:
            return sent.forward()
        checked = ResponseHandler.check_status(sent.value)
        if not checked.succeeded:
            return checked.forward()
        return Result.success(sent.value.text)
