"""
Response shapes.

Each class decodes one endpoint family from parsed JSON with `from_dict`.
List responses expose `items` and `cursor` so the pagination driver can
treat them alike.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .media import MediaItem, Comment
from .user import UserShort, User
from ..exceptions import ProtocolError
from ..pagination import PageCursor, Page


def _messages(data: Dict[str, Any]) -> List[str]:
    """Collect error messages from the several shapes the server uses."""
    message = data.get('message')
    if isinstance(message, dict):
        errors = message.get('errors') or []
        return [str(e) for e in errors]
    if isinstance(message, list):
        return [str(e) for e in message]
    if message:
        return [str(message)]
    return []


@dataclass
class StatusResponse:
    """Status-only response: {'status': 'ok'} or an error envelope."""
    status: str = ''
    messages: List[str] = field(default_factory=list)
    error_type: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return self.status == 'ok'

    @property
    def message(self) -> str:
        return '\n'.join(self.messages)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StatusResponse':
        return cls(
            status=data.get('status', ''),
            messages=_messages(data),
            error_type=data.get('error_type'),
        )


@dataclass
class LoginResponse:
    """accounts/login/ response."""
    status: str
    logged_in_user: Optional[UserShort] = None
    messages: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoginResponse':
        user = data.get('logged_in_user')
        return cls(
            status=data.get('status', ''),
            logged_in_user=UserShort.from_dict(user) if user else None,
            messages=_messages(data),
        )


def _unwrap_media(item: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Timeline and explore wrap media; ads and suggestions carry none."""
    if 'media_or_ad' in item:
        return item['media_or_ad']
    if 'media' in item:
        return item['media']
    if 'pk' in item and 'media_type' in item:
        return item
    return None


@dataclass
class FeedResponse:
    """Media list: timeline, explore, user media, tag, liked and user tags feeds."""
    items: List[MediaItem] = field(default_factory=list)
    next_max_id: str = ''
    more_available: bool = False
    num_results: int = 0

    @property
    def cursor(self) -> PageCursor:
        return PageCursor.from_response(self.next_max_id, self.more_available)

    def to_page(self) -> Page[MediaItem]:
        return Page(self.items, self.cursor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FeedResponse':
        raw = data.get('feed_items')
        if raw is None:
            raw = data.get('items') or []
        items = []
        for entry in raw:
            media = _unwrap_media(entry)
            if media is not None:
                items.append(MediaItem.from_dict(media))
        next_max_id = data.get('next_max_id')
        return cls(
            items=items,
            next_max_id='' if next_max_id is None else str(next_max_id),
            more_available=bool(data.get('more_available', False)),
            num_results=int(data.get('num_results') or len(items)),
        )


@dataclass
class UserListResponse:
    """Followers / following page. `big_list` says whether more pages exist."""
    users: List[UserShort] = field(default_factory=list)
    next_max_id: str = ''
    big_list: bool = False

    @property
    def items(self) -> List[UserShort]:
        return self.users

    @property
    def cursor(self) -> PageCursor:
        return PageCursor.from_response(self.next_max_id, self.big_list)

    def to_page(self) -> Page[UserShort]:
        return Page(self.users, self.cursor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserListResponse':
        if data.get('status') and data.get('status') != 'ok':
            raise ProtocolError(f"User list status: {data.get('status')}")
        next_max_id = data.get('next_max_id')
        return cls(
            users=[UserShort.from_dict(u) for u in data.get('users') or []],
            next_max_id='' if next_max_id is None else str(next_max_id),
            big_list=bool(data.get('big_list', False)),
        )


@dataclass
class CommentListResponse:
    """Comments page."""
    comments: List[Comment] = field(default_factory=list)
    next_max_id: str = ''
    has_more_comments: bool = False
    comment_count: int = 0

    @property
    def items(self) -> List[Comment]:
        return self.comments

    @property
    def cursor(self) -> PageCursor:
        return PageCursor.from_response(self.next_max_id, self.has_more_comments)

    def to_page(self) -> Page[Comment]:
        return Page(self.comments, self.cursor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommentListResponse':
        next_max_id = data.get('next_max_id')
        return cls(
            comments=[Comment.from_dict(c) for c in data.get('comments') or []],
            next_max_id='' if next_max_id is None else str(next_max_id),
            has_more_comments=bool(data.get('has_more_comments', False)),
            comment_count=int(data.get('comment_count') or 0),
        )


@dataclass
class ActivityStory:
    """One entry of the activity feed."""
    type: int
    text: str = ''
    timestamp: float = 0.0
    profile_id: str = ''
    profile_name: str = ''
    media_ids: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActivityStory':
        args = data.get('args') or {}
        return cls(
            type=int(data.get('type') or 0),
            text=args.get('text', ''),
            timestamp=float(args.get('timestamp') or 0),
            profile_id=str(args.get('profile_id', '')),
            profile_name=args.get('profile_name', ''),
            media_ids=[str(m.get('id')) for m in args.get('media') or [] if m.get('id')],
        )


@dataclass
class ActivityResponse:
    """news/ and news/inbox/ page. More pages exist while a cursor is present."""
    stories: List[ActivityStory] = field(default_factory=list)
    next_max_id: str = ''
    is_own_activity: bool = False

    @property
    def items(self) -> List[ActivityStory]:
        return self.stories

    @property
    def cursor(self) -> PageCursor:
        return PageCursor.from_response(self.next_max_id, bool(self.next_max_id))

    def to_page(self) -> Page[ActivityStory]:
        return Page(self.stories, self.cursor)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ActivityResponse':
        stories = list(data.get('stories') or [])
        # news/inbox/ splits stories into new and old
        stories.extend(data.get('new_stories') or [])
        stories.extend(data.get('old_stories') or [])
        next_max_id = data.get('next_max_id')
        return cls(
            stories=[ActivityStory.from_dict(s) for s in stories],
            next_max_id='' if next_max_id is None else str(next_max_id),
            is_own_activity='new_stories' in data or 'old_stories' in data,
        )


@dataclass
class LikersResponse:
    """media/{id}/likers/ response."""
    users: List[UserShort] = field(default_factory=list)
    user_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LikersResponse':
        users = [UserShort.from_dict(u) for u in data.get('users') or []]
        return cls(users=users, user_count=int(data.get('user_count') or len(users)))


@dataclass
class SearchUsersResponse:
    """users/search response."""
    users: List[User] = field(default_factory=list)

    def find(self, username: str) -> Optional[User]:
        for user in self.users:
            if user.username == username:
                return user
        return None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchUsersResponse':
        return cls(users=[User.from_dict(u) for u in data.get('users') or []])


def decode_user(data: Dict[str, Any]) -> User:
    """Decode {'user': {...}} (current user, set_private, set_public)."""
    user = data.get('user')
    if not user or not user.get('pk'):
        raise ProtocolError("Pk is null or empty")
    return User.from_dict(user)


def decode_media(data: Dict[str, Any]) -> MediaItem:
    """Decode a single media record ({'items': [...]} or {'media': {...}})."""
    if data.get('media'):
        return MediaItem.from_dict(data['media'])
    items = data.get('items') or []
    if not items:
        raise ProtocolError("Response carries no media")
    return MediaItem.from_dict(items[0])


@dataclass
class DeleteMediaResponse:
    """media/{id}/delete/ response."""
    did_delete: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DeleteMediaResponse':
        return cls(did_delete=bool(data.get('did_delete', False)))


@dataclass
class VideoUploadUrl:
    url: str
    job: str
    expires: float = 0.0


@dataclass
class VideoUploadUrls:
    """upload/video/ negotiation response."""
    upload_id: str = ''
    urls: List[VideoUploadUrl] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'VideoUploadUrls':
        return cls(
            upload_id=str(data.get('upload_id') or ''),
            urls=[
                VideoUploadUrl(
                    url=entry.get('url') or '',
                    job=entry.get('job') or '',
                    expires=float(entry.get('expires') or 0),
                )
                for entry in data.get('video_upload_urls') or []
            ],
        )


@dataclass
class PhotoUploadResponse:
    """upload/photo/ response."""
    upload_id: str = ''
    status: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PhotoUploadResponse':
        if data.get('status') != 'ok':
            raise ProtocolError(f"Photo upload status: {data.get('status')}")
        return cls(upload_id=str(data.get('upload_id') or ''), status=data['status'])
