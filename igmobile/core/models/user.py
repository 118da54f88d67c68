"""User models."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


def _pk(value: Any) -> str:
    return '' if value is None else str(value)


@dataclass
class UserShort:
    """
    Compact user record, as embedded in lists and media.

    Attributes:
        pk: Numeric user id (as string)
        username: Login name
        full_name: Display name
        is_private: Private account
        is_verified: Verified badge
        profile_pic_url: Avatar URL
    """
    pk: str
    username: str
    full_name: str = ''
    is_private: bool = False
    is_verified: bool = False
    profile_pic_url: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'UserShort':
        return cls(
            pk=_pk(data.get('pk', data.get('id'))),
            username=data.get('username', ''),
            full_name=data.get('full_name') or '',
            is_private=bool(data.get('is_private', False)),
            is_verified=bool(data.get('is_verified', False)),
            profile_pic_url=data.get('profile_pic_url') or '',
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'pk': self.pk,
            'username': self.username,
            'full_name': self.full_name,
            'is_private': self.is_private,
            'is_verified': self.is_verified,
            'profile_pic_url': self.profile_pic_url,
        }


@dataclass
class User(UserShort):
    """Full user profile."""
    follower_count: int = 0
    following_count: int = 0
    media_count: int = 0
    biography: str = ''
    external_url: str = ''
    email: Optional[str] = None
    phone_number: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'User':
        short = UserShort.from_dict(data)
        return cls(
            pk=short.pk,
            username=short.username,
            full_name=short.full_name,
            is_private=short.is_private,
            is_verified=short.is_verified,
            profile_pic_url=short.profile_pic_url,
            follower_count=int(data.get('follower_count') or 0),
            following_count=int(data.get('following_count') or 0),
            media_count=int(data.get('media_count') or 0),
            biography=data.get('biography') or '',
            external_url=data.get('external_url') or '',
            email=data.get('email'),
            phone_number=data.get('phone_number'),
        )


@dataclass
class FriendshipStatus:
    """Relationship between the logged in user and another user."""
    following: bool = False
    followed_by: bool = False
    blocking: bool = False
    is_private: bool = False
    incoming_request: bool = False
    outgoing_request: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FriendshipStatus':
        # follow/unfollow wrap the status, friendships/show does not
        data = data.get('friendship_status', data)
        return cls(
            following=bool(data.get('following', False)),
            followed_by=bool(data.get('followed_by', False)),
            blocking=bool(data.get('blocking', False)),
            is_private=bool(data.get('is_private', False)),
            incoming_request=bool(data.get('incoming_request', False)),
            outgoing_request=bool(data.get('outgoing_request', False)),
        )
