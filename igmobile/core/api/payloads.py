"""
Typed request payloads.

Every signed body is one of these dataclasses, serialized by
`canonical_json` in field order.
"""
from dataclasses import dataclass

from ..device import DeviceIdentity


@dataclass
class LoginPayload:
    phone_id: str
    _csrftoken: str
    username: str
    guid: str
    device_id: str
    password: str
    login_attempt_count: str = '0'

    @classmethod
    def create(cls, device: DeviceIdentity, username: str, password: str, csrf_token: str) -> 'LoginPayload':
        return cls(
            phone_id=str(device.phone_id),
            _csrftoken=csrf_token,
            username=username,
            guid=str(device.device_guid),
            device_id=device.device_id,
            password=password,
        )


@dataclass
class AuthenticatedPayload:
    """Fields every authenticated mutation carries."""
    _uuid: str
    _uid: str
    _csrftoken: str


@dataclass
class MediaPayload(AuthenticatedPayload):
    """like, unlike, delete media."""
    media_id: str


@dataclass
class FriendshipPayload(AuthenticatedPayload):
    """follow, unfollow."""
    user_id: str
    radio_type: str = 'wifi-none'


@dataclass
class CommentPayload(AuthenticatedPayload):
    user_breadcrumb: str
    idempotence_token: str
    comment_text: str
    containermodule: str = 'comments_feed_timeline'
    radio_type: str = 'wifi-none'


@dataclass
class EditMediaPayload(AuthenticatedPayload):
    caption_text: str


@dataclass
class ChangePasswordPayload(AuthenticatedPayload):
    old_password: str
    new_password1: str
    new_password2: str
