"""
Session data models.

SessionState is the authentication context every authenticated call reads.
StateData is the single persisted record: device, flag, session, cookies.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import json

from ..device import DeviceIdentity
from ..exceptions import PreconditionError, SessionLockedError
from ..models import UserShort


@dataclass
class SessionState:
    """
    Authentication context.

    Written only by login and logout, after their round trip completed.
    Every other operation treats it as read-only.

    Attributes:
        username: Configured user name
        password: Configured password
        csrf_token: Token read from the csrftoken cookie
        rank_token: '{user pk}_{phone id}', set at login
        logged_in_user: User returned by the login response
        is_authenticated: True once login returned the configured user
    """
    username: str = ''
    password: str = ''
    csrf_token: str = ''
    rank_token: str = ''
    logged_in_user: Optional[UserShort] = None
    is_authenticated: bool = False

    @property
    def user_id(self) -> str:
        return self.logged_in_user.pk if self.logged_in_user else ''

    def has_credentials(self) -> bool:
        return bool(self.username and self.password)

    def ensure_credentials(self) -> None:
        """
        Raises:
            PreconditionError: If user name or password is missing
        """
        if not self.has_credentials():
            raise PreconditionError("user name and password must be specified")

    def ensure_authenticated(self) -> None:
        """
        Raises:
            PreconditionError: If login has not succeeded
        """
        if not self.is_authenticated:
            raise PreconditionError("user must be authenticated")

    def set_csrf_token(self, token: str) -> None:
        """
        Record the csrf token seen before login.

        Raises:
            SessionLockedError: If the session is already authenticated
        """
        if self.is_authenticated:
            raise SessionLockedError("csrf token is read-only while authenticated")
        self.csrf_token = token or ''

    def apply_login(self, user: UserShort, phone_id: str) -> bool:
        """
        Apply a completed login response.

        Args:
            user: logged_in_user from the response
            phone_id: Device phone id (part of the rank token)

        Returns:
            True if the returned user is the configured one
        """
        if user.username != self.username:
            self.is_authenticated = False
            return False
        self.logged_in_user = user
        self.rank_token = f"{user.pk}_{phone_id}"
        self.is_authenticated = True
        return True

    def invalidate(self) -> None:
        """Forget everything login produced (credentials stay)."""
        self.is_authenticated = False
        self.logged_in_user = None
        self.rank_token = ''
        self.csrf_token = ''

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            'username': self.username,
            'password': self.password,
            'csrf_token': self.csrf_token,
            'rank_token': self.rank_token,
            'logged_in_user': self.logged_in_user.to_dict() if self.logged_in_user else None,
            'is_authenticated': self.is_authenticated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SessionState':
        """Create from dictionary."""
        user = data.get('logged_in_user')
        return cls(
            username=data.get('username', ''),
            password=data.get('password', ''),
            csrf_token=data.get('csrf_token', ''),
            rank_token=data.get('rank_token', ''),
            logged_in_user=UserShort.from_dict(user) if user else None,
            is_authenticated=bool(data.get('is_authenticated', False)),
        )


@dataclass
class StateData:
    """
    Persisted client state, read and written as one unit.

    Attributes:
        device: Device identity
        is_authenticated: Authentication flag at save time
        session: Session state
        cookies: Cookie jar snapshot
        created_at: Record creation timestamp
        updated_at: Last update timestamp
    """
    device: DeviceIdentity
    is_authenticated: bool
    session: SessionState
    cookies: List[Dict[str, str]] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'device': self.device.to_dict(),
            'is_authenticated': self.is_authenticated,
            'session': self.session.to_dict(),
            'cookies': [dict(cookie) for cookie in self.cookies],
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StateData':
        return cls(
            device=DeviceIdentity.from_dict(data['device']),
            is_authenticated=bool(data.get('is_authenticated', False)),
            session=SessionState.from_dict(data.get('session') or {}),
            cookies=[dict(cookie) for cookie in data.get('cookies') or []],
            created_at=datetime.fromisoformat(data['created_at']) if data.get('created_at') else datetime.now(),
            updated_at=datetime.fromisoformat(data['updated_at']) if data.get('updated_at') else datetime.now(),
        )

    def to_json(self) -> str:
        """
        Serialize to JSON string.

        Returns:
            JSON string
        """
        return json.dumps(self.to_dict())

    @classmethod
    def from_json(cls, json_str: str) -> 'StateData':
        """
        Create from JSON string.

        Raises:
            ValueError: If the string is not a valid record
        """
        try:
            return cls.from_dict(json.loads(json_str))
        except KeyError as e:
            raise ValueError(f"State record is missing {e}") from e

    def update_timestamp(self) -> None:
        """Update the updated_at timestamp to now."""
        self.updated_at = datetime.now()
