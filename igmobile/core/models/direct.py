"""Direct messaging models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .user import UserShort


@dataclass
class DirectItem:
    """One message in a thread."""
    item_id: str
    user_id: str
    item_type: str = 'text'
    text: str = ''
    timestamp: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DirectItem':
        return cls(
            item_id=str(data.get('item_id', '')),
            user_id=str(data.get('user_id', '')),
            item_type=data.get('item_type', 'text'),
            text=data.get('text') or '',
            timestamp=int(data.get('timestamp') or 0),
        )


@dataclass
class DirectThread:
    """A direct conversation."""
    thread_id: str
    thread_title: str = ''
    users: List[UserShort] = field(default_factory=list)
    items: List[DirectItem] = field(default_factory=list)
    has_older: bool = False
    oldest_cursor: str = ''

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DirectThread':
        data = data.get('thread', data)
        return cls(
            thread_id=str(data.get('thread_id', '')),
            thread_title=data.get('thread_title') or '',
            users=[UserShort.from_dict(u) for u in data.get('users') or []],
            items=[DirectItem.from_dict(i) for i in data.get('items') or []],
            has_older=bool(data.get('has_older', False)),
            oldest_cursor=data.get('oldest_cursor') or '',
        )


@dataclass
class DirectInbox:
    """direct_v2/inbox/ response."""
    threads: List[DirectThread] = field(default_factory=list)
    unseen_count: int = 0
    pending_requests_total: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DirectInbox':
        inbox = data.get('inbox') or {}
        return cls(
            threads=[DirectThread.from_dict(t) for t in inbox.get('threads') or []],
            unseen_count=int(inbox.get('unseen_count') or 0),
            pending_requests_total=int(data.get('pending_requests_total') or 0),
        )


@dataclass
class Recipients:
    """Recent or ranked recipients: users and group threads."""
    users: List[UserShort] = field(default_factory=list)
    threads: List[DirectThread] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Recipients':
        entries = data.get('recent_recipients') or data.get('ranked_recipients') or []
        users, threads = [], []
        for entry in entries:
            if entry.get('user'):
                users.append(UserShort.from_dict(entry['user']))
            elif entry.get('thread'):
                threads.append(DirectThread.from_dict(entry['thread']))
        return cls(users=users, threads=threads)
