"""Story models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .media import MediaItem
from .user import UserShort


@dataclass
class Reel:
    """Stories of one user."""
    id: str
    user: Optional[UserShort] = None
    items: List[MediaItem] = field(default_factory=list)
    expiring_at: int = 0
    seen: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Reel':
        # reel_media responses wrap the reel
        data = data.get('reel', data) or {}
        return cls(
            id=str(data.get('id', '')),
            user=UserShort.from_dict(data['user']) if data.get('user') else None,
            items=[MediaItem.from_dict(i) for i in data.get('items') or []],
            expiring_at=int(data.get('expiring_at') or 0),
            seen=int(data.get('seen') or 0),
        )


@dataclass
class StoryTray:
    """feed/reels_tray/ response."""
    tray: List[Reel] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StoryTray':
        return cls(tray=[Reel.from_dict(r) for r in data.get('tray') or []])
