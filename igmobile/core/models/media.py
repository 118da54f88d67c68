"""Media and comment models."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .user import UserShort


def _best_candidate(candidates: List[Dict[str, Any]]) -> Dict[str, Any]:
    if not candidates:
        return {}
    return max(candidates, key=lambda c: (c.get('width') or 0) * (c.get('height') or 0))


@dataclass
class MediaItem:
    """
    A feed item: photo, video or carousel.

    Attributes:
        pk: Numeric media id
        id: Full media id ('{pk}_{owner pk}')
        code: Short code used in web URLs
        media_type: 1 photo, 2 video, 8 carousel
        taken_at: Unix timestamp
        caption: Caption text
        like_count: Likes
        comment_count: Comments
        user: Owner
        image_url: Largest image candidate
        video_url: Largest video version (videos only)
        width: Original width
        height: Original height
    """
    pk: str
    id: str
    code: str = ''
    media_type: int = 1
    taken_at: int = 0
    caption: str = ''
    like_count: int = 0
    comment_count: int = 0
    user: Optional[UserShort] = None
    image_url: str = ''
    video_url: str = ''
    width: int = 0
    height: int = 0
    carousel: List['MediaItem'] = field(default_factory=list)

    @property
    def is_video(self) -> bool:
        return self.media_type == 2

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'MediaItem':
        caption = data.get('caption') or {}
        image = _best_candidate((data.get('image_versions2') or {}).get('candidates') or [])
        video = _best_candidate(data.get('video_versions') or [])
        return cls(
            pk=str(data.get('pk', '')),
            id=str(data.get('id', '')),
            code=data.get('code') or '',
            media_type=int(data.get('media_type') or 1),
            taken_at=int(data.get('taken_at') or 0),
            caption=caption.get('text', '') if isinstance(caption, dict) else str(caption),
            like_count=int(data.get('like_count') or 0),
            comment_count=int(data.get('comment_count') or 0),
            user=UserShort.from_dict(data['user']) if data.get('user') else None,
            image_url=image.get('url', ''),
            video_url=video.get('url', ''),
            width=int(data.get('original_width') or 0),
            height=int(data.get('original_height') or 0),
            carousel=[cls.from_dict(item) for item in data.get('carousel_media') or []],
        )


@dataclass
class Comment:
    """Comment on a media item."""
    pk: str
    text: str
    user: Optional[UserShort] = None
    created_at: int = 0
    like_count: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Comment':
        # comment creation wraps the record
        data = data.get('comment', data)
        return cls(
            pk=str(data.get('pk', '')),
            text=data.get('text', ''),
            user=UserShort.from_dict(data['user']) if data.get('user') else None,
            created_at=int(data.get('created_at') or 0),
            like_count=int(data.get('comment_like_count') or 0),
        )
