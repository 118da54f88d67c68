"""Response models."""
from .user import UserShort, User, FriendshipStatus
from .media import MediaItem, Comment
from .direct import DirectItem, DirectThread, DirectInbox, Recipients
from .story import Reel, StoryTray
from .responses import (
    StatusResponse,
    LoginResponse,
    FeedResponse,
    UserListResponse,
    CommentListResponse,
    ActivityStory,
    ActivityResponse,
    LikersResponse,
    SearchUsersResponse,
    DeleteMediaResponse,
    VideoUploadUrl,
    VideoUploadUrls,
    PhotoUploadResponse,
    decode_user,
    decode_media,
)

__all__ = [
    'UserShort',
    'User',
    'FriendshipStatus',
    'MediaItem',
    'Comment',
    'DirectItem',
    'DirectThread',
    'DirectInbox',
    'Recipients',
    'Reel',
    'StoryTray',
    'StatusResponse',
    'LoginResponse',
    'FeedResponse',
    'UserListResponse',
    'CommentListResponse',
    'ActivityStory',
    'ActivityResponse',
    'LikersResponse',
    'SearchUsersResponse',
    'DeleteMediaResponse',
    'VideoUploadUrl',
    'VideoUploadUrls',
    'PhotoUploadResponse',
    'decode_user',
    'decode_media',
]
