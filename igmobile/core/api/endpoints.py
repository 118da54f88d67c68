"""
Endpoint catalog.

Maps logical operations to absolute URIs under the versioned API root.
"""
from typing import Optional
from urllib.parse import quote, urlencode

from .config import APIConfig
from ..constants import TIMEZONE_OFFSET


class EndpointCatalog:
    """
    Builds URIs for every API operation.

    Example:
        >>> endpoints = EndpointCatalog(APIConfig.default())
        >>> endpoints.user_followers(123, rank_token='123_abc', max_id='QVF')
        'https://i.instagram.com/api/v1/friendships/123/followers/?rank_token=123_abc&max_id=QVF'
    """

    def __init__(self, config: Optional[APIConfig] = None):
        self._config = config or APIConfig.default()

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip('/') + '/'

    @property
    def api_url(self) -> str:
        return self._config.api_url

    def _uri(self, path: str, max_id: Optional[str] = None, **params) -> str:
        query = {key: value for key, value in params.items() if value is not None}
        if max_id:
            query['max_id'] = max_id
        uri = self.api_url + path
        if query:
            uri += '?' + urlencode(query)
        return uri

    # Account

    def login(self) -> str:
        return self._uri('accounts/login/')

    def logout(self) -> str:
        return self._uri('accounts/logout/')

    def current_user(self) -> str:
        return self._uri('accounts/current_user/', edit='true')

    def set_account_private(self) -> str:
        return self._uri('accounts/set_private/')

    def set_account_public(self) -> str:
        return self._uri('accounts/set_public/')

    def change_password(self) -> str:
        return self._uri('accounts/change_password/')

    # Users

    def search_users(self, username: str) -> str:
        return self._uri('users/search', q=username, timezone_offset=TIMEZONE_OFFSET)

    def user_followers(self, user_id, rank_token: str, max_id: Optional[str] = None) -> str:
        return self._uri(f'friendships/{user_id}/followers/', max_id=max_id, rank_token=rank_token)

    def user_following(self, user_id, rank_token: str, max_id: Optional[str] = None) -> str:
        return self._uri(f'friendships/{user_id}/following/', max_id=max_id, rank_token=rank_token)

    def follow_user(self, user_id) -> str:
        return self._uri(f'friendships/create/{user_id}/')

    def unfollow_user(self, user_id) -> str:
        return self._uri(f'friendships/destroy/{user_id}/')

    def friendship_status(self, user_id) -> str:
        return self._uri(f'friendships/show/{user_id}/')

    # Feeds

    def timeline_feed(self, max_id: Optional[str] = None) -> str:
        return self._uri('feed/timeline/', max_id=max_id)

    def explore_feed(self, max_id: Optional[str] = None) -> str:
        return self._uri('discover/explore/', max_id=max_id)

    def user_media(self, user_id, max_id: Optional[str] = None) -> str:
        return self._uri(f'feed/user/{user_id}/', max_id=max_id)

    def tag_feed(self, tag: str, max_id: Optional[str] = None) -> str:
        return self._uri(f'feed/tag/{quote(tag, safe="")}/', max_id=max_id)

    def liked_feed(self, max_id: Optional[str] = None) -> str:
        return self._uri('feed/liked/', max_id=max_id)

    def user_tags(self, user_id, rank_token: str, max_id: Optional[str] = None) -> str:
        return self._uri(
            f'usertags/{user_id}/feed/',
            max_id=max_id,
            rank_token=rank_token,
            ranked_content='true'
        )

    def recent_activity(self, max_id: Optional[str] = None) -> str:
        return self._uri('news/inbox/', max_id=max_id)

    def following_activity(self, max_id: Optional[str] = None) -> str:
        return self._uri('news/', max_id=max_id)

    # Media

    def media_info(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/info/')

    def like_media(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/like/')

    def unlike_media(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/unlike/')

    def media_comments(self, media_id: str, max_id: Optional[str] = None) -> str:
        return self._uri(f'media/{media_id}/comments/', max_id=max_id)

    def media_likers(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/likers/')

    def post_comment(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/comment/')

    def delete_comment(self, media_id: str, comment_id: str) -> str:
        return self._uri(f'media/{media_id}/comment/{comment_id}/delete/')

    def delete_media(self, media_id: str, media_type: int) -> str:
        return self._uri(f'media/{media_id}/delete/', media_type=media_type)

    def edit_media(self, media_id: str) -> str:
        return self._uri(f'media/{media_id}/edit_media/')

    # Upload

    def upload_photo(self) -> str:
        return self._uri('upload/photo/')

    def upload_video(self) -> str:
        return self._uri('upload/video/')

    def configure_photo(self) -> str:
        return self._uri('media/configure/')

    def configure_video(self) -> str:
        return self._uri('media/configure/', video='1')

    def configure_story_photo(self) -> str:
        return self._uri('media/configure_to_story/')

    def configure_story_video(self) -> str:
        return self._uri('media/configure_to_story/', video='1')

    # Stories

    def story_feed(self) -> str:
        return self._uri('feed/reels_tray/')

    def user_story(self, user_id) -> str:
        return self._uri(f'feed/user/{user_id}/reel_media/')

    # Direct

    def direct_inbox(self) -> str:
        return self._uri('direct_v2/inbox/')

    def direct_thread(self, thread_id: str) -> str:
        return self._uri(f'direct_v2/threads/{thread_id}/')

    def direct_send_text(self) -> str:
        return self._uri('direct_v2/threads/broadcast/text/')

    def recent_recipients(self) -> str:
        return self._uri('direct_share/recent_recipients/')

    def ranked_recipients(self) -> str:
        return self._uri('direct_v2/ranked_recipients/')
