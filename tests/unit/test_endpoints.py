"""Tests for APIConfig and EndpointCatalog."""
import pytest

from igmobile.core.api import APIConfig, EndpointCatalog, ProxyConfig


API = 'https://i.instagram.com/api/v1/'


class TestAPIConfig:
    """Tests for APIConfig."""

    def test_api_url(self):
        assert APIConfig.default().api_url == API

    def test_api_url_trailing_slashes(self):
        config = APIConfig(base_url='http://localhost:8080/', api_path='/api/v1/')

        assert config.api_url == 'http://localhost:8080/api/v1/'

    def test_with_proxy(self):
        config = APIConfig.with_proxy('http://127.0.0.1:8888')

        assert config.proxy.to_aiohttp_proxy() == 'http://127.0.0.1:8888'

    def test_proxy_credentials(self):
        proxy = ProxyConfig(url='http://proxy:3128', username='u', password='p')

        assert proxy.to_aiohttp_proxy() == 'http://u:p@proxy:3128'

    def test_insecure_disables_ssl(self):
        assert APIConfig.insecure().ssl.create_ssl_context() is False

    def test_upload_defaults(self):
        upload = APIConfig.default().upload

        assert upload.chunk_size == 204800
        assert upload.default_video_duration_ms == 22400


class TestEndpointCatalog:
    """Tests for EndpointCatalog."""

    @pytest.fixture
    def catalog(self):
        return EndpointCatalog(APIConfig.default())

    def test_base_url(self, catalog):
        assert catalog.base_url == 'https://i.instagram.com/'

    def test_login(self, catalog):
        assert catalog.login() == API + 'accounts/login/'

    def test_followers_first_page(self, catalog):
        assert catalog.user_followers(123, '123_abc') == (
            API + 'friendships/123/followers/?rank_token=123_abc'
        )

    def test_followers_next_page(self, catalog):
        assert catalog.user_followers(123, '123_abc', 'QVF') == (
            API + 'friendships/123/followers/?rank_token=123_abc&max_id=QVF'
        )

    def test_empty_max_id_ignored(self, catalog):
        assert catalog.timeline_feed('') == API + 'feed/timeline/'

    def test_tag_is_quoted(self, catalog):
        assert catalog.tag_feed('a b/c') == API + 'feed/tag/a%20b%2Fc/'

    def test_user_tags(self, catalog):
        assert catalog.user_tags(5, 'rt', 'X') == (
            API + 'usertags/5/feed/?rank_token=rt&ranked_content=true&max_id=X'
        )

    def test_delete_media(self, catalog):
        assert catalog.delete_media('1_2', 2) == API + 'media/1_2/delete/?media_type=2'

    def test_configure_video(self, catalog):
        assert catalog.configure_video() == API + 'media/configure/?video=1'
        assert catalog.configure_story_video() == API + 'media/configure_to_story/?video=1'

    def test_search_users(self, catalog):
        assert catalog.search_users('some one') == (
            API + 'users/search?q=some+one&timezone_offset=43200'
        )
