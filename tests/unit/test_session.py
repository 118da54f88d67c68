"""
Unit tests for session management.

Tests SessionState guards, StateData, SQLiteSession and MemorySession.
"""
import pytest

from igmobile.core.exceptions import PreconditionError, SessionLockedError
from igmobile.core.models import UserShort
from igmobile.core.session import (
    SessionState,
    StateData,
    SessionStorage,
    SQLiteSession,
    MemorySession,
)


@pytest.fixture
def state(device, logged_in_session):
    return StateData(
        device=device,
        is_authenticated=True,
        session=logged_in_session,
        cookies=[{'name': 'csrftoken', 'value': 'csrf123', 'domain': 'i.instagram.com', 'path': '/'}],
    )


class TestSessionState:
    """Tests for SessionState."""

    def test_created_empty(self):
        session = SessionState()

        assert not session.is_authenticated
        assert session.user_id == ''
        assert not session.has_credentials()

    def test_ensure_credentials(self):
        with pytest.raises(PreconditionError):
            SessionState(username='someone').ensure_credentials()

        SessionState(username='someone', password='secret').ensure_credentials()

    def test_ensure_authenticated(self):
        with pytest.raises(PreconditionError):
            SessionState(username='someone', password='secret').ensure_authenticated()

    def test_apply_login_sets_rank_token(self):
        session = SessionState(username='someone', password='secret')

        assert session.apply_login(UserShort(pk='42', username='someone'), 'phone')
        assert session.is_authenticated
        assert session.rank_token == '42_phone'
        assert session.user_id == '42'

    def test_apply_login_rejects_other_user(self):
        session = SessionState(username='someone', password='secret')

        assert not session.apply_login(UserShort(pk='7', username='other'), 'phone')
        assert not session.is_authenticated
        assert session.rank_token == ''

    def test_csrf_token_locked_while_authenticated(self, logged_in_session):
        with pytest.raises(SessionLockedError):
            logged_in_session.set_csrf_token('new')

        assert logged_in_session.csrf_token == 'csrf123'

    def test_invalidate(self, logged_in_session):
        logged_in_session.invalidate()

        assert not logged_in_session.is_authenticated
        assert logged_in_session.logged_in_user is None
        assert logged_in_session.rank_token == ''
        assert logged_in_session.csrf_token == ''
        assert logged_in_session.username == 'someone'
        logged_in_session.set_csrf_token('fresh')
        assert logged_in_session.csrf_token == 'fresh'


class TestStateData:
    """Tests for StateData."""

    def test_json_round_trip(self, state):
        restored = StateData.from_json(state.to_json())

        assert restored.device == state.device
        assert restored.is_authenticated
        assert restored.session.rank_token == '42_phone'
        assert restored.session.logged_in_user.pk == '42'
        assert restored.session.csrf_token == 'csrf123'
        assert restored.cookies == state.cookies

    def test_missing_device_rejected(self):
        with pytest.raises(ValueError):
            StateData.from_json('{"session": {}}')

    def test_update_timestamp(self, state):
        before = state.updated_at
        state.update_timestamp()

        assert state.updated_at >= before


class TestMemorySession:
    """Tests for MemorySession."""

    def test_implements_protocol(self):
        assert isinstance(MemorySession(), SessionStorage)

    def test_save_load_delete(self, state):
        storage = MemorySession()
        assert not storage.exists()
        assert storage.load() is None

        storage.save(state)

        assert storage.exists()
        loaded = storage.load()
        assert loaded.session.rank_token == '42_phone'
        assert loaded is not state

        storage.delete()
        assert not storage.exists()


class TestSQLiteSession:
    """Tests for SQLiteSession."""

    def test_creates_file(self, tmp_path):
        storage = SQLiteSession('account', base_path=tmp_path)

        assert storage.path == tmp_path / 'account.session'
        assert storage.path.exists()
        storage.close()

    def test_save_and_load(self, tmp_path, state):
        with SQLiteSession('account', base_path=tmp_path) as storage:
            storage.save(state)

        with SQLiteSession('account', base_path=tmp_path) as storage:
            loaded = storage.load()

        assert loaded.is_authenticated
        assert loaded.session.username == 'someone'
        assert loaded.session.rank_token == '42_phone'
        assert loaded.device.device_id == state.device.device_id

    def test_save_replaces_record(self, tmp_path, state):
        with SQLiteSession('account', base_path=tmp_path) as storage:
            storage.save(state)
            state.session.invalidate()
            state.is_authenticated = False
            storage.save(state)

            assert not storage.load().is_authenticated

    def test_delete_and_exists(self, tmp_path, state):
        storage = SQLiteSession('account', base_path=tmp_path)
        storage.save(state)
        assert storage.exists()

        storage.delete()

        assert not storage.exists()
        assert storage.load() is None
        storage.delete_file()
        assert not storage.path.exists()
