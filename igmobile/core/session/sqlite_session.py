"""
SQLite session storage implementation.

Persists the client state record in a local SQLite file.
"""
import sqlite3
import threading
from pathlib import Path
from typing import Optional, Union
from contextlib import contextmanager

from .protocols import SessionStorage
from .models import StateData


class SQLiteSession(SessionStorage):
    """
    SQLite-based session storage.

    One file per account; the table holds at most one record.

    Example:
        >>> storage = SQLiteSession("my_account")
        >>> # Creates my_account.session file
        >>> storage.save(state)
        >>> loaded = storage.load()
    """

    EXTENSION = '.session'
    SCHEMA_VERSION = 1

    def __init__(
        self,
        session_name: Union[str, Path],
        base_path: Optional[Path] = None
    ):
        """
        Initialize SQLite session storage.

        Args:
            session_name: Session name (without extension) or full path
            base_path: Optional base directory for session files
        """
        self._lock = threading.Lock()
        self._conn: Optional[sqlite3.Connection] = None

        if isinstance(session_name, Path) or session_name.endswith(self.EXTENSION):
            self._path = Path(session_name)
        elif base_path:
            self._path = Path(base_path) / f"{session_name}{self.EXTENSION}"
        else:
            self._path = Path(f"{session_name}{self.EXTENSION}")

        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    @property
    def path(self) -> Path:
        """Get session file path."""
        return self._path

    @contextmanager
    def _get_connection(self):
        """Get thread-safe database connection."""
        with self._lock:
            if self._conn is None:
                self._conn = sqlite3.connect(
                    str(self._path),
                    check_same_thread=False
                )
                self._conn.row_factory = sqlite3.Row
            yield self._conn

    def _init_db(self) -> None:
        with self._get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS version (
                    version INTEGER PRIMARY KEY
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS state (
                    id INTEGER PRIMARY KEY,
                    username TEXT NOT NULL,
                    is_authenticated INTEGER NOT NULL,
                    record TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
            ''')

            cursor.execute('SELECT version FROM version LIMIT 1')
            if cursor.fetchone() is None:
                cursor.execute(
                    'INSERT INTO version (version) VALUES (?)',
                    (self.SCHEMA_VERSION,)
                )

            conn.commit()

    def load(self) -> Optional[StateData]:
        """
        Load state from database.

        Returns:
            StateData if exists, None otherwise
        """
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT record FROM state LIMIT 1')
            row = cursor.fetchone()
            if row is None:
                return None
            return StateData.from_json(row['record'])

    def save(self, data: StateData) -> None:
        """
        Save state to database, replacing the previous record.

        Args:
            data: State to save
        """
        data.update_timestamp()

        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('DELETE FROM state')
            cursor.execute('''
                INSERT INTO state (
                    username, is_authenticated, record, created_at, updated_at
                ) VALUES (?, ?, ?, ?, ?)
            ''', (
                data.session.username,
                int(data.is_authenticated),
                data.to_json(),
                data.created_at.isoformat(),
                data.updated_at.isoformat(),
            ))
            conn.commit()

    def delete(self) -> None:
        with self._get_connection() as conn:
            conn.execute('DELETE FROM state')
            conn.commit()

    def exists(self) -> bool:
        with self._get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute('SELECT COUNT(*) FROM state')
            return cursor.fetchone()[0] > 0

    def close(self) -> None:
        """Close database connection."""
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def delete_file(self) -> None:
        """Delete the session file completely."""
        self.close()
        if self._path.exists():
            self._path.unlink()

    def __enter__(self) -> 'SQLiteSession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
