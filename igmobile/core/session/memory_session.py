"""
In-memory session storage implementation.

Non-persistent storage for tests and throwaway clients.
"""
from typing import Optional

from .protocols import SessionStorage
from .models import StateData


class MemorySession(SessionStorage):
    """
    In-memory session storage.

    Keeps the serialized record, so a loaded StateData never aliases the
    saved one.

    Example:
        >>> storage = MemorySession()
        >>> storage.save(state)
        >>> loaded = storage.load()
    """

    def __init__(self):
        """Initialize memory session storage."""
        self._data: Optional[str] = None

    def load(self) -> Optional[StateData]:
        if self._data is None:
            return None
        return StateData.from_json(self._data)

    def save(self, data: StateData) -> None:
        data.update_timestamp()
        self._data = data.to_json()

    def delete(self) -> None:
        self._data = None

    def exists(self) -> bool:
        return self._data is not None

    def close(self) -> None:
        """Close storage (no-op for memory storage)."""
        pass

    def __enter__(self) -> 'MemorySession':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
