"""
Session storage protocols.

Defines the interface for persisting client state.
"""
from typing import Protocol, Optional, runtime_checkable
from .models import StateData


@runtime_checkable
class SessionStorage(Protocol):
    """
    Protocol for session storage implementations.

    Implementations can use SQLite, JSON files, Redis, or any other backend.
    """

    def load(self) -> Optional[StateData]:
        """
        Load state from storage.

        Returns:
            StateData if a record exists, None otherwise
        """
        ...

    def save(self, data: StateData) -> None:
        """
        Save state to storage, replacing any previous record.

        Args:
            data: State to save
        """
        ...

    def delete(self) -> None:
        """Delete the stored record."""
        ...

    def exists(self) -> bool:
        """True if a record is stored."""
        ...

    def close(self) -> None:
        """Close storage connection and release resources."""
        ...
