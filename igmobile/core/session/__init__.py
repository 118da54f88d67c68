"""
Session management module.

Authentication context plus persistent storage of the client state.
"""
from .models import SessionState, StateData
from .protocols import SessionStorage
from .sqlite_session import SQLiteSession
from .memory_session import MemorySession

__all__ = [
    'SessionState',
    'StateData',
    'SessionStorage',
    'SQLiteSession',
    'MemorySession',
]
