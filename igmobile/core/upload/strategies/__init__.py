"""Upload strategies."""
from .chunking import BaseChunkingStrategy, TwoPartChunkingStrategy

__all__ = ['BaseChunkingStrategy', 'TwoPartChunkingStrategy']
