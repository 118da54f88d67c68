"""
Chunking strategies for video uploads.

Open for extension (new strategies), closed for modification.
"""
from abc import ABC, abstractmethod
from typing import List

from ..models import ChunkRange
from ...constants import VIDEO_CHUNK_SIZE
from ...exceptions import InvalidArgumentError


class BaseChunkingStrategy(ABC):
    """Abstract base class for chunking strategies."""

    @abstractmethod
    def calculate_chunks(self, total_length: int) -> List[ChunkRange]:
        """Calculate chunk boundaries."""
        pass


class TwoPartChunkingStrategy(BaseChunkingStrategy):
    """
    The server's video chunking: exactly two chunks.

    Chunk 0 covers [0, chunk_size), chunk 1 takes the rest of the payload,
    whatever its size (empty when the payload is exactly one chunk).
    """

    def __init__(self, chunk_size: int = VIDEO_CHUNK_SIZE):
        """
        Initialize with chunk size.

        Args:
            chunk_size: Size of the first chunk in bytes
        """
        if chunk_size <= 0:
            raise ValueError("Chunk size must be positive")
        self.chunk_size = chunk_size

    def calculate_chunks(self, total_length: int) -> List[ChunkRange]:
        """
        Calculate the two chunk ranges.

        Args:
            total_length: Payload size in bytes

        Returns:
            [chunk 0, chunk 1]

        Raises:
            InvalidArgumentError: If the payload is shorter than one chunk
        """
        if total_length < self.chunk_size:
            raise InvalidArgumentError(
                f"Video of {total_length} bytes is too small: "
                f"at least {self.chunk_size} bytes are required"
            )

        return [
            ChunkRange(0, 0, self.chunk_size, total_length),
            ChunkRange(1, self.chunk_size, total_length, total_length),
        ]
