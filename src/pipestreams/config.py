"""
Configuration management for pipestreams.
"""

import math
from typing import Optional
from dataclasses import dataclass, field
from enum import Enum
import psutil


class ChunkStrategy(Enum):
    """Strategy for determining chunk sizes."""
    FIXED = "fixed"
    SQRT_N = "sqrt_n"


@dataclass
class StreamConfig:
    """Global configuration for stream operations."""

    # Fill buffers
    initial_vector_size: int = 64  # drains (to_vector, to_mutable_vector)
    output_vector_size: int = 32  # vector output stores

    # Chunking
    chunk_strategy: ChunkStrategy = ChunkStrategy.FIXED
    default_chunk_size: int = 1000
    min_chunk_size: int = 16
    max_chunk_size: int = 1_000_000

    # Memory limits
    memory_limit: int = field(default_factory=lambda: int(psutil.virtual_memory().total * 0.8))
    memory_threshold: float = 0.8
    materialize_warning_size: int = 1_000_000  # items held by one fill buffer

    # Debugging
    debug_repr_width: int = 80

    _instance: Optional['StreamConfig'] = None

    @classmethod
    def get_instance(cls) -> 'StreamConfig':
        """Get singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def set_defaults(cls, **kwargs) -> None:
        """Set default configuration values."""
        instance = cls.get_instance()
        for key, value in kwargs.items():
            if key == 'chunk_strategy' and isinstance(value, str):
                value = ChunkStrategy(value)
            if hasattr(instance, key):
                setattr(instance, key, value)

    def calculate_chunk_size(self, total_size: Optional[int] = None) -> int:
        """Calculate chunk size based on strategy.

        ``total_size`` is a hint; streams of unknown length fall back to the
        fixed default.
        """
        if self.chunk_strategy == ChunkStrategy.SQRT_N and total_size:
            sqrt_n = int(math.sqrt(total_size))
            return max(self.min_chunk_size, min(sqrt_n, self.max_chunk_size))

        return self.default_chunk_size


# Global configuration instance
config = StreamConfig.get_instance()
