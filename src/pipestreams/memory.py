"""Memory monitoring for bulk materialization."""

import time
import logging
from enum import Enum
from typing import List, Optional
from dataclasses import dataclass

import psutil

from pipestreams.config import config

logger = logging.getLogger(__name__)


class MemoryPressureLevel(Enum):
    """Memory pressure levels."""
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def __gt__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, MemoryPressureLevel):
            return NotImplemented
        return self.value >= other.value


@dataclass
class MemoryInfo:
    """Memory usage information."""
    total: int
    available: int
    used: int
    percent: float
    pressure_level: MemoryPressureLevel
    timestamp: float

    def __str__(self) -> str:
        return f"Memory: {self.percent:.1f}% used, Pressure: {self.pressure_level.name}"


class MemoryMonitor:
    """Sample system memory and classify pressure."""

    def __init__(self, memory_limit: Optional[int] = None):
        """
        Initialize memory monitor.

        Args:
            memory_limit: Custom memory limit in bytes (None for configured limit)
        """
        self.memory_limit = memory_limit or config.memory_limit
        self._history: List[MemoryInfo] = []
        self._max_history = 100

    def get_memory_info(self) -> MemoryInfo:
        """Get current memory information."""
        mem = psutil.virtual_memory()

        # Use configured limit if lower than system memory
        total = min(mem.total, self.memory_limit)
        used = mem.used
        available = max(0, total - used)
        percent = min(100.0, (used / total) * 100)

        threshold = config.memory_threshold * 100
        if percent >= 95:
            level = MemoryPressureLevel.CRITICAL
        elif percent >= max(threshold, 85):
            level = MemoryPressureLevel.HIGH
        elif percent >= threshold:
            level = MemoryPressureLevel.MEDIUM
        elif percent >= 50:
            level = MemoryPressureLevel.LOW
        else:
            level = MemoryPressureLevel.NONE

        return MemoryInfo(
            total=total,
            available=available,
            used=used,
            percent=percent,
            pressure_level=level,
            timestamp=time.time()
        )

    def check_memory_pressure(self) -> MemoryPressureLevel:
        """Sample memory, remember it and return the pressure level."""
        info = self.get_memory_info()

        self._history.append(info)
        if len(self._history) > self._max_history:
            self._history.pop(0)

        return info.pressure_level

    @property
    def last_info(self) -> Optional[MemoryInfo]:
        return self._history[-1] if self._history else None

    def warn_if_pressured(self, what: str, items: int) -> MemoryPressureLevel:
        """Log a warning when ``what`` holding ``items`` meets high pressure."""
        level = self.check_memory_pressure()
        if level >= MemoryPressureLevel.HIGH:
            logger.warning(f"{what} holds {items} items under {level.name} "
                           f"memory pressure: {self.last_info}")
        return level


# Global monitor instance
monitor = MemoryMonitor()
