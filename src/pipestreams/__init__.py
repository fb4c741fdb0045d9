"""
pipestreams: composable pull/push streams with pushback.

Input streams are read one value at a time and accept pushed-back values;
output streams accept values and an end-of-stream marker. Combinators for
mapping, filtering, folding, zipping, windowing and rate limiting are
all built on those two primitives.
"""

from pipestreams.config import StreamConfig, ChunkStrategy
from pipestreams.exceptions import StreamError, TooManyItemsError
from pipestreams.memory import MemoryMonitor, MemoryPressureLevel
from pipestreams import streams
from pipestreams.streams import (
    InputStream,
    OutputStream,
    Stream,
    make_input_stream,
    make_output_stream,
    from_generator,
    from_list,
    to_list,
    connect,
    supply_to,
)

__version__ = "0.1.0"
__author__ = "pipestreams Contributors"
__license__ = "Apache-2.0"

__all__ = [
    "StreamConfig",
    "ChunkStrategy",
    "StreamError",
    "TooManyItemsError",
    "MemoryMonitor",
    "MemoryPressureLevel",
    "streams",
    "InputStream",
    "OutputStream",
    "Stream",
    "make_input_stream",
    "make_output_stream",
    "from_generator",
    "from_list",
    "to_list",
    "connect",
    "supply_to",
]

# Configure default settings
StreamConfig.set_defaults()
