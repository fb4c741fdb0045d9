"""
Vector conversions backed by numpy arrays.

``to_vector``, ``output_to_vector`` and the vector output streams hold every
value in memory; only use them on input of bounded size.
"""

import logging
import threading
from typing import Any, Callable, Optional, Tuple, TypeVar

import numpy as np

from pipestreams.config import config
from pipestreams.memory import monitor
from pipestreams.streams.core import (
    InputStream, OutputStream, from_generator, make_output_stream
)

T = TypeVar('T')

logger = logging.getLogger(__name__)


class GrowableBuffer:
    """
    A fill buffer over a numpy array that doubles its capacity when full.

    ``push`` appends in amortized O(1). ``freeze`` hands out the filled values;
    after that the buffer must not be pushed to again until ``reset``.
    """

    def __init__(self, initial_size: int, dtype: Any = object):
        if initial_size <= 0:
            raise ValueError(f"GrowableBuffer: bad initial size: {initial_size}")
        self.initial_size = initial_size
        self.dtype = dtype
        self._data = np.empty(initial_size, dtype=dtype)
        self._length = 0
        self._frozen = False

    def __len__(self) -> int:
        return self._length

    @property
    def capacity(self) -> int:
        return len(self._data)

    def push(self, value: Any) -> None:
        if self._frozen:
            raise RuntimeError("push on a frozen buffer; call reset() first")
        if self._length == len(self._data):
            self._grow()
        self._data[self._length] = value
        self._length += 1

    def _grow(self) -> None:
        size = len(self._data)
        grown = np.empty(size * 2, dtype=self.dtype)
        grown[:size] = self._data
        self._data = grown
        logger.debug(f"fill buffer grown from {size} to {size * 2} slots")

        if size * 2 > config.materialize_warning_size:
            monitor.warn_if_pressured("fill buffer", self._length)

    def freeze(self) -> np.ndarray:
        """Return the filled prefix and stop accepting values.

        A partly filled array is copied so the spare capacity can be freed.
        """
        self._frozen = True
        if self._length < len(self._data):
            return self._data[:self._length].copy()
        return self._data

    def reset(self) -> None:
        """Start over with a fresh array of the initial size."""
        self._data = np.empty(self.initial_size, dtype=self.dtype)
        self._length = 0
        self._frozen = False


def _read_only(vector: np.ndarray) -> np.ndarray:
    vector.flags.writeable = False
    return vector


def from_vector(vector: np.ndarray) -> InputStream[Any]:
    """Create an input stream yielding each element of ``vector`` in turn."""
    return from_generator(item for item in vector)


def to_mutable_vector(input: InputStream[T], dtype: Any = object) -> np.ndarray:
    """Drain ``input`` into a writable numpy array."""
    buffer = GrowableBuffer(config.initial_vector_size, dtype=dtype)
    for value in input:
        buffer.push(value)
    return buffer.freeze()


def to_vector(input: InputStream[T], dtype: Any = object) -> np.ndarray:
    """Drain ``input`` into a read-only numpy array."""
    return _read_only(to_mutable_vector(input, dtype=dtype))


def mutable_vector_output_stream(dtype: Any = object) -> Tuple[OutputStream[Any], Callable[[], np.ndarray]]:
    """
    Create an output stream that stores values fed into it.

    Returns:
        ``(output, flush)``. ``flush()`` returns the stored values as a
        writable array and resets the store. Values written after
        end-of-stream are dropped.
    """
    lock = threading.Lock()
    buffer = GrowableBuffer(config.output_vector_size, dtype=dtype)
    closed = False

    def consume(value: Optional[Any]) -> None:
        nonlocal closed
        with lock:
            if closed:
                return
            if value is None:
                closed = True
            else:
                buffer.push(value)

    def flush() -> np.ndarray:
        with lock:
            vector = buffer.freeze()
            buffer.reset()
        return vector

    return make_output_stream(consume), flush


def vector_output_stream(dtype: Any = object) -> Tuple[OutputStream[Any], Callable[[], np.ndarray]]:
    """Like ``mutable_vector_output_stream``, but ``flush`` returns read-only arrays."""
    output, flush = mutable_vector_output_stream(dtype=dtype)
    return output, lambda: _read_only(flush())


def output_to_mutable_vector(action: Callable[[OutputStream[Any]], Any],
                             dtype: Any = object) -> np.ndarray:
    """Run ``action`` against a fresh vector output stream; return what it wrote."""
    output, flush = mutable_vector_output_stream(dtype=dtype)
    action(output)
    return flush()


def output_to_vector(action: Callable[[OutputStream[Any]], Any],
                     dtype: Any = object) -> np.ndarray:
    """
    Read-only variant of ``output_to_mutable_vector``.

    Example:
        output_to_vector(lambda os: connect(from_list([1, 2, 3]), os), dtype=int)
    """
    return _read_only(output_to_mutable_vector(action, dtype=dtype))


def chunk_vector(size: int, input: InputStream[T], dtype: Any = object) -> InputStream[np.ndarray]:
    """
    Split ``input`` into arrays of ``size`` items; the last may be shorter.

    Empty arrays are never produced.

    Raises:
        ValueError: if ``size`` is not positive
    """
    if size <= 0:
        raise ValueError(f"chunk_vector: bad size: {size}")

    def chunks():
        buffer = GrowableBuffer(size, dtype=dtype)
        for value in input:
            buffer.push(value)
            if len(buffer) >= size:
                yield _read_only(buffer.freeze())
                buffer.reset()

        if len(buffer):
            yield _read_only(buffer.freeze())

    return from_generator(chunks())


def write_vector(vector: np.ndarray, output: OutputStream[Any]) -> None:
    """Write each element of ``vector`` to ``output``. Does not write end-of-stream."""
    for item in vector:
        output.write(item)
