"""
Fluent wrapper over input streams.
"""

import itertools
import logging
from typing import (
    Any, Callable, Iterable, Iterator, List, Optional, Tuple, TypeVar, Union
)

import numpy as np

from pipestreams.config import config
from pipestreams.streams import combinators as C
from pipestreams.streams.core import InputStream, OutputStream, connect, from_generator
from pipestreams.streams.debug import debug_input
from pipestreams.streams.lists import chunk_list, from_list, to_list
from pipestreams.streams.vector import to_vector

T = TypeVar('T')
U = TypeVar('U')


class Stream(Iterable[T]):
    """
    A chainable view of one ``InputStream``.

    A ``Stream`` owns its channel and is single-pass: each transformation
    wraps the channel in a combinator and hands it to a new ``Stream``, after
    which the receiver should not be read again.
    """

    def __init__(self, source: Union[InputStream[T], Iterable[T]], size_hint: Optional[int] = None):
        """
        Initialize stream.

        Args:
            source: An input stream, or any iterable to read from
            size_hint: Number of elements, if known (used for chunk sizing)
        """
        if isinstance(source, InputStream):
            self._input = source
        elif hasattr(source, '__iter__'):
            if size_hint is None and hasattr(source, '__len__'):
                size_hint = len(source)
            self._input = from_generator(source)
        else:
            raise TypeError("Source must be an InputStream or iterable")

        self.size_hint = size_hint

    @property
    def input(self) -> InputStream[T]:
        """The underlying input stream."""
        return self._input

    def __iter__(self) -> Iterator[T]:
        return iter(self._input)

    def _chain(self, input: InputStream[U], size_hint: Optional[int] = None) -> 'Stream[U]':
        return Stream(input, size_hint=size_hint)

    # Transformation operators

    def map(self, func: Callable[[T], U]) -> 'Stream[U]':
        """Apply function to each element."""
        return self._chain(C.map(func, self._input), self.size_hint)

    def map_maybe(self, func: Callable[[T], Optional[U]]) -> 'Stream[U]':
        """Apply function to each element, dropping ``None`` results."""
        return self._chain(C.map_maybe(func, self._input))

    def tap(self, func: Callable[[T], Any]) -> 'Stream[T]':
        """Run a side effect on each element."""
        return self._chain(C.tap(func, self._input), self.size_hint)

    def filter(self, predicate: Callable[[T], bool]) -> 'Stream[T]':
        """Keep only elements matching predicate."""
        return self._chain(C.filter(predicate, self._input))

    def take(self, n: int) -> 'Stream[T]':
        """Take first n elements."""
        return self._chain(C.take(n, self._input))

    def drop(self, n: int) -> 'Stream[T]':
        """Skip first n elements."""
        return self._chain(C.drop(n, self._input))

    skip = drop

    def chunk(self, size: Optional[int] = None) -> 'Stream[List[T]]':
        """Group elements into lists of ``size`` (configured default if omitted)."""
        if size is None:
            size = config.calculate_chunk_size(self.size_hint)
        return self._chain(chunk_list(size, self._input))

    def window(self, size: int, step: int = 1) -> 'Stream[List[T]]':
        """Sliding window over stream."""
        return self._chain(C.sliding_window(size, self._input, step=step))

    def zip(self, other: Union['Stream[U]', InputStream[U], Iterable[U]]) -> 'Stream[Tuple[T, U]]':
        """Pair elements with those of ``other`` until either side ends."""
        if isinstance(other, Stream):
            other = other.input
        elif not isinstance(other, InputStream):
            other = from_list(other)
        return self._chain(C.zip(self._input, other))

    def throttle(self, interval: float) -> 'Stream[T]':
        """Space reads at least ``interval`` seconds apart."""
        return self._chain(C.throttle(interval, self._input), self.size_hint)

    def debug(self, name: str, log: Optional[logging.Logger] = None) -> 'Stream[T]':
        """Log every element read through the stream."""
        return self._chain(debug_input(name, self._input, log), self.size_hint)

    # Terminal operators

    def collect(self) -> List[T]:
        """Collect all elements into a list."""
        return to_list(self._input)

    def to_vector(self, dtype: Any = object) -> np.ndarray:
        """Collect all elements into a read-only numpy array."""
        return to_vector(self._input, dtype=dtype)

    def reduce(self, func: Callable[[U, T], U], initial: U) -> U:
        """Reduce stream to single value."""
        return C.fold(func, initial, self._input)

    def count(self) -> int:
        """Count elements."""
        return C.fold(lambda n, _: n + 1, 0, self._input)

    def first(self) -> Optional[T]:
        """Get first element."""
        return self._input.read()

    def foreach(self, func: Callable[[T], None]) -> None:
        """Apply function to each element."""
        for item in self._input:
            func(item)

    def any(self, predicate: Callable[[T], bool]) -> bool:
        """Check whether some element matches; stops at the first match."""
        return C.any(predicate, self._input)

    def all(self, predicate: Callable[[T], bool]) -> bool:
        """Check whether every element matches; stops at the first mismatch."""
        return C.all(predicate, self._input)

    def max(self) -> Optional[T]:
        """Greatest element, or ``None`` for an empty stream."""
        return C.maximum(self._input)

    def min(self) -> Optional[T]:
        """Least element, or ``None`` for an empty stream."""
        return C.minimum(self._input)

    def connect(self, output: OutputStream[T]) -> None:
        """Write every element to ``output``, then end it."""
        connect(self._input, output)

    # Factory methods

    @classmethod
    def from_iterable(cls, iterable: Iterable[T]) -> 'Stream[T]':
        """Create stream from iterable."""
        return cls(iterable)

    @classmethod
    def from_input(cls, input: InputStream[T]) -> 'Stream[T]':
        """Create stream over an existing input stream."""
        return cls(input)

    @classmethod
    def range(cls, *args) -> 'Stream[int]':
        """Create stream of integers."""
        return cls(range(*args))

    @classmethod
    def infinite(cls, func: Callable[[], T]) -> 'Stream[T]':
        """Create infinite stream."""
        return cls(func() for _ in itertools.count())

    @classmethod
    def unfold(cls, step: Callable[[Any], Optional[Tuple[T, Any]]], seed: Any) -> 'Stream[T]':
        """Create stream by unfolding ``step`` from ``seed``."""
        return cls(C.unfold_m(step, seed))
