"""
List conversions and list-valued batching.

``to_list``, ``output_to_list`` and ``list_output_stream`` hold every value
in memory; only use them on input of bounded size.
"""

import threading
from typing import Any, Callable, Iterable, List, Optional, Tuple, TypeVar

from pipestreams.streams.core import (
    InputStream, OutputStream, from_generator, make_output_stream
)

T = TypeVar('T')


def from_list(items: Iterable[T]) -> InputStream[T]:
    """
    Create an input stream yielding each of ``items`` in turn.

    ``None`` marks end-of-stream, so ``items`` must not contain it; reading
    up to a ``None`` element raises ``ValueError``.
    """
    return from_generator(item for item in items)


def to_list(input: InputStream[T]) -> List[T]:
    """Drain ``input`` into a list."""
    return [item for item in input]


def list_output_stream() -> Tuple[OutputStream[T], Callable[[], List[T]]]:
    """
    Create an output stream that collects what is written to it.

    Returns:
        ``(output, flush)``. ``flush()`` returns the values collected so far
        and resets the store. Values written after end-of-stream are dropped.
    """
    lock = threading.Lock()
    store: List[T] = []
    closed = False

    def consume(value: Optional[T]) -> None:
        nonlocal closed
        with lock:
            if closed:
                return
            if value is None:
                closed = True
            else:
                store.append(value)

    def flush() -> List[T]:
        nonlocal store
        with lock:
            items, store = store, []
        return items

    return make_output_stream(consume), flush


def output_to_list(action: Callable[[OutputStream[T]], Any]) -> List[T]:
    """
    Run ``action`` against a fresh list output stream and return what it wrote.

    Example:
        output_to_list(lambda os: connect(from_list([1, 2, 3]), os))  # [1, 2, 3]
    """
    output, flush = list_output_stream()
    action(output)
    return flush()


def write_list(items: Iterable[T], output: OutputStream[T]) -> None:
    """Write each of ``items`` to ``output``. Does not write end-of-stream."""
    for item in items:
        output.write(item)


def chunk_list(size: int, input: InputStream[T]) -> InputStream[List[T]]:
    """
    Split ``input`` into lists of ``size`` items; the last may be shorter.

    Raises:
        ValueError: if ``size`` is not positive
    """
    if size <= 0:
        raise ValueError(f"chunk_list: bad size: {size}")

    def chunks():
        chunk = []
        for item in input:
            chunk.append(item)
            if len(chunk) >= size:
                yield chunk
                chunk = []

        if chunk:
            yield chunk

    return from_generator(chunks())


def concat_lists(input: InputStream[List[T]]) -> InputStream[T]:
    """Flatten a stream of lists into a stream of their elements."""
    def items():
        for chunk in input:
            yield from chunk

    return from_generator(items())
