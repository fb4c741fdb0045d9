"""
Primitive input/output channels.

An ``InputStream`` is pulled: each ``read()`` returns the next value, or
``None`` at end-of-stream. Values may be pushed back with ``unread()`` and are
returned last-in-first-out ahead of anything the producer would yield. An
``OutputStream`` is pushed: ``write(value)`` delivers a value and
``write(None)`` signals end-of-stream.

Because ``None`` marks end-of-stream, stream elements are never ``None``.
"""

from typing import (
    Any, Callable, Generic, Iterable, Iterator, List, Optional, Sequence, TypeVar
)

T = TypeVar('T')
U = TypeVar('U')


class InputStream(Generic[T]):
    """
    A pull-based source of values terminated by ``None``.

    An input stream is a pair of callables: a producer returning the next
    value (or ``None``) and a pushback function that makes a value the result
    of the next read. Most code should build streams with
    ``make_input_stream`` or ``from_generator``; the raw constructor is for
    wrappers that forward pushback somewhere else (see ``filter`` and
    ``take``).
    """

    __slots__ = ('_producer', '_pushback')

    def __init__(self, producer: Callable[[], Optional[T]], pushback: Callable[[T], None]):
        self._producer = producer
        self._pushback = pushback

    def read(self) -> Optional[T]:
        """Return the next value, or ``None`` at end-of-stream."""
        return self._producer()

    def unread(self, value: T) -> None:
        """Push ``value`` back so the next ``read`` returns it."""
        if value is None:
            raise ValueError("cannot push back None: it marks end-of-stream")
        self._pushback(value)

    def peek(self) -> Optional[T]:
        """Return the next value without consuming it."""
        value = self.read()
        if value is not None:
            self.unread(value)
        return value

    def __iter__(self) -> Iterator[T]:
        while True:
            value = self.read()
            if value is None:
                return
            yield value


class OutputStream(Generic[T]):
    """A push-based sink; ``write(None)`` signals end-of-stream."""

    __slots__ = ('_consumer',)

    def __init__(self, consumer: Callable[[Optional[T]], Any]):
        self._consumer = consumer

    def write(self, value: Optional[T]) -> None:
        self._consumer(value)


# Bridging adapters

def make_input_stream(producer: Callable[[], Optional[T]]) -> InputStream[T]:
    """
    Wrap a producer function into an ``InputStream`` with its own pushback stack.

    Pushed-back values are served before the producer is called again, so a
    stream that already reported end-of-stream reopens for exactly the values
    pushed back onto it and then asks the producer once more.
    """
    stack: List[T] = []

    def produce() -> Optional[T]:
        if stack:
            return stack.pop()
        return producer()

    return InputStream(produce, stack.append)


def make_output_stream(consumer: Callable[[Optional[T]], Any]) -> OutputStream[T]:
    """Wrap a consumer function into an ``OutputStream``."""
    return OutputStream(consumer)


def from_generator(generator: Iterable[T]) -> InputStream[T]:
    """
    Turn a generator (or any iterable) into an ``InputStream``.

    Each read resumes the generator until its next ``yield``; code between
    yields runs lazily, once, when a read drives past it. After the generator
    returns (or raises) it is never resumed and reads return ``None``.

    Example:
        def countdown(n):
            while n > 0:
                yield n
                n -= 1

        is_ = from_generator(countdown(3))
    """
    iterator = iter(generator)
    finished = False

    def produce() -> Optional[T]:
        nonlocal finished
        if finished:
            return None
        try:
            value = next(iterator)
        except StopIteration:
            finished = True
            return None
        except BaseException:
            finished = True
            raise
        if value is None:
            finished = True
            raise ValueError("generator yielded None, which marks end-of-stream")
        return value

    return make_input_stream(produce)


# Primitive operations

def read(input: InputStream[T]) -> Optional[T]:
    """Read the next value from ``input``; ``None`` means end-of-stream."""
    return input.read()


def unread(value: T, input: InputStream[T]) -> None:
    """Push ``value`` back onto ``input``."""
    input.unread(value)


def peek(input: InputStream[T]) -> Optional[T]:
    """Look at the next value of ``input`` without consuming it."""
    return input.peek()


def write(value: Optional[T], output: OutputStream[T]) -> None:
    """Deliver ``value`` (or end-of-stream, for ``None``) to ``output``."""
    output.write(value)


def at_eof(input: InputStream[Any]) -> bool:
    """Check whether ``input`` is at end-of-stream, without consuming."""
    return input.peek() is None


# Drivers

def connect(input: InputStream[T], output: OutputStream[T]) -> None:
    """Feed every value of ``input`` to ``output``, then end ``output``."""
    while True:
        value = input.read()
        if value is None:
            output.write(None)
            return
        output.write(value)


def supply_to(output: OutputStream[T], input: InputStream[T]) -> None:
    """``connect`` with its arguments flipped."""
    connect(input, output)


# Trivial streams and sequencing

def null_input() -> InputStream[Any]:
    """An input stream that is always at end-of-stream."""
    return make_input_stream(lambda: None)


def null_output() -> OutputStream[Any]:
    """An output stream that discards everything written to it."""
    return make_output_stream(lambda value: None)


def concat_input_streams(streams: Sequence[InputStream[T]]) -> InputStream[T]:
    """
    Read each stream in ``streams`` in turn until all are exhausted.

    The result keeps its own pushback stack; the wrapped streams never see
    values pushed back onto it.
    """
    pending = list(streams)
    position = 0

    def produce() -> Optional[T]:
        nonlocal position
        while position < len(pending):
            value = pending[position].read()
            if value is not None:
                return value
            position += 1
        return None

    return make_input_stream(produce)


def append_input_stream(first: InputStream[T], second: InputStream[T]) -> InputStream[T]:
    """Read ``first`` to exhaustion, then ``second``."""
    return concat_input_streams([first, second])
