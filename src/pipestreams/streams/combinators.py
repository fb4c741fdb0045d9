"""
Generic stream combinators.

Every combinator here is written against the ``InputStream``/``OutputStream``
primitives only. Streams are passed last, after any function or count.

Exceptions raised by user-supplied callables propagate unchanged; wrapper
state (counters, seeds) is only updated once the wrapped read or write
succeeded.

Several names here shadow builtins (``map``, ``filter``, ``zip``, ``any``,
``all``); import the module rather than the names.
"""

import threading
import time
from collections import deque
from typing import (
    Any, Callable, Deque, List, Optional, Tuple, TypeVar
)

from pipestreams.exceptions import TooManyItemsError
from pipestreams.streams.core import (
    InputStream, OutputStream, from_generator, make_input_stream, make_output_stream
)

T = TypeVar('T')
U = TypeVar('U')
V = TypeVar('V')
S = TypeVar('S')


# Folds

def input_fold_m(func: Callable[[S, T], S], initial: S,
                 input: InputStream[T]) -> Tuple[InputStream[T], Callable[[], S]]:
    """
    Fold over ``input`` as a pass-through stream transformer.

    Returns:
        ``(stream, fetch)``. Reading ``stream`` yields the values of ``input``
        unchanged while folding them into a seed; ``fetch()`` returns the seed
        and resets it to ``initial``.
    """
    seed = initial

    def produce() -> Optional[T]:
        nonlocal seed
        value = input.read()
        if value is not None:
            seed = func(seed, value)
        return value

    def fetch() -> S:
        nonlocal seed
        current, seed = seed, initial
        return current

    return make_input_stream(produce), fetch


def output_fold_m(func: Callable[[S, T], S], initial: S,
                  output: OutputStream[T]) -> Tuple[OutputStream[T], Callable[[], S]]:
    """Output counterpart of ``input_fold_m``."""
    seed = initial

    def consume(value: Optional[T]) -> None:
        nonlocal seed
        if value is not None:
            seed = func(seed, value)
        output.write(value)

    def fetch() -> S:
        nonlocal seed
        current, seed = seed, initial
        return current

    return make_output_stream(consume), fetch


def fold(func: Callable[[S, T], S], seed: S, input: InputStream[T]) -> S:
    """Left fold over ``input``, consuming it entirely."""
    for value in input:
        seed = func(seed, value)
    return seed


def fold_with(step: Callable[[Any, T], Any], seed: Any,
              done: Callable[[Any], S], input: InputStream[T]) -> S:
    """
    Left fold with a separate accumulator and finishing projection.

    Suited to composable folds that carry an internal accumulator and
    extract a result at the end (``step``, ``seed``, ``done``).
    """
    return done(fold(step, seed, input))


def fold_with_m(step: Callable[[Any, T], Any], make_seed: Callable[[], Any],
                done: Callable[[Any], S], input: InputStream[T]) -> S:
    """Like ``fold_with``, but the seed is produced by calling ``make_seed()``."""
    return done(fold(step, make_seed(), input))


def any(predicate: Callable[[T], bool], input: InputStream[T]) -> bool:
    """
    Check whether some element of ``input`` satisfies ``predicate``.

    Consumption stops at the first match; the rest stays in the stream.
    """
    for value in input:
        if predicate(value):
            return True
    return False


def all(predicate: Callable[[T], bool], input: InputStream[T]) -> bool:
    """
    Check whether every element of ``input`` satisfies ``predicate``.

    Consumption stops at the first mismatch; the rest stays in the stream.
    """
    for value in input:
        if not predicate(value):
            return False
    return True


def maximum(input: InputStream[T]) -> Optional[T]:
    """Greatest element of ``input``, or ``None`` if it is empty."""
    best = input.read()
    if best is None:
        return None
    for value in input:
        best = max(best, value)
    return best


def minimum(input: InputStream[T]) -> Optional[T]:
    """Least element of ``input``, or ``None`` if it is empty."""
    best = input.read()
    if best is None:
        return None
    for value in input:
        best = min(best, value)
    return best


# Unfolds

def unfold_m(step: Callable[[S], Optional[Tuple[T, S]]], seed: S) -> InputStream[T]:
    """
    Build a stream by applying ``step`` to a seed until it returns ``None``.

    Example:
        unfold_m(lambda n: (n, n + 1) if n < 3 else None, 0)  # 0, 1, 2
    """
    def generate(current):
        while True:
            result = step(current)
            if result is None:
                return
            value, current = result
            yield value

    return from_generator(generate(seed))


# Maps

def map(func: Callable[[T], U], input: InputStream[T]) -> InputStream[U]:
    """Pass every value of ``input`` through ``func``."""
    def produce() -> Optional[U]:
        value = input.read()
        return None if value is None else func(value)

    return make_input_stream(produce)


def tap(func: Callable[[T], Any], input: InputStream[T]) -> InputStream[T]:
    """Run ``func`` on every value of ``input`` and pass the value on unchanged."""
    def produce() -> Optional[T]:
        value = input.read()
        if value is not None:
            func(value)
        return value

    return make_input_stream(produce)


def map_maybe(func: Callable[[T], Optional[U]], input: InputStream[T]) -> InputStream[U]:
    """Map ``func`` over ``input``, dropping values for which it returns ``None``."""
    def produce() -> Optional[U]:
        while True:
            value = input.read()
            if value is None:
                return None
            result = func(value)
            if result is not None:
                return result

    return make_input_stream(produce)


def contramap(func: Callable[[T], U], output: OutputStream[U]) -> OutputStream[T]:
    """Pass every value written to the result through ``func`` into ``output``."""
    def consume(value: Optional[T]) -> None:
        output.write(None if value is None else func(value))

    return make_output_stream(consume)


def contratap(func: Callable[[T], Any], output: OutputStream[T]) -> OutputStream[T]:
    """Run ``func`` on every value written, then forward it unchanged."""
    def consume(value: Optional[T]) -> None:
        if value is not None:
            func(value)
        output.write(value)

    return make_output_stream(consume)


def contramap_maybe(func: Callable[[T], Optional[U]], output: OutputStream[U]) -> OutputStream[T]:
    """``contramap`` that drops values for which ``func`` returns ``None``."""
    def consume(value: Optional[T]) -> None:
        if value is None:
            output.write(None)
            return
        result = func(value)
        if result is not None:
            output.write(result)

    return make_output_stream(consume)


# Filters

def filter(predicate: Callable[[T], bool], input: InputStream[T]) -> InputStream[T]:
    """
    Drop values of ``input`` that fail ``predicate``.

    Values pushed back onto the result go straight back to ``input``;
    rejected values are gone for good.
    """
    def produce() -> Optional[T]:
        while True:
            value = input.read()
            if value is None or predicate(value):
                return value

    return InputStream(produce, input.unread)


def filter_output(predicate: Callable[[T], bool], output: OutputStream[T]) -> OutputStream[T]:
    """Forward to ``output`` only the values that satisfy ``predicate``."""
    def consume(value: Optional[T]) -> None:
        if value is None or predicate(value):
            output.write(value)

    return make_output_stream(consume)


# Python callables may perform effects already, so the effectful variants
# share their implementation with the pure ones.
map_m = map
contramap_m = contramap
filter_m = filter
filter_output_m = filter_output
fold_m = fold


# Takes and drops

def take(count: int, input: InputStream[T]) -> InputStream[T]:
    """
    Produce at most ``count`` values of ``input``, then end-of-stream.

    Values pushed back onto the result go to ``input`` and raise the
    remaining count by one, so they can be read again.
    """
    remaining = count

    def produce() -> Optional[T]:
        nonlocal remaining
        if remaining <= 0:
            return None
        value = input.read()
        if value is not None:
            remaining -= 1
        return value

    def pushback(value: T) -> None:
        nonlocal remaining
        input.unread(value)
        remaining += 1

    return InputStream(produce, pushback)


def drop(count: int, input: InputStream[T]) -> InputStream[T]:
    """
    Skip the first ``count`` values of ``input``.

    The counter tracks position relative to the drop point: reads lower it,
    pushback raises it, so pushing back values that were already passed
    through makes them subject to dropping again.
    """
    remaining = count

    def next_value() -> Optional[T]:
        nonlocal remaining
        value = input.read()
        if value is not None:
            remaining -= 1
        return value

    def produce() -> Optional[T]:
        while remaining > 0:
            if next_value() is None:
                return None
        return next_value()

    def pushback(value: T) -> None:
        nonlocal remaining
        input.unread(value)
        remaining += 1

    return InputStream(produce, pushback)


def give(count: int, output: OutputStream[T]) -> OutputStream[T]:
    """
    Forward at most ``count`` values to ``output`` and drop the rest.

    End-of-stream is always forwarded.
    """
    remaining = count

    def consume(value: Optional[T]) -> None:
        nonlocal remaining
        if value is None:
            output.write(None)
        elif remaining > 0:
            output.write(value)
            remaining -= 1

    return make_output_stream(consume)


def ignore(count: int, output: OutputStream[T]) -> OutputStream[T]:
    """Drop the first ``count`` values, forward the rest and end-of-stream."""
    remaining = count

    def consume(value: Optional[T]) -> None:
        nonlocal remaining
        if value is not None and remaining > 0:
            remaining -= 1
            return
        output.write(value)

    return make_output_stream(consume)


# Zip and unzip

def zip_with(func: Callable[[T, U], V], first: InputStream[T],
             second: InputStream[U]) -> InputStream[V]:
    """
    Combine ``first`` and ``second`` element-wise through ``func``.

    Ends as soon as either side ends. If ``second`` ends after a value was
    already read from ``first``, that value is pushed back onto ``first``.
    """
    def produce() -> Optional[V]:
        a = first.read()
        if a is None:
            return None
        b = second.read()
        if b is None:
            first.unread(a)
            return None
        return func(a, b)

    return make_input_stream(produce)


def zip(first: InputStream[T], second: InputStream[U]) -> InputStream[Tuple[T, U]]:
    """Pair up ``first`` and ``second`` element-wise; see ``zip_with``."""
    return zip_with(lambda a, b: (a, b), first, second)


zip_with_m = zip_with


def unzip(input: InputStream[Tuple[T, U]]) -> Tuple[InputStream[T], InputStream[U]]:
    """
    Split a stream of pairs into two streams.

    Reading one side pulls a pair from ``input`` when that side has nothing
    buffered and queues the other half for the other side. Reading ``n``
    values from one side buffers ``n`` values on the other.

    Access to ``input`` and both buffers is guarded by a lock, so the two
    sides may be read from different threads.
    """
    lock = threading.Lock()
    lefts: Deque[T] = deque()
    rights: Deque[U] = deque()

    def produce_left() -> Optional[T]:
        with lock:
            if lefts:
                return lefts.popleft()
            pair = input.read()
            if pair is None:
                return None
            a, b = pair
            rights.append(b)
            return a

    def produce_right() -> Optional[U]:
        with lock:
            if rights:
                return rights.popleft()
            pair = input.read()
            if pair is None:
                return None
            a, b = pair
            lefts.append(a)
            return b

    return make_input_stream(produce_left), make_input_stream(produce_right)


def contraunzip(first: OutputStream[T], second: OutputStream[U]) -> OutputStream[Tuple[T, U]]:
    """
    Write the halves of each pair to ``first`` and ``second``.

    End-of-stream is forwarded to both. Combine with
    ``contramap(lambda x: (x, x), ...)`` to fork a stream in two.
    """
    def consume(pair: Optional[Tuple[T, U]]) -> None:
        if pair is None:
            first.write(None)
            second.write(None)
            return
        a, b = pair
        first.write(a)
        second.write(b)

    return make_output_stream(consume)


# Windowing and rate limiting

def sliding_window(size: int, input: InputStream[T], step: int = 1) -> InputStream[List[T]]:
    """
    Emit lists of ``size`` consecutive values, advancing ``step`` values each time.

    A trailing window shorter than ``size`` is not emitted.

    Raises:
        ValueError: if ``size`` or ``step`` is not positive
    """
    if size <= 0:
        raise ValueError(f"sliding_window: bad size: {size}")
    if step <= 0:
        raise ValueError(f"sliding_window: bad step: {step}")

    def windows():
        window: Deque[T] = deque()
        skip = 0
        for value in input:
            if skip > 0:
                skip -= 1
                continue
            window.append(value)
            if len(window) == size:
                yield list(window)
                for _ in range(min(step, size)):
                    window.popleft()
                skip = max(0, step - size)

    return from_generator(windows())


def throttle(interval: float, input: InputStream[T],
             clock: Callable[[], float] = time.monotonic,
             sleep: Callable[[float], None] = time.sleep) -> InputStream[T]:
    """
    Space reads from ``input`` at least ``interval`` seconds apart.

    The wait happens in the reading thread, before the wrapped read.
    Pushback goes straight to ``input`` and does not count as a read.

    Raises:
        ValueError: if ``interval`` is negative
    """
    if interval < 0:
        raise ValueError(f"throttle: bad interval: {interval}")
    last = None

    def produce() -> Optional[T]:
        nonlocal last
        if last is not None:
            delay = interval - (clock() - last)
            if delay > 0:
                sleep(delay)
        value = input.read()
        last = clock()
        return value

    return InputStream(produce, input.unread)


def throw_if_produces_more_than(limit: int, input: InputStream[T]) -> InputStream[T]:
    """
    Raise ``TooManyItemsError`` if ``input`` yields more than ``limit`` values.

    Pushed-back values are given back to the budget.
    """
    produced = 0

    def produce() -> Optional[T]:
        nonlocal produced
        value = input.read()
        if value is None:
            return None
        if produced >= limit:
            input.unread(value)
            raise TooManyItemsError(limit)
        produced += 1
        return value

    def pushback(value: T) -> None:
        nonlocal produced
        input.unread(value)
        produced -= 1

    return InputStream(produce, pushback)


def count_input(input: InputStream[T]) -> Tuple[InputStream[T], Callable[[], int]]:
    """Wrap ``input`` and count the values read through the wrapper."""
    stream, fetch = input_fold_m(lambda n, _: n + 1, 0, input)
    total = 0

    def get_count() -> int:
        nonlocal total
        total += fetch()
        return total

    return stream, get_count


def count_output(output: OutputStream[T]) -> Tuple[OutputStream[T], Callable[[], int]]:
    """Wrap ``output`` and count the values written through the wrapper."""
    stream, fetch = output_fold_m(lambda n, _: n + 1, 0, output)
    total = 0

    def get_count() -> int:
        nonlocal total
        total += fetch()
        return total

    return stream, get_count


# Utility

def intersperse(separator: T, output: OutputStream[T]) -> OutputStream[T]:
    """Write ``separator`` between consecutive values written to ``output``."""
    started = False

    def consume(value: Optional[T]) -> None:
        nonlocal started
        if value is None:
            output.write(None)
            return
        if started:
            output.write(separator)
        started = True
        output.write(value)

    return make_output_stream(consume)


def skip_to_eof(input: InputStream[Any]) -> None:
    """Read ``input`` to end-of-stream, discarding every value."""
    for _ in input:
        pass


def ignore_eof(output: OutputStream[T]) -> OutputStream[T]:
    """Forward values to ``output`` but never end-of-stream."""
    def consume(value: Optional[T]) -> None:
        if value is not None:
            output.write(value)

    return make_output_stream(consume)


def at_end_of_input(action: Callable[[], Any], input: InputStream[T]) -> InputStream[T]:
    """
    Run ``action`` the first time ``input`` reports end-of-stream.

    Pushback goes straight to ``input``.
    """
    fired = False

    def produce() -> Optional[T]:
        nonlocal fired
        value = input.read()
        if value is None and not fired:
            fired = True
            action()
        return value

    return InputStream(produce, input.unread)


def at_end_of_output(action: Callable[[], Any], output: OutputStream[T]) -> OutputStream[T]:
    """Run ``action`` after the first end-of-stream has been forwarded to ``output``."""
    fired = False

    def consume(value: Optional[T]) -> None:
        nonlocal fired
        output.write(value)
        if value is None and not fired:
            fired = True
            action()

    return make_output_stream(consume)
