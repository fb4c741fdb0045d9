"""Logging taps for inspecting streams."""

import logging
import reprlib
from typing import Optional, TypeVar

from pipestreams.config import config
from pipestreams.streams.core import InputStream, OutputStream, make_output_stream

T = TypeVar('T')

logger = logging.getLogger(__name__)


def _describe(value) -> str:
    if value is None:
        return "EOF"
    text = reprlib.repr(value)
    width = config.debug_repr_width
    if len(text) > width:
        text = text[:max(0, width - 3)] + "..."
    return text


def debug_input(name: str, input: InputStream[T],
                log: Optional[logging.Logger] = None) -> InputStream[T]:
    """
    Log every read and pushback on ``input`` at DEBUG level.

    Args:
        name: Label prefixed to each log line
        input: Stream to observe
        log: Logger to use (defaults to this module's logger)
    """
    log = log or logger

    def produce() -> Optional[T]:
        value = input.read()
        log.debug(f"{name}: read {_describe(value)}")
        return value

    def pushback(value: T) -> None:
        log.debug(f"{name}: unread {_describe(value)}")
        input.unread(value)

    return InputStream(produce, pushback)


def debug_output(name: str, output: OutputStream[T],
                 log: Optional[logging.Logger] = None) -> OutputStream[T]:
    """Log every value written to ``output`` at DEBUG level."""
    log = log or logger

    def consume(value: Optional[T]) -> None:
        log.debug(f"{name}: write {_describe(value)}")
        output.write(value)

    return make_output_stream(consume)
