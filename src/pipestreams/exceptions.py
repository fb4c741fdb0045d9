"""Exceptions raised by stream combinators."""


class StreamError(Exception):
    """Base class for pipestreams errors."""


class TooManyItemsError(StreamError):
    """An input stream produced more items than its configured limit."""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"input stream produced more than {limit} items")
