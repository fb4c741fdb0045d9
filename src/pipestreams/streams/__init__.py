"""Input/output stream primitives and combinators.

Import this package as a namespace, e.g. ``from pipestreams import streams as S``;
several combinator names (``map``, ``filter``, ``zip``, ``any``, ``all``)
shadow builtins.
"""

from pipestreams.streams.core import (
    InputStream,
    OutputStream,
    make_input_stream,
    make_output_stream,
    from_generator,
    read,
    unread,
    peek,
    write,
    at_eof,
    connect,
    supply_to,
    null_input,
    null_output,
    concat_input_streams,
    append_input_stream,
)
from pipestreams.streams.lists import (
    from_list,
    to_list,
    list_output_stream,
    output_to_list,
    write_list,
    chunk_list,
    concat_lists,
)
from pipestreams.streams.combinators import (
    input_fold_m,
    output_fold_m,
    fold,
    fold_m,
    fold_with,
    fold_with_m,
    any,
    all,
    maximum,
    minimum,
    unfold_m,
    map,
    map_m,
    tap,
    map_maybe,
    contramap,
    contramap_m,
    contratap,
    contramap_maybe,
    filter,
    filter_m,
    filter_output,
    filter_output_m,
    take,
    drop,
    give,
    ignore,
    zip,
    zip_with,
    zip_with_m,
    unzip,
    contraunzip,
    sliding_window,
    throttle,
    throw_if_produces_more_than,
    count_input,
    count_output,
    intersperse,
    skip_to_eof,
    ignore_eof,
    at_end_of_input,
    at_end_of_output,
)
from pipestreams.streams.vector import (
    GrowableBuffer,
    from_vector,
    to_vector,
    to_mutable_vector,
    vector_output_stream,
    mutable_vector_output_stream,
    output_to_vector,
    output_to_mutable_vector,
    chunk_vector,
    write_vector,
)
from pipestreams.streams.debug import debug_input, debug_output
from pipestreams.streams.stream import Stream

__all__ = [
    "InputStream",
    "OutputStream",
    "make_input_stream",
    "make_output_stream",
    "from_generator",
    "read",
    "unread",
    "peek",
    "write",
    "at_eof",
    "connect",
    "supply_to",
    "null_input",
    "null_output",
    "concat_input_streams",
    "append_input_stream",
    "from_list",
    "to_list",
    "list_output_stream",
    "output_to_list",
    "write_list",
    "chunk_list",
    "concat_lists",
    "input_fold_m",
    "output_fold_m",
    "fold",
    "fold_m",
    "fold_with",
    "fold_with_m",
    "maximum",
    "minimum",
    "unfold_m",
    "map_m",
    "tap",
    "map_maybe",
    "contramap",
    "contramap_m",
    "contratap",
    "contramap_maybe",
    "filter_m",
    "filter_output",
    "filter_output_m",
    "take",
    "drop",
    "give",
    "ignore",
    "zip_with",
    "zip_with_m",
    "unzip",
    "contraunzip",
    "sliding_window",
    "throttle",
    "throw_if_produces_more_than",
    "count_input",
    "count_output",
    "intersperse",
    "skip_to_eof",
    "ignore_eof",
    "at_end_of_input",
    "at_end_of_output",
    "GrowableBuffer",
    "from_vector",
    "to_vector",
    "to_mutable_vector",
    "vector_output_stream",
    "mutable_vector_output_stream",
    "output_to_vector",
    "output_to_mutable_vector",
    "chunk_vector",
    "write_vector",
    "debug_input",
    "debug_output",
    "Stream",
]
