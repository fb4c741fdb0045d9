#!/usr/bin/env python3
"""
Basic usage examples for pipestreams.
"""

import logging

import numpy as np

from pipestreams import Stream, StreamConfig
from pipestreams import streams as S


def example_primitives():
    """Example: reading, pushing back and peeking."""
    print("\n=== Primitive Example ===")

    is_ = S.from_list([1, 2, 3])
    first = S.read(is_)
    print(f"Read: {first}")

    S.unread(first, is_)
    print(f"Peek after pushback: {S.peek(is_)}")
    print(f"Remaining: {S.to_list(is_)}")


def example_generator():
    """Example: a generator driven one read at a time."""
    print("\n=== Generator Example ===")

    def fibonacci():
        a, b = 0, 1
        while True:
            print(f"  producing {a}")
            yield a
            a, b = b, a + b

    is_ = S.take(6, S.from_generator(fibonacci()))
    print(f"First six: {S.to_list(is_)}")


def example_combinators():
    """Example: composing combinators."""
    print("\n=== Combinator Example ===")

    window = S.take(4, S.drop(3, S.from_list(range(1, 11))))
    print(f"drop 3, take 4: {S.to_list(window)}")

    total = S.fold(lambda a, b: a + b, 0, S.from_list(range(1, 11)))
    print(f"Sum 1..10: {total}")

    numbers, letters = S.unzip(S.from_list([(1, "a"), (2, "b"), (3, "c")]))
    print(f"Unzipped: {S.to_list(numbers)} {S.to_list(letters)}")

    words = S.output_to_list(
        lambda os_: S.connect(S.from_list(["nom", "nom", "nom"]), S.intersperse("burp!", os_))
    )
    print(f"Interspersed: {words}")


def example_vectors():
    """Example: numpy conversions and batching."""
    print("\n=== Vector Example ===")

    StreamConfig.set_defaults(initial_vector_size=16)
    vector = S.to_vector(S.map(lambda x: x * x, S.from_vector(np.arange(10))), dtype=np.int64)
    print(f"Squares: {vector}")

    for chunk in S.chunk_vector(4, S.from_list(range(1, 15)), dtype=int):
        print(f"  chunk {chunk}")


def example_fluent():
    """Example: the chainable Stream wrapper."""
    print("\n=== Stream Example ===")

    data = [
        {'name': 'Alice', 'age': 25, 'score': 85},
        {'name': 'Bob', 'age': 30, 'score': 90},
        {'name': 'Charlie', 'age': 25, 'score': 78},
        {'name': 'David', 'age': 30, 'score': 92},
        {'name': 'Eve', 'age': 25, 'score': 88},
    ]

    result = Stream.from_iterable(data) \
        .debug("people") \
        .filter(lambda x: x['age'] == 25) \
        .map(lambda x: {'name': x['name'], 'grade': 'A' if x['score'] >= 85 else 'B'}) \
        .collect()

    print(f"Age 25 grades: {result}")


def main():
    logging.basicConfig(level=logging.INFO)

    example_primitives()
    example_generator()
    example_combinators()
    example_vectors()
    example_fluent()


if __name__ == "__main__":
    main()
