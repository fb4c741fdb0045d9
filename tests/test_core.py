#!/usr/bin/env python3
"""
Tests for the input/output primitives and the generator engine.
"""

import unittest

from pipestreams import streams as S


class TestInputStream(unittest.TestCase):
    """Test reads, pushback and peeking."""

    def test_read_until_eof(self):
        """Reads return values in order, then None."""
        is_ = S.from_list([1, 2, 3])
        self.assertEqual(S.read(is_), 1)
        self.assertEqual(S.read(is_), 2)
        self.assertEqual(S.read(is_), 3)
        self.assertIsNone(S.read(is_))
        self.assertIsNone(S.read(is_))

    def test_pushback_is_lifo(self):
        """Pushed-back values come out last-in-first-out, before the producer."""
        is_ = S.from_list([1, 2, 3])
        S.unread(10, is_)
        S.unread(20, is_)
        self.assertEqual(S.to_list(is_), [20, 10, 1, 2, 3])

    def test_pushback_skips_producer(self):
        """A pending pushback value is returned without calling the producer."""
        calls = []

        def producer():
            calls.append(1)
            return len(calls)

        is_ = S.make_input_stream(producer)
        S.unread(99, is_)
        self.assertEqual(S.read(is_), 99)
        self.assertEqual(calls, [])
        self.assertEqual(S.read(is_), 1)
        self.assertEqual(calls, [1])

    def test_pushback_after_eof_reopens_once(self):
        """Pushback after end-of-stream yields that value, then asks the producer again."""
        is_ = S.from_list([1])
        self.assertEqual(S.to_list(is_), [1])
        S.unread(5, is_)
        self.assertEqual(S.read(is_), 5)
        self.assertIsNone(S.read(is_))

    def test_unread_none_rejected(self):
        """None cannot be pushed back."""
        is_ = S.from_list([1])
        with self.assertRaises(ValueError):
            S.unread(None, is_)

    def test_peek_does_not_consume(self):
        """Peeking twice sees the same value, which is still read afterwards."""
        is_ = S.from_list([7, 8])
        self.assertEqual(S.peek(is_), 7)
        self.assertEqual(S.peek(is_), 7)
        self.assertEqual(S.to_list(is_), [7, 8])
        self.assertIsNone(S.peek(is_))

    def test_peek_runs_producer_effect_once(self):
        """Peek followed by read invokes the producer only once."""
        calls = []

        def producer():
            calls.append(1)
            return 42 if len(calls) == 1 else None

        is_ = S.make_input_stream(producer)
        self.assertEqual(S.peek(is_), 42)
        self.assertEqual(S.read(is_), 42)
        self.assertEqual(len(calls), 1)

    def test_at_eof(self):
        is_ = S.from_list([1])
        self.assertFalse(S.at_eof(is_))
        self.assertEqual(S.read(is_), 1)
        self.assertTrue(S.at_eof(is_))

    def test_producer_failure_propagates(self):
        """Producer exceptions reach the reader unchanged."""
        def producer():
            raise IOError("device gone")

        is_ = S.make_input_stream(producer)
        with self.assertRaises(IOError):
            S.read(is_)

    def test_iteration(self):
        """Iterating an input stream drains it."""
        is_ = S.from_list("abc")
        self.assertEqual(list(is_), ["a", "b", "c"])
        self.assertIsNone(S.read(is_))


class TestGenerator(unittest.TestCase):
    """Test the generator engine."""

    def test_lazy_effects(self):
        """Code between yields runs only when a read drives past it."""
        log = []

        def gen():
            log.append("start")
            yield 1
            log.append("after 1")
            yield 2
            log.append("end")

        is_ = S.from_generator(gen())
        self.assertEqual(log, [])
        self.assertEqual(S.read(is_), 1)
        self.assertEqual(log, ["start"])
        self.assertEqual(S.read(is_), 2)
        self.assertEqual(log, ["start", "after 1"])
        self.assertIsNone(S.read(is_))
        self.assertEqual(log, ["start", "after 1", "end"])

    def test_exhausted_generator_never_resumed(self):
        """Reads after the generator finished return None without resuming it."""
        resumed = []

        def gen():
            yield 1
            resumed.append(True)

        is_ = S.from_generator(gen())
        self.assertEqual(S.to_list(is_), [1])
        self.assertEqual(resumed, [True])
        self.assertIsNone(S.read(is_))
        self.assertIsNone(S.read(is_))
        self.assertEqual(resumed, [True])

    def test_pushback_onto_generator(self):
        is_ = S.from_generator(iter([1, 2]))
        self.assertEqual(S.read(is_), 1)
        S.unread(1, is_)
        self.assertEqual(S.to_list(is_), [1, 2])

    def test_generator_failure_propagates(self):
        """An exception inside the generator reaches the reader, then the stream ends."""
        def gen():
            yield 1
            raise KeyError("boom")

        is_ = S.from_generator(gen())
        self.assertEqual(S.read(is_), 1)
        with self.assertRaises(KeyError):
            S.read(is_)
        self.assertIsNone(S.read(is_))

    def test_yielding_none_rejected(self):
        is_ = S.from_generator(iter([1, None, 2]))
        self.assertEqual(S.read(is_), 1)
        with self.assertRaises(ValueError):
            S.read(is_)


class TestOutputAndDrivers(unittest.TestCase):
    """Test output streams, connect and supply_to."""

    def test_write_is_synchronous(self):
        seen = []
        os_ = S.make_output_stream(seen.append)
        S.write(1, os_)
        self.assertEqual(seen, [1])
        S.write(None, os_)
        self.assertEqual(seen, [1, None])

    def test_connect_writes_single_eof(self):
        """connect forwards every value, then exactly one end-of-stream."""
        seen = []
        S.connect(S.from_list([1, 2, 3]), S.make_output_stream(seen.append))
        self.assertEqual(seen, [1, 2, 3, None])

    def test_supply_to(self):
        seen = []
        S.supply_to(S.make_output_stream(seen.append), S.from_list(["x"]))
        self.assertEqual(seen, ["x", None])

    def test_null_streams(self):
        self.assertIsNone(S.read(S.null_input()))
        S.connect(S.from_list([1, 2]), S.null_output())

    def test_concat_input_streams(self):
        is_ = S.concat_input_streams([S.from_list([1, 2]), S.null_input(), S.from_list([3])])
        self.assertEqual(S.read(is_), 1)
        S.unread(0, is_)
        self.assertEqual(S.to_list(is_), [0, 2, 3])

    def test_append_input_stream(self):
        is_ = S.append_input_stream(S.from_list("ab"), S.from_list("cd"))
        self.assertEqual("".join(S.to_list(is_)), "abcd")


if __name__ == "__main__":
    unittest.main()
