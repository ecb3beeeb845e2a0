"""
Tests for token streams and the lookahead token iterator.

These tests validate that:

- every stream signals exhaustion permanently once drained
- the iterator exposes its first token before any advance
- advancing past the end is a no-op that leaves the position unchanged
- iterator equality depends on the identity of the wrapped stream
"""

from __future__ import annotations

import pytest

from tokenpipe.features.lexer import Token, TokenType
from tokenpipe.streams.token_stream import (
    EmptyTokenStream,
    ListTokenStream,
    SingleTokenStream,
    TokenIterator,
    TokenStream,
)


def term(text: str) -> Token:
    return Token(text, TokenType.TERM)


# ---------------------------------------------------------------------------
# Streams
# ---------------------------------------------------------------------------


def test_empty_token_stream():
    stream = EmptyTokenStream()
    for _ in range(3):
        assert stream.next_token() is None


def test_single_token_stream():
    stream = SingleTokenStream.from_text("hello")
    assert stream.next_token() == term("hello")
    assert stream.next_token() is None
    assert stream.next_token() is None


def test_list_token_stream_is_fifo():
    stream = ListTokenStream.from_texts(["hello", "world"])
    assert len(stream) == 2
    assert stream.next_token() == term("hello")
    assert stream.next_token() == term("world")
    assert stream.next_token() is None
    assert stream.next_token() is None
    assert len(stream) == 0


def test_list_token_stream_keeps_token_types():
    tokens = [Token("rdc", TokenType.ABBREVIATION), Token("john", TokenType.POSSESSIVE)]
    stream = ListTokenStream(tokens)
    assert stream.next_token() == tokens[0]
    assert stream.next_token() == tokens[1]


@pytest.mark.parametrize(
    "stream",
    [EmptyTokenStream(), SingleTokenStream(term("x")), ListTokenStream([term("x")])],
)
def test_streams_satisfy_protocol(stream):
    assert isinstance(stream, TokenStream)


# ---------------------------------------------------------------------------
# Iterator traversal
# ---------------------------------------------------------------------------


def test_token_iterator_lookahead():
    iterator = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))

    assert iterator.dereference() == term("token1")
    assert iterator.position == 0

    iterator.increment()
    assert iterator.dereference() == term("token2")
    assert iterator.position == 1

    iterator.increment()
    assert iterator.dereference() is None
    assert iterator.exhausted
    assert iterator.position == 2


def test_token_iterator_next():
    iterator = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))
    assert next(iterator) == term("token1")
    assert next(iterator) == term("token2")
    with pytest.raises(StopIteration):
        next(iterator)


def test_token_iterator_in_for_loop():
    iterator = TokenIterator(ListTokenStream.from_texts(["a", "b", "c"]))
    assert [token.text for token in iterator] == ["a", "b", "c"]
    assert iterator.position == 3


def test_increment_after_exhaustion_is_noop():
    iterator = TokenIterator(SingleTokenStream.from_text("only"))
    iterator.increment()
    assert iterator.exhausted
    assert iterator.position == 1

    iterator.increment()
    iterator.increment()
    assert iterator.position == 1
    assert iterator.dereference() is None


def test_iterator_over_empty_stream_starts_exhausted():
    iterator = TokenIterator(EmptyTokenStream())
    assert iterator.exhausted
    assert iterator.dereference() is None
    iterator.increment()
    assert iterator.position == 0
    assert list(iterator) == []


# ---------------------------------------------------------------------------
# Iterator equality
# ---------------------------------------------------------------------------


def test_iterators_over_distinct_streams_are_not_equal():
    iter1 = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))
    iter2 = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))

    assert iter1.not_equals(iter2)
    assert not iter1.equals(iter2)
    assert iter1 != iter2


def test_distinct_streams_can_compare_by_value():
    iter1 = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))
    iter2 = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))

    assert iter1.same_values(iter2)
    iter1.increment()
    assert not iter1.same_values(iter2)


def test_iterator_equals_itself():
    iterator = TokenIterator(ListTokenStream.from_texts(["token1"]))
    assert iterator.equals(iterator)
    assert iterator == iterator


def test_iterators_sharing_a_stream():
    stream = EmptyTokenStream()
    iter1 = TokenIterator(stream)
    iter2 = TokenIterator(stream)
    assert iter1 == iter2
    assert iter1.stream is iter2.stream


def test_iterator_is_unhashable():
    iterator = TokenIterator(EmptyTokenStream())
    with pytest.raises(TypeError):
        hash(iterator)


@pytest.mark.parametrize("other", [None, "token1", ListTokenStream.from_texts(["token1"])])
def test_iterator_compared_with_non_iterator(other):
    iterator = TokenIterator(ListTokenStream.from_texts(["token1"]))
    assert iterator.equals(other) is False
    assert iterator.not_equals(other) is True
    assert iterator.same_values(other) is False
    assert iterator != other
