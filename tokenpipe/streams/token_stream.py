"""
Pull-based token streams and a one-token-lookahead iterator.

A token stream hands out tokens one at a time through ``next_token()``
and returns None once it has nothing left. Exhaustion is permanent: a
stream that has returned None keeps returning None.

Three streams are provided:

- EmptyTokenStream: exhausted from the start
- SingleTokenStream: one token, then exhausted
- ListTokenStream: a finite sequence, consumed first-in-first-out

TokenIterator wraps a stream, pulls the first token immediately and
tracks how many times it has advanced. Two iterators compare equal only
when they wrap the *same* stream object, sit at the same position and
hold the same current token; iterators over distinct streams are never
equal even if the streams carry identical tokens. Use
``TokenIterator.same_values`` to compare position and current token
while ignoring stream identity.
"""

from __future__ import annotations

from collections import deque
from typing import Iterable, Iterator, Optional, Protocol, runtime_checkable

from tokenpipe.features.lexer import Token, TokenType


@runtime_checkable
class TokenStream(Protocol):
    """Capability: return the next token, or None when exhausted."""

    def next_token(self) -> Optional[Token]:
        ...


class EmptyTokenStream:
    """A stream with no tokens."""

    def next_token(self) -> Optional[Token]:
        return None

    def __repr__(self) -> str:
        return "EmptyTokenStream()"


class SingleTokenStream:
    """A stream that yields exactly one token."""

    def __init__(self, token: Token):
        self._token: Optional[Token] = token

    @classmethod
    def from_text(cls, text: str) -> "SingleTokenStream":
        return cls(Token(text, TokenType.TERM))

    def next_token(self) -> Optional[Token]:
        token, self._token = self._token, None
        return token

    def __repr__(self) -> str:
        return f"SingleTokenStream({self._token!r})"


class ListTokenStream:
    """A stream over a finite, ordered collection of tokens."""

    def __init__(self, tokens: Iterable[Token] = ()):
        self._tokens = deque(tokens)

    @classmethod
    def from_texts(cls, texts: Iterable[str]) -> "ListTokenStream":
        """Build a stream of TERM tokens from plain strings."""
        return cls(Token(text, TokenType.TERM) for text in texts)

    def next_token(self) -> Optional[Token]:
        if not self._tokens:
            return None
        return self._tokens.popleft()

    def __len__(self) -> int:
        """Number of tokens not yet handed out."""
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"ListTokenStream({list(self._tokens)!r})"


class TokenIterator:
    """
    Cursor over a TokenStream with one token of lookahead.

    The first token is pulled at construction, so ``dereference()`` is
    meaningful before any advance. The iterator owns its stream; nothing
    else should pull from it.

    States are Active (a current token is held) and Exhausted (no current
    token). ``increment()`` moves Active to Active or Exhausted; Exhausted
    is terminal and ``position`` stops counting there.

    Usage
    -----
    >>> it = TokenIterator(ListTokenStream.from_texts(["token1", "token2"]))
    >>> it.dereference().text
    'token1'
    >>> [token.text for token in it]
    ['token1', 'token2']
    >>> it.exhausted, it.position
    (True, 2)
    """

    def __init__(self, stream: TokenStream):
        self._stream = stream
        self._position = 0
        self._current: Optional[Token] = stream.next_token()

    @property
    def stream(self) -> TokenStream:
        return self._stream

    @property
    def position(self) -> int:
        """Number of successful advances so far."""
        return self._position

    @property
    def exhausted(self) -> bool:
        return self._current is None

    def dereference(self) -> Optional[Token]:
        """Return the current token without consuming it, or None."""
        return self._current

    def increment(self) -> None:
        """Advance to the next token; a no-op once exhausted."""
        if self._current is None:
            return
        self._current = self._stream.next_token()
        self._position += 1

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self._current
        if token is None:
            raise StopIteration
        self.increment()
        return token

    def equals(self, other: object) -> bool:
        """Same stream object, same position and same current token."""
        if not isinstance(other, TokenIterator):
            return False
        return (
            self._stream is other._stream
            and self._position == other._position
            and self._current == other._current
        )

    def not_equals(self, other: object) -> bool:
        return not self.equals(other)

    def same_values(self, other: object) -> bool:
        """Equal position and current token, regardless of the stream."""
        if not isinstance(other, TokenIterator):
            return False
        return self._position == other._position and self._current == other._current

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TokenIterator):
            return NotImplemented
        return self.equals(other)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, TokenIterator):
            return NotImplemented
        return self.not_equals(other)

    # Equality depends on mutable state.
    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TokenIterator(position={self._position}, current={self._current!r})"
