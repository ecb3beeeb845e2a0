"""
Lexical scanning and classification of raw document text.

The lexer turns a complete document string into an ordered sequence of
typed, normalized tokens:

- the text is lowercased, then scanned left-to-right for candidates
  (dotted abbreviations such as "r.d.c.", or word runs optionally
  followed by an apostrophe suffix such as "john's")
- each candidate is classified, first match wins, as an abbreviation,
  a possessive, a plain term, or invalid
- the candidate is normalized according to its class (periods removed
  from abbreviations, the apostrophe suffix cut from possessives)
- invalid candidates are dropped

Classification patterns are compiled at import time and the scan pattern
when a Lexer is constructed; neither is recompiled per call.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterator, List, Optional


logger = logging.getLogger(__name__)


# Abbreviations come first so "r.d.c." is not split into "r", "d", "c".
DEFAULT_SCAN_PATTERN = r"(?:[a-z]+\.){2,}|\w+(?:'\w+)?"

ABBREVIATION_PATTERN = r"^([a-zA-Z]+\.){2,}$"
POSSESSIVE_PATTERN = r"^[a-zA-Z0-9]+'[a-zA-Z]+$"
TERM_PATTERN = r"^[a-zA-Z0-9]+$"


class TokenType(enum.Enum):
    """Lexical class of a token, decided from its surface form."""

    ABBREVIATION = "abbreviation"
    POSSESSIVE = "possessive"
    TERM = "term"
    INVALID = "invalid"


@dataclass(frozen=True)
class Token:
    """
    An immutable, classified and normalized lexical unit.

    ``token_type`` reflects the shape of the candidate before
    normalization; normalization only ever changes ``text``.
    """

    text: str
    token_type: TokenType = TokenType.TERM


class PatternCompilationError(ValueError):
    """Raised when the lexer's own matching rules cannot be compiled."""


def _compile(pattern: str, role: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as exc:
        logger.error("Failed to compile %s pattern %r: %s", role, pattern, exc)
        raise PatternCompilationError(
            f"Invalid {role} pattern {pattern!r}: {exc}"
        ) from exc


_ABBREVIATION_RE = _compile(ABBREVIATION_PATTERN, "abbreviation")
_POSSESSIVE_RE = _compile(POSSESSIVE_PATTERN, "possessive")
_TERM_RE = _compile(TERM_PATTERN, "term")


def classify_token(candidate: str) -> TokenType:
    """
    Classify a raw candidate substring.

    Rules are tried in order and the first whole-string match wins:
    abbreviation, possessive, term. Anything else is INVALID.

    Examples
    --------
    >>> classify_token("r.d.c.")
    <TokenType.ABBREVIATION: 'abbreviation'>
    >>> classify_token("john's")
    <TokenType.POSSESSIVE: 'possessive'>
    >>> classify_token("foo_bar")
    <TokenType.INVALID: 'invalid'>
    """
    if _ABBREVIATION_RE.match(candidate):
        return TokenType.ABBREVIATION
    if _POSSESSIVE_RE.match(candidate):
        return TokenType.POSSESSIVE
    if _TERM_RE.match(candidate):
        return TokenType.TERM
    return TokenType.INVALID


def normalize_token(candidate: str, token_type: TokenType) -> str:
    """
    Normalize a candidate according to its class.

    - ABBREVIATION: every period is removed ("r.d.c." -> "rdc")
    - POSSESSIVE: only the part before the first apostrophe is kept
      ("john's" -> "john")
    - TERM, INVALID: returned unchanged
    """
    if token_type is TokenType.ABBREVIATION:
        return candidate.replace(".", "")
    if token_type is TokenType.POSSESSIVE:
        return candidate.split("'", 1)[0]
    return candidate


class Lexer:
    """
    Scans document text into classified tokens.

    Parameters
    ----------
    scan_pattern : Optional[str]
        Regular expression used to extract candidates from the lowercased
        text. Defaults to DEFAULT_SCAN_PATTERN.

    Raises
    ------
    PatternCompilationError
        If the scan pattern is not a valid regular expression.

    Usage
    -----
    >>> [t.text for t in Lexer().tokenize("R.D.C. is a country in Africa.")]
    ['rdc', 'is', 'a', 'country', 'in', 'africa']
    """

    def __init__(self, scan_pattern: Optional[str] = None):
        self.scan_pattern = scan_pattern or DEFAULT_SCAN_PATTERN
        self._scan_re = _compile(self.scan_pattern, "scan")

    def iter_tokens(self, text: str) -> Iterator[Token]:
        """
        Lazily yield the tokens of ``text`` in document order.

        Invalid candidates are skipped.
        """
        if not text:
            return

        for match in self._scan_re.finditer(text.lower()):
            candidate = match.group(0)
            token_type = classify_token(candidate)
            if token_type is TokenType.INVALID:
                continue
            yield Token(normalize_token(candidate, token_type), token_type)

    def tokenize(self, text: str) -> List[Token]:
        """Return all tokens of ``text`` as a list."""
        return list(self.iter_tokens(text))

    def __repr__(self) -> str:
        return f"Lexer(scan_pattern={self.scan_pattern!r})"


_DEFAULT_LEXER: Optional[Lexer] = None


def get_default_lexer() -> Lexer:
    """Return a shared Lexer built with the default scan pattern."""
    global _DEFAULT_LEXER
    if _DEFAULT_LEXER is None:
        _DEFAULT_LEXER = Lexer()
    return _DEFAULT_LEXER


def tokenize_text(text: str) -> List[Token]:
    """Tokenize ``text`` with the shared default lexer."""
    return get_default_lexer().tokenize(text)
