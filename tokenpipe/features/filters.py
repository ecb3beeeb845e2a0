"""
Token filters and their composition.

A token filter maps the text of one token to zero or more output tokens.
Two filters are provided:

- StemmerTokenFilter reduces a word to its English stem (NLTK Snowball
  or Porter stemmer) and always returns exactly one token.
- StopWordRemover drops English stopwords and passes every other word
  through unchanged.

Filters are plain classes that satisfy the TokenFilter protocol; any
object with a compatible ``filter`` method can take part in a
FilterChain. Filter configuration (the stemming algorithm, the stopword
set) is fixed at construction, so one instance can be reused for any
number of calls.
"""

from __future__ import annotations

import logging
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Protocol,
    Sequence,
    runtime_checkable,
)

from nltk.corpus import stopwords as nltk_stopwords
from nltk.stem import PorterStemmer, SnowballStemmer
from sklearn.feature_extraction.text import ENGLISH_STOP_WORDS as SKLEARN_EN_STOPWORDS

from tokenpipe.features.lexer import Token, TokenType


logger = logging.getLogger(__name__)

# The only language the stemmer and stopword list support.
LANGUAGE = "english"


@runtime_checkable
class TokenFilter(Protocol):
    """Capability: map one token's text to an ordered list of tokens."""

    def filter(self, text: str) -> List[Token]:
        ...


# ---------------------------------------------------------------------------
# Stemming
# ---------------------------------------------------------------------------


class StemmerTokenFilter:
    """
    Replace a word with its English stem.

    Parameters
    ----------
    algorithm : str
        "snowball" (default, also known as Porter2) or "porter".

    Examples
    --------
    >>> StemmerTokenFilter().filter("running")
    [Token(text='run', token_type=<TokenType.TERM: 'term'>)]
    """

    ALGORITHMS = ("snowball", "porter")

    def __init__(self, algorithm: str = "snowball"):
        algo = (algorithm or "snowball").lower()
        if algo not in self.ALGORITHMS:
            raise ValueError(
                f"Unknown stemming algorithm {algorithm!r}; "
                f"expected one of {self.ALGORITHMS}"
            )
        self.algorithm = algo
        if algo == "porter":
            self._stemmer = PorterStemmer()
        else:
            self._stemmer = SnowballStemmer(LANGUAGE)

    def filter(self, text: str) -> List[Token]:
        return [Token(self._stemmer.stem(text), TokenType.TERM)]

    def __repr__(self) -> str:
        return f"StemmerTokenFilter(algorithm={self.algorithm!r})"


# ---------------------------------------------------------------------------
# Stopwords
# ---------------------------------------------------------------------------


def get_stopword_set(source: str = "nltk") -> FrozenSet[str]:
    """
    Build the English stopword set.

    Parameters
    ----------
    source : str
        "nltk" to use the NLTK stopwords corpus, "sklearn" to use
        scikit-learn's built-in English list. When the NLTK corpus has not
        been downloaded (``nltk.download("stopwords")``) the scikit-learn
        list is used instead and a warning is logged.

    Returns
    -------
    FrozenSet[str]
        Set of stopwords.
    """
    src = (source or "nltk").lower()

    if src == "sklearn":
        return frozenset(SKLEARN_EN_STOPWORDS)

    if src != "nltk":
        raise ValueError(
            f"Unknown stopword source {source!r}; expected 'nltk' or 'sklearn'"
        )

    try:
        return frozenset(nltk_stopwords.words(LANGUAGE))
    except LookupError:
        logger.warning(
            "NLTK stopwords corpus not found; falling back to scikit-learn's "
            "English stopword list."
        )
        return frozenset(SKLEARN_EN_STOPWORDS)


class StopWordRemover:
    """
    Drop English stopwords.

    Membership is tested on the text exactly as received, so the lookup is
    case-sensitive. The lexer lowercases its output, which matches the
    lowercase stopword lists.

    Parameters
    ----------
    source : str
        Stopword list to use, see get_stopword_set.
    extra_stopwords : Optional[Iterable[str]]
        Additional words to treat as stopwords.
    """

    def __init__(
        self,
        source: str = "nltk",
        extra_stopwords: Optional[Iterable[str]] = None,
    ):
        words = get_stopword_set(source)
        if extra_stopwords:
            words = words | frozenset(extra_stopwords)
        self.source = source
        self.stopwords: FrozenSet[str] = words

    def filter(self, text: str) -> List[Token]:
        if text in self.stopwords:
            return []
        return [Token(text, TokenType.TERM)]

    def __contains__(self, text: str) -> bool:
        return text in self.stopwords

    def __repr__(self) -> str:
        return f"StopWordRemover(source={self.source!r}, size={len(self.stopwords)})"


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


class FilterChain:
    """
    Apply an ordered list of filters to tokens.

    The output of stage i (flattened) is the input of stage i+1. When a
    stage produces nothing, the token is dropped and later stages are not
    consulted. An empty chain passes tokens through unchanged.

    Order matters: stemming before stopword removal can change which words
    match the stopword list.
    """

    def __init__(self, filters: Optional[Sequence[TokenFilter]] = None):
        self.filters: List[TokenFilter] = list(filters or [])

    def apply(self, token: Token) -> List[Token]:
        """Run one token through every stage and return what survives."""
        current: List[Token] = [token]
        for token_filter in self.filters:
            produced: List[Token] = []
            for item in current:
                produced.extend(token_filter.filter(item.text))
            if not produced:
                return []
            current = produced
        return current

    def apply_all(self, tokens: Iterable[Token]) -> List[Token]:
        """Run every token through the chain, preserving order."""
        output: List[Token] = []
        for token in tokens:
            output.extend(self.apply(token))
        return output

    def __len__(self) -> int:
        return len(self.filters)

    def __repr__(self) -> str:
        return f"FilterChain({self.filters!r})"


# ---------------------------------------------------------------------------
# Construction by name (used by the config-driven pipeline builder)
# ---------------------------------------------------------------------------


FILTER_REGISTRY: Dict[str, Callable[..., TokenFilter]] = {
    "stemmer": StemmerTokenFilter,
    "stopwords": StopWordRemover,
}


def build_filter(name: str, **options: Any) -> TokenFilter:
    """
    Construct a filter from its registry name and keyword options.

    Raises
    ------
    ValueError
        If ``name`` is not a registered filter.
    """
    key = (name or "").lower()
    factory = FILTER_REGISTRY.get(key)
    if factory is None:
        raise ValueError(
            f"Unknown filter {name!r}; available filters: {sorted(FILTER_REGISTRY)}"
        )
    return factory(**options)
