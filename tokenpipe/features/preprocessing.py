"""
Tokenization pipeline.

This module wires the pieces of the package into one pipeline:

  raw text -> Lexer -> FilterChain -> list / ListTokenStream / TokenIterator

The filter chain is configured by the "preprocessing" section of
config/data.yaml, e.g.::

    preprocessing:
      filters:
        - name: stopwords
          source: nltk
        - name: stemmer
          algorithm: snowball

Filters run in the listed order. An empty or missing list means tokens
leave the pipeline exactly as the lexer produced them.

We also provide helpers that run the pipeline over loaded documents and
over pandas Series, producing per-document token listings.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

import pandas as pd

from tokenpipe.data.datasets import DEFAULT_DATA_CONFIG_PATH, get_filter_specs
from tokenpipe.data.documents import Document
from tokenpipe.features.filters import FilterChain, TokenFilter, build_filter
from tokenpipe.features.lexer import Lexer, Token, get_default_lexer
from tokenpipe.streams.token_stream import ListTokenStream, TokenIterator


TOKEN_FRAME_COLUMNS = [
    "document_id",
    "document_name",
    "position",
    "token",
    "token_type",
]


class TokenPipeline:
    """
    Lexer followed by an ordered chain of token filters.

    Parameters
    ----------
    lexer : Optional[Lexer]
        Lexer to use. Defaults to the shared default lexer.
    filters : Optional[Sequence[TokenFilter]]
        Filters applied, in order, to every token the lexer emits.
    """

    def __init__(
        self,
        lexer: Optional[Lexer] = None,
        filters: Optional[Sequence[TokenFilter]] = None,
    ):
        self.lexer = lexer or get_default_lexer()
        self.chain = FilterChain(filters)

    def tokens(self, text: str) -> List[Token]:
        """Return the filtered tokens of ``text`` in document order."""
        return self.chain.apply_all(self.lexer.iter_tokens(text))

    def stream(self, text: str) -> ListTokenStream:
        """Return the filtered tokens of ``text`` as a token stream."""
        return ListTokenStream(self.tokens(text))

    def iterator(self, text: str) -> TokenIterator:
        """Return a lookahead iterator over the filtered tokens of ``text``."""
        return TokenIterator(self.stream(text))

    def process_document(self, document: Document) -> List[Token]:
        return self.tokens(document.document_content)

    def __repr__(self) -> str:
        return f"TokenPipeline(lexer={self.lexer!r}, chain={self.chain!r})"


# ---------------------------------------------------------------------------
# Config-driven construction
# ---------------------------------------------------------------------------


def build_filters(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> List[TokenFilter]:
    """
    Instantiate the filters listed under preprocessing.filters, in order.

    Raises
    ------
    ValueError
        If an entry names an unknown filter.
    """
    filters: List[TokenFilter] = []
    for spec in get_filter_specs(config_path):
        options = dict(spec)
        name = options.pop("name")
        filters.append(build_filter(name, **options))
    return filters


def build_pipeline(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> TokenPipeline:
    """Build a TokenPipeline whose filter chain follows config/data.yaml."""
    return TokenPipeline(filters=build_filters(config_path))


def preprocess_text_to_tokens(
    text: str,
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> List[str]:
    """
    Full pipeline for a single text, returning token strings.

    The pipeline is rebuilt from the configuration on every call; build
    it once with build_pipeline() when processing many texts.
    """
    pipeline = build_pipeline(config_path)
    return [token.text for token in pipeline.tokens(text)]


# ---------------------------------------------------------------------------
# Document and pandas helpers
# ---------------------------------------------------------------------------


def documents_to_frame(
    documents: Iterable[Document],
    pipeline: TokenPipeline,
) -> pd.DataFrame:
    """
    Run the pipeline over documents and list every emitted token.

    Parameters
    ----------
    documents : Iterable[Document]
        Documents to tokenize, e.g. a loaded DocumentLoader.
    pipeline : TokenPipeline
        Configured pipeline.

    Returns
    -------
    pd.DataFrame
        One row per token with columns TOKEN_FRAME_COLUMNS. ``position`` is
        the token's index within its document's output.
    """
    rows = []
    for document in documents:
        for position, token in enumerate(pipeline.process_document(document)):
            rows.append(
                {
                    "document_id": document.document_id,
                    "document_name": document.document_name,
                    "position": position,
                    "token": token.text,
                    "token_type": token.token_type.value,
                }
            )
    return pd.DataFrame(rows, columns=TOKEN_FRAME_COLUMNS)


def preprocess_series_to_tokens(
    series: pd.Series,
    pipeline: TokenPipeline,
) -> pd.Series:
    """
    Apply the pipeline to a pandas Series of text and return a Series of
    token-string lists, aligned on the original index.
    """
    return series.astype(str).apply(
        lambda text: [token.text for token in pipeline.tokens(text)]
    )


def count_tokens_per_document(
    documents: Sequence[Document],
    tokens_df: pd.DataFrame,
) -> pd.Series:
    """
    Number of tokens each document produced, in document order.

    Documents that produced no tokens are listed with a count of 0.

    Parameters
    ----------
    documents : Sequence[Document]
        The documents that were tokenized.
    tokens_df : pd.DataFrame
        Token frame produced by documents_to_frame for those documents.

    Returns
    -------
    pd.Series
        Counts indexed by document_id, named "tokens".
    """
    ids = [document.document_id for document in documents]
    counts = tokens_df.groupby("document_id").size()
    return counts.reindex(ids, fill_value=0).astype(int).rename("tokens")
