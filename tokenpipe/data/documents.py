"""
Document acquisition.

This module discovers documents in a source location and queues them
for the tokenization pipeline:

- the source is either a single file or a directory whose regular files
  are loaded (subdirectories are not descended into)
- ".txt" files are read as plain text
- ".pdf" files are converted to text page by page with PyMuPDF; a PDF
  that cannot be read yields a fixed placeholder string instead of
  failing the whole run
- every other extension, and any text file that cannot be decoded with
  the configured encoding, is skipped with a warning
- each document receives a freshly generated UUID4 identifier

Documents are handed out first-in-first-out, in discovery order.
Directory entries are visited in sorted name order, but callers should
not rely on any particular order across platforms.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional

import fitz

from tokenpipe.data.datasets import get_documents_config


logger = logging.getLogger(__name__)


PDF_FAILURE_PLACEHOLDER = "[Failed to extract content from PDF]"

SUPPORTED_EXTENSIONS = (".txt", ".pdf")


@dataclass(frozen=True)
class Document:
    """A loaded document ready for tokenization."""

    document_id: str
    document_name: str
    document_content: str


class DocumentLoader:
    """
    Load documents from a file or a directory into a FIFO queue.

    Parameters
    ----------
    source : str
        Path to a single file or to a directory of files.
    encoding : str
        Encoding used to read plain-text files.
    pdf_placeholder : str
        Content used for PDF files whose text cannot be extracted.

    Usage
    -----
        loader = DocumentLoader("data/raw")
        loader.load()
        for document in loader:
            ...
    """

    def __init__(
        self,
        source: str,
        encoding: str = "utf-8",
        pdf_placeholder: str = PDF_FAILURE_PLACEHOLDER,
    ):
        self.source = source
        self.encoding = encoding
        self.pdf_placeholder = pdf_placeholder
        self.documents: Deque[Document] = deque()

    # ------------------------------------------------------------------
    # Discovery
    # ------------------------------------------------------------------

    def load(self) -> int:
        """
        Discover and read every supported document under ``source``.

        Returns
        -------
        int
            Number of documents queued by this call.

        Raises
        ------
        FileNotFoundError
            If ``source`` is neither a file nor a directory.
        """
        before = len(self.documents)

        if os.path.isdir(self.source):
            for name in sorted(os.listdir(self.source)):
                path = os.path.join(self.source, name)
                if os.path.isfile(path):
                    self._load_file(path)
        elif os.path.isfile(self.source):
            self._load_file(self.source)
        else:
            raise FileNotFoundError(f"Document source not found: {self.source}")

        loaded = len(self.documents) - before
        logger.debug("Queued %d document(s) from %s", loaded, self.source)
        return loaded

    def _load_file(self, path: str) -> None:
        extension = os.path.splitext(path)[1].lower()
        if extension not in SUPPORTED_EXTENSIONS:
            logger.warning("Unsupported file type %r, skipping: %s", extension, path)
            return

        if extension == ".pdf":
            content = self._read_pdf(path)
        else:
            try:
                content = self._read_text(path)
            except UnicodeDecodeError as exc:
                logger.warning(
                    "Cannot decode %s as %s, skipping: %s", path, self.encoding, exc
                )
                return
        self._enqueue(path, content)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    def _read_text(self, path: str) -> str:
        with open(path, "r", encoding=self.encoding) as f:
            return f.read()

    def _read_pdf(self, path: str) -> str:
        """Concatenate the text of every page, one newline after each page."""
        try:
            with fitz.open(path) as pdf:
                return "".join(page.get_text() + "\n" for page in pdf)
        except Exception as exc:  # PyMuPDF has no common base error
            logger.warning("Failed to extract text from PDF %s: %s", path, exc)
            return self.pdf_placeholder

    def _enqueue(self, path: str, content: str) -> None:
        self.documents.append(
            Document(
                document_id=str(uuid.uuid4()),
                document_name=os.path.basename(path),
                document_content=content,
            )
        )

    # ------------------------------------------------------------------
    # Consumption
    # ------------------------------------------------------------------

    def next_document(self) -> Optional[Document]:
        """Return the oldest queued document, or None when the queue is empty."""
        if not self.documents:
            return None
        return self.documents.popleft()

    def __iter__(self) -> Iterator[Document]:
        """Drain the queue in FIFO order."""
        while self.documents:
            yield self.documents.popleft()

    def __len__(self) -> int:
        return len(self.documents)


def load_documents(
    source: Optional[str] = None,
    config_path: Optional[str] = None,
) -> DocumentLoader:
    """
    Build a DocumentLoader and load it.

    Settings come from the "documents" section of the data config when
    ``config_path`` is given; an explicit ``source`` overrides the
    configured one.

    Raises
    ------
    ValueError
        If no source is given and none is configured.
    """
    docs_cfg = get_documents_config(config_path) if config_path else {}

    source = source or docs_cfg.get("source")
    if not source:
        raise ValueError("No document source given or configured.")

    loader = DocumentLoader(
        source=source,
        encoding=docs_cfg.get("encoding", "utf-8"),
        pdf_placeholder=docs_cfg.get("pdf_placeholder", PDF_FAILURE_PLACEHOLDER),
    )
    loader.load()
    return loader
