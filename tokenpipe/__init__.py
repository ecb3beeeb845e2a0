"""
Top-level package for the document tokenization pipeline.

This package contains modules for:
- document acquisition (plain-text and PDF files)
- lexical scanning and classification of raw text
- token filters (stemming, stopword removal) and their composition
- pull-based token streams and a lookahead token iterator
- configuration and logging helpers shared by the runner scripts

The usual entry point is tokenpipe.features.preprocessing.build_pipeline.
"""

__version__ = "0.1.0"
