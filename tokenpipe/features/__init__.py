"""
Tokenization and token filtering.

This subpackage includes:
- the lexer that scans raw text and classifies each candidate
- token filters (stemming, stopword removal) and their composition
- the configurable pipeline that ties the lexer and filters together.
"""
