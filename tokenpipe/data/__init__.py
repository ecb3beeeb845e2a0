"""
Document acquisition and data configuration utilities.

This subpackage provides:
- the Document record handed to the tokenization pipeline
- a loader that discovers plain-text and PDF files in a location
- functions to read the data configuration from config/data.yaml.
"""
