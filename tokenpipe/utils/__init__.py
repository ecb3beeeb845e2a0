"""
Shared utility functions.

This subpackage includes:
- run configuration loading (config/run.yaml)
- directory helpers for logs and exported results
- lightweight logging helpers used by the runner scripts.
"""
