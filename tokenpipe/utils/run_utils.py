"""
Run configuration and logging helpers.

This module centralizes the functionality shared by the runner scripts:

- loading the run configuration (config/run.yaml)
- ensuring directories exist before writing files
- constructing loggers that respect the logging settings of the run config
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from tokenpipe.data.datasets import load_yaml


DEFAULT_RUN_CONFIG_PATH = "config/run.yaml"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# Config loading
# ---------------------------------------------------------------------------


def load_run_config(
    config_path: str = DEFAULT_RUN_CONFIG_PATH,
) -> Dict[str, Any]:
    """
    Load the run configuration ("logging" and "paths" sections).

    Both sections are optional; callers read the keys they need with
    defaults. Missing or empty files are reported by load_yaml.
    """
    return load_yaml(config_path)


# ---------------------------------------------------------------------------
# Filesystem utilities
# ---------------------------------------------------------------------------


def ensure_dir_exists(path: str) -> None:
    """Create ``path`` (and parents) unless it is empty or already exists."""
    if path:
        os.makedirs(path, exist_ok=True)


# ---------------------------------------------------------------------------
# Logging utilities
# ---------------------------------------------------------------------------


def _parse_log_level(level_str: Optional[str]) -> int:
    """Map a level name such as "debug" to its logging constant; INFO if unknown."""
    level = logging.getLevelName((level_str or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def _attach_handler(
    logger: logging.Logger,
    handler: logging.Handler,
    level: int,
) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(handler)


def _log_file_path(
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> str:
    """Resolve <paths.logs_dir>/<logging.file_prefix>[_<suffix>].log."""
    logs_dir = (config.get("paths", {}) or {}).get("logs_dir", "outputs/logs")
    prefix = (config.get("logging", {}) or {}).get("file_prefix", "tokenpipe")
    stem = f"{prefix}_{log_file_suffix}" if log_file_suffix else prefix
    return os.path.join(logs_dir, f"{stem}.log")


def get_logger(
    name: str,
    config: Dict[str, Any],
    log_file_suffix: Optional[str] = None,
) -> logging.Logger:
    """
    Return a logger configured from the "logging" section of the run config.

    The logger always writes to the console; with ``logging.to_file`` set it
    also writes to the file given by _log_file_path. A logger that already
    has handlers is returned untouched, so repeated calls are cheap.

    Parameters
    ----------
    name : str
        Logger name.
    config : Dict[str, Any]
        Run configuration (typically from config/run.yaml).
    log_file_suffix : Optional[str]
        Optional suffix appended to the log file name (e.g., "tokenizer").
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    logging_cfg = config.get("logging", {}) or {}
    level = _parse_log_level(logging_cfg.get("level"))
    logger.setLevel(level)

    _attach_handler(logger, logging.StreamHandler(), level)

    if logging_cfg.get("to_file", False):
        path = _log_file_path(config, log_file_suffix)
        ensure_dir_exists(os.path.dirname(path))
        _attach_handler(logger, logging.FileHandler(path, encoding="utf-8"), level)

    logger.propagate = False
    return logger
