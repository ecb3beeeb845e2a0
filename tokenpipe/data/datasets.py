"""
Data configuration loading.

This module reads config/data.yaml, which drives both sides of the
tokenization run:

- the "documents" section configures document acquisition (source
  location, text encoding, PDF failure placeholder)
- the "preprocessing" section lists the token filters, in order, that
  the pipeline applies after lexing
"""

from __future__ import annotations

import os
from typing import Any, Dict, List

import yaml


DEFAULT_DATA_CONFIG_PATH = "config/data.yaml"

REQUIRED_SECTIONS = ("documents", "preprocessing")


def load_yaml(path: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file and return it as a dictionary.

    Parameters
    ----------
    path : str
        Path to the YAML file.

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the YAML file is empty or cannot be parsed.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    if cfg is None:
        raise ValueError(f"Config file is empty or invalid: {path}")

    return cfg


def load_data_config(config_path: str = DEFAULT_DATA_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load and return the full data configuration dictionary.

    Parameters
    ----------
    config_path : str, optional
        Path to the data YAML configuration file.

    Returns
    -------
    Dict[str, Any]
        Dictionary containing the "documents" and "preprocessing" sections.

    Raises
    ------
    KeyError
        If a required section is missing.
    """
    cfg = load_yaml(config_path)

    for section in REQUIRED_SECTIONS:
        if section not in cfg:
            raise KeyError(f'Missing "{section}" section in data config: {config_path}')

    return cfg


def get_documents_config(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> Dict[str, Any]:
    """Return the 'documents' section of the data configuration."""
    return load_data_config(config_path)["documents"] or {}


def get_filter_specs(
    config_path: str = DEFAULT_DATA_CONFIG_PATH,
) -> List[Dict[str, Any]]:
    """
    Return the ordered list of filter specifications from the
    'preprocessing' section.

    Each entry is a mapping with a "name" key plus filter options, e.g.
    ``{"name": "stemmer", "algorithm": "snowball"}``. A bare string is
    accepted as shorthand for ``{"name": <string>}``.

    Raises
    ------
    ValueError
        If the "filters" entry is not a list or an entry has no name.
    """
    preprocessing_cfg = load_data_config(config_path)["preprocessing"] or {}
    raw_specs = preprocessing_cfg.get("filters", []) or []

    if not isinstance(raw_specs, list):
        raise ValueError(
            f'"preprocessing.filters" must be a list in data config: {config_path}'
        )

    specs: List[Dict[str, Any]] = []
    for entry in raw_specs:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError(f"Invalid filter entry in {config_path}: {entry!r}")
        specs.append(dict(entry))

    return specs
