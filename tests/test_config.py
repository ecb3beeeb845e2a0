"""
Basic tests for configuration loading and logging helpers.

These tests validate that:

- config/data.yaml and config/run.yaml load and contain their sections
- missing, empty, or incomplete config files are reported clearly
- the run logger honours the configured level and optional log file
"""

from __future__ import annotations

import logging
import os

import pytest

from tokenpipe.data.datasets import (
    get_documents_config,
    get_filter_specs,
    load_data_config,
)
from tokenpipe.utils.run_utils import get_logger, load_run_config


PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
DATA_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "data.yaml")
RUN_CONFIG_PATH = os.path.join(PROJECT_ROOT, "config", "run.yaml")


def test_load_data_config_has_required_keys():
    cfg = load_data_config(DATA_CONFIG_PATH)

    assert "documents" in cfg
    assert "preprocessing" in cfg

    documents = get_documents_config(DATA_CONFIG_PATH)
    assert "source" in documents
    assert documents["pdf_placeholder"] == "[Failed to extract content from PDF]"

    specs = get_filter_specs(DATA_CONFIG_PATH)
    assert [spec["name"] for spec in specs] == ["stopwords", "stemmer"]


def test_load_run_config_has_required_keys():
    cfg = load_run_config(RUN_CONFIG_PATH)
    assert "level" in cfg["logging"]
    assert "results_dir" in cfg["paths"]


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_data_config(str(tmp_path / "missing.yaml"))
    with pytest.raises(FileNotFoundError):
        load_run_config(str(tmp_path / "missing.yaml"))


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_data_config(str(path))


def test_config_missing_section(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text("documents:\n  source: data/raw\n", encoding="utf-8")
    with pytest.raises(KeyError):
        load_data_config(str(path))


def test_filter_specs_must_be_a_list(tmp_path):
    path = tmp_path / "data.yaml"
    path.write_text(
        "documents: {}\npreprocessing:\n  filters: stemmer\n", encoding="utf-8"
    )
    with pytest.raises(ValueError):
        get_filter_specs(str(path))


def test_get_logger_writes_log_file(tmp_path):
    logs_dir = tmp_path / "logs"
    config = {
        "logging": {"level": "DEBUG", "to_file": True, "file_prefix": "test"},
        "paths": {"logs_dir": str(logs_dir)},
    }

    logger = get_logger("tokenpipe-test-file", config, log_file_suffix="unit")
    logger.debug("hello from the test")
    for handler in logger.handlers:
        handler.flush()

    assert logger.level == logging.DEBUG
    log_path = logs_dir / "test_unit.log"
    assert log_path.exists()
    assert "hello from the test" in log_path.read_text(encoding="utf-8")

    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_get_logger_is_configured_once():
    config = {"logging": {"level": "warning", "to_file": False}}
    first = get_logger("tokenpipe-test-once", config)
    second = get_logger("tokenpipe-test-once", config)

    assert first is second
    assert len(second.handlers) == 1
    assert second.level == logging.WARNING


def test_empty_run_config_file(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        load_run_config(str(path))


def test_run_config_without_sections_is_accepted(tmp_path):
    path = tmp_path / "run.yaml"
    path.write_text("logging:\n  level: debug\n", encoding="utf-8")
    assert load_run_config(str(path)) == {"logging": {"level": "debug"}}


def test_get_logger_unknown_level_defaults_to_info():
    logger = get_logger("tokenpipe-test-level", {"logging": {"level": "chatty"}})
    assert logger.level == logging.INFO
