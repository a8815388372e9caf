"""Unit tests for logging configuration."""

import logging

from irrigation_dss.logging_setup import DEFAULT_CONFIG_PATH, configure_logging


def test_bundled_config_exists():
    """Test the bundled logging.json ships with the package."""
    assert DEFAULT_CONFIG_PATH.exists()


def test_configure_from_bundled_file():
    """Test the package logger is configured at INFO."""
    configure_logging()

    assert logging.getLogger("irrigation_dss").level == logging.INFO


def test_missing_file_falls_back(tmp_path, monkeypatch):
    """Test a missing config file falls back to basicConfig."""
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(tmp_path / "missing.json")

    assert calls
    assert calls[0]["level"] == logging.INFO
