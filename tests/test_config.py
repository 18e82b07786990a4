"""Tests for settings and logging setup."""

import logging
from pathlib import Path

from wave_editor.config import DEFAULT_LOG_LEVEL, DEFAULT_STORE_PATH, load_settings
from wave_editor.log import get_logger, setup_logging


def test_defaults_when_unset():
    settings = load_settings({})
    assert settings.store_path == DEFAULT_STORE_PATH
    assert settings.log_level == DEFAULT_LOG_LEVEL


def test_environment_overrides():
    settings = load_settings({"WAVE_EDITOR_STORE": "/tmp/enemies.json", "WAVE_EDITOR_LOG_LEVEL": "debug"})
    assert settings.store_path == Path("/tmp/enemies.json")
    assert settings.log_level == "DEBUG"


def test_setup_logging_installs_single_handler():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    try:
        setup_logging("INFO")
        logger = setup_logging(logging.DEBUG)

        assert logger is root
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = handlers
        root.setLevel(level)


def test_get_logger_defaults_to_app_namespace():
    assert get_logger().name == "wave_editor"
    assert get_logger("wave_editor.cli").name == "wave_editor.cli"
