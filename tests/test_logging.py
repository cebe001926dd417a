"""Tests for structlog/stdlib logging setup."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import pytest
import structlog

from go_dep_updater.core.logging import setup_logging


@pytest.fixture(autouse=True)
def _restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("go_dep_updater").setLevel(logging.NOTSET)


class TestSetupLogging:
    def test_explicit_level(self):
        setup_logging(level="debug")
        assert logging.getLogger("go_dep_updater").level == logging.DEBUG

    def test_env_level(self):
        with patch.dict(os.environ, {"GO_DEP_UPDATER_LOG_LEVEL": "warning"}):
            setup_logging()
        assert logging.getLogger("go_dep_updater").level == logging.WARNING

    def test_argument_beats_env(self):
        with patch.dict(os.environ, {"GO_DEP_UPDATER_LOG_LEVEL": "error"}):
            setup_logging(level="INFO")
        assert logging.getLogger("go_dep_updater").level == logging.INFO

    def test_json_format_renders_json(self, capsys):
        setup_logging(level="INFO", fmt="json")
        structlog.get_logger("go_dep_updater.test").info("pipeline.done", project="app")
        err = capsys.readouterr().err
        assert '"event": "pipeline.done"' in err
        assert '"project": "app"' in err
