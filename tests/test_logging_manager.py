"""Tests for the progress-aware logging manager."""

import io
import logging

import pytest

from apexlog_sync.logging import LoggingManager


@pytest.fixture
def manager(tmp_path):
    manager = LoggingManager()
    stream = io.StringIO()
    manager.setup(tmp_path / "logs" / "sync.log", console_level=logging.INFO, stream=stream)
    yield manager, stream, tmp_path / "logs" / "sync.log"
    manager.cleanup()


def test_console_and_file_output(manager):
    manager, stream, log_file = manager
    log = logging.getLogger("apexlog_sync.test")

    log.info("visible on console")
    log.debug("file only")

    assert "INFO - visible on console" in stream.getvalue()
    assert "file only" not in stream.getvalue()
    contents = log_file.read_text(encoding="utf-8")
    assert "visible on console" in contents
    assert "file only" in contents


def test_progress_mode_buffers_warnings(manager):
    manager, stream, log_file = manager
    log = logging.getLogger("apexlog_sync.test")

    with manager.progress_mode():
        log.info("hidden during progress")
        log.warning("held back")
        assert "held back" not in stream.getvalue()

    assert "held back" in stream.getvalue()
    assert "hidden during progress" not in stream.getvalue()
    assert "hidden during progress" in log_file.read_text(encoding="utf-8")


def test_cleanup_restores_root_handlers(tmp_path):
    root = logging.getLogger()
    before = list(root.handlers)
    manager = LoggingManager()

    manager.setup(tmp_path / "sync.log", stream=io.StringIO())
    manager.cleanup()

    assert root.handlers == before


def test_get_instance_is_singleton():
    assert LoggingManager.get_instance() is LoggingManager.get_instance()


def test_progress_mode_routes_errors_to_panel(manager, monkeypatch):
    manager, stream, log_file = manager
    shown = []
    monkeypatch.setattr(manager, "display_critical_error", shown.append)

    with manager.progress_mode():
        logging.getLogger("apexlog_sync.test").error("query failed")

    assert [record.getMessage() for record in shown] == ["query failed"]
    assert "query failed" not in stream.getvalue()
    assert "query failed" in log_file.read_text(encoding="utf-8")


def test_logging_resumes_after_progress_mode(manager):
    manager, stream, log_file = manager
    log = logging.getLogger("apexlog_sync.test")

    with manager.progress_mode():
        pass
    log.info("back on console")

    assert "INFO - back on console" in stream.getvalue()
