"""
Test Suite for the Logger Configuration.
"""

# Standard Imports
import logging
from logging.handlers import RotatingFileHandler

# Third-Party Imports
import pytest

# Internal Imports
from lab_vision.core.logger import Logger, LogStyle


@pytest.mark.unit
def test_console_only_by_default():
    log = Logger.setup(name="lab_vision_test_console")

    assert log.propagate is False
    assert len(log.handlers) == 1
    assert not any(isinstance(h, RotatingFileHandler) for h in log.handlers)


@pytest.mark.unit
def test_repeat_setup_does_not_duplicate_handlers():
    Logger.setup(name="lab_vision_test_repeat")
    log = Logger.setup(name="lab_vision_test_repeat", level="WARNING")

    assert len(log.handlers) == 1
    assert log.level == logging.WARNING


@pytest.mark.unit
def test_log_dir_adds_rotating_file(tmp_path):
    log = Logger.setup(name="lab_vision_test_file", log_dir=tmp_path / "logs")
    log.info("hello file")
    for handler in log.handlers:
        handler.flush()

    log_file = Logger.get_log_file("lab_vision_test_file")
    assert log_file is not None and log_file.parent == tmp_path / "logs"
    assert "hello file" in log_file.read_text(encoding="utf-8")
    assert sum(isinstance(h, RotatingFileHandler) for h in log.handlers) == 1


@pytest.mark.unit
def test_debug_env_overrides_level(monkeypatch):
    monkeypatch.setenv("DEBUG", "1")
    log = Logger.setup(name="lab_vision_test_debug", level="ERROR")
    assert log.level == logging.DEBUG


@pytest.mark.unit
def test_unknown_level_falls_back_to_info(monkeypatch):
    monkeypatch.delenv("DEBUG", raising=False)
    log = Logger.setup(name="lab_vision_test_fallback", level="CHATTY")
    assert log.level == logging.INFO


@pytest.mark.unit
def test_banner_format():
    banner = LogStyle.banner("TRAINING")
    lines = banner.strip("\n").splitlines()
    assert "TRAINING" in banner
    assert lines[0] == LogStyle.DOUBLE


@pytest.mark.unit
def test_console_only_logger_has_no_log_file(tmp_path):
    Logger.setup(name="lab_vision_test_with_file", log_dir=tmp_path / "logs")
    Logger.setup(name="lab_vision_test_without_file")

    assert Logger.get_log_file("lab_vision_test_with_file") is not None
    assert Logger.get_log_file("lab_vision_test_without_file") is None
