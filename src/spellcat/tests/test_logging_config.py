"""Tests for logging configuration."""
import logging
from pathlib import Path

import pytest

from spellcat import logging_config
from spellcat.config import LoggingSettings, Settings


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_console_logging(monkeypatch: pytest.MonkeyPatch, restore_root_logger: logging.Logger) -> None:
    monkeypatch.setattr(logging_config, "settings", Settings(logging=LoggingSettings(dir=None)))

    logging_config.setup_logging("hello", level="debug")

    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1
    assert logging.getLogger("werkzeug").level == logging.WARNING


def test_file_logging(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, restore_root_logger: logging.Logger
) -> None:
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(logging_config, "settings", Settings(logging=LoggingSettings(dir=str(log_dir))))

    logging_config.setup_logging("Starting", level=logging.INFO)
    logging.getLogger("spellcat.test").info("written to file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    log_file = log_dir / "spellcat.log"
    assert log_file.exists()
    assert "written to file" in log_file.read_text(encoding="utf-8")
