from loguru import logger
from modelprices.core.logger import configure_logger
from modelprices.config.schema import Config
from pathlib import Path
import sys


def test_file_sink(tmp_path):
    config = Config()
    config.logging.level = "INFO"
    config.logging.file_enabled = True

    log_file = tmp_path / "test.log"
    config.logging.file_path = str(log_file)

    configure_logger(config)
    try:
        logger.info("Test message")
    finally:
        logger.remove()

    assert log_file.exists()
    assert "Test message" in log_file.read_text()


def test_file_sink_disabled_by_default(monkeypatch):
    calls = []
    monkeypatch.setattr("modelprices.core.logger.logger.remove", lambda *args, **kwargs: None)
    monkeypatch.setattr("modelprices.core.logger.logger.add", lambda sink, *a, **kw: calls.append(sink) or 1)

    configure_logger(Config())

    assert calls == [sys.stderr]


def test_configure_logger_tolerates_file_permission_error(monkeypatch, tmp_path):
    config = Config()
    config.logging.file_enabled = True
    config.logging.file_path = str(tmp_path / "blocked.log")

    calls = []

    def fake_add(sink, *args, **kwargs):
        calls.append(sink)
        if isinstance(sink, Path):
            raise PermissionError("permission denied")
        return 1

    monkeypatch.setattr("modelprices.core.logger.logger.remove", lambda *args, **kwargs: None)
    monkeypatch.setattr("modelprices.core.logger.logger.add", fake_add)
    monkeypatch.setattr("modelprices.core.logger.logger.warning", lambda *args, **kwargs: None)

    # Should not raise even if file sink fails.
    configure_logger(config)

    assert sys.stderr in calls
