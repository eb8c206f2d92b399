"""Unit tests for logging configuration."""

from __future__ import annotations

import json
import logging
import os
import sys
from collections.abc import Iterator
from datetime import datetime, timedelta
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from k8s_query_client.logging.config import (
    LOG_FILE_NAME,
    RETENTION_DAYS,
    _cleanup_old_logs,
    configure_logging,
    get_logger,
)


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Restore root handlers and structlog defaults after each test."""
    root = logging.getLogger()
    original_handlers = list(root.handlers)
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers = original_handlers
    root.setLevel(original_level)
    structlog.reset_defaults()


def _age(path: Path, days: int) -> None:
    old_time = (datetime.now() - timedelta(days=days)).timestamp()
    os.utime(path, (old_time, old_time))


@pytest.mark.unit
class TestCleanupOldLogs:
    """Tests for _cleanup_old_logs."""

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Should return quietly when the directory does not exist."""
        _cleanup_old_logs(tmp_path / "nonexistent")

    def test_deletes_only_old_log_files(self, tmp_path: Path) -> None:
        """Should delete rotated logs older than the retention window."""
        old = tmp_path / f"{LOG_FILE_NAME}.1"
        recent = tmp_path / LOG_FILE_NAME
        unrelated = tmp_path / "notes.txt"
        for path in (old, recent, unrelated):
            path.write_text("data")
        _age(old, RETENTION_DAYS + 5)
        _age(unrelated, RETENTION_DAYS + 5)

        _cleanup_old_logs(tmp_path)

        assert not old.exists()
        assert recent.exists()
        assert unrelated.exists()

    def test_ignores_os_errors(self, tmp_path: Path) -> None:
        """Should keep going when a file cannot be removed."""
        old = tmp_path / f"{LOG_FILE_NAME}.2"
        old.write_text("data")
        _age(old, RETENTION_DAYS + 1)

        with patch.object(Path, "unlink", side_effect=OSError("permission denied")):
            _cleanup_old_logs(tmp_path)

        assert old.exists()


@pytest.mark.unit
class TestConfigureLogging:
    """Tests for configure_logging."""

    def _marked_handlers(self) -> list[logging.Handler]:
        return [h for h in logging.getLogger().handlers if getattr(h, "_kq_handler", False)]

    @pytest.mark.parametrize(
        ("verbose", "debug", "level"),
        [
            (False, False, logging.WARNING),
            (True, False, logging.INFO),
            (False, True, logging.DEBUG),
        ],
    )
    def test_console_level(self, verbose: bool, debug: bool, level: int) -> None:
        """Should pick the console level from the flags."""
        configure_logging(verbose=verbose, debug=debug, file_logging=False)

        (console,) = self._marked_handlers()
        assert console.level == level

    def test_console_writes_to_stderr(self) -> None:
        """Should keep stdout free for command output."""
        configure_logging(file_logging=False)

        (console,) = self._marked_handlers()
        assert isinstance(console, logging.StreamHandler)
        assert console.stream is sys.stderr

    def test_reconfigure_replaces_handlers(self, tmp_path: Path) -> None:
        """Should not stack handlers across repeated calls."""
        configure_logging(log_dir=tmp_path)
        configure_logging(log_dir=tmp_path, verbose=True)

        assert len(self._marked_handlers()) == 2

    def test_file_logging_writes_json(self, tmp_path: Path) -> None:
        """Should write DEBUG events as JSON lines to the log file."""
        configure_logging(log_dir=tmp_path)

        get_logger("k8s_query_client.test").debug("listing_pods", namespace="default")
        for handler in self._marked_handlers():
            handler.flush()

        lines = (tmp_path / LOG_FILE_NAME).read_text().splitlines()
        events = [json.loads(line) for line in lines]
        assert any(
            e["event"] == "listing_pods" and e["namespace"] == "default" for e in events
        )

    def test_urllib3_quiet_unless_debug(self) -> None:
        """Should silence urllib3 request logging outside debug mode."""
        configure_logging(file_logging=False)
        assert logging.getLogger("urllib3").level == logging.WARNING

        configure_logging(debug=True, file_logging=False)
        assert logging.getLogger("urllib3").level == logging.DEBUG


@pytest.mark.unit
class TestGetLogger:
    """Tests for get_logger."""

    def test_binds_initial_context(self) -> None:
        """Should bind initial context values."""
        logger = get_logger("test", entity="pod")

        assert logger is not None
        assert structlog.get_context(logger)["entity"] == "pod"

    def test_without_context(self) -> None:
        """Should return a logger without bound context."""
        assert get_logger() is not None
