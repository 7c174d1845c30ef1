from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, log file rotation and the no-sink fallback.
"""

import logging
from logging.handlers import QueueHandler
from pathlib import Path

import pytest

from dusk.infra.logging import (
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
)
from dusk.infra.logging.core import shutdown_logging


@pytest.fixture(autouse=True)
def _clean(reset_logging: None) -> None:
    """Every test starts from an unconfigured root logger."""


def _our_handlers() -> list:
    return [h for h in logging.getLogger().handlers if getattr(h, _HANDLER_TAG_ATTR, False)]


def test_logging_idempotency(tmp_path: Path) -> None:
    """Multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", log_file=str(tmp_path / "dusk.log"))

    configure_logging(cfg)
    initial = len(_our_handlers())
    configure_logging(cfg)

    assert len(_our_handlers()) == initial == 1


def test_force_reconfigures(tmp_path: Path) -> None:
    configure_logging(LoggingConfig(level="INFO", log_file=str(tmp_path / "a.log")))
    first_listener = getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR)

    configure_logging(LoggingConfig(level="DEBUG", log_file=str(tmp_path / "b.log")), force=True)

    root = logging.getLogger()
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not first_listener
    assert root.level == logging.DEBUG
    assert len(_our_handlers()) == 1


def test_log_rotation(tmp_path: Path) -> None:
    """File rotation when the size limit is exceeded."""
    log_file = tmp_path / "logs" / "rotate.log"
    cfg = LoggingConfig(level="DEBUG", log_file=str(log_file), max_bytes=100, backup_count=1)

    configure_logging(cfg)
    logger = logging.getLogger("dusk.test_rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "rotate.log.1").exists(), "Rotation backup file was not created."


def test_queue_listener_architecture(tmp_path: Path) -> None:
    """The root logger only holds a QueueHandler; sinks live behind the listener."""
    configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(tmp_path / "q.log")))

    root = logging.getLogger()
    ours = _our_handlers()
    listener = getattr(root, _QUEUE_LISTENER_ATTR)

    assert len(ours) == 1
    assert isinstance(ours[0], QueueHandler)
    assert listener is not None
    assert len(listener.handlers) == 2


def test_no_sinks_installs_null_handler() -> None:
    configure_logging(LoggingConfig(level="INFO", console=False, log_file=None))

    ours = _our_handlers()
    assert len(ours) == 1
    assert isinstance(ours[0], logging.NullHandler)
    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR, None) is None


def test_unwritable_log_file_is_skipped(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")

    configure_logging(LoggingConfig(level="INFO", log_file=str(blocker / "dusk.log")))

    assert "cannot open log file" in capsys.readouterr().err
    assert isinstance(_our_handlers()[0], logging.NullHandler)
