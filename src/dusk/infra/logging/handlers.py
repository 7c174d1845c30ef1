from __future__ import annotations

"""
Logging Handler Factories.

Builds the concrete sinks (stderr stream, rotating file) that sit behind the
queue listener and tags them so that reconfiguration only ever removes
handlers owned by this application.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import List, Optional

from dusk.infra.logging.config import LoggingConfig

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_dusk_handler"


# ==============================================================================
# TAGGING
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> logging.Handler:
    """Mark a handler as owned by dusk and return it."""
    setattr(handler, _HANDLER_TAG_ATTR, True)
    return handler


def _is_our_handler(handler: logging.Handler) -> bool:
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


# ==============================================================================
# FACTORIES
# ==============================================================================

def build_sink_handlers(cfg: LoggingConfig, level_int: int) -> List[logging.Handler]:
    """
    Create every output handler requested by the configuration.

    Args:
        cfg: Logging configuration.
        level_int: Numeric level applied to each sink.

    Returns:
        List[logging.Handler]: Tagged handlers ready to be driven by a listener.
    """
    sinks: List[logging.Handler] = []

    if cfg.console:
        sh = logging.StreamHandler(sys.stderr)
        sh.setLevel(level_int)
        sh.setFormatter(logging.Formatter(cfg.console_fmt))
        sinks.append(_tag_handler(sh))

    if cfg.log_file:
        fh = _create_rotating_file_handler(
            cfg.log_file,
            level_int,
            logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
            cfg.max_bytes,
            cfg.backup_count,
        )
        if fh:
            sinks.append(fh)

    return sinks


def _create_rotating_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the rotating log file, creating its directory if needed.

    A failure is reported once on stderr and the file sink is skipped; the
    program keeps running without persistent diagnostics.

    Returns:
        Optional[RotatingFileHandler]: Configured handler or None if I/O fails.
    """
    try:
        parent = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(parent, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
            errors="backslashreplace",
        )
    except OSError as e:
        sys.stderr.write(f"WARNING: cannot open log file '{log_file}': {e}\n")
        return None

    fh.setLevel(level_int)
    fh.setFormatter(formatter)
    return _tag_handler(fh)
