from __future__ import annotations

"""
External Collaborator Processes.

Thin wrappers around the two external programs the application relies on:
the recursive size enumerator (`du -a -b`) and the file type classifier
(`file`). Both are invoked with argv lists, never through a shell.
"""

import logging
import subprocess
from typing import List, Sequence

logger = logging.getLogger(__name__)

CLASSIFIER_TIMEOUT_SEC = 10


# -----------------------------------------------------------------------------
# ENUMERATION
# -----------------------------------------------------------------------------

def spawn_enumeration(start: str, command: Sequence[str]) -> subprocess.Popen:
    """
    Launch the enumeration process for `start` with a piped stdout.

    Errors on stderr (unreadable directories and the like) are discarded;
    the process output is consumed line by line by the scanner.

    Args:
        start: Normalized absolute start path.
        command: Enumeration argv prefix; the start path is appended.

    Returns:
        subprocess.Popen: The running process.

    Raises:
        OSError: If the executable cannot be started.
    """
    argv: List[str] = [*command, start]
    logger.debug(f"Spawning enumeration: {argv}")
    return subprocess.Popen(
        argv,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        stdin=subprocess.DEVNULL,
        text=True,
        encoding="utf-8",
        errors="surrogateescape",
    )


# -----------------------------------------------------------------------------
# CLASSIFICATION
# -----------------------------------------------------------------------------

def classify_path(path: str, command: Sequence[str]) -> str:
    """
    Run the classifier on a single path and return its one-line answer.

    Args:
        path: Absolute path to classify.
        command: Classifier argv prefix; the path is appended.

    Returns:
        str: First line of the classifier output, stripped.

    Raises:
        OSError: If the classifier cannot be started.
        subprocess.SubprocessError: On timeout or non-zero exit.
    """
    result = subprocess.run(
        [*command, path],
        capture_output=True,
        text=True,
        errors="replace",
        timeout=CLASSIFIER_TIMEOUT_SEC,
        check=True,
    )
    lines = result.stdout.splitlines()
    return lines[0].strip() if lines else ""
