from __future__ import annotations

"""
File Information Service.

Gathers the metadata shown in the info panel for a single path: stat data,
owner and group names, timestamps and the classifier's one-line
description. Stat failures surface as RuntimeDisplayError so the TUI can
show them inline and keep browsing.
"""

import grp
import logging
import os
import pwd
import stat
import subprocess
import time
from dataclasses import dataclass
from typing import Callable, List, Sequence

from dusk.domain.constants import DEFAULT_CLASSIFIER_COMMAND, TIMESTAMP_FORMAT
from dusk.domain.errors import RuntimeDisplayError
from dusk.infra.processes import classify_path
from dusk.utils.formatting import display_text, human_size

logger = logging.getLogger(__name__)

Classifier = Callable[[str, Sequence[str]], str]

PANEL_SEPARATOR = "-" * 25


@dataclass(frozen=True)
class FileInfo:
    """
    Fixed-field report for one path.

    Attributes:
        path: Absolute path.
        kind: 'File', 'Directory' or 'Other'.
        size: Human-readable size.
        permissions: Octal permission bits, e.g. '0644'.
        owner: User name, or numeric uid if it cannot be resolved.
        group: Group name, or numeric gid if it cannot be resolved.
        modified: Local modification time.
        changed: Local status-change time.
        description: Classifier output.
    """
    path: str
    kind: str
    size: str
    permissions: str
    owner: str
    group: str
    modified: str
    changed: str
    description: str


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def collect_file_info(
        path: str,
        classifier_command: Sequence[str] = DEFAULT_CLASSIFIER_COMMAND,
        *,
        classify: Classifier = classify_path,
) -> FileInfo:
    """
    Build the info panel report for `path`.

    Args:
        path: Absolute path of the selected entry.
        classifier_command: Classifier argv prefix.
        classify: Classifier runner (injectable for tests).

    Returns:
        FileInfo: The collected metadata.

    Raises:
        RuntimeDisplayError: If the path cannot be stat'ed.
    """
    try:
        st = os.stat(path)
    except OSError as e:
        logger.warning(f"Metadata lookup failed for {path}: {e}")
        raise RuntimeDisplayError(path, e.strerror or str(e)) from e

    return FileInfo(
        path=path,
        kind=_kind_label(st.st_mode),
        size=human_size(st.st_size),
        permissions=f"{stat.S_IMODE(st.st_mode):04o}",
        owner=_user_name(st.st_uid),
        group=_group_name(st.st_gid),
        modified=_format_time(st.st_mtime),
        changed=_format_time(st.st_ctime),
        description=_describe(path, classifier_command, classify),
    )


def render_file_info(info: FileInfo) -> List[str]:
    """Lay out the report as fixed-width label lines."""
    return [
        "========= DUSK =========",
        "=== File Information ===",
        f"Path        : {display_text(info.path)}",
        f"Type        : {info.kind}",
        f"Size        : {info.size}",
        f"Permissions : {info.permissions}",
        f"Owner       : {info.owner}",
        f"Group       : {info.group}",
        f"Modified    : {info.modified}",
        f"Changed     : {info.changed}",
        f"File info   : {display_text(info.description)}",
        PANEL_SEPARATOR,
    ]


def render_file_error(error: RuntimeDisplayError) -> List[str]:
    """Lines shown in place of the report when metadata is unavailable."""
    return [
        "========= DUSK =========",
        "=== File Information ===",
        display_text(str(error)),
        PANEL_SEPARATOR,
    ]


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------

def _kind_label(mode: int) -> str:
    if stat.S_ISDIR(mode):
        return "Directory"
    if stat.S_ISREG(mode):
        return "File"
    return "Other"


def _user_name(uid: int) -> str:
    try:
        return pwd.getpwuid(uid).pw_name
    except KeyError:
        return str(uid)


def _group_name(gid: int) -> str:
    try:
        return grp.getgrgid(gid).gr_name
    except KeyError:
        return str(gid)


def _format_time(timestamp: float) -> str:
    return time.strftime(TIMESTAMP_FORMAT, time.localtime(timestamp))


def _describe(path: str, command: Sequence[str], classify: Classifier) -> str:
    """Classifier description, degraded to an inline note on failure."""
    try:
        return classify(path, command)
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning(f"Classifier failed for {path}: {e}")
        return f"unavailable ({e})"
