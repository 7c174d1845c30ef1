from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: sample scan records and caches, a fake enumeration
   script and logging cleanup.
"""

import logging
import os
import sys
import textwrap
from pathlib import Path
from typing import Any, Dict, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from dusk.core.services.tree_builder import build_cache  # noqa: E402
from dusk.domain.config import get_default_config  # noqa: E402
from dusk.domain.tree_models import Cache, ScanRecord  # noqa: E402
from dusk.infra.logging import _CONFIGURED_FLAG_ATTR  # noqa: E402
from dusk.infra.logging.core import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_records() -> List[ScanRecord]:
    """
    Records in `du -a` post-order for a small tree rooted at /data.

    /data            1000
      big.iso         600
      docs/           300
        a.txt         100
        b.txt         200
      notes.txt       100
    """
    return [
        ScanRecord(size=600, path="/data/big.iso"),
        ScanRecord(size=100, path="/data/docs/a.txt"),
        ScanRecord(size=200, path="/data/docs/b.txt"),
        ScanRecord(size=300, path="/data/docs"),
        ScanRecord(size=100, path="/data/notes.txt"),
        ScanRecord(size=1000, path="/data"),
    ]


@pytest.fixture
def sample_cache(sample_records: List[ScanRecord]) -> Cache:
    return build_cache(sample_records, "/data")


@pytest.fixture
def quiet_config() -> Dict[str, Any]:
    """Default configuration with no loading delay."""
    conf = get_default_config()
    conf["loading_delay"] = 0.0
    return conf


@pytest.fixture
def fake_du(tmp_path: Path) -> Path:
    """
    Python script standing in for `du -a -b`.

    Prints the lines listed in $FAKE_DU_LINES (separated by '|'), sleeps
    $FAKE_DU_SLEEP seconds first and exits with $FAKE_DU_STATUS.
    """
    script = tmp_path / "fake_du.py"
    script.write_text(textwrap.dedent("""
        import os
        import sys
        import time

        time.sleep(float(os.environ.get("FAKE_DU_SLEEP", "0")))
        lines = os.environ.get("FAKE_DU_LINES", "")
        for line in lines.split("|"):
            if line:
                print(line.replace("\\\\t", "\\t"))
        sys.stdout.flush()
        sys.exit(int(os.environ.get("FAKE_DU_STATUS", "0")))
    """), encoding="utf-8")
    return script


@pytest.fixture
def reset_logging() -> Iterator[None]:
    """Clean up root logger handlers before and after a test."""

    def _reset() -> None:
        shutdown_logging()
        root = logging.getLogger()
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        if hasattr(root, _CONFIGURED_FLAG_ATTR):
            delattr(root, _CONFIGURED_FLAG_ATTR)

    _reset()
    yield
    _reset()
