from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Verifies the application's external behavior by invoking the entry point
script via subprocess: argument parsing, exit codes and stderr reporting.
The subprocess never has a terminal, so the interactive session itself is
covered by the in-process tests.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "dusk" / "main.py"


@pytest.fixture
def isolated_env(tmp_path: Path) -> dict:
    """Environment with 'src' importable and no user configuration."""
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["DUSK_CONFIG"] = str(tmp_path / "no-config.json")
    return env


def run_cli(args: List[str], env: dict, log_file: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with stdin detached from any terminal.

    Args:
        args: Command line arguments (excluding 'python' and script path).
        env: Process environment.
        log_file: Diagnostic log location.

    Returns:
        subprocess.CompletedProcess: Result with returncode, stdout and stderr.
    """
    cmd = [sys.executable, str(ENTRY_POINT), "--log-file", str(log_file)] + args
    return subprocess.run(
        cmd,
        env=env,
        stdin=subprocess.DEVNULL,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=60,
    )


def test_version(isolated_env: dict, tmp_path: Path) -> None:
    result = run_cli(["--version"], isolated_env, tmp_path / "dusk.log")

    assert result.returncode == 0
    assert "dusk 1.1.0" in result.stdout


def test_missing_path_exits_2(isolated_env: dict, tmp_path: Path) -> None:
    result = run_cli(["--path", str(tmp_path / "ghost")], isolated_env, tmp_path / "dusk.log")

    assert result.returncode == 2
    assert "Start path does not exist" in result.stderr


def test_non_interactive_session_is_refused(isolated_env: dict, tmp_path: Path) -> None:
    result = run_cli(["--path", str(tmp_path)], isolated_env, tmp_path / "dusk.log")

    assert result.returncode == 1
    assert "Not running interactively!" in result.stderr
    assert "Fatal setup error: Not running interactively!" in (tmp_path / "dusk.log").read_text(encoding="utf-8")


def test_conflicting_start_flags(isolated_env: dict, tmp_path: Path) -> None:
    result = run_cli(["--pwd", "--path", str(tmp_path)], isolated_env, tmp_path / "dusk.log")

    assert result.returncode == 2
    assert "not allowed with argument" in result.stderr
