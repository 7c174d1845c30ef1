from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the run: argument parsing, configuration resolution (defaults,
JSON file, CLI overrides), logging bootstrap, environment checks, the
one-time scan, cache construction and finally the interactive browser.
"""

import os
import sys
from typing import List, Optional, TextIO

from dusk.core.config_validator import validate_config
from dusk.core.services.scanner import run_scan
from dusk.core.services.tree_builder import build_cache
from dusk.domain.config import load_config, merge_overrides
from dusk.domain.errors import FatalSetupError
from dusk.infra.logging import LoggingConfig, configure_logging, get_logger
from dusk.infra.terminal import is_interactive
from dusk.interface.cli import args as cli_args
from dusk.interface.tui.app import TuiApp
from dusk.interface.tui.render import ScanSpinner

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BAD_PATH = 2

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(
        argv: Optional[List[str]] = None,
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.
        stdin: Input stream (defaults to sys.stdin).
        stdout: Output stream (defaults to sys.stdout).

    Returns:
        int: Process exit code (0 for exit/quit, non-zero for setup failure).
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration (Defaults < JSON file < CLI overrides)
    base_conf = load_config(args.config_path)
    raw_conf = merge_overrides(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (file sink; the terminal belongs to the browser)
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=bool(args.log_console),
        log_file=clean_conf["log_file"],
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    try:
        # 4. Pre-flight checks
        start = _verify_start_path(clean_conf["start_path"])
        if not is_interactive(stdin, stdout):
            raise FatalSetupError("Not running interactively!")

        # 5. One-time scan and cache construction
        spinner = ScanSpinner(stdout, start)
        report = run_scan(
            start,
            clean_conf["du_command"],
            on_tick=spinner,
            tick_interval=clean_conf["spinner_interval"],
        )
        spinner.finish()
        cache = build_cache(report.records, start)

        # 6. Interactive browsing
        return TuiApp(cache, clean_conf, stdin=stdin, stdout=stdout).run()

    except FatalSetupError as e:
        logger.error(f"Fatal setup error: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        logger.info("Interrupted by user.")
        return EXIT_OK

# -----------------------------------------------------------------------------
# PRE-FLIGHT HELPERS
# -----------------------------------------------------------------------------

def _verify_start_path(start: str) -> str:
    """
    Ensure the start path is an existing directory.

    Raises:
        FatalSetupError: With exit code 2 if it is missing or not a directory.
    """
    if not os.path.exists(start):
        raise FatalSetupError(f"Start path does not exist: {start}", exit_code=EXIT_BAD_PATH)
    if not os.path.isdir(start):
        raise FatalSetupError(f"Start path is not a directory: {start}", exit_code=EXIT_BAD_PATH)
    logger.info(f"Targeting start directory: {start}")
    return start

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
