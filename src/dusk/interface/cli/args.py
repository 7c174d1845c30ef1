from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
namespace into configuration overrides. Exactly one start-path source is
effective per run: `--pwd`, `--path DIR`, or the default root.
"""

import argparse
import os
from typing import Any, Dict

from dusk.domain.constants import APP_VERSION
from dusk.infra.fs import ROOT_PATH

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the dusk CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="dusk",
        description=(
            "Disk Usage SKanner: scan a directory tree once, then browse it "
            "interactively by size."
        ),
    )

    # --- Start Path (mutually exclusive) ---
    start = p.add_mutually_exclusive_group()
    start.add_argument(
        "--pwd",
        action="store_true",
        help="Start from the current working directory.",
    )
    start.add_argument(
        "--path",
        dest="start_path",
        metavar="DIR",
        default=None,
        help="Start from the given directory (default: /).",
    )

    # --- External Collaborators ---
    p.add_argument(
        "--du-command",
        dest="du_command",
        default=None,
        help="Enumeration command; the start path is appended (default: 'du -a -b').",
    )
    p.add_argument(
        "--classifier-command",
        dest="classifier_command",
        default=None,
        help="File classifier command; the file path is appended (default: 'file').",
    )

    # --- Configuration and Diagnostics ---
    p.add_argument(
        "--config",
        dest="config_path",
        default=None,
        help="JSON configuration file (default: $DUSK_CONFIG or ~/.dusk/config.json).",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Write diagnostics to this rotating log file (default: no file log).",
    )
    p.add_argument(
        "--log-console",
        action="store_true",
        help="Also write diagnostics to stderr.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into a configuration dictionary.

    Unset options map to None and are ignored by the merge step, except the
    start path, which falls back to the root directory.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    # Exactly one start source per run; the config file never picks it
    if args.pwd:
        overrides["start_path"] = os.getcwd()
    elif args.start_path:
        overrides["start_path"] = args.start_path
    else:
        overrides["start_path"] = ROOT_PATH

    overrides["du_command"] = args.du_command
    overrides["classifier_command"] = args.classifier_command
    overrides["log_file"] = args.log_file

    if args.debug:
        overrides["log_level"] = "DEBUG"

    return overrides
