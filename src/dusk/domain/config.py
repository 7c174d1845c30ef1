from __future__ import annotations

"""
Configuration Domain Management.

Provides the default runtime configuration and read-only loading of user
overrides from a JSON file. Nothing is ever written back: every run starts
from defaults plus the optional file plus command-line overrides.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from dusk.domain import constants as const
from dusk.infra.fs import ROOT_PATH, get_user_data_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
CONFIG_ENV_VAR = "DUSK_CONFIG"
CONFIG_FILE_NAME = "config.json"


def get_default_config_path() -> str:
    """
    Resolve the configuration file location ($DUSK_CONFIG or ~/.dusk/config.json).
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return os.path.abspath(os.path.expanduser(override))
    return os.path.join(get_user_data_dir(), CONFIG_FILE_NAME)


# -----------------------------------------------------------------------------
# Configuration Models (Dict-based)
# -----------------------------------------------------------------------------
def get_default_config() -> Dict[str, Any]:
    """
    Generate the default runtime configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        # Scan target
        "start_path": ROOT_PATH,

        # External collaborators
        "du_command": list(const.DEFAULT_DU_COMMAND),
        "classifier_command": list(const.DEFAULT_CLASSIFIER_COMMAND),

        # Presentation
        "bar_width": const.DEFAULT_BAR_WIDTH,
        "header_rows": const.DEFAULT_HEADER_ROWS,
        "spinner_interval": const.DEFAULT_SPINNER_INTERVAL,
        "loading_threshold": const.DEFAULT_LOADING_THRESHOLD,
        "loading_delay": const.DEFAULT_LOADING_DELAY,

        # Diagnostics
        "log_level": "INFO",
        "log_file": None,
    }


# -----------------------------------------------------------------------------
# Loading Logic
# -----------------------------------------------------------------------------
def load_config(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load user overrides from disk and overlay them on the defaults.

    A missing file is not an error. A corrupt file is reported in the log
    and ignored.

    Args:
        path: Optional explicit configuration file path.

    Returns:
        Dict[str, Any]: The merged (not yet validated) configuration.
    """
    config = get_default_config()
    config_path = path or get_default_config_path()

    if not os.path.exists(config_path):
        logger.debug(f"Config file not found at {config_path}. Using defaults.")
        return config

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Failed to load config '{config_path}': {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        logger.warning(f"Corrupted config file '{config_path}'. Using defaults.")
        return config

    config.update(data)
    logger.debug(f"Configuration loaded from {config_path}")
    return config


def merge_overrides(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base configuration.

    Only known keys are merged and `None` values are ignored, so unset
    command-line flags never clobber file or default values.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    known_keys = get_default_config().keys()
    for k in known_keys:
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out
