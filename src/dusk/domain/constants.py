from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to presentation constants, menu labels and the
default external collaborator commands.
"""

from typing import List

APP_NAME = "DUSK"
APP_VERSION = "1.1.0"

# -----------------------------------------------------------------------------
# SIZE FORMATTING
# -----------------------------------------------------------------------------

SIZE_UNITS: List[str] = ["B", "KB", "MB", "GB", "TB"]
SIZE_STEP = 1024

# -----------------------------------------------------------------------------
# MENU PRESENTATION
# -----------------------------------------------------------------------------

DEFAULT_BAR_WIDTH = 20
BAR_FILL_CHAR = "#"
DEFAULT_HEADER_ROWS = 3

LABEL_GO_UP = "Go up one level"
LABEL_NO_ENTRIES = "[No files or subdirectories]"
LABEL_EXIT = "Exit"

TYPE_CHAR_DIRECTORY = "D"
TYPE_CHAR_FILE = "F"

HELP_LINE = "Use ↑/↓ to navigate, ENTER to select, or 'q' to quit"
SEPARATOR_LINE = "-" * 32

# -----------------------------------------------------------------------------
# PROGRESS INDICATORS
# -----------------------------------------------------------------------------

SPINNER_FRAMES: List[str] = ["|", "/", "-", "\\"]
DEFAULT_SPINNER_INTERVAL = 0.2
DEFAULT_LOADING_THRESHOLD = 50
DEFAULT_LOADING_DELAY = 0.5

# -----------------------------------------------------------------------------
# EXTERNAL COLLABORATORS
# -----------------------------------------------------------------------------

DEFAULT_DU_COMMAND: List[str] = ["du", "-a", "-b"]
DEFAULT_CLASSIFIER_COMMAND: List[str] = ["file"]

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
