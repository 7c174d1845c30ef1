from __future__ import annotations

"""
Error Taxonomy.

Distinguishes failures that abort the run (setup), failures recovered inside
the info panel (display) and malformed enumeration lines (parse).
"""

from typing import Optional

# -----------------------------------------------------------------------------
# BASE
# -----------------------------------------------------------------------------

class DuskError(Exception):
    """Base class for all application errors."""


# -----------------------------------------------------------------------------
# FATAL
# -----------------------------------------------------------------------------

class FatalSetupError(DuskError):
    """
    Unrecoverable startup failure.

    Raised when the program cannot run interactively, when the enumeration
    process cannot be started, or when the cache cannot be materialized.

    Attributes:
        exit_code: Process exit code the CLI should terminate with.
    """

    def __init__(self, message: str, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


# -----------------------------------------------------------------------------
# RECOVERABLE
# -----------------------------------------------------------------------------

class RuntimeDisplayError(DuskError):
    """
    Metadata lookup failure for a single path during browsing.

    Attributes:
        path: The path whose information could not be retrieved.
    """

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Error getting file info for {path}: {reason}")
        self.path = path
        self.reason = reason


class ParseAnomaly(DuskError):
    """
    Malformed enumeration output line.

    Attributes:
        line: The raw offending line.
    """

    def __init__(self, line: str, reason: Optional[str] = None) -> None:
        super().__init__(f"Malformed enumeration line {line!r}: {reason or 'unparseable'}")
        self.line = line
