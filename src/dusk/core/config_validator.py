from __future__ import annotations

"""
Configuration Validation Service.

Ensures that the merged configuration dictionary (defaults, JSON file and
command-line overrides) conforms to the expected schema before the scan
starts. Handles type coercion and default value injection.
"""

import logging
import shlex
from typing import Any, Dict, List, Optional, Tuple, Union

from dusk.domain.config import get_default_config
from dusk.infra.fs import resolve_start_path
from dusk.infra.logging.config import _LEVEL_MAP

logger = logging.getLogger(__name__)

Number = Union[int, float]


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize the provided configuration dictionary.

    Converts untrusted inputs (JSON file, CLI) into strictly typed values and
    fills missing keys with domain defaults.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and
                                          a list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    # 1. Base Type Validation
    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    # 2. Schema Definition (Declarative mapping)
    string_fields = ["start_path", "log_level", "log_file"]
    positive_int_fields = ["bar_width", "header_rows"]
    non_negative_int_fields = ["loading_threshold"]
    non_negative_float_fields = ["spinner_interval", "loading_delay"]
    command_fields = ["du_command", "classifier_command"]

    # 3. Field Processing & Normalization
    for field in string_fields:
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    for field in positive_int_fields:
        merged[field] = _as_int(merged.get(field), defaults[field], field, 1, warnings, strict)

    for field in non_negative_int_fields:
        merged[field] = _as_int(merged.get(field), defaults[field], field, 0, warnings, strict)

    for field in non_negative_float_fields:
        merged[field] = _as_float(merged.get(field), defaults[field], field, warnings, strict)

    for field in command_fields:
        merged[field] = _as_command(merged.get(field), defaults[field], field, warnings, strict)

    # 4. Domain-Specific Normalization
    merged["start_path"] = resolve_start_path(merged["start_path"])
    merged["log_level"] = _normalize_level(merged["log_level"], warnings, strict)

    return merged, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_str(
        value: Any, fallback: Optional[str], field: str, warnings: List[str], strict: bool
) -> Optional[str]:
    """Validate and sanitize string inputs."""
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback

    msg = f"Invalid field '{field}': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(
        value: Any,
        fallback: int,
        field: str,
        minimum: int,
        warnings: List[str],
        strict: bool,
) -> int:
    """Coerce numeric input into an integer no smaller than `minimum`."""
    if value is None:
        return fallback

    parsed = _coerce_number(value, int, field, warnings, strict)
    if parsed is None:
        return fallback

    if parsed < minimum:
        msg = f"Invalid field '{field}': {parsed} is below the minimum of {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return int(parsed)


def _as_float(value: Any, fallback: float, field: str, warnings: List[str], strict: bool) -> float:
    """Coerce numeric input into a non-negative float."""
    if value is None:
        return fallback

    parsed = _coerce_number(value, float, field, warnings, strict)
    if parsed is None:
        return fallback

    if parsed < 0:
        msg = f"Invalid field '{field}': negative values are not allowed."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
    return float(parsed)


def _coerce_number(
        value: Any,
        kind: type,
        field: str,
        warnings: List[str],
        strict: bool,
) -> Union[Number, None]:
    """Shared numeric parsing; returns None when the value is unusable."""
    if isinstance(value, bool):
        msg = f"Invalid field '{field}': expected {kind.__name__}, received bool."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return None

    if isinstance(value, (int, float)):
        if kind is int and isinstance(value, float) and not value.is_integer():
            msg = f"Invalid field '{field}': expected int, received {value}."
            if strict:
                raise TypeError(msg)
            warnings.append(f"{msg} Using fallback.")
            return None
        return kind(value)

    if isinstance(value, str) and not strict:
        try:
            parsed = kind(value.strip())
        except ValueError:
            warnings.append(f"Invalid field '{field}': cannot parse '{value}'. Using fallback.")
            return None
        warnings.append(f"Field '{field}' converted from '{value}' to {parsed}.")
        return parsed

    msg = f"Invalid field '{field}': expected {kind.__name__}, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return None


def _as_command(
        value: Any,
        fallback: List[str],
        field: str,
        warnings: List[str],
        strict: bool,
) -> List[str]:
    """Accept a command as an argv list or as a shell-like string."""
    if value is None:
        return list(fallback)

    if isinstance(value, str):
        try:
            parts = shlex.split(value)
        except ValueError as e:
            msg = f"Invalid field '{field}': {e}."
            if strict:
                raise ValueError(msg)
            warnings.append(f"{msg} Using fallback.")
            return list(fallback)
        return parts if parts else list(fallback)

    if isinstance(value, list):
        out: List[str] = []
        for i, item in enumerate(value):
            if isinstance(item, str) and item.strip():
                out.append(item.strip())
            else:
                msg = f"Invalid item in '{field}[{i}]': expected non-empty str."
                if strict:
                    raise TypeError(msg)
                warnings.append(f"{msg} Item discarded.")
        return out if out else list(fallback)

    msg = f"Invalid field '{field}': expected list[str], received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return list(fallback)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: DOMAIN NORMALIZATION
# -----------------------------------------------------------------------------

def _normalize_level(level: str, warnings: List[str], strict: bool) -> str:
    """Ensure the log level is one of the known severity names."""
    upper = level.upper()
    if upper in _LEVEL_MAP:
        return upper
    msg = f"Unknown log level '{level}'."
    if strict:
        raise ValueError(msg)
    warnings.append(f"{msg} Using INFO.")
    return "INFO"
