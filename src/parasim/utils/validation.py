"""
Input checks for driver settings and control values.

The engine itself never raises on bad input: control values that cannot be
used are reported with a RuntimeWarning and dropped. Driver and helper
constructors raise ValueError instead.
"""
from __future__ import annotations

import math
import warnings
from typing import Any

from parasim.config import MAX_TIME_STEP


def validate_positive(value: float, name: str) -> None:
    """
    Raise ValueError unless ``value`` > 0.

    Parameters
    ----------
    value : float
        Setting to check
    name : str
        Setting name used in the message
    """
    if not value > 0:
        raise ValueError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str) -> None:
    if not value >= 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def validate_frame_time(dt: float, max_dt: float = MAX_TIME_STEP) -> None:
    """
    Check a frame time handed to the engine.

    Parameters
    ----------
    dt : float
        Frame time [s]
    max_dt : float
        Largest step the engine takes in one update [s]

    Raises
    ------
    ValueError
        If the frame time is zero, negative or NaN

    Warns
    -----
    RuntimeWarning
        If the frame time exceeds ``max_dt``; the engine truncates it and the
        simulation runs slower than wall-clock time.
    """
    if not dt > 0:
        raise ValueError(f"Frame time must be positive, got {dt}")
    if dt > max_dt:
        warnings.warn(
            f"Frame time {dt:.4f}s exceeds {max_dt:.4f}s and will be clamped by the engine.",
            RuntimeWarning,
            stacklevel=2
        )


def parse_parameter_value(value: Any, name: str) -> float | None:
    """
    Convert a raw control value to a finite float.

    Strings are parsed ("100" -> 100.0), booleans map to 1.0/0.0.

    Returns
    -------
    float | None
        The parsed value, or None if the value is non-numeric or not finite.
        A RuntimeWarning is issued in the latter case.
    """
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        parsed = math.nan

    if not math.isfinite(parsed):
        warnings.warn(
            f"Ignoring non-numeric value {value!r} for parameter '{name}'.",
            RuntimeWarning,
            stacklevel=3
        )
        return None
    return parsed
