"""Utility functions for parasim simulations."""

from .io import load_simulation_history, save_simulation_history
from .validation import (
    parse_parameter_value,
    validate_non_negative,
    validate_positive,
    validate_frame_time,
)

__all__ = [
    "save_simulation_history",
    "load_simulation_history",
    "parse_parameter_value",
    "validate_positive",
    "validate_non_negative",
    "validate_frame_time",
]
