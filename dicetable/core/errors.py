"""Configuration errors and value checks shared by grid, placement and board setup."""

from __future__ import annotations

import math
from numbers import Real


class ConfigurationError(ValueError):
    """Invalid configuration value or a layout request the grid cannot hold."""


def require_positive_number(name: str, value: object) -> float:
    """Return `value` as a float or raise when it is not a finite number > 0."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"{name} should be a number larger than 0, got {value!r} instead.")
    number = float(value)
    if not math.isfinite(number) or number <= 0.0:
        raise ConfigurationError(f"{name} should be a number larger than 0, got {value!r} instead.")
    return number


def require_flag(name: str, value: object) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{name} should be a boolean, got {value!r} instead.")
    return value
