"""
Utility functions for the variance models package.

This module provides helper functions for:
- Logging configuration
- Configuration loading
- Parameter validation
"""

import math
from numbers import Integral, Real

from variance_models.utils.config_loader import (
    DEFAULT_CONFIG,
    ConfigError,
    ConfigurationError,
    DataError,
    InsufficientDataError,
    NumericDomainError,
    ValidationError,
    load_config,
    merge_config,
    validate_config,
)
from variance_models.utils.logging import setup_logging


def validate_numeric_range(
    value: float,
    min_val: float,
    max_val: float,
    name: str = "value",
    inclusive: bool = True
) -> float:
    """
    Validate that a numeric value is within a specified range.

    Args:
        value: Value to validate
        min_val: Minimum allowed value
        max_val: Maximum allowed value
        name: Name of the parameter for error messages
        inclusive: Whether the bounds themselves are allowed

    Returns:
        The validated value as a float

    Raises:
        ConfigurationError: If value is not a finite number or is outside the range
    """
    value = validate_real(value, name)
    if inclusive:
        ok = min_val <= value <= max_val
    else:
        ok = min_val < value < max_val
    if not ok:
        brackets = "[{}, {}]" if inclusive else "({}, {})"
        raise ConfigurationError(
            f"{name} must be in {brackets.format(min_val, max_val)}, got {value}"
        )
    return value


def validate_real(value: float, name: str = "value") -> float:
    """
    Validate that a value is a finite real number.

    Raises:
        ConfigurationError: If value is not a finite real number
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ConfigurationError(f"{name} must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise ConfigurationError(f"{name} must be finite, got {value}")
    return value


def validate_positive_int(value: int, name: str = "value") -> int:
    """
    Validate that a value is a positive integer.

    Raises:
        ConfigurationError: If value is not an integer or is less than 1
    """
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")
    return int(value)


__all__ = [
    # Exceptions
    'ConfigError',
    'ConfigurationError',
    'DataError',
    'InsufficientDataError',
    'NumericDomainError',
    'ValidationError',
    # Config
    'DEFAULT_CONFIG',
    'load_config',
    'merge_config',
    'validate_config',
    # Logging
    'setup_logging',
    # Validation
    'validate_numeric_range',
    'validate_real',
    'validate_positive_int',
]
