"""
Configuration loading utilities and exception classes.
"""

import copy
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


# Custom Exception Classes
class ConfigError(Exception):
    """Raised when there are issues with the configuration file."""
    pass


class DataError(Exception):
    """Raised when there are issues with the return data."""
    pass


class ValidationError(Exception):
    """Raised when input validation fails."""
    pass


class ConfigurationError(ValidationError):
    """Raised when an estimator parameter is outside its required domain."""
    pass


class InsufficientDataError(DataError):
    """Raised when a series is shorter than an estimator's minimum length."""
    pass


class NumericDomainError(Exception):
    """Raised when a variance is non-positive or a log-likelihood term is not finite."""
    pass


DEFAULT_CONFIG: Dict[str, Any] = {
    'annualization_factor': 252,
    'session': {
        'estimator': 'smav',
        'max_length': 100,
    },
    'estimators': {
        'smav': {
            'defaults': {'window': 20},
            'presets': {
                'short': {'window': 10},
                'standard': {'window': 20},
                'medium': {'window': 30},
                'long': {'window': 50},
            },
        },
        'ewma': {
            'defaults': {'lambda_param': 0.94},
            'presets': {
                'fast': {'lambda_param': 0.90},
                'riskmetrics': {'lambda_param': 0.94},
                'slow': {'lambda_param': 0.97},
            },
        },
        'arch': {
            'defaults': {'alpha0': 0.01, 'alpha1': 0.7, 'lag': 1},
            'presets': {},
        },
        'garch': {
            'defaults': {'omega': 0.000001, 'alpha': 0.09, 'beta': 0.9},
            'presets': {
                'riskmetrics': {'omega': 0.000001, 'alpha': 0.06, 'beta': 0.94},
                'standard': {'omega': 0.000002, 'alpha': 0.09, 'beta': 0.90},
                'high_persistence': {'omega': 0.000001, 'alpha': 0.04, 'beta': 0.95},
                'more_reactive': {'omega': 0.000005, 'alpha': 0.15, 'beta': 0.80},
            },
        },
    },
    'logging': {
        'level': 'INFO',
        'file': None,
    },
}


REQUIRED_KEYS = ['annualization_factor', 'session', 'estimators']


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two config dictionaries.

    Args:
        base: Base configuration (not modified)
        override: Values that take precedence over base

    Returns:
        New merged dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_config(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_config(config_path: Optional[str] = 'config.yaml') -> Dict[str, Any]:
    """
    Load configuration from YAML file, layered over DEFAULT_CONFIG.

    Args:
        config_path: Path to config file. If None, the defaults are returned.

    Returns:
        Dictionary with configuration

    Raises:
        ConfigError: If config file cannot be loaded or a required
            section is null
    """
    if config_path is None:
        return copy.deepcopy(DEFAULT_CONFIG)

    config_file = Path(config_path)

    if not config_file.exists():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse config file: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config: {e}") from e

    if config is None:
        config = {}
    if not isinstance(config, dict):
        raise ConfigError(
            f"Config file must contain a mapping, got {type(config).__name__}"
        )

    merged = merge_config(DEFAULT_CONFIG, config)
    validate_config(merged, REQUIRED_KEYS)
    return merged


def validate_config(config: Dict[str, Any], required_keys: list) -> None:
    """
    Validate that config contains required keys with non-null values.

    Args:
        config: Configuration dictionary
        required_keys: List of required key names

    Raises:
        ConfigError: If required keys are missing or null
    """
    missing = [key for key in required_keys if config.get(key) is None]
    if missing:
        raise ConfigError(f"Missing required config keys: {missing}")
