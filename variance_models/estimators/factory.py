"""
Factory module for creating volatility estimator instances.

This module provides a factory pattern for creating estimators by name,
so the session controller can switch models without hardcoding classes.
"""

import inspect
import warnings
from typing import Dict, List, Type

from variance_models.estimators.arch import ARCHEstimator
from variance_models.estimators.base import BaseEstimator
from variance_models.estimators.ewma import EWMAEstimator
from variance_models.estimators.garch import GARCHEstimator
from variance_models.estimators.smav import SMAVEstimator
from variance_models.utils import ConfigurationError


# Registry of available estimators
_ESTIMATORS: Dict[str, Type[BaseEstimator]] = {
    'smav': SMAVEstimator,
    'ewma': EWMAEstimator,
    'arch': ARCHEstimator,
    'garch': GARCHEstimator,
}

ESTIMATORS = _ESTIMATORS


def get_estimator(
    name: str,
    annualization_factor: int = 252,
    **params
) -> BaseEstimator:
    """
    Create an estimator instance by name.

    Args:
        name: Estimator name ('smav', 'ewma', 'arch', 'garch')
        annualization_factor: Periods per year for annualization (default: 252)
        **params: Parameter set for the estimator (e.g. window for SMAV,
                  lambda_param for EWMA). Missing parameters use the
                  estimator's defaults.

    Returns:
        Estimator instance

    Raises:
        ValueError: If estimator name is not found
        ConfigurationError: If a parameter is unknown or out of its domain
    """
    name = name.lower().strip()

    if name not in _ESTIMATORS:
        available = ', '.join(_ESTIMATORS.keys())
        raise ValueError(
            f"Unknown estimator '{name}'. Available estimators: {available}"
        )

    estimator_class = _ESTIMATORS[name]

    unknown = set(params) - set(parameter_names(estimator_class))
    if unknown:
        raise ConfigurationError(
            f"Unknown parameters for estimator '{name}': {sorted(unknown)}"
        )

    return estimator_class(annualization_factor=annualization_factor, **params)


def parameter_names(estimator_class: Type[BaseEstimator]) -> List[str]:
    """
    Names of the parameters an estimator class accepts, in signature order.
    """
    signature = inspect.signature(estimator_class.__init__)
    return [
        param_name for param_name, param in signature.parameters.items()
        if param_name not in ('self', 'annualization_factor')
        and param.kind in (param.POSITIONAL_OR_KEYWORD, param.KEYWORD_ONLY)
    ]


def list_estimators() -> List[str]:
    """
    Get a list of available estimator names.

    Returns:
        List of estimator names
    """
    return list(_ESTIMATORS.keys())


def register_estimator(
    name: str,
    estimator_class: Type[BaseEstimator],
    override: bool = False
) -> None:
    """
    Register a custom estimator.

    Args:
        name: Estimator name (will be converted to lowercase)
        estimator_class: Estimator class (must inherit from BaseEstimator)
        override: If True, allow overriding existing estimators

    Raises:
        TypeError: If estimator_class is not a subclass of BaseEstimator
        ValueError: If name already exists and override=False
    """
    if not (inspect.isclass(estimator_class) and issubclass(estimator_class, BaseEstimator)):
        raise TypeError(
            f"Estimator class must inherit from BaseEstimator, "
            f"got {estimator_class}"
        )

    name = name.lower().strip()

    if name in _ESTIMATORS and not override:
        raise ValueError(
            f"Estimator '{name}' already registered. "
            f"Use override=True to replace it."
        )

    if name in _ESTIMATORS and override:
        warnings.warn(
            f"Overriding existing estimator '{name}'",
            UserWarning
        )

    _ESTIMATORS[name] = estimator_class


__all__ = [
    'ESTIMATORS',
    'get_estimator',
    'list_estimators',
    'parameter_names',
    'register_estimator',
]
