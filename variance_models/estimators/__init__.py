"""
Volatility estimator modules.

This package contains implementations of the conditional volatility estimators:
- SMAV: Rolling average of squared returns
- EWMA: Exponentially weighted moving average
- ARCH: Autoregressive conditional heteroskedasticity (lag p)
- GARCH: Generalized ARCH(1,1)
"""

from variance_models.estimators.base import (
    BaseEstimator as VolatilityEstimator,
    Diagnostics,
    VolatilityResult,
)
from variance_models.estimators.smav import SMAVEstimator
from variance_models.estimators.ewma import EWMAEstimator
from variance_models.estimators.arch import ARCHEstimator
from variance_models.estimators.garch import GARCHEstimator
from variance_models.estimators.likelihood import (
    gaussian_log_likelihood,
    pointwise_log_likelihood,
)
from variance_models.estimators.factory import (
    get_estimator,
    list_estimators,
    parameter_names,
    register_estimator,
    ESTIMATORS,
)

__all__ = [
    'VolatilityEstimator',
    'Diagnostics',
    'VolatilityResult',
    'SMAVEstimator',
    'EWMAEstimator',
    'ARCHEstimator',
    'GARCHEstimator',
    'gaussian_log_likelihood',
    'pointwise_log_likelihood',
    'get_estimator',
    'list_estimators',
    'parameter_names',
    'register_estimator',
    'ESTIMATORS',
]
