"""
Conditional volatility estimation for return streams.

Four classical models (SMAV, EWMA, ARCH, GARCH(1,1)) share one estimator
interface; VolatilitySession owns a return series and recomputes the
selected model whenever the data or parameters change.
"""

from variance_models.estimators import (
    ARCHEstimator,
    Diagnostics,
    EWMAEstimator,
    GARCHEstimator,
    SMAVEstimator,
    VolatilityEstimator,
    VolatilityResult,
    get_estimator,
    list_estimators,
    register_estimator,
)
from variance_models.series import ReturnSeries, Sample
from variance_models.session import VolatilitySession
from variance_models.utils import (
    ConfigError,
    ConfigurationError,
    DataError,
    InsufficientDataError,
    NumericDomainError,
    ValidationError,
    load_config,
    setup_logging,
)

__version__ = "0.1.0"

__all__ = [
    'ARCHEstimator',
    'Diagnostics',
    'EWMAEstimator',
    'GARCHEstimator',
    'SMAVEstimator',
    'VolatilityEstimator',
    'VolatilityResult',
    'get_estimator',
    'list_estimators',
    'register_estimator',
    'ReturnSeries',
    'Sample',
    'VolatilitySession',
    'ConfigError',
    'ConfigurationError',
    'DataError',
    'InsufficientDataError',
    'NumericDomainError',
    'ValidationError',
    'load_config',
    'setup_logging',
]
