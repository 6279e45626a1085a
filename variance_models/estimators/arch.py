"""
Autoregressive Conditional Heteroskedasticity (ARCH) Volatility Estimator.

Formula:
    σ²ₜ = α₀ + α₁ r²ₜ₋ₚ

Where:
    α₀: Constant variance term (should be > 0)
    α₁: Weight on the lagged squared return (stationary if α₁ < 1)
    p: Lag

Initialization:
    The first p samples have no lagged return. They are filled with the
    unconditional standard deviation of the whole series (variance divided
    by n) so the output stays aligned with the input; these placeholders
    are not conditional estimates and are excluded from the log-likelihood.

Coefficients outside the stationary region are accepted and reported as
unstable. A non-positive conditional variance raises NumericDomainError.

Reference:
    Engle, R. F. (1982). Autoregressive Conditional Heteroscedasticity with
    Estimates of the Variance of United Kingdom Inflation. Econometrica.
"""

from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from variance_models.estimators.base import BaseEstimator, check_finite_variance
from variance_models.estimators.likelihood import gaussian_log_likelihood
from variance_models.utils import validate_positive_int, validate_real


class ARCHEstimator(BaseEstimator):
    """
    First-order ARCH estimator on the squared return at lag p.
    """

    name = 'arch'

    def __init__(
        self,
        alpha0: float = 0.01,
        alpha1: float = 0.7,
        lag: int = 1,
        annualization_factor: int = 252
    ):
        """
        Initialize ARCH estimator.

        Args:
            alpha0: Constant term α₀ (default: 0.01)
            alpha1: Coefficient α₁ on the lagged squared return (default: 0.7)
            lag: Lag p of the squared return (default: 1)
            annualization_factor: Periods per year (default: 252)
        """
        super().__init__(annualization_factor)
        self.alpha0 = validate_real(alpha0, name="alpha0")
        self.alpha1 = validate_real(alpha1, name="alpha1")
        self.lag = validate_positive_int(lag, name="lag")

    @property
    def params(self) -> Dict[str, Any]:
        return {'alpha0': self.alpha0, 'alpha1': self.alpha1, 'lag': self.lag}

    @property
    def minimum_length(self) -> int:
        return self.lag + 1

    @property
    def is_stable(self) -> bool:
        return self.alpha1 < 1

    def calculate(self, returns: pd.Series) -> Tuple[pd.Series, Dict[str, Any]]:
        """
        Calculate ARCH volatility.

        Args:
            returns: Series of returns indexed by time

        Returns:
            Series of n volatility estimates (first p are placeholders) and
            the log-likelihood diagnostic

        Raises:
            NumericDomainError: If any conditional variance is not positive,
                or a variance or log-likelihood term is not finite
        """
        values = returns.to_numpy(dtype=float)
        p = self.lag

        with np.errstate(over='ignore', invalid='ignore'):
            unconditional_variance = values.var()  # ddof=0
            conditional_variance = self.alpha0 + self.alpha1 * values[:-p] ** 2

        # Validates every variance before any square root is taken
        log_likelihood = gaussian_log_likelihood(values[p:], conditional_variance)

        variance = np.concatenate([
            np.full(p, unconditional_variance),
            conditional_variance,
        ])
        check_finite_variance(variance)
        volatility = pd.Series(np.sqrt(variance), index=returns.index)

        return volatility, {
            'persistence': self.alpha1,
            'log_likelihood': log_likelihood,
        }
