"""
Generalized Autoregressive Conditional Heteroskedasticity (GARCH(1,1))
Volatility Estimator.

Formula:
    σ²ₜ = ω + α r²ₜ₋₁ + β σ²ₜ₋₁

Where:
    ω (omega): Base level of variance, typically very small
    α (alpha): Reaction to the previous squared return
    β (beta): Persistence of the previous variance

Diagnostics:
    Persistence: α + β (stationary if < 1)
    Long-run variance: ω / (1 - α - β)
    Half-life: ln(0.5) / ln(α + β)

Initialization:
    The recursion is seeded with the long-run variance at the first sample,
    so every return gets an estimate. An unstable parameter set (α + β ≥ 1)
    has no positive finite long-run variance; its diagnostics are still
    reported by the instance, but recompute() raises NumericDomainError.

Reference:
    Bollerslev, T. (1986). Generalized Autoregressive Conditional
    Heteroskedasticity. Journal of Econometrics.
"""

from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from variance_models.estimators.base import BaseEstimator
from variance_models.estimators.likelihood import gaussian_log_likelihood
from variance_models.utils import ConfigurationError, NumericDomainError, validate_real


class GARCHEstimator(BaseEstimator):
    """
    GARCH(1,1) volatility estimator with long-run, half-life and
    log-likelihood diagnostics.
    """

    name = 'garch'

    def __init__(
        self,
        omega: float = 0.000001,
        alpha: float = 0.09,
        beta: float = 0.9,
        annualization_factor: int = 252
    ):
        """
        Initialize GARCH estimator.

        Args:
            omega: Constant term ω, must be > 0 (default: 1e-6)
            alpha: Squared-return coefficient α ≥ 0 (default: 0.09)
            beta: Lagged-variance coefficient β ≥ 0 (default: 0.9)
            annualization_factor: Periods per year (default: 252)
        """
        super().__init__(annualization_factor)
        self.omega = validate_real(omega, name="omega")
        self.alpha = validate_real(alpha, name="alpha")
        self.beta = validate_real(beta, name="beta")

        if self.omega <= 0:
            raise ConfigurationError(f"omega must be positive, got {self.omega}")
        if self.alpha < 0:
            raise ConfigurationError(f"alpha must be non-negative, got {self.alpha}")
        if self.beta < 0:
            raise ConfigurationError(f"beta must be non-negative, got {self.beta}")

    @property
    def params(self) -> Dict[str, Any]:
        return {'omega': self.omega, 'alpha': self.alpha, 'beta': self.beta}

    @property
    def minimum_length(self) -> int:
        return 2

    @property
    def persistence(self) -> float:
        return self.alpha + self.beta

    @property
    def is_stable(self) -> bool:
        return self.persistence < 1

    @property
    def long_run_variance(self) -> float:
        """ω / (1 - α - β); infinite or negative when the model is unstable."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.float64(self.omega) / (1 - np.float64(self.alpha) - self.beta))

    @property
    def long_run_volatility(self) -> float:
        """Square root of the long-run variance; NaN when that is negative."""
        with np.errstate(invalid='ignore'):
            return float(np.sqrt(self.long_run_variance))

    @property
    def half_life(self) -> float:
        """Periods for a variance shock to decay by half."""
        with np.errstate(divide='ignore', invalid='ignore'):
            return float(np.log(0.5) / np.log(np.float64(self.persistence)))

    def calculate(self, returns: pd.Series) -> Tuple[pd.Series, Dict[str, Any]]:
        """
        Calculate GARCH(1,1) volatility.

        Args:
            returns: Series of returns indexed by time

        Returns:
            Series of n volatility estimates and the GARCH diagnostics

        Raises:
            NumericDomainError: If the seed or any conditional variance is
                not positive and finite
        """
        values = returns.to_numpy(dtype=float)
        omega, alpha, beta = self.omega, self.alpha, self.beta

        long_run_variance = self.long_run_variance
        if not np.isfinite(long_run_variance) or long_run_variance <= 0:
            raise NumericDomainError(
                f"Long-run variance {long_run_variance} cannot seed the recursion "
                f"(alpha + beta = {self.persistence})"
            )

        variance = np.empty(len(values))
        variance[0] = long_run_variance
        previous_variance = long_run_variance
        previous_squared_return = values[0] ** 2

        for i in range(1, len(values)):
            conditional_variance = omega + alpha * previous_squared_return + beta * previous_variance
            if not np.isfinite(conditional_variance):
                raise NumericDomainError(
                    f"Conditional variance is not finite at position {i}"
                )
            variance[i] = conditional_variance
            previous_variance = conditional_variance
            previous_squared_return = values[i] ** 2

        log_likelihood = gaussian_log_likelihood(values[1:], variance[1:])

        volatility = pd.Series(np.sqrt(variance), index=returns.index)

        return volatility, {
            'persistence': self.persistence,
            'log_likelihood': log_likelihood,
            'long_run_volatility': self.long_run_volatility,
            'half_life': self.half_life,
        }
