"""
Exponentially Weighted Moving Average (EWMA) Volatility Estimator.

This estimator gives more weight to recent observations, making it more
responsive to shocks and volatility clustering.

Formula:
    σ²ₜ = λσ²ₜ₋₁ + (1-λ)(rₜ - μ)²

Where:
    λ (lambda): Decay factor in (0, 1)
    μ: Mean of the whole series
    σ²ₜ₋₁: Previous period's variance

Initialization:
    σ²₋₁ is the variance (divided by n) of the whole series. The mean and
    the seed are recomputed on every call; the recursion then runs over
    every sample, so the output has one estimate per return.

Half-life: ln(0.5) / ln(λ) periods for a shock's weight to halve.

Reference:
    RiskMetrics Technical Document (J.P. Morgan, 1996)
    Standard λ = 0.94 for daily data
"""

from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from variance_models.estimators.base import BaseEstimator, check_finite_variance
from variance_models.utils import validate_numeric_range


class EWMAEstimator(BaseEstimator):
    """
    Exponentially Weighted Moving Average volatility estimator.

    More responsive to recent shocks than the rolling-window estimator.
    """

    name = 'ewma'

    def __init__(self, lambda_param: float = 0.94, annualization_factor: int = 252):
        """
        Initialize EWMA estimator.

        Args:
            lambda_param: Decay factor, strictly between 0 and 1 (default: 0.94)
            annualization_factor: Periods per year (default: 252)
        """
        super().__init__(annualization_factor)

        self.lambda_param = validate_numeric_range(
            lambda_param, 0.0, 1.0, name="lambda", inclusive=False
        )

    @property
    def params(self) -> Dict[str, Any]:
        return {'lambda_param': self.lambda_param}

    @property
    def minimum_length(self) -> int:
        return 2

    @property
    def half_life(self) -> float:
        """Periods for a shock's influence to halve."""
        return float(np.log(0.5) / np.log(self.lambda_param))

    def calculate(self, returns: pd.Series) -> Tuple[pd.Series, Dict[str, Any]]:
        """
        Calculate EWMA volatility.

        Args:
            returns: Series of returns indexed by time

        Returns:
            Series of n volatility estimates and the decay diagnostics

        Raises:
            NumericDomainError: If the seed or any variance overflows
        """
        values = returns.to_numpy(dtype=float)
        lam = self.lambda_param

        with np.errstate(over='ignore', invalid='ignore'):
            mean = values.mean()
            initial_variance = values.var()  # ddof=0

            variance = np.empty(len(values))
            prev_variance = initial_variance

            # EWMA recursion: σ²ₜ = λσ²ₜ₋₁ + (1-λ)(rₜ - μ)²
            for i, value in enumerate(values):
                deviation = value - mean
                prev_variance = lam * prev_variance + (1 - lam) * deviation * deviation
                variance[i] = prev_variance

        check_finite_variance(variance)

        volatility = pd.Series(np.sqrt(variance), index=returns.index)

        return volatility, {
            'persistence': lam,
            'half_life': self.half_life,
        }
