"""
Simple Moving Average Volatility (SMAV) Estimator.

Volatility is the root of the average squared return over a rolling window.
Returns are not demeaned.

Formula:
    σ_t = √( (1/w) * Σ r²ᵢ ),  i = t-w+1 .. t

Where:
    w = window size

Each estimate is aligned to the last sample of its window, so a series of
n returns gives n - w + 1 estimates and none at all when n < w.

Annualized: σ_annual = σ_period * √252
"""

from typing import Any, Dict, Tuple

import numpy as np
import pandas as pd

from variance_models.estimators.base import BaseEstimator, check_finite_variance
from variance_models.utils import validate_positive_int


class SMAVEstimator(BaseEstimator):
    """
    Rolling-window average of squared returns.

    Larger windows give smoother estimates that react more slowly.
    """

    name = 'smav'

    def __init__(self, window: int = 20, annualization_factor: int = 252):
        """
        Initialize SMAV estimator.

        Args:
            window: Rolling window size in periods (default: 20)
            annualization_factor: Periods per year (default: 252)
        """
        super().__init__(annualization_factor)
        self.window = validate_positive_int(window, name="window")

    @property
    def params(self) -> Dict[str, Any]:
        return {'window': self.window}

    @property
    def minimum_length(self) -> int:
        return self.window

    def calculate(self, returns: pd.Series) -> Tuple[pd.Series, Dict[str, Any]]:
        """
        Calculate SMAV volatility.

        Args:
            returns: Series of returns indexed by time

        Returns:
            Series of n - w + 1 volatility estimates and no extra diagnostics

        Raises:
            NumericDomainError: If a window's mean square overflows
        """
        with np.errstate(over='ignore', invalid='ignore'):
            squared_returns = returns ** 2

            mean_squared = squared_returns.rolling(
                window=self.window, min_periods=self.window
            ).mean()

        # Drop the leading windows that are not yet full
        mean_squared = mean_squared.iloc[self.window - 1:]

        # A window holding an overflowed square leaves NaN behind in pandas
        check_finite_variance(mean_squared.to_numpy(), offset=self.window - 1)

        # Rolling sums can drift a hair below zero after large values leave
        volatility = np.sqrt(mean_squared.clip(lower=0.0))

        return volatility, {}
