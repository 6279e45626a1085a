"""
Return calculation module for feeding the volatility estimators.

Producers that generate prices (for example an interactive price simulator)
convert them into returns here before appending them to a ReturnSeries.
"""

from typing import Optional

import numpy as np
import pandas as pd


def calculate_returns(
    prices: pd.Series,
    method: str = 'log',
    scale: float = 1.0
) -> pd.Series:
    """
    Calculate returns from price series.

    Args:
        prices: Series of prices
        method: Return calculation method ('log' or 'simple')
        scale: Multiplier applied to each return (100 gives percent returns)

    Returns:
        Series of returns (first value will be NaN)

    Formula:
        Log returns: r_t = ln(P_t / P_{t-1})
        Simple returns: r_t = (P_t - P_{t-1}) / P_{t-1}
    """
    prices = pd.Series(prices, dtype=float)

    if method == 'log':
        # Zero or negative prices give NaN
        with np.errstate(divide='ignore', invalid='ignore'):
            returns = np.log(prices / prices.shift(1))
    elif method == 'simple':
        returns = (prices - prices.shift(1)) / prices.shift(1)
    else:
        raise ValueError(f"Unknown return method: {method}. Use 'log' or 'simple'")

    returns = returns.replace([np.inf, -np.inf], np.nan)
    return returns * scale


def clip_returns(
    returns: pd.Series,
    lower: Optional[float] = None,
    upper: Optional[float] = None
) -> pd.Series:
    """
    Clip returns into [lower, upper].

    Args:
        returns: Series of returns
        lower: Smallest allowed return (None for no lower bound)
        upper: Largest allowed return (None for no upper bound)

    Returns:
        Clipped series (NaN values are left as NaN)
    """
    if lower is not None and upper is not None and lower > upper:
        raise ValueError(f"Lower bound {lower} is above upper bound {upper}")
    return returns.clip(lower=lower, upper=upper)
