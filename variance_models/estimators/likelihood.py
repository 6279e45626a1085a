"""
Gaussian log-likelihood shared by the ARCH and GARCH estimators.

Formula (per observation):
    ℓ_t = -0.5 * (ln(2π) + ln(σ²_t) + (r_t / σ_t)²)

The total is reported as a fit diagnostic only; nothing is maximized.
"""

import numpy as np
from scipy.stats import norm

from variance_models.utils import NumericDomainError


def pointwise_log_likelihood(returns, variances) -> np.ndarray:
    """
    Per-observation Gaussian log-likelihood terms.

    Args:
        returns: Array of returns r_t
        variances: Array of conditional variances σ²_t, same length

    Returns:
        Array of log-likelihood terms

    Raises:
        NumericDomainError: If a variance is not strictly positive or a
            term is not finite
    """
    returns = np.asarray(returns, dtype=float)
    variances = np.asarray(variances, dtype=float)

    if returns.shape != variances.shape:
        raise ValueError(
            f"returns and variances differ in shape: {returns.shape} vs {variances.shape}"
        )

    bad = ~(variances > 0)
    if bad.any():
        index = int(np.argmax(bad))
        raise NumericDomainError(
            f"Conditional variance must be positive, got {variances[index]} at position {index}"
        )

    with np.errstate(over='ignore', divide='ignore', invalid='ignore'):
        terms = norm.logpdf(returns, loc=0.0, scale=np.sqrt(variances))

    bad = ~np.isfinite(terms)
    if bad.any():
        index = int(np.argmax(bad))
        raise NumericDomainError(f"Log-likelihood term is not finite at position {index}")

    return terms


def gaussian_log_likelihood(returns, variances) -> float:
    """Total Gaussian log-likelihood of returns given conditional variances."""
    return float(np.sum(pointwise_log_likelihood(returns, variances)))
