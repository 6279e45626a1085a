"""
Base estimator class for conditional volatility estimators.

All volatility estimators inherit from this abstract base class. An
estimator instance holds one immutable parameter set; every call to
recompute() is an independent pass over the series it is given, so no
state is carried from one call to the next.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Dict, NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from variance_models.series import ReturnSeries, SeriesLike
from variance_models.utils import (
    InsufficientDataError,
    NumericDomainError,
    ValidationError,
    validate_positive_int,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostics:
    """
    Derived figures reported alongside a volatility series.

    Fields that do not apply to an estimator are None.
    """
    current_volatility: Optional[float] = None
    annualized_volatility: Optional[float] = None
    is_stable: bool = True
    persistence: Optional[float] = None
    log_likelihood: Optional[float] = None
    long_run_volatility: Optional[float] = None
    half_life: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class VolatilityResult(NamedTuple):
    """Volatility series (conditional standard deviation) and its diagnostics."""
    volatility: pd.Series
    diagnostics: Diagnostics


class BaseEstimator(ABC):
    """
    Abstract base class for volatility estimators.

    Subclasses implement:
    - calculate(): the recursion over a validated return series
    - params: the parameter set as a dict
    - minimum_length: samples needed before the first estimate
    """

    name: str = ''

    def __init__(self, annualization_factor: int = 252):
        """
        Initialize estimator.

        Args:
            annualization_factor: Periods per year for annualization (default: 252)
        """
        self.annualization_factor = validate_positive_int(
            annualization_factor, name="annualization_factor"
        )

    @property
    @abstractmethod
    def params(self) -> Dict[str, Any]:
        """Parameter set of this estimator."""

    @property
    @abstractmethod
    def minimum_length(self) -> int:
        """Number of samples required to produce any output."""

    @property
    def is_stable(self) -> bool:
        """Whether the parameter set describes a stationary process."""
        return True

    @abstractmethod
    def calculate(self, returns: pd.Series) -> Tuple[pd.Series, Dict[str, Any]]:
        """
        Calculate volatility estimates.

        Args:
            returns: Validated Series of returns indexed by time

        Returns:
            Tuple of (volatility Series, estimator-specific diagnostics)
        """

    def validate_inputs(self, returns: pd.Series) -> None:
        """
        Validate input data.

        Args:
            returns: Series of returns

        Raises:
            ValidationError: If returns contain non-finite values
            InsufficientDataError: If there are fewer than minimum_length samples
        """
        if not np.isfinite(returns.to_numpy(dtype=float)).all():
            raise ValidationError("Returns must all be finite")

        if len(returns) < self.minimum_length:
            raise InsufficientDataError(
                f"Insufficient data: {self.name} needs at least "
                f"{self.minimum_length} returns, got {len(returns)}"
            )

    def annualize(self, volatility):
        """
        Convert per-period volatility to annualized volatility.

        Formula: σ_annual = σ_period * √(annualization_factor)
        """
        return volatility * np.sqrt(self.annualization_factor)

    def recompute(self, series: SeriesLike) -> VolatilityResult:
        """
        Main interface: validate, calculate and derive diagnostics.

        Fewer samples than minimum_length is an expected warm-up state and
        gives an empty series rather than an error. Any other failure is
        raised; no partial result is returned.

        Args:
            series: ReturnSeries, pandas Series indexed by time, or a
                sequence of returns (indexed 0..n-1)

        Returns:
            VolatilityResult of (volatility Series, Diagnostics)
        """
        returns = to_returns(series)

        try:
            self.validate_inputs(returns)
        except InsufficientDataError as e:
            logger.debug("%s", e)
            return VolatilityResult(
                self._empty(returns),
                Diagnostics(is_stable=self.is_stable),
            )

        volatility, extra = self.calculate(returns)
        volatility = volatility.rename(self.name)

        current = float(volatility.iloc[-1]) if len(volatility) else None
        diagnostics = Diagnostics(
            current_volatility=current,
            annualized_volatility=None if current is None else float(self.annualize(current)),
            is_stable=self.is_stable,
            **extra
        )

        logger.debug(
            "%s recomputed over %d returns: current volatility %s",
            self.name, len(returns), current
        )
        return VolatilityResult(volatility, diagnostics)

    def _empty(self, returns: pd.Series) -> pd.Series:
        return pd.Series([], index=returns.index[:0], name=self.name, dtype=float)

    def __repr__(self) -> str:
        args = ', '.join(f"{key}={value!r}" for key, value in self.params.items())
        return f"{type(self).__name__}({args})"


def check_finite_variance(variance, offset: int = 0) -> None:
    """
    Raise NumericDomainError at the first variance that is not finite.

    Args:
        variance: Array of variances
        offset: Position in the return series of variance[0]
    """
    bad = ~np.isfinite(np.asarray(variance, dtype=float))
    if bad.any():
        index = int(np.argmax(bad))
        raise NumericDomainError(
            f"Variance is not finite at position {index + offset}"
        )


def to_returns(series: SeriesLike) -> pd.Series:
    """
    Coerce the supported series inputs to a float Series indexed by time.
    """
    if isinstance(series, ReturnSeries):
        return series.to_series()
    if isinstance(series, pd.Series):
        return series.astype(float)
    return pd.Series(np.asarray(series, dtype=float), name='return')
