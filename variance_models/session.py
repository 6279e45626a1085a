"""
Session controller for interactive volatility estimation.

The session owns the return series, the active estimator and its
parameter set. Every change (a new sample, a parameter change, an
estimator switch) triggers a full recomputation over the whole series,
so results never depend on what was computed before the change.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Tuple

import pandas as pd

from variance_models.estimators import (
    Diagnostics,
    VolatilityEstimator,
    VolatilityResult,
    get_estimator,
    list_estimators,
)
from variance_models.series import ReturnSeries, Sample
from variance_models.utils import ConfigurationError, load_config, setup_logging

logger = logging.getLogger(__name__)


class VolatilitySession:
    """
    Holds one ReturnSeries and the selected estimator, and exposes the
    latest volatility series and diagnostics for display.
    """

    def __init__(
        self,
        estimator: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        max_length: Optional[int] = None,
        annualization_factor: Optional[int] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize session.

        Args:
            estimator: Estimator name (default: from config, 'smav')
            params: Parameters for the estimator; missing ones come from the
                configured defaults
            max_length: Number of samples kept, oldest evicted first
                (default: from config, 100; None in the config keeps all)
            annualization_factor: Periods per year (default: from config, 252)
            config: Configuration dictionary (default: built-in defaults)
        """
        self.config = config if config is not None else load_config(None)
        session_config = self.config.get('session', {})

        if max_length is None:
            max_length = session_config.get('max_length')
        if annualization_factor is None:
            annualization_factor = self.config.get('annualization_factor', 252)
        self.annualization_factor = annualization_factor

        self._series = ReturnSeries(max_length=max_length)
        self._result: Optional[VolatilityResult] = None

        name = estimator or session_config.get('estimator', 'smav')
        self._estimator = self._build(name, params or {})
        logger.info("Session started with %r", self._estimator)

    @classmethod
    def from_config(
        cls,
        config_path: str = 'config.yaml',
        configure_logging: bool = False,
        **kwargs
    ) -> 'VolatilitySession':
        """
        Create a session from a YAML config file.

        Args:
            config_path: Path to config file
            configure_logging: Also set up package logging from the
                config's logging section
            **kwargs: Overrides passed to the constructor

        Raises:
            ConfigError: If the config file cannot be loaded
        """
        config = load_config(config_path)
        if configure_logging:
            logging_config = config.get('logging', {})
            setup_logging(
                log_file=logging_config.get('file'),
                log_level=logging_config.get('level', 'INFO')
            )
        return cls(config=config, **kwargs)

    # Read-only state

    @property
    def series(self) -> ReturnSeries:
        """Copy of the current return series."""
        return self._series.copy()

    @property
    def estimator(self) -> VolatilityEstimator:
        return self._estimator

    @property
    def estimator_name(self) -> str:
        return self._estimator.name

    @property
    def params(self) -> Dict[str, Any]:
        return dict(self._estimator.params)

    @property
    def volatility(self) -> pd.Series:
        """Latest volatility series (empty before the first estimate)."""
        if self._result is None:
            return pd.Series([], name=self.estimator_name, dtype=float)
        return self._result.volatility.copy()

    @property
    def diagnostics(self) -> Diagnostics:
        if self._result is None:
            return Diagnostics(is_stable=self._estimator.is_stable)
        return self._result.diagnostics

    @property
    def last_sample(self) -> Optional[Sample]:
        return self._series.last

    @property
    def latest_volatility(self) -> Optional[float]:
        return self.diagnostics.current_volatility

    def defaults(self, name: Optional[str] = None) -> Dict[str, Any]:
        """Configured default parameters for an estimator."""
        name = name or self.estimator_name
        estimator_config = self.config.get('estimators', {}).get(name, {})
        return dict(estimator_config.get('defaults') or {})

    def presets(self, name: Optional[str] = None) -> Dict[str, Dict[str, Any]]:
        """Configured parameter presets for an estimator."""
        name = name or self.estimator_name
        estimator_config = self.config.get('estimators', {}).get(name, {})
        return dict(estimator_config.get('presets') or {})

    # Data changes

    def append(self, time, value: float) -> VolatilityResult:
        """
        Append one sample and recompute.

        Returns:
            The new VolatilityResult
        """
        self._series.append(time, value)
        return self.recompute()

    def extend(self, samples: Iterable[Tuple]) -> VolatilityResult:
        """
        Append several samples, recomputing once at the end.
        """
        self._series.extend(samples)
        return self.recompute()

    def reset(self) -> None:
        """Drop all samples and results."""
        self._series.clear()
        self._result = None
        logger.info("Session reset")

    # Configuration changes

    def select_estimator(self, name: str, **params) -> VolatilityResult:
        """
        Switch to another estimator and recompute from scratch.

        Args:
            name: Estimator name
            **params: Parameters; missing ones come from configured defaults

        Raises:
            ValueError: If the name is unknown
            ConfigurationError: If the parameters are invalid (the previous
                estimator stays active)
        """
        self._estimator = self._build(name, params)
        logger.info("Switched estimator to %r", self._estimator)
        return self.recompute()

    def set_params(self, **params) -> VolatilityResult:
        """
        Change parameters of the active estimator and recompute from scratch.

        Raises:
            ConfigurationError: If the new parameter set is invalid (the
                previous one stays active)
        """
        merged = self.params
        merged.update(params)
        self._estimator = self._build(self.estimator_name, merged)
        logger.info("Parameters changed to %r", self._estimator)
        return self.recompute()

    def apply_preset(self, preset: str) -> VolatilityResult:
        """
        Apply a named parameter preset for the active estimator.

        Raises:
            ConfigurationError: If the preset does not exist
        """
        presets = self.presets()
        if preset not in presets:
            raise ConfigurationError(
                f"Unknown preset '{preset}' for estimator '{self.estimator_name}'. "
                f"Available presets: {', '.join(presets) or 'none'}"
            )
        return self.set_params(**presets[preset])

    def recompute(self) -> VolatilityResult:
        """
        Recompute the active estimator over the whole series.

        The previous result is discarded first, so a failing recompute
        leaves no stale output behind.

        Raises:
            NumericDomainError: If the parameter set produces a
                non-positive or non-finite variance on this series
        """
        self._result = None
        result = self._estimator.recompute(self._series)
        self._result = result
        logger.debug("Diagnostics: %s", result.diagnostics.to_dict())
        return result

    def _build(self, name: str, params: Dict[str, Any]) -> VolatilityEstimator:
        name = name.lower().strip()
        if name not in list_estimators():
            raise ValueError(
                f"Unknown estimator '{name}'. Available estimators: {', '.join(list_estimators())}"
            )
        merged = self.defaults(name)
        merged.update(params)
        estimator = get_estimator(name, annualization_factor=self.annualization_factor, **merged)
        if not estimator.is_stable:
            logger.warning("%r is not stable", estimator)
        return estimator

    def __repr__(self) -> str:
        return f"VolatilitySession(estimator={self._estimator!r}, series={self._series!r})"
