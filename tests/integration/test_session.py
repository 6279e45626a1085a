"""
Integration tests for the session controller.

Tests the workflow from streamed samples through estimator selection and
parameter changes to the exposed volatility series and diagnostics.
"""

import logging

import numpy as np
import pandas as pd
import pytest

from variance_models import (
    ConfigurationError,
    NumericDomainError,
    ReturnSeries,
    Sample,
    VolatilitySession,
    get_estimator,
    setup_logging,
)


def stream(n=150, seed=3, scale=0.01):
    """(time, return) pairs as a producer would emit them."""
    rng = np.random.default_rng(seed)
    return [(t, float(r)) for t, r in enumerate(rng.normal(0, scale, n))]


class TestSessionWorkflow:
    """Test complete session workflow."""

    def test_end_to_end_garch(self):
        """Worked GARCH example through the session."""
        session = VolatilitySession(
            estimator='garch',
            params={'omega': 0.0001, 'alpha': 0.1, 'beta': 0.8}
        )
        for t, r in enumerate([0.02, -0.01, 0.03, -0.02, 0.01]):
            session.append(t, r)

        volatility = session.volatility
        assert len(volatility) == 5
        assert volatility.iloc[0] == pytest.approx(0.0316228, abs=1e-6)
        assert volatility.iloc[1] == pytest.approx(np.sqrt(0.00094), abs=1e-6)

        diagnostics = session.diagnostics
        assert diagnostics.long_run_volatility == pytest.approx(np.sqrt(0.001), abs=1e-9)
        assert diagnostics.persistence == 0.1 + 0.8
        assert diagnostics.is_stable
        assert diagnostics.annualized_volatility == pytest.approx(
            volatility.iloc[-1] * np.sqrt(252)
        )
        assert session.latest_volatility == volatility.iloc[-1]
        assert session.last_sample == Sample(4, 0.01)

    def test_warm_up(self):
        """Before the window fills the session reports no estimate."""
        session = VolatilitySession(estimator='smav', params={'window': 5})
        for t, r in stream(4):
            result = session.append(t, r)
            assert result.volatility.empty
            assert session.latest_volatility is None

        session.append(4, 0.01)
        assert len(session.volatility) == 1

    def test_default_parameters_from_config(self):
        """Missing parameters come from the configured defaults."""
        session = VolatilitySession(estimator='arch')
        assert session.params == {'alpha0': 0.01, 'alpha1': 0.7, 'lag': 1}

        session.select_estimator('garch', beta=0.85)
        assert session.params == {'omega': 0.000001, 'alpha': 0.09, 'beta': 0.85}

    def test_bounded_series(self):
        """The session keeps at most max_length samples."""
        session = VolatilitySession(estimator='ewma', max_length=100)
        session.extend(stream(150))

        assert len(session.series) == 100
        assert session.series[0].time == 50
        assert len(session.volatility) == 100
        assert session.volatility.index[0] == 50

    def test_extend_matches_append(self):
        """Appending one at a time ends at the same result as one batch."""
        samples = stream(60)
        one_by_one = VolatilitySession(estimator='ewma', params={'lambda_param': 0.9})
        for t, r in samples:
            one_by_one.append(t, r)

        batch = VolatilitySession(estimator='ewma', params={'lambda_param': 0.9})
        batch.extend(samples)

        pd.testing.assert_series_equal(one_by_one.volatility, batch.volatility)


class TestParameterChanges:
    """Parameter and estimator changes start from a clean slate."""

    @pytest.mark.parametrize('name, first, second', [
        ('smav', {'window': 10}, {'window': 30}),
        ('ewma', {'lambda_param': 0.94}, {'lambda_param': 0.8}),
        ('arch', {'alpha0': 0.0001, 'alpha1': 0.3}, {'alpha1': 0.6, 'lag': 3}),
        ('garch', {'omega': 0.000002, 'alpha': 0.09, 'beta': 0.9}, {'alpha': 0.15, 'beta': 0.8}),
    ])
    def test_change_matches_fresh_replay(self, name, first, second):
        """A parameter change equals a fresh session replaying the same data."""
        samples = stream(120)

        session = VolatilitySession(estimator=name, params=first)
        session.extend(samples)
        session.set_params(**second)

        params = dict(first)
        params.update(second)
        fresh = VolatilitySession(estimator=name, params=params)
        for t, r in samples:
            fresh.append(t, r)

        pd.testing.assert_series_equal(session.volatility, fresh.volatility)
        assert session.diagnostics == fresh.diagnostics

        # Same as calling the estimator directly
        direct, direct_diagnostics = get_estimator(name, **params).recompute(
            ReturnSeries(samples, max_length=100)
        )
        pd.testing.assert_series_equal(session.volatility, direct)
        assert session.diagnostics == direct_diagnostics

    def test_switching_estimators(self):
        """Switching away and back reproduces the original result."""
        session = VolatilitySession(estimator='garch')
        session.extend(stream(80))
        before = session.volatility

        session.select_estimator('smav', window=10)
        assert len(session.volatility) == 80 - 10 + 1
        assert session.volatility.name == 'smav'

        session.select_estimator('garch')
        pd.testing.assert_series_equal(session.volatility, before)

    def test_invalid_parameters_keep_configuration(self):
        """A rejected parameter change leaves the previous estimator active."""
        session = VolatilitySession(estimator='ewma', params={'lambda_param': 0.9})
        session.extend(stream(30))
        before = session.volatility

        with pytest.raises(ConfigurationError):
            session.set_params(lambda_param=1.5)
        with pytest.raises(ConfigurationError):
            session.select_estimator('smav', window=-3)
        with pytest.raises(ValueError):
            session.select_estimator('heston')

        assert session.estimator_name == 'ewma'
        assert session.params == {'lambda_param': 0.9}
        pd.testing.assert_series_equal(session.volatility, before)

    def test_unstable_garch_fails_without_stale_output(self):
        """A failing recompute clears the previous result."""
        session = VolatilitySession(estimator='garch')
        session.extend(stream(30))
        assert not session.volatility.empty

        with pytest.raises(NumericDomainError):
            session.set_params(alpha=0.2, beta=0.9)

        assert session.volatility.empty
        assert session.latest_volatility is None
        assert session.diagnostics.is_stable is False
        assert session.estimator.persistence == pytest.approx(1.1)

    def test_presets(self):
        """Named presets set the configured parameters."""
        session = VolatilitySession(estimator='garch')
        session.extend(stream(30))

        session.apply_preset('more_reactive')
        assert session.params == {'omega': 0.000005, 'alpha': 0.15, 'beta': 0.80}

        with pytest.raises(ConfigurationError, match="Unknown preset"):
            session.apply_preset('made_up')

    def test_reset(self):
        """Reset drops samples and results."""
        session = VolatilitySession(estimator='ewma')
        session.extend(stream(10))
        session.reset()

        assert len(session.series) == 0
        assert session.volatility.empty
        assert session.recompute().volatility.empty


class TestConfigFile:
    """Sessions built from YAML config files."""

    def test_from_config(self, tmp_path):
        """Session settings come from the file."""
        path = tmp_path / 'config.yaml'
        path.write_text(
            "annualization_factor: 365\n"
            "session:\n"
            "  estimator: ewma\n"
            "  max_length: 20\n"
            "estimators:\n"
            "  ewma:\n"
            "    defaults:\n"
            "      lambda_param: 0.97\n"
        )
        session = VolatilitySession.from_config(str(path))
        session.extend(stream(50))

        assert session.estimator_name == 'ewma'
        assert session.params == {'lambda_param': 0.97}
        assert len(session.series) == 20
        assert session.diagnostics.annualized_volatility == pytest.approx(
            session.latest_volatility * np.sqrt(365)
        )

    def test_from_config_sets_up_logging(self, tmp_path):
        """configure_logging applies the file's logging section."""
        log_file = tmp_path / 'logs' / 'session.log'
        path = tmp_path / 'config.yaml'
        path.write_text(
            "logging:\n"
            "  level: DEBUG\n"
            f"  file: {log_file.as_posix()}\n"
        )

        try:
            session = VolatilitySession.from_config(str(path), configure_logging=True)
            session.select_estimator('ewma')

            package_logger = logging.getLogger('variance_models')
            assert package_logger.level == logging.DEBUG
            assert len(package_logger.handlers) == 2

            for handler in package_logger.handlers:
                handler.flush()
            text = log_file.read_text()
            assert "Session started" in text
            assert "Switched estimator" in text
        finally:
            setup_logging(console=False)

    def test_repository_config(self):
        """The shipped config.yaml loads and selects SMAV."""
        from pathlib import Path

        config_path = Path(__file__).resolve().parents[2] / 'config.yaml'
        session = VolatilitySession.from_config(str(config_path))

        assert session.estimator_name == 'smav'
        assert session.params == {'window': 20}
        assert set(session.presets('garch')) == {
            'riskmetrics', 'standard', 'high_persistence', 'more_reactive'
        }
