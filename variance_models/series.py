"""
Return series data model.

A ReturnSeries is the ordered, append-only sequence of (time, return)
samples that every estimator consumes. Samples are stored in insertion
order, which must also be time order. When a maximum length is set the
oldest sample is evicted first.
"""

import math
from collections import deque
from typing import Iterable, Iterator, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from variance_models.returns import calculate_returns, clip_returns
from variance_models.utils import ValidationError, validate_positive_int


class Sample(NamedTuple):
    """One observed return."""
    time: Union[int, float, pd.Timestamp]
    value: float


class ReturnSeries:
    """
    Ordered sequence of return samples.

    Samples are never reordered or modified once appended; the only
    removal is FIFO eviction when ``max_length`` is set.
    """

    def __init__(
        self,
        samples: Optional[Iterable[Tuple]] = None,
        max_length: Optional[int] = None
    ):
        """
        Initialize return series.

        Args:
            samples: Optional iterable of (time, value) pairs
            max_length: Keep at most this many samples (None for unbounded)
        """
        if max_length is not None:
            max_length = validate_positive_int(max_length, name="max_length")
        self.max_length = max_length
        self._samples = deque(maxlen=max_length)

        if samples is not None:
            self.extend(samples)

    @classmethod
    def from_series(
        cls,
        series: pd.Series,
        max_length: Optional[int] = None
    ) -> 'ReturnSeries':
        """
        Build a ReturnSeries from a pandas Series indexed by time.
        """
        return cls(zip(series.index, series.to_numpy(dtype=float)), max_length=max_length)

    @classmethod
    def from_prices(
        cls,
        prices: pd.Series,
        method: str = 'log',
        scale: float = 1.0,
        clip: Optional[Tuple[Optional[float], Optional[float]]] = None,
        max_length: Optional[int] = None
    ) -> 'ReturnSeries':
        """
        Build a ReturnSeries from a price series.

        The first price has no return and is dropped. A price that cannot
        produce a return (zero, negative or missing) contributes a return of 0.

        Args:
            prices: Series of prices indexed by time
            method: 'log' or 'simple'
            scale: Return multiplier (100 for percent returns)
            clip: Optional (lower, upper) bounds for each return
            max_length: Keep at most this many samples
        """
        returns = calculate_returns(prices, method=method, scale=scale).iloc[1:]
        returns = returns.fillna(0.0)
        if clip is not None:
            returns = clip_returns(returns, lower=clip[0], upper=clip[1])
        return cls.from_series(returns, max_length=max_length)

    def append(self, time, value: float) -> Sample:
        """
        Append one sample, evicting the oldest one if the series is full.

        Args:
            time: Ordinal time of the sample, not earlier than the last one
            value: Return value (finite)

        Returns:
            The stored Sample

        Raises:
            ValidationError: If time goes backwards or value is not finite
        """
        try:
            value = float(value)
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Return value must be numeric, got {value!r}") from e
        if not math.isfinite(value):
            raise ValidationError(f"Return value must be finite, got {value} at time {time}")

        if self._samples:
            last_time = self._samples[-1].time
            try:
                out_of_order = time < last_time
            except TypeError as e:
                raise ValidationError(
                    f"Time {time!r} is not comparable with previous time {last_time!r}"
                ) from e
            if out_of_order:
                raise ValidationError(
                    f"Samples must be appended in time order: {time} < {last_time}"
                )

        sample = Sample(time, value)
        self._samples.append(sample)
        return sample

    def extend(self, samples: Iterable[Tuple]) -> None:
        """Append (time, value) pairs in order."""
        for time, value in samples:
            self.append(time, value)

    def clear(self) -> None:
        self._samples.clear()

    def copy(self) -> 'ReturnSeries':
        return ReturnSeries(self._samples, max_length=self.max_length)

    @property
    def last(self) -> Optional[Sample]:
        """Most recent sample, or None if empty."""
        return self._samples[-1] if self._samples else None

    @property
    def times(self) -> np.ndarray:
        return np.array([sample.time for sample in self._samples])

    @property
    def values(self) -> np.ndarray:
        return np.array([sample.value for sample in self._samples], dtype=float)

    def to_series(self) -> pd.Series:
        """
        Convert to a pandas Series of returns indexed by time.

        Returns:
            Series named 'return' with index named 'time'
        """
        index = pd.Index([sample.time for sample in self._samples], name='time')
        return pd.Series(self.values, index=index, name='return', dtype=float)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[Sample]:
        return iter(self._samples)

    def __getitem__(self, index: int) -> Sample:
        return self._samples[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, ReturnSeries):
            return NotImplemented
        return list(self._samples) == list(other._samples)

    def __repr__(self) -> str:
        return f"ReturnSeries(n={len(self)}, max_length={self.max_length})"


SeriesLike = Union[ReturnSeries, pd.Series, Sequence[float], np.ndarray]
