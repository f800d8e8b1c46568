from collections import deque
from dataclasses import dataclass
from typing import Iterator, Optional

import numpy as np
import pandas as pd

from exotransit.config import LIGHT_CURVE_CAPACITY


@dataclass(frozen=True)
class LightCurveSample:
    timestamp: float
    flux: float

    def __post_init__(self):
        if not 0.0 <= self.flux <= 1.0:
            raise ValueError(f"flux must lie in [0, 1], got {self.flux}")


class LightCurveBuffer:
    """
    Fixed-capacity, time-ordered ring of light-curve samples. The oldest
    sample is evicted once the buffer is full.
    """

    def __init__(self, capacity: int = LIGHT_CURVE_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._samples = deque(maxlen=capacity)

    def __len__(self):
        return len(self._samples)

    def __iter__(self) -> Iterator[LightCurveSample]:
        return iter(tuple(self._samples))

    @property
    def capacity(self) -> int:
        return self._samples.maxlen

    @property
    def latest(self) -> Optional[LightCurveSample]:
        return self._samples[-1] if self._samples else None

    def append(self, timestamp: float, flux: float) -> LightCurveSample:
        latest = self.latest
        if latest is not None and timestamp <= latest.timestamp:
            raise ValueError(
                f"sample at t={timestamp} is not after the latest t={latest.timestamp}"
            )
        sample = LightCurveSample(float(timestamp), float(flux))
        self._samples.append(sample)
        return sample

    def clear(self) -> None:
        self._samples.clear()

    @property
    def times(self) -> np.ndarray:
        return np.array([s.timestamp for s in self._samples], dtype=float)

    @property
    def fluxes(self) -> np.ndarray:
        return np.array([s.flux for s in self._samples], dtype=float)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame({"t": self.times, "flux": self.fluxes})
