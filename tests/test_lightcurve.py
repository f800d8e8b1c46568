"""
tests/test_lightcurve.py - Bounded light-curve buffer
"""

import numpy as np
import pytest

from exotransit.scene.lightcurve import LightCurveBuffer, LightCurveSample


class TestLightCurveBuffer:
    def test_append_and_read(self):
        buffer = LightCurveBuffer(capacity=4)
        buffer.append(0.0, 1.0)
        buffer.append(0.5, 0.99)
        assert len(buffer) == 2
        assert buffer.latest == LightCurveSample(0.5, 0.99)
        assert list(buffer.times) == [0.0, 0.5]

    def test_never_exceeds_capacity(self):
        buffer = LightCurveBuffer(capacity=5)
        for i in range(23):
            buffer.append(i * 0.1, 1.0)
            assert len(buffer) <= 5
        assert len(buffer) == 5

    def test_evicts_oldest_and_stays_ordered(self):
        buffer = LightCurveBuffer(capacity=3)
        for i in range(10):
            buffer.append(float(i), 1.0 - i / 100)
        times = buffer.times
        assert list(times) == [7.0, 8.0, 9.0]
        assert np.all(np.diff(times) > 0)

    @pytest.mark.parametrize("timestamp", [1.0, 0.5])
    def test_rejects_non_increasing_time(self, timestamp):
        buffer = LightCurveBuffer(capacity=3)
        buffer.append(1.0, 1.0)
        with pytest.raises(ValueError):
            buffer.append(timestamp, 1.0)
        assert len(buffer) == 1

    @pytest.mark.parametrize("flux", [-0.1, 1.1])
    def test_rejects_flux_out_of_range(self, flux):
        with pytest.raises(ValueError):
            LightCurveBuffer().append(0.0, flux)

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            LightCurveBuffer(capacity=0)

    def test_iteration_is_a_snapshot(self):
        buffer = LightCurveBuffer(capacity=3)
        buffer.append(0.0, 1.0)
        samples = iter(buffer)
        buffer.append(1.0, 1.0)
        assert [s.timestamp for s in samples] == [0.0]

    def test_to_dataframe(self):
        buffer = LightCurveBuffer(capacity=3)
        buffer.append(0.0, 1.0)
        buffer.append(1.0, 0.98)
        df = buffer.to_dataframe()
        assert list(df.columns) == ["t", "flux"]
        assert df["flux"].tolist() == [1.0, 0.98]

    def test_clear(self):
        buffer = LightCurveBuffer(capacity=3)
        buffer.append(0.0, 1.0)
        buffer.clear()
        assert buffer.latest is None
        assert buffer.capacity == 3
