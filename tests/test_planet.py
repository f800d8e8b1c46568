"""
tests/test_planet.py - Orbital elements and position sampling
"""

import numpy as np
import pytest

from exotransit.base import OrbitalElements, Planet, Star, position
from exotransit.base.planet import positions
from exotransit.errors import ConfigurationError


class TestOrbitalElements:
    """Validation and normalization of orbital elements."""

    @pytest.mark.parametrize(
        "field", ["star_radius", "planet_radius", "orbit_radius", "period"]
    )
    @pytest.mark.parametrize("bad", [0.0, -1.0, float("nan"), float("inf")])
    def test_rejects_non_positive(self, field, bad):
        """Radii and period must be strictly positive and finite."""
        values = dict(star_radius=1.0, planet_radius=0.1, orbit_radius=2.0, period=10.0)
        values[field] = bad
        with pytest.raises(ConfigurationError):
            OrbitalElements(**values)

    @pytest.mark.parametrize("bad", [None, "wide", [2.0]])
    def test_rejects_non_numeric(self, bad):
        """Non-numeric fields raise ConfigurationError, not TypeError."""
        with pytest.raises(ConfigurationError):
            OrbitalElements(1.0, 0.1, bad, 10.0)
        with pytest.raises(ConfigurationError):
            OrbitalElements(1.0, 0.1, 2.0, 10.0, phase_offset=bad)

    def test_configuration_error_is_value_error(self):
        """Callers catching ValueError still see bad elements."""
        with pytest.raises(ValueError):
            OrbitalElements(1.0, 0.1, 2.0, -3.0)

    def test_phase_offset_normalized(self):
        """Phase offset is wrapped into [0, 2 pi)."""
        e = OrbitalElements(1.0, 0.1, 2.0, 10.0, phase_offset=-np.pi / 2)
        assert e.phase_offset == pytest.approx(3 * np.pi / 2)
        e = OrbitalElements(1.0, 0.1, 2.0, 10.0, phase_offset=5 * np.pi)
        assert e.phase_offset == pytest.approx(np.pi)

    def test_rejects_non_finite_phase(self):
        with pytest.raises(ConfigurationError):
            OrbitalElements(1.0, 0.1, 2.0, 10.0, phase_offset=float("nan"))

    def test_immutable(self, elements):
        """Elements are frozen for the whole session."""
        with pytest.raises(AttributeError):
            elements.period = 5.0


class TestPosition:
    """Circular orbit sampling."""

    def test_start_position(self, elements):
        """At t=0 with zero phase the planet sits on +x."""
        assert position(elements, 0.0) == pytest.approx((2.0, 0.0, 0.0))

    def test_quarter_period(self, elements):
        """A quarter period later it is in front of the star on +z."""
        x, y, z = position(elements, 2.5)
        assert x == pytest.approx(0.0, abs=1e-12)
        assert y == 0.0
        assert z == pytest.approx(2.0)

    def test_phase_offset_shifts_angle(self):
        e = OrbitalElements(1.0, 0.1, 3.0, 8.0, phase_offset=np.pi)
        assert position(e, 0.0) == pytest.approx((-3.0, 0.0, 0.0), abs=1e-12)

    @pytest.mark.parametrize("t", [0.0, 0.37, 2.5, 7.1, 123.456, -4.2])
    @pytest.mark.parametrize("k", [1, 2, -3, 17])
    def test_periodicity(self, elements, t, k):
        """position(e, t) == position(e, t + k * period)."""
        assert position(elements, t + k * elements.period) == pytest.approx(
            position(elements, t), abs=1e-9
        )

    def test_stays_on_orbit(self, elements):
        """The distance from the star is always the orbit radius and y is 0."""
        for t in np.linspace(-20, 20, 41):
            x, y, z = position(elements, t)
            assert y == 0.0
            assert np.hypot(x, z) == pytest.approx(elements.orbit_radius)

    def test_vectorized_matches_scalar(self, elements):
        times = np.array([0.0, 1.3, 2.5, 9.99])
        r = positions(elements, times)
        assert r.shape == (3, 4)
        for i, t in enumerate(times):
            assert tuple(r[:, i]) == pytest.approx(position(elements, t))


class TestPlanet:
    """Planet wrapper around ingestion records."""

    def test_planet_from_dict(self):
        star = Star(1.0, name="A")
        planet = Planet({"radius": 0.1, "orbit_radius": 2.0, "period": 10.0}, star)
        assert planet.radius == 0.1
        assert planet.a == 2.0
        assert planet.T == 10.0
        assert planet.phase_offset == 0.0
        assert "Planet object" in repr(planet)

    def test_transit_times(self):
        """Transits happen when the planet crosses x = 0 on the observer side."""
        star = Star(1.0)
        planet = Planet({"radius": 0.1, "orbit_radius": 2.0, "period": 10.0}, star)
        assert planet.transit_times(0.0, 30.0) == pytest.approx([2.5, 12.5, 22.5])
        assert len(planet.transit_times(3.0, 12.0)) == 0
