"""
tests/test_jax_system.py - JAX batch light curves agree with the numpy model
"""

import equinox as eqx
import jax
import jax.numpy as jnp
import numpy as np
import pytest

from exotransit.jax import TransitSystem


class TestTransitSystem:
    def test_from_system_shapes(self, system):
        model = TransitSystem.from_system(system)
        assert model.planet_radius.shape == (2,)
        assert model.position(0.0).shape == (3, 2)

    def test_flux_matches_numpy(self, system):
        model = TransitSystem.from_system(system)
        times = np.linspace(0.0, 40.0, 401)
        expected = system.light_curve(times)["flux"].to_numpy()
        got = np.asarray(model.light_curve(jnp.asarray(times)))
        np.testing.assert_allclose(got, expected, atol=1e-4)

    def test_limb_darkened_flux_matches_numpy(self, single_planet_system):
        model = TransitSystem.from_system(single_planet_system, limb_darkening_u=0.5)
        times = np.linspace(1.5, 3.5, 81)
        expected = single_planet_system.light_curve(times, limb_darkening_u=0.5)
        got = np.asarray(model.light_curve(jnp.asarray(times)))
        np.testing.assert_allclose(got, expected["flux"].to_numpy(), atol=1e-4)

    def test_central_transit_depth(self, single_planet_system):
        model = TransitSystem.from_system(single_planet_system)
        assert float(model.flux(2.5)) == pytest.approx(0.99, abs=1e-6)
        assert float(model.flux(7.5)) == pytest.approx(1.0)

    def test_filter_jit_compatible(self, single_planet_system):
        model = TransitSystem.from_system(single_planet_system)
        times = jnp.linspace(0.0, 10.0, 11)
        flux = eqx.filter_jit(model.light_curve)(times)
        assert flux.shape == (11,)
        assert float(flux[0]) == pytest.approx(1.0)
        np.testing.assert_allclose(
            np.asarray(flux), np.asarray(model.light_curve(times)), atol=1e-6
        )

    def test_jit_with_model_as_argument(self, single_planet_system):
        """The module is a pytree, so it can be passed through jax.jit."""
        model = TransitSystem.from_system(single_planet_system)
        flux = jax.jit(TransitSystem.light_curve)(model, jnp.array([2.5, 7.5]))
        np.testing.assert_allclose(np.asarray(flux), [0.99, 1.0], atol=1e-6)
