"""JAX-friendly transit model for exotransit.

Equinox module holding every planet's elements as arrays, so whole light
curves can be jitted and vmapped over time.

Compile with ``eqx.filter_jit(model.light_curve)(times)``. A bound method of
a module holding arrays is not hashable, so ``jax.jit`` cannot take it as a
static callable.
"""

from __future__ import annotations

import equinox as eqx
import jax
import jax.numpy as jnp


def _circle_overlap_area(d, r1, r2):
    """Overlap area of two circles, safe to differentiate everywhere."""
    contained = d <= jnp.abs(r1 - r2)
    partial = ~contained & (d < r1 + r2)
    # Keep the partial-overlap branch finite where it is not selected
    d_safe = jnp.where(partial, d, 0.5 * (r1 + r2 + jnp.abs(r1 - r2)))
    alpha = jnp.arccos(
        jnp.clip((d_safe**2 + r1**2 - r2**2) / (2 * d_safe * r1), -1.0, 1.0)
    )
    beta = jnp.arccos(
        jnp.clip((d_safe**2 + r2**2 - r1**2) / (2 * d_safe * r2), -1.0, 1.0)
    )
    kite = jnp.clip(
        (-d_safe + r1 + r2)
        * (d_safe + r1 - r2)
        * (d_safe - r1 + r2)
        * (d_safe + r1 + r2),
        0.0,
        None,
    )
    lens = r1**2 * alpha + r2**2 * beta - 0.5 * jnp.sqrt(kite)
    return jnp.where(
        contained,
        jnp.pi * jnp.minimum(r1, r2) ** 2,
        jnp.where(partial, lens, 0.0),
    )


class TransitSystem(eqx.Module):
    """JAX-friendly star plus planets on circular, zero-inclination orbits."""

    star_radius: float
    planet_radius: jnp.ndarray  # (n_planets,)
    orbit_radius: jnp.ndarray  # (n_planets,)
    period: jnp.ndarray  # (n_planets,)
    phase_offset: jnp.ndarray  # (n_planets,)
    limb_darkening_u: float

    def __init__(
        self,
        star_radius: float,
        planet_radius,
        orbit_radius,
        period,
        phase_offset,
        limb_darkening_u: float = 0.0,
    ):
        """
        Args:
            star_radius: Stellar radius [R_sun].
            planet_radius: Planet radii [R_sun], shape ``(n_planets,)``.
            orbit_radius: Orbit radii [R_sun], shape ``(n_planets,)``.
            period: Orbital periods [days], shape ``(n_planets,)``.
            phase_offset: Phase offsets [rad], shape ``(n_planets,)``.
            limb_darkening_u: Linear limb-darkening coefficient.
        """
        self.star_radius = star_radius
        self.planet_radius = jnp.atleast_1d(jnp.asarray(planet_radius))
        self.orbit_radius = jnp.atleast_1d(jnp.asarray(orbit_radius))
        self.period = jnp.atleast_1d(jnp.asarray(period))
        self.phase_offset = jnp.atleast_1d(jnp.asarray(phase_offset))
        self.limb_darkening_u = limb_darkening_u

    @classmethod
    def from_system(cls, system, limb_darkening_u: float = 0.0) -> "TransitSystem":
        """Build from an ingested :class:`~exotransit.base.System`."""
        return cls(
            star_radius=system.star.radius,
            planet_radius=[p.radius for p in system.planets],
            orbit_radius=[p.a for p in system.planets],
            period=[p.T for p in system.planets],
            phase_offset=[p.phase_offset for p in system.planets],
            limb_darkening_u=limb_darkening_u,
        )

    def position(self, t: float) -> jnp.ndarray:
        """Planet positions (x, y, z) [R_sun], shape ``(3, n_planets)``."""
        angle = 2 * jnp.pi * jnp.mod(t / self.period, 1.0) + self.phase_offset
        return jnp.stack(
            [
                self.orbit_radius * jnp.cos(angle),
                jnp.zeros_like(angle),
                self.orbit_radius * jnp.sin(angle),
            ]
        )

    def occulted_fraction(self, t: float) -> jnp.ndarray:
        """Fraction of starlight each planet blocks, shape ``(n_planets,)``."""
        x, _, z = self.position(t)
        d = jnp.abs(x)
        rs, rp = self.star_radius, self.planet_radius
        overlap = _circle_overlap_area(d, rs, rp)
        fraction = jnp.where(
            d <= jnp.abs(rs - rp),
            jnp.minimum(1.0, (rp / rs) ** 2),
            overlap / (jnp.pi * rs**2),
        )
        r_frac = jnp.clip(d / rs, 0.0, 1.0)
        mu = jnp.sqrt(1.0 - r_frac**2)
        u = self.limb_darkening_u
        fraction = fraction * (1.0 - u * (1.0 - mu)) / (1.0 - u / 3.0)
        return jnp.where((z > 0) & (overlap > 0), fraction, 0.0)

    def flux(self, t: float) -> jnp.ndarray:
        """Normalized stellar flux at time *t*."""
        return jnp.clip(1.0 - jnp.sum(self.occulted_fraction(t)), 0.0, 1.0)

    def light_curve(self, times: jnp.ndarray) -> jnp.ndarray:
        """Normalized flux at every time in *times*, shape ``(n_times,)``."""
        return jax.vmap(self.flux)(jnp.asarray(times))
