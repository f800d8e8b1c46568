"""
Transit photometry for a single star.

The observer looks down the +z axis, so a planet's sky-projected position is
its (x, y) pair. Only planets with z > 0 sit between the star and the observer
and can block light. With the orbits fixed at zero inclination y is always
zero and every transit is a chord through the stellar centre.
"""

from dataclasses import dataclass, replace
from typing import Any, Iterable, List, Tuple

import numpy as np

import exotransit.util.misc as misc


@dataclass(frozen=True)
class PlanetState:
    """Per-tick state of one planet, recomputed every frame."""

    entity_id: Any
    position: Tuple[float, float, float]
    radius: float
    contribution: float = 0.0


def transit_depth(star_radius, planet_radius):
    """Fractional flux drop of a full, uniform-disk transit."""
    return min(1.0, (planet_radius / star_radius) ** 2)


def occulted_fraction(star_radius, planet_radius, x, z, limb_darkening_u=0.0):
    """
    Fraction of the star's light blocked by one planet
    Args:
        star_radius (float):
            Radius of the stellar disk
        planet_radius (float):
            Radius of the planet's disk
        x (float or numpy array):
            Sky-projected offset of the planet from the stellar centre
        z (float or numpy array):
            Position along the line of sight, positive towards the observer
        limb_darkening_u (float):
            Linear limb-darkening coefficient, 0 for a uniform disk
    Returns:
        fraction (float or numpy array)
    """
    d = np.abs(np.asarray(x, dtype=float))
    overlap = misc.circle_overlap_area(d, star_radius, planet_radius)
    fraction = np.where(
        d <= abs(star_radius - planet_radius),
        transit_depth(star_radius, planet_radius),
        overlap / (np.pi * star_radius**2),
    )
    if limb_darkening_u:
        fraction = fraction * misc.limb_darkening_weight(
            d / star_radius, limb_darkening_u
        )
    # Behind the star or clear of the disk
    fraction = np.where((np.asarray(z) > 0) & (overlap > 0), fraction, 0.0)
    if fraction.ndim == 0:
        return float(fraction)
    return fraction


def with_contributions(
    star_radius: float, states: Iterable[PlanetState], limb_darkening_u: float = 0.0
) -> List[PlanetState]:
    """Fill in each state's flux contribution."""
    return [
        replace(
            state,
            contribution=occulted_fraction(
                star_radius,
                state.radius,
                state.position[0],
                state.position[2],
                limb_darkening_u,
            ),
        )
        for state in states
    ]


def transit_flux(
    star_radius: float, states: Iterable[PlanetState], limb_darkening_u: float = 0.0
) -> float:
    """
    Normalized flux of a star with the given planets in front of it.

    Contributions are summed without removing area where two planets overlap
    each other, then the total is clipped to [0, 1].
    """
    return total_flux(with_contributions(star_radius, states, limb_darkening_u))


def total_flux(states: Iterable[PlanetState]) -> float:
    """Flux left after subtracting contributions that are already filled in."""
    total = sum(state.contribution for state in states)
    return float(np.clip(1.0 - total, 0.0, 1.0))
