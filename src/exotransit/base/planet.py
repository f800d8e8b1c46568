from collections.abc import Mapping
from dataclasses import dataclass

import astropy.units as u
import numpy as np
import pandas as pd

import exotransit.util.misc as misc
from exotransit.errors import ConfigurationError

TWO_PI = 2 * np.pi


@dataclass(frozen=True)
class OrbitalElements:
    """
    Circular, zero-inclination orbit of a planet around its star, in scene
    units (solar radii and days). Invalid values never get past construction.
    """

    star_radius: float
    planet_radius: float
    orbit_radius: float
    period: float
    phase_offset: float = 0.0

    def __post_init__(self):
        for name in ("star_radius", "planet_radius", "orbit_radius", "period"):
            value = misc.finite_float(getattr(self, name), name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
            object.__setattr__(self, name, value)
        phase_offset = misc.finite_float(self.phase_offset, "phase_offset")
        object.__setattr__(self, "phase_offset", float(phase_offset % TWO_PI))

    @classmethod
    def from_planet_dict(cls, planet_dict, star_radius):
        """
        Build elements from an ingestion planet record
        Args:
            planet_dict (dict):
                Keys radius, orbit_radius, period and optionally phase_offset.
                Values are plain numbers in scene units or astropy Quantities
            star_radius (float):
                Host star radius in solar radii
        Returns:
            OrbitalElements
        """
        if not isinstance(planet_dict, Mapping):
            raise ConfigurationError(
                f"planet record must be a mapping, got {type(planet_dict).__name__}"
            )
        return cls(
            star_radius=misc.to_scene_value(star_radius, u.R_sun, "star_radius"),
            planet_radius=misc.to_scene_value(
                planet_dict.get("radius"), u.R_sun, "radius"
            ),
            orbit_radius=misc.to_scene_value(
                planet_dict.get("orbit_radius"), u.R_sun, "orbit_radius"
            ),
            period=misc.to_scene_value(planet_dict.get("period"), u.d, "period"),
            phase_offset=misc.to_scene_value(
                planet_dict.get("phase_offset", 0.0), u.rad, "phase_offset"
            ),
        )


def orbital_angle(elements, sim_time):
    """
    Angle of the planet along its orbit [rad] at the given simulation time(s)
    """
    return TWO_PI * misc.orbital_phase(sim_time, elements.period) + elements.phase_offset


def position(elements, sim_time):
    """
    Position of a planet at a single simulation time.

    The orbit lies in the x-z plane (inclination 0), so y is always zero. An
    inclined orbit would rotate this vector about the x axis before returning.
    Args:
        elements (OrbitalElements):
            The planet's orbit
        sim_time (float):
            Simulation time [days]
    Returns:
        (x, y, z) tuple of floats
    """
    angle = orbital_angle(elements, sim_time)
    return (
        elements.orbit_radius * float(np.cos(angle)),
        0.0,
        elements.orbit_radius * float(np.sin(angle)),
    )


def positions(elements, times):
    """
    Vectorized ``position`` over an array of times, 3 x n stacked
    """
    angle = orbital_angle(elements, np.atleast_1d(times))
    return np.vstack(
        (
            elements.orbit_radius * np.cos(angle),
            np.zeros_like(angle),
            elements.orbit_radius * np.sin(angle),
        )
    )


class Planet:
    """
    Class for a planet
    """

    def __init__(self, planet_dict, star, index=0) -> None:
        self.star = star
        self.index = index
        self.elements = OrbitalElements.from_planet_dict(planet_dict, star.radius)
        self.name = planet_dict.get("name", f"{star.name or 'planet'} {index}")

    def __repr__(self):
        """
        Make dataframe with planet attributes
        """
        p_df = pd.DataFrame(self.dump_params(), index=[0])
        return f"{type(self).__name__} object\n{p_df}"

    @property
    def radius(self):
        return self.elements.planet_radius

    @property
    def a(self):
        return self.elements.orbit_radius

    @property
    def T(self):
        return self.elements.period

    @property
    def phase_offset(self):
        return self.elements.phase_offset

    def dump_params(self):
        params = {
            "index": self.index,
            "radius": self.radius,
            "a": self.a,
            "T": self.T,
            "phase_offset": self.phase_offset,
        }
        return params

    def position(self, t):
        return position(self.elements, t)

    def calc_vectors(self, t):
        """
        Given times, calculate the planet's position vectors
        Args:
            t (float or numpy array):
                Simulation times [days]
        Returns:
            r (numpy array):
                3 x n stacked position vectors in solar radii
        """
        return positions(self.elements, t)

    def transit_times(self, t_start, t_end):
        """
        Times in [t_start, t_end) where the planet crosses the line of sight
        in front of the star (x = 0, z > 0)
        """
        # x = 0 with z > 0 happens at angle pi/2 (mod 2 pi)
        first_phase = ((np.pi / 2 - self.phase_offset) % TWO_PI) / TWO_PI
        n_start = np.ceil(t_start / self.T - first_phase)
        n_end = np.ceil(t_end / self.T - first_phase)
        return (np.arange(n_start, n_end) + first_phase) * self.T
