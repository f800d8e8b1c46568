import logging

import numpy as np
import pandas as pd

from exotransit import transit
from exotransit.base.planet import Planet
from exotransit.base.star import Star
from exotransit.errors import ConfigurationError

logger = logging.getLogger(__name__)


class System:
    """
    Class for a single system. Must have a star and a list of planets.
    """

    def __init__(self, star=None, planets=None, rejected=None) -> None:
        self.star = star
        self.planets = planets if planets is not None else []
        # (record index, ConfigurationError) for planets that failed ingestion
        self.rejected = rejected if rejected is not None else []
        if self.planets:
            self.planet_cleanup()

    def __repr__(self):
        return (
            f"{self.star.name}\tradius:{self.star.radius}\n\n"
            f"Planets:\n{self.get_p_df()}"
        )

    @classmethod
    def from_record(cls, record):
        """
        Ingest one target system record.

        A bad star rejects the whole record. Bad planets are rejected one at a
        time and kept in ``rejected`` so the caller can report them.
        Args:
            record (dict):
                Keys name, star_radius and planets (a list of planet dicts)
        Returns:
            System
        """
        star = Star.from_record(record)
        planet_dicts = record.get("planets") or []
        if not isinstance(planet_dicts, (list, tuple)):
            raise ConfigurationError(
                f"planets must be a list, got {type(planet_dicts).__name__}"
            )
        planets = []
        rejected = []
        for i, planet_dict in enumerate(planet_dicts):
            try:
                planets.append(Planet(planet_dict, star, index=i))
            except ConfigurationError as err:
                logger.warning(
                    "Rejected planet %d of system %s: %s", i, star.name, err
                )
                rejected.append((i, err))
        return cls(star=star, planets=planets, rejected=rejected)

    def planet_cleanup(self):
        # Sort the planets in the system by orbit radius
        a_vals = [planet.a for planet in self.planets]
        order = np.argsort(a_vals, kind="stable")
        self.planets = [self.planets[i] for i in order]
        self.pInds = np.array([planet.index for planet in self.planets])

    def getpattr(self, attr):
        # Return list of all planet's attribute value, e.g. all orbit radii
        return [getattr(planet, attr) for planet in self.planets]

    def get_p_df(self):
        patts = ["index", "radius", "a", "T", "phase_offset"]
        p_df = pd.DataFrame()
        for att in patts:
            p_df[att] = self.getpattr(att)
        return p_df

    @property
    def elements(self):
        return [planet.elements for planet in self.planets]

    def planet_states(self, t):
        return [
            transit.PlanetState(planet.index, planet.position(t), planet.radius)
            for planet in self.planets
        ]

    def flux(self, t, limb_darkening_u=0.0):
        """
        Normalized flux of the star at a single time
        """
        return transit.transit_flux(
            self.star.radius, self.planet_states(t), limb_darkening_u
        )

    def light_curve(self, times, limb_darkening_u=0.0):
        """
        Propagates the system at all times given and returns the light curve

        Args:
            times (numpy array):
                Simulation times [days]
            limb_darkening_u (float):
                Linear limb-darkening coefficient
        Returns:
            df (pandas DataFrame):
                One column per planet with its occulted fraction, plus the
                total ``flux`` and the time ``t``
        """
        times = np.atleast_1d(np.asarray(times, dtype=float))
        blocked = {}
        for planet in self.planets:
            r = planet.calc_vectors(times)
            blocked[planet.index] = transit.occulted_fraction(
                self.star.radius, planet.radius, r[0], r[2], limb_darkening_u
            )
        df = pd.DataFrame(blocked)
        total = df.sum(axis=1).to_numpy() if blocked else np.zeros(len(times))
        df["flux"] = np.clip(1.0 - total, 0.0, 1.0)
        df["t"] = times
        return df
