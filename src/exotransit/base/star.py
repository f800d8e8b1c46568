from collections.abc import Mapping

import astropy.units as u

import exotransit.util.misc as misc
from exotransit.errors import ConfigurationError


class Star:
    """
    The star of a system, a disk of fixed radius at the origin
    """

    def __init__(self, radius, name=None):
        self.radius = misc.to_scene_value(radius, u.R_sun, name="star_radius")
        if self.radius <= 0:
            raise ConfigurationError(
                f"star_radius must be positive, got {self.radius}"
            )
        self.name = name

    def __repr__(self):
        return f"{type(self).__name__} object\n{self.name}\tradius:{self.radius}"

    @classmethod
    def from_record(cls, record):
        """
        Build the star from a system record with a ``star_radius`` entry
        """
        if not isinstance(record, Mapping):
            raise ConfigurationError(
                f"system record must be a mapping, got {type(record).__name__}"
            )
        return cls(record.get("star_radius"), name=record.get("name"))
