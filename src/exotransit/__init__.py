"""Real-time exoplanet transit simulation and light-curve generation."""

from exotransit.base import OrbitalElements, Planet, Star, System, Universe, position
from exotransit.errors import (
    AssetLoadError,
    CapabilityDetectionFailure,
    ConfigurationError,
    ExotransitError,
)
from exotransit.transit import PlanetState, transit_flux

__all__ = [
    "AssetLoadError",
    "CapabilityDetectionFailure",
    "ConfigurationError",
    "ExotransitError",
    "OrbitalElements",
    "Planet",
    "PlanetState",
    "Star",
    "System",
    "Universe",
    "position",
    "transit_flux",
]
