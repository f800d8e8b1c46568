__all__ = ["OrbitalElements", "Planet", "Star", "System", "Universe", "position"]

from .planet import OrbitalElements, Planet, position
from .star import Star
from .system import System
from .universe import Universe
