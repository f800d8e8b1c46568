__all__ = [
    "finite_float",
    "to_scene_value",
    "orbital_phase",
    "circle_overlap_area",
    "limb_darkening_weight",
]

from .misc import (
    finite_float,
    to_scene_value,
    orbital_phase,
    circle_overlap_area,
    limb_darkening_weight,
)
