"""Configuration constants for the transit simulation."""

from dataclasses import dataclass, fields

from exotransit.errors import ConfigurationError
from exotransit.util.misc import finite_float

# Device profiling
TEXTURE_SIZE_THRESHOLD = 8192  # max texture size must exceed this for the high tier

# Frame loop
FRAME_INTERVAL = 1 / 60  # Seconds between ticks of the asyncio frame loop
DEFAULT_SPEED_FACTOR = 1.0  # Simulated days per wall-clock second

# Light curve
LIGHT_CURVE_CAPACITY = 2048  # Samples retained before the oldest is evicted

# Photometry
LIMB_DARKENING_U = 0.0  # Linear limb-darkening coefficient, 0 is a uniform disk


@dataclass(frozen=True)
class SessionConfig:
    """Per-session settings, defaulting to the module constants."""

    texture_size_threshold: int = TEXTURE_SIZE_THRESHOLD
    frame_interval: float = FRAME_INTERVAL
    speed_factor: float = DEFAULT_SPEED_FACTOR
    light_curve_capacity: int = LIGHT_CURVE_CAPACITY
    limb_darkening_u: float = LIMB_DARKENING_U

    def __post_init__(self):
        for name in ("texture_size_threshold", "light_curve_capacity"):
            value = finite_float(getattr(self, name), name)
            if not value.is_integer():
                raise ConfigurationError(f"{name} must be a whole number, got {value}")
            object.__setattr__(self, name, int(value))
        for name in ("frame_interval", "speed_factor", "limb_darkening_u"):
            object.__setattr__(self, name, finite_float(getattr(self, name), name))

        if self.texture_size_threshold < 0:
            raise ConfigurationError("texture_size_threshold must be non-negative")
        if self.frame_interval <= 0:
            raise ConfigurationError("frame_interval must be positive")
        if self.speed_factor < 0:
            raise ConfigurationError("speed_factor must be non-negative")
        if self.light_curve_capacity < 1:
            raise ConfigurationError("light_curve_capacity must be at least 1")
        if not 0.0 <= self.limb_darkening_u <= 1.0:
            raise ConfigurationError("limb_darkening_u must lie in [0, 1]")

    @classmethod
    def from_dict(cls, settings):
        """
        Build a config from a mapping of field names to values.

        Args:
            settings (dict):
                Keys matching the dataclass fields
        Returns:
            SessionConfig
        """
        known = {f.name for f in fields(cls)}
        unknown = set(settings) - known
        if unknown:
            raise ConfigurationError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**settings)
