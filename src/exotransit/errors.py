"""
Error taxonomy for exotransit.

Simulation-layer errors (bad orbital elements) propagate to whoever fed the
record in. Scene-layer errors (asset failures, capability probing) are logged
where they happen and never interrupt the frame loop.
"""


class ExotransitError(Exception):
    """Base class for every error raised by exotransit."""


class ConfigurationError(ExotransitError, ValueError):
    """Invalid orbital elements or configuration values."""


class AssetLoadError(ExotransitError):
    """An asset fetch failed; the entity keeps its placeholder."""

    def __init__(self, message, kind=None, tier=None, index=None):
        super().__init__(message)
        self.kind = kind
        self.tier = tier
        self.index = index


class CapabilityDetectionFailure(ExotransitError):
    """The host could not supply the capability probe signals."""
