"""
Device capability profiling.

The tier is decided once per session from two host signals and then passed
around as an immutable value. A device change produces a new profile and a
scene rebuild, never an in-place edit.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from exotransit.config import TEXTURE_SIZE_THRESHOLD
from exotransit.errors import CapabilityDetectionFailure

logger = logging.getLogger(__name__)


class AssetTier(str, Enum):
    HIGH = "high"
    LOW = "low"


@dataclass(frozen=True)
class DeviceProfile:
    tier: AssetTier
    has_advanced_gpu: Optional[bool] = None
    max_texture_size: Optional[int] = None


def detect_tier(
    has_advanced_gpu: bool,
    max_texture_size: int,
    threshold: int = TEXTURE_SIZE_THRESHOLD,
) -> AssetTier:
    """
    High tier iff the device has an advanced GPU and its maximum texture size
    exceeds the threshold.

    Raises:
        CapabilityDetectionFailure: if either signal is missing
    """
    if has_advanced_gpu is None or max_texture_size is None:
        raise CapabilityDetectionFailure("capability probe signals unavailable")
    if bool(has_advanced_gpu) and int(max_texture_size) > threshold:
        return AssetTier.HIGH
    return AssetTier.LOW


def profile_device(
    probe: Callable[[], Tuple[bool, int]],
    threshold: int = TEXTURE_SIZE_THRESHOLD,
) -> DeviceProfile:
    """
    Run the host probe once and turn its signals into a profile. Any probe
    failure falls back to the low tier.
    """
    try:
        has_advanced_gpu, max_texture_size = probe()
        tier = detect_tier(has_advanced_gpu, max_texture_size, threshold)
    except (CapabilityDetectionFailure, OSError, TypeError, ValueError) as err:
        logger.warning("Capability detection failed (%s), using low tier", err)
        return DeviceProfile(tier=AssetTier.LOW)

    logger.info(
        "Device profiled: gpu=%s max_texture=%s -> %s tier",
        has_advanced_gpu,
        max_texture_size,
        tier.value,
    )
    return DeviceProfile(
        tier=tier,
        has_advanced_gpu=bool(has_advanced_gpu),
        max_texture_size=int(max_texture_size),
    )
