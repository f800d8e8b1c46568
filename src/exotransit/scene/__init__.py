__all__ = [
    "AnimationScheduler",
    "AssetCompletion",
    "AssetLoader",
    "AssetTier",
    "DeviceProfile",
    "EntityKind",
    "FrameReport",
    "LightCurveBuffer",
    "LightCurveSample",
    "Placeholder",
    "SceneEntity",
    "SceneGraphManager",
    "SchedulerState",
    "SimulationClock",
    "detect_tier",
    "profile_device",
    "start_session",
]

from .capability import AssetTier, DeviceProfile, detect_tier, profile_device
from .graph import EntityKind, Placeholder, SceneEntity, SceneGraphManager
from .lightcurve import LightCurveBuffer, LightCurveSample
from .loader import AssetCompletion, AssetLoader
from .scheduler import AnimationScheduler, FrameReport, SchedulerState, SimulationClock
from .session import start_session
