import logging

from exotransit.config import SessionConfig
from exotransit.scene.capability import profile_device
from exotransit.scene.graph import SceneGraphManager
from exotransit.scene.loader import AssetLoader
from exotransit.scene.scheduler import AnimationScheduler

logger = logging.getLogger(__name__)


def start_session(system, fetch, probe, config=None):
    """
    Profile the device, build the scene for ``system`` and return a scheduler
    ready to ``run``.

    Must be called from inside a running asyncio loop, since registering the
    entities starts their asset loads.
    Args:
        system (System):
            An ingested system
        fetch (coroutine function):
            fetch(kind, tier, index) -> asset handle
        probe (callable):
            Returns (has_advanced_gpu, max_texture_size)
        config (SessionConfig):
            Session settings, module defaults when None
    Returns:
        AnimationScheduler
    """
    config = config if config is not None else SessionConfig()
    profile = profile_device(probe, config.texture_size_threshold)
    scene = SceneGraphManager(AssetLoader(fetch), profile.tier)
    ids = scene.register_system(system)
    logger.info(
        "Session started for %s: %d planets at %s tier",
        system.star.name,
        len(ids["planet"]),
        profile.tier.value,
    )
    return AnimationScheduler(scene, config=config, profile=profile)
