"""
Frame scheduler.

One cooperative loop owns every mutation of simulated time and of the scene.
A tick runs start to finish without awaiting anything; asset loads finish in
their own tasks and their results are folded in at step (4) of the next tick.

Tick order:
    1. advance the simulation clock by elapsed wall time x speed factor
    2. sample every planet's position
    3. compute the flux and append a light-curve sample
    4. integrate asset-load completions queued since the last tick
    5. push positions to the scene
    6. wait for the next frame (``run`` only)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from exotransit import transit
from exotransit.base.planet import position
from exotransit.config import SessionConfig
from exotransit.errors import ConfigurationError
from exotransit.scene.capability import DeviceProfile, profile_device
from exotransit.scene.graph import EntityKind, SceneGraphManager
from exotransit.scene.lightcurve import LightCurveBuffer
from exotransit.util.misc import finite_float

logger = logging.getLogger(__name__)

ORIGIN = (0.0, 0.0, 0.0)


class SchedulerState(Enum):
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class SimulationClock:
    """Virtual time that only moves forward."""

    time: float = 0.0
    speed_factor: float = 1.0

    def __post_init__(self):
        self.set_speed(self.speed_factor)

    def set_speed(self, speed_factor: float) -> None:
        speed_factor = finite_float(speed_factor, "speed_factor")
        if speed_factor < 0:
            raise ConfigurationError(
                f"speed_factor must be non-negative, got {speed_factor}"
            )
        self.speed_factor = speed_factor

    def advance(self, wall_dt: float) -> float:
        """Advance by ``wall_dt`` seconds of wall time, returning the step taken."""
        step = max(wall_dt, 0.0) * self.speed_factor
        self.time += step
        return step


@dataclass(frozen=True)
class FrameReport:
    sim_time: float
    flux: float
    updated: Tuple[int, ...]
    sampled: bool


class AnimationScheduler:
    def __init__(
        self,
        scene: SceneGraphManager,
        buffer: Optional[LightCurveBuffer] = None,
        config: Optional[SessionConfig] = None,
        profile: Optional[DeviceProfile] = None,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.scene = scene
        self.config = config if config is not None else SessionConfig()
        self.buffer = (
            buffer
            if buffer is not None
            else LightCurveBuffer(self.config.light_curve_capacity)
        )
        self.clock = SimulationClock(speed_factor=self.config.speed_factor)
        self.profile = profile
        self.timer = timer
        self.planet_states: List[transit.PlanetState] = []
        self._listeners: List[Callable[[FrameReport], None]] = []
        self._paused = False
        self._stopped = False
        self._last_wall: Optional[float] = None

    # ── Command surface ──────────────────────────────────────────────

    @property
    def state(self) -> SchedulerState:
        if self._paused or self.clock.speed_factor == 0:
            return SchedulerState.PAUSED
        return SchedulerState.RUNNING

    def pause(self) -> None:
        self._paused = True

    def resume(self) -> None:
        """Clear an explicit pause. A zero speed factor still keeps it paused."""
        self._paused = False

    def set_speed(self, speed_factor: float) -> None:
        self.clock.set_speed(speed_factor)

    def add_listener(self, listener: Callable[[FrameReport], None]) -> None:
        self._listeners.append(listener)

    def stop(self) -> None:
        self._stopped = True

    def device_changed(self, has_advanced_gpu, max_texture_size) -> DeviceProfile:
        """Re-tier after the host reports a device change and rebuild the scene."""
        self.profile = profile_device(
            lambda: (has_advanced_gpu, max_texture_size),
            self.config.texture_size_threshold,
        )
        self.scene.rebuild(self.profile.tier)
        return self.profile

    # ── Frame loop ───────────────────────────────────────────────────

    def tick(self, now: Optional[float] = None) -> FrameReport:
        now = self.timer() if now is None else now
        elapsed = 0.0 if self._last_wall is None else now - self._last_wall
        self._last_wall = now

        # (1)
        if self.state is SchedulerState.RUNNING:
            self.clock.advance(elapsed)
        sim_time = self.clock.time

        # (2)
        states = []
        positions = {}
        for entity in self.scene.entities():
            if entity.kind is EntityKind.PLANET:
                pos = position(entity.elements, sim_time)
                states.append(
                    transit.PlanetState(entity.id, pos, entity.elements.planet_radius)
                )
                positions[entity.id] = pos
            else:
                positions[entity.id] = ORIGIN

        # (3)
        star_radius = self.scene.star_radius
        if star_radius is None:
            flux = 1.0
        else:
            states = transit.with_contributions(
                star_radius, states, self.config.limb_darkening_u
            )
            flux = transit.total_flux(states)
        self.planet_states = states

        latest = self.buffer.latest
        sampled = latest is None or sim_time > latest.timestamp
        if sampled:
            self.buffer.append(sim_time, flux)

        # (4)
        self._integrate_completions()

        # (5)
        updated = self.scene.apply_positions(positions)

        report = FrameReport(sim_time, flux, tuple(updated), sampled)
        self._notify(report)
        return report

    def _integrate_completions(self) -> None:
        for completion in self.scene.loader.drain():
            if completion.ok:
                self.scene.on_asset_loaded(
                    completion.entity_id, completion.handle, completion.tier
                )
            else:
                self.scene.on_asset_failed(
                    completion.entity_id, completion.error, completion.tier
                )

    def _notify(self, report: FrameReport) -> None:
        for listener in self._listeners:
            try:
                listener(report)
            except Exception:
                logger.exception("Frame listener %r failed", listener)

    async def run(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until ``stop`` is called (or ``max_ticks`` ticks have run),
        yielding to the event loop between frames so asset loads progress.
        """
        self._stopped = False
        n_ticks = 0
        while not self._stopped:
            self.tick()
            n_ticks += 1
            if max_ticks is not None and n_ticks >= max_ticks:
                break
            # (6)
            await asyncio.sleep(self.config.frame_interval)
        logger.info("Frame loop stopped after %d ticks", n_ticks)
        return n_ticks
