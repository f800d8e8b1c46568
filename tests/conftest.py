"""
Shared pytest fixtures for exotransit tests.

Provides:
- elements: the reference single-planet orbit (R*=1, Rp=0.1, a=2, P=10)
- system_record / system: an ingestion record with two planets
- loader: an in-memory stand-in for AssetLoader that records requests
"""

from collections import deque

import pytest

from exotransit.base import OrbitalElements, System
from exotransit.errors import AssetLoadError
from exotransit.scene.capability import AssetTier
from exotransit.scene.graph import SceneGraphManager
from exotransit.scene.loader import AssetCompletion


class RecordingLoader:
    """Records submitted fetches; completions are delivered by the test."""

    def __init__(self):
        self.requests = []
        self.completions = deque()

    def submit(self, entity_id, kind, tier, index):
        self.requests.append((entity_id, kind, tier, index))

    def drain(self):
        while self.completions:
            yield self.completions.popleft()

    def complete(self, entity_id, tier, handle):
        self.completions.append(AssetCompletion(entity_id, tier, handle=handle))

    def fail(self, entity_id, tier, message="network down"):
        self.completions.append(
            AssetCompletion(entity_id, tier, error=AssetLoadError(message))
        )

    def complete_all(self, handle_prefix="asset"):
        for entity_id, kind, tier, index in self.requests:
            self.complete(entity_id, tier, f"{handle_prefix}-{kind}-{index}")


@pytest.fixture
def elements():
    return OrbitalElements(
        star_radius=1.0,
        planet_radius=0.1,
        orbit_radius=2.0,
        period=10.0,
        phase_offset=0.0,
    )


@pytest.fixture
def system_record():
    return {
        "name": "Kepler-test",
        "star_radius": 1.0,
        "planets": [
            {"radius": 0.1, "orbit_radius": 2.0, "period": 10.0, "phase_offset": 0.0},
            {"radius": 0.05, "orbit_radius": 5.0, "period": 40.0, "phase_offset": 1.0},
        ],
    }


@pytest.fixture
def system(system_record):
    return System.from_record(system_record)


@pytest.fixture
def single_planet_system():
    return System.from_record(
        {
            "name": "single",
            "star_radius": 1.0,
            "planets": [
                {"radius": 0.1, "orbit_radius": 2.0, "period": 10.0, "phase_offset": 0.0}
            ],
        }
    )


@pytest.fixture
def loader():
    return RecordingLoader()


@pytest.fixture
def scene(loader):
    return SceneGraphManager(loader, AssetTier.HIGH)
