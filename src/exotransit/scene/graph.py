"""
Scene graph ownership and asset lifecycle.

The manager is the only owner of scene entities. Everything else refers to
them by id. Asset loads run elsewhere and their results come back through
``on_asset_loaded`` / ``on_asset_failed``, which drop anything stale: a retired
entity, an entity that already has its asset, or a load for another tier.
"""

from __future__ import annotations

import itertools
import logging
from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from exotransit.base.planet import OrbitalElements
from exotransit.base.star import Star
from exotransit.errors import AssetLoadError, ConfigurationError
from exotransit.scene.capability import AssetTier

logger = logging.getLogger(__name__)


class EntityKind(str, Enum):
    STAR = "star"
    PLANET = "planet"
    ORBIT_PATH = "orbitPath"


@dataclass(frozen=True)
class Placeholder:
    """Low-cost stand-in bound to every entity until its real asset arrives."""

    kind: EntityKind


@dataclass
class SceneEntity:
    id: int
    kind: EntityKind
    elements: Any
    index: int
    tier: AssetTier
    asset: Any
    pending: bool = True
    failed: bool = False
    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)


def _validate(kind: EntityKind, elements) -> None:
    if kind is EntityKind.STAR:
        if not isinstance(elements, Star):
            raise ConfigurationError(f"star entities need a Star, got {elements!r}")
    elif not isinstance(elements, OrbitalElements):
        raise ConfigurationError(
            f"{kind.value} entities need OrbitalElements, got {elements!r}"
        )


class SceneGraphManager:
    def __init__(self, loader, tier: AssetTier) -> None:
        self.loader = loader
        self.tier = AssetTier(tier)
        self._entities: Dict[int, SceneEntity] = {}
        self._outstanding = set()
        self._retired = set()
        self._ids = itertools.count(1)
        self._kind_counts = Counter()

    def __len__(self):
        return len(self._entities)

    def __contains__(self, entity_id):
        return entity_id in self._entities

    def get(self, entity_id) -> Optional[SceneEntity]:
        return self._entities.get(entity_id)

    def entities(self) -> Tuple[SceneEntity, ...]:
        return tuple(self._entities.values())

    @property
    def outstanding_loads(self) -> frozenset:
        """(entity id, tier) pairs with a load in flight."""
        return frozenset(self._outstanding)

    @property
    def star_radius(self) -> Optional[float]:
        for entity in self._entities.values():
            if entity.kind is EntityKind.STAR:
                return entity.elements.radius
        for entity in self._entities.values():
            if entity.kind is EntityKind.PLANET:
                return entity.elements.star_radius
        return None

    def register_entity(self, kind, elements, entity_id=None) -> int:
        """
        Create an entity in the pending state and request its asset for the
        current tier. Returns immediately.

        Registering an id that is already live does not create a second
        entity or a second load.
        """
        kind = EntityKind(kind)
        _validate(kind, elements)

        if entity_id is not None:
            if entity_id in self._entities:
                self.request_asset(entity_id)
                return entity_id
            if entity_id in self._retired:
                raise ConfigurationError(f"entity id {entity_id} was retired")
        else:
            entity_id = next(self._ids)
            while entity_id in self._entities or entity_id in self._retired:
                entity_id = next(self._ids)

        index = self._kind_counts[kind]
        self._kind_counts[kind] += 1
        self._entities[entity_id] = SceneEntity(
            id=entity_id,
            kind=kind,
            elements=elements,
            index=index,
            tier=self.tier,
            asset=Placeholder(kind),
        )
        self.request_asset(entity_id)
        return entity_id

    def register_system(self, system) -> Dict[str, List[int]]:
        """Register a star, its planets and their orbit paths."""
        ids = {
            "star": [self.register_entity(EntityKind.STAR, system.star)],
            "planet": [],
            "orbitPath": [],
        }
        for planet in system.planets:
            ids["planet"].append(
                self.register_entity(EntityKind.PLANET, planet.elements)
            )
            ids["orbitPath"].append(
                self.register_entity(EntityKind.ORBIT_PATH, planet.elements)
            )
        return ids

    def request_asset(self, entity_id) -> bool:
        """
        Issue a load unless one is already outstanding for (id, tier).

        A request the loader refuses is handled like a failed load: the entity
        keeps its placeholder and is marked failed.
        """
        entity = self._entities.get(entity_id)
        if entity is None or not entity.pending:
            return False
        key = (entity_id, entity.tier)
        if key in self._outstanding:
            return False
        try:
            self.loader.submit(entity_id, entity.kind.value, entity.tier, entity.index)
        except Exception as err:
            error = AssetLoadError(
                f"could not request {entity.kind.value} asset {entity.index}: {err}",
                kind=entity.kind.value,
                tier=entity.tier,
                index=entity.index,
            )
            error.__cause__ = err
            self.on_asset_failed(entity_id, error, entity.tier)
            return False
        self._outstanding.add(key)
        return True

    def _live_pending(self, entity_id, tier) -> Optional[SceneEntity]:
        tier = self.tier if tier is None else AssetTier(tier)
        self._outstanding.discard((entity_id, tier))
        entity = self._entities.get(entity_id)
        if entity is None or not entity.pending or entity.tier is not tier:
            logger.debug("Discarding stale asset result for entity %s", entity_id)
            return None
        return entity

    def on_asset_loaded(self, entity_id, asset_handle, tier=None) -> bool:
        entity = self._live_pending(entity_id, tier)
        if entity is None:
            return False
        entity.asset = asset_handle
        entity.pending = False
        return True

    def on_asset_failed(self, entity_id, error, tier=None) -> bool:
        entity = self._live_pending(entity_id, tier)
        if entity is None:
            return False
        logger.warning(
            "Asset load failed for %s entity %s, keeping placeholder: %s",
            entity.kind.value,
            entity_id,
            error,
        )
        # The placeholder stays bound and the entity is drawn with it
        entity.pending = False
        entity.failed = True
        return True

    def apply_positions(self, positions: Dict[int, Iterable[float]]) -> List[int]:
        """Move every bound entity in ``positions``; pending ones are skipped."""
        updated = []
        for entity_id, pos in positions.items():
            entity = self._entities.get(entity_id)
            if entity is None or entity.pending:
                continue
            entity.position = tuple(float(v) for v in pos)
            updated.append(entity_id)
        return updated

    def retire_entity(self, entity_id) -> bool:
        entity = self._entities.pop(entity_id, None)
        if entity is None:
            return False
        self._retired.add(entity_id)
        self._outstanding = {key for key in self._outstanding if key[0] != entity_id}
        return True

    def teardown(self) -> List[Tuple[EntityKind, Any]]:
        """Retire every entity, returning what is needed to rebuild them."""
        specs = [(entity.kind, entity.elements) for entity in self._entities.values()]
        for entity_id in list(self._entities):
            self.retire_entity(entity_id)
        self._kind_counts.clear()
        return specs

    def rebuild(self, tier) -> List[int]:
        """Tear the scene down and register it again under a new tier."""
        specs = self.teardown()
        self.tier = AssetTier(tier)
        logger.info("Rebuilding %d entities at %s tier", len(specs), self.tier.value)
        return [self.register_entity(kind, elements) for kind, elements in specs]
