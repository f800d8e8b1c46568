"""
Asynchronous asset loading.

Each request runs as its own asyncio task and only ever appends a completion
record. Nothing here touches the scene; the scheduler drains the completions
at a tick boundary.
"""

import asyncio
import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Iterator, Optional

from exotransit.errors import AssetLoadError
from exotransit.scene.capability import AssetTier

logger = logging.getLogger(__name__)

# fetch(kind, tier, index) -> asset handle
FetchFn = Callable[[str, AssetTier, int], Awaitable[Any]]


@dataclass(frozen=True)
class AssetCompletion:
    entity_id: Any
    tier: AssetTier
    handle: Any = None
    error: Optional[AssetLoadError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class AssetLoader:
    """Issues fetches to the asset-delivery collaborator."""

    def __init__(self, fetch: FetchFn) -> None:
        self.fetch = fetch
        self.completions = deque()
        self._tasks = set()

    def __len__(self):
        return len(self._tasks)

    def submit(self, entity_id, kind: str, tier: AssetTier, index: int) -> None:
        """Start a fetch. Must be called with an asyncio loop running."""
        logger.debug(
            "Requesting %s asset %d (%s) for %s", kind, index, tier.value, entity_id
        )
        task = asyncio.get_running_loop().create_task(
            self._load(entity_id, kind, tier, index)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _load(self, entity_id, kind, tier, index):
        try:
            handle = await self.fetch(kind, tier, index)
        except Exception as err:
            error = AssetLoadError(
                f"{kind} asset {index} ({tier.value}) failed: {err}",
                kind=kind,
                tier=tier,
                index=index,
            )
            error.__cause__ = err
            self.completions.append(AssetCompletion(entity_id, tier, error=error))
            return
        self.completions.append(AssetCompletion(entity_id, tier, handle=handle))

    def drain(self) -> Iterator[AssetCompletion]:
        """Pop every completion queued so far, oldest first."""
        while self.completions:
            yield self.completions.popleft()

    async def wait_idle(self) -> None:
        """Wait for every in-flight fetch to finish."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))
