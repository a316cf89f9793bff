"""hyprdrover.directory
~~~~~~~~~~~~~~~~~~~~~~~

Pool of live windows that a restore may still hand out.

A window leaves the pool for good once it is claimed for a saved record;
re-querying the compositor refreshes the pool with whatever else is live.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .hyprctl import CompositorAdapter
from .matcher import affinity, matches
from .models import WindowRecord

_LOG = logging.getLogger(__name__)


class WindowDirectory:
    """Queryable, shrinking view of the compositor's clients."""

    def __init__(
        self, adapter: CompositorAdapter, clients: Iterable[WindowRecord] = ()
    ) -> None:
        self._adapter = adapter
        self._claimed: set[str] = set()
        self._available: list[WindowRecord] = list(clients)

    @property
    def available(self) -> list[WindowRecord]:
        """Shallow copy of the unclaimed windows."""
        return list(self._available)

    @property
    def claimed(self) -> frozenset[str]:
        return frozenset(self._claimed)

    async def refresh(self) -> list[WindowRecord]:
        """Re-query the compositor; claimed addresses stay excluded."""
        live = await self._adapter.query_clients()
        self._available = [c for c in live if c.address not in self._claimed]
        return self.available

    def find_match(
        self, saved: WindowRecord, exclude: Iterable[str] = ()
    ) -> WindowRecord | None:
        """Return the best unclaimed window matching *saved*, or None."""
        skip = set(exclude)
        candidates = [
            c for c in self._available if c.address not in skip and matches(c, saved)
        ]
        if not candidates:
            return None
        # max() keeps the first of equally good candidates
        return max(candidates, key=lambda c: affinity(c, saved))

    def claim(self, window: WindowRecord) -> None:
        """Remove *window* from the pool."""
        self._claimed.add(window.address)
        self._available = [c for c in self._available if c.address != window.address]
        _LOG.debug("Claimed %s (%s)", window.address, window.label)
