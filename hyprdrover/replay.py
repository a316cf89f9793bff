"""hyprdrover.replay
~~~~~~~~~~~~~~~~~~~~

Walk a split tree and restore its windows so that the layout engine
recreates the saved arrangement.

For every node the first half is restored, its anchor window focused and
the next split preselected (right for X, down for Y) before the second half
is restored, so new windows land beside the anchor on the right side.

A node returns the anchor of its *first* half only; the second half's
address is not propagated, so deeper levels keep anchoring on the leftmost
lineage.

When a leaf fails, its index and error are kept in ``failed`` so the caller
reports it instead of trying that window again.
"""

from __future__ import annotations

import logging
from typing import Sequence

from . import commands
from .errors import HyprdroverError, ReplayError
from .launcher import RestoreContext, ensure_restored
from .models import WindowRecord
from .split_tree import Leaf, SplitTree

_LOG = logging.getLogger(__name__)


class TreeReplayer:
    """Replays one workspace's split tree over its saved tiled windows."""

    def __init__(self, ctx: RestoreContext, windows: Sequence[WindowRecord]) -> None:
        self._ctx = ctx
        self._windows = list(windows)
        self.resolved: dict[int, str] = {}  # window index → live address
        self.failed: dict[int, HyprdroverError] = {}  # leaf that aborted the replay
        self.tolerated: list[commands.BestEffortFailure] = []

    async def replay(self, tree: SplitTree) -> str:
        """Restore every leaf of *tree*; return the anchor address."""
        try:
            return await self._replay(tree)
        except HyprdroverError as exc:
            raise ReplayError(f"Ordered restore aborted: {exc}") from exc

    async def _replay(self, tree: SplitTree) -> str:
        if isinstance(tree, Leaf):
            try:
                live = await ensure_restored(self._ctx, self._windows[tree.index])
            except HyprdroverError as exc:
                self.failed[tree.index] = exc
                raise
            self.resolved[tree.index] = live.address
            return live.address

        pivot = await self._replay(tree.first)

        adapter = self._ctx.adapter
        await commands.run_command(adapter, commands.focus_window(pivot))
        failure = await commands.run_best_effort(adapter, commands.preselect(tree.axis))
        if failure is not None:
            # Layouts without preselect (e.g. master) still tile, just unordered.
            self.tolerated.append(failure)

        await self._replay(tree.second)
        return pivot
