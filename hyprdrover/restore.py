"""hyprdrover.restore
~~~~~~~~~~~~~~~~~~~~~

Top-level restore driver.

Saved windows are grouped by workspace and visited in ascending workspace
order.  Within a workspace the tiled windows are replayed through an
inferred split tree (falling back to unordered restore if the replay
breaks) and floating or pinned windows are placed directly.  A failure for
one window is recorded and the rest of the session carries on; only failing
to read the live state at the start aborts the whole restore.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Sequence

from . import commands
from .config import Config
from .directory import WindowDirectory
from .errors import HyprdroverError
from .hyprctl import CompositorAdapter
from .launcher import RestoreContext, ensure_restored
from .models import SessionSnapshot, WindowRecord
from .replay import TreeReplayer
from .split_tree import Rect, build_split_tree

_LOG = logging.getLogger(__name__)


@dataclass(slots=True)
class RestoreReport:
    """What a restore run did."""

    restored: list[str] = field(default_factory=list)
    launched: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)
    fallback_workspaces: list[int] = field(default_factory=list)
    tolerated: list[commands.BestEffortFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def group_by_workspace(
    clients: Sequence[WindowRecord],
) -> dict[int, list[WindowRecord]]:
    """Map workspace id → saved windows, keys in ascending order."""
    groups: dict[int, list[WindowRecord]] = defaultdict(list)
    for client in clients:
        groups[client.workspace_id].append(client)
    return {ws: groups[ws] for ws in sorted(groups)}


def is_tiled(window: WindowRecord) -> bool:
    return not window.floating and not window.pinned


class _Restorer:
    """One restore run; holds the context and the report being built."""

    def __init__(self, ctx: RestoreContext, report: RestoreReport) -> None:
        self._ctx = ctx
        self._report = report

    async def best_effort(self, command: str) -> None:
        failure = await commands.run_best_effort(self._ctx.adapter, command)
        if failure is not None:
            self._report.tolerated.append(failure)

    async def restore_one(self, saved: WindowRecord) -> None:
        try:
            await ensure_restored(self._ctx, saved)
        except HyprdroverError as exc:
            self.record_failure(saved, exc)

    def record_failure(self, saved: WindowRecord, exc: HyprdroverError) -> None:
        _LOG.error("Failed to restore %s: %s", saved.label, exc)
        self._report.failures.append((saved.label, str(exc)))

    async def restore_tiled(self, workspace_id: int, tiled: list[WindowRecord]) -> None:
        if len(tiled) == 1:
            await self.restore_one(tiled[0])
            return

        tree = build_split_tree([Rect.from_window(w) for w in tiled])
        replayer = TreeReplayer(self._ctx, tiled)
        try:
            await replayer.replay(tree)
        except HyprdroverError as exc:
            _LOG.warning(
                "Workspace %s: %s; restoring remaining tiled windows unordered",
                workspace_id,
                exc,
            )
            self._report.fallback_workspaces.append(workspace_id)
            for index, error in replayer.failed.items():
                self.record_failure(tiled[index], error)
            # Leaves the replay never reached are restored unordered.
            for index, saved in enumerate(tiled):
                if index not in replayer.resolved and index not in replayer.failed:
                    await self.restore_one(saved)
        finally:
            self._report.tolerated.extend(replayer.tolerated)

    async def restore_workspace(
        self, workspace_id: int, windows: list[WindowRecord]
    ) -> None:
        _LOG.info("Restoring workspace %s (%d windows)", workspace_id, len(windows))
        await self.best_effort(commands.switch_workspace(workspace_id))

        tiled = [w for w in windows if is_tiled(w)]
        loose = [w for w in windows if not is_tiled(w)]

        if tiled:
            await self.restore_tiled(workspace_id, tiled)
        for saved in loose:
            await self.restore_one(saved)


async def restore_session(
    snapshot: SessionSnapshot,
    adapter: CompositorAdapter,
    config: Config | None = None,
) -> RestoreReport:
    """
    Restore *snapshot* against the compositor behind *adapter*.

    Raises AdapterError / DeserializationError only when the current window
    list cannot be read; every later problem ends up in the report.
    """
    config = config or Config()

    current = await adapter.query_clients()
    try:
        active = await adapter.query_active_workspace()
        original_workspace = active.id
    except HyprdroverError as exc:
        _LOG.debug(
            "Active workspace unknown (%s); will refocus %s",
            exc,
            config.fallback_workspace,
        )
        original_workspace = config.fallback_workspace

    ctx = RestoreContext(
        adapter=adapter,
        directory=WindowDirectory(adapter, current),
        baseline=frozenset(c.address for c in current),
        config=config,
    )
    report = RestoreReport()
    restorer = _Restorer(ctx, report)

    for workspace_id, windows in group_by_workspace(snapshot.clients).items():
        await restorer.restore_workspace(workspace_id, windows)

    await restorer.best_effort(commands.switch_workspace(original_workspace))

    report.restored = list(ctx.restored_order)
    report.launched = ctx.launched
    _LOG.info(
        "Restore finished: %d restored, %d launched, %d failed",
        len(report.restored),
        report.launched,
        len(report.failures),
    )
    return report
