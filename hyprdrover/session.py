"""hyprdrover.session
~~~~~~~~~~~~~~~~~~~~~

High-level save / list / restore operations tying the compositor adapter,
the snapshot store and the restore engine together.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .config import Config
from .errors import SnapshotNotFoundError
from .hyprctl import HyprctlAdapter
from .models import SessionSnapshot
from .restore import RestoreReport, restore_session
from .state import SnapshotStore

_LOG = logging.getLogger(__name__)


class SessionManager:
    """Entry point used by the CLI for every session operation."""

    def __init__(
        self, config: Config | None = None, adapter: HyprctlAdapter | None = None
    ) -> None:
        self.config = config or Config()
        self.adapter = adapter or HyprctlAdapter(self.config.hyprctl)
        self.store = SnapshotStore(self.config.session_dir)

    async def snapshot(self, name: Optional[str] = None) -> Path:
        """Capture the live session, drop ignored classes, and save it."""
        state = await self.adapter.capture_state()

        ignored = set(self.config.ignored_classes)
        kept = [c for c in state.clients if c.window_class not in ignored]
        filtered = len(state.clients) - len(kept)
        if filtered:
            _LOG.info("Filtered out %d ignored windows.", filtered)

        return self.store.save(state.model_copy(update={"clients": kept}), name)

    def list_sessions(self) -> list[Path]:
        return self.store.list_sessions()

    def resolve(self, target: Optional[str] = None) -> Path:
        """Path for *target*, or the latest snapshot when *target* is None."""
        if target:
            return self.store.resolve(target)
        latest = self.store.latest()
        if latest is None:
            raise SnapshotNotFoundError("No saved sessions found.")
        return latest

    def load(self, target: Optional[str] = None) -> SessionSnapshot:
        return self.store.load(self.resolve(target))

    async def restore(self, target: Optional[str] = None) -> RestoreReport:
        """Load *target* (default: latest) and restore it."""
        return await self.restore_file(self.resolve(target))

    async def restore_file(self, path: Path) -> RestoreReport:
        """Restore the snapshot at an already resolved *path*."""
        _LOG.info("Restoring session from %s", path)
        snapshot = self.store.load(path)
        return await restore_session(snapshot, self.adapter, self.config)
