"""hyprdrover.launcher
~~~~~~~~~~~~~~~~~~~~~~

Resolve one saved window to a live one: reuse a running window when the
matcher finds one, otherwise start the application on its workspace and
wait for its window to show up.

Waiting is a single timed operation per missing window (``wait_for_window``)
bounded by ``asyncio.timeout``; the coroutine can be cancelled at any poll
tick, which is what makes launching several windows concurrently a local
change should that ever be wanted.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from dataclasses import dataclass, field

from . import commands
from .config import Config
from .directory import WindowDirectory
from .errors import LaunchError, LaunchTimeoutError
from .hyprctl import CompositorAdapter
from .matcher import matches, resolve_launch_command
from .models import WindowRecord
from .position import apply_position

_LOG = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Restore-run state                                                           #
# --------------------------------------------------------------------------- #


@dataclass(slots=True)
class RestoreContext:
    """
    State owned by one in-flight restore.

    ``baseline`` holds the addresses that were live before anything was
    launched; ``restored`` the addresses already handed to a saved window.
    """

    adapter: CompositorAdapter
    directory: WindowDirectory
    baseline: frozenset[str]
    config: Config = field(default_factory=Config)
    restored: set[str] = field(default_factory=set)
    restored_order: list[str] = field(default_factory=list)
    launched: int = 0

    def mark_restored(self, window: WindowRecord) -> None:
        self.restored.add(window.address)
        self.restored_order.append(window.address)


# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #


def _notify_launch(saved: WindowRecord) -> None:
    """Best-effort desktop notification; never raises."""
    try:
        subprocess.Popen(
            ["notify-send", "Restoring Session", f"Launching {saved.label}..."],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as exc:
        _LOG.debug("notify-send unavailable: %s", exc)


async def launch(ctx: RestoreContext, saved: WindowRecord) -> str:
    """Start the application for *saved* on its workspace; return the command."""
    command = resolve_launch_command(saved)
    if ctx.config.notify:
        _notify_launch(saved)

    _LOG.info("Launching %s on workspace %s: %s", saved.label, saved.workspace_id, command)
    result = await ctx.adapter.dispatch(
        commands.exec_in_workspace(saved.workspace_id, command)
    )
    if not result.ok:
        raise LaunchError(f"Failed to launch {command}: {result.error}")
    ctx.launched += 1
    return command


async def wait_for_window(ctx: RestoreContext, saved: WindowRecord) -> WindowRecord:
    """
    Poll the compositor until a freshly spawned window matches *saved*.

    A candidate must be absent from the baseline (it did not exist before the
    restore started) and not yet restored.  Raises LaunchTimeoutError once
    ``config.launch_timeout`` elapses.
    """
    timeout = ctx.config.launch_timeout
    interval = ctx.config.poll_interval
    try:
        async with asyncio.timeout(timeout):
            while True:
                await ctx.directory.refresh()
                for candidate in ctx.directory.available:
                    if (
                        candidate.address not in ctx.baseline
                        and candidate.address not in ctx.restored
                        and matches(candidate, saved)
                    ):
                        return candidate
                await asyncio.sleep(interval)
    except TimeoutError as exc:
        raise LaunchTimeoutError(saved.label, timeout) from exc


# --------------------------------------------------------------------------- #
# Public API                                                                  #
# --------------------------------------------------------------------------- #


async def ensure_restored(ctx: RestoreContext, saved: WindowRecord) -> WindowRecord:
    """
    Produce a live window for *saved* and put it in place.

    Reuses a matching window from the pool when possible; otherwise launches
    the application and waits for it.  Raises a HyprdroverError subclass when
    the window cannot be produced or positioned.
    """
    live = ctx.directory.find_match(saved, exclude=ctx.restored)
    if live is not None:
        _LOG.info("Restoring window: %s (%s)", live.label, live.title)
    else:
        _LOG.info("Window missing: %s", saved.label)
        await launch(ctx, saved)
        live = await wait_for_window(ctx, saved)
        _LOG.info("Launched window appeared: %s (%s)", live.label, live.address)

    ctx.directory.claim(live)
    await apply_position(ctx.adapter, live, saved)
    ctx.mark_restored(live)
    return live
