"""hyprdrover.matcher
~~~~~~~~~~~~~~~~~~~~~

Decide whether a live window stands for a saved one, and work out how to
start a saved window's application when nothing matches.

Matching tiers:

1. Executable path: both records know the binary and it is the same.
2. Class (case-insensitive): the saved ``class`` or ``initial_class`` equals
   the live ``class`` or ``initial_class``.  Comparing across the two fields
   tolerates applications that report a different class while starting up.
"""

from __future__ import annotations

import shlex

from .constants import COMMAND_ALIASES
from .errors import LaunchError
from .models import WindowRecord


def matches(live: WindowRecord, saved: WindowRecord) -> bool:
    """Return True when *live* can stand in for *saved*."""
    if live.exe_path and saved.exe_path and live.exe_path == saved.exe_path:
        return True

    live_names = {live.window_class.lower(), live.initial_class.lower()}
    for wanted in (saved.window_class, saved.initial_class):
        if wanted and wanted.lower() in live_names:
            return True
    return False


def affinity(live: WindowRecord, saved: WindowRecord) -> tuple[bool, bool, bool]:
    """Sort key preferring the same address, then workspace, then float state."""
    return (
        live.address == saved.address,
        live.workspace_id == saved.workspace_id,
        live.floating == saved.floating,
    )


def resolve_command(window_class: str) -> str:
    """Map a window class to the executable that most likely opens it."""
    lower = window_class.lower()
    return COMMAND_ALIASES.get(lower, lower)


def resolve_launch_command(saved: WindowRecord) -> str:
    """
    Return the shell command that re-creates *saved*.

    Preference: captured argv, then captured executable path, then a guess
    derived from the initial class (or class).
    """
    if saved.command:
        return shlex.join(saved.command)
    if saved.exe_path:
        return saved.exe_path

    raw_name = saved.initial_class or saved.window_class
    if not raw_name:
        raise LaunchError(f"No way to launch window {saved.address}: no class or command")
    return resolve_command(raw_name)
