"""hyprdrover.commands
~~~~~~~~~~~~~~~~~~~~~~

Hyprland dispatcher strings and the two ways of sending them.

``run_command`` is for commands whose failure matters: it raises
``AdapterError``.  ``run_best_effort`` is for secondary commands (workspace
switches, split preselection, final refocus) whose failure is tolerated; it
returns a ``BestEffortFailure`` value instead of raising so the caller can
see, and tests can assert, that a failure was deliberately let through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .constants import SplitAxis
from .errors import AdapterError
from .hyprctl import CompositorAdapter

_LOG = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Builders                                                                    #
# --------------------------------------------------------------------------- #


def move_to_workspace_silent(address: str, workspace_id: int) -> str:
    return f"movetoworkspacesilent {workspace_id},address:{address}"


def toggle_floating(address: str) -> str:
    return f"togglefloating address:{address}"


def toggle_pin(address: str) -> str:
    return f"pin address:{address}"


def move_pixel(address: str, x: int, y: int) -> str:
    return f"movewindowpixel exact {x} {y},address:{address}"


def resize_pixel(address: str, width: int, height: int) -> str:
    return f"resizewindowpixel exact {width} {height},address:{address}"


def focus_window(address: str) -> str:
    return f"focuswindow address:{address}"


def preselect(axis: SplitAxis) -> str:
    return f"layoutmsg preselect {axis.direction}"


def switch_workspace(workspace_id: int) -> str:
    return f"workspace {workspace_id}"


def exec_in_workspace(workspace_id: int, command: str) -> str:
    """Start *command* on *workspace_id* without stealing focus."""
    return f"exec [workspace {workspace_id} silent] {command}"


# --------------------------------------------------------------------------- #
# Sending                                                                     #
# --------------------------------------------------------------------------- #


@dataclass(slots=True, frozen=True)
class BestEffortFailure:
    """A tolerated dispatch failure."""

    command: str
    reason: str


async def run_command(adapter: CompositorAdapter, command: str) -> None:
    """Dispatch *command*; raise AdapterError when the compositor rejects it."""
    result = await adapter.dispatch(command)
    if not result.ok:
        raise AdapterError(f"'{command}' failed: {result.error}")


async def run_best_effort(
    adapter: CompositorAdapter, command: str
) -> BestEffortFailure | None:
    """Dispatch *command*; return the failure instead of raising it."""
    result = await adapter.dispatch(command)
    if result.ok:
        return None
    _LOG.debug("Tolerated failure of '%s': %s", command, result.error)
    return BestEffortFailure(command, result.error)
