"""
hyprdrover.models
-----------------

Typed records for the compositor state, shaped like the JSON printed by
``hyprctl -j`` so that a snapshot file is simply the three query results
written side by side.

All records are frozen: a saved snapshot is read-only during restore and a
live record is replaced (never edited) when the compositor is re-queried.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _HyprModel(BaseModel):
    """Common parsing rules: camelCase keys, unknown keys ignored, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


class WorkspaceRef(_HyprModel):
    """Workspace reference embedded in client and monitor records."""

    id: int
    name: str = ""


class WindowRecord(_HyprModel):
    """One client (window) as reported by ``hyprctl clients``."""

    address: str
    at: tuple[int, int] = (0, 0)
    size: tuple[int, int] = (0, 0)
    workspace: WorkspaceRef
    window_class: str = Field(default="", alias="class")
    title: str = ""
    initial_class: str = ""
    initial_title: str = ""
    floating: bool = False
    pinned: bool = False
    monitor: int = 0
    fullscreen: int = 0  # 0: none, 1: maximised, 2: fullscreen
    xwayland: bool = False
    pid: int = 0

    # Full argv used to start the process; needed for PWAs, Electron apps
    # and other runtimes whose class does not name an executable.
    command: Optional[list[str]] = None

    # Fallback executable path from /proc/<pid>/exe.
    exe_path: Optional[str] = None

    @property
    def workspace_id(self) -> int:
        return self.workspace.id

    @property
    def label(self) -> str:
        """Human-readable name for log lines."""
        return self.window_class or self.initial_class or self.address


class WorkspaceRecord(_HyprModel):
    """One workspace as reported by ``hyprctl workspaces``."""

    id: int
    name: str = ""
    monitor: str = ""
    windows: int = 0
    hasfullscreen: bool = False
    lastwindow: str = ""
    lastwindowtitle: str = ""


class MonitorRecord(_HyprModel):
    """One output as reported by ``hyprctl monitors``."""

    id: int
    name: str = ""
    width: int = 0
    height: int = 0
    refresh_rate: float = 0.0
    x: int = 0
    y: int = 0
    active_workspace: Optional[WorkspaceRef] = None


class SessionSnapshot(_HyprModel):
    """Everything captured by ``hyprdrover save``."""

    clients: list[WindowRecord] = Field(default_factory=list)
    workspaces: list[WorkspaceRecord] = Field(default_factory=list)
    monitors: list[MonitorRecord] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Return the on-disk JSON payload (hyprctl key names)."""
        return self.model_dump(mode="json", by_alias=True)
