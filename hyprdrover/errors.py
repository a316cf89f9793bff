"""
hyprdrover.errors
-----------------

Exception hierarchy.  Everything raised on purpose by hyprdrover derives from
``HyprdroverError`` so that callers can tell a reported restore problem from
a programming error.

Best-effort dispatches do not raise at all; see ``commands.BestEffortFailure``.
"""

from __future__ import annotations


class HyprdroverError(RuntimeError):
    """Base class for all hyprdrover failures."""


class AdapterError(HyprdroverError):
    """The compositor control channel was unreachable or rejected a command."""


class DeserializationError(HyprdroverError):
    """A compositor response or snapshot file did not have the expected shape."""


class LaunchError(HyprdroverError):
    """A missing application could not be started."""


class LaunchTimeoutError(HyprdroverError):
    """A launched application produced no matching window in time."""

    def __init__(self, window_class: str, timeout: float) -> None:
        super().__init__(
            f"Timed out after {timeout:g}s waiting for a '{window_class}' window"
        )
        self.window_class = window_class
        self.timeout = timeout


class ReplayError(HyprdroverError):
    """Ordered replay of a workspace's split tree was aborted."""


class SnapshotNotFoundError(HyprdroverError):
    """No snapshot file matches the requested name or path."""
