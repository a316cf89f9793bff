"""
hyprdrover.constants
--------------------

Centralised constants shared across the hyprdrover code-base.
"""

from pathlib import Path
from enum import Enum
from typing import Final

# --------------------------------------------------------------------------- #
# Paths
# --------------------------------------------------------------------------- #

# Default directory holding saved session snapshots.
DEFAULT_SESSION_DIR: Final[Path] = Path.home() / ".config/hyprdrover/sessions"

# Default target of ``hyprdrover install``.
DEFAULT_INSTALL_DIR: Final[Path] = Path.home() / ".local/bin"

# Kernel process table, read for launch-command capture.
PROC_ROOT: Final[Path] = Path("/proc")

# Filename pattern for unnamed snapshots (local time, sorts chronologically).
SESSION_FILE_PREFIX: Final[str] = "session_"
SESSION_TIMESTAMP_FORMAT: Final[str] = "%Y-%m-%d_%H-%M-%S"

# --------------------------------------------------------------------------- #
# Environment variables
# --------------------------------------------------------------------------- #

SESSION_DIR_ENV: Final[str] = "HYPRDROVER_SESSION_DIR"
IGNORED_CLASSES_ENV: Final[str] = "HYPRDROVER_IGNORED_CLASSES"
LAUNCH_TIMEOUT_ENV: Final[str] = "HYPRDROVER_LAUNCH_TIMEOUT"
POLL_INTERVAL_ENV: Final[str] = "HYPRDROVER_POLL_INTERVAL"
FALLBACK_WORKSPACE_ENV: Final[str] = "HYPRDROVER_FALLBACK_WORKSPACE"
NOTIFY_ENV: Final[str] = "HYPRDROVER_NOTIFY"
HYPRCTL_ENV: Final[str] = "HYPRDROVER_HYPRCTL"
DOTENV_ENV: Final[str] = "HYPRDROVER_DOTENV"

# --------------------------------------------------------------------------- #
# Restore timing
# --------------------------------------------------------------------------- #

LAUNCH_TIMEOUT: Final[float] = 10.0  # Seconds to wait for a launched window
POLL_INTERVAL: Final[float] = 0.25  # Re-query interval while waiting

# Workspace refocused at the end of a restore when the active one is unknown.
FALLBACK_WORKSPACE: Final[int] = 1

# --------------------------------------------------------------------------- #
# Window classes
# --------------------------------------------------------------------------- #

# Background / overlay applications that are never written to a snapshot.
DEFAULT_IGNORED_CLASSES: Final[tuple[str, ...]] = (
    "rofi",
    "waybar",
    "dunst",
    "hyprland-share-picker",
    "polkit-gnome-authentication-agent-1",
)

# Lower-cased window class → executable, for applications whose class does
# not name the binary that starts them.
COMMAND_ALIASES: Final[dict[str, str]] = {
    "brave-browser": "brave",
    "code": "code",  # VS Code reports "Code"
    "google-chrome": "google-chrome-stable",
    "com.mitchellh.ghostty": "ghostty",
}

# --------------------------------------------------------------------------- #
# Split inference
# --------------------------------------------------------------------------- #


class SplitAxis(str, Enum):
    """
    Axis along which a group of tiled windows is bisected.

    The value is the direction handed to the layout's ``preselect`` message
    so the *second* half opens to the right of (X) or below (Y) the first.
    """

    X = "r"
    Y = "d"

    @property
    def direction(self) -> str:
        return self.value
