"""
hyprdrover.config
-----------------

Runtime configuration resolved from the environment.

Every knob has a default in ``constants`` and an environment override; the
CLI loads a ``.env`` file first so that overrides can live next to the
project or in ``$HYPRDROVER_DOTENV``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .constants import (
    DEFAULT_IGNORED_CLASSES,
    DEFAULT_SESSION_DIR,
    FALLBACK_WORKSPACE,
    FALLBACK_WORKSPACE_ENV,
    HYPRCTL_ENV,
    IGNORED_CLASSES_ENV,
    LAUNCH_TIMEOUT,
    LAUNCH_TIMEOUT_ENV,
    NOTIFY_ENV,
    POLL_INTERVAL,
    POLL_INTERVAL_ENV,
    SESSION_DIR_ENV,
)

_LOG = logging.getLogger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(slots=True)
class Config:
    """Settings shared by the snapshot store and the restore engine."""

    session_dir: Path = field(default_factory=lambda: DEFAULT_SESSION_DIR)
    ignored_classes: tuple[str, ...] = DEFAULT_IGNORED_CLASSES
    launch_timeout: float = LAUNCH_TIMEOUT
    poll_interval: float = POLL_INTERVAL
    fallback_workspace: int = FALLBACK_WORKSPACE
    notify: bool = True
    hyprctl: str = "hyprctl"

    @classmethod
    def from_env(cls) -> "Config":
        """Build a Config from ``HYPRDROVER_*`` variables, defaulting the rest."""
        session_dir = os.environ.get(SESSION_DIR_ENV)
        ignored = os.environ.get(IGNORED_CLASSES_ENV)
        notify = os.environ.get(NOTIFY_ENV)

        return cls(
            session_dir=(
                Path(session_dir).expanduser() if session_dir else DEFAULT_SESSION_DIR
            ),
            ignored_classes=(
                tuple(c.strip() for c in ignored.split(",") if c.strip())
                if ignored is not None
                else DEFAULT_IGNORED_CLASSES
            ),
            launch_timeout=_env_number(LAUNCH_TIMEOUT_ENV, LAUNCH_TIMEOUT, float),
            poll_interval=_env_number(POLL_INTERVAL_ENV, POLL_INTERVAL, float),
            fallback_workspace=_env_number(
                FALLBACK_WORKSPACE_ENV, FALLBACK_WORKSPACE, int
            ),
            notify=notify.lower() in _TRUTHY if notify is not None else True,
            hyprctl=os.environ.get(HYPRCTL_ENV, "hyprctl"),
        )


def _env_number(name: str, default, kind):
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = kind(raw)
    except ValueError:
        _LOG.warning("Ignoring invalid %s=%r, using %s", name, raw, default)
        return default
    if value <= 0 and kind is float:
        _LOG.warning("Ignoring non-positive %s=%r, using %s", name, raw, default)
        return default
    return value
