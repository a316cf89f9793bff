"""
hyprdrover.cli
--------------

Synchronous helpers behind the Click commands.

The restore engine is asynchronous (the poll loop awaits between ticks);
these wrappers give the command-line layer plain blocking calls via
``asyncio.run``.
"""

from __future__ import annotations

import asyncio
import logging
import os
import stat
import sys
from dataclasses import replace
from pathlib import Path
from typing import Callable, Optional

from dotenv import find_dotenv, load_dotenv

from .config import Config
from .constants import DEFAULT_INSTALL_DIR, DOTENV_ENV
from .restore import RestoreReport
from .session import SessionManager

_LOG = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Environment                                                                 #
# --------------------------------------------------------------------------- #


def load_environment() -> Optional[str]:
    """
    Load a ``.env`` file into the environment.

    ``$HYPRDROVER_DOTENV`` wins when it names an existing file; otherwise
    the nearest ``.env`` from the working directory upwards is used.
    Returns the loaded path, if any.
    """
    specific = os.environ.get(DOTENV_ENV)
    if specific and os.path.exists(specific):
        load_dotenv(specific)
        _LOG.debug("Loaded .env from %s: %s", DOTENV_ENV, specific)
        return specific

    discovered = find_dotenv(usecwd=True)
    if discovered:
        load_dotenv(discovered)
        _LOG.debug("Loaded .env via discovery: %s", discovered)
        return discovered
    return None


def get_config(launch_timeout: Optional[float] = None) -> Config:
    config = Config.from_env()
    if launch_timeout is not None:
        config = replace(config, launch_timeout=launch_timeout)
    return config


# --------------------------------------------------------------------------- #
# Session bridges                                                             #
# --------------------------------------------------------------------------- #


def save_session_sync(name: Optional[str] = None) -> Path:
    """Capture the current session and return the snapshot path."""
    manager = SessionManager(get_config())
    return asyncio.run(manager.snapshot(name))


def restore_session_sync(
    target: Optional[str] = None,
    launch_timeout: Optional[float] = None,
    on_resolved: Optional[Callable[[Path], None]] = None,
) -> RestoreReport:
    """
    Restore the snapshot named by *target* (default: latest).

    *on_resolved* is called with the snapshot path before restoring starts.
    """
    manager = SessionManager(get_config(launch_timeout))
    path = manager.resolve(target)
    if on_resolved is not None:
        on_resolved(path)
    return asyncio.run(manager.restore_file(path))


def list_sessions() -> list[Path]:
    return SessionManager(get_config()).list_sessions()


# --------------------------------------------------------------------------- #
# Install                                                                     #
# --------------------------------------------------------------------------- #

_LAUNCHER_TEMPLATE = """#!{python}
# Generated by `hyprdrover install`.
import sys

from hyprdrover.cli_click import cli

sys.exit(cli())
"""


def install_launcher(target_dir: Path = DEFAULT_INSTALL_DIR) -> Path:
    """
    Write an executable ``hyprdrover`` script into *target_dir* that runs
    the CLI with the current interpreter.  Returns the script path.
    """
    target_dir = Path(target_dir).expanduser()
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / "hyprdrover"
    target.write_text(_LAUNCHER_TEMPLATE.format(python=sys.executable))
    target.chmod(target.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    _LOG.info("Installed launcher at %s", target)
    return target
