"""
hyprdrover.cli_click
--------------------

User-facing Click command-line interface.

Commands
--------
save   : Snapshot the current session (optional name)
load   : Restore a session (by name or path, defaults to latest)
list   : List all saved sessions
install: Install a launcher script to ~/.local/bin/
"""

from __future__ import annotations

import json
import logging
import os
from importlib import metadata
from pathlib import Path
from typing import Optional

import click

from hyprdrover.cli import (
    install_launcher,
    list_sessions,
    load_environment,
    restore_session_sync,
    save_session_sync,
)
from hyprdrover.constants import DEFAULT_INSTALL_DIR
from hyprdrover.errors import HyprdroverError

_LOG = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
@click.version_option(metadata.version("hyprdrover"))
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:  # noqa: D401  (Click demands plain name)
    """hyprdrover – save and restore Hyprland window sessions."""
    _configure_logging(verbose)
    load_environment()
    ctx.ensure_object(dict)


# --------------------------------------------------------------------------- #
# save command                                                                #
# --------------------------------------------------------------------------- #


@cli.command("save")
@click.argument("name", required=False)
def cmd_save(name: Optional[str]) -> None:
    """Snapshot the current session."""
    try:
        path = save_session_sync(name)
    except HyprdroverError as exc:
        raise click.ClickException(f"Error saving session: {exc}") from exc
    click.echo(f"Session saved to: {path}")


# --------------------------------------------------------------------------- #
# load command                                                                #
# --------------------------------------------------------------------------- #


@cli.command("load")
@click.argument("target", required=False, metavar="[NAME|FILE]")
@click.option(
    "-t",
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Seconds to wait for each launched window.",
)
def cmd_load(target: Optional[str], timeout: Optional[float]) -> None:
    """Restore a session (defaults to the latest one)."""

    def announce(path: Path) -> None:
        if target is None:
            click.echo(f"No file specified, loading latest session: {path}")

    try:
        report = restore_session_sync(target, timeout, on_resolved=announce)
    except HyprdroverError as exc:
        raise click.ClickException(f"Error restoring session: {exc}") from exc

    click.echo(
        f"Restored {len(report.restored)} window(s), "
        f"launched {report.launched} application(s)."
    )
    for window_class, message in report.failures:
        click.echo(f"  ⚠️ {window_class}: {message}", err=True)
    if report.fallback_workspaces:
        ws = ", ".join(str(w) for w in report.fallback_workspaces)
        click.echo(f"  Tiling order not reproduced on workspace(s): {ws}", err=True)

    if report.ok:
        click.echo("Session restored successfully.")
    else:
        click.echo(f"Session restored with {len(report.failures)} failure(s).")


# --------------------------------------------------------------------------- #
# list command                                                                #
# --------------------------------------------------------------------------- #


@cli.command("list")
@click.option(
    "-o",
    "--output",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format.",
)
def cmd_list(output: str) -> None:
    """List all saved sessions, newest first."""
    sessions = list_sessions()

    if output == "json":
        click.echo(json.dumps([str(p) for p in sessions], indent=2))
        return

    if not sessions:
        click.echo("No saved sessions found.")
        return
    click.echo("Saved sessions:")
    for path in sessions:
        click.echo(f"  {path}")


# --------------------------------------------------------------------------- #
# install command                                                             #
# --------------------------------------------------------------------------- #


@cli.command("install")
@click.option(
    "-d",
    "--target-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_INSTALL_DIR,
    show_default=True,
    help="Directory to install the launcher into.",
)
def cmd_install(target_dir: Path) -> None:
    """Install a hyprdrover launcher script."""
    try:
        target = install_launcher(target_dir)
    except OSError as exc:
        raise click.ClickException(f"Error installing launcher: {exc}") from exc
    click.echo(f"Successfully installed to {target}")
    if str(target.parent) not in os.environ.get("PATH", "").split(os.pathsep):
        click.echo(f"Ensure {target.parent} is in your PATH.")


def main() -> None:
    cli()
