"""hyprdrover.position
~~~~~~~~~~~~~~~~~~~~~~

Put a resolved live window where its saved record says it belongs.

Floating windows get their exact pixel rectangle back.  Tiled windows are
only moved to the right workspace and un-floated; their shape is decided by
the layout engine and their order by ``replay``.
"""

from __future__ import annotations

import logging

from . import commands
from .hyprctl import CompositorAdapter
from .models import WindowRecord

_LOG = logging.getLogger(__name__)


async def apply_position(
    adapter: CompositorAdapter, live: WindowRecord, saved: WindowRecord
) -> None:
    """Restore workspace, floating state and (if floating) geometry of *live*."""
    address = live.address

    if live.workspace_id != saved.workspace_id:
        await commands.run_command(
            adapter, commands.move_to_workspace_silent(address, saved.workspace_id)
        )

    if saved.floating:
        if not live.floating:
            await commands.run_command(adapter, commands.toggle_floating(address))
        if saved.pinned != live.pinned:
            await commands.run_command(adapter, commands.toggle_pin(address))
        if live.at != saved.at:
            await commands.run_command(
                adapter, commands.move_pixel(address, *saved.at)
            )
        if live.size != saved.size:
            await commands.run_command(
                adapter, commands.resize_pixel(address, *saved.size)
            )
        _LOG.debug(
            "Placed floating %s at %s size %s", saved.label, saved.at, saved.size
        )
    elif live.floating:
        await commands.run_command(adapter, commands.toggle_floating(address))
