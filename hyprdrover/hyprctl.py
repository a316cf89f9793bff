"""hyprdrover.hyprctl
~~~~~~~~~~~~~~~~~~~~~

Compositor control adapter: query and mutate Hyprland state through the
``hyprctl`` command-line client.

Queries use ``hyprctl -j <topic>`` and are parsed into the records from
``models``.  Mutations go through a single ``dispatch`` channel that accepts
an opaque dispatcher string (see ``commands``) and reports success or the
raw error text; it never raises.

The restore engine only ever talks to an object with this interface, so
tests substitute an in-memory compositor.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ValidationError

from .constants import PROC_ROOT
from .errors import AdapterError, DeserializationError
from .models import (
    MonitorRecord,
    SessionSnapshot,
    WindowRecord,
    WorkspaceRecord,
    WorkspaceRef,
)

_LOG = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Interface                                                                   #
# --------------------------------------------------------------------------- #


@dataclass(slots=True, frozen=True)
class DispatchResult:
    """Outcome of one dispatch: ``ok`` or the compositor's raw error text."""

    ok: bool
    error: str = ""

    @classmethod
    def success(cls) -> "DispatchResult":
        return cls(True)

    @classmethod
    def failure(cls, error: str) -> "DispatchResult":
        return cls(False, error)


class CompositorAdapter(Protocol):
    """What the restore engine needs from the compositor."""

    async def query_clients(self) -> list[WindowRecord]: ...

    async def query_workspaces(self) -> list[WorkspaceRecord]: ...

    async def query_monitors(self) -> list[MonitorRecord]: ...

    async def query_active_workspace(self) -> WorkspaceRef: ...

    async def dispatch(self, command: str) -> DispatchResult: ...


# --------------------------------------------------------------------------- #
# /proc helpers                                                               #
# --------------------------------------------------------------------------- #


def read_process_command(pid: int, proc_root: Path = PROC_ROOT) -> list[str] | None:
    """Return the argv of *pid* from ``/proc/<pid>/cmdline`` or None."""
    if pid <= 0:
        return None
    try:
        raw = (proc_root / str(pid) / "cmdline").read_bytes()
    except OSError:
        return None
    args = [part.decode("utf-8", errors="replace") for part in raw.split(b"\0") if part]
    return args or None


def read_exe_path(pid: int, proc_root: Path = PROC_ROOT) -> str | None:
    """Return the kernel-reported executable of *pid* or None."""
    if pid <= 0:
        return None
    try:
        return os.readlink(proc_root / str(pid) / "exe")
    except OSError:
        return None


# --------------------------------------------------------------------------- #
# hyprctl adapter                                                             #
# --------------------------------------------------------------------------- #


class HyprctlAdapter:
    """
    Adapter backed by the ``hyprctl`` binary.

    Every call spawns one short-lived ``hyprctl`` process; Hyprland itself
    serialises the requests on its socket.
    """

    def __init__(self, binary: str = "hyprctl", proc_root: Path = PROC_ROOT) -> None:
        self._binary = binary
        self._proc_root = proc_root

    # ---------------- Process plumbing ---------------- #

    async def _run(self, *args: str) -> tuple[int, str, str]:
        try:
            proc = await asyncio.create_subprocess_exec(
                self._binary,
                *args,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            out, err = await proc.communicate()
        except OSError as exc:
            raise AdapterError(f"Cannot run {self._binary}: {exc}") from exc
        return (
            proc.returncode or 0,
            out.decode("utf-8", errors="replace"),
            err.decode("utf-8", errors="replace"),
        )

    async def _query(self, topic: str) -> Any:
        code, out, err = await self._run("-j", topic)
        if code != 0:
            raise AdapterError(f"hyprctl {topic} failed: {err.strip() or out.strip()}")
        try:
            return json.loads(out)
        except json.JSONDecodeError as exc:
            raise DeserializationError(
                f"hyprctl {topic} returned invalid JSON: {exc}"
            ) from exc

    async def _query_list(self, topic: str, model: type[BaseModel]) -> list:
        raw = await self._query(topic)
        if not isinstance(raw, list):
            raise DeserializationError(f"hyprctl {topic}: expected a JSON array")
        try:
            return [model.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise DeserializationError(f"hyprctl {topic}: {exc}") from exc

    # ---------------- Queries ---------------- #

    async def query_clients(self) -> list[WindowRecord]:
        """Return all clients, enriched with their launch command."""
        clients: list[WindowRecord] = await self._query_list("clients", WindowRecord)
        return [self._with_launch_info(c) for c in clients]

    async def query_workspaces(self) -> list[WorkspaceRecord]:
        return await self._query_list("workspaces", WorkspaceRecord)

    async def query_monitors(self) -> list[MonitorRecord]:
        return await self._query_list("monitors", MonitorRecord)

    async def query_active_workspace(self) -> WorkspaceRef:
        raw = await self._query("activeworkspace")
        try:
            return WorkspaceRef.model_validate(raw)
        except ValidationError as exc:
            raise DeserializationError(f"hyprctl activeworkspace: {exc}") from exc

    async def capture_state(self) -> SessionSnapshot:
        """Query clients, workspaces and monitors into one snapshot."""
        return SessionSnapshot(
            clients=await self.query_clients(),
            workspaces=await self.query_workspaces(),
            monitors=await self.query_monitors(),
        )

    def _with_launch_info(self, client: WindowRecord) -> WindowRecord:
        update: dict[str, Any] = {}
        if client.command is None:
            command = read_process_command(client.pid, self._proc_root)
            if command:
                update["command"] = command
        if client.exe_path is None:
            exe = read_exe_path(client.pid, self._proc_root)
            if exe:
                update["exe_path"] = exe
        return client.model_copy(update=update) if update else client

    # ---------------- Mutations ---------------- #

    async def dispatch(self, command: str) -> DispatchResult:
        """
        Send ``hyprctl dispatch <dispatcher> <arguments>``.

        The arguments stay one argv element so rule prefixes such as
        ``[workspace 3 silent]`` reach the ``exec`` dispatcher intact.
        """
        dispatcher, _, arguments = command.strip().partition(" ")
        args = ["dispatch", dispatcher]
        if arguments.strip():
            args.append(arguments.strip())

        try:
            code, out, err = await self._run(*args)
        except AdapterError as exc:
            return DispatchResult.failure(str(exc))

        reply = out.strip()
        if code != 0 or (reply and reply.lower() != "ok"):
            return DispatchResult.failure(err.strip() or reply or f"exit status {code}")
        _LOG.debug("dispatch %s", command)
        return DispatchResult.success()
