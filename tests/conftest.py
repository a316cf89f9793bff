"""Shared pytest fixtures for tests."""

from __future__ import annotations

import pytest

from hyprdrover.config import Config
from hyprdrover.directory import WindowDirectory
from hyprdrover.hyprctl import DispatchResult
from hyprdrover.launcher import RestoreContext
from hyprdrover.models import SessionSnapshot, WindowRecord, WorkspaceRef


def _window(
    address: str,
    window_class: str,
    workspace: int = 1,
    at: tuple[int, int] = (0, 0),
    size: tuple[int, int] = (100, 100),
    floating: bool = False,
    pinned: bool = False,
    initial_class: str | None = None,
    **extra,
) -> WindowRecord:
    return WindowRecord(
        address=address,
        window_class=window_class,
        initial_class=window_class if initial_class is None else initial_class,
        workspace=WorkspaceRef(id=workspace, name=str(workspace)),
        at=at,
        size=size,
        floating=floating,
        pinned=pinned,
        **extra,
    )


class FakeCompositor:
    """
    In-memory stand-in for the hyprctl adapter.

    Records every dispatched command and applies its effect to the client
    list.  ``exec`` commands whose program is registered in ``launchable``
    spawn that window after ``spawn_delay`` client queries.
    """

    def __init__(self, clients=(), active_workspace: int = 1, spawn_delay: int = 1):
        self.clients: list[WindowRecord] = list(clients)
        self.active_workspace = active_workspace
        self.spawn_delay = spawn_delay
        self.launchable: dict[str, WindowRecord] = {}
        self.fail_prefixes: set[str] = set()
        self.dispatched: list[str] = []
        self.query_count = 0
        self.query_error: Exception | None = None
        self.active_error: Exception | None = None
        self._pending: list[list] = []

    # ---------------- adapter interface ---------------- #

    async def query_clients(self) -> list[WindowRecord]:
        if self.query_error is not None:
            raise self.query_error
        self.query_count += 1
        waiting = []
        for entry in self._pending:
            entry[0] -= 1
            if entry[0] <= 0:
                self.clients.append(entry[1])
            else:
                waiting.append(entry)
        self._pending = waiting
        return list(self.clients)

    async def query_workspaces(self):
        return []

    async def query_monitors(self):
        return []

    async def query_active_workspace(self) -> WorkspaceRef:
        if self.active_error is not None:
            raise self.active_error
        return WorkspaceRef(id=self.active_workspace, name=str(self.active_workspace))

    async def capture_state(self) -> SessionSnapshot:
        return SessionSnapshot(clients=await self.query_clients())

    async def dispatch(self, command: str) -> DispatchResult:
        self.dispatched.append(command)
        if any(command.startswith(prefix) for prefix in self.fail_prefixes):
            return DispatchResult.failure("rejected")
        self._apply(command)
        return DispatchResult.success()

    # ---------------- helpers ---------------- #

    def commands(self, dispatcher: str) -> list[str]:
        return [c for c in self.dispatched if c.split(" ", 1)[0] == dispatcher]

    def window(self, address: str) -> WindowRecord:
        return next(c for c in self.clients if c.address == address)

    def _update(self, address: str, **changes) -> None:
        self.clients = [
            c.model_copy(update=changes) if c.address == address else c
            for c in self.clients
        ]

    def _apply(self, command: str) -> None:
        dispatcher, _, args = command.partition(" ")
        if dispatcher == "exec":
            rule, _, program = args.partition("] ")
            workspace = int(rule.removeprefix("[workspace ").split()[0])
            spawned = self.launchable.get(program)
            if spawned is not None:
                spawned = spawned.model_copy(
                    update={"workspace": WorkspaceRef(id=workspace, name=str(workspace))}
                )
                self._pending.append([self.spawn_delay, spawned])
        elif dispatcher == "movetoworkspacesilent":
            target, _, address = args.partition(",address:")
            self._update(address, workspace=WorkspaceRef(id=int(target), name=target))
        elif dispatcher == "togglefloating":
            address = args.removeprefix("address:")
            self._update(address, floating=not self.window(address).floating)
        elif dispatcher == "pin":
            address = args.removeprefix("address:")
            self._update(address, pinned=not self.window(address).pinned)
        elif dispatcher in {"movewindowpixel", "resizewindowpixel"}:
            coords, _, address = args.partition(",address:")
            _, a, b = coords.split()
            key = "at" if dispatcher == "movewindowpixel" else "size"
            self._update(address, **{key: (int(a), int(b))})
        elif dispatcher == "workspace":
            self.active_workspace = int(args)


@pytest.fixture
def make_window():
    """Factory for WindowRecord instances."""
    return _window


@pytest.fixture
def compositor():
    """Empty FakeCompositor; tests add clients and launchable windows."""
    return FakeCompositor()


@pytest.fixture
def fast_config():
    """Config with short timings so launch waits finish quickly."""
    return Config(launch_timeout=0.5, poll_interval=0.01, notify=False)


@pytest.fixture
def make_context(fast_config):
    """Build a RestoreContext whose baseline is the compositor's current clients."""

    def _make(compositor: FakeCompositor, config: Config | None = None) -> RestoreContext:
        clients = list(compositor.clients)
        return RestoreContext(
            adapter=compositor,
            directory=WindowDirectory(compositor, clients),
            baseline=frozenset(c.address for c in clients),
            config=config or fast_config,
        )

    return _make
