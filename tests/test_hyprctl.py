"""
Tests for the hyprctl-backed compositor adapter.

``asyncio.create_subprocess_exec`` is patched so no real ``hyprctl`` runs.
"""

import asyncio
import json
import os
from unittest.mock import AsyncMock, Mock, patch

import pytest

from hyprdrover.errors import AdapterError, DeserializationError
from hyprdrover.hyprctl import HyprctlAdapter, read_exe_path, read_process_command

pytestmark = pytest.mark.unit

SAMPLE_CLIENTS = [
    {
        "address": "0x55d1c3a0",
        "mapped": True,
        "hidden": False,
        "at": [12, 44],
        "size": [1896, 1024],
        "workspace": {"id": 2, "name": "2"},
        "floating": False,
        "pseudo": False,
        "monitor": 0,
        "class": "firefox",
        "title": "Mozilla Firefox",
        "initialClass": "firefox",
        "initialTitle": "Mozilla Firefox",
        "pid": 4242,
        "xwayland": False,
        "pinned": False,
        "fullscreen": 0,
        "fullscreenClient": 0,
        "grouped": [],
        "tags": [],
        "swallowing": "0x0",
        "focusHistoryID": 1,
    }
]


def _process(stdout: str = "", stderr: str = "", returncode: int = 0) -> Mock:
    proc = Mock()
    proc.returncode = returncode
    proc.communicate = AsyncMock(return_value=(stdout.encode(), stderr.encode()))
    return proc


def _patch_exec(*processes):
    return patch(
        "hyprdrover.hyprctl.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=list(processes)),
    )


@pytest.fixture
def proc_root(tmp_path):
    pid_dir = tmp_path / "4242"
    pid_dir.mkdir()
    (pid_dir / "cmdline").write_bytes(b"/usr/lib/firefox/firefox\0-P\0work\0")
    os.symlink("/usr/lib/firefox/firefox", pid_dir / "exe")
    return tmp_path


# --------------------------------------------------------------------------- #
# Queries                                                                     #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio
async def test_query_clients_parses_and_enriches(proc_root):
    adapter = HyprctlAdapter(proc_root=proc_root)

    with _patch_exec(_process(json.dumps(SAMPLE_CLIENTS))) as spawn:
        clients = await adapter.query_clients()

    assert spawn.call_args.args == ("hyprctl", "-j", "clients")
    [client] = clients
    assert client.address == "0x55d1c3a0"
    assert client.window_class == "firefox"
    assert client.initial_class == "firefox"
    assert client.at == (12, 44)
    assert client.workspace_id == 2
    assert client.command == ["/usr/lib/firefox/firefox", "-P", "work"]
    assert client.exe_path == "/usr/lib/firefox/firefox"


@pytest.mark.asyncio
async def test_client_without_proc_entry_keeps_no_command(tmp_path):
    adapter = HyprctlAdapter(proc_root=tmp_path)

    with _patch_exec(_process(json.dumps(SAMPLE_CLIENTS))):
        [client] = await adapter.query_clients()

    assert client.command is None
    assert client.exe_path is None


@pytest.mark.asyncio
async def test_invalid_json_raises_deserialization_error():
    with _patch_exec(_process("not json")):
        with pytest.raises(DeserializationError):
            await HyprctlAdapter().query_clients()


@pytest.mark.asyncio
async def test_non_list_reply_raises_deserialization_error():
    with _patch_exec(_process('{"address": "0x1"}')):
        with pytest.raises(DeserializationError, match="expected a JSON array"):
            await HyprctlAdapter().query_clients()


@pytest.mark.asyncio
async def test_record_missing_fields_raises_deserialization_error():
    with _patch_exec(_process('[{"class": "kitty"}]')):
        with pytest.raises(DeserializationError):
            await HyprctlAdapter().query_clients()


@pytest.mark.asyncio
async def test_failed_query_raises_adapter_error():
    with _patch_exec(_process("", "HYPRLAND_INSTANCE_SIGNATURE not set", 1)):
        with pytest.raises(AdapterError, match="HYPRLAND_INSTANCE_SIGNATURE"):
            await HyprctlAdapter().query_workspaces()


@pytest.mark.asyncio
async def test_missing_binary_raises_adapter_error():
    with patch(
        "hyprdrover.hyprctl.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=FileNotFoundError("hyprctl")),
    ):
        with pytest.raises(AdapterError, match="Cannot run hyprctl"):
            await HyprctlAdapter().query_clients()


@pytest.mark.asyncio
async def test_query_active_workspace():
    reply = {"id": 3, "name": "3", "monitor": "DP-1", "windows": 2}
    with _patch_exec(_process(json.dumps(reply))):
        active = await HyprctlAdapter().query_active_workspace()
    assert (active.id, active.name) == (3, "3")


@pytest.mark.asyncio
async def test_capture_state_queries_all_topics(tmp_path):
    monitors = [{"id": 0, "name": "DP-1", "width": 2560, "height": 1440,
                 "refreshRate": 143.97, "activeWorkspace": {"id": 2, "name": "2"}}]
    workspaces = [{"id": 2, "name": "2", "monitor": "DP-1", "windows": 1}]
    adapter = HyprctlAdapter(proc_root=tmp_path)

    with _patch_exec(
        _process(json.dumps(SAMPLE_CLIENTS)),
        _process(json.dumps(workspaces)),
        _process(json.dumps(monitors)),
    ) as spawn:
        state = await adapter.capture_state()

    topics = [call.args[2] for call in spawn.call_args_list]
    assert topics == ["clients", "workspaces", "monitors"]
    assert state.monitors[0].refresh_rate == pytest.approx(143.97)
    assert state.monitors[0].active_workspace.id == 2
    assert state.workspaces[0].monitor == "DP-1"
    payload = state.to_json_dict()
    assert payload["clients"][0]["class"] == "firefox"
    assert payload["clients"][0]["initialClass"] == "firefox"


# --------------------------------------------------------------------------- #
# Dispatch                                                                    #
# --------------------------------------------------------------------------- #


@pytest.mark.asyncio
async def test_dispatch_keeps_arguments_in_one_element():
    with _patch_exec(_process("ok")) as spawn:
        result = await HyprctlAdapter("/usr/bin/hyprctl").dispatch(
            "exec [workspace 2 silent] firefox --new-window"
        )

    assert result.ok
    assert spawn.call_args.args == (
        "/usr/bin/hyprctl",
        "dispatch",
        "exec",
        "[workspace 2 silent] firefox --new-window",
    )
    assert spawn.call_args.kwargs["stdout"] == asyncio.subprocess.PIPE


@pytest.mark.asyncio
async def test_dispatch_error_reply_is_a_failure():
    with _patch_exec(_process("Invalid dispatcher")):
        result = await HyprctlAdapter().dispatch("nosuchthing 1")
    assert not result.ok
    assert result.error == "Invalid dispatcher"


@pytest.mark.asyncio
async def test_dispatch_nonzero_exit_is_a_failure():
    with _patch_exec(_process("", "couldn't connect", 1)):
        result = await HyprctlAdapter().dispatch("workspace 2")
    assert not result.ok
    assert "couldn't connect" in result.error


@pytest.mark.asyncio
async def test_dispatch_never_raises_when_binary_is_missing():
    with patch(
        "hyprdrover.hyprctl.asyncio.create_subprocess_exec",
        AsyncMock(side_effect=FileNotFoundError("hyprctl")),
    ):
        result = await HyprctlAdapter().dispatch("workspace 2")
    assert not result.ok
    assert "Cannot run hyprctl" in result.error


# --------------------------------------------------------------------------- #
# /proc helpers                                                               #
# --------------------------------------------------------------------------- #


def test_read_process_command(proc_root):
    assert read_process_command(4242, proc_root) == [
        "/usr/lib/firefox/firefox",
        "-P",
        "work",
    ]


def test_read_process_command_missing_or_invalid_pid(tmp_path):
    assert read_process_command(99999, tmp_path) is None
    assert read_process_command(0, tmp_path) is None


def test_read_process_command_empty_cmdline(tmp_path):
    (tmp_path / "7").mkdir()
    (tmp_path / "7" / "cmdline").write_bytes(b"")
    assert read_process_command(7, tmp_path) is None


def test_read_exe_path(proc_root, tmp_path):
    assert read_exe_path(4242, proc_root) == "/usr/lib/firefox/firefox"
    assert read_exe_path(-1, tmp_path) is None
