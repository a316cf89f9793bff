"""
hyprdrover.state
----------------

On-disk storage of session snapshots.

Design
~~~~~~
- One pretty-printed JSON file per snapshot holding the ``clients``,
  ``workspaces`` and ``monitors`` collections exactly as ``hyprctl -j``
  names their fields.
- Unnamed snapshots are called ``session_<timestamp>.json`` so that the
  lexicographically greatest filename is the most recent one.
- Writes go to a temporary file under an exclusive ``fcntl`` lock and are
  renamed into place, so a reader never sees half a snapshot.
"""

from __future__ import annotations

import fcntl
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .constants import SESSION_FILE_PREFIX, SESSION_TIMESTAMP_FORMAT
from .errors import DeserializationError, SnapshotNotFoundError
from .models import SessionSnapshot

_LOG = logging.getLogger(__name__)


class SnapshotStore:
    """Reads and writes snapshot files inside *session_dir*."""

    def __init__(self, session_dir: Path) -> None:
        self._session_dir = Path(session_dir)

    @property
    def session_dir(self) -> Path:
        return self._session_dir

    # ---------------  disk I/O  ------------------------------------------- #

    def _write_atomic(self, path: Path, data: dict) -> None:
        tmp_path = path.with_suffix(".tmp")
        with tmp_path.open("w") as fp:
            fcntl.flock(fp.fileno(), fcntl.LOCK_EX)
            json.dump(data, fp, indent=2)
            fp.flush()
            os.fsync(fp.fileno())
            fcntl.flock(fp.fileno(), fcntl.LOCK_UN)
        tmp_path.replace(path)

    def _filename(self, name: Optional[str]) -> str:
        if name:
            return name if name.endswith(".json") else f"{name}.json"
        timestamp = datetime.now().strftime(SESSION_TIMESTAMP_FORMAT)
        return f"{SESSION_FILE_PREFIX}{timestamp}.json"

    # ---------------  public API  ----------------------------------------- #

    def save(self, snapshot: SessionSnapshot, name: Optional[str] = None) -> Path:
        """Write *snapshot* and return the path of the new file."""
        self._session_dir.mkdir(parents=True, exist_ok=True)
        path = self._session_dir / self._filename(name)
        self._write_atomic(path, snapshot.to_json_dict())
        _LOG.info("Saved %d windows to %s", len(snapshot.clients), path)
        return path

    def load(self, path: Path) -> SessionSnapshot:
        """Read the snapshot at *path*."""
        try:
            with Path(path).open("r") as fp:
                fcntl.flock(fp.fileno(), fcntl.LOCK_SH)
                raw = json.load(fp)
                fcntl.flock(fp.fileno(), fcntl.LOCK_UN)
        except FileNotFoundError as exc:
            raise SnapshotNotFoundError(f"Session file not found: {path}") from exc
        except json.JSONDecodeError as exc:
            raise DeserializationError(f"{path} is not valid JSON: {exc}") from exc

        try:
            return SessionSnapshot.model_validate(raw)
        except ValidationError as exc:
            raise DeserializationError(f"{path} is not a session snapshot: {exc}") from exc

    def list_sessions(self) -> list[Path]:
        """Return every snapshot file, newest (greatest filename) first."""
        if not self._session_dir.is_dir():
            return []
        return sorted(self._session_dir.glob("*.json"), reverse=True)

    def latest(self) -> Optional[Path]:
        sessions = self.list_sessions()
        return sessions[0] if sessions else None

    def resolve(self, target: str) -> Path:
        """
        Turn a user-supplied name or path into a snapshot file.

        Tried in order: *target* as a path, ``<session_dir>/<target>.json``,
        ``<session_dir>/<target>``.
        """
        direct = Path(target).expanduser()
        if direct.is_file():
            return direct

        named = self._session_dir / f"{target}.json"
        if named.is_file():
            return named

        exact = self._session_dir / target
        if exact.is_file():
            return exact

        raise SnapshotNotFoundError(f"Session file not found: {target}")
