"""Shared file plumbing for the JSON-backed repositories.

Every write goes to a temporary file that is then renamed over the
original, so readers never see a half-written document.  Read-modify-write
sequences run under an exclusive ``flock`` on a sidecar lock file; that
lock is what makes conditional updates (like stock decrements) atomic
across threads and across processes sharing the data directory.
"""

from __future__ import annotations

import fcntl
import json
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from storefront.domain.exceptions import StorageError


class JsonFile:

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock_path = file_path.with_name(file_path.name + ".lock")
        self._ensure_file()

    @property
    def path(self) -> Path:
        return self._file_path

    def load(self) -> list[dict]:
        try:
            return json.loads(self._file_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            raise StorageError(f"Could not read {self._file_path.name}") from exc

    def persist(self, records: list[dict]) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._file_path.parent, prefix=self._file_path.name, suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(json.dumps(records, indent=2) + "\n")
            os.replace(tmp_name, self._file_path)
        except OSError as exc:
            raise StorageError(f"Could not write {self._file_path.name}") from exc

    @contextmanager
    def locked(self) -> Iterator[None]:
        """Hold the exclusive write lock for the duration of the block."""
        try:
            lock_file = open(self._lock_path, "a")
        except OSError as exc:
            raise StorageError(f"Could not lock {self._file_path.name}") from exc
        with lock_file:
            fcntl.flock(lock_file, fcntl.LOCK_EX)
            try:
                yield
            finally:
                fcntl.flock(lock_file, fcntl.LOCK_UN)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            with self.locked():
                if not self._file_path.exists():
                    self._file_path.write_text("[]", encoding="utf-8")
