# supersearch/infrastructure/json_snapshot_store.py

import json
import os
import tempfile
from pathlib import Path
from typing import List, Optional

from supersearch.domain.errors import SnapshotUnavailable, SnapshotWriteError
from supersearch.domain.interfaces import SnapshotStorePort
from supersearch.domain.models import Document
from supersearch.infrastructure.file_hasher import compute_file_hash


def serialize_snapshot(documents: List[Document]) -> bytes:
    """
    Deterministic encoding: same documents in, same bytes out.
    No timestamps, key order fixed by Document.to_dict().
    """
    payload = [document.to_dict() for document in documents]
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


class JsonSnapshotStore(SnapshotStorePort):
    """
    Persists the index snapshot as one JSON array on disk.

    Writes are whole-file replacements: the new snapshot goes to a temp
    file next to the target and is moved over it with os.replace, so a
    reader sees either the previous snapshot or the new one, never a mix.
    """

    def __init__(self, snapshot_path: str):
        self._path = Path(snapshot_path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def write(self, documents: List[Document]) -> None:
        payload = serialize_snapshot(documents)

        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise SnapshotWriteError(
                f"Cannot create snapshot directory '{self._path.parent}': {error}"
            ) from error

        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self._path.name}.", suffix=".tmp", dir=str(self._path.parent)
            )
            with os.fdopen(fd, "wb") as tmp_file:
                tmp_file.write(payload)
                tmp_file.flush()
                os.fsync(tmp_file.fileno())
            os.replace(tmp_name, self._path)
        except OSError as error:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass
            raise SnapshotWriteError(
                f"Failed to write snapshot '{self._path}': {error}"
            ) from error

        print(f"[SnapshotStore] Wrote {len(documents)} documents to '{self._path}'.")

    def read(self) -> list:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as error:
            raise SnapshotUnavailable(f"Cannot read snapshot '{self._path}': {error}") from error

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as error:
            raise SnapshotUnavailable(f"Snapshot '{self._path}' is not valid JSON: {error}") from error

        if not isinstance(data, list):
            raise SnapshotUnavailable(f"Snapshot '{self._path}' does not hold a JSON array.")
        return data

    def fingerprint(self) -> Optional[str]:
        if not self.exists():
            return None
        return compute_file_hash(self._path)
