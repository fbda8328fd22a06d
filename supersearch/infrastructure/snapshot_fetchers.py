# supersearch/infrastructure/snapshot_fetchers.py

import json
import os
import tempfile
import time
from pathlib import Path
from typing import Callable, Optional

import requests

from supersearch.domain.errors import SnapshotUnavailable
from supersearch.domain.interfaces import SnapshotFetcherPort
from supersearch.infrastructure.json_snapshot_store import JsonSnapshotStore


def _require_array(data, origin: str) -> list:
    if not isinstance(data, list):
        raise SnapshotUnavailable(f"Snapshot from {origin} does not hold a JSON array.")
    return data


class FileSnapshotFetcher(SnapshotFetcherPort):
    """Reads the snapshot the indexer wrote, straight from its store."""

    def __init__(self, snapshot_path: str):
        self._store = JsonSnapshotStore(snapshot_path)

    def fetch(self) -> list:
        return self._store.read()


class HttpSnapshotFetcher(SnapshotFetcherPort):
    """Fetches the snapshot the way a browser would: a plain GET of the static asset."""

    def __init__(
        self,
        url: str,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ):
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch(self) -> list:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as error:
            raise SnapshotUnavailable(f"Failed to fetch snapshot from {self.url}: {error}") from error
        except ValueError as error:
            raise SnapshotUnavailable(f"Snapshot at {self.url} is not valid JSON: {error}") from error
        return _require_array(data, self.url)


class CachedSnapshotFetcher(SnapshotFetcherPort):
    """
    Prefetch cache shared across sessions.

    The cache file holds {"fetched_at": <epoch seconds>, "data": [...]}.
    Within ttl_seconds the cached copy is served as is; after that the
    inner fetcher is asked again so content updates propagate. When the
    inner fetcher fails, an expired copy is still better than nothing.
    """

    def __init__(
        self,
        inner: SnapshotFetcherPort,
        cache_path: str,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ):
        self._inner = inner
        self._cache_path = Path(cache_path)
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    def fetch(self) -> list:
        cached = self._read_cache()
        if cached is not None:
            fetched_at, data = cached
            if self._clock() - fetched_at < self._ttl_seconds:
                return data

        try:
            data = self._inner.fetch()
        except SnapshotUnavailable as error:
            if cached is None:
                raise
            print(f"[SnapshotCache] ⚠ Refresh failed, serving expired copy: {error}")
            return cached[1]

        self._write_cache(data)
        return data

    def _read_cache(self) -> Optional[tuple]:
        try:
            entry = json.loads(self._cache_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, json.JSONDecodeError) as error:
            print(f"[SnapshotCache] Ignoring unreadable cache '{self._cache_path}': {error}")
            return None

        if not isinstance(entry, dict):
            return None
        fetched_at = entry.get("fetched_at")
        data = entry.get("data")
        if not isinstance(fetched_at, (int, float)) or not isinstance(data, list):
            return None
        return fetched_at, data

    def _write_cache(self, data: list) -> None:
        entry = json.dumps({"fetched_at": self._clock(), "data": data}, ensure_ascii=False)
        try:
            self._cache_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=str(self._cache_path.parent), suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
                tmp_file.write(entry)
            os.replace(tmp_name, self._cache_path)
        except OSError as error:
            print(f"[SnapshotCache] ⚠ Could not write cache '{self._cache_path}': {error}")
