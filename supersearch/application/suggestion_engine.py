# supersearch/application/suggestion_engine.py

import threading
import time
from typing import Callable, List, Optional

from supersearch.config import SUGGESTION_LIMIT
from supersearch.domain.errors import SnapshotUnavailable
from supersearch.domain.interfaces import SnapshotFetcherPort
from supersearch.domain.models import Document, Suggestion
from supersearch.infrastructure.token_index import TokenIndex, tokenize


STATE_PENDING     = "pending"
STATE_READY       = "ready"
STATE_UNAVAILABLE = "unavailable"


class _LoadedSnapshot:
    """Immutable pair swapped in as a whole once a load succeeds."""

    __slots__ = ("documents", "index")

    def __init__(self, documents: List[Document]):
        self.documents = tuple(documents)
        self.index = TokenIndex(self.documents)


class SuggestionEngine:
    """
    Core use case: answer a partial query with the best-matching documents.

    Lifecycle:
    - pending     → nothing loaded yet; every query returns []
    - ready       → snapshot in memory; queries are synchronous lookups
    - unavailable → last load failed; queries return [] and the next load
                    attempt waits out an exponential backoff

    The snapshot is loaded once and never mutated afterwards, so any number
    of search boxes or request threads can share one engine.
    """

    def __init__(
        self,
        fetcher: SnapshotFetcherPort,
        limit: int = SUGGESTION_LIMIT,
        retry_backoff_seconds: float = 2.0,
        max_backoff_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._fetcher = fetcher
        self._limit = limit
        self._base_backoff = retry_backoff_seconds
        self._max_backoff = max_backoff_seconds
        self._clock = clock

        self._lock = threading.Lock()
        self._snapshot: Optional[_LoadedSnapshot] = None
        self._state = STATE_PENDING
        self._failures = 0
        self._next_attempt_at = 0.0
        self._skipped_entries = 0

    # ─── Lifecycle ───────────────────────────────────────────────────────────

    @property
    def state(self) -> str:
        return self._state

    @property
    def limit(self) -> int:
        return self._limit

    def is_ready(self) -> bool:
        return self._state == STATE_READY

    def document_count(self) -> int:
        snapshot = self._snapshot
        return len(snapshot.documents) if snapshot else 0

    @property
    def skipped_entries(self) -> int:
        return self._skipped_entries

    def initialize(self) -> bool:
        """
        Load the snapshot if it is not loaded yet.
        Returns True when the engine is ready afterwards.
        """
        if self._state == STATE_READY:
            return True
        if self._state == STATE_UNAVAILABLE and self._clock() < self._next_attempt_at:
            return False
        return self._load()

    def reload(self) -> bool:
        """Force a fresh load, e.g. after the indexer rewrote the snapshot."""
        return self._load()

    def _load(self) -> bool:
        try:
            raw_entries = self._fetcher.fetch()
        except SnapshotUnavailable as error:
            self._mark_unavailable(error)
            return False

        documents = []
        skipped = 0
        for raw in raw_entries:
            document = Document.from_dict(raw)
            if document is None:
                skipped += 1
                continue
            documents.append(document)

        loaded = _LoadedSnapshot(documents)
        with self._lock:
            self._snapshot = loaded
            self._state = STATE_READY
            self._failures = 0
            self._next_attempt_at = 0.0
            self._skipped_entries = skipped

        if skipped:
            print(f"[SuggestionEngine] ⚠ Skipped {skipped} malformed snapshot entries.")
        print(f"[SuggestionEngine] Loaded {len(documents)} documents "
              f"({loaded.index.vocabulary_size} distinct tokens).")
        return True

    def _mark_unavailable(self, error: Exception) -> None:
        with self._lock:
            self._failures += 1
            delay = min(self._base_backoff * (2 ** (self._failures - 1)), self._max_backoff)
            self._next_attempt_at = self._clock() + delay
            # a snapshot that loaded earlier keeps serving
            if self._snapshot is None:
                self._state = STATE_UNAVAILABLE
        print(f"[SuggestionEngine] ✗ Snapshot unavailable, next attempt in {delay:.1f}s: {error}")

    # ─── Queries ─────────────────────────────────────────────────────────────

    def query(self, text: str, limit: Optional[int] = None) -> List[Suggestion]:
        snapshot = self._snapshot
        if snapshot is None or not isinstance(text, str):
            return []

        query_tokens = tokenize(text)
        if not query_tokens:
            return []

        limit = self._limit if limit is None else limit
        if limit <= 0:
            return []

        positions = snapshot.index.match(query_tokens)[:limit]
        return [Suggestion.from_document(snapshot.documents[p]) for p in positions]
