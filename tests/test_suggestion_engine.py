# tests/test_suggestion_engine.py

from unittest.mock import MagicMock

import pytest

from supersearch.application.suggestion_engine import (
    STATE_PENDING,
    STATE_READY,
    STATE_UNAVAILABLE,
    SuggestionEngine,
)
from supersearch.domain.errors import SnapshotUnavailable
from supersearch.domain.models import Suggestion


SNAPSHOT = [
    {"title": "Modern House", "content": "a modern house design with open floor plan", "link": "/house"},
    {"title": "Old Barn", "content": "a rustic barn renovation", "link": "/barn"},
]


def _make_fetcher(data):
    fetcher = MagicMock()
    fetcher.fetch.return_value = data
    return fetcher


def _ready_engine(data=SNAPSHOT, **kwargs) -> SuggestionEngine:
    engine = SuggestionEngine(_make_fetcher(data), **kwargs)
    assert engine.initialize() is True
    return engine


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_scenario_queries():
    engine = _ready_engine()

    assert engine.query("mod") == [Suggestion("Modern House", "/house")]
    assert engine.query("barn renovation") == [Suggestion("Old Barn", "/barn")]
    assert engine.query("xyz") == []


def test_matching_is_case_insensitive_substring():
    engine = _ready_engine()
    assert engine.query("MOD") == [Suggestion("Modern House", "/house")]
    assert engine.query("ovat") == [Suggestion("Old Barn", "/barn")]


def test_every_query_token_must_match():
    engine = _ready_engine()
    assert engine.query("modern barn") == []


def test_title_tokens_are_searchable():
    engine = _ready_engine()
    assert engine.query("old") == [Suggestion("Old Barn", "/barn")]


def test_results_keep_snapshot_order():
    engine = _ready_engine()
    assert [s.link for s in engine.query("a")] == ["/house", "/barn"]


def test_empty_and_blank_queries_return_nothing():
    engine = _ready_engine()
    assert engine.query("") == []
    assert engine.query("   \t ") == []


def test_result_count_is_capped_at_limit():
    data = [
        {"title": f"House {i}", "content": "house", "link": f"/h{i}"}
        for i in range(8)
    ]
    engine = _ready_engine(data)

    results = engine.query("hou")
    assert len(results) == 5
    assert [s.link for s in results] == [f"/h{i}" for i in range(5)]
    assert len(engine.query("hou", limit=2)) == 2
    assert engine.query("hou", limit=0) == []


def test_configured_limit():
    data = [{"title": f"T{i}", "content": "same", "link": f"/{i}"} for i in range(4)]
    engine = _ready_engine(data, limit=3)
    assert len(engine.query("same")) == 3


def test_every_result_satisfies_the_match_rule():
    engine = _ready_engine()
    for query in ["a", "mod plan", "re", "n o", "barn"]:
        for suggestion in engine.query(query):
            document = next(d for d in SNAPSHOT if d["link"] == suggestion.link)
            tokens = f"{document['title']} {document['content']}".lower().split()
            for query_token in query.lower().split():
                assert any(query_token in token for token in tokens)


def test_query_before_initialize_returns_empty():
    engine = SuggestionEngine(_make_fetcher(SNAPSHOT))
    assert engine.state == STATE_PENDING
    assert engine.query("mod") == []


def test_failed_load_degrades_to_empty_results():
    fetcher = MagicMock()
    fetcher.fetch.side_effect = SnapshotUnavailable("network error")
    engine = SuggestionEngine(fetcher)

    assert engine.initialize() is False
    assert engine.state == STATE_UNAVAILABLE
    assert engine.query("mod") == []


def test_retries_wait_for_backoff():
    clock = FakeClock()
    fetcher = MagicMock()
    fetcher.fetch.side_effect = SnapshotUnavailable("network error")
    engine = SuggestionEngine(fetcher, retry_backoff_seconds=2.0, max_backoff_seconds=5.0, clock=clock)

    engine.initialize()
    engine.initialize()
    assert fetcher.fetch.call_count == 1

    clock.now += 2.0
    engine.initialize()
    assert fetcher.fetch.call_count == 2

    # second failure doubles the wait
    clock.now += 2.0
    engine.initialize()
    assert fetcher.fetch.call_count == 2
    clock.now += 2.0
    engine.initialize()
    assert fetcher.fetch.call_count == 3

    # capped at max_backoff_seconds
    clock.now += 5.0
    engine.initialize()
    assert fetcher.fetch.call_count == 4


def test_recovers_after_backoff():
    clock = FakeClock()
    fetcher = MagicMock()
    fetcher.fetch.side_effect = [SnapshotUnavailable("offline"), SNAPSHOT]
    engine = SuggestionEngine(fetcher, clock=clock)

    assert engine.initialize() is False
    clock.now += 10.0
    assert engine.initialize() is True
    assert engine.state == STATE_READY
    assert engine.query("barn") == [Suggestion("Old Barn", "/barn")]


def test_snapshot_is_loaded_once():
    fetcher = _make_fetcher(SNAPSHOT)
    engine = SuggestionEngine(fetcher)
    engine.initialize()
    engine.initialize()
    engine.query("mod")
    assert fetcher.fetch.call_count == 1


def test_failed_reload_keeps_serving_loaded_snapshot():
    fetcher = MagicMock()
    fetcher.fetch.side_effect = [SNAPSHOT, SnapshotUnavailable("gone")]
    engine = SuggestionEngine(fetcher)

    engine.initialize()
    assert engine.reload() is False
    assert engine.state == STATE_READY
    assert engine.query("mod") == [Suggestion("Modern House", "/house")]


def test_malformed_entries_are_skipped():
    data = [
        {"title": "No content"},
        "not an object",
        {"title": "Broken", "content": None, "link": "/broken"},
        {"title": "Kept", "content": "kept entry", "link": "/kept"},
    ]
    engine = _ready_engine(data)

    assert engine.document_count() == 1
    assert engine.skipped_entries == 3
    assert engine.query("kept") == [Suggestion("Kept", "/kept")]


def test_empty_title_and_link_do_not_break_queries():
    engine = _ready_engine([{"title": "", "content": "orphan text", "link": ""}])
    assert engine.query("orph") == [Suggestion("", "")]


@pytest.mark.parametrize("query", [None, 42, "(", "*", "\\", "[a-z]+"])
def test_odd_queries_never_raise(query):
    engine = _ready_engine()
    assert isinstance(engine.query(query), list)
