# tests/test_index_service.py

import json
from unittest.mock import MagicMock

import pytest

from supersearch.application import index_service as index_module
from supersearch.application.index_service import IndexBuildService
from supersearch.domain.errors import ContentSourceUnavailable
from supersearch.domain.models import ContentItem
from supersearch.infrastructure.json_snapshot_store import JsonSnapshotStore


def _make_source(items):
    source = MagicMock()
    source.list_published.return_value = items
    return source


def _items():
    return [
        ContentItem("Modern House", "<p>A modern&nbsp;house</p>\n<p>design</p>", "/house", "ce_projects"),
        ContentItem("About", "<h2>Who   we are</h2>", "/about", "page"),
    ]


@pytest.fixture
def store(tmp_path) -> JsonSnapshotStore:
    return JsonSnapshotStore(str(tmp_path / "assets" / "json" / "supersearch.json"))


def test_rebuild_writes_normalized_documents(store):
    service = IndexBuildService(_make_source(_items()), store)
    report = service.rebuild()

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data == [
        {"title": "Modern House", "content": "A modern house design", "link": "/house"},
        {"title": "About", "content": "Who we are", "link": "/about"},
    ]
    assert report.documents_written == 2
    assert report.changed is True
    assert report.snapshot_sha256 == store.fingerprint()
    assert report.snapshot_path == str(store.path)


def test_rebuild_asks_for_configured_post_types(store):
    source = _make_source([])
    IndexBuildService(source, store, post_types=["post", "ce_projects"]).rebuild()
    source.list_published.assert_called_once_with(("post", "ce_projects"))


def test_rebuild_twice_is_idempotent(store):
    service = IndexBuildService(_make_source(_items()), store)
    service.rebuild()
    first = store.path.read_bytes()

    report = service.rebuild()
    assert store.path.read_bytes() == first
    assert report.changed is False


def test_unavailable_source_leaves_snapshot_untouched(store):
    IndexBuildService(_make_source(_items()), store).rebuild()
    before = store.path.read_bytes()

    source = MagicMock()
    source.list_published.side_effect = ContentSourceUnavailable("db down")

    with pytest.raises(ContentSourceUnavailable):
        IndexBuildService(source, store).rebuild()
    assert store.path.read_bytes() == before


def test_unavailable_source_does_not_create_snapshot(store):
    source = MagicMock()
    source.list_published.side_effect = ContentSourceUnavailable("db down")

    with pytest.raises(ContentSourceUnavailable):
        IndexBuildService(source, store).rebuild()
    assert not store.exists()


def test_missing_fields_become_empty_strings(store):
    service = IndexBuildService(_make_source([]), store)
    documents = service.build_documents([ContentItem(None, None, None)])
    assert documents[0].to_dict() == {"title": "", "content": "", "link": ""}


def test_single_extraction_failure_does_not_abort(store, monkeypatch):
    real_normalize = index_module.normalize_content

    def flaky_normalize(raw):
        if raw == "boom":
            raise ValueError("cannot parse")
        return real_normalize(raw)

    monkeypatch.setattr(index_module, "normalize_content", flaky_normalize)

    items = [ContentItem("Bad", "boom", "/bad"), ContentItem("Good", "<b>fine</b>", "/good")]
    IndexBuildService(_make_source(items), store).rebuild()

    data = json.loads(store.path.read_text(encoding="utf-8"))
    assert data[0] == {"title": "Bad", "content": "", "link": "/bad"}
    assert data[1]["content"] == "fine"
