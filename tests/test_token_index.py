# tests/test_token_index.py

from supersearch.domain.models import Document
from supersearch.infrastructure.token_index import TokenIndex, tokenize


def _index():
    return TokenIndex([
        Document("Modern House", "open floor plan", "/house"),
        Document("Old Barn", "rustic barn renovation", "/barn"),
        Document("Barn Loft", "loft in a modern barn", "/loft"),
    ])


def test_tokenize_splits_on_any_whitespace():
    assert tokenize("  Open\tFloor\nPLAN ") == ["open", "floor", "plan"]


def test_match_returns_positions_in_snapshot_order():
    assert _index().match(["barn"]) == [1, 2]
    assert _index().match(["mod"]) == [0, 2]


def test_match_intersects_query_tokens():
    assert _index().match(["mod", "barn"]) == [2]
    assert _index().match(["mod", "rustic"]) == []


def test_repeated_query_tokens_count_once():
    assert _index().match(["barn", "barn"]) == [1, 2]


def test_empty_query_matches_nothing():
    assert _index().match([]) == []


def test_vocabulary_covers_title_and_content():
    index = _index()
    # modern house open floor plan old barn rustic renovation loft in a
    assert index.vocabulary_size == 12
