# supersearch/infrastructure/token_index.py

from functools import lru_cache
from typing import Dict, FrozenSet, List, Sequence

from supersearch.domain.models import Document


QUERY_CACHE_SIZE = 512


def tokenize(text: str) -> List[str]:
    """Lowercased whitespace tokens. Queries and documents go through the same path."""
    return text.lower().split()


class TokenIndex:
    """
    In-memory lookup over the documents of one snapshot.

    Every distinct token maps to the positions of the documents that hold
    it. A query token matches a document when it is a substring of any of
    that document's tokens, so "mod" finds "modern" and "ern" does too.

    Substring lookup means scanning the vocabulary once per query token.
    Typeahead repeats the same prefixes keystroke after keystroke, so those
    scans are memoized per index.
    """

    def __init__(self, documents: Sequence[Document]):
        postings: Dict[str, set] = {}
        for position, document in enumerate(documents):
            for token in tokenize(f"{document.title} {document.content}"):
                postings.setdefault(token, set()).add(position)

        self._postings: Dict[str, FrozenSet[int]] = {
            token: frozenset(positions) for token, positions in postings.items()
        }
        self._candidates = lru_cache(maxsize=QUERY_CACHE_SIZE)(self._scan_vocabulary)

    @property
    def vocabulary_size(self) -> int:
        return len(self._postings)

    def match(self, query_tokens: Sequence[str]) -> List[int]:
        """
        Positions of the documents matching every query token,
        ascending, i.e. in snapshot order.
        """
        if not query_tokens:
            return []

        # rarest-looking (longest) tokens first shrink the set fastest
        matched = None
        for query_token in sorted(set(query_tokens), key=len, reverse=True):
            candidates = self._candidates(query_token.lower())
            matched = candidates if matched is None else matched & candidates
            if not matched:
                return []

        return sorted(matched)

    def _scan_vocabulary(self, query_token: str) -> FrozenSet[int]:
        positions = set()
        for token, postings in self._postings.items():
            if query_token in token:
                positions.update(postings)
        return frozenset(positions)
