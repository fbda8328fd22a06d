# supersearch/domain/interfaces.py

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from .models import ContentItem, Document, Suggestion


class ContentSourcePort(ABC):
    """
    Port for whatever store holds the published content.
    Read-only: the indexer never writes back.
    """

    @abstractmethod
    def list_published(self, post_types: Sequence[str]) -> List[ContentItem]:
        """
        Return every published item of the given post types.
        Raises ContentSourceUnavailable when the store cannot be read.
        """
        ...


class SnapshotStorePort(ABC):

    @property
    @abstractmethod
    def path(self) -> Path: ...

    @abstractmethod
    def write(self, documents: List[Document]) -> None: ...

    @abstractmethod
    def read(self) -> list: ...

    @abstractmethod
    def exists(self) -> bool: ...

    @abstractmethod
    def fingerprint(self) -> Optional[str]:
        """SHA-256 of the persisted snapshot, or None when there is none yet."""
        ...


class SnapshotFetcherPort(ABC):

    @abstractmethod
    def fetch(self) -> list:
        """Return the decoded snapshot array. Raises SnapshotUnavailable."""
        ...


class ResultsViewPort(ABC):
    """
    The UI collaborators a search box drives: the overlay and its results list.
    """

    @abstractmethod
    def render(self, suggestions: List[Suggestion]) -> None: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def show(self) -> None: ...

    @abstractmethod
    def hide(self) -> None: ...
