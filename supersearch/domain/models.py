# supersearch/domain/models.py

from dataclasses import dataclass
from typing import Optional


SNAPSHOT_KEYS = ("title", "content", "link")


@dataclass
class ContentItem:
    """
    A raw published item as handed over by a content source.
    The body is still HTML and may be missing entirely.
    """
    title: str
    body: Optional[str]
    link: str
    post_type: str = "post"


@dataclass
class Document:
    """
    Represents one indexed record of the search snapshot.
    """
    title: str
    content: str
    link: str

    def to_dict(self) -> dict:
        return {"title": self.title, "content": self.content, "link": self.link}

    @classmethod
    def from_dict(cls, raw) -> Optional["Document"]:
        """Return None for entries that are not a complete {title, content, link} record."""
        if not isinstance(raw, dict):
            return None
        if not all(isinstance(raw.get(key), str) for key in SNAPSHOT_KEYS):
            return None
        return cls(title=raw["title"], content=raw["content"], link=raw["link"])

    def __repr__(self) -> str:
        preview = self.content[:60]
        return (
            f"Document(title='{self.title}', link='{self.link}', "
            f"preview='{preview}...')"
        )


@dataclass(frozen=True)
class Suggestion:
    """
    Read-only projection of a matched Document, used for rendering.
    """
    title: str
    link: str

    @classmethod
    def from_document(cls, document: Document) -> "Suggestion":
        return cls(title=document.title, link=document.link)

    def to_dict(self) -> dict:
        return {"title": self.title, "link": self.link}


@dataclass
class RebuildReport:
    documents_written: int
    snapshot_path: str
    snapshot_sha256: Optional[str]
    changed: bool
