# supersearch/application/index_service.py

from typing import Iterable, List, Sequence

from supersearch.config import DEFAULT_POST_TYPES
from supersearch.domain.errors import ContentSourceUnavailable
from supersearch.domain.interfaces import ContentSourcePort, SnapshotStorePort
from supersearch.domain.models import ContentItem, Document, RebuildReport
from supersearch.infrastructure.text_normalizer import normalize_content


class IndexBuildService:
    """
    Build-time use case: turn every published item into a Document and
    replace the snapshot wholesale.

    There is no incremental update. Each run re-reads the full content set
    and rewrites the file; unchanged content produces identical bytes.
    """

    def __init__(
        self,
        content_source: ContentSourcePort,
        snapshot_store: SnapshotStorePort,
        post_types: Sequence[str] = DEFAULT_POST_TYPES,
    ):
        self._content_source = content_source
        self._snapshot_store = snapshot_store
        self._post_types = tuple(post_types)

    def build_documents(self, items: Iterable[ContentItem]) -> List[Document]:
        documents = []
        for item in items:
            try:
                content = normalize_content(item.body)
            except Exception as error:
                # One bad body must not sink the rebuild.
                print(f"[Indexer] ⚠ Could not extract '{item.title}': {error}")
                content = ""
            documents.append(Document(
                title=item.title or "",
                content=content,
                link=item.link or "",
            ))
        return documents

    def rebuild(self) -> RebuildReport:
        """
        Read the content source and rewrite the snapshot.
        On ContentSourceUnavailable the current snapshot is left untouched.
        """
        previous_fingerprint = self._snapshot_store.fingerprint()

        try:
            items = self._content_source.list_published(self._post_types)
        except ContentSourceUnavailable as error:
            print(f"[Indexer] ✗ Content source unavailable, keeping current snapshot: {error}")
            raise

        print(f"[Indexer] Normalizing {len(items)} items...")
        documents = self.build_documents(items)
        self._snapshot_store.write(documents)

        fingerprint = self._snapshot_store.fingerprint()
        report = RebuildReport(
            documents_written=len(documents),
            snapshot_path=str(self._snapshot_store.path),
            snapshot_sha256=fingerprint,
            changed=fingerprint != previous_fingerprint,
        )
        print(f"[Indexer] Snapshot rebuilt — {report.documents_written} documents, "
              f"changed: {report.changed}")
        return report
