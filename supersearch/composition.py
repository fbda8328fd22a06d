# supersearch/composition.py

from supersearch import config
from supersearch.domain.interfaces import ContentSourcePort, SnapshotFetcherPort
from supersearch.infrastructure.content_sources import (
    JsonExportContentSource,
    WordPressContentSource,
)
from supersearch.infrastructure.snapshot_fetchers import (
    CachedSnapshotFetcher,
    FileSnapshotFetcher,
    HttpSnapshotFetcher,
)


def make_content_source() -> ContentSourcePort:
    """WordPress REST API when a base URL is configured, the JSON export otherwise."""
    if config.WP_BASE_URL:
        return WordPressContentSource(config.WP_BASE_URL)
    return JsonExportContentSource(config.CONTENT_EXPORT)


def make_snapshot_fetcher() -> SnapshotFetcherPort:
    """Remote snapshots go through the TTL prefetch cache; local files are read directly."""
    if config.SNAPSHOT_URL:
        return CachedSnapshotFetcher(
            inner=HttpSnapshotFetcher(config.SNAPSHOT_URL),
            cache_path=config.CACHE_PATH,
            ttl_seconds=config.CACHE_TTL_SECONDS,
        )
    return FileSnapshotFetcher(config.SNAPSHOT_PATH)
