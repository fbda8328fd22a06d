# supersearch/config.py

import os


def _csv(value: str) -> tuple:
    return tuple(part.strip() for part in value.split(",") if part.strip())


# ── Indexer ──────────────────────────────────────────────────────────────────
SNAPSHOT_PATH      = os.getenv("SUPERSEARCH_SNAPSHOT_PATH", "assets/json/supersearch.json")
CONTENT_EXPORT     = os.getenv("SUPERSEARCH_CONTENT_EXPORT", "data/content.json")
WP_BASE_URL        = os.getenv("SUPERSEARCH_WP_BASE_URL", "")
DEFAULT_POST_TYPES = _csv(os.getenv("SUPERSEARCH_POST_TYPES", "post,page,ce_projects"))

# ── Suggestion engine ────────────────────────────────────────────────────────
# When set, the engine prefetches over HTTP instead of reading SNAPSHOT_PATH.
SNAPSHOT_URL       = os.getenv("SUPERSEARCH_SNAPSHOT_URL", "")
CACHE_PATH         = os.getenv("SUPERSEARCH_CACHE_PATH", "data/cache/supersearch.cache.json")
CACHE_TTL_SECONDS  = float(os.getenv("SUPERSEARCH_CACHE_TTL", "60"))
SUGGESTION_LIMIT   = int(os.getenv("SUPERSEARCH_LIMIT", "5"))
