"""
Content sources for the indexer.

Both sources implement ContentSourcePort and hand back ContentItem objects
with the body still in HTML. Normalization is the indexer's job.
"""

import html
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import requests

from supersearch.domain.errors import ContentSourceUnavailable
from supersearch.domain.interfaces import ContentSourcePort
from supersearch.domain.models import ContentItem


# Core types are exposed under plural routes; custom types use their own name.
WP_REST_ROUTES: Dict[str, str] = {
    "post": "posts",
    "page": "pages",
}


def _text(value) -> str:
    return value if isinstance(value, str) else ""


def _rendered(value) -> Optional[str]:
    """Accept a REST {"rendered": ...} field or a plain string; anything else is missing."""
    if isinstance(value, dict):
        value = value.get("rendered")
    return value if isinstance(value, str) else None


class WordPressContentSource(ContentSourcePort):
    """
    Reads published content through the WordPress REST API.

    Each post type is paged through /wp-json/wp/v2/<route> until the
    X-WP-TotalPages header says there is nothing left. Any transport or
    decoding problem aborts the whole listing so the caller never indexes
    a partial site.
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        per_page: int = 100,
        timeout: int = 10,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.per_page = per_page
        self.timeout = timeout

    def list_published(self, post_types: Sequence[str]) -> List[ContentItem]:
        items: List[ContentItem] = []
        for post_type in post_types:
            fetched = self._list_post_type(post_type)
            print(f"[WordPressSource] Fetched {len(fetched)} items of type '{post_type}'.")
            items.extend(fetched)
        return items

    def _list_post_type(self, post_type: str) -> List[ContentItem]:
        route = WP_REST_ROUTES.get(post_type, post_type)
        url = f"{self.base_url}/wp-json/wp/v2/{route}"

        items: List[ContentItem] = []
        page = 1
        while True:
            try:
                response = self.session.get(
                    url,
                    params={"per_page": self.per_page, "page": page},
                    timeout=self.timeout,
                )
                response.raise_for_status()
                records = response.json()
            except requests.RequestException as error:
                raise ContentSourceUnavailable(
                    f"Failed to fetch '{post_type}' page {page} from {url}: {error}"
                ) from error
            except ValueError as error:
                raise ContentSourceUnavailable(
                    f"Response for '{post_type}' page {page} is not JSON: {error}"
                ) from error

            if not isinstance(records, list):
                raise ContentSourceUnavailable(
                    f"Unexpected payload for '{post_type}' page {page}: expected a list."
                )

            items.extend(self._to_item(record, post_type) for record in records)

            raw_total = response.headers.get("X-WP-TotalPages") or "1"
            try:
                total_pages = int(raw_total)
            except ValueError as error:
                raise ContentSourceUnavailable(
                    f"Bad X-WP-TotalPages header for '{post_type}': {raw_total!r}"
                ) from error
            if page >= total_pages or not records:
                break
            page += 1

        return items

    @staticmethod
    def _to_item(record, post_type: str) -> ContentItem:
        if not isinstance(record, dict):
            record = {}
        return ContentItem(
            title=html.unescape(_rendered(record.get("title")) or ""),
            body=_rendered(record.get("content")),
            link=_text(record.get("link")),
            post_type=post_type,
        )


class JsonExportContentSource(ContentSourcePort):
    """
    Reads a JSON export of the site: an array of
    {title, body | content, link, type} objects.
    """

    def __init__(self, export_path: str):
        self._path = Path(export_path)

    def list_published(self, post_types: Sequence[str]) -> List[ContentItem]:
        try:
            records = json.loads(self._path.read_text(encoding="utf-8"))
        except OSError as error:
            raise ContentSourceUnavailable(f"Cannot read export '{self._path}': {error}") from error
        except json.JSONDecodeError as error:
            raise ContentSourceUnavailable(f"Export '{self._path}' is not valid JSON: {error}") from error

        if not isinstance(records, list):
            raise ContentSourceUnavailable(f"Export '{self._path}' does not hold a JSON array.")

        wanted = set(post_types)
        items = []
        for record in records:
            if not isinstance(record, dict):
                continue
            post_type = record.get("type", "post")
            if not isinstance(post_type, str) or post_type not in wanted:
                continue
            items.append(ContentItem(
                title=_text(record.get("title")),
                body=_rendered(record.get("body", record.get("content"))),
                link=_text(record.get("link")),
                post_type=post_type,
            ))

        print(f"[ExportSource] Loaded {len(items)} items from '{self._path.name}'.")
        return items
