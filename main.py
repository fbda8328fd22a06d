# main.py

import sys
import webbrowser

from supersearch import config
from supersearch.application.index_service import IndexBuildService
from supersearch.application.suggestion_engine import SuggestionEngine
from supersearch.composition import make_content_source, make_snapshot_fetcher
from supersearch.domain.errors import ContentSourceUnavailable, SnapshotWriteError
from supersearch.infrastructure.json_snapshot_store import JsonSnapshotStore
from supersearch.interface.cli import (
    RichResultsView,
    ask_continue,
    display_engine_status,
    display_error,
    display_navigation,
    display_rebuild_report,
    display_welcome_banner,
    prompt_for_query,
    prompt_for_selection,
)
from supersearch.interface.search_box import SearchBox


USAGE = "usage: python main.py [index | search] [--open]"


def main(argv=None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    command = args[0] if args else "search"

    if command == "index":
        return run_index()
    if command == "search":
        return run_search(open_links="--open" in args)

    display_error(f"Unknown command '{command}'.\n{USAGE}")
    return 2


def run_index() -> int:
    """Rebuild the snapshot. A failed rebuild leaves the previous snapshot in place."""
    service = IndexBuildService(
        content_source=make_content_source(),
        snapshot_store=JsonSnapshotStore(config.SNAPSHOT_PATH),
        post_types=config.DEFAULT_POST_TYPES,
    )
    try:
        report = service.rebuild()
    except (ContentSourceUnavailable, SnapshotWriteError) as error:
        display_error(str(error))
        return 1

    display_rebuild_report(report)
    return 0


def run_search(open_links: bool = False) -> int:
    display_welcome_banner()

    engine = SuggestionEngine(make_snapshot_fetcher(), limit=config.SUGGESTION_LIMIT)
    view = RichResultsView()

    def navigate(link: str) -> None:
        display_navigation(link)
        if open_links:
            webbrowser.open(link)

    search_box = SearchBox(engine, view, navigate)
    search_box.open()
    display_engine_status(engine.document_count(), engine.is_ready())

    while True:
        query = prompt_for_query()
        view.highlight_terms = query.split()
        suggestions = search_box.on_input(query)

        choice = prompt_for_selection(len(suggestions))
        if choice is not None:
            search_box.select(choice)

        if not ask_continue():
            break

    search_box.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
