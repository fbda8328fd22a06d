from typing import List, Optional

import uvicorn
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from pydantic import BaseModel

from supersearch import config
from supersearch.application.index_service import IndexBuildService
from supersearch.application.suggestion_engine import SuggestionEngine
from supersearch.composition import make_content_source, make_snapshot_fetcher
from supersearch.domain.errors import ContentSourceUnavailable, SnapshotWriteError
from supersearch.infrastructure.json_snapshot_store import JsonSnapshotStore

# ── Configuration ────────────────────────────────────────────────────────────
SNAPSHOT_ROUTE = "/assets/json/supersearch.json"
MAX_LIMIT = 50

# ── API Models ───────────────────────────────────────────────────────────────
class SuggestionSchema(BaseModel):
    title: str
    link: str

class SuggestResponse(BaseModel):
    query: str
    suggestions: List[SuggestionSchema]

class ReindexResponse(BaseModel):
    message: str
    documents_written: int
    snapshot_sha256: Optional[str]
    changed: bool
    engine_ready: bool


def create_app(
    engine: SuggestionEngine,
    index_service: IndexBuildService,
    snapshot_store: JsonSnapshotStore,
) -> FastAPI:
    app = FastAPI(
        title="Supersearch API",
        description="Site search snapshot and typeahead suggestions.",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Auto-configure engine state
    if engine.initialize():
        print("[API] Snapshot loaded. Suggestions are READY.")
    else:
        print("[API] WARNING: Snapshot not available. Run `python main.py index` first.")

    # ── Endpoints ────────────────────────────────────────────────────────────
    @app.get("/")
    def read_root():
        return {
            "message": "Supersearch API is running.",
            "status": engine.state,
            "documents_indexed": engine.document_count(),
        }

    @app.get("/status")
    def get_status():
        """Readiness of the suggestion engine and fingerprint of the snapshot on disk."""
        return {
            "engine_state": engine.state,
            "documents_indexed": engine.document_count(),
            "skipped_entries": engine.skipped_entries,
            "limit": engine.limit,
            "snapshot_path": str(snapshot_store.path),
            "snapshot_sha256": snapshot_store.fingerprint(),
        }

    @app.get(SNAPSHOT_ROUTE)
    def get_snapshot():
        """Serve the snapshot as the static asset the browser prefetches."""
        if not snapshot_store.exists():
            raise HTTPException(status_code=404, detail="Snapshot not built yet")
        return FileResponse(path=snapshot_store.path, media_type="application/json")

    @app.get("/suggest", response_model=SuggestResponse)
    def suggest(
        q: str = "",
        limit: Optional[int] = Query(default=None, ge=1, le=MAX_LIMIT),
    ):
        # An engine that failed to load answers with nothing, never a 5xx.
        engine.initialize()
        suggestions = engine.query(q, limit=limit)
        return SuggestResponse(
            query=q,
            suggestions=[SuggestionSchema(**s.to_dict()) for s in suggestions],
        )

    @app.post("/reindex", response_model=ReindexResponse)
    def trigger_reindex():
        """Rebuild the snapshot from the content source and reload the engine."""
        try:
            report = index_service.rebuild()
        except ContentSourceUnavailable as e:
            raise HTTPException(status_code=503, detail=f"Content source unavailable: {e}")
        except SnapshotWriteError as e:
            raise HTTPException(status_code=500, detail=f"Snapshot write failed: {e}")

        engine.reload()
        return ReindexResponse(
            message="Re-indexing complete.",
            documents_written=report.documents_written,
            snapshot_sha256=report.snapshot_sha256,
            changed=report.changed,
            engine_ready=engine.is_ready(),
        )

    return app


# Initialize infrastructure (global scope for singleton behavior)
snapshot_store = JsonSnapshotStore(config.SNAPSHOT_PATH)
app = create_app(
    engine=SuggestionEngine(make_snapshot_fetcher(), limit=config.SUGGESTION_LIMIT),
    index_service=IndexBuildService(
        content_source=make_content_source(),
        snapshot_store=snapshot_store,
        post_types=config.DEFAULT_POST_TYPES,
    ),
    snapshot_store=snapshot_store,
)

if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
