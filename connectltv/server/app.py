"""
Directory Server

FastAPI server exposing alumni directory search over HTTP.

Endpoints:
- GET /health: Health check
- GET /search?q=&limit=: Ranked search results
- GET /profiles/{record_id}: Profile detail
- GET /profiles/{record_id}/enrichment: Enrichment (biography) text
- POST /admin/enrich: Run one enrichment batch

Pipeline:
1. Load config (.env, ~/.connectltv/config.json, environment)
2. Build the record store
3. Wire the search pipeline
4. Serve requests until shutdown, then close the store
"""

from typing import Optional
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel, Field

from ..common.config import load_config, ConnectConfig, ConfigError
from ..common.record_store import RecordStore, RetrievalError, RecordNotFound
from ..common.store_factory import build_record_store
from ..enrichment import ProfileEnricher
from ..retriever import DirectorySearch


# Global state
config: Optional[ConnectConfig] = None
store: Optional[RecordStore] = None
directory: Optional[DirectorySearch] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize components on startup"""
    global config, store, directory

    print("[Directory] Starting up...")

    load_dotenv()

    config = load_config()
    print(f"[Directory] Loaded config (backend: {config.store.backend}, table: {config.store.table})")

    store = build_record_store(config.store)
    directory = DirectorySearch.from_config(store, config.search)
    print(
        f"[Directory] Search ready (limit: {config.search.default_limit}/{config.search.max_limit}, "
        f"empty query: {config.search.on_empty_query}, ranking: {config.search.ranking_enabled})"
    )

    if await store.health_check():
        print(f"[Directory] Record store reachable ({store.name})")
    else:
        print(f"[Directory] Warning: record store not reachable ({store.name})")

    print("[Directory] Ready to serve searches")

    yield

    # Cleanup
    print("[Directory] Shutting down...")
    await store.close()
    store = None
    directory = None


app = FastAPI(
    title="ConnectLTV Directory",
    description="Search and rank the LTV alumni directory",
    version="0.1.0",
    lifespan=lifespan
)


# =============================================================================
# Request/Response Models
# =============================================================================

class EnrichRequest(BaseModel):
    """Enrichment batch request"""
    limit: Optional[int] = Field(None, ge=1, le=100)


# =============================================================================
# Helpers
# =============================================================================

def _require_directory() -> DirectorySearch:
    if not directory:
        raise HTTPException(status_code=503, detail="Search not initialized")
    return directory


def _unavailable(e: RetrievalError) -> HTTPException:
    return HTTPException(status_code=503, detail=f"Record store unavailable: {e}")


# =============================================================================
# Endpoints
# =============================================================================

@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "directory",
        "initialized": directory is not None,
        "store": store.name if store else None,
        "store_reachable": await store.health_check() if store else False,
    }


@app.get("/search")
async def search(
    q: str = Query("", description="Free-text query"),
    limit: Optional[int] = Query(None, ge=1, description="Maximum results"),
):
    """Search profiles; results are ranked and carry a relevance note"""
    search_pipeline = _require_directory()

    try:
        results = await search_pipeline.search(q, limit)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except RetrievalError as e:
        raise _unavailable(e)

    return {
        "query": q,
        "count": len(results),
        "results": [result.model_dump() for result in results],
    }


@app.get("/profiles/{record_id}")
async def get_profile(record_id: int):
    """Get a profile for the detail view"""
    search_pipeline = _require_directory()

    try:
        result = await search_pipeline.get_profile_result(record_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")
    except RetrievalError as e:
        raise _unavailable(e)

    return result.model_dump()


@app.get("/profiles/{record_id}/enrichment")
async def get_enrichment(record_id: int):
    """Get the enrichment text for a profile (null if not enriched yet)"""
    search_pipeline = _require_directory()

    try:
        text = await search_pipeline.get_enrichment_text(record_id)
    except RecordNotFound:
        raise HTTPException(status_code=404, detail="Profile not found")
    except RetrievalError as e:
        raise _unavailable(e)

    return {"id": record_id, "enrichment_text": text}


@app.post("/admin/enrich")
async def run_enrichment(request: Optional[EnrichRequest] = None):
    """Run one enrichment batch with the privileged store"""
    if not config or not store:
        raise HTTPException(status_code=503, detail="Server not initialized")

    # The memory backend has one shared row set; PostgREST writes need the service-role key
    shared = config.store.backend == "memory"
    try:
        admin_store = store if shared else build_record_store(config.store, privileged=True)
    except ConfigError as e:
        raise HTTPException(status_code=503, detail=str(e))

    enricher = ProfileEnricher(
        admin_store,
        batch_size=config.enrichment.batch_size,
        delay_seconds=config.enrichment.delay_seconds,
    )
    try:
        report = await enricher.run(request.limit if request else None)
    except RetrievalError as e:
        raise _unavailable(e)
    finally:
        if not shared:
            await admin_store.close()

    print(f"[Directory] Enrichment: {report.completed}/{report.total} ({len(report.failed)} failed)")
    return report.to_dict()


# =============================================================================
# CLI Entry Point
# =============================================================================

def run_server():
    """Run the Directory server"""
    import uvicorn

    load_dotenv()
    config = load_config()

    print(f"[Directory] Starting server on port {config.server.port}")
    uvicorn.run(
        "connectltv.server.app:app",
        host=config.server.host,
        port=config.server.port,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
