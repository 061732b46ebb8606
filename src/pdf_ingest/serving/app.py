"""FastAPI application exposing the ingestion pipeline as a REST API."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from pdf_ingest import __version__
from pdf_ingest.errors import DownloadError, IngestionError
from pdf_ingest.ingestion.models import TextChunk
from pdf_ingest.ingestion.namespace import to_ascii
from pdf_ingest.ingestion.pipeline import IngestionPipeline, build_pipeline

logger = logging.getLogger(__name__)

app = FastAPI(
    title="PDF Ingest API",
    version=__version__,
    description="Loads PDFs stored in S3 into a namespaced Pinecone index.",
)


# ── Request / Response schemas ────────────────────────────────────────
class IngestRequest(BaseModel):
    """Storage key of an uploaded PDF."""

    file_key: str


class IngestResponse(BaseModel):
    """Where the document landed, plus a preview of its first page."""

    file_key: str
    namespace: str
    chunks: list[TextChunk] = []


# ── Dependencies ──────────────────────────────────────────────────────
@lru_cache(maxsize=1)
def get_pipeline() -> IngestionPipeline:
    """Build the pipeline (and its Pinecone client) once per process."""
    return build_pipeline()


# ── Routes ────────────────────────────────────────────────────────────
@app.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok"}


@app.get("/ready")
async def ready(pipeline: IngestionPipeline = Depends(get_pipeline)) -> dict[str, str]:
    """Readiness check: the vector index must answer."""
    if not await asyncio.to_thread(pipeline.index.health_check):
        raise HTTPException(status_code=503, detail=f"Vector index {pipeline.index.index_name!r} unavailable")
    return {"status": "ready"}


@app.post("/ingest", response_model=IngestResponse)
async def ingest(
    request: IngestRequest,
    pipeline: IngestionPipeline = Depends(get_pipeline),
) -> IngestResponse:
    """Download, chunk, embed, and upsert one PDF."""
    try:
        namespace = to_ascii(request.file_key)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    try:
        preview = await pipeline.run(request.file_key)
    except DownloadError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except IngestionError as exc:
        logger.error("Ingestion of %s failed: %s", request.file_key, exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc

    return IngestResponse(file_key=request.file_key, namespace=namespace, chunks=preview)


if __name__ == "__main__":
    import uvicorn

    from pdf_ingest.config import configure_logging

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8080)
