"""Vector record construction."""

from __future__ import annotations

import hashlib

from pdf_ingest.ingestion.models import RecordMetadata, TextChunk, VectorRecord


def content_id(text: str) -> str:
    """MD5 hex digest of *text*; identical content always maps to the same id."""
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def build_vector_record(chunk: TextChunk, embedding: list[float]) -> VectorRecord:
    """Combine a chunk and its embedding into an upsert record."""
    return VectorRecord(
        id=content_id(chunk.text),
        values=list(embedding),
        metadata=RecordMetadata(text=chunk.page_text, page_number=chunk.page_number),
    )
