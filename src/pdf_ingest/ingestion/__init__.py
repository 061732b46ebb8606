"""
Ingestion — turn one stored PDF into namespaced vectors.

Download, read pages, chunk, embed, build content-addressed records,
and upsert them into the vector index.
"""

from pdf_ingest.ingestion.models import DocumentPage, RecordMetadata, TextChunk, VectorRecord

__all__ = [
    "DocumentPage",
    "RecordMetadata",
    "TextChunk",
    "VectorRecord",
]
