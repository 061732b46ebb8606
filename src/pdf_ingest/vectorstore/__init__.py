"""
Vector store — write access to the vector index.

Public surface
--------------
- :class:`VectorIndexBase` — abstract backend (subclass for other databases).
- :class:`PineconeVectorIndex` — default Pinecone backend.
- :func:`create_pinecone_client` — build the process-wide Pinecone client.
"""

from pdf_ingest.vectorstore.base import VectorIndexBase

__all__ = [
    "PineconeVectorIndex",
    "VectorIndexBase",
    "create_pinecone_client",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import the Pinecone backend to avoid pulling in the SDK at import time."""
    if name in ("PineconeVectorIndex", "create_pinecone_client"):
        from pdf_ingest.vectorstore import pinecone_store

        return getattr(pinecone_store, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
