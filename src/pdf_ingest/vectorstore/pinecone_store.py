"""Pinecone implementation of the vector-index abstraction."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from pinecone import Pinecone

from pdf_ingest.config import Settings
from pdf_ingest.errors import ConfigurationError, UpsertError
from pdf_ingest.ingestion.models import VectorRecord
from pdf_ingest.vectorstore.base import VectorIndexBase, iter_batches

logger = logging.getLogger(__name__)


def create_pinecone_client(settings: Settings) -> Pinecone:
    """Build the Pinecone client once at process start.

    Raises
    ------
    ConfigurationError
        When the API key or environment is not configured.
    """
    missing = [
        name
        for name, value in (
            ("PINECONE_API_KEY", settings.pinecone_api_key),
            ("PINECONE_ENVIRONMENT", settings.pinecone_environment),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

    logger.info("Initialising Pinecone client (environment=%s)", settings.pinecone_environment)
    return Pinecone(api_key=settings.pinecone_api_key)


class PineconeVectorIndex(VectorIndexBase):
    """Pinecone-backed vector index.

    Parameters
    ----------
    client:
        Shared client from :func:`create_pinecone_client`.
    index_name:
        Name of the Pinecone index.
    """

    def __init__(self, client: Pinecone, index_name: str) -> None:
        super().__init__(index_name)
        self._client = client
        self._index: Any = client.Index(index_name)

    async def upsert(
        self,
        records: Sequence[VectorRecord],
        *,
        namespace: str,
        batch_size: int = 10,
    ) -> int:
        batches = iter_batches(records, batch_size)
        logger.info(
            "Inserting %d vectors into %s/%s (%d batches)",
            len(records),
            self.index_name,
            namespace,
            len(batches),
        )
        for number, batch in enumerate(batches, 1):
            vectors = [record.to_upsert_dict() for record in batch]
            try:
                await asyncio.to_thread(self._index.upsert, vectors=vectors, namespace=namespace)
            except Exception as exc:
                raise UpsertError(
                    f"Upsert of batch {number}/{len(batches)} into namespace {namespace!r} failed: {exc}",
                    batch=number,
                ) from exc
            logger.debug("  upserted batch %d/%d", number, len(batches))
        return len(records)

    def health_check(self) -> bool:
        try:
            self._index.describe_index_stats()
            return True
        except Exception:
            logger.warning("Pinecone health-check failed", exc_info=True)
            return False
