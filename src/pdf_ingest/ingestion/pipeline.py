"""Ingestion pipeline — S3 PDF → chunks → embeddings → Pinecone.

Stages run strictly in order::

    fetch → parse → chunk (per page) → embed (per chunk) → build → upsert

Per-page chunking and per-chunk embedding are dispatched concurrently
and joined before the next stage starts. The first failure in any stage
aborts the run; nothing is upserted unless every embedding succeeded.

Run from the command line
-------------------------
    pdf-ingest "uploads/1700000000000report.pdf"
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from itertools import chain
from typing import TYPE_CHECKING, Protocol

from pdf_ingest.config import Settings
from pdf_ingest.config import settings as default_settings
from pdf_ingest.ingestion.chunker import chunk_page
from pdf_ingest.ingestion.embedder import embed_text, get_embedding_function
from pdf_ingest.ingestion.loader import load_pdf_pages
from pdf_ingest.ingestion.models import DocumentPage, TextChunk
from pdf_ingest.ingestion.namespace import to_ascii
from pdf_ingest.ingestion.records import build_vector_record

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from pdf_ingest.vectorstore.base import VectorIndexBase

logger = logging.getLogger(__name__)


class Downloader(Protocol):
    """Fetches a storage key to a local path and removes it when asked."""

    async def download(self, key: str) -> str: ...

    def cleanup(self, local_path: str) -> None: ...


class IngestionPipeline:
    """Load one stored PDF into the vector index.

    Parameters
    ----------
    downloader:
        Storage collaborator, e.g. :class:`~pdf_ingest.storage.S3Downloader`.
    index:
        Vector index the records are written to.
    embedder:
        LangChain embeddings client; one ``aembed_query`` per chunk.
    settings:
        Chunking, truncation, batching, and concurrency knobs.
    reader:
        PDF reader, ``path -> list[DocumentPage]``.
    """

    def __init__(
        self,
        downloader: Downloader,
        index: VectorIndexBase,
        embedder: Embeddings,
        *,
        settings: Settings | None = None,
        reader: Callable[[str], list[DocumentPage]] = load_pdf_pages,
    ) -> None:
        self.downloader = downloader
        self.index = index
        self.embedder = embedder
        self.settings = settings or default_settings
        self.reader = reader

    async def run(self, file_key: str) -> list[TextChunk]:
        """Ingest the document stored at *file_key*.

        Returns
        -------
        list[TextChunk]
            The first page's chunks, as a preview for the caller.
        """
        logger.info("Downloading %s into the local file system", file_key)
        local_path = await self.downloader.download(file_key)
        try:
            pages = await asyncio.to_thread(self.reader, local_path)
        finally:
            self.downloader.cleanup(local_path)
        logger.info("Read %d pages from %s", len(pages), file_key)

        per_page = await asyncio.gather(*(self._chunk(page) for page in pages))
        chunks = list(chain.from_iterable(per_page))
        logger.info("Split %s into %d chunks", file_key, len(chunks))

        embeddings = await _bounded_gather(
            [embed_text(self.embedder, chunk.text) for chunk in chunks],
            self.settings.embed_max_concurrency,
        )
        records = [build_vector_record(chunk, emb) for chunk, emb in zip(chunks, embeddings)]

        namespace = to_ascii(file_key)
        if records:
            logger.info("Inserting vectors into namespace %s", namespace)
            await self.index.upsert(
                records,
                namespace=namespace,
                batch_size=self.settings.upsert_batch_size,
            )
        else:
            logger.warning("No text extracted from %s; nothing to upsert", file_key)

        return per_page[0] if per_page else []

    async def _chunk(self, page: DocumentPage) -> list[TextChunk]:
        return await asyncio.to_thread(
            chunk_page,
            page,
            chunk_size=self.settings.chunk_size,
            chunk_overlap=self.settings.chunk_overlap,
            max_metadata_bytes=self.settings.metadata_text_max_bytes,
        )


async def _bounded_gather(coros: list[Awaitable[list[float]]], limit: int) -> list[list[float]]:
    """Gather *coros* in order with at most *limit* in flight."""
    semaphore = asyncio.Semaphore(limit)

    async def _run(coro: Awaitable[list[float]]) -> list[float]:
        async with semaphore:
            return await coro

    return list(await asyncio.gather(*(_run(c) for c in coros)))


def build_pipeline(settings: Settings | None = None) -> IngestionPipeline:
    """Wire the production collaborators together (S3, OpenAI, Pinecone)."""
    from pdf_ingest.storage.s3 import S3Downloader
    from pdf_ingest.vectorstore.pinecone_store import PineconeVectorIndex, create_pinecone_client

    settings = settings or default_settings
    client = create_pinecone_client(settings)
    return IngestionPipeline(
        downloader=S3Downloader(settings.s3_bucket, settings.s3_region),
        index=PineconeVectorIndex(client, settings.pinecone_index),
        embedder=get_embedding_function(settings),
        settings=settings,
    )


def ingest_file_key(file_key: str, pipeline: IngestionPipeline | None = None) -> list[TextChunk]:
    """Synchronous entry point around :meth:`IngestionPipeline.run`."""
    pipeline = pipeline or build_pipeline()
    return asyncio.run(pipeline.run(file_key))


def main(argv: list[str] | None = None) -> None:
    import argparse

    from pdf_ingest.config import configure_logging

    parser = argparse.ArgumentParser(description="Load a PDF from S3 into Pinecone")
    parser.add_argument("file_key", help="S3 object key of the PDF")
    args = parser.parse_args(argv)

    configure_logging()
    preview = ingest_file_key(args.file_key)
    print(f"Ingested {args.file_key} -> namespace {to_ascii(args.file_key)} ({len(preview)} chunks on page 1)")


if __name__ == "__main__":
    main()
