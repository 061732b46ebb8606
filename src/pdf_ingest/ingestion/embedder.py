"""Embedding adapter — one external call per chunk."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_openai import OpenAIEmbeddings

from pdf_ingest.config import settings as default_settings
from pdf_ingest.errors import EmbeddingError

if TYPE_CHECKING:
    from langchain_core.embeddings import Embeddings

    from pdf_ingest.config import Settings

logger = logging.getLogger(__name__)


def get_embedding_function(settings: Settings | None = None) -> OpenAIEmbeddings:
    """Return the configured OpenAI embedding client.

    Client-side retries are disabled: a failed call fails the run.
    """
    settings = settings or default_settings
    kwargs: dict = {"model": settings.embedding_model, "max_retries": 0}
    if settings.openai_api_key:
        kwargs["api_key"] = settings.openai_api_key
    return OpenAIEmbeddings(**kwargs)


async def embed_text(embedder: Embeddings, text: str) -> list[float]:
    """Embed a single chunk of text.

    Raises
    ------
    EmbeddingError
        When the embedding call fails for any reason.
    """
    try:
        return await embedder.aembed_query(text)
    except Exception as exc:
        logger.exception("Error embedding chunk (%d chars)", len(text))
        raise EmbeddingError(f"Embedding failed: {exc}") from exc
