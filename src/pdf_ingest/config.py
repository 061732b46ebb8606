"""Shared configuration loaded from environment / .env file."""

from __future__ import annotations

import logging

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, populated from env vars or .env file."""

    # Vector index
    pinecone_api_key: str = Field(default="", description="Pinecone API key (required)")
    pinecone_environment: str = Field(default="", description="Pinecone environment identifier (required)")
    pinecone_index: str = "chatpdf-yt"

    # Embedding
    openai_api_key: str = ""
    embedding_model: str = "text-embedding-ada-002"
    embed_max_concurrency: int = Field(default=16, ge=1)

    # Object storage
    s3_bucket: str = ""
    s3_region: str = "us-east-1"

    # Chunking
    chunk_size: int = Field(default=1000, gt=0)
    chunk_overlap: int = Field(default=200, ge=0)
    metadata_text_max_bytes: int = Field(default=36000, ge=0)

    # Upsert
    upsert_batch_size: int = Field(default=10, ge=1)

    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler. Call from entry points only."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Singleton — import `settings` wherever needed.
settings = Settings()
