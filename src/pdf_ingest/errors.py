"""Error taxonomy for the ingestion run.

Every error propagates to the caller of the pipeline; nothing here is
retried locally.
"""

from __future__ import annotations


class IngestionError(Exception):
    """Base class for every failure of an ingestion run."""


class ConfigurationError(IngestionError):
    """Required configuration is missing or invalid."""


class DownloadError(IngestionError):
    """Storage retrieval did not yield a usable local file."""

    def __init__(self, message: str, key: str | None = None) -> None:
        self.key = key
        super().__init__(message)


class EmbeddingError(IngestionError):
    """A single embedding call failed, which fails the whole run."""


class UpsertError(IngestionError):
    """A batch upsert into the vector index failed."""

    def __init__(self, message: str, batch: int | None = None) -> None:
        self.batch = batch
        super().__init__(message)
