"""Shared pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence

import pytest
from langchain_core.embeddings import Embeddings

from pdf_ingest.config import Settings
from pdf_ingest.ingestion.models import VectorRecord
from pdf_ingest.vectorstore.base import VectorIndexBase, iter_batches


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes for the external collaborators ──────────────────────────────


class FakeEmbeddings(Embeddings):
    """Deterministic 3-dim embeddings; optionally fails on the n-th call."""

    def __init__(self, fail_on_call: int | None = None) -> None:
        self.calls: list[str] = []
        self.fail_on_call = fail_on_call

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        return [self.embed_query(t) for t in texts]

    def embed_query(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise RuntimeError("embedding service unavailable")
        return [float(len(text)), 0.5, -0.5]

    async def aembed_query(self, text: str) -> list[float]:
        return self.embed_query(text)


class FakeVectorIndex(VectorIndexBase):
    """In-memory index recording every upsert batch."""

    def __init__(self) -> None:
        super().__init__("test-index")
        self.batches: list[tuple[str, list[VectorRecord]]] = []
        self.healthy = True

    async def upsert(
        self,
        records: Sequence[VectorRecord],
        *,
        namespace: str,
        batch_size: int = 10,
    ) -> int:
        for batch in iter_batches(records, batch_size):
            self.batches.append((namespace, list(batch)))
        return len(records)

    def health_check(self) -> bool:
        return self.healthy

    @property
    def records(self) -> list[VectorRecord]:
        return [r for _, batch in self.batches for r in batch]


class FakeDownloader:
    """Returns a fixed local path, or raises the configured error."""

    def __init__(self, path: str = "/tmp/doc.pdf", error: Exception | None = None) -> None:
        self.path = path
        self.error = error
        self.keys: list[str] = []
        self.cleaned: list[str] = []

    async def download(self, key: str) -> str:
        self.keys.append(key)
        if self.error is not None:
            raise self.error
        return self.path

    def cleanup(self, local_path: str) -> None:
        self.cleaned.append(local_path)


@pytest.fixture()
def app_settings() -> Settings:
    return Settings(
        _env_file=None,
        pinecone_api_key="pc-test",
        pinecone_environment="gcp-starter",
        openai_api_key="sk-test",
        s3_bucket="test-bucket",
    )


@pytest.fixture()
def fake_embeddings() -> FakeEmbeddings:
    return FakeEmbeddings()


@pytest.fixture()
def fake_index() -> FakeVectorIndex:
    return FakeVectorIndex()


@pytest.fixture()
def failing_embeddings() -> FakeEmbeddings:
    """Embeddings that fail on the third call."""
    return FakeEmbeddings(fail_on_call=3)


@pytest.fixture()
def fake_downloader(tmp_path) -> FakeDownloader:
    return FakeDownloader(path=str(tmp_path / "doc.pdf"))
