"""Unit tests for the Pinecone vector index."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock, patch

import pytest

from pdf_ingest.config import Settings
from pdf_ingest.errors import ConfigurationError, UpsertError
from pdf_ingest.ingestion.models import RecordMetadata, VectorRecord
from pdf_ingest.vectorstore.base import iter_batches
from pdf_ingest.vectorstore.pinecone_store import PineconeVectorIndex, create_pinecone_client


def _records(n: int) -> list[VectorRecord]:
    return [
        VectorRecord(id=f"id-{i}", values=[float(i)], metadata=RecordMetadata(text=f"t{i}", page_number=1))
        for i in range(n)
    ]


@pytest.fixture()
def client() -> MagicMock:
    return MagicMock()


class TestCreatePineconeClient:
    def test_requires_api_key_and_environment(self) -> None:
        settings = Settings(_env_file=None, pinecone_api_key="", pinecone_environment="")
        with pytest.raises(ConfigurationError, match="PINECONE_API_KEY, PINECONE_ENVIRONMENT"):
            create_pinecone_client(settings)

    def test_requires_environment(self) -> None:
        settings = Settings(_env_file=None, pinecone_api_key="key", pinecone_environment="")
        with pytest.raises(ConfigurationError, match="PINECONE_ENVIRONMENT"):
            create_pinecone_client(settings)

    def test_builds_client(self, app_settings: Settings) -> None:
        with patch("pdf_ingest.vectorstore.pinecone_store.Pinecone") as pinecone_cls:
            result = create_pinecone_client(app_settings)
        pinecone_cls.assert_called_once_with(api_key="pc-test")
        assert result is pinecone_cls.return_value


class TestPineconeVectorIndex:
    def test_upserts_in_batches(self, client: MagicMock) -> None:
        index = PineconeVectorIndex(client, "chatpdf-yt")
        written = asyncio.run(index.upsert(_records(25), namespace="doc-ns", batch_size=10))

        client.Index.assert_called_once_with("chatpdf-yt")
        pc_index = client.Index.return_value
        assert written == 25
        assert pc_index.upsert.call_count == 3
        sizes = [len(call.kwargs["vectors"]) for call in pc_index.upsert.call_args_list]
        assert sizes == [10, 10, 5]
        assert all(call.kwargs["namespace"] == "doc-ns" for call in pc_index.upsert.call_args_list)
        first = pc_index.upsert.call_args_list[0].kwargs["vectors"][0]
        assert first == {"id": "id-0", "values": [0.0], "metadata": {"text": "t0", "page_number": 1}}

    def test_failed_batch_raises_upsert_error(self, client: MagicMock) -> None:
        pc_index = client.Index.return_value
        pc_index.upsert.side_effect = [None, RuntimeError("quota exceeded"), None]
        index = PineconeVectorIndex(client, "chatpdf-yt")

        with pytest.raises(UpsertError, match="batch 2/3") as excinfo:
            asyncio.run(index.upsert(_records(25), namespace="ns", batch_size=10))

        assert excinfo.value.batch == 2
        assert pc_index.upsert.call_count == 2

    def test_health_check(self, client: MagicMock) -> None:
        index = PineconeVectorIndex(client, "chatpdf-yt")
        assert index.health_check() is True
        client.Index.return_value.describe_index_stats.side_effect = RuntimeError("down")
        assert index.health_check() is False


def test_iter_batches_rejects_zero() -> None:
    with pytest.raises(ValueError, match="batch_size"):
        iter_batches(_records(3), 0)


def test_iter_batches_empty() -> None:
    assert iter_batches([], 10) == []
