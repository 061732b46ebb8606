"""Domain models flowing through the ingestion pipeline."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class DocumentPage(BaseModel):
    """One page of extracted text.

    Attributes
    ----------
    text:
        Raw page text as produced by the PDF reader.
    page_number:
        1-based page number from the source pagination.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    page_number: int = Field(ge=1)


class TextChunk(BaseModel):
    """A bounded-size segment of a page, the unit of embedding.

    Attributes
    ----------
    text:
        The chunk content that gets embedded and hashed.
    page_number:
        Page the chunk was cut from.
    page_text:
        The whole newline-stripped page text, byte-truncated. Stored as
        record metadata so retrieval can show surrounding context.
    """

    model_config = ConfigDict(frozen=True)

    text: str
    page_number: int
    page_text: str


class RecordMetadata(BaseModel):
    """Metadata stored alongside each vector."""

    model_config = ConfigDict(frozen=True)

    text: str
    page_number: int


class VectorRecord(BaseModel):
    """A content-addressed vector ready for upsert."""

    model_config = ConfigDict(frozen=True)

    id: str
    values: list[float]
    metadata: RecordMetadata

    def to_upsert_dict(self) -> dict[str, Any]:
        """Return the ``{"id", "values", "metadata"}`` shape Pinecone expects."""
        return self.model_dump()
