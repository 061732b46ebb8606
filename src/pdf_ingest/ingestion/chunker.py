"""Text chunking for extracted PDF pages."""

from __future__ import annotations

from langchain_core.documents import Document
from langchain_text_splitters import RecursiveCharacterTextSplitter

from pdf_ingest.ingestion.models import DocumentPage, TextChunk

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_CHUNK_OVERLAP = 200
METADATA_TEXT_MAX_BYTES = 36000


def truncate_string_by_bytes(text: str, max_bytes: int) -> str:
    """Truncate *text* to at most *max_bytes* UTF-8 bytes.

    A multi-byte character cut by the slice is dropped entirely rather
    than replaced, so the result always decodes cleanly.
    """
    if max_bytes < 0:
        raise ValueError(f"max_bytes must be >= 0, got {max_bytes}")
    return text.encode("utf-8")[:max_bytes].decode("utf-8", errors="ignore")


def chunk_page(
    page: DocumentPage,
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    max_metadata_bytes: int = METADATA_TEXT_MAX_BYTES,
) -> list[TextChunk]:
    """Split one page into overlapping chunks.

    Parameters
    ----------
    page:
        Page produced by the document reader.
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Number of overlapping characters between consecutive chunks.
    max_metadata_bytes:
        Byte budget for the page text copied into every chunk.

    Returns
    -------
    list[TextChunk]
        Chunks in page order, none containing a newline.
    """
    cleaned = page.text.replace("\n", "")
    page_text = truncate_string_by_bytes(cleaned, max_metadata_bytes)

    splitter = RecursiveCharacterTextSplitter(
        chunk_size=chunk_size,
        chunk_overlap=chunk_overlap,
    )
    docs = splitter.split_documents(
        [Document(page_content=cleaned, metadata={"page_number": page.page_number})]
    )
    return [
        TextChunk(
            text=doc.page_content,
            page_number=doc.metadata["page_number"],
            page_text=page_text,
        )
        for doc in docs
    ]
