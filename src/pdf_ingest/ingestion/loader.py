"""Document reader — thin wrapper around LangChain's PDF loader."""

from __future__ import annotations

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from pdf_ingest.ingestion.models import DocumentPage


def load_pdf_pages(path: str | Path) -> list[DocumentPage]:
    """Load a single PDF file into ordered pages.

    ``PyPDFLoader`` numbers pages from 0 in ``metadata["page"]``; pages
    here are numbered from 1.
    """
    documents = PyPDFLoader(str(path)).load()
    pages: list[DocumentPage] = []
    for index, doc in enumerate(documents):
        page_index = doc.metadata.get("page", index)
        pages.append(DocumentPage(text=doc.page_content, page_number=int(page_index) + 1))
    return pages
