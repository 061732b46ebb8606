"""pdf-ingest — load PDFs from S3 into a namespaced Pinecone index."""

__version__ = "0.1.0"
