"""Storage — object-storage access for source documents."""

from pdf_ingest.storage.s3 import S3Downloader

__all__ = ["S3Downloader"]
