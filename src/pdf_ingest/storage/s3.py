"""S3 document downloader.

Downloads a document from S3 into a fresh temp directory so the PDF
reader can open it from the local filesystem.
"""

from __future__ import annotations

import asyncio
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

import boto3
from botocore.exceptions import ClientError

from pdf_ingest.errors import DownloadError

logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = "pdf_ingest_"


class S3Downloader:
    """Download objects from one S3 bucket to local temp files.

    Parameters
    ----------
    bucket:
        S3 bucket holding uploaded documents.
    region:
        AWS region of the bucket.
    client:
        Pre-built boto3 S3 client. Built from *region* when omitted.
    """

    def __init__(self, bucket: str, region: str = "us-east-1", *, client: Any = None) -> None:
        self._bucket = bucket
        self._region = region
        self._s3_client = client or boto3.client("s3", region_name=region)
        self._temp_dirs: set[str] = set()

    async def download(self, key: str) -> str:
        """Download *key* and return the local file path."""
        return await asyncio.to_thread(self.download_sync, key)

    def download_sync(self, key: str) -> str:
        """Blocking variant of :meth:`download`.

        Raises
        ------
        DownloadError
            When the key is invalid, the object is missing, or the
            download did not leave a readable file behind.
        """
        if not key:
            raise DownloadError("S3 key is required", key)

        filename = Path(key).name
        if not filename:
            raise DownloadError(f"Invalid S3 key: {key}", key)

        temp_dir = tempfile.mkdtemp(prefix=TEMP_DIR_PREFIX)
        local_path = os.path.join(temp_dir, filename)

        logger.info("Downloading s3://%s/%s", self._bucket, key)
        try:
            try:
                self._s3_client.download_file(
                    Bucket=self._bucket,
                    Key=key,
                    Filename=local_path,
                )
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                if error_code in ("404", "NoSuchKey"):
                    raise DownloadError(f"File not found in S3: {key}", key) from e
                raise DownloadError(f"Failed to download from S3: {e}", key) from e
            except Exception as e:
                raise DownloadError(f"Unexpected error downloading from S3: {e}", key) from e

            if not os.path.isfile(local_path):
                raise DownloadError(f"Download produced no local file for {key}", key)
        except DownloadError:
            shutil.rmtree(temp_dir, ignore_errors=True)
            raise
        self._temp_dirs.add(temp_dir)
        return local_path

    def cleanup(self, local_path: str) -> None:
        """Remove a file returned by :meth:`download` and its temp directory.

        Paths this downloader did not create are left alone.
        """
        temp_dir = os.path.dirname(local_path)
        if temp_dir in self._temp_dirs:
            self._temp_dirs.discard(temp_dir)
            shutil.rmtree(temp_dir, ignore_errors=True)
        else:
            logger.debug("Not removing %s: not downloaded by this S3Downloader", local_path)
