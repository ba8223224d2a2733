"""
Object storage for uploaded files.

Resumes and recruiter logos are pushed to S3 and referenced afterwards only
by their public URL.
"""

import os
import tempfile
import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from hirehub.core.config import settings
from hirehub.core.logger import setup_logger

logger = setup_logger("hirehub.storage")


class StorageError(Exception):
    """Raised when the object store rejects or fails an upload."""


class ObjectStorage:
    """Thin wrapper around an S3 bucket."""

    def __init__(self, bucket: str, region: str, client=None):
        self.bucket = bucket
        self.region = region
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = boto3.client(
                "s3",
                region_name=self.region or None,
                aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
                aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            )
        return self._client

    def public_url(self, key: str) -> str:
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{key}"

    def upload_file(self, path: str, key: str, content_type: str) -> str:
        """
        Upload a local file and return its object URL.

        Raises:
            StorageError: with the storage layer's message on any failure
        """
        logger.info(f"Uploading {key} to bucket {self.bucket}")
        try:
            self.client.upload_file(
                path,
                self.bucket,
                key,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Upload of {key} failed: {e}")
            raise StorageError(str(e)) from e

        url = self.public_url(key)
        logger.info(f"Upload complete: {url}")
        return url

    def upload_bytes(self, content: bytes, key: str, content_type: str, suffix: str = "") -> str:
        """
        Spool bytes to a temporary file, upload it, and remove the file.

        The temporary copy is deleted whether or not the upload succeeds.
        """
        temp_path: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as temp_file:
                temp_file.write(content)
                temp_path = temp_file.name
            return self.upload_file(temp_path, key, content_type)
        finally:
            if temp_path and os.path.exists(temp_path):
                try:
                    os.unlink(temp_path)
                except OSError as e:
                    logger.warning(f"Could not delete temporary file {temp_path}: {e}")

    def delete_object(self, key: str) -> None:
        """Remove an uploaded object, e.g. a logo whose account was never created."""
        logger.info(f"Deleting {key} from bucket {self.bucket}")
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Delete of {key} failed: {e}")
            raise StorageError(str(e)) from e


def build_object_key(prefix: str, filename: str, owner: Optional[str] = None) -> str:
    """
    Key namespaced by owner and upload time.

    e.g. resumes/user_123-1717171717171-cv.pdf
    """
    stamp = int(time.time() * 1000)
    safe_name = os.path.basename(filename or "upload").replace(" ", "_")
    if owner:
        return f"{prefix}/{owner}-{stamp}-{safe_name}"
    return f"{prefix}/{stamp}-{safe_name}"


_storage: Optional[ObjectStorage] = None


def get_storage() -> ObjectStorage:
    """FastAPI dependency returning the process-wide storage client."""
    global _storage
    if _storage is None:
        _storage = ObjectStorage(
            bucket=settings.AWS_S3_BUCKET_NAME,
            region=settings.AWS_REGION,
        )
    return _storage
