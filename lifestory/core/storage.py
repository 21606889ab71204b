"""S3 object storage for uploaded assets."""

import logging
from functools import lru_cache
from typing import BinaryIO, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from lifestory.core.config import get_settings
from lifestory.core.errors import BlobStoreError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Key-based object storage with URL construction."""

    def put(self, key: str, body: BinaryIO, content_type: str | None = None) -> str:
        ...

    def delete(self, key: str) -> None:
        ...

    def url_for(self, key: str) -> str:
        ...

    def key_from_url(self, url: str | None) -> str | None:
        ...


class S3BlobStore:
    """Blob store backed by a single S3 bucket.

    Asset references handed out to clients are public URLs of the form
    ``<base_url>/<key>``; :meth:`key_from_url` reverses that mapping.
    """

    def __init__(self, bucket: str, base_url: str, client=None):
        self.bucket = bucket
        self.base_url = base_url.rstrip("/")
        self.client = client if client is not None else boto3.client("s3")

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key}"

    def key_from_url(self, url: str | None) -> str | None:
        """Strip the public prefix from an asset URL.

        Returns None for empty values and for URLs that were not issued by
        this store.
        """
        if not url:
            return None
        prefix = f"{self.base_url}/"
        if not url.startswith(prefix):
            return None
        return url[len(prefix) :] or None

    def put(self, key: str, body: BinaryIO, content_type: str | None = None) -> str:
        """Upload a file object and return its public URL."""
        extra_args = {"ContentType": content_type} if content_type else None
        try:
            self.client.upload_fileobj(body, self.bucket, key, ExtraArgs=extra_args)
        except (BotoCoreError, ClientError) as exc:
            raise BlobStoreError(f"Failed to upload {key}", exc) from exc
        logger.info("Uploaded s3://%s/%s", self.bucket, key)
        return self.url_for(key)

    def delete(self, key: str) -> None:
        try:
            self.client.delete_object(Bucket=self.bucket, Key=key)
        except (BotoCoreError, ClientError) as exc:
            raise BlobStoreError(f"Failed to delete {key}", exc) from exc
        logger.info("Deleted s3://%s/%s", self.bucket, key)


@lru_cache
def get_blob_store() -> S3BlobStore:
    """Dependency that provides the shared S3 blob store."""
    settings = get_settings()
    secret = settings.aws_secret_access_key
    client = boto3.client(
        "s3",
        region_name=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=secret.get_secret_value() if secret else None,
    )
    return S3BlobStore(settings.s3_bucket, settings.asset_base_url, client=client)
