"""Blob store over Cloud Storage (implements IBlobStore)."""

from __future__ import annotations

import logging

from smartcampus.infrastructure.firebase._storage_client import CloudStorageClient

logger = logging.getLogger(__name__)


class FirebaseBlobStore:
    def __init__(self, client: CloudStorageClient) -> None:
        self._client = client

    async def delete_prefix(self, prefix: str) -> int:
        """Delete all objects under prefix. An empty prefix is refused (it would wipe the bucket)."""
        if not prefix or prefix == "/":
            raise ValueError("Refusing to delete an empty blob prefix")
        count = await self._client.delete_prefix(prefix)
        logger.info("Deleted %d object(s) under gs://%s/%s", count, self._client.bucket, prefix)
        return count
