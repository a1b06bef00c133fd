"""Thin Cloud Storage JSON API client for one bucket (listing and deletion only)."""

from __future__ import annotations

import asyncio
from urllib.parse import quote

import httpx

from smartcampus.infrastructure.exceptions import FirebaseAPIError
from smartcampus.infrastructure.firebase._rest_client import (
    _get_access_token,
    _request_async,
)

_BASE = "https://storage.googleapis.com/storage/v1"


class CloudStorageClient:
    """Lists and deletes objects of a bucket."""

    def __init__(
        self,
        bucket: str,
        credentials,
        *,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._bucket = bucket
        self._credentials = credentials
        self._http = http_client

    @property
    def bucket(self) -> str:
        return self._bucket

    async def get_token(self) -> str:
        return await asyncio.to_thread(_get_access_token, self._credentials)

    async def list_objects(self, prefix: str) -> list[str]:
        """Return the names of every object whose name starts with prefix (all pages).

        Raises FirebaseAPIError when the bucket does not exist.
        """
        url = f"{_BASE}/b/{quote(self._bucket, safe='')}/o"
        names: list[str] = []
        page_token: str | None = None
        while True:
            params = {"prefix": prefix, "fields": "items(name),nextPageToken"}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._http,
                url,
                params=params,
                access_token=await self.get_token(),
                service="storage",
            )
            if out is None:
                # 404 on the listing means the bucket itself is missing.
                raise FirebaseAPIError("storage", 404, "NOT_FOUND")
            names.extend(item["name"] for item in out.get("items", []))
            page_token = out.get("nextPageToken")
            if not page_token:
                return names

    async def delete_object(self, name: str) -> bool:
        """Delete one object; return False when it was already gone."""
        url = f"{_BASE}/b/{quote(self._bucket, safe='')}/o/{quote(name, safe='')}"
        out = await _request_async(
            self._http,
            url,
            method="DELETE",
            access_token=await self.get_token(),
            service="storage",
        )
        return out is not None

    async def delete_prefix(self, prefix: str) -> int:
        """Delete every object under prefix in parallel; return how many were listed.

        Objects already gone count as deleted; any other failure propagates.
        """
        names = await self.list_objects(prefix)
        if names:
            await asyncio.gather(*(self.delete_object(n) for n in names))
        return len(names)
