"""Thin Firestore REST API client (no firebase-admin).

Uses google-auth for service account tokens and Firestore REST v1.
All HTTP calls use httpx.AsyncClient so they do not block the event loop.
Multi-document writes go through a single :commit request, which Firestore
applies atomically.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import AsyncIterator
from typing import Any

import httpx

from smartcampus.infrastructure.exceptions import (
    DocumentExistsError,
    DocumentNotFoundError,
    FirebaseAPIError,
)
from smartcampus.infrastructure.firebase._rest_encoding import (
    _encode_value,
    decode_document,
    field_path,
    split_write,
)

GOOGLE_SCOPES = [
    "https://www.googleapis.com/auth/cloud-platform",
    "https://www.googleapis.com/auth/datastore",
    "https://www.googleapis.com/auth/firebase",
    "https://www.googleapis.com/auth/devstorage.read_write",
]
_BASE = "https://firestore.googleapis.com/v1"


def _get_credentials(key_dict: dict):
    """Return google.oauth2.service_account.Credentials for the Firebase REST APIs."""
    from google.oauth2 import service_account

    return service_account.Credentials.from_service_account_info(
        key_dict, scopes=GOOGLE_SCOPES
    )


def _get_access_token(credentials) -> str:
    from google.auth.transport.requests import Request

    if not credentials.valid:
        credentials.refresh(Request())
    return credentials.token


def _error_reason(resp: httpx.Response) -> str:
    """Return the provider error code from a Google API error body, or ''."""
    try:
        err = resp.json().get("error", {})
    except (ValueError, AttributeError):
        return ""
    if not isinstance(err, dict):
        return str(err)
    message = str(err.get("message") or "")
    # Identity Toolkit: "EMAIL_EXISTS" or "WEAK_PASSWORD : Password should be ..."
    if message and message.split(":")[0].strip().isupper():
        return message.split(":")[0].strip()
    return str(err.get("status") or message)


async def _request_async(
    client: httpx.AsyncClient,
    url: str,
    method: str = "GET",
    body: dict | None = None,
    access_token: str | None = None,
    *,
    params: dict[str, Any] | None = None,
    service: str = "firestore",
) -> Any:
    """Perform async HTTP request to a Google REST API. 404 returns None.

    409 raises DocumentExistsError; any other non-2xx raises FirebaseAPIError.
    """
    headers = {"Content-Type": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if method == "GET":
        resp = await client.get(url, headers=headers, params=params)
    elif method == "PATCH":
        resp = await client.patch(url, headers=headers, json=body, params=params)
    elif method == "POST":
        resp = await client.post(url, headers=headers, json=body, params=params)
    elif method == "DELETE":
        resp = await client.delete(url, headers=headers, params=params)
    else:
        raise ValueError(f"Unsupported method: {method!r}")
    if resp.status_code == 404:
        return None
    if resp.status_code == 409 and service == "firestore":
        raise DocumentExistsError()
    if resp.status_code not in (200, 204):
        raise FirebaseAPIError(service, resp.status_code, _error_reason(resp))
    if method == "DELETE":
        return {}
    raw = resp.content
    return json.loads(raw.decode()) if raw else {}


def _doc_id(name: str) -> str:
    return name.split("/")[-1] if name else ""


class DocumentReference:
    """Reference to a single document; matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    @property
    def path(self) -> str:
        """Full resource name (projects/.../documents/...)."""
        return self._path

    def collection(self, collection_id: str) -> "CollectionReference":
        """Subcollection under this document."""
        return CollectionReference(self._client, f"{self._path}/{collection_id}")

    async def get(self) -> DocumentSnapshot | None:
        """Fetch the document; returns None if not found."""
        url = f"{_BASE}/{self._path}"
        out = await _request_async(
            self._client._http, url, access_token=await self._client.get_token()
        )
        if not out:
            return None
        return DocumentSnapshot(self.id, decode_document(out))

    async def update(self, data: dict[str, Any]) -> bool:
        """Update only the given fields (sentinels allowed); the document must exist.

        Returns False when the document does not exist (nothing written).
        """
        batch = self._client.batch()
        batch.update(self, data)
        return await batch.commit(require_existing=False)

    async def delete(self) -> None:
        """Delete the document. Idempotent if document is already missing (404)."""
        url = f"{_BASE}/{self._path}"
        await _request_async(
            self._client._http,
            url,
            method="DELETE",
            access_token=await self._client.get_token(),
        )

    async def list_collections(self) -> list[str]:
        """Return the ids of the document's direct subcollections."""
        url = f"{_BASE}/{self._path}:listCollectionIds"
        ids: list[str] = []
        page_token: str | None = None
        while True:
            body: dict[str, Any] = {"pageSize": 100}
            if page_token:
                body["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                url,
                method="POST",
                body=body,
                access_token=await self._client.get_token(),
            )
            if not out:
                return ids
            ids.extend(out.get("collectionIds", []))
            page_token = out.get("nextPageToken")
            if not page_token:
                return ids


class DocumentSnapshot:
    """Snapshot of a document (id + data)."""

    def __init__(self, id_: str, data: dict):
        self.id = id_
        self._data = data

    def to_dict(self) -> dict:
        return self._data


_OP_MAP: dict[str, str] = {
    "==": "EQUAL",
    "!=": "NOT_EQUAL",
    "<": "LESS_THAN",
    "<=": "LESS_THAN_OR_EQUAL",
    ">": "GREATER_THAN",
    ">=": "GREATER_THAN_OR_EQUAL",
    "in": "IN",
    "not-in": "NOT_IN",
    "array_contains": "ARRAY_CONTAINS",
    "array-contains": "ARRAY_CONTAINS",
}


class _Query:
    """Fluent query builder for collection; runs via runQuery (filter/order/limit on server)."""

    def __init__(
        self,
        client: "FirestoreRESTClient",
        parent: str,
        collection_id: str,
        *,
        where_field: str | None = None,
        where_op: str = "EQUAL",
        where_value: Any = None,
    ):
        self._client = client
        self._parent = parent
        self._collection_id = collection_id
        self._where_field = where_field
        self._where_op = _OP_MAP.get(where_op, where_op)
        self._where_value = where_value
        self._order_by_field: str | None = None
        self._order_direction: str = "ASCENDING"
        self._limit: int | None = None

    def order_by(self, field: str, direction: str = "ASCENDING") -> "_Query":
        self._order_by_field = field
        self._order_direction = direction
        return self

    def limit(self, n: int) -> "_Query":
        self._limit = n
        return self

    def structured_query(self) -> dict[str, Any]:
        """Return the StructuredQuery body for runQuery."""
        structured: dict[str, Any] = {
            "from": [{"collectionId": self._collection_id}],
        }
        if self._where_field is not None:
            structured["where"] = {
                "fieldFilter": {
                    "field": {"fieldPath": field_path(self._where_field)},
                    "op": self._where_op,
                    "value": _encode_value(self._where_value),
                }
            }
        if self._order_by_field is not None:
            structured["orderBy"] = [
                {
                    "field": {"fieldPath": field_path(self._order_by_field)},
                    "direction": self._order_direction,
                }
            ]
        if self._limit:
            structured["limit"] = self._limit
        return structured

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """Execute the query and yield document snapshots."""
        url = f"{_BASE}/{self._parent}:runQuery"
        body = {"structuredQuery": self.structured_query()}
        resp = await _request_async(
            self._client._http,
            url,
            method="POST",
            body=body,
            access_token=await self._client.get_token(),
        )
        items = resp if isinstance(resp, list) else ([resp] if resp else [])
        for item in items:
            if "document" not in item:
                continue
            doc = item["document"]
            yield DocumentSnapshot(_doc_id(doc.get("name", "")), decode_document(doc))


class CollectionReference:
    """Reference to a collection (top-level or subcollection); matches firestore API style."""

    def __init__(self, client: "FirestoreRESTClient", path: str):
        self._client = client
        self._path = path.rstrip("/")

    @property
    def id(self) -> str:
        return _doc_id(self._path)

    def document(self, document_id: str) -> DocumentReference:
        return DocumentReference(self._client, f"{self._path}/{document_id}")

    def _query(self, **kwargs: Any) -> _Query:
        parent = self._path.rsplit("/", 1)[0]
        return _Query(self._client, parent, self.id, **kwargs)

    def where(self, field: str, op: str, value: Any) -> _Query:
        """Start a query with a filter. Use .order_by(), .limit(), then .stream()."""
        return self._query(where_field=field, where_op=op, where_value=value)

    def limit(self, n: int) -> _Query:
        """Start an unfiltered query returning at most n documents."""
        return self._query().limit(n)

    async def stream(self) -> AsyncIterator[DocumentSnapshot]:
        """List every document in the collection (shallow, all pages)."""
        url = f"{_BASE}/{self._path}"
        page_token: str | None = None
        while True:
            params: dict[str, Any] = {"pageSize": 300}
            if page_token:
                params["pageToken"] = page_token
            out = await _request_async(
                self._client._http,
                url,
                params=params,
                access_token=await self._client.get_token(),
            )
            if not out:
                return
            for doc in out.get("documents", []):
                yield DocumentSnapshot(_doc_id(doc.get("name", "")), decode_document(doc))
            page_token = out.get("nextPageToken")
            if not page_token:
                return


class WriteBatch:
    """Collects writes and applies them in one atomic :commit request."""

    def __init__(self, client: "FirestoreRESTClient") -> None:
        self._client = client
        self._writes: list[dict[str, Any]] = []

    def __len__(self) -> int:
        return len(self._writes)

    @property
    def writes(self) -> list[dict[str, Any]]:
        return list(self._writes)

    def _write(
        self,
        ref: DocumentReference,
        data: dict[str, Any],
        *,
        mask: bool,
        exists: bool | None,
    ) -> "WriteBatch":
        fields, transforms = split_write(data)
        write: dict[str, Any] = {"update": {"name": ref.path, "fields": fields}}
        if mask:
            write["updateMask"] = {"fieldPaths": [field_path(k) for k in fields]}
        if transforms:
            write["updateTransforms"] = transforms
        if exists is not None:
            write["currentDocument"] = {"exists": exists}
        self._writes.append(write)
        return self

    def create(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        """Create the document; the commit fails if it already exists."""
        return self._write(ref, data, mask=False, exists=False)

    def update(self, ref: DocumentReference, data: dict[str, Any]) -> "WriteBatch":
        """Update the given fields; the commit fails if the document does not exist."""
        return self._write(ref, data, mask=True, exists=True)

    def delete(self, ref: DocumentReference) -> "WriteBatch":
        self._writes.append({"delete": ref.path})
        return self

    async def commit(self, *, require_existing: bool = True) -> bool:
        """Apply every write atomically.

        A write whose document must exist but does not fails the whole commit:
        raises DocumentNotFoundError, or returns False when require_existing is False.
        """
        if not self._writes:
            return True
        out = await self._client.commit(self._writes)
        if out is None:
            if require_existing:
                raise DocumentNotFoundError("Commit failed: a document to update does not exist")
            return False
        return True


class FirestoreRESTClient:
    """Lightweight Firestore client using REST API (no firebase-admin)."""

    def __init__(
        self,
        project_id: str,
        credentials,
        *,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._project_id = project_id
        self._credentials = credentials
        self._prefix = f"projects/{project_id}/databases/(default)/documents"
        self._http = http_client

    @property
    def project_id(self) -> str:
        return self._project_id

    async def get_token(self) -> str:
        """Return a valid access token; refreshes in thread pool to avoid blocking."""
        return await asyncio.to_thread(_get_access_token, self._credentials)

    def collection(self, collection_id: str) -> CollectionReference:
        return CollectionReference(self, f"{self._prefix}/{collection_id}")

    def batch(self) -> WriteBatch:
        return WriteBatch(self)

    async def commit(self, writes: list[dict[str, Any]]) -> dict | None:
        """POST documents:commit. Returns None when a required document is missing."""
        url = f"{_BASE}/{self._prefix}:commit"
        return await _request_async(
            self._http,
            url,
            method="POST",
            body={"writes": writes},
            access_token=await self.get_token(),
        )

    async def _delete_collection(self, coll: CollectionReference, batch_size: int) -> int:
        """Delete every document of one collection in batches of batch_size."""
        deleted = 0
        while True:
            batch = self.batch()
            async for snapshot in coll.limit(batch_size).stream():
                batch.delete(coll.document(snapshot.id))
            size = len(batch)
            if size:
                await batch.commit()
                deleted += size
            if size < batch_size:
                return deleted

    async def recursive_delete(self, ref: DocumentReference, batch_size: int = 50) -> int:
        """Delete the documents of each direct subcollection, then the document itself.

        Subcollections are deleted in batches of batch_size per collection until a
        batch comes back short. Returns the number of documents deleted.
        """
        deleted = 0
        for collection_id in await ref.list_collections():
            deleted += await self._delete_collection(ref.collection(collection_id), batch_size)
        if await ref.get() is not None:
            deleted += 1
        await ref.delete()
        return deleted
