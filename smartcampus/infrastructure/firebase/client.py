"""Firebase REST clients (Firestore, Identity Toolkit, Cloud Storage), no firebase-admin.

Initialized at app startup using either FIREBASE_SERVICE_ACCOUNT_KEY (JSON
string) or FIREBASE_SERVICE_ACCOUNT_PATH (file path). The three clients share
one service-account credential and one httpx connection pool.
"""

import json
import logging
from pathlib import Path

import httpx

from smartcampus.core.config import get_settings
from smartcampus.infrastructure.firebase._identity_client import IdentityToolkitClient
from smartcampus.infrastructure.firebase._rest_client import (
    FirestoreRESTClient,
    _get_credentials,
)
from smartcampus.infrastructure.firebase._storage_client import CloudStorageClient

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_firestore_client: FirestoreRESTClient | None = None
_identity_client: IdentityToolkitClient | None = None
_storage_client: CloudStorageClient | None = None


def _load_key_dict() -> dict | None:
    """Return service account dict from env key or file path."""
    settings = get_settings()
    key_json = (
        settings.firebase_service_account_key.get_secret_value()
        if settings.firebase_service_account_key
        else None
    )
    if key_json:
        try:
            return json.loads(key_json)
        except json.JSONDecodeError as e:
            raise ValueError("FIREBASE_SERVICE_ACCOUNT_KEY is not valid JSON") from e
    path = settings.firebase_service_account_path
    if path:
        resolved = Path(path).expanduser().resolve()
        if not resolved.is_file():
            logger.warning(
                "FIREBASE_SERVICE_ACCOUNT_PATH set but file not found: %s (resolved: %s)",
                path,
                resolved,
            )
            return None
        with open(resolved, encoding="utf-8") as f:
            return json.load(f)
    return None


def init_firebase() -> bool:
    """Initialize the Firestore, Identity Toolkit and Cloud Storage clients.

    Safe to call when no credentials are configured (no-op). Idempotent if
    already initialized. On invalid credentials or any initialization error,
    logs the exception and returns False so the app can start without Firebase.

    Returns:
        True if the clients were initialized, False if disabled or on error.
    """
    global _http_client, _firestore_client, _identity_client, _storage_client
    if _firestore_client is not None:
        return True
    try:
        key_dict = _load_key_dict()
        if not key_dict:
            logger.warning("Firebase credentials not configured; Firebase routes disabled")
            return False

        settings = get_settings()
        project_id = settings.firebase_project_id or key_dict.get("project_id")
        if not project_id:
            logger.error("Firebase service account JSON missing 'project_id'")
            return False
        bucket = settings.firebase_storage_bucket or f"{project_id}.appspot.com"

        cred = _get_credentials(key_dict)
        _http_client = httpx.AsyncClient(timeout=settings.firebase_http_timeout_seconds)
        _firestore_client = FirestoreRESTClient(project_id, cred, http_client=_http_client)
        _identity_client = IdentityToolkitClient(project_id, cred, http_client=_http_client)
        _storage_client = CloudStorageClient(bucket, cred, http_client=_http_client)
        logger.info("Firebase REST clients initialized (project=%s, bucket=%s)", project_id, bucket)
        return True
    except Exception:
        logger.exception("Firebase initialization failed")
        return False


def get_firestore_client() -> FirestoreRESTClient | None:
    """Return the Firestore client, or None if not configured."""
    return _firestore_client


def get_identity_client() -> IdentityToolkitClient | None:
    """Return the Identity Toolkit client, or None if not configured."""
    return _identity_client


def get_storage_client() -> CloudStorageClient | None:
    """Return the Cloud Storage client, or None if not configured."""
    return _storage_client


def get_project_id() -> str | None:
    """Return the Firebase project id, or None if not configured."""
    return _firestore_client.project_id if _firestore_client is not None else None


async def close_firebase() -> None:
    """Close the shared HTTP connection pool. Call from app shutdown."""
    global _http_client, _firestore_client, _identity_client, _storage_client
    _firestore_client = None
    _identity_client = None
    _storage_client = None
    if _http_client is not None:
        await _http_client.aclose()
        _http_client = None
        logger.info("Firebase HTTP client closed")
