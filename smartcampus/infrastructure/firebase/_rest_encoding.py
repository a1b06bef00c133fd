"""Encode/decode Python values to/from Firestore REST API 'fields' format.

Also defines the write sentinels (array union/remove, server timestamp) that
are sent as field transforms instead of field values.
"""

import base64
import re
from datetime import datetime
from typing import Any

from smartcampus.shared.utils.datetime import ensure_utc


class ArrayUnion:
    """Append values missing from an array field (atomic on the server)."""

    def __init__(self, values: list[Any]) -> None:
        self.values = list(values)


class ArrayRemove:
    """Remove every occurrence of values from an array field (atomic on the server)."""

    def __init__(self, values: list[Any]) -> None:
        self.values = list(values)


class _ServerTimestamp:
    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()

_SIMPLE_FIELD = re.compile(r"^[A-Za-z_][A-Za-z_0-9]*$")
_NANOS = re.compile(r"(\.\d{6})\d+")


def field_path(name: str) -> str:
    """Quote a field name with backticks unless it is a simple identifier."""
    if _SIMPLE_FIELD.match(name):
        return name
    return "`" + name.replace("\\", "\\\\").replace("`", "\\`") + "`"


def _encode_value(v: Any) -> dict:
    if v is None:
        return {"nullValue": None}
    if isinstance(v, bool):
        return {"booleanValue": v}
    if isinstance(v, int):
        return {"integerValue": str(v)}
    if isinstance(v, float):
        return {"doubleValue": v}
    if isinstance(v, datetime):
        return {"timestampValue": ensure_utc(v).strftime("%Y-%m-%dT%H:%M:%S.%fZ")}
    if isinstance(v, str):
        return {"stringValue": v}
    if isinstance(v, bytes):
        return {"bytesValue": base64.standard_b64encode(v).decode("ascii")}
    if isinstance(v, (list, tuple)):
        return {"arrayValue": {"values": [_encode_value(x) for x in v]}}
    if isinstance(v, dict):
        return {"mapValue": {"fields": {k: _encode_value(x) for k, x in v.items()}}}
    raise TypeError(f"Unsupported Firestore value type: {type(v)}")


def _encode_transform(name: str, v: Any) -> dict | None:
    """Return a FieldTransform for a sentinel value, or None for a plain value."""
    path = field_path(name)
    if v is SERVER_TIMESTAMP:
        return {"fieldPath": path, "setToServerValue": "REQUEST_TIME"}
    if isinstance(v, ArrayUnion):
        return {
            "fieldPath": path,
            "appendMissingElements": {"values": [_encode_value(x) for x in v.values]},
        }
    if isinstance(v, ArrayRemove):
        return {
            "fieldPath": path,
            "removeAllFromArray": {"values": [_encode_value(x) for x in v.values]},
        }
    return None


def split_write(data: dict[str, Any]) -> tuple[dict, list[dict]]:
    """Split a write payload into encoded plain fields and field transforms."""
    fields: dict[str, Any] = {}
    transforms: list[dict] = []
    for k, v in data.items():
        transform = _encode_transform(k, v)
        if transform is not None:
            transforms.append(transform)
        else:
            fields[k] = _encode_value(v)
    return fields, transforms


def _decode_value(obj: dict) -> Any:
    if "nullValue" in obj:
        return None
    if "booleanValue" in obj:
        return obj["booleanValue"]
    if "integerValue" in obj:
        return int(obj["integerValue"])
    if "doubleValue" in obj:
        return obj["doubleValue"]
    if "timestampValue" in obj:
        raw = _NANOS.sub(r"\1", obj["timestampValue"])
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if "stringValue" in obj:
        return obj["stringValue"]
    if "bytesValue" in obj:
        return base64.standard_b64decode(obj["bytesValue"])
    if "referenceValue" in obj:
        return obj["referenceValue"]
    if "arrayValue" in obj:
        vals = obj.get("arrayValue", {}).get("values") or []
        return [_decode_value(x) for x in vals]
    if "mapValue" in obj:
        fields = obj["mapValue"].get("fields") or {}
        return {k: _decode_value(x) for k, x in fields.items()}
    return None


def decode_document(doc: dict | None) -> dict:
    """Convert a Firestore REST Document (with its 'fields' map) to a Python dict."""
    if not doc:
        return {}
    return {k: _decode_value(v) for k, v in (doc.get("fields") or {}).items()}
