"""Hashing and JSON encode-decode helpers for cache entries."""

from __future__ import annotations

import hashlib
import json
from typing import Any

from chart_viewer.core.exceptions import DecodeFailed, InvalidOverrides


def content_hash(payload: str | bytes) -> str:
    """Return the hex sha256 digest of an override values payload.

    Text payloads are hashed as UTF-8, so the same document always yields
    the same digest whether it arrives as str or bytes.
    """
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    if not isinstance(payload, (bytes, bytearray)):
        raise InvalidOverrides(f"override values must be str or bytes, got {type(payload).__name__}")
    return hashlib.sha256(payload).hexdigest()


def encode_entry(value: Any) -> str:
    """Serialize a cache value to its stored JSON string."""
    return json.dumps(value)


def decode_entry(raw: str) -> Any:
    """Decode a cached JSON string.

    Raises DecodeFailed for an empty or malformed entry; callers on a read
    path treat that as a cache miss.
    """
    if not raw:
        raise DecodeFailed("empty cache entry")
    try:
        return json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeFailed(f"malformed cache entry: {e}") from e
