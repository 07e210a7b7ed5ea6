"""Key-value stores backing the chart cache."""

from __future__ import annotations

import logging
import threading
from typing import Protocol

import redis

from chart_viewer.config.settings import settings
from chart_viewer.core.exceptions import CacheUnavailable

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    """Shared string store with no expiry.

    ``get`` returns an empty string for an absent key. Both operations raise
    CacheUnavailable when the store cannot answer.
    """

    def set(self, key: str, value: str) -> None:
        ...

    def get(self, key: str) -> str:
        ...


class MemoryStore:
    """In-process store, safe to share between threads."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def get(self, key: str) -> str:
        with self._lock:
            return self._data.get(key, "")

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


class RedisStore:
    """Thin wrapper around a Redis connection."""

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        db: int | None = None,
        client: redis.Redis | None = None,
    ):
        self.host = host or settings.redis_host
        self.port = port or settings.redis_port
        if client is None:
            client = redis.Redis(
                host=self.host,
                port=self.port,
                db=settings.redis_db if db is None else db,
                decode_responses=True,
                socket_timeout=settings.timeout,
                socket_connect_timeout=settings.timeout,
            )
        self._client = client

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def ping(self) -> None:
        """Check connectivity, raising CacheUnavailable when Redis is down."""
        try:
            self._client.ping()
        except redis.RedisError as e:
            raise CacheUnavailable(f"cannot connect to redis on {self.address}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as e:
            raise CacheUnavailable(f"redis SET {key} failed: {e}") from e

    def get(self, key: str) -> str:
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            raise CacheUnavailable(f"redis GET {key} failed: {e}") from e
        if value is None:
            return ""
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value
