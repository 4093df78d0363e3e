"""
Storage Module - Key-Value Backends

Provides the durable key-value media the cart snapshot is mirrored to:
- FileStorage: local JSON file, the browser localStorage analogue
- MemoryStorage: in-process dict for tests and throwaway sessions
- UpstashStorage: Upstash Redis over REST

Backends store plain strings and raise StorageError on I/O failures.
Only the cart persistence adapter talks to them.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from upstash_redis import Redis

from fishcart.errors import StorageError, ERROR_STORAGE_UNAVAILABLE
from fishcart.logging import get_logger, sanitize_string_for_logging

logger = get_logger(__name__)


# Environment variables
CART_STORAGE_BACKEND = os.environ.get("CART_STORAGE_BACKEND", "file")
CART_STORAGE_PATH = os.environ.get(
    "CART_STORAGE_PATH", str(Path.home() / ".fishcart" / "storage.json")
)
CART_STORAGE_KEY = os.environ.get("CART_STORAGE_KEY", "kotimaistakalaa_cart")

UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


class StorageBackend(Protocol):
    """Minimal key-value contract shared by all backends."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryStorage:
    """Dict-backed storage."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class FileStorage:
    """
    Single JSON object file mapping keys to string values.

    Every write rewrites the whole file through a temp file and an atomic
    rename, so a crash leaves either the old or the new content on disk.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read_all(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(
                f"Storage file {sanitize_string_for_logging(str(self.path))} is not valid JSON: {e}"
            )
            return {}

        if not isinstance(data, dict):
            logger.warning(
                f"Storage file {sanitize_string_for_logging(str(self.path))} does not hold an object"
            )
            return {}
        return data

    def _write_all(self, data: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh)
                os.replace(tmp_path, self.path)
            except BaseException:
                Path(tmp_path).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class UpstashStorage:
    """Upstash Redis (sync REST client) as a key-value backend."""

    def __init__(self, client: Redis):
        self.client = client

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except Exception as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    def set(self, key: str, value: str) -> None:
        try:
            self.client.set(key, value)
        except Exception as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e

    def delete(self, key: str) -> None:
        try:
            self.client.delete(key)
        except Exception as e:
            raise StorageError(f"{ERROR_STORAGE_UNAVAILABLE}: {e}") from e


# Singleton instances
_sync_redis_client: Optional[Redis] = None
_storage_backend: Optional[StorageBackend] = None


def get_redis_sync() -> Redis:
    """
    Get sync Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _sync_redis_client

    if _sync_redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _sync_redis_client = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _sync_redis_client


def create_storage_backend(kind: str = CART_STORAGE_BACKEND) -> StorageBackend:
    """Build the backend named by CART_STORAGE_BACKEND."""
    kind = kind.strip().lower()
    if kind == "file":
        return FileStorage(CART_STORAGE_PATH)
    if kind == "memory":
        return MemoryStorage()
    if kind == "upstash":
        return UpstashStorage(get_redis_sync())
    raise ValueError(f"Unknown CART_STORAGE_BACKEND: {kind}")


def get_storage_backend() -> StorageBackend:
    """Get the configured storage backend (singleton)."""
    global _storage_backend

    if _storage_backend is None:
        _storage_backend = create_storage_backend()
        logger.info(f"Cart storage backend: {type(_storage_backend).__name__}")

    return _storage_backend


class StorageKeys:
    """Storage keys used by the storefront."""

    CART = CART_STORAGE_KEY
