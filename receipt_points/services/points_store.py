"""Points store abstraction.

Supports two backends selected via ``settings.POINTS_STORE_BACKEND``:

1. **memory** (default): A dict guarded by a lock. Points live for the
   lifetime of the process.
2. **redis**: Points are written to Redis under
   ``settings.REDIS_KEY_PREFIX`` so they survive a restart of the API.

Callers only depend on the :class:`PointsStore` protocol. Every
identifier is a time-ordered UUID and every record is written exactly
once; there is no update or delete.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, Optional, Protocol

import redis

from receipt_points.core.config import Settings
from receipt_points.models.enums import StoreBackend

logger = logging.getLogger(__name__)


class ReceiptPointsError(Exception):
    """Base class for errors raised by the points store and receipt service."""


class PointsStoreError(ReceiptPointsError):
    """The store could not issue an identifier or persist a record."""


class PointsNotFoundError(ReceiptPointsError):
    """No points are stored for the requested identifier."""

    def __init__(self, point_id: str):
        super().__init__(f"unable to find points for: {point_id}")
        self.point_id = point_id


class PointsStore(Protocol):
    """Storage operations required by the receipt service."""

    def create(self, points: int) -> str:
        ...

    def get(self, point_id: str) -> int:
        ...


def _new_point_id() -> str:
    return str(uuid.uuid1())


class InMemoryPointsStore:
    """Process-local store; each call holds the lock for its single read or write."""

    def __init__(self) -> None:
        self._points: Dict[str, int] = {}
        self._lock = threading.Lock()

    def create(self, points: int) -> str:
        point_id = _new_point_id()
        with self._lock:
            if point_id in self._points:
                raise PointsStoreError(f"identifier collision for {point_id}")
            self._points[point_id] = points
        return point_id

    def get(self, point_id: str) -> int:
        with self._lock:
            points = self._points.get(point_id)
        if points is None:
            raise PointsNotFoundError(point_id)
        return points

    def __len__(self) -> int:
        with self._lock:
            return len(self._points)


class RedisPointsStore:
    """Store backed by Redis string keys.

    Writes use ``SET NX`` so an existing record is never overwritten.
    Connection and protocol failures surface as :class:`PointsStoreError`.
    """

    def __init__(self, client: "redis.Redis", key_prefix: str = "receipt-points:") -> None:
        self._client = client
        self._key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, key_prefix: str = "receipt-points:") -> "RedisPointsStore":
        return cls(redis.Redis.from_url(url, decode_responses=True), key_prefix=key_prefix)

    def _key(self, point_id: str) -> str:
        return f"{self._key_prefix}{point_id}"

    def create(self, points: int) -> str:
        point_id = _new_point_id()
        try:
            stored = self._client.set(self._key(point_id), points, nx=True)
        except redis.RedisError as exc:
            raise PointsStoreError(f"unable to store points: {exc}") from exc
        if not stored:
            raise PointsStoreError(f"identifier collision for {point_id}")
        return point_id

    def get(self, point_id: str) -> int:
        try:
            raw: Optional[str] = self._client.get(self._key(point_id))
        except redis.RedisError as exc:
            raise PointsStoreError(f"unable to read points: {exc}") from exc
        if raw is None:
            raise PointsNotFoundError(point_id)
        return int(raw)


def get_points_store(settings: Settings) -> PointsStore:
    """Build the store configured by ``settings.POINTS_STORE_BACKEND``."""
    backend = StoreBackend(settings.POINTS_STORE_BACKEND)
    if backend is StoreBackend.REDIS:
        logger.info("Using redis points store at %s", settings.REDIS_URL)
        return RedisPointsStore.from_url(settings.REDIS_URL, key_prefix=settings.REDIS_KEY_PREFIX)
    logger.info("Using in-memory points store")
    return InMemoryPointsStore()
