"""Temporary storage for extraction results awaiting payment.

Results live for a fixed TTL (one hour by default) and are swept
periodically. The store is injected into routes through ``get_result_store``
so a persistent backend can replace the in-memory one.
"""

import logging
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import asdict, dataclass, field, replace
from typing import Literal

from contract_obligation.config import settings

logger = logging.getLogger(__name__)

PaymentStatus = Literal["pending", "success", "failed"]


@dataclass(frozen=True)
class StoredResult:
    """Extraction output kept until the user pays for it."""

    reference: str
    status: PaymentStatus
    obligations: list[dict]
    extracted_text: str = ""
    filename: str = "unknown"
    page_info: str = ""
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return asdict(self)


class ResultStore(ABC):
    """Key-value store for results with TTL eviction."""

    @abstractmethod
    def put(self, key: str, value: StoredResult) -> None:
        """Store a result under ``key``, replacing any previous value."""

    @abstractmethod
    def get(self, key: str) -> StoredResult | None:
        """Return the live result for ``key``, or None if missing or expired."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove ``key``; returns whether anything was removed."""

    @abstractmethod
    def update_status(self, key: str, status: PaymentStatus) -> StoredResult | None:
        """Change the payment status of a stored result."""

    @abstractmethod
    def sweep_expired(self) -> int:
        """Evict every expired result; returns how many were removed."""

    @abstractmethod
    def entries(self) -> list[StoredResult]:
        """All live results (used by debug endpoints)."""


class InMemoryResultStore(ResultStore):
    """Process-local store. Results are lost on restart."""

    def __init__(
        self,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = settings.result_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock
        self._data: dict[str, StoredResult] = {}
        self._lock = threading.Lock()

    def _is_expired(self, value: StoredResult) -> bool:
        return self._clock() - value.timestamp > self.ttl_seconds

    def put(self, key: str, value: StoredResult) -> None:
        value = replace(value, reference=key, timestamp=self._clock())
        with self._lock:
            self._data[key] = value
        logger.info(f"Stored results with reference: {key} (status: {value.status})")

    def get(self, key: str) -> StoredResult | None:
        with self._lock:
            value = self._data.get(key)
            if value is None:
                logger.info(f"No data found for reference: {key}")
                return None
            if self._is_expired(value):
                del self._data[key]
                logger.info(f"Data expired for reference: {key}")
                return None
        return value

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def update_status(self, key: str, status: PaymentStatus) -> StoredResult | None:
        with self._lock:
            value = self._data.get(key)
            if value is None or self._is_expired(value):
                return None
            # Keep the original timestamp: paying does not extend the TTL
            updated = replace(value, status=status)
            self._data[key] = updated
        logger.info(f"Updated status for reference: {key} -> {status}")
        return updated

    def sweep_expired(self) -> int:
        with self._lock:
            expired = [key for key, value in self._data.items() if self._is_expired(value)]
            for key in expired:
                del self._data[key]
        if expired:
            logger.info(f"Swept {len(expired)} expired results")
        return len(expired)

    def entries(self) -> list[StoredResult]:
        with self._lock:
            return [value for value in self._data.values() if not self._is_expired(value)]


# Singleton store instance
_store: ResultStore | None = None


def get_result_store() -> ResultStore:
    """
    Get or create the singleton result store.

    Used as a FastAPI dependency; tests override it with their own store.
    """
    global _store
    if _store is None:
        _store = InMemoryResultStore()
    return _store
