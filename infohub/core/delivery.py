# infohub/core/delivery.py
"""Delivery receipts for deduplicating Slack's at-least-once redeliveries.

Slack retries an event callback when it does not see a timely 200, so the
same event can arrive several times. A receipt is claimed the first time an
event is dispatched and kept for a bounded retention window; a second claim
for the same key inside that window is refused.

Receipts live in process memory. Separate processes do not share them, so a
retry routed to another instance is processed again.
"""

import logging
import threading
import time
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 300.0


def delivery_key(
    event_id: str | None, channel: str = "", user_id: str = "", ts: str = ""
) -> str:
    """Build the dedup key for a delivery.

    Args:
        event_id: Envelope event id, preferred when present.
        channel: Channel id (fallback key part).
        user_id: Author user id (fallback key part).
        ts: Event timestamp (fallback key part).

    Returns:
        The event id, or "channel:user:ts" when no event id was sent.
        Empty when none of the parts are present.
    """
    if event_id:
        return event_id
    if not (channel or user_id or ts):
        return ""
    return f"{channel}:{user_id}:{ts}"


class DeliveryStore(Protocol):
    """Storage capability for delivery receipts."""

    def get(self, key: str) -> float | None: ...

    def put(self, key: str, ttl: float | None = None) -> None: ...

    def claim(self, key: str, ttl: float | None = None) -> bool: ...

    def sweep(self) -> int: ...


class InMemoryDeliveryStore:
    """Process-local receipt store guarded by a single lock.

    The lock is only held for dictionary operations, never across an await.

    Attributes:
        ttl: Default retention window in seconds.
    """

    def __init__(
        self,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._receipts: dict[str, float] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> float | None:
        """Return the expiry time of a live receipt, or None."""
        with self._lock:
            expires_at = self._receipts.get(key)
            if expires_at is None or expires_at <= self._clock():
                return None
            return expires_at

    def put(self, key: str, ttl: float | None = None) -> None:
        """Record (or refresh) a receipt."""
        with self._lock:
            self._receipts[key] = self._clock() + (self.ttl if ttl is None else ttl)

    def claim(self, key: str, ttl: float | None = None) -> bool:
        """Atomically record a receipt unless a live one already exists.

        Returns:
            True if this call recorded the receipt, False for a redelivery.
        """
        with self._lock:
            now = self._clock()
            expires_at = self._receipts.get(key)
            if expires_at is not None and expires_at > now:
                return False
            self._receipts[key] = now + (self.ttl if ttl is None else ttl)
            return True

    def sweep(self) -> int:
        """Drop expired receipts.

        Returns:
            Number of receipts removed.
        """
        with self._lock:
            now = self._clock()
            expired = [key for key, expires in self._receipts.items() if expires <= now]
            for key in expired:
                del self._receipts[key]
        if expired:
            logger.debug("Swept %d expired delivery receipts", len(expired))
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
