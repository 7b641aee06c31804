# infohub/middleware/ratelimit/core.py
"""Per-user command throttling.

Each bucket combines two moving windows from the `limits` library:
- a request budget per window (e.g. 10 AI commands per minute)
- a cooldown between consecutive requests (e.g. 1 request per 5 seconds)

A request is recorded only when every window of its bucket allows it.
Counters live in process memory and expire inside MemoryStorage.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Any

from limits import RateLimitItem, RateLimitItemPerMinute, RateLimitItemPerSecond
from limits.storage import MemoryStorage
from limits.strategies import MovingWindowRateLimiter

logger = logging.getLogger(__name__)

AI_BUCKET = "ai"
BASIC_BUCKET = "basic"


@dataclass(frozen=True)
class BucketPolicy:
    """Throttling policy for one command bucket.

    Attributes:
        max_requests: Requests allowed per minute.
        cooldown_seconds: Minimum seconds between two requests.
        label: Human readable bucket name used in messages.
    """

    max_requests: int
    cooldown_seconds: int
    label: str

    @property
    def window(self) -> RateLimitItem:
        return RateLimitItemPerMinute(self.max_requests)

    @property
    def cooldown(self) -> RateLimitItem:
        return RateLimitItemPerSecond(1, self.cooldown_seconds)


DEFAULT_POLICIES: dict[str, BucketPolicy] = {
    AI_BUCKET: BucketPolicy(max_requests=10, cooldown_seconds=5, label="ai commands"),
    BASIC_BUCKET: BucketPolicy(
        max_requests=30, cooldown_seconds=1, label="basic commands"
    ),
}


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        retry_after: Seconds until a retry can succeed (0 when allowed).
        message: User-facing explanation when denied.
    """

    allowed: bool
    retry_after: int = 0
    message: str = ""


class RateLimiter:
    """Moving-window rate limiter keyed by (bucket, user id)."""

    def __init__(self, policies: dict[str, BucketPolicy] | None = None) -> None:
        self.policies = policies if policies is not None else dict(DEFAULT_POLICIES)
        self._storage = MemoryStorage()
        self._limiter = MovingWindowRateLimiter(self._storage)

    def _retry_after(self, item: RateLimitItem, bucket: str, user_id: str) -> int:
        stats = self._limiter.get_window_stats(item, bucket, user_id)
        return max(1, math.ceil(stats.reset_time - time.time()))

    def check(self, user_id: str, bucket: str = AI_BUCKET) -> RateLimitDecision:
        """Check and record a request for a user.

        Args:
            user_id: Slack user id.
            bucket: Bucket name (AI_BUCKET or BASIC_BUCKET).

        Returns:
            RateLimitDecision; denied requests are not recorded.
        """
        policy = self.policies.get(bucket)
        if policy is None:
            logger.warning("Unknown rate limit bucket: %s", bucket)
            return RateLimitDecision(allowed=True)

        if not self._limiter.test(policy.cooldown, bucket, user_id):
            retry_after = self._retry_after(policy.cooldown, bucket, user_id)
            return RateLimitDecision(
                allowed=False,
                retry_after=retry_after,
                message=(
                    f"Please wait {retry_after} seconds before making "
                    "another request."
                ),
            )

        if not self._limiter.test(policy.window, bucket, user_id):
            retry_after = self._retry_after(policy.window, bucket, user_id)
            return RateLimitDecision(
                allowed=False,
                retry_after=retry_after,
                message=(
                    f"Rate limit exceeded. You can make {policy.max_requests} "
                    f"{policy.label} per minute. Try again in {retry_after} seconds."
                ),
            )

        self._limiter.hit(policy.window, bucket, user_id)
        self._limiter.hit(policy.cooldown, bucket, user_id)
        return RateLimitDecision(allowed=True)

    def status(self, user_id: str, bucket: str = AI_BUCKET) -> dict[str, Any]:
        """Report window usage for a user without recording a request."""
        policy = self.policies[bucket]
        stats = self._limiter.get_window_stats(policy.window, bucket, user_id)
        return {
            "requests_in_window": policy.max_requests - stats.remaining,
            "max_requests": policy.max_requests,
            "remaining_requests": stats.remaining,
            "reset_time": stats.reset_time,
        }

    def reset(self) -> None:
        """Forget all recorded requests."""
        self._storage.reset()
