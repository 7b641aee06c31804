# infohub/middleware/ratelimit/__init__.py
"""Per-user throttling of bot commands.

Example:
    >>> from infohub.middleware.ratelimit import RateLimiter, AI_BUCKET
    >>> limiter = RateLimiter()
    >>> decision = limiter.check("U123", AI_BUCKET)
    >>> if not decision.allowed:
    ...     print(decision.message)
"""

from infohub.middleware.ratelimit.core import (
    AI_BUCKET,
    BASIC_BUCKET,
    DEFAULT_POLICIES,
    BucketPolicy,
    RateLimitDecision,
    RateLimiter,
)

__all__ = [
    "AI_BUCKET",
    "BASIC_BUCKET",
    "DEFAULT_POLICIES",
    "BucketPolicy",
    "RateLimitDecision",
    "RateLimiter",
]
