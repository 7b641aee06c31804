# infohub/interfaces/api/security.py
"""Per-client rate limiting for the auxiliary HTTP endpoints.

The Slack webhook itself is not limited here: Slack is the only caller,
every request is signature checked, and a throttled delivery would only be
retried. Per-user command throttling lives in infohub.middleware.ratelimit.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from infohub.config import settings

limiter = Limiter(key_func=get_remote_address)


def health_rate_limit() -> str:
    """slowapi limit string for /health, e.g. "60/minute"."""
    return f"{settings.api_rate_limit}/minute"
