# infohub/utils/observability.py
"""Optional tracing through Pydantic Logfire.

Tracing is enabled only when LOGFIRE_TOKEN is set. The logfire package is
an optional extra and is imported lazily, so the webhook runs without it.
"""

import logging
from typing import Any

from infohub.config import settings

logger = logging.getLogger(__name__)


def setup_logfire(app: Any | None = None) -> bool:
    """Send completion and HTTP traces to Logfire.

    Args:
        app: FastAPI application whose requests should be traced.

    Returns:
        True when tracing is active.
    """
    token = settings.logfire_token
    if not token:
        return False

    try:
        import logfire

        logfire.configure(token=token, service_name="infohub")
        logfire.instrument_pydantic_ai()
        if app is not None:
            logfire.instrument_fastapi(app)
    except Exception as e:
        logger.warning("Logfire tracing disabled: %s", e)
        return False

    logger.info("Logfire tracing enabled")
    return True
