# infohub/interfaces/api/main.py
"""FastAPI application exposing the Slack webhook.

Routes:
- GET /slack: liveness text
- POST /slack: Slack Events API callbacks
- any other method on /slack: 405
- GET /health: readiness report

The webhook endpoint hands the raw body stream to the WebhookDispatcher so
the signature is checked against the exact bytes Slack sent.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette.background import BackgroundTask

# Settings read os.environ at import time, so .env must be loaded first
load_dotenv()

from infohub.config import settings  # noqa: E402
from infohub.core.lifecycle import LifecycleManager  # noqa: E402
from infohub.core.sweeper import SweepScheduler  # noqa: E402
from infohub.interfaces.api.security import (  # noqa: E402
    health_rate_limit,
    limiter,
)
from infohub.interfaces.slack.dispatcher import (  # noqa: E402
    DispatchResponse,
    WebhookDispatcher,
    build_dispatcher,
)
from infohub.utils.logging import configure_logging  # noqa: E402
from infohub.utils.observability import setup_logfire  # noqa: E402

logger = logging.getLogger(__name__)

WEBHOOK_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE"]


def to_http_response(result: DispatchResponse) -> Response:
    """Convert a dispatcher decision into a Starlette response."""
    background = BackgroundTask(result.background) if result.background else None
    if isinstance(result.body, dict):
        return JSONResponse(
            status_code=result.status_code, content=result.body, background=background
        )
    return PlainTextResponse(
        status_code=result.status_code, content=result.body, background=background
    )


def create_app(dispatcher: WebhookDispatcher | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        dispatcher: Pre-built dispatcher (tests). When omitted it is built
            from settings at startup, which fails if the Slack signing
            secret or bot token is missing.

    Returns:
        Configured FastAPI application.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Build the dispatcher if needed and run the delivery sweep."""
        if app.state.dispatcher is None:
            app.state.dispatcher = build_dispatcher(settings)

        lifecycle = LifecycleManager()
        lifecycle.register(
            "delivery-sweep",
            SweepScheduler(app.state.dispatcher.store, settings.sweep_interval_seconds),
        )
        app.state.lifecycle = lifecycle
        await lifecycle.startup()
        logger.info("Slack webhook ready")

        yield

        await lifecycle.shutdown()
        logger.info("Slack webhook stopped")

    app = FastAPI(
        title="Info Hub Bot",
        description="Slack Events API webhook for the Info Hub bot",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.dispatcher = dispatcher
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    @app.api_route("/slack", methods=WEBHOOK_METHODS)
    async def slack_webhook(request: Request) -> Response:
        """Receive Slack Events API callbacks."""
        active: WebhookDispatcher | None = request.app.state.dispatcher
        if active is None:
            return JSONResponse(status_code=503, content={"error": "Service Unavailable"})
        result = await active.handle(request.method, request.headers, request.stream())
        return to_http_response(result)

    @app.get("/health")
    @limiter.limit(health_rate_limit)
    async def health_check(request: Request) -> dict[str, Any]:
        """Health check endpoint.

        Returns:
            Dictionary with health status and AI availability.
        """
        active: WebhookDispatcher | None = request.app.state.dispatcher
        completion = active.completion if active is not None else None
        return {
            "status": "healthy" if active is not None else "starting",
            "ai_ready": bool(completion is not None and completion.available),
        }

    setup_logfire(app)
    return app


app = create_app()


def main() -> None:
    """Run the webhook server with uvicorn."""
    import uvicorn

    configure_logging(settings.log_level, settings.log_json)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
