# tests/conftest.py
"""Shared pytest fixtures for all test modules.

Provides common fixtures for:
- Signed Slack request construction
- A recording messaging client
- Dispatchers wired with in-memory collaborators
"""

import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest

from infohub.core.commands import CommandRouter, ReplyPayload
from infohub.core.delivery import InMemoryDeliveryStore
from infohub.interfaces.slack.dispatcher import WebhookDispatcher
from infohub.interfaces.slack.errors import SendError
from infohub.interfaces.slack.verification import compute_signature

SIGNING_SECRET = "8f742231b10e8888abcd99yyyzzz85a5"
NOW = 1_700_000_000
BOT_USER_ID = "UBOT"


class RecordingMessaging:
    """MessagingClient that records posts instead of calling Slack."""

    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.fail = fail

    async def post_message(self, channel: str, thread_ts: str, text: str) -> None:
        if self.fail:
            raise SendError("channel_not_found")
        self.sent.append((channel, thread_ts, text))


async def body_stream(body: bytes) -> AsyncIterator[bytes]:
    """Yield a body the way Starlette's request.stream() does."""
    yield body


def signed_headers(body: bytes, timestamp: int = NOW, secret: str = SIGNING_SECRET) -> dict[str, str]:
    """Headers Slack would send for `body`."""
    return {
        "Content-Type": "application/json",
        "X-Slack-Request-Timestamp": str(timestamp),
        "X-Slack-Signature": compute_signature(secret, str(timestamp), body),
    }


def mention_payload(
    text: str,
    event_id: str = "Ev001",
    user: str = "U123",
    channel: str = "C1",
    ts: str = "1700000000.000100",
    **event_fields: Any,
) -> dict[str, Any]:
    """Build an event_callback envelope wrapping an app_mention."""
    event = {
        "type": "app_mention",
        "text": text,
        "user": user,
        "channel": channel,
        "ts": ts,
        "event_ts": ts,
    }
    event.update(event_fields)
    return {
        "token": "legacy",
        "team_id": "T1",
        "type": "event_callback",
        "event_id": event_id,
        "event_time": NOW,
        "event": event,
        "authorizations": [{"user_id": BOT_USER_ID, "is_bot": True}],
    }


def encode(payload: Any) -> bytes:
    return json.dumps(payload).encode("utf-8")


async def echo_handler(ctx) -> ReplyPayload:
    return ReplyPayload(text=f"echo {ctx.raw_args}".strip())


@pytest.fixture
def messaging() -> RecordingMessaging:
    return RecordingMessaging()


@pytest.fixture
def store() -> InMemoryDeliveryStore:
    return InMemoryDeliveryStore(ttl=300)


@pytest.fixture
def make_dispatcher(
    messaging: RecordingMessaging, store: InMemoryDeliveryStore
) -> Callable[..., WebhookDispatcher]:
    """Factory for dispatchers with a fixed clock and an echo router.

    Keyword arguments override the WebhookDispatcher options.
    """

    def factory(router: CommandRouter | None = None, **options: Any) -> WebhookDispatcher:
        options.setdefault("clock", lambda: NOW)
        return WebhookDispatcher(
            SIGNING_SECRET,
            router or CommandRouter({"echo": echo_handler, "help": echo_handler}),
            messaging,
            store,
            **options,
        )

    return factory
