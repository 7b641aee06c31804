# infohub/interfaces/slack/dispatcher.py
"""Webhook dispatcher for the Slack Events API.

Every request walks the same path and gets exactly one response:

    read raw body -> verify signature -> decode and classify
        url_verification -> echo the challenge
        event_callback   -> claim delivery receipt -> ack 200
                            (parse -> route -> post reply)
        anything else    -> 200 "OK" (lenient) or 405

Only body, signature and JSON failures change the status code. Once an
event is classified it is acknowledged with 200, because Slack retries any
other status and retrying will not fix a failing handler. Command
processing runs after the acknowledgment unless process_before_response is
set (for platforms that freeze the process once the response is sent).
"""

import json
import logging
import time
from collections.abc import AsyncIterable, Awaitable, Callable, Mapping
from dataclasses import dataclass
from functools import partial
from typing import Any

from infohub.config import Settings
from infohub.core.commands import (
    CommandContext,
    CommandRouter,
    ReplyPayload,
    build_handlers,
    parse_command,
)
from infohub.core.completion import TextCompletionService
from infohub.core.delivery import DeliveryStore, InMemoryDeliveryStore
from infohub.interfaces.slack.errors import (
    AuthError,
    ParseError,
    PayloadTooLargeError,
    SendError,
    TransportError,
    UnsupportedPayloadError,
    WebhookError,
)
from infohub.interfaces.slack.events import InboundEvent, PayloadType, classify_payload
from infohub.interfaces.slack.messaging import MessagingClient, SlackMessagingClient
from infohub.interfaces.slack.verification import verify
from infohub.middleware.ratelimit import RateLimiter
from infohub.utils.logging import bind_request_id

logger = logging.getLogger(__name__)

ALIVE_TEXT = "👍 Alive"
ACK_TEXT = "OK"
DEFAULT_MAX_BODY_BYTES = 1024 * 1024

SIGNATURE_HEADER = "x-slack-signature"
TIMESTAMP_HEADER = "x-slack-request-timestamp"
RETRY_NUM_HEADER = "x-slack-retry-num"
RETRY_REASON_HEADER = "x-slack-retry-reason"


@dataclass
class DispatchResponse:
    """HTTP response decided by the dispatcher.

    Attributes:
        status_code: HTTP status code.
        body: JSON object (dict) or plain text (str).
        background: Work to run after the response is sent, if any.
    """

    status_code: int
    body: dict[str, Any] | str
    background: Callable[[], Awaitable[None]] | None = None


def _error_response(error: WebhookError) -> DispatchResponse:
    return DispatchResponse(error.status_code, {"error": error.public_message})


async def read_body(chunks: AsyncIterable[bytes], limit: int = DEFAULT_MAX_BODY_BYTES) -> bytes:
    """Accumulate the full raw request body.

    Args:
        chunks: Body stream, e.g. Starlette's request.stream().
        limit: Maximum body size in bytes.

    Returns:
        The raw body bytes.

    Raises:
        PayloadTooLargeError: If the body exceeds `limit`.
        TransportError: If reading the stream fails.
    """
    buffer = bytearray()
    try:
        async for chunk in chunks:
            buffer.extend(chunk)
            if len(buffer) > limit:
                raise PayloadTooLargeError(f"body exceeds {limit} bytes")
    except WebhookError:
        raise
    except Exception as e:
        raise TransportError(str(e)) from e
    return bytes(buffer)


class WebhookDispatcher:
    """Orchestrates verification, classification, dedup and command dispatch.

    Attributes:
        router: Routes parsed commands to handlers.
        messaging: Posts replies back to Slack.
        store: Delivery receipts for redelivery detection.
        completion: Completion service, exposed for health reporting.
    """

    def __init__(
        self,
        signing_secret: str,
        router: CommandRouter,
        messaging: MessagingClient,
        store: DeliveryStore,
        *,
        completion: TextCompletionService | None = None,
        handshake_bypass: bool = False,
        lenient_unsupported: bool = True,
        process_before_response: bool = False,
        max_body_bytes: int = DEFAULT_MAX_BODY_BYTES,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._signing_secret = signing_secret
        self.router = router
        self.messaging = messaging
        self.store = store
        self.completion = completion
        self.handshake_bypass = handshake_bypass
        self.lenient_unsupported = lenient_unsupported
        self.process_before_response = process_before_response
        self.max_body_bytes = max_body_bytes
        self._clock = clock

    async def handle(
        self, method: str, headers: Mapping[str, str], chunks: AsyncIterable[bytes]
    ) -> DispatchResponse:
        """Handle one HTTP request to the webhook endpoint.

        Args:
            method: HTTP method.
            headers: Request headers (any case).
            chunks: Raw body stream.

        Returns:
            The response to send; never raises.
        """
        if method == "GET":
            return DispatchResponse(200, ALIVE_TEXT)
        if method != "POST":
            return DispatchResponse(405, {"error": "Method Not Allowed"})

        try:
            raw_body = await read_body(chunks, self.max_body_bytes)
        except WebhookError as e:
            logger.error("Failed to read request body: %s", e)
            return _error_response(e)

        return await self.handle_post(raw_body, headers)

    async def handle_post(self, raw_body: bytes, headers: Mapping[str, str]) -> DispatchResponse:
        """Verify, classify and dispatch a fully read POST body."""
        lowered = {key.lower(): value for key, value in headers.items()}

        try:
            verify(
                raw_body,
                lowered.get(TIMESTAMP_HEADER),
                lowered.get(SIGNATURE_HEADER),
                self._signing_secret,
                now=self._clock(),
            )
        except AuthError as e:
            if self.handshake_bypass:
                handshake = self._unsigned_handshake(raw_body)
                if handshake is not None:
                    logger.warning("Answering url_verification without a valid signature")
                    return handshake
            logger.warning("Rejected unsigned request: %s", type(e).__name__)
            return _error_response(e)

        try:
            payload = json.loads(raw_body)
        except (ValueError, RecursionError) as e:
            logger.error("JSON parse error: %s", e)
            return _error_response(ParseError())

        event = classify_payload(payload)
        if event.type == PayloadType.HANDSHAKE:
            logger.info("URL verification challenge received")
            return DispatchResponse(200, {"challenge": event.challenge})
        if event.type == PayloadType.UNSUPPORTED:
            if self.lenient_unsupported:
                return DispatchResponse(200, ACK_TEXT)
            return _error_response(UnsupportedPayloadError())

        return await self._accept_event(event, lowered)

    def _unsigned_handshake(self, raw_body: bytes) -> DispatchResponse | None:
        try:
            event = classify_payload(json.loads(raw_body))
        except (ValueError, RecursionError):
            return None
        if event.type != PayloadType.HANDSHAKE:
            return None
        return DispatchResponse(200, {"challenge": event.challenge})

    async def _accept_event(self, event: InboundEvent, headers: Mapping[str, str]) -> DispatchResponse:
        key = event.delivery_key
        retry_num = headers.get(RETRY_NUM_HEADER)
        if retry_num:
            logger.info(
                "Slack retry #%s for %s (%s)",
                retry_num,
                key,
                headers.get(RETRY_REASON_HEADER, "unknown"),
            )

        if not key:
            logger.warning("Event without id, channel, user or ts; skipping dedup")
        elif not self.store.claim(key):
            logger.info("Duplicate delivery %s - already dispatched", key)
            return DispatchResponse(200, ACK_TEXT)

        if self.process_before_response:
            await self.dispatch_safely(event)
            return DispatchResponse(200, ACK_TEXT)
        return DispatchResponse(200, ACK_TEXT, background=partial(self.dispatch_safely, event))

    async def dispatch_safely(self, event: InboundEvent) -> None:
        """Run dispatch() and log, rather than raise, any failure."""
        with bind_request_id(event.delivery_key):
            try:
                await self.dispatch(event)
            except Exception:
                logger.exception("Failed to process event %s", event.delivery_key)

    def should_handle(self, event: InboundEvent) -> bool:
        """Decide whether an event is a command addressed to the bot.

        Mentions are always handled. Plain messages are handled only in
        direct messages, since channel mentions also arrive as app_mention.
        Bot-authored messages and message subtypes (edits, joins...) are
        ignored.
        """
        if event.authored_by_bot:
            return False
        if event.bot_user_id and event.user_id == event.bot_user_id:
            return False
        if event.event_type == "app_mention":
            return True
        return (
            event.event_type == "message"
            and event.channel_type == "im"
            and not event.subtype
        )

    async def dispatch(self, event: InboundEvent) -> ReplyPayload | None:
        """Parse, route and reply to a classified event.

        Returns:
            The reply that was produced, or None if the event was ignored.
        """
        if not self.should_handle(event):
            logger.debug("Ignoring %s event %s", event.event_type, event.delivery_key)
            return None

        parsed = parse_command(event.text, event.bot_user_id)
        logger.info(
            "Dispatching %s from %s: command=%s",
            event.event_type,
            event.user_id or "unknown",
            parsed.name,
        )
        reply = await self.router.route(
            parsed, CommandContext(user_id=event.user_id, channel=event.channel)
        )

        try:
            await self.messaging.post_message(event.channel, event.reply_thread_ts, reply.text)
        except SendError as e:
            logger.error("Failed to send reply for %s: %s", event.delivery_key, e)
        return reply


def build_dispatcher(settings: Settings) -> WebhookDispatcher:
    """Assemble the production dispatcher from settings.

    Raises:
        ConfigurationError: If the signing secret or bot token is missing.
    """
    settings.require_slack_credentials()

    completion = TextCompletionService.from_settings(settings)
    router = CommandRouter(build_handlers(completion), rate_limiter=RateLimiter())
    return WebhookDispatcher(
        signing_secret=settings.slack_signing_secret,
        router=router,
        messaging=SlackMessagingClient.from_token(settings.slack_bot_token),
        store=InMemoryDeliveryStore(ttl=settings.dedup_ttl_seconds),
        completion=completion,
        handshake_bypass=settings.slack_handshake_bypass,
        lenient_unsupported=settings.slack_lenient_unsupported,
        process_before_response=settings.slack_process_before_response,
        max_body_bytes=settings.slack_max_body_bytes,
    )
