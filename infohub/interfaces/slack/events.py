# infohub/interfaces/slack/events.py
"""Classification of decoded Slack payloads into inbound events."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import ValidationError

from infohub.core.delivery import delivery_key
from infohub.interfaces.slack.schemas import SlackEnvelope

logger = logging.getLogger(__name__)

URL_VERIFICATION = "url_verification"
EVENT_CALLBACK = "event_callback"


class PayloadType(str, Enum):
    HANDSHAKE = URL_VERIFICATION
    EVENT_CALLBACK = EVENT_CALLBACK
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class InboundEvent:
    """One classified Slack delivery.

    Attributes:
        type: HANDSHAKE, EVENT_CALLBACK or UNSUPPORTED.
        challenge: Handshake token, echoed verbatim (any JSON value).
        event_id: Envelope event id ("" when absent).
        event_type: Inner event type, e.g. "app_mention".
        text: Message text.
        channel: Channel id.
        channel_type: "im" for direct messages.
        ts: Timestamp of the message itself.
        thread_ts: Thread the message belongs to, if any.
        user_id: Author user id.
        bot_user_id: The bot's own user id from the authorizations.
        authored_by_bot: True for messages posted by a bot.
        subtype: Message subtype (edits, deletions, bot messages...).
    """

    type: PayloadType
    challenge: Any = None
    event_id: str = ""
    event_type: str = ""
    text: str = ""
    channel: str = ""
    channel_type: str = ""
    ts: str = ""
    thread_ts: str = ""
    user_id: str = ""
    bot_user_id: str | None = None
    authored_by_bot: bool = False
    subtype: str | None = None

    @property
    def reply_thread_ts(self) -> str:
        """Thread to reply in: the existing thread, or start one on the message."""
        return self.thread_ts or self.ts

    @property
    def delivery_key(self) -> str:
        return delivery_key(self.event_id, self.channel, self.user_id, self.ts)


UNSUPPORTED = InboundEvent(type=PayloadType.UNSUPPORTED)


def classify_payload(payload: Any) -> InboundEvent:
    """Classify a decoded JSON body.

    Args:
        payload: Result of json.loads on the request body.

    Returns:
        InboundEvent; UNSUPPORTED for non-objects, unknown types and event
        callbacks without an event object.
    """
    if not isinstance(payload, dict):
        return UNSUPPORTED

    payload_type = payload.get("type")
    if payload_type == URL_VERIFICATION:
        return InboundEvent(type=PayloadType.HANDSHAKE, challenge=payload.get("challenge"))

    if payload_type != EVENT_CALLBACK:
        logger.info("Unsupported payload type: %r", payload_type)
        return UNSUPPORTED

    try:
        envelope = SlackEnvelope.model_validate(payload)
    except ValidationError as e:
        logger.warning("Malformed event callback: %s", e.errors()[:3])
        return UNSUPPORTED

    event = envelope.event
    if event is None:
        logger.warning("Event callback %s has no event object", envelope.event_id)
        return UNSUPPORTED

    bot_user_id = next(
        (auth.user_id for auth in envelope.authorizations if auth.user_id), None
    )
    return InboundEvent(
        type=PayloadType.EVENT_CALLBACK,
        event_id=envelope.event_id or "",
        event_type=event.type,
        text=event.text,
        channel=event.channel,
        channel_type=event.channel_type,
        ts=event.ts or event.event_ts,
        thread_ts=event.thread_ts or "",
        user_id=event.user,
        bot_user_id=bot_user_id,
        authored_by_bot=bool(event.bot_id) or event.subtype == "bot_message",
        subtype=event.subtype,
    )
