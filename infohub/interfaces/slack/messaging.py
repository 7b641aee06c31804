# infohub/interfaces/slack/messaging.py
"""Outbound Slack messaging.

Replies are posted with chat.postMessage into the thread of the message
that triggered them. Texts longer than Slack's limit are split at natural
boundaries and posted as numbered parts.
"""

import logging
from typing import Protocol

import aiohttp
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from infohub.interfaces.slack.errors import SendError

logger = logging.getLogger(__name__)

SLACK_MESSAGE_LIMIT = 3000


class MessagingClient(Protocol):
    """Capability for posting a reply into a channel thread."""

    async def post_message(self, channel: str, thread_ts: str, text: str) -> None: ...


def split_message(text: str, limit: int = SLACK_MESSAGE_LIMIT) -> list[str]:
    """Break a reply into parts of at most `limit` characters.

    Cuts at the last paragraph break in the window if it lies in the second
    half, else at the last newline or space past 30% of the window, else
    exactly at `limit`. Whitespace around a cut is dropped.
    """
    if len(text) <= limit:
        return [text]

    chunks = []
    remaining = text
    while len(remaining) > limit:
        window = remaining[:limit]
        split_at = window.rfind("\n\n")
        if split_at < limit * 0.5:
            split_at = window.rfind("\n")
        if split_at < limit * 0.3:
            split_at = window.rfind(" ")
        if split_at < limit * 0.3:
            split_at = limit

        chunks.append(remaining[:split_at].rstrip())
        remaining = remaining[split_at:].lstrip()

    if remaining:
        chunks.append(remaining)
    return chunks


class SlackMessagingClient:
    """MessagingClient backed by slack_sdk's AsyncWebClient."""

    def __init__(self, client: AsyncWebClient, message_limit: int = SLACK_MESSAGE_LIMIT) -> None:
        self.client = client
        self.message_limit = message_limit

    @classmethod
    def from_token(cls, token: str) -> "SlackMessagingClient":
        return cls(AsyncWebClient(token=token))

    async def post_message(self, channel: str, thread_ts: str, text: str) -> None:
        """Post a reply, splitting it into parts when needed.

        Args:
            channel: Channel the triggering message was posted in.
            thread_ts: Thread to reply in; "" posts to the channel itself.
            text: Message text (Slack mrkdwn).

        Raises:
            SendError: If Slack rejects the message or the call fails.
        """
        chunks = split_message(text, self.message_limit)
        for i, chunk in enumerate(chunks):
            if len(chunks) > 1:
                chunk = f"{chunk}\n({i + 1}/{len(chunks)})"
            try:
                await self.client.chat_postMessage(
                    channel=channel, thread_ts=thread_ts or None, text=chunk
                )
            except SlackApiError as e:
                error = e.response.get("error") if e.response is not None else None
                raise SendError(f"chat.postMessage failed: {error or e}") from e
            except (TimeoutError, aiohttp.ClientError) as e:
                raise SendError(f"chat.postMessage failed: {e}") from e
        logger.info("Posted reply to %s (%d part(s))", channel, len(chunks))
