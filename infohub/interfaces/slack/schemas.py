# infohub/interfaces/slack/schemas.py
"""Pydantic models for Slack Events API payloads.

Only the fields the dispatcher reads are declared; everything else Slack
sends is kept as extra data and ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class SlackAuthorization(BaseModel):
    """One entry of the envelope's `authorizations` list."""

    model_config = ConfigDict(extra="allow")

    user_id: str | None = Field(None, description="Bot user id in the workspace")
    is_bot: bool = False


class SlackEvent(BaseModel):
    """The inner `event` object of an event callback."""

    model_config = ConfigDict(extra="allow")

    type: str = Field("", description="Event type, e.g. app_mention or message")
    text: str = ""
    channel: str = ""
    channel_type: str = ""
    user: str = ""
    ts: str = ""
    thread_ts: str | None = None
    event_ts: str = ""
    bot_id: str | None = None
    subtype: str | None = None


class SlackEnvelope(BaseModel):
    """Top-level Events API request body.

    Attributes:
        type: "url_verification" or "event_callback".
        challenge: Handshake token to echo back (url_verification only).
        event_id: Unique delivery id (event_callback only).
        event: The wrapped event (event_callback only).
        authorizations: Installations the event is delivered for.
    """

    model_config = ConfigDict(extra="allow")

    type: str = ""
    challenge: str | None = None
    token: str | None = None
    team_id: str | None = None
    event_id: str | None = None
    event_time: int | None = None
    event: SlackEvent | None = None
    authorizations: list[SlackAuthorization] = Field(default_factory=list)
