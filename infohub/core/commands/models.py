# infohub/core/commands/models.py
"""Data models shared by the command parser, router and handlers."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Command categories, in the order they are listed in help output."""

    BASIC = "Basic Commands"
    AI = "AI-Powered Features"
    INFO_HUB = "Information Hub"


@dataclass(frozen=True)
class CommandSpec:
    """Static catalog entry describing one command.

    Attributes:
        name: Command name (lowercase).
        usage: Usage template shown after the mention, e.g. "ask [question]".
        description: One-line description for help output.
        category: Category the command belongs to.
        examples: Example invocations.

    Example:
        >>> CommandSpec(
        ...     name="ping",
        ...     usage="ping",
        ...     description="Check if bot is responsive",
        ...     category=Category.BASIC,
        ...     examples=("@bot ping",),
        ... )
    """

    name: str
    usage: str
    description: str
    category: Category
    examples: tuple[str, ...] = ()


@dataclass(frozen=True)
class BotInfo:
    """Static bot description rendered by the info and status commands."""

    name: str
    version: str
    description: str
    features: tuple[str, ...] = ()
    github: str = ""
    support: str = ""


@dataclass(frozen=True)
class ReplyPayload:
    """A chat reply produced by a command handler."""

    text: str


@dataclass
class CommandContext:
    """Everything a handler receives about one invocation.

    Attributes:
        args: Arguments following the command name.
        raw_args: Arguments joined with single spaces.
        user_id: Slack user id of the requester.
        channel: Channel id the command was sent in.
    """

    args: list[str] = field(default_factory=list)
    raw_args: str = ""
    user_id: str = ""
    channel: str = ""


Handler = Callable[[CommandContext], Awaitable[ReplyPayload]]
