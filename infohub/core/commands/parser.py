"""Pure function-based command parser for extracting commands from mention text."""

import re
from dataclasses import dataclass, field

# Any user mention, used when the bot's own user id is unknown
_ANY_MENTION = r"<@[A-Z0-9]+(?:\|[^>]*)?>"


@dataclass
class ParsedCommand:
    """Represents a parsed command with name and arguments.

    Attributes:
        name: The command name (lowercase normalized), or None when the
            text contains nothing after the mention.
        args: Remaining whitespace-separated tokens.
        raw_args: The args joined with single spaces.
    """

    name: str | None = None
    args: list[str] = field(default_factory=list)
    raw_args: str = ""


def _mention_pattern(bot_user_id: str | None) -> re.Pattern:
    if bot_user_id:
        return re.compile(rf"^\s*<@{re.escape(bot_user_id)}(?:\|[^>]*)?>\s*")
    return re.compile(rf"^\s*{_ANY_MENTION}\s*")


def parse_command(text: object, bot_user_id: str | None = None) -> ParsedCommand:
    """Parse a command from mention text.

    Strips one leading bot mention (`<@U123>`) and splits the rest on
    whitespace. The first token, lower-cased, is the command name; the
    remaining tokens are its arguments. Text without a mention is parsed
    the same way, so direct messages work too. Never raises.

    Args:
        text: Raw event text.
        bot_user_id: The bot's Slack user id. When unknown, one leading
            mention of any user is stripped instead.

    Returns:
        ParsedCommand; name is None if no tokens remain.

    Examples:
        >>> parse_command("<@U1> help ai", "U1")
        ParsedCommand(name='help', args=['ai'], raw_args='ai')

        >>> parse_command("<@U1>", "U1")
        ParsedCommand(name=None, args=[], raw_args='')

        >>> parse_command("PING", "U1")
        ParsedCommand(name='ping', args=[], raw_args='')
    """
    if not isinstance(text, str):
        return ParsedCommand()

    cleaned = _mention_pattern(bot_user_id).sub("", text, count=1)
    tokens = cleaned.split()
    if not tokens:
        return ParsedCommand()

    args = tokens[1:]
    return ParsedCommand(name=tokens[0].lower(), args=args, raw_args=" ".join(args))
