# infohub/core/commands/router.py
"""Command router mapping parsed commands to handlers.

Routing outcomes:
- no command name -> the help handler
- implemented command -> rate limit check, then the bound handler
- catalog command without a handler -> "coming soon" notice
- unknown command -> "did you mean" suggestions
Handler exceptions are contained here and turned into an error reply.
"""

import logging
from collections.abc import Mapping

from infohub.core.commands.catalog import ALL_COMMANDS, get_command_by_name
from infohub.core.commands.models import (
    Category,
    CommandContext,
    CommandSpec,
    Handler,
    ReplyPayload,
)
from infohub.core.commands.parser import ParsedCommand
from infohub.core.commands.responses import (
    format_command_suggestions,
    format_error,
    format_info,
    format_warning,
)
from infohub.middleware.ratelimit import AI_BUCKET, BASIC_BUCKET, RateLimiter

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
HELP_COMMAND = "help"


def get_command_suggestions(
    command: str | None, valid_commands: list[str], limit: int = MAX_SUGGESTIONS
) -> list[str]:
    """Suggest known commands for a mistyped one.

    A known command is suggested if it starts with the same letter, contains
    the typed name, or is contained in it. Order follows `valid_commands`.

    Args:
        command: The unknown command name.
        valid_commands: Known command names in catalog order.
        limit: Maximum number of suggestions.

    Returns:
        Up to `limit` command names.
    """
    if not command:
        return []
    matches = [
        valid
        for valid in valid_commands
        if valid.startswith(command[0]) or command in valid or valid in command
    ]
    return matches[:limit]


def bucket_for(spec: CommandSpec | None) -> str:
    if spec is not None and spec.category == Category.AI:
        return AI_BUCKET
    return BASIC_BUCKET


class CommandRouter:
    """Routes parsed commands against a catalog and a handler table.

    Attributes:
        catalog: Known commands in declaration order.
        handlers: Implemented commands by name.
        rate_limiter: Optional per-user throttle applied before handlers.

    Example:
        >>> router = CommandRouter(handlers={"ping": handle_ping})
        >>> reply = await router.route(parse_command("<@U1> ping", "U1"))
    """

    def __init__(
        self,
        handlers: Mapping[str, Handler],
        catalog: tuple[CommandSpec, ...] = ALL_COMMANDS,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        self.catalog = catalog
        self.handlers = dict(handlers)
        self.rate_limiter = rate_limiter

    async def route(
        self, parsed: ParsedCommand, context: CommandContext | None = None
    ) -> ReplyPayload:
        """Produce the reply for a parsed command.

        Args:
            parsed: Output of parse_command().
            context: Requester details; args are taken from `parsed`.

        Returns:
            ReplyPayload to post back. Never raises for handler failures.
        """
        context = context or CommandContext()
        context.args = list(parsed.args)
        context.raw_args = parsed.raw_args

        if parsed.name is None:
            context.args, context.raw_args = [], ""
            return await self._invoke(HELP_COMMAND, context)

        if parsed.name in self.handlers:
            return await self._invoke(parsed.name, context)

        if get_command_by_name(parsed.name, self.catalog) is not None:
            return format_info(
                f"The `{parsed.name}` command is coming soon! Stay tuned.\n"
                "Type `@bot help` to see what is available today."
            )

        suggestions = get_command_suggestions(
            parsed.name, [spec.name for spec in self.catalog]
        )
        logger.info(
            "Unknown command %r from %s (suggestions: %s)",
            parsed.name,
            context.user_id or "unknown",
            suggestions,
        )
        return format_command_suggestions(parsed.name, suggestions)

    async def _invoke(self, name: str, context: CommandContext) -> ReplyPayload:
        handler = self.handlers.get(name)
        if handler is None:
            logger.error("No handler registered for %s", name)
            return format_error(f"The `{name}` command is not available right now.")

        if self.rate_limiter is not None and context.user_id:
            bucket = bucket_for(get_command_by_name(name, self.catalog))
            decision = self.rate_limiter.check(context.user_id, bucket)
            if not decision.allowed:
                logger.info(
                    "Rate limited %s on %s bucket (retry after %ss)",
                    context.user_id,
                    bucket,
                    decision.retry_after,
                )
                return format_warning(decision.message)

        try:
            return await handler(context)
        except Exception:
            logger.exception("Handler for %s failed", name)
            return format_error(
                f"Sorry, something went wrong while running `{name}`. "
                "Please try again."
            )
