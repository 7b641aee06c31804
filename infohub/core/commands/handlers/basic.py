# infohub/core/commands/handlers/basic.py
"""Basic bot commands: help, status, info, ping."""

import random
import resource
import time
from datetime import datetime, timezone

from infohub.core.commands.catalog import (
    ALL_COMMANDS,
    BOT_INFO,
    get_category_by_name,
    get_commands_by_category,
)
from infohub.core.commands.models import (
    BotInfo,
    Category,
    CommandContext,
    CommandSpec,
    Handler,
    ReplyPayload,
)
from infohub.core.commands.responses import (
    format_bot_info,
    format_error,
    format_status,
    format_success,
)
from infohub.core.completion import TextCompletionService

PING_RESPONSES = (
    "pong — bot online",
    "pong! I'm here and ready to help!",
    "pong — all systems operational!",
    "pong — Info Hub Bot at your service!",
)


def _format_uptime(seconds: float) -> str:
    hours, remainder = divmod(int(seconds), 3600)
    return f"{hours}h {remainder // 60}m"


def _memory_usage() -> str:
    # ru_maxrss is reported in kilobytes on Linux
    peak_kb = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    return f"{round(peak_kb / 1024)}MB"


class BasicCommands:
    """Handlers that need no external service.

    Attributes:
        completion: Used only to report AI availability in status output.
        catalog: Commands listed by help.
        bot_info: Bot description used by info and status.
    """

    def __init__(
        self,
        completion: TextCompletionService | None = None,
        catalog: tuple[CommandSpec, ...] = ALL_COMMANDS,
        bot_info: BotInfo = BOT_INFO,
        rng: random.Random | None = None,
    ) -> None:
        self.completion = completion
        self.catalog = catalog
        self.bot_info = bot_info
        self._rng = rng or random.Random()
        self._started_monotonic = time.monotonic()
        self._started_at = datetime.now(timezone.utc)

    def handlers(self) -> dict[str, Handler]:
        return {
            "help": self.help,
            "status": self.status,
            "info": self.info,
            "ping": self.ping,
        }

    def _command_lines(self, category: Category) -> list[str]:
        return [
            f"• `@bot {cmd.usage}` - {cmd.description}"
            for cmd in get_commands_by_category(category, self.catalog)
        ]

    async def help(self, ctx: CommandContext) -> ReplyPayload:
        """Show all commands, or detailed help for one category."""
        if not ctx.args:
            lines = [f"📚 *{self.bot_info.name} - Available Commands*"]
            for category in Category:
                lines.append("")
                lines.append(f"*{category.value}:*")
                lines.extend(self._command_lines(category))
            lines.append("")
            lines.append(
                "💡 *Tip:* Use `@bot help [category]` for detailed help on "
                "specific categories."
            )
            lines.append("Example: `@bot help ai` or `@bot help basic`")
            return ReplyPayload(text="\n".join(lines))

        requested = ctx.args[0]
        category = get_category_by_name(requested)
        if category is None:
            return format_error(
                f'Category "{requested}" not found. '
                "Available categories: basic, ai, info"
            )

        lines = [f"📚 *{category.value} - Detailed Help*", ""]
        for cmd in get_commands_by_category(category, self.catalog):
            lines.append(f"*{cmd.name}*")
            lines.append(f"Usage: `@bot {cmd.usage}`")
            lines.append(f"Description: {cmd.description}")
            if cmd.examples:
                lines.append("Examples:")
                lines.extend(f"  • `{example}`" for example in cmd.examples)
            lines.append("")
        return ReplyPayload(text="\n".join(lines).rstrip())

    async def status(self, ctx: CommandContext) -> ReplyPayload:
        started = time.perf_counter()
        if self.completion is not None and self.completion.available:
            ai_status = "✅ Available"
        else:
            ai_status = "Not configured"
        response_time_ms = round((time.perf_counter() - started) * 1000)
        return format_status(
            version=self.bot_info.version,
            uptime=_format_uptime(time.monotonic() - self._started_monotonic),
            response_time_ms=response_time_ms,
            memory_usage=_memory_usage(),
            ai_status=ai_status,
            started_on=self._started_at.date().isoformat(),
        )

    async def info(self, ctx: CommandContext) -> ReplyPayload:
        return format_bot_info(self.bot_info)

    async def ping(self, ctx: CommandContext) -> ReplyPayload:
        return format_success(self._rng.choice(PING_RESPONSES))
