# infohub/core/commands/responses.py
"""Standardized reply formatting for the Slack bot.

All functions are pure and return a ReplyPayload whose text is Slack mrkdwn.
"""

from infohub.core.commands.models import BotInfo, ReplyPayload

HELP_HINT = "Type `@bot help` to see all available commands."


def format_success(message: str) -> ReplyPayload:
    return ReplyPayload(text=f"✅ {message}")


def format_error(message: str) -> ReplyPayload:
    return ReplyPayload(text=f"❌ {message}")


def format_info(message: str) -> ReplyPayload:
    return ReplyPayload(text=f"ℹ️ {message}")


def format_warning(message: str) -> ReplyPayload:
    return ReplyPayload(text=f"⚠️ {message}")


def format_command_suggestions(invalid_command: str, suggestions: list[str]) -> ReplyPayload:
    """Format the reply for an unknown command.

    Args:
        invalid_command: The name the user typed.
        suggestions: Up to three similar command names.

    Returns:
        Error payload with "Did you mean" bullets when suggestions exist.
    """
    message = f'Command "{invalid_command}" not found.'
    if suggestions:
        message += "\n\nDid you mean:\n"
        message += "".join(f"• `{suggestion}`\n" for suggestion in suggestions)
    message += f"\n{HELP_HINT}"
    return format_error(message)


def format_status(
    version: str,
    uptime: str,
    response_time_ms: int,
    memory_usage: str = "",
    ai_status: str = "",
    started_on: str = "",
) -> ReplyPayload:
    """Format the bot health report."""
    lines = [
        "🤖 *Bot Status*",
        "",
        "• Status: ✅ Online",
        f"• Version: {version}",
        f"• Uptime: {uptime}",
        f"• Response Time: {response_time_ms}ms",
    ]
    if memory_usage:
        lines.append(f"• Memory Usage: {memory_usage}")
    if ai_status:
        lines.append(f"• AI Features: {ai_status}")
    if started_on:
        lines.append(f"• Running Since: {started_on}")
    return ReplyPayload(text="\n".join(lines))


def format_bot_info(info: BotInfo) -> ReplyPayload:
    """Format the bot description shown by the info command."""
    lines = [f"🤖 *{info.name}*", "", info.description, "", f"*Version:* {info.version}", ""]
    if info.features:
        lines.append("*Features:*")
        lines.extend(f"• {feature}" for feature in info.features)
        lines.append("")
    if info.github:
        lines.append(f"*GitHub:* {info.github}")
    if info.support:
        lines.append(f"*Support:* {info.support}")
    return ReplyPayload(text="\n".join(lines).rstrip())
