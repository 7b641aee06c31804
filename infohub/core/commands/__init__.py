"""Command module for parsing, routing and handling bot commands.

This module provides:
- CommandSpec, Category: the static command catalog entries
- ParsedCommand, parse_command: mention text parsing
- CommandRouter: routing with suggestions and error containment
- ReplyPayload and the format_* helpers: chat reply formatting
- build_handlers: the implemented command handlers
"""

from infohub.core.commands.catalog import ALL_COMMANDS, BOT_INFO
from infohub.core.commands.handlers import build_handlers
from infohub.core.commands.models import (
    Category,
    CommandContext,
    CommandSpec,
    Handler,
    ReplyPayload,
)
from infohub.core.commands.parser import ParsedCommand, parse_command
from infohub.core.commands.router import CommandRouter, get_command_suggestions

__all__ = [
    "ALL_COMMANDS",
    "BOT_INFO",
    "Category",
    "CommandContext",
    "CommandRouter",
    "CommandSpec",
    "Handler",
    "ParsedCommand",
    "ReplyPayload",
    "build_handlers",
    "get_command_suggestions",
    "parse_command",
]
