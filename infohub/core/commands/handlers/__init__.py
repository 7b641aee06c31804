"""Command handlers bound by name for the CommandRouter."""

from infohub.core.commands.handlers.ai import AICommands
from infohub.core.commands.handlers.basic import BasicCommands
from infohub.core.commands.models import Handler
from infohub.core.completion import TextCompletionService


def build_handlers(completion: TextCompletionService) -> dict[str, Handler]:
    """Bind every implemented command to its handler.

    Args:
        completion: Completion service shared by the AI commands.

    Returns:
        Mapping of command name to handler coroutine function.
    """
    handlers = BasicCommands(completion).handlers()
    handlers.update(AICommands(completion).handlers())
    return handlers


__all__ = ["AICommands", "BasicCommands", "build_handlers"]
