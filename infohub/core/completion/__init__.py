"""AI text completion capability.

This module provides:
- TextCompletionService: single-turn completion over a Pydantic AI agent
- CompletionError and its subclasses: user-facing failure types
- Prompt profiles for the ask, summarize and explain commands
"""

from infohub.core.completion.errors import (
    CompletionError,
    CompletionQuotaExceededError,
    CompletionRateLimitedError,
    CompletionTimeoutError,
    CompletionUnavailableError,
)
from infohub.core.completion.service import TextCompletionService

__all__ = [
    "CompletionError",
    "CompletionQuotaExceededError",
    "CompletionRateLimitedError",
    "CompletionTimeoutError",
    "CompletionUnavailableError",
    "TextCompletionService",
]
