"""Errors raised by the text completion service.

The message of each error is shown to the user in chat, so the defaults
describe what happened and what to do next.
"""


class CompletionError(Exception):
    """Base class for completion failures."""

    default_message = "AI service error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CompletionUnavailableError(CompletionError):
    default_message = (
        "AI features are not available. The completion API key is not configured."
    )


class CompletionQuotaExceededError(CompletionError):
    default_message = "AI quota exceeded. Please check the billing for the API key."


class CompletionRateLimitedError(CompletionError):
    default_message = "Rate limit exceeded. Please try again in a moment."


class CompletionTimeoutError(CompletionError):
    default_message = "Request timed out. Please try again."
