# infohub/core/completion/service.py
"""Text completion service backed by a Pydantic AI agent.

A fresh Agent is created for every call so concurrent requests never share
conversation state. The service is constructed once at startup; when no API
key is configured it reports `available == False` and every call raises
CompletionUnavailableError.
"""

import asyncio
import logging

import httpx
from pydantic_ai import Agent
from pydantic_ai.exceptions import ModelHTTPError, UnexpectedModelBehavior
from pydantic_ai.models import Model
from pydantic_ai.settings import ModelSettings

from infohub.config import Settings
from infohub.core.completion.errors import (
    CompletionError,
    CompletionQuotaExceededError,
    CompletionRateLimitedError,
    CompletionTimeoutError,
    CompletionUnavailableError,
)
from infohub.core.completion.prompts import DEFAULT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


def _build_gemini_model(api_key: str, model_name: str) -> Model:
    """Create a Gemini model bound to an explicit API key."""
    from pydantic_ai.models.google import GoogleModel
    from pydantic_ai.providers.google import GoogleProvider

    return GoogleModel(model_name, provider=GoogleProvider(api_key=api_key))


def _map_http_error(error: ModelHTTPError) -> CompletionError:
    """Translate a provider HTTP error into a user-facing completion error."""
    body = str(error.body or "").lower()
    if error.status_code == 429:
        if "quota" in body or "billing" in body:
            return CompletionQuotaExceededError()
        return CompletionRateLimitedError()
    if error.status_code in (408, 504):
        return CompletionTimeoutError()
    return CompletionError(f"AI service error (status {error.status_code}).")


class TextCompletionService:
    """Single-turn text completion with an explicit availability state.

    Attributes:
        model_name: Model identifier used for logging.
        timeout: Per-call timeout in seconds.

    Example:
        >>> service = TextCompletionService.from_settings(settings)
        >>> if service.available:
        ...     answer = await service.complete("What is REST?")
    """

    def __init__(
        self,
        model: Model | None,
        model_name: str = "",
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize the service.

        Args:
            model: Pydantic AI model, or None when no credential is configured.
            model_name: Model identifier for logging.
            timeout: Per-call timeout in seconds.
        """
        self._model = model
        self.model_name = model_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "TextCompletionService":
        """Build the service from application settings."""
        if not settings.api_key:
            logger.warning("GOOGLE_API_KEY not set - AI commands are disabled")
            return cls(None, settings.gemini_model, settings.completion_timeout)
        model = _build_gemini_model(settings.api_key, settings.gemini_model)
        logger.info("Completion service ready with model %s", settings.gemini_model)
        return cls(model, settings.gemini_model, settings.completion_timeout)

    @property
    def available(self) -> bool:
        return self._model is not None

    async def complete(
        self,
        prompt: str,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        max_tokens: int = 500,
        temperature: float = 0.0,
    ) -> str:
        """Generate a completion for a prompt.

        Args:
            prompt: User prompt.
            system_prompt: Instructions for the model.
            max_tokens: Output token budget.
            temperature: Sampling temperature.

        Returns:
            The stripped completion text.

        Raises:
            CompletionUnavailableError: If no model is configured.
            CompletionQuotaExceededError: If the provider quota is exhausted.
            CompletionRateLimitedError: If the provider throttled the call.
            CompletionTimeoutError: If the call exceeded the timeout.
            CompletionError: For any other provider failure or empty output.
        """
        if self._model is None:
            raise CompletionUnavailableError()

        logger.info("Generating completion for prompt: %r", prompt[:100])
        agent = Agent(self._model, system_prompt=system_prompt)
        settings = ModelSettings(max_tokens=max_tokens, temperature=temperature)

        try:
            result = await asyncio.wait_for(
                agent.run(prompt, model_settings=settings), timeout=self.timeout
            )
        except (TimeoutError, asyncio.TimeoutError, httpx.TimeoutException) as e:
            raise CompletionTimeoutError() from e
        except ModelHTTPError as e:
            logger.warning("Completion provider error %s: %s", e.status_code, e.body)
            raise _map_http_error(e) from e
        except UnexpectedModelBehavior as e:
            logger.warning("Unexpected completion response: %s", e)
            raise CompletionError("AI service returned an unexpected response.") from e

        output = (result.output or "").strip()
        if not output:
            raise CompletionError("Empty response from the AI service.")

        logger.info("Completion generated (%d characters)", len(output))
        return output
