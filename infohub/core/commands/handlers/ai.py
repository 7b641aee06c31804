# infohub/core/commands/handlers/ai.py
"""AI-powered commands: ask, summarize, explain.

Each handler checks that the completion service is available, validates
its input length, then renders the model output as Slack mrkdwn.
CompletionError messages are shown to the user as-is.
"""

import logging

from infohub.core.commands.models import CommandContext, Handler, ReplyPayload
from infohub.core.commands.responses import format_error
from infohub.core.completion import CompletionError, TextCompletionService
from infohub.core.completion.prompts import (
    ASK_PROFILE,
    EXPLAIN_PROFILE,
    SUMMARIZE_PROFILE,
    PromptProfile,
    build_explain_prompt,
    build_summarize_prompt,
)
from infohub.utils.slack_formatter import markdown_to_mrkdwn

logger = logging.getLogger(__name__)

MAX_QUESTION_LENGTH = 1000
MIN_SUMMARY_INPUT = 100
MAX_SUMMARY_INPUT = 4000
MAX_TOPIC_LENGTH = 200

UNAVAILABLE_MESSAGE = (
    "AI features are not available. The completion API key is not configured."
)


class AICommands:
    """Handlers backed by the text completion service."""

    def __init__(self, completion: TextCompletionService) -> None:
        self.completion = completion

    def handlers(self) -> dict[str, Handler]:
        return {
            "ask": self.ask,
            "summarize": self.summarize,
            "explain": self.explain,
        }

    async def _generate(self, prompt: str, profile: PromptProfile) -> str:
        answer = await self.completion.complete(
            prompt,
            system_prompt=profile.system_prompt,
            max_tokens=profile.max_tokens,
            temperature=profile.temperature,
        )
        return markdown_to_mrkdwn(answer)

    async def ask(self, ctx: CommandContext) -> ReplyPayload:
        if not self.completion.available:
            return format_error(UNAVAILABLE_MESSAGE)

        question = ctx.raw_args.strip()
        if not question:
            return format_error(
                "Please provide a question to ask.\n"
                "Example: `@bot ask What is machine learning?`"
            )
        if len(question) > MAX_QUESTION_LENGTH:
            return format_error(
                "Question is too long. Please keep it under "
                f"{MAX_QUESTION_LENGTH} characters."
            )

        logger.info("Processing ask command: %r", question[:100])
        try:
            answer = await self._generate(question, ASK_PROFILE)
        except CompletionError as e:
            return format_error(f"Sorry, I couldn't process your question: {e}")

        return ReplyPayload(
            text=f"🤖 *AI Assistant*\n\n*Question:* {question}\n\n*Answer:*\n{answer}"
        )

    async def summarize(self, ctx: CommandContext) -> ReplyPayload:
        if not self.completion.available:
            return format_error(UNAVAILABLE_MESSAGE)

        text = ctx.raw_args.strip()
        if not text:
            return format_error(
                "Please provide text to summarize.\n"
                "Example: `@bot summarize [paste your text here]`"
            )
        if len(text) < MIN_SUMMARY_INPUT:
            return format_error(
                "Text is too short to summarize. Please provide at least "
                f"{MIN_SUMMARY_INPUT} characters."
            )
        if len(text) > MAX_SUMMARY_INPUT:
            return format_error(
                f"Text is too long. Please keep it under {MAX_SUMMARY_INPUT} characters."
            )

        logger.info("Processing summarize command for %d characters", len(text))
        try:
            summary = await self._generate(build_summarize_prompt(text), SUMMARIZE_PROFILE)
        except CompletionError as e:
            return format_error(f"Sorry, I couldn't summarize the text: {e}")

        return ReplyPayload(
            text=(
                "📝 *Text Summary*\n\n"
                f"*Original length:* {len(text)} characters\n"
                f"*Summary length:* {len(summary)} characters\n\n"
                f"*Summary:*\n{summary}"
            )
        )

    async def explain(self, ctx: CommandContext) -> ReplyPayload:
        if not self.completion.available:
            return format_error(UNAVAILABLE_MESSAGE)

        topic = ctx.raw_args.strip()
        if not topic:
            return format_error(
                "Please provide a topic to explain.\n"
                "Example: `@bot explain blockchain` or `@bot explain REST APIs`"
            )
        if len(topic) > MAX_TOPIC_LENGTH:
            return format_error(
                f"Topic is too long. Please keep it under {MAX_TOPIC_LENGTH} characters."
            )

        logger.info("Processing explain command for topic: %r", topic)
        try:
            explanation = await self._generate(build_explain_prompt(topic), EXPLAIN_PROFILE)
        except CompletionError as e:
            return format_error(f'Sorry, I couldn\'t explain "{topic}": {e}')

        return ReplyPayload(
            text=f"🎓 *Topic Explanation*\n\n*Topic:* {topic}\n\n*Explanation:*\n{explanation}"
        )
