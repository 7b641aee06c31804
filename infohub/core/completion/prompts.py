"""System prompts and generation settings for the AI commands."""

from dataclasses import dataclass

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful assistant in a Slack workspace. "
    "Provide clear, concise, and professional responses."
)


@dataclass(frozen=True)
class PromptProfile:
    """Generation settings for one AI command."""

    system_prompt: str
    max_tokens: int
    temperature: float


ASK_PROFILE = PromptProfile(
    system_prompt=(
        "You are a knowledgeable assistant in a Slack workspace.\n"
        "Answer questions clearly and concisely. If you're not sure about "
        "something, say so.\n"
        "Keep responses under 400 words and use a professional but friendly tone."
    ),
    max_tokens=600,
    temperature=0.7,
)

SUMMARIZE_PROFILE = PromptProfile(
    system_prompt=(
        "You are an expert at summarizing text. Create concise summaries that "
        "capture the essential information.\n"
        "Use bullet points when appropriate and keep summaries under 300 words."
    ),
    max_tokens=400,
    temperature=0.5,
)

EXPLAIN_PROFILE = PromptProfile(
    system_prompt=(
        "You are an expert educator who explains complex topics in simple terms.\n"
        "Use analogies and examples when helpful. Keep explanations under 500 "
        "words and well-structured."
    ),
    max_tokens=700,
    temperature=0.6,
)


def build_summarize_prompt(text: str) -> str:
    return (
        "Please summarize the following text in a clear, concise manner. "
        "Focus on the key points and main ideas:\n\n"
        f"{text}"
    )


def build_explain_prompt(topic: str) -> str:
    return (
        f'Please explain "{topic}" in a clear, easy-to-understand way. Include:\n'
        "- What it is\n"
        "- Why it's important or relevant\n"
        "- Key concepts or components\n"
        "- Real-world examples if applicable\n\n"
        "Keep the explanation accessible but informative."
    )
