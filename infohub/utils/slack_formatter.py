# infohub/utils/slack_formatter.py
"""Convert Markdown produced by the completion model to Slack mrkdwn.

Only the constructs models commonly emit are handled:
- Bold: **text** -> *text*
- Strikethrough: ~~text~~ -> ~text~
- Links: [text](url) -> <url|text>
- Headings: # Heading -> *Heading*
- Lists: - item -> • item
Fenced and inline code are left untouched.
"""

import re

_PLACEHOLDER = "\x00{kind}{index}\x00"

_CODE_PATTERNS = (
    ("FENCE", re.compile(r"```[\s\S]*?```")),
    ("INLINE", re.compile(r"`[^`\n]+`")),
)

_REWRITES = (
    (re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)"), r"<\2|\1>"),
    (re.compile(r"^#{1,6}[ \t]+(.+?)[ \t]*#*[ \t]*$", re.MULTILINE), r"*\1*"),
    (re.compile(r"\*\*([^*\n]+)\*\*"), r"*\1*"),
    (re.compile(r"__([^_\n]+)__"), r"*\1*"),
    (re.compile(r"~~([^~\n]+)~~"), r"~\1~"),
    (re.compile(r"^([ \t]*)[-*+][ \t]+", re.MULTILINE), r"\1• "),
)


def markdown_to_mrkdwn(text: str) -> str:
    """Convert standard Markdown to Slack mrkdwn format.

    Args:
        text: Markdown text.

    Returns:
        Slack mrkdwn formatted text.
    """
    if not text:
        return text

    saved: dict[str, str] = {}

    def _stash(kind: str):
        def _replace(match: re.Match) -> str:
            key = _PLACEHOLDER.format(kind=kind, index=len(saved))
            # Slack ignores fence language tags
            saved[key] = re.sub(r"^```\w+\n", "```\n", match.group(0))
            return key

        return _replace

    result = text
    for kind, pattern in _CODE_PATTERNS:
        result = pattern.sub(_stash(kind), result)

    for pattern, replacement in _REWRITES:
        result = pattern.sub(replacement, result)

    for key, code in saved.items():
        result = result.replace(key, code)
    return result
