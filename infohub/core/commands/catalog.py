# infohub/core/commands/catalog.py
"""Command definitions and help text for the Info Hub bot.

The catalog is a closed, ordered table: Basic commands first, then AI
commands, then Information Hub commands. Lookups never raise; unknown
names and categories return None.
"""

from infohub.core.commands.models import BotInfo, Category, CommandSpec

BOT_INFO = BotInfo(
    name="Info Hub Bot",
    version="1.0.0",
    description=(
        "Your intelligent Slack assistant for information, AI-powered "
        "responses, and productivity tools."
    ),
    features=(
        "Basic commands (help, status, info)",
        "AI-powered Q&A and text processing",
        "Weather information",
        "News updates",
        "Time zone utilities",
    ),
    github="https://github.com/kevinace1/info-hub-bot",
    support="Mention @bot help for assistance",
)

BASIC_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="help",
        usage="help [category]",
        description="Show available commands or help for specific category",
        category=Category.BASIC,
        examples=("@bot help", "@bot help ai", "@bot help info"),
    ),
    CommandSpec(
        name="status",
        usage="status",
        description="Show bot health and system information",
        category=Category.BASIC,
        examples=("@bot status",),
    ),
    CommandSpec(
        name="info",
        usage="info",
        description="Show bot information and capabilities",
        category=Category.BASIC,
        examples=("@bot info",),
    ),
    CommandSpec(
        name="ping",
        usage="ping",
        description="Check if bot is responsive",
        category=Category.BASIC,
        examples=("@bot ping",),
    ),
)

AI_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="ask",
        usage="ask [question]",
        description="Ask any question and get an AI-powered answer",
        category=Category.AI,
        examples=(
            "@bot ask What is machine learning?",
            "@bot ask How do I optimize my code?",
        ),
    ),
    CommandSpec(
        name="summarize",
        usage="summarize [text]",
        description="Summarize long text into key points",
        category=Category.AI,
        examples=("@bot summarize [paste your text here]",),
    ),
    CommandSpec(
        name="explain",
        usage="explain [topic]",
        description="Get detailed explanations of concepts or topics",
        category=Category.AI,
        examples=("@bot explain blockchain", "@bot explain REST APIs"),
    ),
)

# Declared in help output but not implemented yet
INFO_HUB_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(
        name="weather",
        usage="weather [location]",
        description="Get current weather information for any location",
        category=Category.INFO_HUB,
        examples=("@bot weather New York", "@bot weather London, UK"),
    ),
    CommandSpec(
        name="news",
        usage="news [category|keyword]",
        description="Get latest news headlines",
        category=Category.INFO_HUB,
        examples=("@bot news", "@bot news technology", "@bot news bitcoin"),
    ),
    CommandSpec(
        name="time",
        usage="time [timezone]",
        description="Get current time in different timezones",
        category=Category.INFO_HUB,
        examples=("@bot time EST", "@bot time Tokyo", "@bot time zones"),
    ),
)

ALL_COMMANDS: tuple[CommandSpec, ...] = BASIC_COMMANDS + AI_COMMANDS + INFO_HUB_COMMANDS

_CATEGORY_ALIASES: dict[str, Category] = {
    "basic": Category.BASIC,
    "ai": Category.AI,
    "info": Category.INFO_HUB,
    "hub": Category.INFO_HUB,
}


def get_command_by_name(
    name: str, catalog: tuple[CommandSpec, ...] = ALL_COMMANDS
) -> CommandSpec | None:
    """Find a catalog entry by exact (lowercase) name."""
    for spec in catalog:
        if spec.name == name:
            return spec
    return None


def get_commands_by_category(
    category: Category, catalog: tuple[CommandSpec, ...] = ALL_COMMANDS
) -> list[CommandSpec]:
    """List catalog entries of one category in declaration order."""
    return [spec for spec in catalog if spec.category == category]


def get_all_command_names(catalog: tuple[CommandSpec, ...] = ALL_COMMANDS) -> list[str]:
    return [spec.name for spec in catalog]


def get_category_by_name(name: str) -> Category | None:
    """Resolve a user-typed category alias (case-insensitive)."""
    return _CATEGORY_ALIASES.get(name.strip().lower())
