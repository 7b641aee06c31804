# infohub/config.py
"""Runtime configuration for the webhook, read from the environment.

Values come from process environment variables first and a local .env file
second. Only the Slack signing secret and bot token are required, and only
when the webhook starts; everything else has a working default.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when a mandatory setting is missing at startup."""


class Settings(BaseSettings):
    """Webhook, completion and logging settings.

    Field names map to upper-case environment variables, e.g.
    `slack_signing_secret` is read from SLACK_SIGNING_SECRET.
    """

    # Slack Integration (signing secret and bot token are mandatory)
    slack_signing_secret: str = ""
    slack_bot_token: str = ""

    # Webhook behaviour
    slack_handshake_bypass: bool = False  # Answer url_verification unsigned
    slack_lenient_unsupported: bool = True  # 200 instead of 405
    slack_process_before_response: bool = False
    slack_max_body_bytes: int = 1024 * 1024

    # Delivery deduplication
    dedup_ttl_seconds: float = 300.0
    sweep_interval_seconds: float = 60.0

    # Completion provider (GOOGLE_API_KEY wins over GEMINI_API_KEY)
    google_api_key: str = ""
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    completion_timeout: float = 30.0

    # Observability
    logfire_token: str = ""
    log_level: str = "INFO"
    log_json: bool = False

    # HTTP server
    host: str = "0.0.0.0"
    port: int = 8000

    # Per-client budget for /health, requests per minute
    api_rate_limit: int = 60

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @property
    def api_key(self) -> str:
        """Completion API key, or "" when AI commands should stay disabled."""
        return self.google_api_key or self.gemini_api_key

    def require_slack_credentials(self) -> None:
        """Ensure the settings needed to run the webhook are present.

        Raises:
            ConfigurationError: If the signing secret or bot token is missing.
        """
        missing = [
            name
            for name, value in (
                ("SLACK_SIGNING_SECRET", self.slack_signing_secret),
                ("SLACK_BOT_TOKEN", self.slack_bot_token),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required settings: {', '.join(missing)}"
            )


# Shared by the API layer; tests construct their own Settings
settings = Settings()
