"""Utility functions for the Info Hub bot."""

from infohub.utils.logging import (
    bind_request_id,
    configure_logging,
    get_request_id,
)
from infohub.utils.observability import setup_logfire
from infohub.utils.slack_formatter import markdown_to_mrkdwn

__all__ = [
    "bind_request_id",
    "configure_logging",
    "get_request_id",
    "markdown_to_mrkdwn",
    "setup_logfire",
]
