# infohub/interfaces/slack/errors.py
"""Error taxonomy for the webhook dispatcher.

Only the request-level errors (transport, size, parse, auth) change the HTTP
status. Everything after a payload is classified is acknowledged with 200.
"""


class WebhookError(Exception):
    """Base class for request-level webhook failures.

    Attributes:
        status_code: HTTP status the dispatcher answers with.
        public_message: Error text safe to return to the caller.
    """

    status_code = 500
    public_message = "Internal Server Error"


class TransportError(WebhookError):
    """The request body could not be read."""


class PayloadTooLargeError(WebhookError):
    status_code = 413
    public_message = "Payload Too Large"


class ParseError(WebhookError):
    status_code = 400
    public_message = "Invalid JSON"


class AuthError(WebhookError):
    """The request could not be proven to come from Slack."""

    status_code = 401
    public_message = "Unauthorized"


class StaleTimestampError(AuthError):
    """The request timestamp is outside the replay window."""


class BadSignatureError(AuthError):
    """The signature is missing, malformed or does not match."""


class UnsupportedPayloadError(WebhookError):
    status_code = 405
    public_message = "Unsupported payload type"


class SendError(Exception):
    """An outbound chat message could not be delivered."""
