# infohub/interfaces/slack/verification.py
"""Slack request signature verification.

Slack signs every request with HMAC-SHA256 over "v0:{timestamp}:{raw body}"
using the app's signing secret and sends the result as
"X-Slack-Signature: v0=<hex>". Verification must run on the exact bytes
Slack sent, before any JSON parsing.
"""

import secrets
import time

from slack_sdk.signature import SignatureVerifier

from infohub.interfaces.slack.errors import BadSignatureError, StaleTimestampError

MAX_TIMESTAMP_SKEW = 300  # seconds


def compute_signature(signing_secret: str, timestamp: str, raw_body: bytes) -> str:
    """Compute the "v0=" signature Slack would send for a request body.

    Raises:
        BadSignatureError: If the body is not valid UTF-8.
    """
    try:
        signature = SignatureVerifier(signing_secret).generate_signature(
            timestamp=timestamp, body=raw_body
        )
    except UnicodeDecodeError as e:
        raise BadSignatureError("request body is not UTF-8") from e
    if signature is None:
        raise BadSignatureError("missing timestamp or body")
    return signature


def verify(
    raw_body: bytes,
    timestamp_header: str | None,
    signature_header: str | None,
    signing_secret: str,
    now: float | None = None,
) -> None:
    """Verify that a request was signed by Slack.

    Args:
        raw_body: Unparsed request body.
        timestamp_header: X-Slack-Request-Timestamp value.
        signature_header: X-Slack-Signature value.
        signing_secret: The app's signing secret.
        now: Current epoch seconds; defaults to time.time().

    Raises:
        StaleTimestampError: If the timestamp is more than 300s from now.
        BadSignatureError: If a header is missing or malformed, or the
            signature does not match.
    """
    if not timestamp_header or not signature_header:
        raise BadSignatureError("missing signature headers")

    try:
        timestamp = int(timestamp_header)
    except ValueError as e:
        raise BadSignatureError("malformed timestamp") from e

    current = time.time() if now is None else now
    if abs(current - timestamp) > MAX_TIMESTAMP_SKEW:
        raise StaleTimestampError("request timestamp outside the replay window")

    expected = compute_signature(signing_secret, timestamp_header, raw_body)
    if not secrets.compare_digest(
        expected.encode("utf-8"), signature_header.encode("utf-8", "replace")
    ):
        raise BadSignatureError("signature mismatch")
