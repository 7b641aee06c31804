# tests/test_verification.py
"""Tests for Slack request signature verification."""

import hashlib
import hmac

import pytest
from conftest import NOW, SIGNING_SECRET

from infohub.interfaces.slack.errors import (
    AuthError,
    BadSignatureError,
    StaleTimestampError,
)
from infohub.interfaces.slack.verification import (
    MAX_TIMESTAMP_SKEW,
    compute_signature,
    verify,
)

BODY = b'{"type":"event_callback","event_id":"Ev1"}'


def _sign(body: bytes, timestamp: int = NOW) -> str:
    return compute_signature(SIGNING_SECRET, str(timestamp), body)


class TestComputeSignature:
    """Tests for compute_signature."""

    def test_matches_hmac_sha256_basestring(self):
        expected = hmac.new(
            SIGNING_SECRET.encode(), f"v0:{NOW}:".encode() + BODY, hashlib.sha256
        ).hexdigest()
        assert _sign(BODY) == f"v0={expected}"

    def test_non_utf8_body_is_bad_signature(self):
        with pytest.raises(BadSignatureError):
            compute_signature(SIGNING_SECRET, str(NOW), b"\xff\xfe")


class TestVerify:
    """Tests for verify."""

    def test_valid_signature_passes(self):
        verify(BODY, str(NOW), _sign(BODY), SIGNING_SECRET, now=NOW)

    def test_timestamp_inside_window_passes(self):
        ts = NOW - MAX_TIMESTAMP_SKEW
        verify(BODY, str(ts), _sign(BODY, ts), SIGNING_SECRET, now=NOW)

    def test_tampered_body_fails(self):
        signature = _sign(BODY)
        tampered = bytearray(BODY)
        tampered[10] ^= 0x01
        with pytest.raises(BadSignatureError):
            verify(bytes(tampered), str(NOW), signature, SIGNING_SECRET, now=NOW)

    def test_tampered_signature_fails(self):
        signature = _sign(BODY)
        last = "0" if signature[-1] != "0" else "1"
        with pytest.raises(BadSignatureError):
            verify(BODY, str(NOW), signature[:-1] + last, SIGNING_SECRET, now=NOW)

    def test_wrong_secret_fails(self):
        signature = compute_signature("another-secret", str(NOW), BODY)
        with pytest.raises(BadSignatureError):
            verify(BODY, str(NOW), signature, SIGNING_SECRET, now=NOW)

    @pytest.mark.parametrize("offset", [MAX_TIMESTAMP_SKEW + 1, -(MAX_TIMESTAMP_SKEW + 1)])
    def test_stale_timestamp_fails_even_when_signed(self, offset):
        ts = NOW + offset
        with pytest.raises(StaleTimestampError):
            verify(BODY, str(ts), _sign(BODY, ts), SIGNING_SECRET, now=NOW)

    @pytest.mark.parametrize(
        "timestamp,signature",
        [(None, "v0=abc"), (str(NOW), None), ("", "v0=abc"), (str(NOW), "")],
    )
    def test_missing_headers_fail(self, timestamp, signature):
        with pytest.raises(BadSignatureError):
            verify(BODY, timestamp, signature, SIGNING_SECRET, now=NOW)

    def test_malformed_timestamp_fails(self):
        with pytest.raises(BadSignatureError):
            verify(BODY, "yesterday", "v0=abc", SIGNING_SECRET, now=NOW)

    def test_failures_are_auth_errors(self):
        """Both failure kinds map to the same 401 response."""
        assert issubclass(StaleTimestampError, AuthError)
        assert issubclass(BadSignatureError, AuthError)
        assert StaleTimestampError.status_code == 401
