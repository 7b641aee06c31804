# tests/test_ratelimit.py
"""Tests for per-user command rate limiting."""

from infohub.middleware.ratelimit import (
    AI_BUCKET,
    BASIC_BUCKET,
    DEFAULT_POLICIES,
    BucketPolicy,
    RateLimiter,
)


class TestDefaultPolicies:
    def test_budgets(self):
        assert DEFAULT_POLICIES[AI_BUCKET].max_requests == 10
        assert DEFAULT_POLICIES[AI_BUCKET].cooldown_seconds == 5
        assert DEFAULT_POLICIES[BASIC_BUCKET].max_requests == 30
        assert DEFAULT_POLICIES[BASIC_BUCKET].cooldown_seconds == 1


class TestRateLimiter:
    """Tests for RateLimiter.check."""

    def test_first_request_allowed(self):
        decision = RateLimiter().check("U1", AI_BUCKET)

        assert decision.allowed is True
        assert decision.message == ""

    def test_cooldown_blocks_back_to_back_requests(self):
        limiter = RateLimiter()
        limiter.check("U1", AI_BUCKET)

        decision = limiter.check("U1", AI_BUCKET)

        assert decision.allowed is False
        assert 1 <= decision.retry_after <= 5
        assert decision.message.startswith("Please wait")

    def test_users_are_independent(self):
        limiter = RateLimiter()
        limiter.check("U1", AI_BUCKET)

        assert limiter.check("U2", AI_BUCKET).allowed is True

    def test_buckets_are_independent(self):
        limiter = RateLimiter()
        limiter.check("U1", AI_BUCKET)

        assert limiter.check("U1", BASIC_BUCKET).allowed is True

    def test_window_exhaustion(self):
        policy = BucketPolicy(max_requests=2, cooldown_seconds=1, label="test commands")
        limiter = RateLimiter({"test": policy})
        # Fill the window without touching the cooldown
        for _ in range(2):
            limiter._limiter.hit(policy.window, "test", "U1")

        decision = limiter.check("U1", "test")

        assert decision.allowed is False
        assert decision.message.startswith(
            "Rate limit exceeded. You can make 2 test commands per minute."
        )
        assert 1 <= decision.retry_after <= 60

    def test_denied_requests_are_not_recorded(self):
        limiter = RateLimiter()
        limiter.check("U1", AI_BUCKET)
        limiter.check("U1", AI_BUCKET)

        assert limiter.status("U1", AI_BUCKET)["requests_in_window"] == 1

    def test_unknown_bucket_is_allowed(self):
        assert RateLimiter().check("U1", "mystery").allowed is True

    def test_reset(self):
        limiter = RateLimiter()
        limiter.check("U1", AI_BUCKET)

        limiter.reset()

        assert limiter.check("U1", AI_BUCKET).allowed is True
