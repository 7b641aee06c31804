# tests/test_api.py
"""Tests for the FastAPI webhook endpoint."""

import pytest
from conftest import encode, mention_payload, signed_headers
from httpx import ASGITransport, AsyncClient

from infohub.config import ConfigurationError
from infohub.core.commands import CommandRouter, build_handlers
from infohub.core.completion import TextCompletionService
from infohub.interfaces.api import main
from infohub.interfaces.api.main import create_app


def _client(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


class TestSlackEndpoint:
    """Tests for /slack."""

    @pytest.mark.asyncio
    async def test_get_alive(self, make_dispatcher):
        async with _client(create_app(make_dispatcher())) as client:
            response = await client.get("/slack")

        assert response.status_code == 200
        assert response.text == "👍 Alive"

    @pytest.mark.asyncio
    async def test_put_not_allowed(self, make_dispatcher):
        async with _client(create_app(make_dispatcher())) as client:
            response = await client.put("/slack", content=b"{}")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    @pytest.mark.parametrize("method", ["OPTIONS", "TRACE"])
    @pytest.mark.asyncio
    async def test_uncommon_methods_get_same_405_body(self, make_dispatcher, method):
        async with _client(create_app(make_dispatcher())) as client:
            response = await client.request(method, "/slack")

        assert response.status_code == 405
        assert response.json() == {"error": "Method Not Allowed"}

    @pytest.mark.asyncio
    async def test_handshake_body_is_exact(self, make_dispatcher):
        body = encode({"token": "t", "challenge": "abc123", "type": "url_verification"})

        async with _client(create_app(make_dispatcher())) as client:
            response = await client.post("/slack", content=body, headers=signed_headers(body))

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.content == b'{"challenge":"abc123"}'

    @pytest.mark.asyncio
    async def test_unsigned_request_rejected(self, make_dispatcher, messaging):
        body = encode(mention_payload("<@UBOT> echo hi"))

        async with _client(create_app(make_dispatcher())) as client:
            response = await client.post("/slack", content=body)

        assert response.status_code == 401
        assert messaging.sent == []

    @pytest.mark.asyncio
    async def test_invalid_json(self, make_dispatcher):
        body = b"not json at all"

        async with _client(create_app(make_dispatcher())) as client:
            response = await client.post("/slack", content=body, headers=signed_headers(body))

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}

    @pytest.mark.asyncio
    async def test_event_acknowledged_and_reply_posted(self, make_dispatcher, messaging):
        completion = TextCompletionService(None)
        dispatcher = make_dispatcher(
            router=CommandRouter(build_handlers(completion)), completion=completion
        )
        body = encode(mention_payload("<@UBOT> ask what is REST?", ts="9.1"))

        async with _client(create_app(dispatcher)) as client:
            response = await client.post("/slack", content=body, headers=signed_headers(body))

        assert response.status_code == 200
        assert response.text == "OK"
        # The background task has finished once the ASGI call returns
        assert len(messaging.sent) == 1
        channel, thread_ts, text = messaging.sent[0]
        assert (channel, thread_ts) == ("C1", "9.1")
        assert "AI features are not available" in text

    @pytest.mark.asyncio
    async def test_redelivery_answered_once(self, make_dispatcher, messaging):
        body = encode(mention_payload("<@UBOT> echo once", event_id="EvRetry"))
        retry_headers = {**signed_headers(body), "X-Slack-Retry-Num": "1"}

        async with _client(create_app(make_dispatcher())) as client:
            first = await client.post("/slack", content=body, headers=signed_headers(body))
            second = await client.post("/slack", content=body, headers=retry_headers)

        assert first.status_code == second.status_code == 200
        assert len(messaging.sent) == 1

    @pytest.mark.asyncio
    async def test_unavailable_before_startup(self):
        async with _client(create_app()) as client:
            response = await client.post("/slack", content=b"{}")

        assert response.status_code == 503


class TestHealthEndpoint:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_healthy(self, make_dispatcher):
        dispatcher = make_dispatcher(completion=TextCompletionService(None))

        async with _client(create_app(dispatcher)) as client:
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "ai_ready": False}

    @pytest.mark.asyncio
    async def test_starting(self):
        async with _client(create_app()) as client:
            response = await client.get("/health")

        assert response.json() == {"status": "starting", "ai_ready": False}


class TestLifespan:
    """Tests for application startup and shutdown."""

    @pytest.mark.asyncio
    async def test_starts_and_stops_sweeper(self, make_dispatcher):
        app = create_app(make_dispatcher())

        async with app.router.lifespan_context(app):
            assert app.state.lifecycle.is_started is True
            assert app.state.lifecycle.component_count == 1

        assert app.state.lifecycle.is_started is False

    @pytest.mark.asyncio
    async def test_missing_credentials_fail_startup(self, monkeypatch):
        monkeypatch.setattr(main.settings, "slack_signing_secret", "")
        monkeypatch.setattr(main.settings, "slack_bot_token", "")
        app = create_app()

        with pytest.raises(ConfigurationError):
            async with app.router.lifespan_context(app):
                pass
