"""Tests for the promptd client with mock server responses."""

from __future__ import annotations

import json

import httpx
import pytest

from bolt11_verify.exceptions import PromptRequestError
from bolt11_verify.promptd import AsyncPromptClient, PromptClient, build_run_body


# ── Mock httpx transports ────────────────────────────────────────────────

class MockPromptdTransport(httpx.BaseTransport):
    """Echoes the request back as a successful run."""

    def __init__(self):
        self.requests: list[httpx.Request] = []

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path != "/v1/run":
            return httpx.Response(404, json={"error": "not found"})
        return httpx.Response(200, json={"ok": True, "echo": json.loads(request.content)})


class MockErrorTransport(httpx.BaseTransport):
    def __init__(self, response: httpx.Response):
        self.response = response

    def handle_request(self, request: httpx.Request) -> httpx.Response:
        return self.response


class MockConnectErrorTransport(httpx.BaseTransport):
    def handle_request(self, request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)


class MockAsyncPromptdTransport(httpx.AsyncBaseTransport):
    def __init__(self):
        self.requests: list[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(200, json={"ok": True, "echo": json.loads(request.content)})


# ── Tests ────────────────────────────────────────────────────────────────

class TestBuildRunBody:
    def test_prompt_only(self):
        assert build_run_body("hello") == {"prompt": "hello"}

    def test_all_options(self):
        body = build_run_body(
            "hello", session_id=" s1 ", auto_approve=True, dry_run=False, max_steps=5
        )
        assert body == {
            "prompt": "hello",
            "session_id": "s1",
            "auto_approve": True,
            "dry_run": False,
            "max_steps": 5,
        }

    def test_blank_prompt(self):
        with pytest.raises(ValueError, match="prompt is required"):
            build_run_body("   ")


class TestPromptClient:
    def test_posts_to_run_endpoint(self):
        transport = MockPromptdTransport()
        client = PromptClient("http://promptd.local:9333/", transport=transport)

        result = client.run("Show SC-Bridge info", session_id="abc")

        assert result == {
            "ok": True,
            "echo": {"prompt": "Show SC-Bridge info", "session_id": "abc"},
        }
        request = transport.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "http://promptd.local:9333/v1/run"
        assert "authorization" not in request.headers

    def test_bearer_token(self):
        transport = MockPromptdTransport()
        client = PromptClient("http://promptd.local", auth_token="secret", transport=transport)
        client.run("hi")
        assert transport.requests[0].headers["authorization"] == "Bearer secret"

    def test_error_field_raised(self):
        transport = MockErrorTransport(httpx.Response(401, json={"error": "unauthorized"}))
        client = PromptClient("http://promptd.local", transport=transport)
        with pytest.raises(PromptRequestError, match="unauthorized") as exc_info:
            client.run("hi")
        assert exc_info.value.status_code == 401

    def test_status_without_error_field(self):
        transport = MockErrorTransport(httpx.Response(500, json={"detail": "boom"}))
        client = PromptClient("http://promptd.local", transport=transport)
        with pytest.raises(PromptRequestError, match="HTTP 500"):
            client.run("hi")

    def test_non_json_response(self):
        transport = MockErrorTransport(httpx.Response(200, text="<html>oops</html>"))
        client = PromptClient("http://promptd.local", transport=transport)
        with pytest.raises(PromptRequestError, match="Invalid JSON response: <html>oops") as exc_info:
            client.run("hi")
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_connection_error(self):
        client = PromptClient("http://promptd.local", transport=MockConnectErrorTransport())
        with pytest.raises(PromptRequestError, match="connection error"):
            client.run("hi")


class TestAsyncPromptClient:
    @pytest.mark.asyncio
    async def test_posts_to_run_endpoint(self):
        transport = MockAsyncPromptdTransport()

        async with AsyncPromptClient(
            "http://promptd.local", auth_token="tok", transport=transport
        ) as client:
            result = await client.run("hi", dry_run=True)

        assert result["echo"] == {"prompt": "hi", "dry_run": True}
        assert transport.requests[0].headers["authorization"] == "Bearer tok"

    @pytest.mark.asyncio
    async def test_client_created_lazily(self):
        transport = MockAsyncPromptdTransport()
        client = AsyncPromptClient("http://promptd.local", transport=transport)
        await client.run("hi")
        await client.aclose()
        assert len(transport.requests) == 1
