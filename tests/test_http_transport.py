"""
Tests for the HTTP transport
"""

import pytest
from mcp.server import Server
from starlette.testclient import TestClient

from blink_wallet_mcp.http_transport import (
    UNAUTHORIZED_RESPONSE,
    McpEndpoint,
    create_app,
)


class StubSessionManager:
    """Stands in for StreamableHTTPSessionManager and answers 200."""

    def __init__(self):
        self.calls = 0

    async def handle_request(self, scope, receive, send):
        self.calls += 1
        await send(
            {
                "type": "http.response.start",
                "status": 200,
                "headers": [(b"content-type", b"application/json")],
            }
        )
        await send({"type": "http.response.body", "body": b"{}"})


def scope_with_headers(headers: list[tuple[bytes, bytes]]) -> dict:
    return {
        "type": "http",
        "method": "POST",
        "path": "/mcp",
        "headers": headers,
    }


async def run_endpoint(endpoint: McpEndpoint, headers: list[tuple[bytes, bytes]]) -> list[dict]:
    sent = []

    async def receive():
        return {"type": "http.request", "body": b"", "more_body": False}

    async def send(message):
        sent.append(message)

    await endpoint(scope_with_headers(headers), receive, send)
    return sent


class TestHealth:
    """The health endpoint is always open."""

    def test_health_without_key(self):
        client = TestClient(create_app(Server("test"), api_key="secret"))

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_health_without_auth_configured(self):
        client = TestClient(create_app(Server("test")))

        assert client.get("/health").json() == {"status": "ok"}


class TestApiKey:
    """API key checks on /mcp."""

    def test_missing_key_rejected(self):
        client = TestClient(create_app(Server("test"), api_key="secret"))

        response = client.post("/mcp", json={"jsonrpc": "2.0", "method": "ping", "id": 1})

        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED_RESPONSE

    def test_wrong_key_rejected(self):
        client = TestClient(create_app(Server("test"), api_key="secret"))

        response = client.post(
            "/mcp",
            json={"jsonrpc": "2.0", "method": "ping", "id": 1},
            headers={"X-API-KEY": "wrong"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == -32001

    @pytest.mark.asyncio
    async def test_matching_key_forwarded(self):
        manager = StubSessionManager()
        endpoint = McpEndpoint(manager, api_key="secret")

        sent = await run_endpoint(endpoint, [(b"x-api-key", b"secret")])

        assert manager.calls == 1
        assert sent[0]["status"] == 200

    @pytest.mark.asyncio
    async def test_mismatch_not_forwarded(self):
        manager = StubSessionManager()
        endpoint = McpEndpoint(manager, api_key="secret")

        sent = await run_endpoint(endpoint, [(b"x-api-key", b"nope")])

        assert manager.calls == 0
        assert sent[0]["status"] == 401

    @pytest.mark.asyncio
    async def test_no_key_configured_accepts_all(self):
        manager = StubSessionManager()
        endpoint = McpEndpoint(manager)

        sent = await run_endpoint(endpoint, [])

        assert manager.calls == 1
        assert sent[0]["status"] == 200
