"""HTTP-level test fixtures.

Responsibilities:
- Builds the FastAPI `app` with explicit Settings and a fake chat platform
- Wraps it in a TestClient (lifespan runs, so the shared HTTP client exists)
- Provides `post_webhook` to send signed Lemon Squeezy requests
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
from fastapi.testclient import TestClient

from lemonping.serve import create_app


class ChatSink:
    """Fake Slack/Discord endpoints behind an httpx.MockTransport."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.down_hosts: set[str] = set()
        self.status_by_host: dict[str, int] = {}
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host in self.down_hosts:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(self.status_by_host.get(request.url.host, 200))

    @property
    def hosts(self) -> list[str]:
        return sorted(r.url.host for r in self.requests)

    def payload_for(self, host: str) -> dict[str, Any]:
        for request in self.requests:
            if request.url.host == host:
                return json.loads(request.content)
        raise KeyError(host)


@pytest.fixture
def sink() -> ChatSink:
    return ChatSink()


@pytest.fixture
def app(settings, sink):
    return create_app(settings, transport=sink.transport)


@pytest.fixture
def client(app):
    """TestClient acting as the Lemon Squeezy sender."""
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


@pytest.fixture
def post_webhook(client, sign):
    """Send a webhook; signs the exact body bytes unless a signature is given."""

    def _post(
        payload: Any = None,
        *,
        body: bytes | None = None,
        event: str | None = "order_created",
        signature: str | None = None,
        signed: bool = True,
    ) -> httpx.Response:
        if body is None:
            body = json.dumps(payload if payload is not None else {}).encode()
        headers = {"Content-Type": "application/json"}
        if event is not None:
            headers["X-Event-Name"] = event
        if signature is not None:
            headers["X-Signature"] = signature
        elif signed:
            headers["X-Signature"] = sign(body)
        return client.post("/webhook/lemonsqueezy", content=body, headers=headers)

    return _post
