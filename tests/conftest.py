# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Shared fixtures: ASGI message capture and scope factory."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest


class MockSend:
    """Capture ASGI send messages for testing."""

    def __init__(self) -> None:
        self.messages: list[dict[str, Any]] = []

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)

    @property
    def start_message(self) -> dict[str, Any]:
        """Get the http.response.start message."""
        return self.messages[0]

    @property
    def status(self) -> int:
        """Get response status code."""
        return self.start_message["status"]

    @property
    def headers(self) -> dict[bytes, bytes]:
        """Get headers as dict."""
        return dict(self.start_message["headers"])

    @property
    def body(self) -> bytes:
        """Get complete body (concatenated from all body messages)."""
        return b"".join(
            m.get("body", b"") for m in self.messages if m["type"] == "http.response.body"
        )


async def mock_receive() -> dict[str, Any]:
    """Mock receive callable (request bodies are never read)."""
    return {"type": "http.request", "body": b""}


@pytest.fixture
def send() -> MockSend:
    """Create a mock send callable."""
    return MockSend()


@pytest.fixture
def receive() -> Callable[[], Any]:
    """Mock receive callable."""
    return mock_receive


@pytest.fixture
def make_scope() -> Callable[..., dict[str, Any]]:
    """Factory for HTTP scopes: make_scope("/path", method="GET", headers={...})."""

    def factory(
        path: str = "/",
        method: str = "GET",
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        return {
            "type": "http",
            "method": method,
            "path": path,
            "query_string": b"",
            "headers": [
                (name.lower().encode("latin-1"), value.encode("latin-1"))
                for name, value in (headers or {}).items()
            ],
            "client": ("127.0.0.1", 50000),
        }

    return factory


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Directory with a small static site."""
    site = tmp_path / "site"
    site.mkdir()
    (site / "index.html").write_text("<html>index</html>")
    (site / "hello.txt").write_text("Hello, static!")
    (site / "style.css").write_text("body { color: red; }")
    (site / "app.js").write_text("console.log('hello');")
    (site / "data.bin").write_bytes(b"\x00\x01\x02")
    (site / "images").mkdir()
    (site / "images" / "logo.png").write_bytes(b"\x89PNG\r\n")
    (site / "docs").mkdir()
    (site / "docs" / "index.html").write_text("<html>docs</html>")
    (tmp_path / "secret.txt").write_text("top secret")
    return site
