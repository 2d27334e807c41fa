# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Compression middleware - gzip for compressible static files.

The response is buffered so the decision can be taken on the full body.

Compression criteria:
    - GET request (HEAD responses carry no body to compress)
    - Client accepts gzip (Accept-Encoding lists gzip with q > 0)
    - Status 200 and no Content-Encoding already set
    - Response size >= minimum_size
    - Content-Type is compressible (text/*, json, javascript, xml, svg)
    - Compressed size < original size

Config:
    minimum_size (int): Minimum bytes before compressing. Default: 500.
    compression_level (int): Gzip level 1-9. Default: 6.

Example::

    middleware:
      compression: on

    compression_middleware:
      minimum_size: 1000
"""

from __future__ import annotations

import gzip
from typing import TYPE_CHECKING, Any, MutableMapping

from . import BaseMiddleware

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

COMPRESSIBLE_TYPES = (
    b"text/",
    b"application/json",
    b"application/javascript",
    b"application/xml",
    b"application/xhtml+xml",
    b"image/svg+xml",
)


class CompressionMiddleware(BaseMiddleware):
    """Gzip compression middleware for HTTP responses.

    Attributes:
        minimum_size: Minimum response size in bytes to consider compression.
        compression_level: Gzip compression level (1=fast, 9=best).
    """

    middleware_name = "compression"
    middleware_order = 900
    middleware_default = False

    __slots__ = ("minimum_size", "compression_level")

    def __init__(
        self,
        app: ASGIApp,
        minimum_size: int = 500,
        compression_level: int = 6,
        **kwargs: Any,
    ) -> None:
        super().__init__(app, **kwargs)
        self.minimum_size = minimum_size
        self.compression_level = min(9, max(1, compression_level))

    @staticmethod
    def accepts_gzip(scope: Scope) -> bool:
        """True if Accept-Encoding lists gzip (or *) without q=0."""
        for name, value in scope.get("headers", []):
            if name.lower() != b"accept-encoding":
                continue
            for item in value.decode("latin-1").lower().split(","):
                coding, _, params = item.strip().partition(";")
                if coding.strip() not in ("gzip", "*"):
                    continue
                params = params.replace(" ", "")
                if params.startswith("q="):
                    try:
                        return float(params[2:]) > 0
                    except ValueError:
                        return False
                return True
        return False

    def _should_compress(self, start: MutableMapping[str, Any], body: bytes) -> bool:
        if start.get("status") != 200 or len(body) < self.minimum_size:
            return False
        headers = dict(start.get("headers", []))
        if b"content-encoding" in headers:
            return False
        content_type = headers.get(b"content-type", b"").lower()
        return any(content_type.startswith(ct) for ct in COMPRESSIBLE_TYPES)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Buffer the response and gzip it when worthwhile."""
        if scope["type"] != "http" or scope.get("method", "GET") != "GET" or not self.accepts_gzip(scope):
            await self.app(scope, receive, send)
            return

        start_message: MutableMapping[str, Any] | None = None
        body_parts: list[bytes] = []

        async def send_buffered(message: MutableMapping[str, Any]) -> None:
            nonlocal start_message
            if message["type"] == "http.response.start":
                start_message = message
                return
            if message["type"] != "http.response.body":
                await send(message)
                return
            body_parts.append(message.get("body", b""))
            if not message.get("more_body", False):
                await self._send_response(send, start_message, b"".join(body_parts))

        await self.app(scope, receive, send_buffered)

    async def _send_response(
        self,
        send: Send,
        start: MutableMapping[str, Any] | None,
        body: bytes,
    ) -> None:
        """Send buffered response, gzipped if it pays off."""
        if start is None:
            return

        if self._should_compress(start, body):
            compressed = gzip.compress(body, compresslevel=self.compression_level)
            if len(compressed) < len(body):
                body = compressed
                headers = [
                    (name, _weak_etag(value) if name == b"etag" else value)
                    for name, value in start.get("headers", [])
                    if name != b"content-length"
                ]
                headers.append((b"content-encoding", b"gzip"))
                headers.append((b"content-length", str(len(body)).encode()))
                headers.append((b"vary", b"Accept-Encoding"))
                start = {**start, "headers": headers}

        await send(start)
        await send({"type": "http.response.body", "body": body})


def _weak_etag(value: bytes) -> bytes:
    """Mark an ETag weak: the gzipped body is a different representation."""
    return value if value.startswith(b"W/") else b"W/" + value
