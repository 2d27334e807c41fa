# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Cache Middleware - validators and conditional requests for static files.

Adds cache-related headers to successful file responses:
- ETag: Based on file mtime + size
- Last-Modified: From file modification time
- Cache-Control: Only when the response does not carry one already
  (static mounts send their own, default "max-age=0")

Handles conditional requests:
- If-None-Match: Returns 304 if ETag matches
- If-Modified-Since: Returns 304 if file not modified (ignored when
  If-None-Match is present)

Config:
    max_age (int): Cache-Control max-age in seconds. Default: 0.
    immutable (bool): Add immutable directive for hashed filenames. Default: False.
    public (bool): Add public directive. Default: False.

Note:
    Relies on scope["_file_path"], set by StaticFiles.send_file().
    Only applies to GET/HEAD requests with a 200 response.

Example::

    cache_middleware:
      max_age: 86400
      public: true
"""

from __future__ import annotations

import hashlib
from email.utils import formatdate, parsedate_to_datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, MutableMapping

from . import BaseMiddleware

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

__all__ = ["CacheMiddleware"]


class CacheMiddleware(BaseMiddleware):
    """Cache middleware for static file responses.

    Attributes:
        max_age: Cache-Control max-age value in seconds.
        immutable: Whether to add immutable directive.
        public: Whether to add public directive.
    """

    middleware_name = "cache"
    middleware_order = 950
    middleware_default = True

    __slots__ = ("max_age", "immutable", "public")

    def __init__(
        self,
        app: ASGIApp,
        max_age: int = 0,
        immutable: bool = False,
        public: bool = False,
        **kwargs: Any,
    ) -> None:
        super().__init__(app, **kwargs)
        self.max_age = max_age
        self.immutable = immutable
        self.public = public

    def _get_request_headers(self, scope: Scope) -> dict[str, str]:
        """Extract if-none-match and if-modified-since request headers."""
        headers: dict[str, str] = {}
        for name, value in scope.get("headers", []):
            name_str = name.decode("latin-1").lower()
            if name_str in ("if-none-match", "if-modified-since"):
                headers[name_str] = value.decode("latin-1")
        return headers

    def _compute_etag(self, path: Path) -> str:
        """Compute quoted ETag from file mtime and size."""
        stat = path.stat()
        data = f"{stat.st_mtime_ns}-{stat.st_size}".encode()
        return f'"{hashlib.md5(data).hexdigest()}"'

    def _format_http_date(self, timestamp: float) -> str:
        """Format timestamp as RFC 7231 HTTP date."""
        return formatdate(timestamp, usegmt=True)

    def _check_not_modified(
        self,
        request_headers: dict[str, str],
        etag: str,
        mtime: float,
    ) -> bool:
        """Check if client cache is still valid.

        If-None-Match takes precedence: when present, If-Modified-Since is
        not consulted. Supports comma-separated and weak ETags.
        """
        if_none_match = request_headers.get("if-none-match")
        if if_none_match:
            client_etags = [e.strip().removeprefix("W/") for e in if_none_match.split(",")]
            return etag in client_etags or "*" in client_etags

        if_modified_since = request_headers.get("if-modified-since")
        if if_modified_since:
            try:
                client_time = parsedate_to_datetime(if_modified_since).timestamp()
            except (ValueError, TypeError):
                return False
            # HTTP dates have one-second resolution
            return int(mtime) <= client_time

        return False

    def _build_cache_control(self) -> str:
        """Build Cache-Control header value from configuration."""
        parts = []
        if self.public:
            parts.append("public")
        parts.append(f"max-age={self.max_age}")
        if self.immutable:
            parts.append("immutable")
        return ", ".join(parts)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process request with cache header handling."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = scope.get("method", "GET")
        if method not in ("GET", "HEAD"):
            await self.app(scope, receive, send)
            return

        request_headers = self._get_request_headers(scope)
        not_modified = False

        async def send_wrapper(message: MutableMapping[str, Any]) -> None:
            nonlocal not_modified

            if message["type"] == "http.response.start":
                file_path: Path | None = scope.get("_file_path")
                if message.get("status") != 200 or file_path is None or not file_path.exists():
                    await send(message)
                    return

                etag = self._compute_etag(file_path)
                mtime = file_path.stat().st_mtime
                headers = list(message.get("headers", []))
                cache_control = next((v for n, v in headers if n == b"cache-control"), None)
                if cache_control is None:
                    cache_control = self._build_cache_control().encode("latin-1")
                    headers.append((b"cache-control", cache_control))

                if self._check_not_modified(request_headers, etag, mtime):
                    not_modified = True
                    await send(
                        {
                            "type": "http.response.start",
                            "status": 304,
                            "headers": [
                                (b"etag", etag.encode("latin-1")),
                                (b"cache-control", cache_control),
                            ],
                        }
                    )
                    await send({"type": "http.response.body", "body": b""})
                    return

                headers.append((b"etag", etag.encode("latin-1")))
                headers.append((b"last-modified", self._format_http_date(mtime).encode("latin-1")))
                await send({**message, "headers": headers})

            elif not not_modified:
                await send(message)

        await self.app(scope, receive, send_wrapper)
