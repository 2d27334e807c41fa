# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Error handling middleware.

Catches exceptions raised while serving a request and converts them to
plain-text HTTP responses.

Exception handling:
    - HTTPException (HTTPNotFound, HTTPMethodNotAllowed, ...): status code,
      detail as body, exception headers (e.g. Allow) appended
    - Exception: 500 Internal Server Error, logged on "genro_static"

Config:
    debug (bool): If True, include traceback in 500 responses. Default: False.

Note:
    Enabled by default (middleware_default=True) and outermost in the chain
    (middleware_order=100).

Example::

    errors_middleware:
      debug: true
"""

from __future__ import annotations

import logging
import traceback
from typing import TYPE_CHECKING, Any, MutableMapping

from . import BaseMiddleware
from ..exceptions import HTTPException

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

logger = logging.getLogger("genro_static")


class ErrorMiddleware(BaseMiddleware):
    """Error handling middleware for HTTP requests.

    Attributes:
        debug: If True, include stack traces in 500 error responses.
    """

    middleware_name = "errors"
    middleware_order = 100
    middleware_default = True

    __slots__ = ("debug",)

    def __init__(self, app: ASGIApp, debug: bool = False, **kwargs: Any) -> None:
        super().__init__(app, **kwargs)
        self.debug = debug

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process request with error handling.

        Non-HTTP requests pass through without error handling. If the
        response has already started, the exception is re-raised: headers
        cannot be taken back.
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: MutableMapping[str, Any]) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, receive, send_tracking)
        except HTTPException as e:
            if response_started:
                raise
            await self._send_http_error(send, e, head=scope.get("method") == "HEAD")
        except Exception as e:
            logger.exception(f"Error serving {scope.get('method', '?')} {scope.get('path', '/')}: {e}")
            if response_started:
                raise
            await self._send_server_error(send, head=scope.get("method") == "HEAD")

    async def _send_http_error(self, send: Send, exc: HTTPException, head: bool = False) -> None:
        """Send HTTP error response from HTTPException.

        Content-Type: text/plain; charset=utf-8, body is exc.detail
        (empty for HEAD, content-length still that of the detail).
        """
        body_bytes = (exc.detail or "").encode("utf-8")

        headers: list[tuple[bytes, bytes]] = [
            (b"content-type", b"text/plain; charset=utf-8"),
            (b"content-length", str(len(body_bytes)).encode()),
        ]
        if exc.headers:
            headers.extend((k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in exc.headers)

        await send({"type": "http.response.start", "status": exc.status_code, "headers": headers})
        await send({"type": "http.response.body", "body": b"" if head else body_bytes})

    async def _send_server_error(self, send: Send, head: bool = False) -> None:
        """Send 500 Internal Server Error response.

        If self.debug is True, includes full traceback in response body.
        """
        if self.debug:
            body = f"Internal Server Error\n\n{traceback.format_exc()}"
        else:
            body = "Internal Server Error"

        body_bytes = body.encode("utf-8")

        await send(
            {
                "type": "http.response.start",
                "status": 500,
                "headers": [
                    (b"content-type", b"text/plain; charset=utf-8"),
                    (b"content-length", str(len(body_bytes)).encode()),
                ],
            }
        )
        await send({"type": "http.response.body", "body": b"" if head else body_bytes})
