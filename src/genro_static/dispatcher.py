# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Dispatcher - serves a request from the first static mount that has the file."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .exceptions import HTTPMethodNotAllowed, HTTPNotFound
from .static import ALLOWED_METHODS

if TYPE_CHECKING:
    from .server import AsgiServer
    from .types import Receive, Scope, Send


class Dispatcher:
    """Innermost ASGI app of the middleware chain.

    Mounts are tried in registration order. Errors are raised as
    HTTPException and turned into responses by ErrorMiddleware.
    """

    __slots__ = ("server",)

    def __init__(self, server: AsgiServer) -> None:
        self.server = server

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI interface - dispatch request to a static mount."""
        if scope["type"] == "websocket":
            await send({"type": "websocket.close", "code": 1000})
            return

        if scope.get("method", "GET") not in ALLOWED_METHODS:
            raise HTTPMethodNotAllowed(ALLOWED_METHODS)

        path = scope.get("path", "/")
        for handler in self.server.static_handlers:
            file_path = handler.resolve(path)
            if file_path is not None:
                await handler.send_file(scope, send, file_path)
                return

        raise HTTPNotFound()
