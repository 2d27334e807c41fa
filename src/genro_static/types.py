# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI type definitions for genro-static.

These aliases follow the ASGI specification and are shared by the server,
the static file handler and the middleware chain.

Scope and Message are plain mutable mappings rather than TypedDicts: ASGI
servers add their own keys, and the static handler itself stores
``_file_path`` in the scope for the cache middleware.

References:
    - ASGI Specification: https://asgi.readthedocs.io/en/latest/specs/main.html
    - ASGI Lifespan Spec: https://asgi.readthedocs.io/en/latest/specs/lifespan.html
"""

from typing import Any, Awaitable, Callable, MutableMapping

__all__ = ["Scope", "Message", "Receive", "Send", "ASGIApp"]

# ASGI Scope - connection metadata
Scope = MutableMapping[str, Any]

# ASGI Message - sent/received data
Message = MutableMapping[str, Any]

# ASGI Receive - callable to receive messages
Receive = Callable[[], Awaitable[Message]]

# ASGI Send - callable to send messages
Send = Callable[[Message], Awaitable[None]]

# ASGI Application - the main callable
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]
