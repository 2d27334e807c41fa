# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""ASGI Server - static file server built on uvicorn.

AsgiServer is the central coordinator that:
- Loads configuration (ServerConfig, config.yaml, env, argv)
- Holds the static mounts (StaticFiles), from config and from code
- Builds the middleware chain (errors, logging, cache, compression)
- Handles ASGI lifespan protocol (startup/shutdown)

Usage:
    from genro_static import AsgiServer, Location

    server = AsgiServer(port=7070)
    server.add_static_files("public", Location.EXTERNAL)
    server.run()  # Starts uvicorn, blocks

Configuration (config.yaml):
    server:
      host: "0.0.0.0"
      port: 7070

    middleware:
      logging: on
      compression: on

    static:
      site:
        path: "/"
        directory: "./public"

Request flow:
    uvicorn -> AsgiServer.__call__
        -> Middleware chain (errors -> logging -> compression -> cache)
        -> Dispatcher -> StaticFiles.resolve() / send_file()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from .dispatcher import Dispatcher
from .lifespan import ServerLifespan
from .middleware import middleware_chain
from .server_config import ServerConfig
from .static import StaticFiles
from .static_config import Location, StaticFileConfig
from .types import Receive, Scope, Send

__all__ = ["AsgiServer"]


class AsgiServer:
    """
    Static file ASGI server.

    Attributes:
        config: ServerConfig for configuration.
        base_dir: Server directory, base for relative external directories.
        static_handlers: Registered StaticFiles mounts, in lookup order.
        dispatcher: Middleware chain wrapping the Dispatcher.
        lifespan: ServerLifespan for startup/shutdown.
        logger: Server logger instance.
    """

    __slots__ = (
        "config",
        "base_dir",
        "static_handlers",
        "logger",
        "lifespan",
        "dispatcher",
    )

    def __init__(
        self,
        server_dir: str | Path | None = None,
        host: str | None = None,
        port: int | None = None,
        argv: list[str] | None = None,
        isolated: bool = False,
    ) -> None:
        """Initialize AsgiServer and register the mounts declared in config.

        With ``isolated`` no config file, environment variable or argv is read:
        the server uses DEFAULTS, the explicit arguments and the mounts added
        in code.
        """
        self.config = ServerConfig(server_dir, host, port, argv, isolated=isolated)
        self.base_dir: Path = self.config.server_dir
        self.logger = logging.getLogger("genro_static")
        self.static_handlers: list[StaticFiles] = []
        self.lifespan = ServerLifespan(self)
        self.dispatcher = middleware_chain(self.config.middleware, Dispatcher(self), full_config=self.config)

        for static_config in self.config.get_static_specs():
            self.add_static(static_config)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Handle ASGI request.

        Args:
            scope: ASGI scope dict.
            receive: ASGI receive callable.
            send: ASGI send callable.
        """
        if scope["type"] == "lifespan":
            await self.lifespan(scope, receive, send)
        else:
            await self.dispatcher(scope, receive, send)

    def add_static(self, config: StaticFileConfig) -> StaticFiles:
        """Register a static mount. Relative external directories use base_dir.

        Raises:
            ConfigError: If the directory does not exist.
        """
        if config.base_dir is None:
            config.base_dir = self.base_dir
        handler = StaticFiles(config)
        self.static_handlers.append(handler)
        self.logger.debug(f"Static files: {handler.directory} at {handler.hosted_path}")
        return handler

    def add_static_files(
        self,
        directory: str | Path,
        location: Location | str = Location.EXTERNAL,
        hosted_path: str = "/",
        **options: Any,
    ) -> StaticFiles:
        """Serve ``directory`` under ``hosted_path``.

        Args:
            directory: Directory path (external) or path inside ``package``.
            location: Location.EXTERNAL (default) or Location.PACKAGE.
            hosted_path: URL prefix. Default: the URL root.
            **options: package, index, headers (see StaticFileConfig).
        """
        return self.add_static(StaticFileConfig(directory, location, hosted_path=hosted_path, **options))

    def run(self) -> None:
        """Run the server using Uvicorn. Blocks until the process is stopped."""
        import uvicorn

        host = self.config.server["host"]
        port = self.config.server["port"]

        self.logger.info(f"Starting server on {host}:{port}")
        uvicorn.run(self, host=host, port=port)

    def __repr__(self) -> str:
        """Return string representation."""
        mounts = ", ".join(f"{h.hosted_path!r}" for h in self.static_handlers)
        return f"AsgiServer(static=[{mounts}])"
