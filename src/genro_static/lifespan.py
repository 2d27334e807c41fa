# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
ASGI Lifespan Management.

ServerLifespan handles the ASGI lifespan protocol for AsgiServer:

- startup: every static mount directory is checked again (an external
  directory may have been removed between configuration and startup) and
  the mounts are logged. A missing directory sends
  ``lifespan.startup.failed`` and the ASGI server refuses to start.
- shutdown: logged, always completes.

Example::

    server = AsgiServer(port=7070)
    server.add_static_files("public")
    # server.lifespan handles all lifespan events
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .exceptions import ConfigError
from .types import Receive, Scope, Send

if TYPE_CHECKING:
    from .server import AsgiServer

__all__ = ["ServerLifespan"]


class ServerLifespan:
    """
    ASGI Lifespan handler for AsgiServer.

    Attributes:
        server: The AsgiServer instance this lifespan manages.
        started: True between a successful startup and shutdown.
    """

    __slots__ = ("server", "_logger", "started")

    def __init__(self, server: AsgiServer) -> None:
        self.server = server
        self._logger = logging.getLogger("genro_static.lifespan")
        self.started = False

    async def __call__(
        self, scope: Scope, receive: Receive, send: Send  # noqa: ARG002
    ) -> None:
        """
        Handle ASGI lifespan protocol.

        Args:
            scope: ASGI scope dict (type="lifespan").
            receive: ASGI receive callable.
            send: ASGI send callable.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as e:
                    self._logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(e)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception:
                    self._logger.exception("Shutdown error")
                finally:
                    await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """
        Execute startup sequence.

        Raises:
            ConfigError: If a static directory no longer exists.
        """
        self._logger.info("Static server starting up...")

        if not self.server.static_handlers:
            self._logger.warning("No static files configured, every request will return 404")

        for handler in self.server.static_handlers:
            if not handler.directory.is_dir():
                raise ConfigError(f"Static resource directory with path: '{handler.directory}' does not exist")
            self._logger.info(
                f"Serving {handler.config.location.value} directory {handler.directory} at {handler.hosted_path}"
            )

        self.started = True
        self._logger.info("Static server started")

    async def shutdown(self) -> None:
        """Execute shutdown sequence."""
        self._logger.info("Static server shutting down...")
        self.started = False
        self._logger.info("Static server stopped")
