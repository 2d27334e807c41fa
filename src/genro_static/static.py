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
Static file serving for a single mount point.

StaticFiles serves the files of one directory under one URL prefix. It is
used in two ways:

- by the server Dispatcher, which holds a list of StaticFiles and asks each
  one to ``resolve()`` the request path, serving the first hit;
- standalone, as an ASGI application (``__call__``), answering 404/405
  itself.

Features:
- Directory resolved once, at construction (missing directory is an error)
- Files read from disk on every request, so edits are visible immediately
- Index file for directory requests (default: index.html)
- Content-Type detection via mimetypes, charset for text types
- Extra per-mount headers (default ``Cache-Control: max-age=0``)
- HEAD support (headers only)
- Security: prevents directory traversal, including via symlinks

Constructor:
    StaticFiles(config)            # StaticFileConfig
    StaticFiles.external(directory, hosted_path="/")
"""

from __future__ import annotations

import mimetypes
from pathlib import Path
from typing import Any

from .response import Response
from .static_config import Location, StaticFileConfig
from .types import Receive, Scope, Send

__all__ = ["StaticFiles"]

# Ensure common types are registered
mimetypes.add_type("application/javascript", ".js")
mimetypes.add_type("text/css", ".css")
mimetypes.add_type("image/svg+xml", ".svg")
mimetypes.add_type("application/json", ".json")
mimetypes.add_type("text/html", ".html")
mimetypes.add_type("text/html", ".htm")

ALLOWED_METHODS = ("GET", "HEAD")


class StaticFiles:
    """
    Serves files from one directory under one URL prefix.

    Attributes:
        config: The StaticFileConfig this mount was built from.
        directory: Absolute, resolved directory.
        hosted_path: Normalized URL prefix ("/" or "/name").

    Example:
        app = StaticFiles(StaticFileConfig("./public"))
        app = StaticFiles.external("./assets", hosted_path="/assets")
    """

    __slots__ = ("config", "directory", "hosted_path")

    def __init__(self, config: StaticFileConfig) -> None:
        """
        Initialize static file mount.

        Args:
            config: Mount configuration.

        Raises:
            ConfigError: If the configured directory does not exist.
        """
        self.config = config
        self.directory = config.resolve_directory()
        self.hosted_path = config.hosted_path

    @classmethod
    def external(cls, directory: str | Path, hosted_path: str = "/", **options: Any) -> StaticFiles:
        """Shortcut for an EXTERNAL location mount."""
        return cls(StaticFileConfig(directory, Location.EXTERNAL, hosted_path=hosted_path, **options))

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        Handle ASGI request as a standalone application.

        Args:
            scope: ASGI scope dict.
            receive: ASGI receive callable.
            send: ASGI send callable.
        """
        if scope["type"] != "http":
            return

        if scope.get("method", "GET") not in ALLOWED_METHODS:
            response = Response(
                "405 Method Not Allowed",
                status_code=405,
                headers={"Allow": ", ".join(ALLOWED_METHODS)},
                media_type="text/plain",
            )
            await response(scope, receive, send)
            return

        file_path = self.resolve(scope.get("path", "/"))
        if file_path is None:
            await Response("404 Not Found", status_code=404, media_type="text/plain")(scope, receive, send)
            return

        await self.send_file(scope, send, file_path)

    def match(self, url_path: str) -> str | None:
        """
        Return url_path relative to the hosted path, or None if outside it.

        "/static" matches "/static" and "/static/app.js", not "/staticfoo".
        """
        if self.hosted_path == "/":
            return url_path.lstrip("/")
        if url_path == self.hosted_path:
            return ""
        if url_path.startswith(self.hosted_path + "/"):
            return url_path[len(self.hosted_path) + 1 :].lstrip("/")
        return None

    def resolve(self, url_path: str) -> Path | None:
        """
        Resolve URL path to a file inside the directory.

        Args:
            url_path: URL path from request (already percent-decoded).

        Returns:
            Resolved Path, or None if outside the mount, not found or invalid.
        """
        relative = self.match(url_path)
        if relative is None:
            return None

        try:
            file_path = (self.directory / relative).resolve() if relative else self.directory
        except (ValueError, OSError):
            return None

        # Security: ensure path is within directory
        try:
            file_path.relative_to(self.directory)
        except ValueError:
            return None

        try:
            if file_path.is_dir():
                file_path = file_path / self.config.index
            if not file_path.is_file():
                return None
        except (ValueError, OSError):
            return None

        return file_path

    async def send_file(self, scope: Scope, send: Send, file_path: Path) -> None:
        """
        Send file as HTTP 200 response.

        Records scope["_file_path"] so downstream middleware (cache) can
        compute validators from the file itself.

        Args:
            scope: ASGI scope dict. HEAD suppresses the body.
            send: ASGI send callable.
            file_path: Resolved file path.
        """
        scope["_file_path"] = file_path
        response = Response(
            content=file_path.read_bytes(),
            headers=dict(self.config.headers),
            media_type=self.get_content_type(file_path),
        )
        await response(scope, _no_receive, send)

    @staticmethod
    def get_content_type(file_path: Path) -> str:
        """
        Get content type for file.

        Returns:
            MIME type string, application/octet-stream when unknown.
            Text types and javascript get a utf-8 charset.
        """
        content_type, _ = mimetypes.guess_type(str(file_path))
        if content_type is None:
            return "application/octet-stream"
        if content_type == "application/javascript":
            return f"{content_type}; charset=utf-8"
        return content_type

    def __repr__(self) -> str:
        """Return string representation."""
        return f"StaticFiles(directory={str(self.directory)!r}, hosted_path={self.hosted_path!r})"


async def _no_receive() -> dict[str, Any]:
    return {"type": "http.disconnect"}
