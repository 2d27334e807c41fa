# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exception classes for genro-static.

HTTPException and its subclasses are raised by the dispatcher and caught by
ErrorMiddleware, which turns them into plain-text HTTP responses.
ConfigError signals a configuration problem detected while building the
server (bad location name, missing static directory) or during lifespan
startup.

HTTPException
-------------
Attributes:
    status_code (int): HTTP status code (expected 4xx or 5xx)
    detail (str): Error detail message (default: "")
    headers (list[tuple[str, str]] | None): Optional response headers.
        Input can be dict[str, str] or list[tuple[str, str]], stored as list.

Example:
    >>> raise HTTPException(404, detail="File not found")
    >>> raise HTTPMethodNotAllowed(allowed=("GET", "HEAD"))
"""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "ConfigError",
    "HTTPException",
    "HTTPMethodNotAllowed",
    "HTTPNotFound",
]


class ConfigError(Exception):
    """Configuration error."""


class HTTPException(Exception):
    """
    HTTP exception with status code and detail.

    Attributes:
        status_code: HTTP status code (expected 4xx or 5xx, not validated)
        detail: Error detail message
        headers: Response headers as list of tuples (supports duplicate names)
    """

    def __init__(
        self,
        status_code: int,
        detail: str = "",
        headers: dict[str, str] | list[tuple[str, str]] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        if headers is None:
            self.headers: list[tuple[str, str]] | None = None
        elif isinstance(headers, dict):
            self.headers = list(headers.items())
        else:
            self.headers = list(headers)
        super().__init__(detail)

    def __repr__(self) -> str:
        """Return detailed string representation."""
        return f"HTTPException(status_code={self.status_code}, detail={self.detail!r})"


class HTTPNotFound(HTTPException):
    """HTTP 404 Not Found exception."""

    def __init__(self, detail: str = "Not found") -> None:
        super().__init__(404, detail=detail)


class HTTPMethodNotAllowed(HTTPException):
    """HTTP 405 Method Not Allowed exception, with the Allow header set."""

    def __init__(
        self,
        allowed: Iterable[str] = ("GET", "HEAD"),
        detail: str = "Method not allowed",
    ) -> None:
        self.allowed = tuple(allowed)
        super().__init__(405, detail=detail, headers={"Allow": ", ".join(self.allowed)})
