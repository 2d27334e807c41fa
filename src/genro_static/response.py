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
HTTP Response class for genro-static.

Response is a small ASGI callable: it encodes its content once, computes
Content-Type (adding a charset to text types) and Content-Length, and sends
``http.response.start`` followed by a single ``http.response.body``.

HEAD requests
=============
When the scope method is HEAD the headers are sent unchanged (Content-Length
still reports the full size) and the body message is empty.

Example::

    response = Response(content=path.read_bytes(), media_type="text/css")
    await response(scope, receive, send)
"""

from __future__ import annotations

from collections.abc import Mapping

from .types import Receive, Scope, Send

__all__ = ["Response"]

# Type alias for headers input
HeadersInput = Mapping[str, str] | list[tuple[str, str]] | None


def _normalize_headers(
    headers: HeadersInput,
) -> list[tuple[str, str]]:
    """Normalize headers input to list of tuples. Empty list if None."""
    if headers is None:
        return []
    if isinstance(headers, list):
        return list(headers)
    return list(headers.items())


class Response:
    """
    HTTP response usable as an ASGI application.

    Attributes:
        body: Encoded response body as bytes.
        status_code: HTTP status code.
        media_type: Content-Type media type (may include charset).

    Example:
        >>> response = Response(content="Hello", media_type="text/plain")
        >>> await response(scope, receive, send)
    """

    __slots__ = ("body", "status_code", "media_type", "_headers")

    charset: str = "utf-8"

    def __init__(
        self,
        content: bytes | str | None = None,
        status_code: int = 200,
        headers: HeadersInput = None,
        media_type: str | None = None,
    ) -> None:
        """
        Initialize response.

        Args:
            content: Response body (bytes, string, or None).
            status_code: HTTP status code (default 200).
            headers: Response headers as dict or list of tuples.
            media_type: Content-Type media type.
        """
        self.status_code = status_code
        self.media_type = media_type
        self._headers: list[tuple[str, str]] = _normalize_headers(headers)
        self.body = self._encode_content(content)

        header_names = {name.lower() for name, _ in self._headers}
        content_type = self._get_content_type()
        if content_type and "content-type" not in header_names:
            self._headers.append(("content-type", content_type))
        if "content-length" not in header_names:
            self._headers.append(("content-length", str(len(self.body))))

    def _encode_content(self, content: bytes | str | None) -> bytes:
        """Encode response content to bytes using self.charset for str."""
        if content is None:
            return b""
        if isinstance(content, bytes):
            return content
        return content.encode(self.charset)

    def _get_content_type(self) -> str | None:
        """Get content-type header value with charset for text types."""
        if self.media_type is None:
            return None
        if self.media_type.startswith("text/") and "charset" not in self.media_type:
            return f"{self.media_type}; charset={self.charset}"
        return self.media_type

    @property
    def headers(self) -> list[tuple[str, str]]:
        """Response headers as (name, value) tuples."""
        return list(self._headers)

    def _build_headers(self) -> list[tuple[bytes, bytes]]:
        """Build ASGI headers list (lowercased names, latin-1 encoded)."""
        return [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in self._headers
        ]

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """
        ASGI application interface.

        Args:
            scope: ASGI scope dict. A HEAD method suppresses the body.
            receive: ASGI receive callable (unused).
            send: ASGI send callable for sending response messages.
        """
        await send(
            {
                "type": "http.response.start",
                "status": self.status_code,
                "headers": self._build_headers(),
            }
        )
        body = b"" if scope.get("method") == "HEAD" else self.body
        await send({"type": "http.response.body", "body": body})
