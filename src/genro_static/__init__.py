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

"""genro-static - Static file server on ASGI, run by uvicorn.

Main components:
    AsgiServer: ASGI entry point, loads config, holds static mounts
    StaticFiles: One mount point (directory served under a URL prefix)
    StaticFileConfig: Mount configuration (directory, location, hosted path)
    Location: EXTERNAL (filesystem) or PACKAGE (bundled in a package)

Middleware:
    ErrorMiddleware: Exception handling and error responses (on)
    CacheMiddleware: ETag, Last-Modified, 304 Not Modified (on)
    LoggingMiddleware: Access log (off)
    CompressionMiddleware: gzip (off)

Usage:
    from genro_static import AsgiServer, Location

    server = AsgiServer(port=7070)
    server.add_static_files("public", Location.EXTERNAL)
    server.run()  # Starts uvicorn
"""

__version__ = "0.1.0"

from .exceptions import (
    ConfigError,
    HTTPException,
    HTTPMethodNotAllowed,
    HTTPNotFound,
)
from .lifespan import ServerLifespan
from .response import Response
from .server import AsgiServer
from .server_config import ServerConfig
from .static import StaticFiles
from .static_config import Location, StaticFileConfig
from .types import ASGIApp, Message, Receive, Scope, Send

__all__ = [
    # Server
    "AsgiServer",
    "ServerConfig",
    "ServerLifespan",
    # Static files
    "Location",
    "StaticFileConfig",
    "StaticFiles",
    # Response
    "Response",
    # Exceptions
    "ConfigError",
    "HTTPException",
    "HTTPMethodNotAllowed",
    "HTTPNotFound",
    # ASGI types
    "ASGIApp",
    "Message",
    "Receive",
    "Scope",
    "Send",
]
