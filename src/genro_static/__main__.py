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
genro-static entry point.

Usage:
    genro-static
    python -m genro_static

Serves the files of ``tests/external`` (relative to the working directory)
at the URL root on port 7070. Takes no arguments and reads no
environment variables or config files.
"""

from __future__ import annotations

import sys

from .server import AsgiServer
from .static_config import Location

HOST = "0.0.0.0"
PORT = 7070
EXTERNAL_DIRECTORY = "tests/external"


def create_server() -> AsgiServer:
    """Build the server: one external mount at the URL root, port 7070.

    The configuration is closed: config files and GENRO_STATIC_* variables
    are not read.
    """
    server = AsgiServer(server_dir=".", host=HOST, port=PORT, isolated=True)
    server.add_static_files(EXTERNAL_DIRECTORY, Location.EXTERNAL)
    return server


def main() -> int:
    """Main entry point."""
    server = create_server()
    try:
        server.run()
    except KeyboardInterrupt:
        print("\nShutdown.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
