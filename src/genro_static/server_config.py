# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Server configuration - multi-source options and static mount specs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from genro_toolbox import SmartOptions  # type: ignore[import-untyped]

from .static_config import StaticFileConfig

__all__ = ["DEFAULTS", "ServerConfig"]

DEFAULTS = {"host": "0.0.0.0", "port": 7070}


def _server_opts_spec(
    server_dir: str,
    host: str,
    port: int,
    config: str,
) -> None:
    """Reference function for SmartOptions type extraction (no defaults)."""


class ServerConfig:
    """Loads server options and the static mounts declared in config.yaml."""

    __slots__ = ("_opts",)

    def __init__(
        self,
        server_dir: str | Path | None = None,
        host: str | None = None,
        port: int | None = None,
        argv: list[str] | None = None,
        isolated: bool = False,
    ) -> None:
        """Load options. With ``isolated`` only DEFAULTS and the explicit
        arguments are used: no config files, environment or argv."""
        self._opts = self._build_config(
            server_dir=str(server_dir) if server_dir is not None else None,
            host=host,
            port=port,
            argv=argv or [],
            isolated=isolated,
        )

    def _build_config(
        self,
        server_dir: str | None,
        host: str | None,
        port: int | None,
        argv: list[str],
        isolated: bool = False,
    ) -> SmartOptions:
        """Build server configuration from multiple sources.

        Config precedence (later overrides earlier):
        1. Built-in DEFAULTS
        2. Global config: ~/.genro-static/config.yaml
        3. Project config: <server_dir>/config.yaml (or --config file)
        4. Environment variables (GENRO_STATIC_*) and command line arguments
        5. Explicit constructor parameters

        An isolated config keeps only 1 and 5.
        """
        caller_opts = SmartOptions(
            dict(server_dir=server_dir, host=host, port=port),
            ignore_none=True,
        )

        if isolated:
            server_opts = SmartOptions(DEFAULTS) + caller_opts
            server_opts["server_dir"] = Path(caller_opts["server_dir"] or ".").resolve()
            server_opts["port"] = int(server_opts["port"])
            config = SmartOptions({})
            config["server"] = server_opts
            return config

        env_argv_opts = SmartOptions(_server_opts_spec, env="GENRO_STATIC", argv=argv)

        resolved_server_dir = Path(caller_opts["server_dir"] or env_argv_opts["server_dir"] or ".").resolve()

        global_config = _load_yaml(Path.home() / ".genro-static" / "config.yaml")
        config_file = env_argv_opts["config"] or "config.yaml"
        project_config = _load_yaml(resolved_server_dir / config_file)

        config = global_config + project_config

        server_opts = (
            SmartOptions(DEFAULTS)
            + (global_config["server"] or SmartOptions({}))
            + (project_config["server"] or SmartOptions({}))
            + env_argv_opts
            + caller_opts
        )
        server_opts["server_dir"] = resolved_server_dir
        server_opts["port"] = int(server_opts["port"])

        config["server"] = server_opts
        return config

    @property
    def server(self) -> SmartOptions:
        """Server options (host, port, server_dir)."""
        result: SmartOptions = self._opts["server"]
        return result

    @property
    def server_dir(self) -> Path:
        """Resolved server directory (base for relative static directories)."""
        return Path(self.server["server_dir"])

    @property
    def middleware(self) -> Any:
        """Middleware on/off configuration."""
        return self._opts["middleware"] or {}

    @property
    def static(self) -> SmartOptions | None:
        """Static mounts configuration."""
        result: SmartOptions | None = self._opts["static"]
        return result

    def get_static_specs(self) -> list[StaticFileConfig]:
        """Return a StaticFileConfig per mount of the ``static`` section, in order.

        config.yaml::

            static:
              site:
                path: "/"
                directory: "./public"
                location: external
              docs:
                path: "/docs"
                directory: "public"
                location: package
                package: "genro_static"
        """
        if not self.static:
            return []
        specs = []
        for name, opts in self.static.as_dict().items():
            if hasattr(opts, "as_dict"):
                opts = opts.as_dict()
            if isinstance(opts, str):
                opts = {"directory": opts}
            specs.append(StaticFileConfig.from_options(name, opts or {}, base_dir=self.server_dir))
        return specs

    def __getitem__(self, name: str) -> Any:
        """Proxy bracket access to underlying opts."""
        return self._opts[name]


def _load_yaml(path: Path) -> SmartOptions:
    """Load a YAML config file, or empty options if it does not exist."""
    if path.exists():
        return SmartOptions(str(path))
    return SmartOptions({})
