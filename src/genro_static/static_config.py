# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Static file mount configuration.

A mount maps a URL namespace (``hosted_path``) to a directory. The directory
lives in one of two locations:

- ``Location.EXTERNAL``: a directory on disk, outside any installed package.
  Relative paths are resolved against the working directory (or the
  ``base_dir`` given by the server). Files are read at request time.
- ``Location.PACKAGE``: a directory bundled inside an importable package,
  resolved with ``importlib.resources``.

Example:
    >>> StaticFileConfig("public")                      # external, at "/"
    >>> StaticFileConfig("public", Location.PACKAGE, package="genro_static")
    >>> StaticFileConfig("./assets", hosted_path="/assets/")
"""

from __future__ import annotations

from enum import Enum
from importlib.resources import files
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

__all__ = ["DEFAULT_HEADERS", "Location", "StaticFileConfig"]

DEFAULT_HEADERS = {"Cache-Control": "max-age=0"}


class Location(Enum):
    """Where a static directory is looked up."""

    EXTERNAL = "external"
    PACKAGE = "package"

    @classmethod
    def parse(cls, value: Location | str) -> Location:
        """Return a Location from a member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(member.value for member in cls)
            raise ConfigError(f"Unknown static location {value!r} (expected one of: {names})") from None


def normalize_hosted_path(hosted_path: str) -> str:
    """Normalize a URL prefix: leading slash, no trailing slash except root."""
    return "/" + hosted_path.strip().strip("/")


class StaticFileConfig:
    """Configuration of a single static mount.

    Attributes:
        directory: Directory to serve, as given by the caller.
        location: Location kind (EXTERNAL or PACKAGE).
        hosted_path: URL prefix the directory is exposed at.
        package: Package holding the directory (PACKAGE only).
        index: File served for directory requests.
        headers: Extra headers added to every file response.
        base_dir: Base for relative EXTERNAL directories (default: cwd).
    """

    __slots__ = ("directory", "location", "hosted_path", "package", "index", "headers", "base_dir")

    def __init__(
        self,
        directory: str | Path,
        location: Location | str = Location.EXTERNAL,
        hosted_path: str = "/",
        package: str | None = None,
        index: str = "index.html",
        headers: dict[str, str] | None = None,
        base_dir: str | Path | None = None,
    ) -> None:
        self.directory = str(directory)
        self.location = Location.parse(location)
        self.hosted_path = normalize_hosted_path(hosted_path)
        self.package = package
        self.index = index
        self.headers = dict(DEFAULT_HEADERS if headers is None else headers)
        self.base_dir = Path(base_dir) if base_dir is not None else None

        if self.location is Location.PACKAGE and not self.package:
            raise ConfigError(f"Static directory {self.directory!r} uses package location but no package is set")

    @classmethod
    def from_options(cls, name: str, opts: dict[str, Any], base_dir: Path | None = None) -> StaticFileConfig:
        """Build a config from a ``static`` section entry of config.yaml.

        Keys: directory (required), location, path, package, index, headers.
        """
        directory = opts.get("directory")
        if not directory:
            raise ConfigError(f"Static mount '{name}' missing 'directory' in config")
        return cls(
            directory,
            location=opts.get("location") or Location.EXTERNAL,
            hosted_path=opts.get("path") or "/",
            package=opts.get("package"),
            index=opts.get("index") or "index.html",
            headers=opts.get("headers"),
            base_dir=base_dir,
        )

    def resolve_directory(self) -> Path:
        """Return the absolute directory for this mount.

        Raises:
            ConfigError: If the directory (or its package) does not exist.
        """
        if self.location is Location.PACKAGE:
            try:
                resource = files(self.package).joinpath(self.directory)
            except ModuleNotFoundError as e:
                raise ConfigError(f"Static package not found: {self.package}") from e
            directory = Path(str(resource))
        else:
            directory = Path(self.directory).expanduser()
            if not directory.is_absolute() and self.base_dir is not None:
                directory = self.base_dir / directory

        directory = directory.resolve()
        if not directory.is_dir():
            raise ConfigError(
                f"Static resource directory with path: '{directory}' does not exist "
                f"({self.location.value} location)"
            )
        return directory

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"StaticFileConfig(directory={self.directory!r}, location={self.location.value!r}, "
            f"hosted_path={self.hosted_path!r})"
        )
