# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Middleware package - ASGI middleware wrapped around the static dispatcher."""

from __future__ import annotations

import importlib
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..types import ASGIApp, Receive, Scope, Send

MIDDLEWARE_REGISTRY: dict[str, type["BaseMiddleware"]] = {}


class BaseMiddleware(ABC):
    """Base class for all middleware. Subclasses auto-register via __init_subclass__.

    Class attributes:
        middleware_name: Registry key (default: class name).
        middleware_order: Order in chain (lower = earlier). Ranges:
            100: Core (errors)
            200: Logging/Tracing
            900: Transformation (compression)
            950: Conditional requests (cache), next to the dispatcher
        middleware_default: Default on/off state. Default: False.
    """

    middleware_name: str = ""
    middleware_order: int = 500
    middleware_default: bool = False

    __slots__ = ("app",)

    def __init__(self, app: ASGIApp, **kwargs: Any) -> None:
        """Initialize middleware with wrapped app.

        Args:
            app: The ASGI app to wrap (next in chain).
            **kwargs: Middleware-specific configuration from YAML.
        """
        self.app = app

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        name = cls.middleware_name or cls.__name__
        if name in MIDDLEWARE_REGISTRY:
            raise ValueError(f"Middleware name '{name}' already registered")
        cls.middleware_name = name
        MIDDLEWARE_REGISTRY[name] = cls

    @abstractmethod
    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None: ...


def _autodiscover() -> None:
    """Import all middleware modules in this package to trigger registration."""
    package_dir = Path(__file__).parent
    for py_file in sorted(package_dir.glob("*.py")):
        if py_file.name.startswith("_"):
            continue
        importlib.import_module(f".{py_file.stem}", __package__)


def middleware_chain(
    middleware_config: Mapping[str, Any] | None,
    app: ASGIApp,
    full_config: Any = None,
) -> ASGIApp:
    """Wrap ``app`` with the enabled middleware, lowest middleware_order outermost.

    config.yaml::

        middleware:
          logging: on
          compression: on

        cache_middleware:
          max_age: 3600
          public: true

    Args:
        middleware_config: ``middleware`` section, {name: on/off}. Names not
            listed keep their middleware_default.
        app: The innermost ASGI app (the Dispatcher).
        full_config: Config looked up for ``<name>_middleware`` option sections.
    """
    for cls in reversed(enabled_middleware(middleware_config)):
        app = cls(app, **_middleware_options(full_config, cls.middleware_name))
    return app


def enabled_middleware(middleware_config: Mapping[str, Any] | None) -> list[type[BaseMiddleware]]:
    """Registered middleware classes switched on, sorted by middleware_order."""
    if hasattr(middleware_config, "as_dict"):
        middleware_config = middleware_config.as_dict()  # type: ignore[union-attr]
    switches = {name: _parse_enabled(value) for name, value in (middleware_config or {}).items()}
    enabled = [cls for name, cls in MIDDLEWARE_REGISTRY.items() if switches.get(name, cls.middleware_default)]
    return sorted(enabled, key=lambda cls: cls.middleware_order)


def _middleware_options(full_config: Any, name: str) -> dict[str, Any]:
    """Options of the ``<name>_middleware`` section, empty when absent."""
    if full_config is None:
        return {}
    options = full_config[f"{name}_middleware"]
    if options is None:
        return {}
    return dict(options.as_dict() if hasattr(options, "as_dict") else options)


def _parse_enabled(value: Any) -> bool:
    """Parse on/off/true/false value to bool."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("on", "true", "yes", "1")
    return bool(value)


__all__ = ["BaseMiddleware", "MIDDLEWARE_REGISTRY", "enabled_middleware", "middleware_chain"]

_autodiscover()
