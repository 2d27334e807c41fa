# Copyright 2025 Softwell S.r.l.
# Licensed under the Apache License, Version 2.0

"""Tests for static mount configuration."""

from pathlib import Path

import pytest

from genro_static.exceptions import ConfigError
from genro_static.static_config import (
    DEFAULT_HEADERS,
    Location,
    StaticFileConfig,
    normalize_hosted_path,
)


class TestLocation:
    """Tests for Location.parse()."""

    def test_member_returned_as_is(self) -> None:
        assert Location.parse(Location.PACKAGE) is Location.PACKAGE

    @pytest.mark.parametrize("value", ["external", "EXTERNAL", " External "])
    def test_names_case_insensitive(self, value: str) -> None:
        assert Location.parse(value) is Location.EXTERNAL

    def test_unknown_name_raises(self) -> None:
        with pytest.raises(ConfigError, match="classpath"):
            Location.parse("classpath")


class TestHostedPath:
    """Tests for URL prefix normalization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [("/", "/"), ("", "/"), ("static", "/static"), ("/static/", "/static"), ("/a/b/", "/a/b")],
    )
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_hosted_path(raw) == expected


class TestStaticFileConfig:
    """Tests for StaticFileConfig."""

    def test_defaults(self) -> None:
        config = StaticFileConfig("public")
        assert config.location is Location.EXTERNAL
        assert config.hosted_path == "/"
        assert config.index == "index.html"
        assert config.headers == DEFAULT_HEADERS
        assert config.headers is not DEFAULT_HEADERS

    def test_custom_headers_replace_defaults(self) -> None:
        config = StaticFileConfig("public", headers={"X-Frame-Options": "DENY"})
        assert config.headers == {"X-Frame-Options": "DENY"}

    def test_package_location_requires_package(self) -> None:
        with pytest.raises(ConfigError):
            StaticFileConfig("public", Location.PACKAGE)

    def test_resolve_external_absolute(self, site_dir: Path) -> None:
        assert StaticFileConfig(site_dir).resolve_directory() == site_dir.resolve()

    def test_resolve_external_relative_to_base_dir(self, site_dir: Path) -> None:
        config = StaticFileConfig("site", base_dir=site_dir.parent)
        assert config.resolve_directory() == site_dir.resolve()

    def test_resolve_external_relative_to_cwd(self, site_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(site_dir.parent)
        assert StaticFileConfig("site").resolve_directory() == site_dir.resolve()

    def test_missing_directory_raises(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="does not exist"):
            StaticFileConfig(tmp_path / "missing").resolve_directory()

    def test_file_is_not_a_directory(self, site_dir: Path) -> None:
        with pytest.raises(ConfigError):
            StaticFileConfig(site_dir / "hello.txt").resolve_directory()

    def test_resolve_package_directory(self) -> None:
        config = StaticFileConfig("public", Location.PACKAGE, package="genro_static")
        directory = config.resolve_directory()
        assert (directory / "index.html").is_file()

    def test_unknown_package_raises(self) -> None:
        config = StaticFileConfig("public", "package", package="no_such_package_xyz")
        with pytest.raises(ConfigError, match="no_such_package_xyz"):
            config.resolve_directory()

    def test_from_options(self, site_dir: Path) -> None:
        config = StaticFileConfig.from_options(
            "site",
            {"directory": "site", "path": "/files/", "headers": {"X-Test": "1"}},
            base_dir=site_dir.parent,
        )
        assert config.hosted_path == "/files"
        assert config.headers == {"X-Test": "1"}
        assert config.resolve_directory() == site_dir.resolve()

    def test_from_options_requires_directory(self) -> None:
        with pytest.raises(ConfigError, match="'broken'"):
            StaticFileConfig.from_options("broken", {"path": "/"})
