"""Tests for slashroute.toml discovery and loading."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from slashroute.config.discovery import (
    CONFIG_ENV_VAR,
    find_config,
    load_toml,
    resolve_config_path,
)


class TestFindConfig:
    def test_found_in_start_dir(self, tmp_path: Path) -> None:
        target = tmp_path / "slashroute.toml"
        target.write_text("")
        assert find_config(tmp_path) == target.resolve()

    def test_walks_up(self, tmp_path: Path) -> None:
        target = tmp_path / "slashroute.toml"
        target.write_text("")
        deep = tmp_path / "x" / "y" / "z"
        deep.mkdir(parents=True)
        assert find_config(deep) == target.resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "slashroute.toml").write_text("")
        other = tmp_path / "other.toml"
        other.write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(other))
        assert find_config(tmp_path) == other

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "slashroute.toml").write_text("")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestLoadToml:
    def test_parses(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        path.write_text('[callbacks]\nprofile = "minimal"\n')
        assert load_toml(path) == {"callbacks": {"profile": "minimal"}}

    def test_bad_syntax(self, tmp_path: Path) -> None:
        path = tmp_path / "c.toml"
        path.write_text("[callbacks\n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(path)


class TestResolveConfigPath:
    def test_explicit_path(self, tmp_path: Path) -> None:
        explicit = tmp_path / "bot.toml"
        explicit.write_text("")
        (tmp_path / "slashroute.toml").write_text("")
        assert resolve_config_path(str(explicit), tmp_path) == explicit

    def test_explicit_missing_does_not_walk_up(self, tmp_path: Path) -> None:
        (tmp_path / "slashroute.toml").write_text("")
        assert resolve_config_path(tmp_path / "absent.toml", tmp_path) is None

    def test_falls_back_to_discovery(self, tmp_path: Path) -> None:
        target = tmp_path / "slashroute.toml"
        target.write_text("")
        assert resolve_config_path(None, tmp_path) == target.resolve()
