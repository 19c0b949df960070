"""Locating and reading ``slashroute.toml``.

Resolution order for the config file:
explicit ``--config`` path, then ``SLASHROUTE_CONFIG``, then the first
``slashroute.toml`` found walking up from the working directory. An
explicit path or env var that names a missing file means "no file"; it
never falls through to the walk-up.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "slashroute.toml"
CONFIG_ENV_VAR = "SLASHROUTE_CONFIG"


def _ancestors(start: Path) -> Iterator[Path]:
    here = start.resolve()
    yield here
    yield from here.parents


def find_config(start: Path | None = None) -> Path | None:
    """``SLASHROUTE_CONFIG`` if set, else walk up from *start* (default: cwd)."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    for directory in _ancestors(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config_path(explicit: str | Path | None, start: Path | None = None) -> Path | None:
    """The config file to load, honouring an explicit path over discovery."""
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None
    return find_config(start)


def load_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML. Raises ``tomllib.TOMLDecodeError`` on bad syntax."""
    with path.open("rb") as fh:
        return tomllib.load(fh)
