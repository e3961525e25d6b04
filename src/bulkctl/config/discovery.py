"""Locate ``bulkctl.toml`` and the project root the record store lives under.

``[store] path`` is relative to the directory holding the config file, so a
batch submitted from any subdirectory of a project lands in the same
database. Without a config file the working directory is the root.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "bulkctl.toml"
CONFIG_ENV_VAR = "BULKCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the ``bulkctl.toml`` governing *start* (default: cwd), if any.

    ``BULKCTL_CONFIG`` takes precedence over the directory walk. When it
    names a file that does not exist no config is used at all; the walk is
    not attempted.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        path = Path(env_path)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_project_root(config_path: Path | None, override: Path | None = None) -> Path:
    """Directory the store path is resolved against."""
    if override is not None:
        return override
    return config_path.parent if config_path is not None else Path.cwd()
