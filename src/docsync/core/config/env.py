"""Layered .env loading for DOCSYNC_* settings.

Only DOCSYNC_* keys are exported; anything else in a shared project .env
(API keys, database URLs) stays out of the process environment. Values
already exported in the shell always win, and project files override values
that only came from the user file:

  os.environ (pre-existing) > project .env.local > project .env > user .env

The exported keys are then read by `apply_env_overrides` in the loader.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

ENV_PREFIX = "DOCSYNC_"


def read_docsync_env(path: Path) -> dict[str, str]:
    """Return the DOCSYNC_* assignments in one .env file (empty if missing)."""
    if not path.exists():
        return {}
    return {
        key: value
        for key, value in dotenv_values(path).items()
        if key and key.startswith(ENV_PREFIX) and value is not None
    }


def default_user_env_paths() -> list[Path]:
    xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
    return [xdg_home / "docsync" / ".env"]


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> set[str]:
    """Export DOCSYNC_* settings from user and project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths, lowest priority first

    Returns:
        The keys that were set from .env files.
    """
    if project_dir is None:
        project_dir = Path.cwd()
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    layered: dict[str, str] = {}
    for path in [*user_env_paths, *project_env_paths]:
        layered.update(read_docsync_env(Path(path)))

    loaded = {key for key in layered if key not in os.environ}
    for key in loaded:
        os.environ[key] = layered[key]
    return loaded
