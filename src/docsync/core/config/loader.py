"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import os
from pathlib import Path
from typing import Any

from docsync.core.tracker.reader import SourceMode

from .models import DocSyncConfig

PROJECT_CONFIG_NAME = ".docsync.json"


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/docsync/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "docsync" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Path to .docsync.json in the project root."""
    if cwd is None:
        cwd = Path.cwd()
    return cwd / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`. Nested dicts
    are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open(encoding="utf-8") as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            print(f"Warning: Config at {path} is not a JSON object, ignoring")
            return None
    except (json.JSONDecodeError, OSError) as e:
        print(f"Warning: Failed to parse config at {path}: {e}")
        return None


def _set_nested(config_dict: dict[str, Any], section: str, key: str, value: Any) -> None:
    if not isinstance(config_dict.get(section), dict):
        config_dict[section] = {}
    config_dict[section][key] = value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        DOCSYNC_SOURCE - overrides tracker.source (auto, beads, snapshot)
        DOCSYNC_TRACKER_COMMAND - overrides tracker.command
        DOCSYNC_TRACKER_TIMEOUT - overrides tracker.timeout_seconds (0 or "none" = no limit)
        DOCSYNC_SNAPSHOT - overrides tracker.snapshot_path

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()
    if isinstance(result.get("tracker"), dict):
        result["tracker"] = dict(result["tracker"])

    if source_str := os.environ.get("DOCSYNC_SOURCE"):
        source = source_str.strip().lower()
        if source in {mode.value for mode in SourceMode}:
            _set_nested(result, "tracker", "source", source)
        else:
            print(f"Warning: Invalid DOCSYNC_SOURCE value '{source_str}', ignoring")

    if command := os.environ.get("DOCSYNC_TRACKER_COMMAND"):
        _set_nested(result, "tracker", "command", command)

    if timeout_str := os.environ.get("DOCSYNC_TRACKER_TIMEOUT"):
        if timeout_str.strip().lower() in ("none", "off"):
            _set_nested(result, "tracker", "timeout_seconds", None)
        else:
            try:
                timeout = float(timeout_str)
                if timeout < 0:
                    print(
                        f"Warning: DOCSYNC_TRACKER_TIMEOUT must be >= 0, got {timeout}, ignoring"
                    )
                else:
                    _set_nested(result, "tracker", "timeout_seconds", timeout)
            except ValueError:
                print(f"Warning: Invalid DOCSYNC_TRACKER_TIMEOUT value '{timeout_str}', ignoring")

    if snapshot := os.environ.get("DOCSYNC_SNAPSHOT"):
        _set_nested(result, "tracker", "snapshot_path", snapshot)

    return result


def load_config(project_dir: Path | None = None) -> DocSyncConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (DOCSYNC_*)
        2. Project config (.docsync.json)
        3. User config (~/.config/docsync/config.json)
        4. Model defaults

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    return DocSyncConfig(**merged)
