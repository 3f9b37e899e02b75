"""
Configuration loading for docsync.
"""

from .env import load_layered_env
from .loader import (
    apply_env_overrides,
    deep_merge,
    get_project_config_path,
    get_user_config_path,
    load_config,
)
from .models import (
    DocSyncConfig,
    DocumentConfig,
    DocumentsConfig,
    TrackedIssueConfig,
    TrackedIssuesConfig,
    TrackerConfig,
)

__all__ = [
    "load_config",
    "load_layered_env",
    "apply_env_overrides",
    "deep_merge",
    "get_project_config_path",
    "get_user_config_path",
    "DocSyncConfig",
    "TrackerConfig",
    "TrackedIssueConfig",
    "TrackedIssuesConfig",
    "DocumentConfig",
    "DocumentsConfig",
]
