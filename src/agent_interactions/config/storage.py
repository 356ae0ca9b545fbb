"""Storage scope resolution.

The interaction history can live in one of two regions:

- ``workspace``: tied to the current project directory, so every workspace
  keeps its own history.
- ``global``: shared by every workspace of the current user.

The scope is read from settings. ``get_settings`` is cached, so a changed
``STORAGE_CONTEXT`` takes effect after ``get_settings.cache_clear()``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from agent_interactions.config.settings import Settings, get_settings

StorageContext = Literal["workspace", "global"]


def get_storage_context(settings: Settings | None = None) -> StorageContext:
    settings = settings or get_settings()
    return settings.storage_context


def resolve_storage_dir(settings: Settings | None = None) -> Path:
    """Directory that holds the file backend's state for the configured scope."""
    settings = settings or get_settings()
    if get_storage_context(settings) == "global":
        return Path(settings.global_storage_dir).expanduser()
    return Path(settings.workspace_dir).expanduser() / settings.workspace_storage_dirname


def resolve_db_scope(settings: Settings | None = None) -> str:
    """Scope key under which the database backend stores its entries."""
    settings = settings or get_settings()
    if get_storage_context(settings) == "global":
        return "global"
    workspace = Path(settings.workspace_dir).expanduser().resolve()
    return f"workspace:{workspace.as_posix()}"
