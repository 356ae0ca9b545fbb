from agent_interactions.config.database import DatabaseConfig, get_database_config
from agent_interactions.config.settings import Settings, get_settings
from agent_interactions.config.storage import (
    StorageContext,
    get_storage_context,
    resolve_db_scope,
    resolve_storage_dir,
)

__all__ = [
    "DatabaseConfig",
    "Settings",
    "StorageContext",
    "get_database_config",
    "get_settings",
    "get_storage_context",
    "resolve_db_scope",
    "resolve_storage_dir",
]
