"""Pluggable persisted key-value regions backing the interaction store."""

from agent_interactions.config.database import get_database_config
from agent_interactions.config.settings import Settings, get_settings
from agent_interactions.config.storage import resolve_db_scope, resolve_storage_dir
from agent_interactions.database.engine import get_engine
from agent_interactions.exceptions import UnsupportedBackendError
from agent_interactions.kv_context.db_context import DbKeyValueContext
from agent_interactions.kv_context.file_context import FileKeyValueContext
from agent_interactions.kv_context.interface import KeyValueContext
from agent_interactions.kv_context.memory_context import MemoryKeyValueContext


def build_kv_context(settings: Settings | None = None) -> KeyValueContext:
    settings = settings or get_settings()
    backend = settings.kv_backend.strip().lower()
    if backend == "file":
        return FileKeyValueContext(resolve_storage_dir(settings))
    if backend == "db":
        database = get_database_config(settings)
        return DbKeyValueContext(
            resolve_db_scope(settings),
            engine=get_engine(database.url, database.echo),
            auto_init=database.auto_migrate,
        )
    if backend == "memory":
        return MemoryKeyValueContext()
    raise UnsupportedBackendError(settings.kv_backend)


__all__ = [
    "KeyValueContext",
    "FileKeyValueContext",
    "DbKeyValueContext",
    "MemoryKeyValueContext",
    "build_kv_context",
]
