from __future__ import annotations

from logging.config import fileConfig

from alembic import context

from agent_interactions.config.database import get_database_config
from agent_interactions.database.base import Base
from agent_interactions.database.engine import get_engine
from agent_interactions.models import KeyValueEntry  # noqa: F401

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# `alembic -x database_url=...` migrates another database than DATABASE_URL.
database_url = context.get_x_argument(as_dictionary=True).get(
    "database_url", get_database_config().url
)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    with get_engine(database_url).connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
