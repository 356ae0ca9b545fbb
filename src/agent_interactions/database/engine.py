from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from agent_interactions.config.database import get_database_config


@lru_cache
def get_engine(url: str | None = None, echo: bool | None = None) -> Engine:
    """Build and cache a SQLAlchemy engine, one per database URL and echo flag."""
    config = get_database_config()
    url = url or config.url
    kwargs: dict[str, object] = {
        "echo": config.echo if echo is None else echo,
        "pool_pre_ping": True,
    }

    # SQLite refuses connections shared across threads without this.
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}

    return create_engine(url, **kwargs)
