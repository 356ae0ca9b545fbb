from __future__ import annotations

from sqlalchemy.engine import Engine

from agent_interactions.database.base import Base
from agent_interactions.database.engine import get_engine
from agent_interactions.models import KeyValueEntry  # noqa: F401


def init_database(engine: Engine | None = None) -> None:
    """Create tables for local/dev usage. Migrations should be preferred in production."""
    Base.metadata.create_all(bind=engine or get_engine())
