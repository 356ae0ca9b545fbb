from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import select
from sqlalchemy.engine import Engine

from agent_interactions.database.init_db import init_database
from agent_interactions.database.session import session_scope
from agent_interactions.models.kv_entry import KeyValueEntry

logger = logging.getLogger(__name__)


class DbKeyValueContext:
    """SQL-backed key-value region with the same contract as FileKeyValueContext.

    Every entry is keyed by ``(scope, key)`` so workspace and global regions
    can share one database.
    """

    def __init__(self, scope: str, *, engine: Engine | None = None, auto_init: bool = True) -> None:
        self._scope = scope
        self._engine = engine
        if auto_init:
            init_database(engine)

    @property
    def scope(self) -> str:
        return self._scope

    @property
    def engine(self) -> Engine | None:
        return self._engine

    def _select(self, key: str):
        return select(KeyValueEntry).where(
            KeyValueEntry.scope == self._scope, KeyValueEntry.key == key
        )

    def get(self, key: str, default: Any = None) -> Any:
        with session_scope(self._engine) as db:
            row = db.scalar(self._select(key))
            if row is None:
                return default
            try:
                return json.loads(row.payload)
            except ValueError:
                logger.warning(
                    "Ignoring unreadable payload for %s in scope %s", key, self._scope
                )
                return default

    def set(self, key: str, value: Any) -> None:
        payload = json.dumps(value, ensure_ascii=True)
        now = datetime.now(timezone.utc)

        with session_scope(self._engine) as db:
            existing = db.scalar(self._select(key))
            if existing is None:
                db.add(
                    KeyValueEntry(
                        scope=self._scope,
                        key=key,
                        payload=payload,
                        created_at=now,
                        updated_at=now,
                    )
                )
            else:
                existing.payload = payload
                existing.updated_at = now

    def keys(self) -> list[str]:
        with session_scope(self._engine) as db:
            rows = db.scalars(
                select(KeyValueEntry.key)
                .where(KeyValueEntry.scope == self._scope)
                .order_by(KeyValueEntry.key)
            )
            return list(rows)
