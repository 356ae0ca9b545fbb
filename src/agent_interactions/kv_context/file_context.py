from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class FileKeyValueContext:
    """Lightweight file-based key-value region with atomic writes.

    All keys of one scope live in a single ``state.json`` under ``base_dir``.
    The document is read once at construction and rewritten on every ``set``.
    """

    STATE_FILE = "state.json"

    def __init__(self, base_dir: str | Path) -> None:
        self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        self._state = self._load()

    @property
    def path(self) -> Path:
        return self._base / self.STATE_FILE

    def _load(self) -> dict[str, Any]:
        path = self.path
        if not path.exists():
            return {}
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except Exception:  # noqa: BLE001
            logger.warning("Ignoring unreadable state file %s", path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: expected an object", path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._state:
            return default
        return copy.deepcopy(self._state[key])

    def set(self, key: str, value: Any) -> None:
        state = dict(self._state)
        state[key] = copy.deepcopy(value)
        path = self.path
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(json.dumps(state, ensure_ascii=True, indent=2), encoding="utf-8")
        tmp_path.replace(path)
        self._state = state

    def keys(self) -> list[str]:
        return list(self._state)
