from __future__ import annotations

import copy
from typing import Any


class MemoryKeyValueContext:
    """Process-local key-value region. Nothing survives the process."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._state: dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._state:
            return default
        return copy.deepcopy(self._state[key])

    def set(self, key: str, value: Any) -> None:
        self._state[key] = copy.deepcopy(value)

    def keys(self) -> list[str]:
        return list(self._state)
