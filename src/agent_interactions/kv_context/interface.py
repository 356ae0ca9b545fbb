from __future__ import annotations

from typing import Any, Protocol


class KeyValueContext(Protocol):
    """Shared contract for the persisted key-value region a store writes into.

    Values are JSON-compatible. ``set`` returns only once the value is durable,
    so a restart right after it observes the new value.
    """

    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any) -> None:
        ...

    def keys(self) -> list[str]:
        ...
