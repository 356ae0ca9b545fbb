"""Exceptions raised by the interaction store package.

Lookups of missing records are not errors (they return ``None``) and storage
failures propagate as the backend raised them, so this module stays small.
"""


class InteractionStoreError(Exception):
    """Base class for errors raised by agent_interactions itself."""


class UnsupportedBackendError(InteractionStoreError, ValueError):
    """Raised when KV_BACKEND names a backend that does not exist."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(
            f"Unsupported KV_BACKEND={backend!r}. Use 'file', 'db' or 'memory'."
        )
