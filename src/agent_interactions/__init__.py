"""Persisted history of human-in-the-loop agent interactions."""

from agent_interactions.config.settings import Settings, get_settings
from agent_interactions.kv_context import build_kv_context
from agent_interactions.store import InteractionStore


def build_interaction_store(settings: Settings | None = None) -> InteractionStore:
    settings = settings or get_settings()
    return InteractionStore(build_kv_context(settings))


__all__ = ["InteractionStore", "build_interaction_store"]
