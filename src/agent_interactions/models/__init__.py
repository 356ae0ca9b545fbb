from agent_interactions.models.kv_entry import KeyValueEntry

__all__ = ["KeyValueEntry"]
