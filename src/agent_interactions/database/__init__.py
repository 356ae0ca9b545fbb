from agent_interactions.database.base import Base
from agent_interactions.database.engine import get_engine
from agent_interactions.database.session import SessionLocal, session_scope

__all__ = ["Base", "SessionLocal", "get_engine", "session_scope"]
