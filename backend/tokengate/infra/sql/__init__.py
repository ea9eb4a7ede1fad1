from .sql_session_store import SQLSessionStore

__all__ = ["SQLSessionStore"]
