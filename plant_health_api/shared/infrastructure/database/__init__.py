from .connection import close_database, db_manager, init_database
from .session import get_db_session, get_session_manager, initialize_sessions, session_manager

__all__ = [
    "close_database",
    "db_manager",
    "get_db_session",
    "get_session_manager",
    "init_database",
    "initialize_sessions",
    "session_manager",
]
