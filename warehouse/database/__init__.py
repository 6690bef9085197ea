from warehouse.database.base import Base
from warehouse.database.engine import engine
from warehouse.database.session import SessionLocal, session_scope

__all__ = ["Base", "engine", "SessionLocal", "session_scope"]
