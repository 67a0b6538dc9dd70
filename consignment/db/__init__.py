"""Database package — engine selection, async session factory, Base, atomic()."""
from consignment.db.base import Base, async_session_factory, atomic, build_engine, engine, get_db

__all__ = ["Base", "async_session_factory", "atomic", "build_engine", "engine", "get_db"]
