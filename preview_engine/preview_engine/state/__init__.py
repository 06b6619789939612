"""Durable state: ORM tables, repositories and the SQL-backed stores."""

from preview_engine.state.database import create_tables, get_engine, get_session
from preview_engine.state.errors import StoreUnavailableError
from preview_engine.state.stores import SqlSnapshotStore, SqlVersionStore

__all__ = [
    "SqlSnapshotStore",
    "SqlVersionStore",
    "StoreUnavailableError",
    "create_tables",
    "get_engine",
    "get_session",
]
