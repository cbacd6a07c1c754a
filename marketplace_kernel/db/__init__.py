"""Database layer - engine, base classes, and transactional scopes."""

from marketplace_kernel.db.base import UUID, Base, TimestampedBase, UUIDString
from marketplace_kernel.db.engine import (
    begin_write_transaction,
    create_tables,
    get_engine,
    get_session,
    get_session_factory,
    session_scope,
    write_scope,
)

__all__ = [
    "get_engine",
    "get_session",
    "get_session_factory",
    "session_scope",
    "begin_write_transaction",
    "write_scope",
    "create_tables",
    "Base",
    "TimestampedBase",
    "UUIDString",
    "UUID",
]
