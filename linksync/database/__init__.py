"""Database layer - raw feed audit copy in sqlite."""

from linksync.database.audit import FeedAuditLog
from linksync.database.connection import get_connection, get_db, init_db

__all__ = ["FeedAuditLog", "get_connection", "get_db", "init_db"]
