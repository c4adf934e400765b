"""Raw feed audit log.

Every record the feed returned in a pass is stored as JSON before any
parsing or deduplication, so a bad match can be traced back to exactly
what the provider sent.

Usage:
    audit = FeedAuditLog(db_path)
    audit.record_feed(pass_id, "17102026", batch.raw_records)
    records = audit.get_pass_records(pass_id)
"""

import json
import logging
import sqlite3
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import Any

from linksync.core.errors import AuditError
from linksync.database.connection import get_db, init_db

logger = logging.getLogger(__name__)


class FeedAuditLog:
    """AuditSink backed by the sqlite feed_audit table."""

    def __init__(self, db_path: Path | str | None = None):
        """Initialize audit log, creating the schema if needed.

        Args:
            db_path: sqlite file. Uses AUDIT_DB_PATH if not specified.
        """
        self._db_path = db_path
        init_db(db_path)

    def record_feed(self, pass_id: str, date_str: str, records: list[dict[str, Any]]) -> int:
        """Store raw feed records for a pass, in feed order.

        Args:
            pass_id: Identifier of the sync pass
            date_str: Feed date the records were fetched for
            records: Raw records exactly as received

        Returns:
            Number of rows written

        Raises:
            AuditError: If the rows could not be written
        """
        rows = [
            (pass_id, date_str, position, json.dumps(record, ensure_ascii=False))
            for position, record in enumerate(records)
        ]
        if not rows:
            return 0

        try:
            with get_db(self._db_path) as conn:
                conn.executemany(
                    "INSERT INTO feed_audit (pass_id, feed_date, position, payload) "
                    "VALUES (?, ?, ?, ?)",
                    rows,
                )
        except sqlite3.Error as e:
            raise AuditError(f"Could not store raw feed for pass {pass_id}: {e}") from e

        logger.debug("[AUDIT] Stored %d raw record(s) for pass %s", len(rows), pass_id)
        return len(rows)

    def get_pass_records(self, pass_id: str) -> list[dict[str, Any]]:
        """Load the raw records of one pass, in original order."""
        with get_db(self._db_path) as conn:
            cursor = conn.execute(
                "SELECT payload FROM feed_audit WHERE pass_id = ? ORDER BY position",
                (pass_id,),
            )
            return [json.loads(row["payload"]) for row in cursor.fetchall()]

    def prune(self, keep_days: int = 14) -> int:
        """Delete audit rows older than keep_days.

        Returns:
            Number of rows deleted
        """
        cutoff = datetime.now(UTC) - timedelta(days=keep_days)
        with get_db(self._db_path) as conn:
            cursor = conn.execute(
                "DELETE FROM feed_audit WHERE recorded_at < ?",
                (cutoff.strftime("%Y-%m-%d %H:%M:%S"),),
            )
            deleted = cursor.rowcount

        if deleted:
            logger.info("[AUDIT] Pruned %d row(s) older than %d day(s)", deleted, keep_days)
        return deleted
