"""sqlite access for the audit database.

The database only holds the raw feed audit copy; the catalog itself lives
in the Realtime Database. Connections are short-lived: open, do one unit of
work, commit, close.
"""

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from linksync.config import Config

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

# Seconds a writer waits on a lock held by a concurrent pass or prune
LOCK_TIMEOUT = 30.0


def resolve_db_path(db_path: Path | str | None = None) -> Path:
    """Explicit path if given, else AUDIT_DB_PATH."""
    return Path(db_path) if db_path else Path(Config.AUDIT_DB_PATH)


def get_connection(db_path: Path | str | None = None) -> sqlite3.Connection:
    """Open the audit database, creating its directory if needed.

    Rows come back as sqlite3.Row; the journal runs in WAL mode.
    """
    path = resolve_db_path(db_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(path, timeout=LOCK_TIMEOUT)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute(f"PRAGMA busy_timeout={int(LOCK_TIMEOUT * 1000)}")
    return conn


@contextmanager
def get_db(db_path: Path | str | None = None) -> Generator[sqlite3.Connection, None, None]:
    """Connection scoped to a with-block; commits on success, rolls back on error.

    Usage:
        with get_db(path) as conn:
            conn.execute("DELETE FROM feed_audit WHERE pass_id = ?", (pass_id,))
    """
    conn = get_connection(db_path)
    try:
        yield conn
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Path | str | None = None) -> None:
    """Create the audit tables and indexes if they are missing."""
    with get_db(db_path) as conn:
        conn.executescript(SCHEMA_PATH.read_text())
    logger.debug("[DB] Audit schema ready at %s", resolve_db_path(db_path))
