"""Logging setup for linksync.

Call setup_logging() once at process startup; modules then use
logging.getLogger(__name__) with "[TAG] message" style records.

Every record written by the handlers configured here carries a pass_id
attribute: the id of the sync pass running when it was logged ("-" outside
a pass). The engine sets it with bind_pass_id(), so all lines of one pass
can be grepped together even when the scheduler runs many passes.

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
    LOG_DIR: Directory for log files (default: <project>/logs)
    LOG_FORMAT: "text" or "json" (default: text)
"""

import json
import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

MAIN_LOG_NAME = "linksync.log"
ERROR_LOG_NAME = "linksync_errors.log"
MAX_LOG_BYTES = 5 * 1024 * 1024

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(pass_id)s | %(name)s | %(message)s"

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")

_pass_id: ContextVar[str | None] = ContextVar("linksync_pass_id", default=None)
_configured = False


@contextmanager
def bind_pass_id(pass_id: str) -> Iterator[None]:
    """Tag log records emitted inside the block with a pass id."""
    token = _pass_id.set(pass_id)
    try:
        yield
    finally:
        _pass_id.reset(token)


class PassIdFilter(logging.Filter):
    """Adds the current pass id to every record passing a handler."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.pass_id = _pass_id.get() or "-"
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, for log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "pass_id": getattr(record, "pass_id", "-"),
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _default_log_dir() -> Path:
    if env_dir := os.getenv("LOG_DIR"):
        return Path(env_dir)
    # Source checkout: <project>/logs next to pyproject.toml
    project_root = Path(__file__).resolve().parents[2]
    if (project_root / "pyproject.toml").exists():
        return project_root / "logs"
    return Path("logs")


def _resolve_level(override: str | None) -> int:
    name = (override or os.getenv("LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def _handler(
    handler: logging.Handler,
    level: int,
    formatter: logging.Formatter,
) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler.addFilter(PassIdFilter())
    return handler


def setup_logging(
    log_level: str | None = None,
    log_dir: str | Path | None = None,
    use_json: bool | None = None,
) -> None:
    """Configure the root logger: console, main file and error file.

    The main file always receives DEBUG; the console follows the level.
    Later calls are no-ops.

    Args:
        log_level: Overrides LOG_LEVEL
        log_dir: Overrides LOG_DIR
        use_json: Overrides LOG_FORMAT (True for JSON lines)
    """
    global _configured
    if _configured:
        return

    level = _resolve_level(log_level)
    log_path = Path(log_dir) if log_dir else _default_log_dir()
    log_path.mkdir(parents=True, exist_ok=True)

    if use_json is None:
        use_json = os.getenv("LOG_FORMAT", "text").lower() == "json"
    formatter = (
        JSONFormatter() if use_json else logging.Formatter(TEXT_FORMAT, "%Y-%m-%d %H:%M:%S")
    )

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stdout), level, formatter))
    root.addHandler(
        _handler(
            RotatingFileHandler(
                log_path / MAIN_LOG_NAME, maxBytes=MAX_LOG_BYTES, backupCount=5, encoding="utf-8"
            ),
            logging.DEBUG,
            formatter,
        )
    )
    root.addHandler(
        _handler(
            RotatingFileHandler(
                log_path / ERROR_LOG_NAME, maxBytes=MAX_LOG_BYTES, backupCount=3, encoding="utf-8"
            ),
            logging.ERROR,
            formatter,
        )
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True

    from linksync.config import VERSION

    logger = logging.getLogger("linksync")
    logger.info("[STARTUP] linksync %s", VERSION)
    logger.info("[STARTUP] Log level %s, files in %s", logging.getLevelName(level), log_path)
