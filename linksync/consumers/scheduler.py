"""Background scheduler for repeated sync passes.

Uses a cron expression for scheduling. Passes run one at a time on a
single worker thread; a pass still running when the next slot arrives
delays that slot instead of overlapping it.

A pass that raises is logged and the scheduler keeps going, except for
KeysExhaustedError: with no key left every later pass would fail the same
way, so the scheduler stops.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from croniter import croniter

from linksync.consumers.matching import SyncResult
from linksync.core.errors import KeysExhaustedError, LinkSyncError

logger = logging.getLogger(__name__)


class CronScheduler:
    """Runs a sync pass on a cron schedule.

    Usage:
        scheduler = CronScheduler(engine.run_pass, "*/15 * * * *")
        scheduler.start()
        ...
        scheduler.stop()
    """

    def __init__(
        self,
        run_pass: Callable[[], SyncResult],
        cron_expression: str = "*/15 * * * *",
        run_on_start: bool = True,
    ):
        """Initialize the scheduler.

        Args:
            run_pass: Callable running one pass
            cron_expression: Cron expression (e.g., "*/15 * * * *")
            run_on_start: Whether to run a pass immediately on start

        Raises:
            ValueError: If the cron expression is invalid
        """
        if not croniter.is_valid(cron_expression):
            raise ValueError(f"Invalid cron expression: {cron_expression}")

        self._run_pass = run_pass
        self._cron_expression = cron_expression
        self._run_on_start = run_on_start

        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self._last_run: datetime | None = None
        self._next_run: datetime | None = None
        self._last_result: SyncResult | None = None
        self._exhausted = False

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def last_run(self) -> datetime | None:
        return self._last_run

    @property
    def next_run(self) -> datetime | None:
        return self._next_run

    @property
    def exhausted(self) -> bool:
        """True if the scheduler stopped because every feed key was spent."""
        return self._exhausted

    @property
    def last_result(self) -> SyncResult | None:
        return self._last_result

    def start(self) -> None:
        """Start the worker thread."""
        if self.is_running:
            logger.warning("[SCHEDULER] Already running")
            return

        self._stop_event.clear()
        self._thread = threading.Thread(target=self._loop, name="linksync-scheduler", daemon=True)
        self._thread.start()
        logger.info("[SCHEDULER] Started with cron '%s'", self._cron_expression)

    def stop(self, timeout: float = 30.0) -> None:
        """Signal the worker to stop and wait for it."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
        self._thread = None
        logger.info("[SCHEDULER] Stopped")

    def wait(self) -> None:
        """Block until the scheduler stops (Ctrl+C friendly)."""
        while self.is_running:
            self._stop_event.wait(1.0)

    def _loop(self) -> None:
        if self._run_on_start and not self._execute():
            return

        schedule = croniter(self._cron_expression, datetime.now())
        while not self._stop_event.is_set():
            self._next_run = schedule.get_next(datetime)
            delay = (self._next_run - datetime.now()).total_seconds()
            if delay > 0 and self._stop_event.wait(delay):
                break
            if not self._execute():
                break

    def _execute(self) -> bool:
        """Run one pass. Returns False when the scheduler should stop."""
        self._last_run = datetime.now()
        try:
            self._last_result = self._run_pass()
        except KeysExhaustedError as e:
            logger.error("[SCHEDULER] %s - stopping", e)
            self._exhausted = True
            self._stop_event.set()
            return False
        except LinkSyncError as e:
            logger.error("[SCHEDULER] Pass failed: %s", e)
        except Exception:
            logger.exception("[SCHEDULER] Pass failed unexpectedly")
        return True
