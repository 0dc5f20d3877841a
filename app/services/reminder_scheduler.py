"""
Owns the periodic reminder sweep.

The sweep fires at second 0 of every minute. Scheduled ticks and manual
triggers share one lock, so a sweep never overlaps another: an invocation
that arrives while a sweep is running is skipped.
"""
import logging
import threading
from datetime import datetime
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from sqlalchemy.orm import Session

from app.db.base import SessionLocal
from app.helpers.schedule import format_hhmm, weekday_name
from app.schemas.sche_reminder import SweepReport
from app.services.srv_reminder import ReminderService, build_reminder_service

logger = logging.getLogger(__name__)

JOB_ID = "medication_reminder_sweep"


class ReminderScheduler:
    """
    Periodic trigger for ReminderService.run_reminder_sweep.

    Usage:
        scheduler = ReminderScheduler()
        scheduler.start()
        ...
        report = scheduler.trigger_now()
        ...
        scheduler.stop()
    """

    def __init__(
        self,
        session_factory: Callable[[], Session] = SessionLocal,
        service_factory: Callable[[Session], ReminderService] = build_reminder_service,
        clock: Callable[[], datetime] = datetime.now,
        scheduler: Optional[BackgroundScheduler] = None
    ):
        self.session_factory = session_factory
        self.service_factory = service_factory
        self.clock = clock
        self._scheduler = scheduler
        self._lock = threading.Lock()
        self.last_report: Optional[SweepReport] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    def start(self) -> None:
        if self.running:
            return
        if self._scheduler is None:
            self._scheduler = BackgroundScheduler()
        # coalesce/max_instances keep a late tick from piling up behind a slow sweep
        self._scheduler.add_job(
            self._tick,
            CronTrigger(second=0),
            id=JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
            misfire_grace_time=30
        )
        self._scheduler.start()
        logger.info("Reminder scheduler started")

    def stop(self) -> None:
        if not self.running:
            return
        self._scheduler.shutdown(wait=False)
        self._scheduler = None
        logger.info("Reminder scheduler stopped")

    def trigger_now(self, now: Optional[datetime] = None) -> Optional[SweepReport]:
        """
        Run one sweep synchronously.

        Args:
            now: Sweep time; taken from the clock when omitted.

        Returns:
            The sweep report, or None when another sweep was still running.
        """
        if not self._lock.acquire(blocking=False):
            logger.warning("Reminder sweep already running, skipping this invocation")
            return None
        try:
            now = now or self.clock()
            try:
                session = self.session_factory()
                try:
                    report = self.service_factory(session).run_reminder_sweep(now)
                finally:
                    session.close()
            except Exception as e:
                # session or service construction failed; the next tick retries
                logger.error(f"Reminder sweep could not run: {e}", exc_info=True)
                report = SweepReport(
                    swept_at=now,
                    current_time=format_hhmm(now),
                    current_day=weekday_name(now),
                    error=str(e)
                )
            self.last_report = report
            return report
        finally:
            self._lock.release()

    def _tick(self) -> None:
        self.trigger_now()


reminder_scheduler = ReminderScheduler()
