"""Scheduler service - periodic batch probing and on-demand checks.

Design:
- One APScheduler interval job lists every monitor and fans out one asyncio
  task per monitor; the job itself returns as soon as the tasks are spawned.
- Probe tasks are fire-and-forget. Nothing limits how many run at once, and
  two probes of the same monitor may overlap (for example an on-demand check
  racing a tick). The later write-back wins.
- Stopping the scheduler only stops the ticks; probes already in flight run
  to completion or to their timeout.
"""
import asyncio
import logging
from typing import Optional, Set

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError

from ..config import DEFAULT_CHECK_INTERVAL_SECONDS
from ..models import Monitor
from ..utils.db_utils import utcnow
from .prober import Prober, ProbeResult
from .store import MonitorNotFound, MonitorStore

logger = logging.getLogger(__name__)

BATCH_JOB_ID = "run_batch"


class SchedulerHandle:
    """Owned handle for a running periodic check loop."""

    def __init__(self, scheduler: AsyncIOScheduler, interval: int):
        self._scheduler = scheduler
        self.interval = interval

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def stop(self):
        """Stop ticking. In-flight probes are neither cancelled nor awaited."""
        if self._scheduler.running:
            self._scheduler.shutdown(wait=False)
            logger.info("Scheduler stopped")


class MonitorChecker:
    """Runs probes and writes their results back to the store."""

    def __init__(self, store: MonitorStore, prober: Prober):
        self.store = store
        self.prober = prober
        # Strong references so the event loop does not drop running tasks
        self._tasks: Set[asyncio.Task] = set()

    @property
    def in_flight(self) -> frozenset:
        """Snapshot of probe tasks that have not finished yet."""
        return frozenset(self._tasks)

    def start(self, interval_seconds: Optional[int] = None) -> SchedulerHandle:
        """Start periodic batch checks and return a handle to stop them.

        A missing or non-positive interval falls back to the default.
        """
        interval = interval_seconds or 0
        if interval <= 0:
            if interval_seconds is not None:
                logger.warning(
                    f"Invalid check interval {interval_seconds}s, "
                    f"using {DEFAULT_CHECK_INTERVAL_SECONDS}s"
                )
            interval = DEFAULT_CHECK_INTERVAL_SECONDS

        scheduler = AsyncIOScheduler()
        scheduler.add_job(
            self.run_batch,
            trigger=IntervalTrigger(seconds=interval),
            id=BATCH_JOB_ID,
            replace_existing=True,
            max_instances=1,
            misfire_grace_time=interval,
        )
        scheduler.start()
        logger.info(f"Scheduler started (interval={interval}s)")
        return SchedulerHandle(scheduler, interval)

    def _spawn(self, coro) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def run_batch(self) -> int:
        """Launch one probe task per monitor; returns how many were launched."""
        try:
            monitors = await self.store.list_all()
        except SQLAlchemyError as e:
            logger.error(f"Monitor batch query failed: {e}")
            return 0

        for monitor in monitors:
            self._spawn(self.check_monitor(monitor))

        logger.debug(f"Batch launched {len(monitors)} probes")
        return len(monitors)

    def trigger_check(self, monitor_id: int) -> asyncio.Task:
        """Probe one monitor now, without blocking the caller."""
        return self._spawn(self._check_by_id(monitor_id))

    async def _check_by_id(self, monitor_id: int) -> Optional[ProbeResult]:
        try:
            monitor = await self.store.get(monitor_id)
        except MonitorNotFound:
            logger.info(f"Monitor trigger skipped, id={monitor_id} no longer exists")
            return None
        except SQLAlchemyError as e:
            logger.error(f"Monitor trigger failed for id={monitor_id}: {e}")
            return None
        return await self.check_monitor(monitor)

    async def check_monitor(self, monitor: Monitor) -> ProbeResult:
        """Probe a monitor and persist the outcome.

        A failed write-back is logged and the result dropped; the next tick
        will probe the monitor again.
        """
        result = await self.prober.probe(monitor.url)
        try:
            await self.store.update_probe_result(
                monitor.id,
                status=result.status,
                checked_at=utcnow(),
                response_code=result.response_code,
                latency_ms=result.response_time_ms,
            )
        except SQLAlchemyError as e:
            logger.error(f"Monitor {monitor.id} update failed: {e}")
        else:
            logger.debug(f"Monitor {monitor.name}: {result.status}")
        return result
