"""Monitoring service - the entry points the API layer calls into."""
import asyncio
from typing import List

from ..models import Monitor
from .aggregator import StatusSummary, summarize_statuses
from .scheduler import MonitorChecker
from .store import MonitorStore


class MonitorService:
    """Ties the store to the checker for create/update hooks and status reads."""

    def __init__(self, store: MonitorStore, checker: MonitorChecker):
        self.store = store
        self.checker = checker

    def on_monitor_created(self, monitor_id: int) -> asyncio.Task:
        """Give a new monitor a status without waiting for the next tick."""
        return self.checker.trigger_check(monitor_id)

    def on_monitor_updated(self, monitor_id: int) -> asyncio.Task:
        """Re-probe an edited monitor right away."""
        return self.checker.trigger_check(monitor_id)

    async def list_monitors(self) -> List[Monitor]:
        return await self.store.list_all()

    async def get_global_status(self) -> StatusSummary:
        """Overall status, recomputed from the store on every call."""
        monitors = await self.store.list_all()
        return summarize_statuses(m.status for m in monitors)
