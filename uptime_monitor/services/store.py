"""Monitor store - persistence for monitor definitions and probe results.

Every call opens its own session so that probe tasks running concurrently
never share one. Probe write-backs are column-scoped UPDATE statements; they
never rewrite name/type/url, so an administrative edit that lands while a
probe is in flight is not clobbered.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import async_sessionmaker

from ..models import Monitor, STATUS_UNKNOWN
from ..utils.db_utils import retry_on_lock

logger = logging.getLogger(__name__)


class MonitorNotFound(LookupError):
    """No monitor exists with the requested id."""

    def __init__(self, monitor_id: int):
        super().__init__(f"Monitor {monitor_id} not found")
        self.monitor_id = monitor_id


class MonitorStore:
    """Async CRUD over Monitor rows."""

    def __init__(self, session_factory: async_sessionmaker):
        self._session_factory = session_factory

    async def list_all(self) -> List[Monitor]:
        """All monitors, ordered by id."""
        async with self._session_factory() as session:
            result = await session.execute(select(Monitor).order_by(Monitor.id))
            return list(result.scalars().all())

    async def get(self, monitor_id: int) -> Monitor:
        async with self._session_factory() as session:
            monitor = await session.get(Monitor, monitor_id)
            if monitor is None:
                raise MonitorNotFound(monitor_id)
            return monitor

    async def update_probe_result(
        self,
        monitor_id: int,
        status: str,
        checked_at: datetime,
        response_code: int,
        latency_ms: int,
    ) -> bool:
        """Write the probe fields of one monitor.

        Returns False when the monitor no longer exists; no row is created.
        """
        async def do_update():
            async with self._session_factory() as session:
                result = await session.execute(
                    update(Monitor)
                    .where(Monitor.id == monitor_id)
                    .values(
                        status=status,
                        last_check=checked_at,
                        last_response_code=response_code,
                        last_response_time_ms=latency_ms,
                    )
                )
                await session.commit()
                return result.rowcount

        rowcount = await retry_on_lock(do_update)
        if not rowcount:
            logger.warning(f"Monitor {monitor_id} no longer exists, dropping probe result")
            return False
        return True

    async def create(self, name: str, type: str, url: str) -> Monitor:
        """Insert a new monitor in the UNKNOWN state."""
        async def do_create():
            async with self._session_factory() as session:
                monitor = Monitor(
                    name=name,
                    type=type,
                    url=url,
                    status=STATUS_UNKNOWN,
                    last_check=None,
                    last_response_code=0,
                    last_response_time_ms=0,
                )
                session.add(monitor)
                await session.commit()
                await session.refresh(monitor)
                return monitor

        monitor = await retry_on_lock(do_create)
        logger.info(f"Created monitor {monitor.id} ({monitor.name}) -> {monitor.url}")
        return monitor

    async def update_details(
        self,
        monitor_id: int,
        name: Optional[str] = None,
        type: Optional[str] = None,
        url: Optional[str] = None,
    ) -> Monitor:
        """Update only the supplied metadata fields of a monitor.

        Changing the URL resets the probe fields, since they describe the
        old target.
        """
        async def do_update():
            async with self._session_factory() as session:
                monitor = await session.get(Monitor, monitor_id)
                if monitor is None:
                    raise MonitorNotFound(monitor_id)

                values = {}
                if name is not None:
                    values["name"] = name
                if type is not None:
                    values["type"] = type
                if url is not None and url != monitor.url:
                    values.update(
                        url=url,
                        status=STATUS_UNKNOWN,
                        last_check=None,
                        last_response_code=0,
                        last_response_time_ms=0,
                    )

                if values:
                    await session.execute(
                        update(Monitor).where(Monitor.id == monitor_id).values(**values)
                    )
                    await session.commit()
                    await session.refresh(monitor)
                return monitor

        return await retry_on_lock(do_update)

    async def delete(self, monitor_id: int) -> bool:
        """Delete a monitor; returns whether a row was removed."""
        async def do_delete():
            async with self._session_factory() as session:
                result = await session.execute(delete(Monitor).where(Monitor.id == monitor_id))
                await session.commit()
                return result.rowcount

        removed = bool(await retry_on_lock(do_delete))
        if removed:
            logger.info(f"Deleted monitor {monitor_id}")
        return removed
