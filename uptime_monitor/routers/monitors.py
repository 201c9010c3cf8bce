"""Monitor CRUD API endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from ..auth import get_monitor_service
from ..schemas.monitor import (
    MessageResponse,
    MonitorCreate,
    MonitorResponse,
    MonitorUpdate,
)
from ..services import MonitorNotFound, MonitorService
from ..utils.validators import is_valid_url

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/monitor", tags=["monitors"])


def _require_non_empty(value: str, message: str) -> str:
    value = value.strip()
    if not value:
        raise HTTPException(status_code=400, detail=message)
    return value


@router.get("", response_model=List[MonitorResponse])
async def list_monitors(service: MonitorService = Depends(get_monitor_service)):
    """List all monitors with their latest probe result."""
    try:
        monitors = await service.list_monitors()
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch monitors: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch monitors")
    return monitors


@router.post(
    "",
    response_model=MonitorResponse,
    status_code=201,
)
async def create_monitor(
    monitor: MonitorCreate,
    service: MonitorService = Depends(get_monitor_service),
):
    """Create a new monitor and probe it immediately."""
    name = monitor.name.strip()
    type_value = monitor.type.strip()
    url = monitor.url.strip()
    if not name or not type_value or not url:
        raise HTTPException(status_code=400, detail="Name, type, and url are required")
    if not is_valid_url(url):
        raise HTTPException(status_code=400, detail="Invalid URL")

    try:
        db_monitor = await service.store.create(name=name, type=type_value, url=url)
    except SQLAlchemyError as e:
        logger.error(f"Failed to create monitor: {e}")
        raise HTTPException(status_code=500, detail="Failed to create monitor")

    service.on_monitor_created(db_monitor.id)
    return db_monitor


@router.put(
    "/{monitor_id}",
    response_model=MonitorResponse,
)
async def update_monitor(
    monitor_id: int,
    monitor_update: MonitorUpdate,
    service: MonitorService = Depends(get_monitor_service),
):
    """Update name, type and/or url of a monitor, then re-probe it."""
    name = type_value = url = None
    if monitor_update.name is not None:
        name = _require_non_empty(monitor_update.name, "Name cannot be empty")
    if monitor_update.type is not None:
        type_value = _require_non_empty(monitor_update.type, "Type cannot be empty")
    if monitor_update.url is not None:
        url = _require_non_empty(monitor_update.url, "URL cannot be empty")
        if not is_valid_url(url):
            raise HTTPException(status_code=400, detail="Invalid URL")

    try:
        db_monitor = await service.store.update_details(
            monitor_id, name=name, type=type_value, url=url
        )
    except MonitorNotFound:
        raise HTTPException(status_code=404, detail="Monitor not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to update monitor {monitor_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update monitor")

    service.on_monitor_updated(db_monitor.id)
    return db_monitor


@router.delete(
    "/{monitor_id}",
    response_model=MessageResponse,
)
async def delete_monitor(
    monitor_id: int,
    service: MonitorService = Depends(get_monitor_service),
):
    """Delete a monitor. Deleting an unknown id is not an error."""
    try:
        await service.store.delete(monitor_id)
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete monitor {monitor_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete monitor")
    return MessageResponse(message="Monitor deleted")
