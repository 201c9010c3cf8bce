"""Overall status API."""
import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError

from ..auth import get_monitor_service
from ..schemas.status import StatusOverview
from ..services import MonitorService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/status", tags=["status"])


@router.get("", response_model=StatusOverview)
async def get_status(service: MonitorService = Depends(get_monitor_service)):
    """Overall status derived from every monitor's latest probe."""
    try:
        summary = await service.get_global_status()
    except SQLAlchemyError as e:
        logger.error(f"Failed to fetch status: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch status")
    return StatusOverview.model_validate(summary)
