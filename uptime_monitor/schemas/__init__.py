"""Pydantic schemas for API request/response models."""
from .monitor import (
    MessageResponse,
    MonitorCreate,
    MonitorResponse,
    MonitorUpdate,
)
from .status import StatusOverview

__all__ = [
    "MessageResponse",
    "MonitorCreate",
    "MonitorResponse",
    "MonitorUpdate",
    "StatusOverview",
]
