"""Monitor schemas for API."""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class MonitorCreate(BaseModel):
    """Schema for creating a new monitor.

    Values are trimmed and checked for emptiness by the router so that each
    failure gets its own message.
    """
    name: str
    type: str
    url: str


class MonitorUpdate(BaseModel):
    """Schema for updating a monitor - only supplied fields change."""
    name: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None


class MonitorResponse(BaseModel):
    """Schema for monitor in API responses."""
    id: int
    name: str
    type: str
    url: str
    status: str
    last_check: Optional[datetime] = None
    last_response_code: int = 0
    last_response_time_ms: int = 0

    class Config:
        from_attributes = True


class MessageResponse(BaseModel):
    """Plain message body used for errors and deletes."""
    message: str
