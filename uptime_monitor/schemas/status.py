"""Overall status schema."""
from pydantic import BaseModel


class StatusOverview(BaseModel):
    """Overall health across every monitor."""
    status: str  # HEALTHY, DEGRADED, UNHEALTHY, UNKNOWN
    monitors: int
    healthy_monitors: int

    class Config:
        from_attributes = True
