"""Database models."""
from .monitor import (
    Monitor,
    MONITOR_STATUSES,
    STATUS_DEGRADED,
    STATUS_HEALTHY,
    STATUS_UNHEALTHY,
    STATUS_UNKNOWN,
)

__all__ = [
    "Monitor",
    "MONITOR_STATUSES",
    "STATUS_HEALTHY",
    "STATUS_DEGRADED",
    "STATUS_UNHEALTHY",
    "STATUS_UNKNOWN",
]
