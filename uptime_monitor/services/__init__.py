"""Services for probing, scheduling, and status aggregation."""
from .aggregator import StatusSummary, summarize_statuses
from .monitoring import MonitorService
from .prober import Prober, ProbeResult, classify_status
from .scheduler import MonitorChecker, SchedulerHandle
from .store import MonitorNotFound, MonitorStore

__all__ = [
    "MonitorChecker",
    "MonitorNotFound",
    "MonitorService",
    "MonitorStore",
    "Prober",
    "ProbeResult",
    "SchedulerHandle",
    "StatusSummary",
    "classify_status",
    "summarize_statuses",
]
