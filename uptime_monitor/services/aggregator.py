"""Status aggregator - reduces per-monitor statuses to one overall verdict."""
from dataclasses import dataclass
from typing import Iterable

from ..models import STATUS_DEGRADED, STATUS_HEALTHY, STATUS_UNHEALTHY, STATUS_UNKNOWN


@dataclass(frozen=True)
class StatusSummary:
    """Overall status plus the counts it was derived from."""
    status: str
    monitors: int
    healthy_monitors: int


def summarize_statuses(statuses: Iterable[str]) -> StatusSummary:
    """Reduce monitor statuses to a single overall status.

    - no monitors, or every monitor UNKNOWN = UNKNOWN
    - every monitor HEALTHY = HEALTHY
    - nothing HEALTHY or DEGRADED, at least one UNHEALTHY = UNHEALTHY
    - any other mix = DEGRADED
    """
    total = healthy = degraded = unknown = 0
    for status in statuses:
        total += 1
        status = (status or "").upper()
        if status == STATUS_HEALTHY:
            healthy += 1
        elif status == STATUS_DEGRADED:
            degraded += 1
        elif status == STATUS_UNKNOWN:
            unknown += 1

    if total == 0:
        overall = STATUS_UNKNOWN
    elif healthy == total:
        overall = STATUS_HEALTHY
    elif healthy == 0 and degraded == 0 and unknown == total:
        overall = STATUS_UNKNOWN
    elif healthy == 0 and degraded == 0:
        overall = STATUS_UNHEALTHY
    else:
        overall = STATUS_DEGRADED

    return StatusSummary(status=overall, monitors=total, healthy_monitors=healthy)
