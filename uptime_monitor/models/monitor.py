"""Monitor model - HTTP endpoints being monitored."""
from sqlalchemy import Column, Integer, String, DateTime

from ..database import Base

STATUS_HEALTHY = "HEALTHY"
STATUS_DEGRADED = "DEGRADED"
STATUS_UNHEALTHY = "UNHEALTHY"
STATUS_UNKNOWN = "UNKNOWN"

MONITOR_STATUSES = (STATUS_HEALTHY, STATUS_DEGRADED, STATUS_UNHEALTHY, STATUS_UNKNOWN)


class Monitor(Base):
    """A monitored HTTP endpoint and the result of its latest probe."""

    __tablename__ = "monitors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False)
    url = Column(String, nullable=False)

    # Probe fields - written only by the checker
    status = Column(String, nullable=False, default=STATUS_UNKNOWN)
    last_check = Column(DateTime, nullable=True)  # UTC, NULL until first probe
    last_response_code = Column(Integer, nullable=False, default=0)  # 0 = no response
    last_response_time_ms = Column(Integer, nullable=False, default=0)

    def __repr__(self):
        return f"<Monitor id={self.id} name={self.name!r} status={self.status}>"
