"""Key-based access control for API routes.

The gate runs as HTTP middleware so that it answers before the request body
is parsed: a caller without a valid key gets 401/403, never a validation
error about a body it was not allowed to send.
"""
import hmac
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from .services import MonitorService

# Path roots that require a key; GET needs read access, anything else admin
PROTECTED_PREFIXES = ("/monitor", "/status")

ACCESS_READ = "read"
ACCESS_ADMIN = "admin"


@dataclass(frozen=True)
class AccessKeys:
    """Read key grants GET routes; admin key grants everything."""
    read_key: str
    admin_key: str


def _matches(supplied: str, expected: str) -> bool:
    return hmac.compare_digest(supplied.encode(), expected.encode())


def check_key(keys: AccessKeys, supplied: Optional[str], allow_read: bool):
    """Raise 401/403 unless ``supplied`` grants the requested access."""
    key = (supplied or "").strip()
    if not key:
        raise HTTPException(status_code=401, detail="Authorization header required")
    if _matches(key, keys.admin_key):
        return
    if allow_read and _matches(key, keys.read_key):
        return
    raise HTTPException(status_code=403, detail="Forbidden")


def required_access(method: str, path: str) -> Optional[str]:
    """Access level a request needs, or None for open paths such as /health."""
    for prefix in PROTECTED_PREFIXES:
        if path == prefix or path.startswith(prefix + "/"):
            return ACCESS_READ if method in ("GET", "HEAD") else ACCESS_ADMIN
    return None


async def access_gate(request: Request, call_next):
    """Reject requests to protected paths that lack a sufficient key."""
    access = required_access(request.method, request.url.path)
    if access is not None:
        try:
            check_key(
                request.app.state.access_keys,
                request.headers.get("Authorization"),
                allow_read=access == ACCESS_READ,
            )
        except HTTPException as e:
            return JSONResponse(status_code=e.status_code, content={"message": e.detail})
    return await call_next(request)


def get_monitor_service(request: Request) -> MonitorService:
    return request.app.state.monitor_service
