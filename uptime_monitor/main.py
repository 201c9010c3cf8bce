"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .auth import AccessKeys, access_gate
from .config import settings, require_access_keys
from .database import async_session, init_db, close_db
from .routers import monitors_router, status_router
from .services import MonitorChecker, MonitorService, MonitorStore, Prober

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan - startup and shutdown."""
    read_key, admin_key = require_access_keys(settings)
    app.state.access_keys = AccessKeys(read_key=read_key, admin_key=admin_key)

    await init_db()

    store = MonitorStore(async_session)
    checker = MonitorChecker(store, Prober(timeout=settings.probe_timeout_seconds))
    app.state.monitor_service = MonitorService(store, checker)
    app.state.scheduler = checker.start(settings.check_interval_seconds)

    yield

    app.state.scheduler.stop()
    await close_db()
    logger.info("Shutdown complete")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render errors as {"message": ...}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.debug(f"Rejected request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"message": "Invalid request"})


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Uptime Monitor",
        description="Periodic HTTP checks with an overall health status",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Key check runs before routing and body parsing
    app.middleware("http")(access_gate)

    app.include_router(monitors_router)
    app.include_router(status_router)

    # Liveness endpoint, no key required
    @app.get("/health")
    async def health_check():
        return {"status": "ok"}

    return app


# Create the application instance
app = create_app()


def run():
    """Serve the API with uvicorn."""
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    run()
