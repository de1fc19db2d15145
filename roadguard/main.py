"""
RoadGuard FastAPI application.

Startup loads the workbook into the record store; every request is tagged
with an ``X-Request-ID`` that is bound into the structlog context and echoed
back on the response.
"""

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from roadguard import __version__
from roadguard.adapters.workbook_adapter import WorkbookError
from roadguard.config import get_settings
from roadguard.engine.errors import InsufficientData
from roadguard.routers import accidents, system
from roadguard.storage import get_record_store
from roadguard.utils.logging import configure_logging, get_logger

configure_logging()
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load the workbook before serving; an unreadable workbook leaves the store empty."""
    settings = get_settings()
    logger.info("application_startup", version=app.version, workbook_path=settings.workbook_path)

    try:
        get_record_store().refresh(force=True)
    except WorkbookError as e:
        # POST /api/v1/system/refresh retries the load
        logger.warning("initial_load_failed", error=str(e))

    yield

    logger.info("application_shutdown")


def _register_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def request_tracing_middleware(request: Request, call_next):
        """Bind a request id, time the request and turn crashes into a 500 envelope."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id, path=request.url.path)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("request_failed", method=request.method, error=str(e), exc_info=True)
            response = error_response(500, "Internal server error", request_id=request_id)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            method=request.method,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return response


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(InsufficientData)
    async def insufficient_data_handler(request: Request, exc: InsufficientData):
        logger.warning(
            "insufficient_data",
            operation=exc.operation,
            required=exc.required,
            available=exc.available,
        )
        return error_response(422, str(exc))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        logger.warning("request_invalid", error=message)
        return error_response(422, message or "Invalid request")

    @app.exception_handler(WorkbookError)
    async def workbook_error_handler(request: Request, exc: WorkbookError):
        logger.warning("workbook_unavailable", error=str(exc))
        return error_response(503, str(exc))


def create_app() -> FastAPI:
    """Build the application with CORS, tracing, error envelopes and routers."""
    settings = get_settings()

    app = FastAPI(
        title="RoadGuard API",
        description="Road accident analytics: summaries, patterns, risk scores and trend forecasts",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    _register_middleware(app)
    _register_exception_handlers(app)

    @app.get("/health", tags=["System"])
    async def health_check():
        """Liveness probe with the size of the current snapshot."""
        return {"status": "healthy", "version": app.version, "records": len(get_record_store())}

    app.include_router(accidents.router, prefix="/api/v1/accidents", tags=["Accidents"])
    app.include_router(system.router, prefix="/api/v1/system", tags=["System"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "roadguard.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
