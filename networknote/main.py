"""
FastAPI application: database pool lifecycle, middleware, error mapping and
routers.
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from networknote.config import settings
from networknote.db.pool import db_pool
from networknote.errors import (
    AuthFailure,
    GenerationProxyFailure,
    NetworkNoteError,
    PermissionDenied,
    PersistenceFailure,
    ValidationError,
)
from networknote.infrastructure.observability.logging import (
    get_logger,
    log_http_request,
    setup_logging,
)
from networknote.middleware import CORSMiddleware, RequestContextMiddleware
from networknote.models.api.auth_response import LOGIN_PATH
from networknote.routes import admin, auth, functions, generation, health, hr_directory, session

# Setup logging before creating the app
setup_logging(
    log_level="DEBUG" if settings.debug else "INFO",
    json_logs=settings.environment != "development",
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database pool on startup and close it on shutdown.

    An unreachable database does not stop the app.
    """
    logger.info("Application starting", environment=settings.environment, debug=settings.debug)

    try:
        await db_pool.initialize()
    except RuntimeError as e:
        # Queries raise PersistenceFailure until restart; listings serve demo data
        logger.error("Database unavailable at startup, continuing in demo mode", error=str(e))
    else:
        logger.info("All services initialized successfully", services=["database_pool"])

    yield

    logger.info("Application shutting down")
    await db_pool.close()
    logger.info("All services closed successfully")


app = FastAPI(
    title="NetworkNote",
    description="Outreach drafting, HR directory and account administration",
    version="0.1.0",
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log HTTP requests with timing."""
    start_time = time.perf_counter()
    response = await call_next(request)
    log_http_request(
        request.method,
        request.url.path,
        response.status_code,
        (time.perf_counter() - start_time) * 1000,
    )
    return response


# Last added runs first: request context wraps CORS wraps request logging
app.add_middleware(CORSMiddleware, allowed_origins=settings.cors_origins())
app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(session.router)
app.include_router(functions.router)
app.include_router(generation.router)
app.include_router(hr_directory.router)
app.include_router(admin.router)


def _error_body(error: NetworkNoteError, **extra) -> dict:
    return {"error": error.title, "message": error.message, **extra}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.info("Validation failed", path=request.url.path, missing_fields=exc.missing_fields)
    return JSONResponse(
        status_code=422, content=_error_body(exc, missing_fields=exc.missing_fields)
    )


@app.exception_handler(AuthFailure)
async def auth_failure_handler(request: Request, exc: AuthFailure):
    logger.warning("Authentication failed", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=401, content=_error_body(exc, redirect_to=LOGIN_PATH))


@app.exception_handler(PermissionDenied)
async def permission_denied_handler(request: Request, exc: PermissionDenied):
    logger.warning("Permission denied", path=request.url.path, error=exc.message)
    return JSONResponse(status_code=403, content=_error_body(exc))


@app.exception_handler(GenerationProxyFailure)
async def generation_failure_handler(request: Request, exc: GenerationProxyFailure):
    logger.error("Generation failed", path=request.url.path, feature=exc.feature, error=exc.message)
    return JSONResponse(status_code=502, content=_error_body(exc))


@app.exception_handler(PersistenceFailure)
async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
    logger.error(
        "Persistence failed", path=request.url.path, operation=exc.operation, error=exc.message
    )
    return JSONResponse(status_code=503, content=_error_body(exc))


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
