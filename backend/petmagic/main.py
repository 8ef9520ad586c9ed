"""Main FastAPI application."""
import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from petmagic.settings import settings
from petmagic.api.messages import router as messages_router
from petmagic.api.notifications import router as notifications_router
from petmagic.api.pets import router as pets_router
from petmagic.api.users import router as users_router
from petmagic.domain.common.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from petmagic.infra.db.base import Base, engine
# Import all models to ensure they're registered with Base
from petmagic.infra.db.models import (  # noqa: F401
    UserModel,
    PetModel,
    NotificationModel,
    MessageModel,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, str(settings.log_level).upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        # Keep serving; /ready reports the database as down until it is reachable.
        logger.warning("Could not initialize database during startup: %s", e)

    yield

    await engine.dispose()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log all requests and responses."""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        logger.info("[REQUEST] %s %s", request.method, request.url.path)
        logger.debug("   Query params: %s", dict(request.query_params))

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "[RESPONSE] %s %s - %s (%.3fs)",
            request.method, request.url.path, response.status_code, process_time,
        )
        return response


# Add logging middleware AFTER CORS (CORS must be first)
app.add_middleware(LoggingMiddleware)


def _error(status_code: int, message: str) -> JSONResponse:
    """Uniform error envelope."""
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies / params are validation errors (400)."""
    errors = exc.errors()
    logger.warning("[VALIDATION ERROR] %s %s: %s", request.method, request.url.path, errors)
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        parts.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return _error(status.HTTP_400_BAD_REQUEST, "; ".join(parts) or "Invalid request")


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


# Domain error handlers: map domain exceptions to HTTP status
_DOMAIN_STATUS = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (StoreError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    """Return the status that matches the domain error kind."""
    for error_cls, status_code in _DOMAIN_STATUS:
        if isinstance(exc, error_cls):
            return _error(status_code, exc.message)
    logger.error("Unmapped domain error on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, exc.message)


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    """Storage failures that escaped a transaction block get a generic message."""
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, StoreError().message)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "version": settings.app_version}


@app.get("/ready")
async def readiness():
    """Readiness endpoint: run all checks and return 200 if ready, 503 otherwise."""
    from petmagic.readiness import run_all_checks_async, is_ready
    checks = await run_all_checks_async()
    ready, summary = is_ready(checks)
    if ready:
        return {"ready": True, "checks": summary}
    return JSONResponse(
        status_code=503,
        content={"ready": False, "checks": summary},
    )


app.include_router(users_router, prefix=settings.api_prefix, tags=["users"])
app.include_router(pets_router, prefix=settings.api_prefix, tags=["pets"])
app.include_router(notifications_router, prefix=settings.api_prefix, tags=["notifications"])
app.include_router(messages_router, prefix=settings.api_prefix, tags=["messages"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("petmagic.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
