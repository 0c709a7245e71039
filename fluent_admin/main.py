"""
Fluent Life Admin API

FastAPI application entry point.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fluent_admin.api.middleware.request_id import RequestIdMiddleware
from fluent_admin.api.v1 import router as api_v1_router
from fluent_admin.config import Settings, get_settings
from fluent_admin.kernel.context import AdminContext, build_context
from fluent_admin.kernel.errors import AdminError, ErrorKind, TransactionError
from fluent_admin.logging_config import configure_logging, get_logger
from fluent_admin.schemas.common import HealthResponse

logger = get_logger(__name__)

ERROR_STATUS = {
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION_ERROR: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.TRANSACTION_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan handler.

    Runs startup and shutdown tasks.
    """
    settings: Settings = app.state.settings
    ctx: AdminContext = app.state.context

    # Configure logging first
    configure_logging(
        log_level=settings.log_level,
        environment=settings.environment,
        debug=settings.debug,
    )

    # Startup
    logger.info("Starting %s v%s", settings.project_name, settings.version)
    await ctx.initialize()
    logger.info("Database initialized")

    yield

    # Shutdown
    logger.info("Shutting down...")
    await ctx.dispose()
    logger.info("Database connections closed")


def _request_headers(request: Request) -> dict:
    req_id = getattr(request.state, "request_id", None)
    return {"X-Request-ID": req_id} if req_id else {}


async def admin_error_handler(request: Request, exc: AdminError):
    """Map kernel failures to ``{code, detail}`` bodies."""
    status_code = ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    headers = _request_headers(request)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Bearer"

    content = {"code": exc.kind.value, "detail": exc.message}
    if isinstance(exc, TransactionError):
        content["step"] = exc.step
    if status_code >= 500:
        content["request_id"] = getattr(request.state, "request_id", None)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle request validation errors."""
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({
            "field": field,
            "message": error["msg"],
            "type": error["type"],
        })
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "code": ErrorKind.VALIDATION_ERROR.value,
            "detail": "Validation error",
            "errors": errors,
        },
        headers=_request_headers(request),
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception("Unhandled exception: %s", exc)
    settings: Settings = request.app.state.settings
    req_id = getattr(request.state, "request_id", None)
    detail = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"code": "internal_error", "detail": detail, "request_id": req_id},
        headers=_request_headers(request),
    )


def create_app(
    settings: Optional[Settings] = None,
    context: Optional[AdminContext] = None,
) -> FastAPI:
    """
    Build the application.

    Tests pass their own settings and context. Served with
    ``uvicorn fluent_admin.main:create_app --factory``, both come from the
    environment.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.project_name,
        description="""
        Fluent Life Admin API

        Back office for the Fluent Life speech-training platform.

        ## Features

        - **Operator login**: bcrypt credentials, signed time-bounded tokens
        - **Role gate**: user < admin < super_admin on every admin route
        - **Batch deletes**: posts, rooms, comments and more, with their
          dependent rows, all-or-nothing
        - **Operation log**: one audit row per mutating call, success or failure
        """,
        version=settings.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )
    app.state.settings = settings
    app.state.context = context or build_context(settings)

    # Last added = outermost; CORS wraps everything
    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AdminError, admin_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health_check():
        """Check application health."""
        return HealthResponse(status="ok", version=settings.version)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint with API information."""
        return {
            "name": settings.project_name,
            "version": settings.version,
            "docs": "/docs" if settings.debug else "disabled",
            "api": {
                "v1": settings.api_v1_prefix,
            },
        }

    app.include_router(api_v1_router, prefix=settings.api_v1_prefix)

    return app


# Main entry point for development
if __name__ == "__main__":
    import uvicorn

    _settings = get_settings()
    uvicorn.run(
        "fluent_admin.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
        reload=_settings.debug,
    )
