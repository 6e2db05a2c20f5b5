### Description ###
# Planner Suite - Multi-tenant Event Planning Platform
# - API Server -
# Author: Planner Suite Team
# Date: 10/18/2026
# Python: 3.11
####################

"""
Planner Suite API - Main Application

FastAPI application entry point that provides:
- Tenant-scoped authentication and authorization
- Stage planner endpoints (events, technical teams)
- Request logging and rate limiting
- OpenAPI documentation at /api/docs

Usage:
    # Development
    uvicorn planner_api.main:app --reload --port 3001

    # Production
    uvicorn planner_api.main:app --host 0.0.0.0 --port 3001
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.exceptions import HTTPException as StarletteHTTPException

from planner_api.config import get_api_settings, load_yaml_config
from planner_api.database import SessionLocal, get_session_factory, init_db
from planner_api.dependencies import close_counter_store, get_counter_store
from planner_api.errors import PlannerError
from planner_api.middleware import RequestLoggingMiddleware
from planner_api.models import DEFAULT_PERMISSIONS, Permission
from planner_api.routers import auth_router, stageplanner_router
from planner_api.services import CounterStore
from planner_api.schemas.responses import ErrorDetail, ErrorResponse, HealthResponse
from planner_api.utils import get_logger

# Load settings
settings = get_api_settings()
logger = get_logger("planner_api")


async def _seed_permissions():
    """Insert any missing permission names from the default catalogue"""
    async with SessionLocal() as session:
        result = await session.execute(select(Permission.name))
        existing = set(result.scalars().all())
        missing = [name for name in DEFAULT_PERMISSIONS if name not in existing]
        for name in missing:
            session.add(Permission(name=name))
        if missing:
            await session.commit()
            logger.info(f"Seeded {len(missing)} permissions")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager

    Handles startup and shutdown events:
    - Startup: load config, create schema (development), seed permissions
    - Shutdown: close the counter store connection
    """
    logger.info(f"Starting {settings.api_title} v{settings.api_version} ({settings.environment})")

    # Creates data/config.yaml with defaults on first run
    load_yaml_config()

    if settings.create_schema_on_startup:
        await init_db()
        await _seed_permissions()

    if settings.is_production and settings.secret_key.startswith("change-this"):
        logger.warning("PLANNER_SECRET_KEY is using the default value - set a real secret!")

    yield

    logger.info(f"Shutting down {settings.api_title}...")
    await close_counter_store()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="""
## Planner Suite API

Multi-tenant event and resource planning.

### Tenancy
Requests name their tenant with the `X-Tenant-Id` header or through the
subdomain (`acme.planner.app`). The header wins when both are present.

### Authentication
Log in at `/api/auth/login` and pass the returned token:

```
Authorization: Bearer <token>
```
    """,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "RateLimit-Limit", "RateLimit-Remaining", "RateLimit-Reset", "Retry-After"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)


# ========================================
# Exception Handlers
# ========================================

def _error_response(status_code: int, message: str, errors=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            ErrorResponse(message=message, errors=errors).model_dump(exclude={"errors"} if errors is None else None)
        ),
        headers=headers,
    )


@app.exception_handler(PlannerError)
async def planner_error_handler(request: Request, exc: PlannerError) -> JSONResponse:
    """Translate pipeline errors to the error envelope"""
    if exc.safe:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}")
        message = exc.message
    else:
        logger.error(
            f"{request.method} {request.url.path} -> {exc.status_code} {type(exc).__name__}: {exc.message}",
            exc_info=exc,
        )
        message = exc.message if settings.debug else "Internal server error"
    return _error_response(exc.status_code, message, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Collect every validation failure as {field, message, value}"""
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part != "body"]
        errors.append(
            ErrorDetail(
                field=".".join(loc) or None,
                message=error.get("msg", "Invalid value"),
                value=error.get("input"),
            )
        )
    logger.info(f"{request.method} {request.url.path} -> 400 validation failed ({len(errors)} errors)")
    return _error_response(status.HTTP_400_BAD_REQUEST, "Validation failed", errors=errors)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.method} {request.url.path} not found"
    else:
        message = str(exc.detail)
    return _error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle uncaught exceptions"""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc!s}", exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        str(exc) if settings.debug else "Internal server error",
    )


# ========================================
# System Endpoints
# ========================================

@app.get(
    "/health",
    tags=["System"],
    summary="Health check",
    description="Check API health and backing store connectivity",
    response_model=HealthResponse,
)
async def health_check(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    counters: CounterStore = Depends(get_counter_store),
) -> HealthResponse:
    database_connected = False
    try:
        async with session_factory() as session:
            await session.execute(text("SELECT 1"))
        database_connected = True
    except Exception as e:
        logger.warning(f"Health check: database unreachable: {e!s}")

    counter_connected = await counters.ping()

    return HealthResponse(
        status="healthy" if database_connected and counter_connected else "degraded",
        version=settings.api_version,
        environment=settings.environment,
        database_connected=database_connected,
        counter_store_backend=counters.backend,
        counter_store_connected=counter_connected,
    )


# Root endpoint
@app.get("/", tags=["System"], summary="API Info")
async def root():
    """API root - returns basic API information"""
    return {
        "name": settings.api_title,
        "version": settings.api_version,
        "docs": "/api/docs",
        "health": "/health",
    }


# Include routers
app.include_router(
    auth_router,
    prefix=f"{settings.api_prefix}/auth",
    tags=["Authentication"],
)

app.include_router(
    stageplanner_router,
    prefix=f"{settings.api_prefix}/stageplanner",
    tags=["Stage Planner"],
)


# Entry point for running directly
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "planner_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
