"""FastAPI application factory.

Creates and configures the FastAPI application with all routers,
middleware, and exception handlers. Run it with uvicorn's factory mode:

    uvicorn pdao.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import OperationalError

from pdao_config import Settings, get_settings

from pdao.infrastructure.persistence.sqlalchemy import Database
from pdao.presentation.api.exception_handlers import setup_exception_handlers
from pdao.presentation.api.routers import address_router, auth_router, users_router
from pdao.presentation.api.schemas import HealthResponse, RootResponse


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Configure application logging.

    - Console output with timestamps and module names
    - Configurable log level for pdao modules (from settings)
    - WARNING level for noisy third-party libraries
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt=date_format,
        stream=sys.stdout,
        force=True,
    )

    for name in ("pdao", "pdao_auth", "pdao_geo"):
        logging.getLogger(name).setLevel(log_level)

    # Quiet down noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


logger = logging.getLogger(__name__)

API_PREFIX = "/api"

OPENAPI_TAGS = [
    {
        "name": "Authentication",
        "description": """Account registration and login.

- New accounts start as `Pending` and become `Active` on first login
- Passwords are hashed with bcrypt and never returned
- Tokens are HS256 JWTs carrying `userId` and `role`, valid for 7 days
""",
    },
    {
        "name": "Users",
        "description": "Own profile, and user lookup for staff roles.",
    },
    {
        "name": "Address",
        "description": """Philippine geography for the cascading address selector.

Region → province → city/municipality → barangay, each looked up by the
parent's code.
""",
    },
    {
        "name": "Health",
        "description": "Service health monitoring endpoints.",
    },
    {
        "name": "Info",
        "description": "API information and discovery.",
    },
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Own the Database resource for the lifetime of the process."""
    settings: Settings = app.state.settings
    logger.info("Starting %s API v%s...", settings.app_name, settings.app_version)

    database = Database(settings.database_url, echo=settings.database_echo)
    try:
        await database.create_tables()
    except (OSError, OperationalError):
        logger.critical("Could not connect to the database.")
        await database.dispose()
        raise SystemExit(1) from None
    app.state.database = database
    logger.info("Database schema initialized successfully")

    yield

    logger.info("Shutting down %s API...", settings.app_name)
    await database.dispose()


def create_api_router() -> APIRouter:
    api_router = APIRouter()
    api_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    api_router.include_router(users_router, prefix="/users", tags=["Users"])
    api_router.include_router(address_router, prefix="/address", tags=["Address"])
    return api_router


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Registration and login backend for the PDAO office.",
        version=settings.app_version,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
        openapi_tags=OPENAPI_TAGS,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_api_router(), prefix=API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check(request: Request) -> HealthResponse:
        """Report liveness and whether the database answers."""
        connected = await request.app.state.database.ping()
        return HealthResponse(
            message=f"{settings.app_name} Server is running",
            database="connected" if connected else "disconnected",
        )

    @app.get("/", tags=["Info"])
    async def root() -> RootResponse:
        """API root endpoint with version information."""
        return RootResponse(
            message=f"{settings.app_name} Backend API",
            version=settings.app_version,
            endpoints=[
                "GET / - API Info",
                "GET /health - Health check",
                f"POST {API_PREFIX}/auth/register - Register user",
                f"POST {API_PREFIX}/auth/login - Login user",
                f"GET {API_PREFIX}/auth/me - Current user",
                f"GET|PATCH {API_PREFIX}/users/profile - Own profile",
                f"GET {API_PREFIX}/users/{{user_id}} - Look up user (staff)",
                f"GET {API_PREFIX}/address/regions - Address reference data",
            ],
        )

    return app
