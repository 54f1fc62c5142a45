# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the HealthTrack API.
# create_application() builds the app with its own Database handle,
# middleware, exception handlers and routers.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main
# =============================================================================

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from starlette.concurrency import run_in_threadpool

from app.auth import routes as auth_routes
from app.config import Settings, settings as default_settings
from app.exceptions import register_exception_handlers
from app.middleware import RateLimitMiddleware, RequestLoggingMiddleware, SecurityHeadersMiddleware
from app.routers import articles, body_measurements, diaries, exercise_records, health, meals, users
from lib.database import Database, DatabaseUnavailableError

API_PREFIX = "/api/v1"
API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=default_settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: connect to the database (fixed retries), create tables;
      exit the process if the database never answers
    - Shutdown: runs after uvicorn has drained in-flight requests;
      closes pooled connections
    """
    config: Settings = app.state.settings
    database: Database = app.state.database

    logger.info(f"Starting HealthTrack API in {config.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {config.cors_origins_list}")

    try:
        await run_in_threadpool(
            database.connect,
            config.DB_CONNECT_MAX_RETRIES,
            config.DB_CONNECT_RETRY_DELAY,
        )
    except DatabaseUnavailableError as e:
        logger.critical(f"Database unavailable, shutting down: {e}")
        raise SystemExit(1) from e

    if config.DB_CREATE_TABLES:
        await run_in_threadpool(database.create_all)
        logger.info("Database tables ensured")

    yield

    logger.info("Shutting down HealthTrack API")
    database.dispose()


def create_application(
    settings: Optional[Settings] = None,
    database: Optional[Database] = None,
) -> FastAPI:
    """
    Build a configured FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment settings)
        database: Database handle (defaults to one built from DATABASE_URL)

    Returns:
        FastAPI: Ready-to-serve app; settings and database on app.state

    Usage:
        app = create_application()
        test_app = create_application(test_settings, Database("sqlite://"))
    """
    config = settings or default_settings
    if database is None:
        database = Database(config.DATABASE_URL, echo=config.DB_ECHO)

    app = FastAPI(
        title="HealthTrack API",
        description="""
## Personal Health Tracking API

Track meals, workouts, body measurements and journal entries, and read
curated health articles.

### Authentication

1. **Register** - `POST /api/v1/auth/register`
2. **Login** - `POST /api/v1/auth/login` returns an `accessToken`
3. Send `Authorization: Bearer <accessToken>` on every protected call

### Response Envelope

Every response has `success` and `message`; successful calls add `data`
and, for lists, `pagination`.
""",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Auth", "description": "Registration, login and token refresh"},
            {"name": "Users", "description": "User profiles and administration"},
            {"name": "Articles", "description": "Public health articles (ADMIN writes)"},
            {"name": "Diary", "description": "Private journal entries"},
            {"name": "Meals", "description": "Meal and nutrition log"},
            {"name": "Exercise Records", "description": "Workout log"},
            {"name": "Body Measurements", "description": "Weight and body fat log, trends"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = config
    app.state.database = database

    # =========================================================================
    # Middleware (last added runs first)
    # =========================================================================

    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=config.RATE_LIMIT_MAX_REQUESTS,
        window_seconds=config.RATE_LIMIT_WINDOW_SECONDS,
        exempt_paths={f"{API_PREFIX}/health", f"{API_PREFIX}/health/ready"},
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list if config.is_production else ["*"],
        allow_credentials=config.is_production,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routers
    # =========================================================================

    app.include_router(auth_routes.router, prefix=API_PREFIX)
    app.include_router(users.router, prefix=f"{API_PREFIX}/user", tags=["Users"])
    app.include_router(articles.router, prefix=f"{API_PREFIX}/article", tags=["Articles"])
    app.include_router(diaries.router, prefix=f"{API_PREFIX}/diary", tags=["Diary"])
    app.include_router(meals.router, prefix=f"{API_PREFIX}/meal", tags=["Meals"])
    app.include_router(
        exercise_records.router,
        prefix=f"{API_PREFIX}/exercise-record",
        tags=["Exercise Records"],
    )
    app.include_router(
        body_measurements.router,
        prefix=f"{API_PREFIX}/body-measurement",
        tags=["Body Measurements"],
    )
    app.include_router(health.router, prefix=API_PREFIX, tags=["Health"])

    @app.get("/", tags=["Root"])
    async def root():
        """
        Root endpoint - returns API info.
        """
        return {
            "name": "HealthTrack API",
            "version": API_VERSION,
            "docs": "/docs",
            "health": f"{API_PREFIX}/health",
        }

    return app


app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=default_settings.API_HOST,
        port=default_settings.API_PORT,
        reload=default_settings.is_development,
    )
