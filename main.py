# main.py
"""
Chefini API - Main Application.

FastAPI app with MongoDB backend.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from database import Database
from settings import settings
from chefini.middleware.db_middleware import LazyDatabaseMiddleware
from chefini.middleware.security_headers import SecurityHeadersMiddleware
from chefini.utils.errors import ChefiniException

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Sentry for error tracking
if settings.SENTRY_DSN:
    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENVIRONMENT,
        traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            ),
        ],
    )
    logger.info(f"Sentry initialized ({settings.SENTRY_ENVIRONMENT})")
else:
    logger.warning("Sentry DSN not configured - error tracking disabled")

# Import routers
from chefini.routes import (
    auth,
    profile,
    recipes,
    shopping,
    batch,
    ai,
)

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    logger.info("Starting Chefini API...")
    # If this fails the lazy middleware retries on the first request
    try:
        await Database.connect_db(settings.DATABASE_URL, settings.DATABASE_NAME)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.warning(f"Failed to initialize database at startup: {e}")
        logger.warning("Database will be initialized lazily on first request")

    yield

    await Database.close_db()
    logger.info("Chefini API shutdown complete")


# Create FastAPI app
app = FastAPI(
    title="Chefini API",
    version=VERSION,
    description="Turns leftover ingredients into AI-generated recipes",
    lifespan=lifespan
)

app.add_middleware(SecurityHeadersMiddleware)

# Lazy database connection middleware
app.add_middleware(LazyDatabaseMiddleware)

# CORS middleware - Allow frontend origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Every failure is rendered as {"error": "<message>"}
@app.exception_handler(ChefiniException)
async def chefini_exception_handler(request: Request, exc: ChefiniException):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.detail}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = "Invalid request body"
    if errors:
        message = str(errors[0].get("msg", message)).removeprefix("Value error, ")
    return JSONResponse(status_code=400, content={"error": message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "An unexpected error occurred"})


# Health check
@app.get("/health")
async def health_check():
    """Health check endpoint - fast response without database dependency."""
    return {
        "status": "ok",
        "environment": settings.ENV,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": VERSION
    }


@app.get("/health/detailed")
async def health_check_detailed():
    """Detailed health check with MongoDB connectivity test."""
    try:
        mongo_ok = await Database.ping()
        return {
            "status": "ok" if mongo_ok else "degraded",
            "database": "mongodb",
            "database_connected": mongo_ok,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "version": VERSION
        }
    except Exception as e:
        logger.error(f"Health check failed: {str(e)}")
        return {
            "status": "error",
            "database": "mongodb",
            "database_connected": False,
            "environment": settings.ENV,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "error": str(e)
        }


# Include routers
app.include_router(auth.router, prefix="/auth", tags=["Authentication"])
app.include_router(profile.router, prefix="/profile", tags=["Profile"])
app.include_router(recipes.router, prefix="/recipes", tags=["Recipes"])
app.include_router(shopping.router, prefix="/shopping-list", tags=["Shopping List"])
app.include_router(batch.router, prefix="/batch", tags=["Batch Meal Prep"])
app.include_router(ai.router, tags=["AI"])


# Root endpoint
@app.get("/")
async def root():
    """API root endpoint."""
    return {
        "message": "Chefini API",
        "version": VERSION,
        "docs": "/docs",
        "health": "/health"
    }
