# chefini/middleware/db_middleware.py
"""
Lazy Database Connection Middleware.

Connects MongoDB on the first request when the startup connection failed.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
import logging

from database import Database
from settings import settings

logger = logging.getLogger(__name__)

SKIP_PATHS = ("/", "/health", "/health/detailed")


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Middleware to ensure database connection before handling requests."""

    async def dispatch(self, request: Request, call_next):
        # Health checks must answer without a database
        if request.url.path in SKIP_PATHS:
            return await call_next(request)

        if not Database._initialized:
            try:
                logger.info("Lazy initializing MongoDB connection...")
                await Database.connect_db(
                    database_url=settings.DATABASE_URL,
                    database_name=settings.DATABASE_NAME
                )
            except Exception as e:
                # Routes that need the database fail on their own
                logger.error(f"Failed to initialize database: {e}")

        return await call_next(request)
