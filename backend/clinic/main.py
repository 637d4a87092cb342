"""
Clinic Records Backend - FastAPI Application

Staff accounts, login sessions and the admin dashboard API for a clinic
record-keeping system.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from clinic.config import get_settings
from clinic.core.log import setup_logging
from clinic.database.connections import close_connections, get_database
from clinic.database.indexes import create_indexes
from clinic.routers import auth, health, users
from clinic.services.user_service import build_user_service

logger = logging.getLogger("clinic")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Startup:
    - Configure logging
    - Create indexes
    - Ensure the default admin account exists

    Shutdown:
    - Close database connections
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)
    logger.info("Starting up Clinic Records Backend (%s)...", settings.env.value)

    db = await get_database()
    await create_indexes(db)
    logger.info("Indexes created")

    await build_user_service(db, settings).ensure_admin()

    yield

    logger.info("Shutting down Clinic Records Backend...")
    await close_connections()
    logger.info("Database connections closed")


app = FastAPI(
    title="Clinic Records API",
    description="""
## Clinic Records API

### Authentication
`POST /auth/login` sets an HttpOnly `remember_token` cookie. Every other
route except health checks requires it. `POST /auth/logout` rotates the
token, which invalidates the session everywhere it was used.
    """,
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "name": "Clinic Records API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
