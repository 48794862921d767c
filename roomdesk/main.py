"""FastAPI application initialization."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from roomdesk.api.auth import router as auth_router
from roomdesk.api.bookings import router as bookings_router
from roomdesk.api.errors import register_exception_handlers
from roomdesk.api.meeting_rooms import router as meeting_rooms_router
from roomdesk.api.middleware import CorrelationIdMiddleware
from roomdesk.api.users import router as users_router
from roomdesk.config import get_settings
from roomdesk.services.logging_service import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger("main")

    # Startup aborts if the database is unreachable
    from roomdesk.database import close_database, init_database, run_migrations

    await init_database()
    await run_migrations()
    logger.info("database_initialized")

    logger.info(
        "application_started",
        log_level=settings.log_level,
        access_token_expire_minutes=settings.access_token_expire_minutes,
        refresh_token_expire_days=settings.refresh_token_expire_days,
    )

    yield

    await close_database()
    logger.info("application_shutdown")


app = FastAPI(
    title="roomdesk - Meeting Room Booking API",
    description="Meeting room booking with JWT sessions and admin-managed rooms",
    version="0.1.0",
    lifespan=lifespan,
)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Correlation ID middleware for request tracking and observability
app.add_middleware(CorrelationIdMiddleware)


@app.get("/health")
async def health() -> dict:
    """Report API and database health."""
    from roomdesk.database import health_check

    database_ok = await health_check()
    return {
        "status": "success" if database_ok else "error",
        "database": "ok" if database_ok else "unavailable",
    }


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(meeting_rooms_router)
app.include_router(bookings_router)
