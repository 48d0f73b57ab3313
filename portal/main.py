"""
Main FastAPI application entry point.
Configures the application, middleware, and includes routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from . import __version__
from .auth.router import router as auth_router
from .auth.service import purge_expired_sessions
from .config import settings
from .core.bootstrap import bootstrap_admin_if_needed
from .core.middleware import setup_middlewares
from .database import Base, SessionLocal, engine
from .exceptions import register_exception_handlers
from .medical_records.router import router as medical_records_router
from .models import *  # noqa: F401,F403 - register every table on Base.metadata
from .profiles.router import router as profiles_router
from .users.router import router as users_router

# Configure logging
logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Startup: create tables, bootstrap the first admin, purge expired sessions.
    """
    logger.info("Starting Healthcare Portal API...")
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        bootstrap_admin_if_needed(db)
        if settings.purge_expired_sessions_on_startup:
            purge_expired_sessions(db)
    except Exception as e:
        logger.error(f"Startup housekeeping failed: {str(e)}")
    finally:
        db.close()

    yield

# Create FastAPI application
app = FastAPI(
    title="Healthcare Portal API",
    description="Authentication, profiles and medical record reports for the healthcare portal",
    version=__version__,
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["Authentication"])
app.include_router(profiles_router, tags=["Profiles"])
app.include_router(users_router, tags=["Users"])
app.include_router(medical_records_router, tags=["Medical Records"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to Healthcare Portal API", "version": __version__}

# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy", "database": "connected"}
