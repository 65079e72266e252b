"""Main FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from privateconnect.config import settings
from privateconnect.core.session_manager import SessionManager
from privateconnect.middleware.session import SessionMiddleware
from privateconnect.api.auth import router as auth_router
import logging

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manages application startup and shutdown events."""
    logger.info(f"Starting PrivateConnect login service against {settings.api_base_url}")
    app.state.session_manager = SessionManager()
    await app.state.session_manager.start()

    yield

    logger.info("Shutting down PrivateConnect login service")
    await app.state.session_manager.stop()


app = FastAPI(
    title="PrivateConnect Login Service",
    description="Login screen state for the PrivateConnect client",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan,
)

app.add_middleware(SessionMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router)


@app.get("/")
async def root():
    """Provides basic information about the running service."""
    return {
        "message": "PrivateConnect Login Service",
        "status": "running",
        "api_base_url": settings.api_base_url,
    }


@app.get("/health")
async def health_check():
    """Performs a health check of the service."""
    manager = getattr(app.state, "session_manager", None)
    return {
        "status": "healthy",
        "active_sessions": manager.active_sessions if manager else 0,
    }


@app.get("/sessions")
async def get_sessions():
    """(Admin) Gets information about all active screen sessions."""
    return app.state.session_manager.get_session_info()
