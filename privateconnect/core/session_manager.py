"""Per-browser screen sessions, each with its own API client and login flow"""

import asyncio
import uuid
from typing import Callable, Dict, Optional, Any
from datetime import datetime
from privateconnect.config import settings
from privateconnect.core.api_client import PrivateConnectClient
from privateconnect.core.auth_session import AuthSession
from privateconnect.core.login_flow import LoginFlowController
import logging

logger = logging.getLogger(__name__)


class ScreenSession:
    """Represents the login screen state of one browser session"""

    def __init__(self, session_id: str, client: PrivateConnectClient):
        self.session_id = session_id
        self.client = client
        self.auth = AuthSession(client.me)
        self.controller = LoginFlowController(
            submit=client.login,
            refresh=self.auth.refresh,
            landing_route=settings.landing_route,
        )
        self.created_at = datetime.now()
        self.last_accessed = datetime.now()

    def touch(self):
        """Update last accessed time"""
        self.last_accessed = datetime.now()

    @property
    def is_authenticated(self) -> bool:
        return self.auth.is_authenticated

    @property
    def age_minutes(self) -> float:
        """Get session age in minutes"""
        return (datetime.now() - self.created_at).total_seconds() / 60

    @property
    def idle_minutes(self) -> float:
        """Get idle time in minutes"""
        return (datetime.now() - self.last_accessed).total_seconds() / 60


class SessionManager:
    """Manages screen sessions for browsers"""

    def __init__(
        self,
        client_factory: Callable[[], PrivateConnectClient] = PrivateConnectClient,
    ):
        """Initializes the session manager's state."""
        self._client_factory = client_factory
        self._sessions: Dict[str, ScreenSession] = {}
        self._lock = asyncio.Lock()
        self._cleanup_task: Optional[asyncio.Task] = None
        self.session_timeout_minutes = settings.session_timeout_minutes
        self.idle_timeout_minutes = settings.idle_timeout_minutes

    async def start(self):
        """Start session manager and cleanup task"""
        if not self._cleanup_task:
            self._cleanup_task = asyncio.create_task(self._cleanup_loop())
            logger.info("Session manager started")

    async def stop(self):
        """Stop session manager and close all sessions"""
        if self._cleanup_task:
            self._cleanup_task.cancel()
            try:
                await self._cleanup_task
            except asyncio.CancelledError:
                pass
            self._cleanup_task = None

        async with self._lock:
            for session in self._sessions.values():
                await self._close(session)
            self._sessions.clear()

        logger.info("Session manager stopped")

    async def get_or_create_session(
        self, session_id: Optional[str] = None
    ) -> ScreenSession:
        """Get existing session or create new one"""
        async with self._lock:
            if not session_id:
                session_id = str(uuid.uuid4())

            if session_id in self._sessions:
                session = self._sessions[session_id]
                session.touch()
                return session

            logger.info(f"Creating new session {session_id}")
            session = ScreenSession(session_id, self._client_factory())
            self._sessions[session_id] = session
            return session

    async def get_session(self, session_id: str) -> Optional[ScreenSession]:
        """Get existing session by ID"""
        async with self._lock:
            session = self._sessions.get(session_id)
            if session:
                session.touch()
            return session

    async def destroy_session(self, session_id: str):
        """Destroy a specific session"""
        async with self._lock:
            session = self._sessions.pop(session_id, None)
            if session:
                await self._close(session)
                logger.info(f"Destroyed session {session_id}")

    async def _close(self, session: ScreenSession):
        try:
            await session.client.aclose()
        except Exception as e:
            logger.error(f"Error closing session {session.session_id}: {e}")

    async def _cleanup_loop(self):
        """Background task to clean up expired sessions"""
        while True:
            try:
                await asyncio.sleep(60)
                await self._cleanup_expired_sessions()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Error in cleanup loop: {e}")

    async def _cleanup_expired_sessions(self):
        """Remove expired or idle sessions"""
        async with self._lock:
            expired_sessions = [
                session_id
                for session_id, session in self._sessions.items()
                if not session.controller.is_busy
                and (
                    session.age_minutes > self.session_timeout_minutes
                    or session.idle_minutes > self.idle_timeout_minutes
                )
            ]

            for session_id in expired_sessions:
                logger.info(f"Cleaning up expired session {session_id}")
                await self._close(self._sessions.pop(session_id))

    @property
    def active_sessions(self) -> int:
        """Get count of active sessions"""
        return len(self._sessions)

    def get_session_info(self) -> Dict[str, Any]:
        """Get information about all sessions"""
        return {
            "active_sessions": self.active_sessions,
            "sessions": [
                {
                    "session_id": session.session_id,
                    "age_minutes": round(session.age_minutes, 2),
                    "idle_minutes": round(session.idle_minutes, 2),
                    "is_authenticated": session.is_authenticated,
                    "refreshed_at": (
                        session.auth.refreshed_at.isoformat()
                        if session.auth.refreshed_at
                        else None
                    ),
                    "state": session.controller.state.value,
                    "created_at": session.created_at.isoformat(),
                }
                for session in self._sessions.values()
            ],
        }
