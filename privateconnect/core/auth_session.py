"""Holds the authenticated user for one client and reloads it on demand."""

import logging
from datetime import datetime
from typing import Awaitable, Callable, Optional
from privateconnect.core.errors import RefreshError
from privateconnect.models.auth import SessionUser

logger = logging.getLogger(__name__)


class AuthSession:
    """The current-user state that the login flow refreshes."""

    def __init__(self, fetch_user: Callable[[], Awaitable[Optional[SessionUser]]]):
        self._fetch_user = fetch_user
        self.current_user: Optional[SessionUser] = None
        self.refreshed_at: Optional[datetime] = None

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    async def refresh(self) -> SessionUser:
        """Reload the current user. Raises ``RefreshError`` if there is none."""
        try:
            user = await self._fetch_user()
        except RefreshError:
            self.current_user = None
            raise
        except Exception as e:
            logger.error(f"Error refreshing session: {e}", exc_info=True)
            self.current_user = None
            raise RefreshError("Unable to load your session. Please try again.") from e

        if user is None:
            self.current_user = None
            raise RefreshError("Session could not be established")

        self.current_user = user
        self.refreshed_at = datetime.now()
        logger.info(f"Session refreshed for user {user.id}")
        return user

    def clear(self):
        """Forget the current user."""
        self.current_user = None
        self.refreshed_at = None
