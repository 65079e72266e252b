"""FastAPI middleware that ties each browser to a screen session ID."""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Optional
from privateconnect.config import settings
import uuid

SESSION_HEADER = "X-Session-ID"


class SessionMiddleware(BaseHTTPMiddleware):
    """Middleware to handle session IDs"""

    def __init__(
        self,
        app,
        session_cookie_name: Optional[str] = None,
        max_age: Optional[int] = None,
    ):
        super().__init__(app)
        self.session_cookie_name = session_cookie_name or settings.session_cookie_name
        self.max_age = max_age or settings.session_cookie_max_age

    async def dispatch(self, request: Request, call_next):
        """Attaches the session ID to the request and issues the cookie for new sessions."""
        session_id = self._get_session_id(request)
        new_session = session_id is None
        request.state.session_id = session_id or str(uuid.uuid4())

        response = await call_next(request)

        if new_session and response.status_code < 400:
            response.set_cookie(
                key=self.session_cookie_name,
                value=request.state.session_id,
                max_age=self.max_age,
                httponly=True,
                samesite="lax",
            )
        response.headers[SESSION_HEADER] = request.state.session_id
        return response

    def _get_session_id(self, request: Request) -> Optional[str]:
        """Cookie first, then the header used by API clients"""
        return request.cookies.get(self.session_cookie_name) or request.headers.get(
            SESSION_HEADER
        )
