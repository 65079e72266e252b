"""API endpoints that drive the login screen of a browser session."""

from fastapi import APIRouter, Depends, HTTPException, Request
from typing import Dict, Any
from privateconnect.core.errors import AuthFlowError
from privateconnect.core.session_manager import SessionManager
from privateconnect.models.auth import (
    AuthStatusResponse,
    Credentials,
    LoginRequest,
    LoginResponse,
)
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def get_session_manager(request: Request) -> SessionManager:
    """Session registry created in the application lifespan."""
    return request.app.state.session_manager


def _session_id(request: Request) -> str:
    session_id = getattr(request.state, "session_id", None)
    if not session_id:
        raise HTTPException(status_code=400, detail="No session ID found")
    return session_id


@router.post("/login", response_model=LoginResponse)
async def login(
    request: Request,
    login_data: LoginRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    """Run one login attempt for the current session"""
    session = await manager.get_or_create_session(_session_id(request))

    result = await session.controller.submit(
        Credentials(
            email=login_data.email,
            password=login_data.password,
            remember_me=login_data.remember_me,
        )
    )
    if result is None:
        raise HTTPException(
            status_code=409, detail="A login attempt is already in progress"
        )

    user = session.auth.current_user
    return LoginResponse(
        success=result.succeeded,
        state=result.state,
        errors=result.errors,
        error_kind=result.error.kind if result.error else None,
        navigate_to=result.navigate_to,
        session_id=session.session_id,
        email=user.email if result.succeeded and user else None,
    )


@router.get("/status", response_model=AuthStatusResponse)
async def auth_status(
    request: Request, manager: SessionManager = Depends(get_session_manager)
):
    """Check authentication status from the session state."""
    session_id = getattr(request.state, "session_id", None)

    if not session_id:
        return AuthStatusResponse(authenticated=False, message="No session")

    session = await manager.get_session(session_id)
    if not session:
        return AuthStatusResponse(
            authenticated=False, session_id=session_id, message="Session not found"
        )

    # authenticated comes from the refreshed user, not from the latest attempt:
    # a rejected retry leaves an established session in place until logout
    user = session.auth.current_user
    return AuthStatusResponse(
        authenticated=session.is_authenticated,
        session_id=session_id,
        email=user.email if user else None,
        state=session.controller.state,
        refreshed_at=session.auth.refreshed_at,
    )


@router.post("/logout")
async def logout(
    request: Request, manager: SessionManager = Depends(get_session_manager)
) -> Dict[str, Any]:
    """
    Logout upstream and forget the current user. The screen session is kept so
    the form can be used again straight away.
    """
    session_id = _session_id(request)

    session = await manager.get_session(session_id)
    if not session:
        return {
            "success": True,
            "message": "No active session to clear.",
            "session_id": session_id,
        }

    try:
        await session.client.logout()
    except AuthFlowError as e:
        logger.warning(f"Upstream logout failed for session {session_id}: {e.message}")

    session.auth.clear()
    session.controller.reset()

    return {
        "success": True,
        "message": "You are now logged out.",
        "session_id": session_id,
    }
