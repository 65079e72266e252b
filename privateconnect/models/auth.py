"""Pydantic models for the login flow and its HTTP surface."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, ConfigDict
from typing import Dict, Optional


class AttemptState(str, Enum):
    """Lifecycle of a single login attempt."""

    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ErrorKind(str, Enum):
    """Category of a failed attempt."""

    VALIDATION = "validation"
    SUBMISSION = "submission"
    REFRESH = "refresh"


class Credentials(BaseModel):
    """Raw values typed into the login form"""

    email: str = ""
    password: str = ""
    # Collected by the form, not wired into anything yet
    remember_me: bool = False


class AuthError(BaseModel):
    """Structured failure reported for one attempt."""

    kind: ErrorKind
    message: str
    fields: Dict[str, str] = {}


class AttemptResult(BaseModel):
    """Outcome handed back to the presentation layer after an attempt."""

    state: AttemptState
    errors: Dict[str, str] = {}
    error: Optional[AuthError] = None
    navigate_to: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.state == AttemptState.SUCCEEDED


class SessionUser(BaseModel):
    """The authenticated user as returned by ``auth.me``."""

    model_config = ConfigDict(extra="ignore")

    id: int
    email: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None


class LoginRequest(BaseModel):
    """Login request model"""

    # Plain strings: the form validator owns the error messages
    email: str = ""
    password: str = ""
    remember_me: bool = False


class LoginResponse(BaseModel):
    """Login response model"""

    success: bool
    state: AttemptState
    errors: Dict[str, str] = {}
    error_kind: Optional[ErrorKind] = None
    navigate_to: Optional[str] = None
    session_id: str
    email: Optional[str] = None


class AuthStatusResponse(BaseModel):
    """Authentication status of the current screen session"""

    authenticated: bool
    session_id: Optional[str] = None
    email: Optional[str] = None
    # State of the latest attempt; a failed retry does not end an existing session
    state: Optional[AttemptState] = None
    refreshed_at: Optional[datetime] = None
    message: Optional[str] = None
