"""Exceptions raised by the login collaborators."""

from typing import Optional
from privateconnect.models.auth import ErrorKind


class AuthFlowError(Exception):
    """Base class for failures the login controller knows how to report."""

    kind: Optional[ErrorKind] = None

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "")
        self.message = message


class SubmissionError(AuthFlowError):
    """The credential submission was rejected or could not be delivered."""

    kind = ErrorKind.SUBMISSION


class RefreshError(AuthFlowError):
    """Credentials were accepted but the session could not be loaded."""

    kind = ErrorKind.REFRESH
