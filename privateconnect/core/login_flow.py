"""Login attempt lifecycle: validate, submit, refresh the session, report."""

import logging
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Union
from privateconnect.core.errors import AuthFlowError
from privateconnect.core.validation import validate
from privateconnect.models.auth import (
    AttemptResult,
    AttemptState,
    AuthError,
    Credentials,
    ErrorKind,
)

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Login failed"

SubmitOperation = Callable[[Credentials], Awaitable[Any]]
RefreshOperation = Callable[[], Awaitable[Any]]


class LoginFlowController:
    """
    Drives one login form through its attempts.

    ``submit`` and ``refresh`` are the external operations: the first sends the
    credentials, the second loads the authenticated session once the
    credentials were accepted. Only one attempt can be in flight at a time.
    """

    def __init__(
        self,
        submit: SubmitOperation,
        refresh: RefreshOperation,
        landing_route: str = "/(tabs)",
    ):
        self._submit = submit
        self._refresh = refresh
        self.landing_route = landing_route
        self._state = AttemptState.IDLE
        self._errors: Dict[str, str] = {}
        self._last_error: Optional[AuthError] = None

    @property
    def state(self) -> AttemptState:
        return self._state

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def last_error(self) -> Optional[AuthError]:
        return self._last_error

    @property
    def is_busy(self) -> bool:
        return self._state == AttemptState.SUBMITTING

    def reset(self):
        """Return to idle and drop any reported errors."""
        if self.is_busy:
            return
        self._state = AttemptState.IDLE
        self._errors = {}
        self._last_error = None

    async def submit(
        self, credentials: Union[Credentials, Mapping[str, Any]]
    ) -> Optional[AttemptResult]:
        """
        Run one attempt. Returns ``None`` when an attempt is already in flight.
        """
        if self.is_busy:
            logger.info("Login attempt already in progress, ignoring submit")
            return None

        if not isinstance(credentials, Credentials):
            # Missing or None fields count as empty, as in validate()
            credentials = Credentials(
                email=credentials.get("email") or "",
                password=credentials.get("password") or "",
                remember_me=bool(credentials.get("remember_me")),
            )

        self._state = AttemptState.IDLE
        field_errors = validate(credentials)
        if field_errors:
            self._errors = field_errors
            self._last_error = AuthError(
                kind=ErrorKind.VALIDATION,
                message="; ".join(field_errors.values()),
                fields=field_errors,
            )
            return self._result()

        self._state = AttemptState.SUBMITTING
        self._errors = {}
        self._last_error = None
        if credentials.remember_me:
            logger.debug("remember_me requested; session persistence is not configurable")

        try:
            logger.info(f"Submitting credentials for {credentials.email}")
            try:
                await self._submit(credentials)
            except Exception as e:
                self._fail(e, ErrorKind.SUBMISSION)
                return self._result()

            try:
                await self._refresh()
            except Exception as e:
                self._fail(e, ErrorKind.REFRESH)
                return self._result()

            self._state = AttemptState.SUCCEEDED
            logger.info(f"Login successful for {credentials.email}")
            return self._result()
        finally:
            # Cancellation lands here with the state still set
            if self._state == AttemptState.SUBMITTING:
                self._state = AttemptState.IDLE

    def _fail(self, error: Exception, kind: ErrorKind):
        """Record a failed attempt. ``kind`` is the step that raised."""
        if isinstance(error, AuthFlowError):
            message = error.message or DEFAULT_FAILURE_MESSAGE
            logger.warning(f"Login failed ({kind.value}): {message}")
        else:
            message = str(error) or DEFAULT_FAILURE_MESSAGE
            logger.error(
                f"An unexpected error occurred during login: {error}", exc_info=True
            )

        self._state = AttemptState.FAILED
        self._errors = {"submit": message}
        self._last_error = AuthError(kind=kind, message=message)

    def _result(self) -> AttemptResult:
        return AttemptResult(
            state=self._state,
            errors=dict(self._errors),
            error=self._last_error,
            navigate_to=(
                self.landing_route if self._state == AttemptState.SUCCEEDED else None
            ),
        )
