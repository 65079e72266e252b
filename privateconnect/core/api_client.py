"""Async client for the PrivateConnect tRPC API."""

import json
import httpx
import logging
from typing import Any, Dict, Optional
from privateconnect.config import settings
from privateconnect.core.errors import AuthFlowError, RefreshError, SubmissionError
from privateconnect.models.auth import Credentials, SessionUser

logger = logging.getLogger(__name__)


class PrivateConnectClient:
    """
    Talks to the tRPC endpoints under ``{api_base_url}/trpc``.

    Each instance keeps its own cookie jar, so the session cookie set by
    ``auth.login`` is sent back on ``auth.me`` and ``auth.logout``.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=f"{self.base_url}/trpc",
            timeout=timeout if timeout is not None else settings.request_timeout,
            transport=transport,
        )

    async def login(self, credentials: Credentials) -> Dict[str, Any]:
        """Submit credentials through the ``auth.login`` mutation."""
        payload = {"email": credentials.email, "password": credentials.password}
        return await self._mutation("auth.login", payload, SubmissionError)

    async def me(self) -> Optional[SessionUser]:
        """Fetch the user bound to the current session cookie, if any."""
        data = await self._query("auth.me", {}, RefreshError)
        if not data:
            return None
        return SessionUser.model_validate(data)

    async def logout(self) -> None:
        """Clear the session cookie on the server."""
        await self._mutation("auth.logout", None, AuthFlowError)
        self._client.cookies.clear()

    async def aclose(self):
        await self._client.aclose()

    async def _mutation(
        self, procedure: str, payload: Any, error_cls: type[AuthFlowError]
    ) -> Any:
        body = {"0": {"json": payload}}
        try:
            response = await self._client.post(
                f"/{procedure}", params={"batch": "1"}, json=body
            )
        except httpx.HTTPError as e:
            logger.error(f"Request to {procedure} failed: {e}")
            raise error_cls("Unable to reach the server. Please try again.") from e
        return self._unwrap(procedure, response, error_cls)

    async def _query(
        self, procedure: str, payload: Any, error_cls: type[AuthFlowError]
    ) -> Any:
        params = {"batch": "1", "input": json.dumps({"0": {"json": payload}})}
        try:
            response = await self._client.get(f"/{procedure}", params=params)
        except httpx.HTTPError as e:
            logger.error(f"Request to {procedure} failed: {e}")
            raise error_cls("Unable to reach the server. Please try again.") from e
        return self._unwrap(procedure, response, error_cls)

    def _unwrap(
        self, procedure: str, response: httpx.Response, error_cls: type[AuthFlowError]
    ) -> Any:
        """Extract the first batch entry, raising ``error_cls`` on an error entry."""
        try:
            body = response.json()
        except ValueError:
            logger.error(
                f"{procedure} returned non-JSON response (status {response.status_code})"
            )
            raise error_cls(None)

        entry = body[0] if isinstance(body, list) and body else body
        if not isinstance(entry, dict):
            raise error_cls(None)

        if "error" in entry:
            error = entry["error"] or {}
            message = (error.get("json") or {}).get("message") or error.get("message")
            logger.info(f"{procedure} returned an error: {message}")
            raise error_cls(message)

        if response.status_code >= 400:
            raise error_cls(None)

        return ((entry.get("result") or {}).get("data") or {}).get("json")
