"""Shared fixtures: recording fakes for the login collaborators."""

import asyncio
from typing import List, Optional

import pytest

from privateconnect.core.login_flow import LoginFlowController
from privateconnect.models.auth import Credentials, SessionUser


class FakeBackend:
    """Records submit/refresh calls and fails or blocks on request."""

    def __init__(self):
        self.calls: List[str] = []
        self.submit_error: Optional[Exception] = None
        self.refresh_error: Optional[Exception] = None
        self.release: Optional[asyncio.Event] = None
        self.user = SessionUser(id=1, email="a@b.com", name="Ada")

    async def submit(self, credentials: Credentials):
        self.calls.append("submit")
        if self.release is not None:
            await self.release.wait()
        if self.submit_error is not None:
            raise self.submit_error
        return {"success": True, "userId": self.user.id}

    async def refresh(self):
        self.calls.append("refresh")
        if self.refresh_error is not None:
            raise self.refresh_error
        return self.user


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def controller(backend):
    return LoginFlowController(
        submit=backend.submit, refresh=backend.refresh, landing_route="/(tabs)"
    )
