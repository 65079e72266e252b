"""Tests for the screen session registry."""

from datetime import datetime, timedelta

import httpx
import pytest

from privateconnect.core.api_client import PrivateConnectClient
from privateconnect.core.session_manager import SessionManager


def make_manager():
    transport = httpx.MockTransport(lambda request: httpx.Response(404))
    return SessionManager(
        client_factory=lambda: PrivateConnectClient(
            base_url="http://api.test/api", transport=transport
        )
    )


@pytest.mark.asyncio
async def test_get_or_create_reuses_session():
    manager = make_manager()

    first = await manager.get_or_create_session("abc")
    second = await manager.get_or_create_session("abc")

    assert first is second
    assert manager.active_sessions == 1
    await manager.stop()


@pytest.mark.asyncio
async def test_generated_session_id():
    manager = make_manager()

    session = await manager.get_or_create_session()

    assert session.session_id
    assert await manager.get_session(session.session_id) is session
    await manager.stop()


@pytest.mark.asyncio
async def test_destroy_session():
    manager = make_manager()
    await manager.get_or_create_session("abc")

    await manager.destroy_session("abc")

    assert await manager.get_session("abc") is None
    assert manager.active_sessions == 0


@pytest.mark.asyncio
async def test_idle_sessions_are_cleaned_up():
    manager = make_manager()
    stale = await manager.get_or_create_session("stale")
    await manager.get_or_create_session("fresh")
    stale.last_accessed = datetime.now() - timedelta(
        minutes=manager.idle_timeout_minutes + 1
    )

    await manager._cleanup_expired_sessions()

    assert await manager.get_session("stale") is None
    assert await manager.get_session("fresh") is not None
    await manager.stop()


@pytest.mark.asyncio
async def test_session_info_reports_state():
    manager = make_manager()
    await manager.start()
    await manager.get_or_create_session("abc")

    info = manager.get_session_info()

    assert info["active_sessions"] == 1
    assert info["sessions"][0]["session_id"] == "abc"
    assert info["sessions"][0]["state"] == "idle"
    assert info["sessions"][0]["is_authenticated"] is False
    assert info["sessions"][0]["refreshed_at"] is None

    await manager.stop()
    assert manager.active_sessions == 0
