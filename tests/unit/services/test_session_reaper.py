import asyncio
from unittest.mock import AsyncMock

import pytest

from src.app.services.audit_sink import AuditTrail
from src.app.services.session_reaper import SessionReaper
from tests.fixtures.audit import RecordingAuditSink


@pytest.mark.asyncio
async def test_run_once_expires_and_audits_count(mock_uow, clock):
    # Arrange
    mock_uow.sessions.expire_all_before = AsyncMock(return_value=3)
    sink = RecordingAuditSink()
    reaper = SessionReaper(lambda: mock_uow, clock, AuditTrail(sink), interval=60)

    # Act
    count = await reaper.run_once()

    # Assert
    assert count == 3
    mock_uow.sessions.expire_all_before.assert_awaited_once_with(clock.now())
    mock_uow.commit.assert_awaited_once()
    assert len(sink.events) == 1
    assert sink.events[0]["event_type"] == "session_expired"
    assert sink.events[0]["details"]["count"] == 3


@pytest.mark.asyncio
async def test_run_once_with_nothing_to_reap_is_silent(mock_uow, clock):
    sink = RecordingAuditSink()
    reaper = SessionReaper(lambda: mock_uow, clock, AuditTrail(sink))

    count = await reaper.run_once()

    assert count == 0
    assert sink.events == []


@pytest.mark.asyncio
async def test_start_and_stop(mock_uow, clock):
    mock_uow.sessions.expire_all_before = AsyncMock(return_value=0)
    reaper = SessionReaper(lambda: mock_uow, clock, interval=0.01)

    await reaper.start()
    await asyncio.sleep(0.05)
    await reaper.stop()

    assert mock_uow.sessions.expire_all_before.await_count >= 1
    assert reaper._task is None


@pytest.mark.asyncio
async def test_loop_survives_a_failed_sweep(mock_uow, clock):
    mock_uow.sessions.expire_all_before = AsyncMock(
        side_effect=[RuntimeError("db down"), 0, 0, 0, 0, 0, 0, 0, 0, 0]
    )
    reaper = SessionReaper(lambda: mock_uow, clock, interval=0.01)

    await reaper.start()
    await asyncio.sleep(0.05)
    await reaper.stop()

    assert mock_uow.sessions.expire_all_before.await_count >= 2
