import logging

import pytest

from src.app.services.audit_sink import AuditTrail
from src.domain.entities import SecurityEventType
from tests.fixtures.audit import RecordingAuditSink


@pytest.mark.asyncio
async def test_record_forwards_event_to_sink():
    sink = RecordingAuditSink()
    trail = AuditTrail(sink)

    recorded = await trail.record(
        SecurityEventType.center_switch,
        success=True,
        actor_user_id=1,
        subject_user_id=1,
        center_id=2,
        details={"from_center_id": 1, "to_center_id": 2},
    )

    assert recorded is True
    assert sink.events == [
        {
            "event_type": "center_switch",
            "success": True,
            "actor_user_id": 1,
            "subject_user_id": 1,
            "center_id": 2,
            "failure_reason": None,
            "details": {"from_center_id": 1, "to_center_id": 2},
        }
    ]


@pytest.mark.asyncio
async def test_sink_failure_is_logged_not_raised(caplog):
    trail = AuditTrail(RecordingAuditSink(fail=True))

    with caplog.at_level(logging.WARNING, logger="src.app.services.audit_sink"):
        recorded = await trail.record(SecurityEventType.login, success=False)

    assert recorded is False
    assert "AUDIT_SINK_FAILURE" in caplog.text
    assert "login" in caplog.text
