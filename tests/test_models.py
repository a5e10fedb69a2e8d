from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from call_reconciler.models import CallRecord, ConversationRecord, parse_timestamp

T = datetime(2025, 1, 6, 15, 30, 45, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "value",
    [
        "Mon, 06 Jan 2025 15:30:45 +0000",
        "2025-01-06T15:30:45Z",
        "2025-01-06T15:30:45+00:00",
        "2025-01-06 15:30:45",
        "Mon, 06 Jan 2025 07:30:45 -0800",
        1736177445,
        "1736177445",
        "1736177445.0",
    ],
)
def test_supported_timestamp_formats(value) -> None:
    assert parse_timestamp(value) == T


def test_naive_values_are_treated_as_utc() -> None:
    parsed = parse_timestamp(datetime(2025, 1, 6, 15, 30, 45))

    assert parsed == T
    assert parsed.tzinfo is not None


@pytest.mark.parametrize("value", [None, "", "   ", "not a date", "²", True, [], float("nan"), 1e20])
def test_unparseable_timestamps_become_none(value) -> None:
    assert parse_timestamp(value) is None


def test_twilio_call_with_rfc_2822_start_time() -> None:
    call = CallRecord.from_mapping(
        {"sid": "CA1", "start_time": "Mon, 06 Jan 2025 15:30:45 +0000", "from": "+12065551234", "duration": "42"}
    )

    assert call.id == "CA1"
    assert call.started_at == T
    assert call.caller_phone == "+12065551234"
    assert call.duration_seconds == 42


def test_conversation_falls_back_to_unix_start_time() -> None:
    conversation = ConversationRecord.from_mapping(
        {"conversation_id": "conv-1", "start_time_unix_secs": 1736177400, "analysis": {"transcript_summary": "Leak"}}
    )

    assert conversation.started_at == T - timedelta(seconds=45)
    assert conversation.summary == "Leak"
