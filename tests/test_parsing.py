import json
from datetime import datetime, timedelta, timezone

import pytest

from agentcom.parsing import (
    STALE_HEARTBEAT_THRESHOLD,
    Verdict,
    build_payload,
    heartbeat_verdict,
    parse_capabilities,
    parse_timestamp,
    split_csv_values,
)


def test_parse_timestamp_rfc3339_utc():
    assert parse_timestamp("2024-01-02T03:04:05Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


def test_parse_timestamp_offset_is_converted_to_utc():
    shifted = parse_timestamp("2024-01-02T03:04:05+02:00")
    assert shifted == parse_timestamp("2024-01-02T01:04:05Z")
    assert shifted.utcoffset() == timedelta(0)


def test_parse_timestamp_fractional_seconds():
    parsed = parse_timestamp("2024-01-02T03:04:05.123456789Z")
    assert parsed.replace(microsecond=0) == parse_timestamp("2024-01-02T03:04:05Z")
    assert parsed > parse_timestamp("2024-01-02T03:04:05Z")


def test_parse_timestamp_sql_layout_is_utc():
    assert parse_timestamp("2024-01-02 03:04:05") == parse_timestamp("2024-01-02T03:04:05Z")


def test_parse_timestamp_empty():
    with pytest.raises(ValueError, match="empty timestamp"):
        parse_timestamp("")


@pytest.mark.parametrize("raw", ["yesterday", "2024-13-40T00:00:00Z", "2024-01-02", "2024-01-02T03:04:05"])
def test_parse_timestamp_unsupported(raw):
    with pytest.raises(ValueError, match="unsupported format"):
        parse_timestamp(raw)


def test_heartbeat_verdict_dead_wins():
    assert heartbeat_verdict(False, timedelta(0)) == Verdict.DEAD
    assert heartbeat_verdict(False, timedelta(hours=1)) == Verdict.DEAD


def test_heartbeat_verdict_threshold_boundary():
    assert heartbeat_verdict(True, STALE_HEARTBEAT_THRESHOLD) == Verdict.OK
    assert heartbeat_verdict(True, STALE_HEARTBEAT_THRESHOLD + timedelta(seconds=1)) == Verdict.STALE
    assert heartbeat_verdict(True, timedelta(seconds=1)) == "OK"


def test_build_payload_wraps_text():
    assert build_payload("hello") == '{"text":"hello"}'


def test_build_payload_keeps_json_trimmed():
    assert build_payload('  {"text":"hello"}  ') == '{"text":"hello"}'
    assert build_payload("[1, 2]") == "[1, 2]"


def test_build_payload_escapes_html_and_round_trips():
    payload = build_payload("<b> & co")
    assert "<" not in payload and "&" not in payload
    assert json.loads(payload) == {"text": "<b> & co"}


@pytest.mark.parametrize("raw", ["{not json", "[1,", "{\"a\": NaN}"])
def test_build_payload_invalid_json(raw):
    with pytest.raises(ValueError, match="invalid json payload"):
        build_payload(raw)


def test_parse_capabilities():
    assert parse_capabilities("") == []
    assert parse_capabilities(" send , recv,, ") == ["send", "recv"]


def test_split_csv_values():
    assert split_csv_values("a, b ,,c") == ["a", "b", "c"]
    assert split_csv_values(" , ") == []