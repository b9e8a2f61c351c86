"""Parsing helpers for timestamps, message payloads and comma-separated lists."""

from __future__ import annotations

import json
import re
from datetime import datetime, timedelta, timezone
from enum import Enum

STALE_HEARTBEAT_THRESHOLD = timedelta(seconds=30)

_RFC3339 = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})T(?P<time>\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<zone>Z|[+-]\d{2}:\d{2})"
)
_SQL_DATETIME = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2}) (?P<time>\d{2}:\d{2}:\d{2})(?:\.(?P<fraction>\d+))?"
)

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


class Verdict(str, Enum):
    """Health verdict for a registered agent."""

    OK = "OK"
    STALE = "STALE"
    DEAD = "DEAD"


def _build_datetime(date: str, clock: str, fraction: str | None, tz: timezone) -> datetime:
    micros = int((fraction or "0")[:6].ljust(6, "0"))
    base = datetime.strptime(f"{date} {clock}", "%Y-%m-%d %H:%M:%S")
    return base.replace(microsecond=micros, tzinfo=tz)


def _zone(text: str) -> timezone:
    if text == "Z":
        return timezone.utc
    sign = 1 if text[0] == "+" else -1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 23 or minutes > 59:
        raise ValueError(f"invalid zone offset: {text}")
    return timezone(sign * timedelta(hours=hours, minutes=minutes))


def parse_timestamp(raw: str) -> datetime:
    """Parse an RFC 3339 or ``YYYY-MM-DD HH:MM:SS`` timestamp into an aware UTC datetime."""
    if raw == "":
        raise ValueError("empty timestamp")

    match = _RFC3339.fullmatch(raw)
    if match is not None:
        try:
            parsed = _build_datetime(
                match["date"], match["time"], match["fraction"], _zone(match["zone"])
            )
        except ValueError:
            pass
        else:
            return parsed.astimezone(timezone.utc)

    match = _SQL_DATETIME.fullmatch(raw)
    if match is not None:
        try:
            return _build_datetime(match["date"], match["time"], match["fraction"], timezone.utc)
        except ValueError:
            pass

    raise ValueError(f"unsupported format: {raw}")


def heartbeat_verdict(pid_alive: bool, age: timedelta) -> Verdict:
    """Judge an agent by whether its process lives and how old its heartbeat is."""
    if not pid_alive:
        return Verdict.DEAD
    if age > STALE_HEARTBEAT_THRESHOLD:
        return Verdict.STALE
    return Verdict.OK


def _reject_constant(name: str) -> None:
    raise ValueError(f"invalid json constant {name}")


def build_payload(text: str) -> str:
    """Return a JSON payload: the input itself if it is JSON, else ``{"text": ...}``."""
    trimmed = text.strip()
    if trimmed.startswith(("{", "[")):
        try:
            json.loads(trimmed, parse_constant=_reject_constant)
        except ValueError as exc:
            raise ValueError("invalid json payload") from exc
        return trimmed

    encoded = json.dumps({"text": text}, separators=(",", ":"), ensure_ascii=False)
    for raw, escaped in _HTML_ESCAPES.items():
        encoded = encoded.replace(raw, escaped)
    return encoded


def split_csv_values(value: str) -> list[str]:
    """Split on commas, trim each item and drop empty ones."""
    return [item for item in (part.strip() for part in value.split(",")) if item]


def parse_capabilities(raw: str) -> list[str]:
    """Parse a comma-separated capability list."""
    if raw == "":
        return []
    return split_csv_values(raw)