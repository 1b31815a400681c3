"""Date formatting helpers shared by the submission pipeline and the CLI."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from .models import AttendancePayload, EventKind

DATE_PLACEHOLDER = "Select a date"


def format_payload_date(date: str, time: str) -> str:
    """Turn ``YYYY-MM-DD`` plus ``HH:MM:SS`` into the API's ``DD-MM-YYYY HH:MM:SS``.

    Components are used exactly as supplied. A date that does not split into
    three parts, or is not a string at all, is passed through unchanged.
    """
    parts = date.split("-") if isinstance(date, str) else []
    if len(parts) != 3:
        return f"{date} {time}"
    year, month, day = parts
    return f"{day}-{month}-{year} {time}"


def display_date(date: Optional[str]) -> str:
    if not date:
        return DATE_PLACEHOLDER
    parts = date.split("-")
    if len(parts) != 3:
        return date
    year, month, day = parts
    return f"{day}-{month}-{year}"


def build_payload(user_id: str, kind: EventKind, date: str, time: str) -> AttendancePayload:
    return AttendancePayload(
        user_id=user_id,
        kind=kind,
        occurred_at=format_payload_date(date, time),
    )


def today_string(now: Optional[datetime] = None) -> str:
    """Local date as ``YYYY-MM-DD``."""
    return (now or datetime.now()).strftime("%Y-%m-%d")


def is_valid_date(value: object) -> bool:
    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


__all__ = [
    "DATE_PLACEHOLDER",
    "build_payload",
    "display_date",
    "format_payload_date",
    "is_valid_date",
    "today_string",
]
