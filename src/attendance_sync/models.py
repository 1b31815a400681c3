"""Domain objects for attendance submissions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum
from typing import Dict, Optional, Union


class EventKind(IntEnum):
    """Attendance event type; the value is the wire encoding of typeCheckInOut."""

    CHECK_IN = 1
    CHECK_OUT = 2

    @property
    def label(self) -> str:
        return "Check-in" if self is EventKind.CHECK_IN else "Check-out"

    @classmethod
    def parse(cls, value: str) -> "EventKind":
        """Accept ``in``/``out``, ``check-in``/``check-out`` or the numeric code."""
        normalized = str(value).strip().lower().replace("_", "-")
        if normalized in {"1", "in", "check-in", "checkin"}:
            return cls.CHECK_IN
        if normalized in {"2", "out", "check-out", "checkout"}:
            return cls.CHECK_OUT
        raise ValueError(f"Unknown event kind: {value!r}")


@dataclass(frozen=True)
class Credentials:
    """Secrets sent with every submission. Both values stay out of repr()."""

    basic_auth: str = field(default="", repr=False)
    access_token: str = field(default="", repr=False)

    @property
    def complete(self) -> bool:
        return bool(self.basic_auth) and bool(self.access_token)


@dataclass(frozen=True)
class AttendancePayload:
    """Value object describing one attendance event as the API expects it."""

    user_id: str
    kind: EventKind
    occurred_at: str

    def to_params(self) -> Dict[str, str]:
        return {
            "userId": self.user_id,
            "typeCheckInOut": str(int(self.kind)),
            "dateCheckInOut": self.occurred_at,
        }


@dataclass(frozen=True)
class LogEntry:
    """History record of one submission attempt."""

    id: str
    payload: AttendancePayload
    created_at: datetime
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None


class FailureReason(str, Enum):
    INVALID_TIME = "invalid_time"
    INVALID_DATE = "invalid_date"
    MISSING_CREDENTIALS = "missing_credentials"
    HTTP_ERROR = "http_error"
    APPLICATION_ERROR = "application_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class Success:
    payload: AttendancePayload
    time: str
    kind: EventKind


@dataclass(frozen=True)
class Failure:
    reason: FailureReason
    message: str
    payload: Optional[AttendancePayload] = None
    status: Optional[int] = None


Outcome = Union[Success, Failure]


__all__ = [
    "AttendancePayload",
    "Credentials",
    "EventKind",
    "Failure",
    "FailureReason",
    "LogEntry",
    "Outcome",
    "Success",
]
