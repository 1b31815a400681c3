"""Attendance submission pipeline for the HR check-in/check-out API."""

from .clock import CandidateTimes, is_valid_time, sample
from .credentials import CredentialStore
from .formatting import build_payload, display_date, format_payload_date
from .history import HistoryLog
from .models import (
    AttendancePayload,
    Credentials,
    EventKind,
    Failure,
    FailureReason,
    LogEntry,
    Outcome,
    Success,
)
from .service import SubmissionContext, SubmissionService
from .session import Session

__all__ = [
    "AttendancePayload",
    "CandidateTimes",
    "CredentialStore",
    "Credentials",
    "EventKind",
    "Failure",
    "FailureReason",
    "HistoryLog",
    "LogEntry",
    "Outcome",
    "Session",
    "SubmissionContext",
    "SubmissionService",
    "Success",
    "build_payload",
    "display_date",
    "format_payload_date",
    "is_valid_time",
    "sample",
]
