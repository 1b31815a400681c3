"""Single attendance submission: preconditions, request, outcome, history."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .client import ApiResponse, AttendanceTransport
from .clock import is_valid_time
from .formatting import build_payload, is_valid_date
from .history import HistoryLog
from .logger import get_logger
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

INVALID_TIME_MESSAGE = "Time must use HH:MM:SS, for example 08:30:00."
INVALID_DATE_MESSAGE = "Date must use YYYY-MM-DD, for example 2024-03-05."
MISSING_CREDENTIALS_MESSAGE = "Configure Basic Auth and token before submitting."
REJECTED_MESSAGE = "Attendance submission failed."
CONNECTIVITY_MESSAGE = "Network problem while submitting attendance."


@dataclass(frozen=True)
class SubmissionContext:
    """Everything one submission needs; built fresh by the caller each time."""

    user_id: str
    username: str
    kind: EventKind
    date: str
    time: str
    credentials: Credentials


def _new_entry_id() -> str:
    return uuid.uuid4().hex[:12]


class SubmissionService:
    """Turn a :class:`SubmissionContext` into exactly one :class:`Outcome`.

    ``submit`` never raises. Each call performs at most one request, and
    every outcome is recorded in the history. Concurrent calls are not
    deduplicated; their entries land in completion order.
    """

    def __init__(
        self,
        transport: AttendanceTransport,
        history: Optional[HistoryLog] = None,
        *,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], datetime] = datetime.now,
        id_factory: Callable[[], str] = _new_entry_id,
    ) -> None:
        self._transport = transport
        self.history = history if history is not None else HistoryLog()
        self._logger = logger or get_logger("service")
        self._clock = clock
        self._id_factory = id_factory

    async def submit(self, ctx: SubmissionContext) -> Outcome:
        payload = build_payload(ctx.user_id, ctx.kind, ctx.date, ctx.time)
        outcome = await self._attempt(ctx, payload)
        self._record(payload, outcome)
        return outcome

    async def _attempt(self, ctx: SubmissionContext, payload: AttendancePayload) -> Outcome:
        if not is_valid_time(ctx.time):
            self._logger.warning("Refusing submission with invalid time %r", ctx.time)
            return Failure(FailureReason.INVALID_TIME, INVALID_TIME_MESSAGE, payload)
        if not ctx.credentials.complete:
            self._logger.warning("Basic Auth or token is not configured")
            return Failure(FailureReason.MISSING_CREDENTIALS, MISSING_CREDENTIALS_MESSAGE, payload)
        if not is_valid_date(ctx.date):
            self._logger.warning("Refusing submission with invalid date %r", ctx.date)
            return Failure(FailureReason.INVALID_DATE, INVALID_DATE_MESSAGE, payload)

        self._logger.info(
            "Submitting %s for user %s at %s",
            ctx.kind.label,
            ctx.user_id,
            payload.occurred_at,
        )
        try:
            response = await self._transport.post_attendance(
                payload,
                username=ctx.username,
                credentials=ctx.credentials,
            )
        except Exception as exc:  # noqa: BLE001
            self._logger.warning("Attendance request failed: %s", exc)
            return Failure(FailureReason.TRANSPORT_ERROR, CONNECTIVITY_MESSAGE, payload)

        return self._interpret(ctx, payload, response)

    def _interpret(
        self,
        ctx: SubmissionContext,
        payload: AttendancePayload,
        response: ApiResponse,
    ) -> Outcome:
        if not response.ok:
            self._logger.warning("Server answered HTTP %s", response.status)
            return Failure(
                FailureReason.HTTP_ERROR,
                f"HTTP {response.status}: the server rejected the submission.",
                payload,
                status=response.status,
            )

        body = response.body
        if not isinstance(body, dict):
            self._logger.warning("Unexpected response body: %r", body)
            return Failure(
                FailureReason.TRANSPORT_ERROR,
                CONNECTIVITY_MESSAGE,
                payload,
                status=response.status,
            )

        code = body.get("resultCode")
        if not isinstance(code, bool) and code == 1:
            self._logger.info("%s accepted at %s", ctx.kind.label, payload.occurred_at)
            return Success(payload=payload, time=ctx.time, kind=ctx.kind)

        message = body.get("message") or REJECTED_MESSAGE
        self._logger.warning("Server rejected %s: %s", ctx.kind.label, message)
        return Failure(
            FailureReason.APPLICATION_ERROR,
            str(message),
            payload,
            status=response.status,
        )

    def _record(self, payload: AttendancePayload, outcome: Outcome) -> None:
        entry = LogEntry(
            id=self._id_factory(),
            payload=payload,
            created_at=self._clock(),
            error=None if isinstance(outcome, Success) else outcome.message,
        )
        self.history.record(entry)


__all__ = [
    "CONNECTIVITY_MESSAGE",
    "INVALID_DATE_MESSAGE",
    "INVALID_TIME_MESSAGE",
    "MISSING_CREDENTIALS_MESSAGE",
    "REJECTED_MESSAGE",
    "SubmissionContext",
    "SubmissionService",
]
