"""Per-login state around the submission service."""

from __future__ import annotations

import random
from typing import Optional, Tuple

from .clock import CandidateTimes, is_valid_time
from .credentials import CredentialStore
from .errors import SubmissionInProgressError
from .formatting import today_string
from .logger import get_logger
from .models import Credentials, EventKind, Failure, FailureReason, LogEntry, Outcome, Success
from .service import SubmissionContext, SubmissionService

LOGGER = get_logger("session")


class Session:
    """State of one signed-in user between login and logout.

    Credentials are read from the store once, when the session starts, and
    written back only through :meth:`save_credentials`. The editable time is
    reseeded from the candidate times whenever the kind changes or the
    candidates are redrawn.
    """

    def __init__(
        self,
        user_id: str,
        username: str,
        *,
        service: SubmissionService,
        credential_store: CredentialStore,
        date: Optional[str] = None,
        kind: EventKind = EventKind.CHECK_IN,
        rng: Optional[random.Random] = None,
    ) -> None:
        user_id = (user_id or "").strip()
        username = (username or "").strip()
        if not user_id or not username:
            raise ValueError("Both user ID and username are required")
        self.user_id = user_id
        self.username = username
        self._service = service
        self._store = credential_store
        self.credentials: Credentials = credential_store.load()
        self._kind = kind
        self.candidates = CandidateTimes(date or today_string(), rng=rng)
        self.custom_time = ""
        self.time_editable = False
        self.is_submitting = False
        self.last_success: Optional[Success] = None
        self.last_error: Optional[str] = None
        self.settings_requested = False
        self._reseed_time()

    @property
    def date(self) -> str:
        return self.candidates.date

    @property
    def kind(self) -> EventKind:
        return self._kind

    @property
    def history(self) -> Tuple[LogEntry, ...]:
        return self._service.history.entries

    @property
    def time_is_valid(self) -> bool:
        return is_valid_time(self.custom_time)

    def _reseed_time(self) -> None:
        self.custom_time = self.candidates.for_kind(self._kind)
        self.time_editable = False

    def select_date(self, date: str) -> None:
        if self.candidates.on_date_changed(date):
            self._reseed_time()

    def select_kind(self, kind: EventKind) -> None:
        self._kind = kind
        self._reseed_time()

    def edit_time(self, value: str) -> bool:
        """Replace the proposed time; returns whether the new value is valid."""
        self.custom_time = value.strip()
        self.time_editable = True
        return self.time_is_valid

    def save_credentials(self, credentials: Credentials) -> None:
        self._store.save(credentials)
        self.credentials = credentials
        self.settings_requested = False
        LOGGER.info("Credentials updated")

    async def submit(self) -> Outcome:
        if self.is_submitting:
            raise SubmissionInProgressError("A submission is already in flight")
        self.is_submitting = True
        self.last_error = None
        self.last_success = None
        ctx = SubmissionContext(
            user_id=self.user_id,
            username=self.username,
            kind=self._kind,
            date=self.date,
            time=self.custom_time,
            credentials=self.credentials,
        )
        try:
            outcome = await self._service.submit(ctx)
        finally:
            self.is_submitting = False

        if isinstance(outcome, Success):
            self.last_success = outcome
            self.candidates.on_submission_completed()
            self._reseed_time()
        else:
            self._handle_failure(outcome)
        return outcome

    def _handle_failure(self, failure: Failure) -> None:
        self.last_error = failure.message
        if failure.reason is FailureReason.MISSING_CREDENTIALS:
            self.settings_requested = True


__all__ = ["Session"]
