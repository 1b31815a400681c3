import asyncio
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from attendance_sync.client import ApiResponse
from attendance_sync.clock import WINDOWS
from attendance_sync.credentials import CredentialStore
from attendance_sync.errors import SubmissionInProgressError
from attendance_sync.history import HistoryLog
from attendance_sync.models import Credentials, EventKind, FailureReason, Success
from attendance_sync.service import SubmissionService
from attendance_sync.session import Session

IN_START, IN_END = WINDOWS[EventKind.CHECK_IN]
OUT_START, OUT_END = WINDOWS[EventKind.CHECK_OUT]


class StubTransport:
    def __init__(self, response: ApiResponse):
        self.response = response
        self.calls = []

    async def post_attendance(self, payload, *, username, credentials):
        self.calls.append((payload, username))
        return self.response


def _rng(*values):
    rng = MagicMock()
    rng.randint.side_effect = list(values)
    return rng


def _session(tmp_path: Path, *, response=None, rng=None, credentials=None) -> Session:
    store = CredentialStore(tmp_path / "creds.json")
    if credentials is not None:
        store.save(credentials)
    transport = StubTransport(response or ApiResponse(status=200, body={"resultCode": 1}))
    service = SubmissionService(transport, HistoryLog(10))
    return Session(
        "BO-9988",
        "jdoe",
        service=service,
        credential_store=store,
        date="2024-03-05",
        rng=rng or _rng(IN_START, OUT_START, IN_END, OUT_END, IN_START, OUT_START),
    )


def test_identity_is_required(tmp_path: Path) -> None:
    service = SubmissionService(StubTransport(ApiResponse(status=200)))
    with pytest.raises(ValueError):
        Session("", "jdoe", service=service, credential_store=CredentialStore(tmp_path / "c.json"))


def test_credentials_loaded_once_at_start(tmp_path: Path) -> None:
    session = _session(tmp_path, credentials=Credentials("basic", "token"))

    CredentialStore(tmp_path / "creds.json").save(Credentials("changed", "elsewhere"))

    assert session.credentials == Credentials("basic", "token")


def test_kind_toggle_reuses_sampled_values(tmp_path: Path) -> None:
    session = _session(tmp_path)
    assert session.custom_time == "08:13:00"

    session.select_kind(EventKind.CHECK_OUT)
    assert session.custom_time == "17:33:00"

    session.select_kind(EventKind.CHECK_IN)
    assert session.custom_time == "08:13:00"


def test_kind_toggle_discards_edited_time(tmp_path: Path) -> None:
    session = _session(tmp_path)
    assert session.edit_time("09:00:00") is True
    assert session.time_editable is True

    session.select_kind(EventKind.CHECK_IN)

    assert session.custom_time == "08:13:00"
    assert session.time_editable is False


def test_date_change_resamples(tmp_path: Path) -> None:
    session = _session(tmp_path)

    session.select_date("2024-03-05")
    assert session.custom_time == "08:13:00"

    session.select_date("2024-03-06")
    assert session.date == "2024-03-06"
    assert session.custom_time == "08:29:59"


def test_edit_time_reports_validity(tmp_path: Path) -> None:
    session = _session(tmp_path)

    assert session.edit_time("8:30") is False
    assert session.time_is_valid is False


def test_successful_submit_resamples_and_logs(tmp_path: Path) -> None:
    session = _session(tmp_path, credentials=Credentials("basic", "token"))

    outcome = asyncio.run(session.submit())

    assert isinstance(outcome, Success)
    assert session.last_success == outcome
    assert session.last_error is None
    assert session.is_submitting is False
    assert session.custom_time == "08:29:59"
    assert session.history[0].payload.occurred_at == "05-03-2024 08:13:00"


def test_missing_credentials_requests_settings(tmp_path: Path) -> None:
    session = _session(tmp_path)

    outcome = asyncio.run(session.submit())

    assert outcome.reason is FailureReason.MISSING_CREDENTIALS
    assert session.settings_requested is True
    assert session.last_error == outcome.message
    assert session.custom_time == "08:13:00"
    assert len(session.history) == 1


def test_save_credentials_persists_and_clears_prompt(tmp_path: Path) -> None:
    session = _session(tmp_path)
    asyncio.run(session.submit())

    session.save_credentials(Credentials("basic", "token"))

    assert session.settings_requested is False
    assert CredentialStore(tmp_path / "creds.json").load() == Credentials("basic", "token")
    assert isinstance(asyncio.run(session.submit()), Success)


def test_failed_submit_keeps_time(tmp_path: Path) -> None:
    session = _session(
        tmp_path,
        response=ApiResponse(status=503),
        credentials=Credentials("basic", "token"),
    )
    session.edit_time("08:45:00")

    outcome = asyncio.run(session.submit())

    assert outcome.reason is FailureReason.HTTP_ERROR
    assert session.custom_time == "08:45:00"
    assert session.last_success is None


def test_reentry_is_refused(tmp_path: Path) -> None:
    session = _session(tmp_path, credentials=Credentials("basic", "token"))
    session.is_submitting = True

    with pytest.raises(SubmissionInProgressError):
        asyncio.run(session.submit())
    assert session.history == ()
