from datetime import datetime

import pytest

from attendance_sync.formatting import (
    DATE_PLACEHOLDER,
    build_payload,
    display_date,
    format_payload_date,
    is_valid_date,
    today_string,
)
from attendance_sync.models import EventKind


def test_format_payload_date_reorders_components():
    assert format_payload_date("2024-03-05", "08:13:00") == "05-03-2024 08:13:00"


def test_format_payload_date_keeps_components_as_supplied():
    assert format_payload_date("2024-3-5", "08:13:00") == "5-3-2024 08:13:00"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-05", "05-03-2024"),
        ("", DATE_PLACEHOLDER),
        (None, DATE_PLACEHOLDER),
        ("bad", "bad"),
        ("2024-03", "2024-03"),
    ],
)
def test_display_date(value, expected):
    assert display_date(value) == expected


def test_build_payload_params():
    payload = build_payload("BO-9988", EventKind.CHECK_OUT, "2024-03-05", "17:40:10")

    assert payload.to_params() == {
        "userId": "BO-9988",
        "typeCheckInOut": "2",
        "dateCheckInOut": "05-03-2024 17:40:10",
    }


def test_today_string_zero_pads():
    assert today_string(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"


@pytest.mark.parametrize(
    "value,expected",
    [
        ("2024-03-05", True),
        ("2024-02-29", True),
        ("2023-02-29", False),
        ("2024-13-01", False),
        ("05-03-2024", False),
        ("", False),
    ],
)
def test_is_valid_date(value, expected):
    assert is_valid_date(value) is expected
