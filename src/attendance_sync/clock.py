"""Candidate time generation and time-of-day validation."""

from __future__ import annotations

import random
import re
from typing import Dict, Optional, Tuple

from .models import EventKind

# Inclusive second-of-day windows that look like a normal arrival/departure.
WINDOWS: Dict[EventKind, Tuple[int, int]] = {
    EventKind.CHECK_IN: (8 * 3600 + 13 * 60, 8 * 3600 + 29 * 60 + 59),
    EventKind.CHECK_OUT: (17 * 3600 + 33 * 60, 18 * 3600 + 14 * 60 + 59),
}

TIME_PATTERN = re.compile(r"([01]\d|2[0-3]):([0-5]\d):([0-5]\d)")


def seconds_to_time(seconds: int) -> str:
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def sample(kind: EventKind, rng: Optional[random.Random] = None) -> str:
    """Draw a uniformly random ``HH:MM:SS`` inside the window for ``kind``."""
    start, end = WINDOWS[kind]
    chooser = rng or random
    return seconds_to_time(chooser.randint(start, end))


def is_valid_time(value: object) -> bool:
    """Return True for a zero-padded 24-hour ``HH:MM:SS`` string."""
    if not isinstance(value, str) or len(value) != 8:
        return False
    return TIME_PATTERN.fullmatch(value) is not None


class CandidateTimes:
    """Sampled check-in/check-out times for the currently selected date.

    Both values are redrawn when the date changes or after a completed
    submission. Reading the value for another kind never redraws.
    """

    def __init__(self, date: str, rng: Optional[random.Random] = None) -> None:
        self._date = date
        self._rng = rng
        self._values: Dict[EventKind, str] = {}
        self.resample()

    @property
    def date(self) -> str:
        return self._date

    def resample(self) -> None:
        self._values = {kind: sample(kind, self._rng) for kind in EventKind}

    def for_kind(self, kind: EventKind) -> str:
        return self._values[kind]

    def on_date_changed(self, date: str) -> bool:
        """Track a new selected date; returns True when the times were redrawn."""
        if date == self._date:
            return False
        self._date = date
        self.resample()
        return True

    def on_submission_completed(self) -> None:
        self.resample()

    def as_dict(self) -> Dict[EventKind, str]:
        return dict(self._values)


__all__ = [
    "CandidateTimes",
    "WINDOWS",
    "is_valid_time",
    "sample",
    "seconds_to_time",
]
