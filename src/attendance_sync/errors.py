"""Exception types raised outside the submission outcome path."""

from __future__ import annotations


class AttendanceSyncError(Exception):
    """Base class for errors surfaced to the command line."""


class ConfigError(AttendanceSyncError):
    """A configuration value in the environment or .env file is unusable."""


class CredentialStoreError(AttendanceSyncError):
    """The credential file could not be written."""


class SubmissionInProgressError(AttendanceSyncError):
    """A submission was requested while another one is still outstanding."""


__all__ = [
    "AttendanceSyncError",
    "ConfigError",
    "CredentialStoreError",
    "SubmissionInProgressError",
]
