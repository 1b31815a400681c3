"""Durable storage for the Basic Auth value and access token."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from .errors import CredentialStoreError
from .logger import get_logger
from .models import Credentials

LOGGER = get_logger("credentials")

BASIC_AUTH_KEY = "sync_basic_auth"
ACCESS_TOKEN_KEY = "sync_access_token"
DEFAULT_CREDENTIALS_FILE = ".attendance_credentials.json"


class CredentialStore:
    """Flat JSON file holding the two secrets under namespaced keys.

    Nothing is encrypted and nothing expires; values persist until the next
    :meth:`save` or until the file is removed.
    """

    def __init__(self, path: Optional[Path | str] = None) -> None:
        default_path = os.getenv("CREDENTIALS_FILE", DEFAULT_CREDENTIALS_FILE)
        self.path = Path(path or default_path)

    def load(self) -> Credentials:
        if not self.path.exists():
            return Credentials()
        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            LOGGER.warning("Ignoring unreadable credential file %s: %s", self.path, exc)
            return Credentials()
        if not isinstance(payload, dict):
            LOGGER.warning("Ignoring credential file %s: expected a JSON object", self.path)
            return Credentials()
        return Credentials(
            basic_auth=str(payload.get(BASIC_AUTH_KEY) or ""),
            access_token=str(payload.get(ACCESS_TOKEN_KEY) or ""),
        )

    def save(self, credentials: Credentials) -> None:
        """Replace both keys in one step."""
        data = {
            BASIC_AUTH_KEY: credentials.basic_auth,
            ACCESS_TOKEN_KEY: credentials.access_token,
        }
        directory = self.path.parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=".credentials-", dir=directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(data, handle, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as exc:
            raise CredentialStoreError(f"Unable to save credentials to {self.path}: {exc}") from exc
        LOGGER.debug("Credentials saved to %s", self.path)


__all__ = ["ACCESS_TOKEN_KEY", "BASIC_AUTH_KEY", "CredentialStore"]
