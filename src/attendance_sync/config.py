"""Configuration loaded from the environment and a ``.env`` file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

from .credentials import DEFAULT_CREDENTIALS_FILE
from .errors import ConfigError
from .history import DEFAULT_HISTORY_LIMIT
from .logger import get_logger

LOGGER = get_logger("config")

DEFAULT_API_BASE_URL = "https://ddc.fis.vn"

ENV_TEMPLATE = f"""
# Origin of the HR API (or of a proxy in front of it)
# API_BASE_URL="{DEFAULT_API_BASE_URL}"

# Number of attempts kept in the session history
# HISTORY_LIMIT={DEFAULT_HISTORY_LIMIT}

# Where Basic Auth and token are stored after `attendance-sync settings`
# CREDENTIALS_FILE="{DEFAULT_CREDENTIALS_FILE}"

# Optional identity defaults for `submit` and `dashboard`
# USER_ID=""
# USERNAME=""
""".lstrip()


def ensure_env_file(path: Path) -> None:
    """Create a commented .env template if missing (no overwrite)."""
    if path.exists():
        return
    try:
        path.write_text(ENV_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        LOGGER.debug("Could not create %s: %s", path, exc)
        return
    LOGGER.info("Created default .env at %s, please review.", path)


@dataclass(frozen=True)
class Config:
    # Names mirror .env keys
    API_BASE_URL: str
    HISTORY_LIMIT: int
    CREDENTIALS_FILE: Path
    USER_ID: str
    USERNAME: str


def _history_limit(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_HISTORY_LIMIT
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"HISTORY_LIMIT must be an integer, got {raw!r}") from None
    if value < 1:
        raise ConfigError(f"HISTORY_LIMIT must be at least 1, got {value}")
    return value


def _base_url(raw: Optional[str]) -> str:
    url = (raw or DEFAULT_API_BASE_URL).strip()
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"API_BASE_URL must be an http(s) origin, got {url!r}")
    return url.rstrip("/")


def load_config(env_file: Optional[Path | str] = None) -> Config:
    """Read configuration; real environment variables win over the .env file."""
    path = Path(env_file or os.getenv("ENV_FILE", ".env"))
    ensure_env_file(path)
    load_dotenv(dotenv_path=path)
    return Config(
        API_BASE_URL=_base_url(os.getenv("API_BASE_URL")),
        HISTORY_LIMIT=_history_limit(os.getenv("HISTORY_LIMIT")),
        CREDENTIALS_FILE=Path(os.getenv("CREDENTIALS_FILE") or DEFAULT_CREDENTIALS_FILE),
        USER_ID=(os.getenv("USER_ID") or "").strip(),
        USERNAME=(os.getenv("USERNAME") or "").strip(),
    )


__all__ = ["Config", "DEFAULT_API_BASE_URL", "ensure_env_file", "load_config"]
