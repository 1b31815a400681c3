"""Layered console logging for attendance-sync.

Every record carries a ``layer`` (step, success, warning, error, debug,
user) that decides the icon and colour on the console. A plain
timestamped copy goes to ``LOG_FILE`` when it is set.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import os
import sys
from typing import Any, Dict, Optional, Tuple

__all__ = [
    "logger",
    "step",
    "success",
    "get_logger",
    "spinner",
    "set_log_profile",
]

ROOT_LOGGER_NAME = "attendance_sync"

_ANSI: Dict[str, str] = {
    "reset": "\033[0m",
    "dim": "\033[2m",
    "bold": "\033[1m",
    "blue": "\033[34m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "red": "\033[31m",
    "cyan": "\033[36m",
    "magenta": "\033[35m",
}

_PROFILE_LEVELS = {
    "quiet": logging.WARNING,
    "user": logging.INFO,
    "debug": logging.DEBUG,
    "verbose": logging.DEBUG,
}


def _colour(text: str, *styles: str) -> str:
    if os.getenv("NO_COLOR") is not None or not styles:
        return text
    return "".join(_ANSI.get(style, "") for style in styles) + text + _ANSI["reset"]


class LayeredFormatter(logging.Formatter):
    """Prefix each console line with the icon of its layer."""

    LAYERS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
        "step": ("▶", ("blue", "bold")),
        "success": ("✓", ("green", "bold")),
        "warning": ("!", ("yellow", "bold")),
        "error": ("✗", ("red", "bold")),
        "user": ("•", ()),
    }

    def format(self, record: logging.LogRecord) -> str:
        layer = getattr(record, "layer", "user")
        message = super().format(record)
        if layer == "debug":
            return f"{_colour('[debug]', 'dim')} {message}"
        icon, styles = self.LAYERS.get(layer, self.LAYERS["user"])
        return f"{_colour(icon, *styles)} {message}"


class LayeredAdapter(logging.LoggerAdapter):
    """Adapter that fills in the ``layer`` extra for every call."""

    def __init__(self, logger: logging.Logger, default_layer: str = "user"):
        super().__init__(logger, {"layer": default_layer})

    def log(self, level: int, msg: Any, *args, layer: Optional[str] = None, **kwargs) -> None:
        if not self.isEnabledFor(level):
            return
        extra = kwargs.setdefault("extra", {})
        extra.setdefault("layer", layer or self.extra.get("layer", "user"))
        self.logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "debug")
        super().debug(msg, *args, **kwargs)

    def warning(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "warning")
        super().warning(msg, *args, **kwargs)

    def error(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "error")
        super().error(msg, *args, **kwargs)

    def exception(self, msg: Any, *args, **kwargs) -> None:  # type: ignore[override]
        kwargs.setdefault("layer", "error")
        super().exception(msg, *args, **kwargs)


def _console_level() -> int:
    level = _PROFILE_LEVELS.get((os.getenv("LOG_PROFILE") or "user").lower(), logging.INFO)
    override = os.getenv("LOG_LEVEL")
    if override:
        named = getattr(logging, override.upper(), None)
        if isinstance(named, int):
            level = named
    return level


def _configure_base_logger() -> LayeredAdapter:
    base_logger = logging.getLogger(ROOT_LOGGER_NAME)
    if base_logger.handlers:
        return LayeredAdapter(base_logger)

    base_logger.setLevel(logging.DEBUG)
    base_logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setLevel(_console_level())
    console_handler.setFormatter(LayeredFormatter("%(message)s"))
    base_logger.addHandler(console_handler)

    log_file = os.getenv("LOG_FILE")
    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError as exc:
            base_logger.warning("Failed to open log file '%s': %s", log_file, exc)
        else:
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)s] %(name)s %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            file_handler.setLevel(logging.DEBUG)
            base_logger.addHandler(file_handler)

    return LayeredAdapter(base_logger)


logger = _configure_base_logger()


def step(message: str) -> None:
    """Log a major step in the workflow."""
    logger.log(logging.INFO, message, layer="step")


def success(message: str) -> None:
    logger.log(logging.INFO, message, layer="success")


def get_logger(name: str, *, layer: str = "user") -> LayeredAdapter:
    """Return a child of the attendance_sync logger with layered formatting."""
    return LayeredAdapter(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"), default_layer=layer)


def set_log_profile(profile: str) -> None:
    """Change console verbosity at runtime (quiet, user, debug)."""
    profile = (profile or "user").lower()
    level = _PROFILE_LEVELS.get(profile, logging.INFO)
    base_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in base_logger.handlers:
        if type(handler) is logging.StreamHandler:
            handler.setLevel(level)
    os.environ["LOG_PROFILE"] = profile


class _Spinner:
    FRAMES = ["⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"]

    def __init__(self, message: str):
        self.message = message
        self._task: Optional[asyncio.Task[None]] = None
        self._running = False
        self._failed = False

    async def __aenter__(self) -> "_Spinner":
        self._running = True
        if sys.stdout.isatty():
            self._task = asyncio.create_task(self._animate())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self._running = False
        if self._task:
            await self._task
            _clear_current_line()
        if exc_type is not None:
            logger.error("%s (%s)", self.message, exc)
        elif not self._failed:
            success(self.message)
        return False

    async def _animate(self) -> None:
        for frame in itertools.cycle(self.FRAMES):
            if not self._running:
                break
            sys.stdout.write(f"\r{_colour(frame, 'cyan')} {self.message}")
            sys.stdout.flush()
            await asyncio.sleep(0.12)

    def fail(self, reason: Optional[str] = None) -> None:
        """Mark the wrapped action as failed and report why."""
        self._failed = True
        if reason:
            logger.error("%s: %s", self.message, reason)
        else:
            logger.error(self.message)


def _clear_current_line() -> None:
    sys.stdout.write("\r" + " " * 120 + "\r")
    sys.stdout.flush()


def spinner(message: str) -> _Spinner:
    """Return an async context manager that animates while awaiting."""
    return _Spinner(message)
