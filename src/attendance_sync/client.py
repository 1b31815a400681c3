"""aiohttp transport for the check-in/check-out endpoint."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import aiohttp

from .logger import get_logger
from .models import AttendancePayload, Credentials

LOGGER = get_logger("client")

CHECK_IN_OUT_PATH = "/apietms/api/ChechInData/MobileAddCheckInOut"


@dataclass(frozen=True)
class ApiResponse:
    """Status code plus decoded JSON body (None when the status is not 2xx)."""

    status: int
    body: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class AttendanceTransport(Protocol):
    """Anything able to deliver one attendance payload to the HR API."""

    async def post_attendance(
        self,
        payload: AttendancePayload,
        *,
        username: str,
        credentials: Credentials,
    ) -> ApiResponse:
        """Send the payload and return the raw response."""


def build_headers(username: str, credentials: Credentials) -> Dict[str, str]:
    return {
        "Authorization": f"Basic {credentials.basic_auth}",
        "username": username,
        "token": credentials.access_token,
        "Accept": "application/json",
    }


class AttendanceApiClient(AttendanceTransport):
    """POST attendance events with one short-lived aiohttp session per call.

    Network and decoding errors propagate; the caller decides how to report
    them.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: Optional[aiohttp.ClientTimeout] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = logger or LOGGER

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}{CHECK_IN_OUT_PATH}"

    async def post_attendance(
        self,
        payload: AttendancePayload,
        *,
        username: str,
        credentials: Credentials,
    ) -> ApiResponse:
        session_kwargs: Dict[str, Any] = {}
        if self._timeout is not None:
            session_kwargs["timeout"] = self._timeout
        self._logger.debug("POST %s params=%s", self.endpoint, payload.to_params())
        async with aiohttp.ClientSession(**session_kwargs) as session:
            async with session.post(
                self.endpoint,
                params=payload.to_params(),
                headers=build_headers(username, credentials),
            ) as response:
                if not 200 <= response.status < 300:
                    return ApiResponse(status=response.status)
                body = await response.json(content_type=None)
                return ApiResponse(status=response.status, body=body)


__all__ = [
    "ApiResponse",
    "AttendanceApiClient",
    "AttendanceTransport",
    "CHECK_IN_OUT_PATH",
    "build_headers",
]
