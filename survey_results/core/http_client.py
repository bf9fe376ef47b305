"""Shared async HTTP client for the upstream survey API."""
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from survey_results.core.config import settings

logger = logging.getLogger(__name__)


class SurveyAPIError(RuntimeError):
    """Raised when the survey API fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


STATUS_MESSAGES = {
    401: "Session expired, please sign in again",
    403: "You do not have permission to access this resource",
    404: "The requested resource was not found",
}
SERVER_ERROR_MESSAGE = "Something went wrong on the server"
NETWORK_ERROR_MESSAGE = "No response received from server"


def error_for_response(response: httpx.Response) -> SurveyAPIError:
    """Build the user-facing error for a failed upstream response."""
    status_code = response.status_code
    if status_code in STATUS_MESSAGES:
        return SurveyAPIError(STATUS_MESSAGES[status_code], status_code)
    if status_code >= 500:
        return SurveyAPIError(SERVER_ERROR_MESSAGE, status_code)

    message = f"Request failed with status {status_code}"
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = str(body.get("message") or body.get("detail") or message)
    return SurveyAPIError(message, status_code)


class SurveyAPIClient:
    """Owns the ``httpx.AsyncClient`` used to reach the survey API."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def startup(self) -> httpx.AsyncClient:
        """Initialize the underlying HTTP client and return it."""
        async with self._lock:
            if self._client is None:
                logger.info("Connecting to survey API at %s", self._base_url)
                self._client = httpx.AsyncClient(
                    base_url=self._base_url,
                    timeout=self._timeout,
                    transport=self._transport,
                    headers={"Content-Type": "application/json"},
                )
            return self._client

    async def shutdown(self) -> None:
        """Close the underlying HTTP client."""
        async with self._lock:
            if self._client is not None:
                await self._client.aclose()
                self._client = None

    async def get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            return await self.startup()
        return self._client


_survey_api_client: SurveyAPIClient | None = None


def get_survey_api_client() -> SurveyAPIClient:
    """Return the singleton survey API client."""
    global _survey_api_client
    if _survey_api_client is None:
        _survey_api_client = SurveyAPIClient(
            base_url=settings.SURVEY_API_BASE_URL,
            timeout=settings.SURVEY_API_TIMEOUT,
        )
    return _survey_api_client
