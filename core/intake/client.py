"""
Submission Client - Outbound Calls to the Intake Backend

Posts the collected form to the intake API and converts every outcome into
a result object. Failures never raise past this module; callers branch on
``result.success``.

No timeout, retry or backoff is applied: a request runs until the
backend answers or the connection fails.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

import httpx


logger = logging.getLogger(__name__)


DEFAULT_BASE_URL = "http://localhost:3000"
SUBMISSIONS_ENDPOINT = "/api/submissions"
HEALTH_ENDPOINT = "/health"

NETWORK_ERROR_MESSAGE = "Network error occurred"
SUBMISSION_FAILED_MESSAGE = "Submission failed"


# =============================================================================
# Results
# =============================================================================


@dataclass(frozen=True)
class SubmissionSuccess:
    """Returned when the backend accepted the submission."""

    data: Any
    message: Optional[str]

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class SubmissionFailure:
    """Returned when the submission could not be delivered or was rejected."""

    error: str

    @property
    def success(self) -> bool:
        return False


SubmissionResult = Union[SubmissionSuccess, SubmissionFailure]


@dataclass(frozen=True)
class HealthCheckResult:
    """Outcome of a backend health probe."""

    success: bool
    data: Any = None
    error: Optional[str] = None


# =============================================================================
# Client
# =============================================================================


class SubmissionClient:
    """
    Async client for the intake backend.

    Args:
        base_url: Backend root, e.g. ``http://localhost:3000``
        transport: Optional httpx transport (tests pass a MockTransport)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=None,
            transport=self._transport,
        )

    async def submit(self, form_state: Mapping[str, Any]) -> SubmissionResult:
        """
        Submit intake form data.

        Args:
            form_state: Collected field values, sent as the JSON body

        Returns:
            SubmissionSuccess on a 2xx response, SubmissionFailure otherwise
        """
        url = f"{self.base_url}{SUBMISSIONS_ENDPOINT}"
        try:
            async with self._client() as client:
                logger.info("Posting intake submission to %s", url)
                response = await client.post(SUBMISSIONS_ENDPOINT, json=dict(form_state))
                body = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.error("Intake submission to %s failed: %s", url, e)
            return SubmissionFailure(error=str(e) or NETWORK_ERROR_MESSAGE)

        if not isinstance(body, dict):
            body = {}

        if not response.is_success:
            message = body.get("message") or SUBMISSION_FAILED_MESSAGE
            logger.warning(
                "Intake submission rejected with HTTP %s: %s",
                response.status_code,
                message,
            )
            return SubmissionFailure(error=str(message))

        return SubmissionSuccess(data=body.get("data"), message=body.get("message"))

    async def check_health(self) -> HealthCheckResult:
        """Probe the backend health endpoint."""
        try:
            async with self._client() as client:
                response = await client.get(HEALTH_ENDPOINT)
                data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.warning("Backend health check failed: %s", e)
            return HealthCheckResult(success=False, error=str(e) or NETWORK_ERROR_MESSAGE)

        return HealthCheckResult(success=response.is_success, data=data)
