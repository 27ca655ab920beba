# =============================================================================
# core/api_client.py  —  Context Repo HTTP Client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Performs exactly ONE HTTP request against the Context Repo API and turns
#   the outcome into either a parsed JSON payload or an OperationError.
#
#   execute("GET", "/v1/prompts?q=foo")   →  {"data": [...]}
#   execute("DELETE", "/v1/prompts/abc")  →  None            (204 No Content)
#   execute("GET", "/v1/prompts/missing") →  raises OperationError(NOT_FOUND)
#
# STATUS → ERROR KIND:
#   401 → AUTHENTICATION   403 → PERMISSION   404 → NOT_FOUND
#   429 → RATE_LIMITED     other non-2xx → UNKNOWN
#   transport failure (DNS, refused connection, timeout) → NETWORK
#
# NO RETRIES.  A failed call surfaces immediately to the dispatcher.
#
# CANCELLATION:
#   The call runs inside the invocation's asyncio task.  Cancelling that task
#   cancels the in-flight request; CancelledError is never turned into an
#   OperationError.
# =============================================================================

import logging
from typing import Any, Optional, Union

import httpx

from core.config import Settings
from core.errors import OperationError
from core.models import BackendRequest, ErrorKind, HttpMethod

logger = logging.getLogger(__name__)

NETWORK_ERROR_MESSAGE = "Network error: Unable to reach API. Check your internet connection."
INVALID_JSON_MESSAGE = "Invalid JSON in API response"

_STATUS_KINDS: dict[int, ErrorKind] = {
    401: ErrorKind.AUTHENTICATION,
    403: ErrorKind.PERMISSION,
    404: ErrorKind.NOT_FOUND,
    429: ErrorKind.RATE_LIMITED,
}

_KIND_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.AUTHENTICATION: "Authentication failed. Check your API key.",
    ErrorKind.PERMISSION: "Permission denied. Your API key may not have the required permissions.",
    ErrorKind.NOT_FOUND: "Resource not found. Check that the ID is correct.",
    ErrorKind.RATE_LIMITED: "Rate limit exceeded. Please wait a moment before retrying.",
}


def classify_status(status_code: int) -> Optional[ErrorKind]:
    """Map an HTTP status to an ErrorKind, or None for 2xx success."""
    if 200 <= status_code < 300:
        return None
    return _STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)


def _backend_error_message(response: httpx.Response) -> str:
    """Prefer the API's own ``error.message``; fall back to the status line."""
    fallback = f"API error: {response.status_code} {response.reason_phrase}"
    try:
        data = response.json()
    except ValueError:
        return fallback
    error = data.get("error") if isinstance(data, dict) else None
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return fallback


class ApiClient:
    """Thin async wrapper around the Context Repo REST API.

    Args:
        settings: Base URL, credential and timeout.  Never mutated.
        transport: Optional httpx transport.  Tests pass an
            ``httpx.MockTransport`` to stand in for the real backend.
    """

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport

    @property
    def settings(self) -> Settings:
        return self._settings

    async def execute(
        self,
        method: Union[HttpMethod, str],
        path: str,
        body: Optional[dict[str, Any]] = None,
    ) -> Any:
        """Send one request and return the parsed payload.

        Raises:
            OperationError: on transport failure or any non-2xx status.
        """
        verb = HttpMethod(method).value
        url = f"{self._settings.api_base_url}{path}"

        # Method and path only: the body and the credential stay out of logs.
        logger.info("[API] %s %s", verb, path)

        try:
            async with httpx.AsyncClient(
                headers=self._settings.headers,
                timeout=self._settings.timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.request(verb, url, json=body)
        except httpx.TransportError as exc:
            logger.warning("[API] %s %s failed: %s", verb, path, exc)
            raise OperationError(ErrorKind.NETWORK, NETWORK_ERROR_MESSAGE) from exc

        kind = classify_status(response.status_code)
        if kind is not None:
            message = _KIND_MESSAGES.get(kind) or _backend_error_message(response)
            raise OperationError(kind, message)

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError as exc:
            raise OperationError(ErrorKind.UNKNOWN, INVALID_JSON_MESSAGE) from exc

    async def send(self, request: BackendRequest) -> Any:
        return await self.execute(request.method, request.path, request.body)
