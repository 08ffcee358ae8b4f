"""API Client: httpx-based transport with a fixed timeout and error mapping.

Invariants:
    - One attempt per call: no retry, no backoff
    - Non-2xx responses raise TransportError carrying the decoded ApiResponse
    - Network failures and timeouts raise TransportError(response=None)
    - Undecodable bodies raise TransportError("Invalid JSON response")
    - Authorization header comes from the SessionContext passed in (never ambient)
    - 401 is logged only: no redirect, token kept

Design Decisions:
    - Wrapper over raw httpx.AsyncClient: isolates error mapping from the runners
    - transport injectable: tests run the demo FastAPI app in-process via ASGITransport
"""

import logging
from typing import Any

import httpx

from schooldesk.config import Settings
from schooldesk.core.envelope import ApiResponse
from schooldesk.core.errors import ErrorCategory, ErrorContext, TransportError
from schooldesk.core.session_context import SessionContext

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {"Content-Type": "application/json"}


class ApiClient:
    """Thin async HTTP client returning ApiResponse or raising TransportError."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout_seconds: float = 10.0,
        session: SessionContext | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.session = session or SessionContext()
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            timeout=timeout_seconds,
            headers=_DEFAULT_HEADERS,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        session: SessionContext | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "ApiClient":
        if session is None and settings.auth_token:
            session = SessionContext(token=settings.auth_token)
        return cls(
            settings.api_base_url,
            timeout_seconds=settings.request_timeout_seconds,
            session=session,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    # ─── Verbs ────────────────────────────────────────────────────

    async def get(self, url: str, params: dict | None = None) -> ApiResponse:
        return await self._request("GET", url, params=params)

    async def post(
        self, url: str, body: Any = None, params: dict | None = None,
    ) -> ApiResponse:
        return await self._request("POST", url, body=body, params=params)

    async def put(
        self, url: str, body: Any = None, params: dict | None = None,
    ) -> ApiResponse:
        return await self._request("PUT", url, body=body, params=params)

    async def patch(
        self, url: str, body: Any = None, params: dict | None = None,
    ) -> ApiResponse:
        return await self._request("PATCH", url, body=body, params=params)

    async def delete(self, url: str, params: dict | None = None) -> ApiResponse:
        return await self._request("DELETE", url, params=params)

    # ─── Internals ────────────────────────────────────────────────

    async def _request(
        self,
        method: str,
        url: str,
        *,
        body: Any = None,
        params: dict | None = None,
    ) -> ApiResponse:
        context = ErrorContext(method=method, url=url)
        try:
            response = await self.client.request(
                method,
                url,
                json=body,
                params=params or None,
                headers=self.session.authorization_header(),
            )
        except httpx.TimeoutException as e:
            logger.error(
                f"Request timed out: {method} {url}",
                extra={"method": method, "url": url},
            )
            raise TransportError(
                f"Request timed out after {self.timeout_seconds:g}s",
                category=ErrorCategory.TIMEOUT, context=context,
            ) from e
        except httpx.RequestError as e:
            logger.error(
                f"Network error: {e}", extra={"method": method, "url": url},
            )
            raise TransportError(
                str(e) or "Network error", context=context,
            ) from e

        api_response = ApiResponse(
            status_code=response.status_code,
            data=self._decode(response, context),
            headers=dict(response.headers),
        )

        if response.status_code == 401:
            logger.warning(
                f"401 on {method} {url}; redirect disabled",
                extra={"method": method, "url": url, "status_code": 401},
            )
        if response.is_error:
            logger.warning(
                f"{method} {url} failed with status {response.status_code}",
                extra={
                    "method": method, "url": url,
                    "status_code": response.status_code,
                },
            )
            raise TransportError(
                f"Request failed with status code {response.status_code}",
                response=api_response, context=context,
            )
        return api_response

    def _decode(self, response: httpx.Response, context: ErrorContext) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            if response.is_error:
                # Error pages are often HTML; keep the status error as the failure
                return None
            logger.error(
                f"Invalid JSON from {context.method} {context.url}",
                extra={"method": context.method, "url": context.url},
            )
            raise TransportError(
                "Invalid JSON response", response=None, context=context,
            ) from e
