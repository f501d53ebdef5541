"""HTTP client for the Xpertia student API."""

import logging
from typing import Any

import httpx

from xpertia.config import get_api_timeout, get_api_url, normalize_api_url
from xpertia.session import Session

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised when a student API call fails.

    Transport failures (connection refused, timeouts) are reported with
    status_code 500, matching what the web portal shows.
    """

    def __init__(self, status_code: int, message: str, details: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.details = details

    def __repr__(self) -> str:
        return f"APIError(status_code={self.status_code}, message={self.message!r})"


class ApiClient:
    """Thin JSON wrapper over ``httpx.AsyncClient``.

    Args:
        base_url: API root; "/api/v1" is appended when missing
            (default: XPERTIA_API_URL)
        session: Caller session, used for the bearer token
        timeout: Request timeout in seconds (default: API_TIMEOUT_S)
        transport: Optional httpx transport (tests use httpx.MockTransport)
    """

    def __init__(
        self,
        base_url: str | None = None,
        session: Session | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = normalize_api_url(base_url) if base_url else get_api_url()
        self.session = session or Session()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else get_api_timeout(),
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        headers.update(self.session.authorization_header())
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns {} for 204 No Content.

        Raises:
            APIError: On non-2xx responses or transport failures
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None}

        try:
            response = await self._client.request(
                method, endpoint, json=json, params=params, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {endpoint} failed: {e}")
            raise APIError(500, str(e) or "Unknown error occurred") from e

        if response.is_error:
            try:
                details = response.json()
            except ValueError:
                details = {}
            message = None
            if isinstance(details, dict):
                message = details.get("message")
            if not message:
                message = f"HTTP {response.status_code}: {response.reason_phrase}"
            raise APIError(response.status_code, str(message), details)

        if response.status_code == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise APIError(500, f"Invalid JSON from {endpoint}") from e

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", endpoint, params=params)

    async def post(
        self, endpoint: str, data: Any = None, params: dict[str, Any] | None = None
    ) -> Any:
        return await self.request("POST", endpoint, json=data, params=params)

    async def put(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("PUT", endpoint, json=data)

    async def patch(self, endpoint: str, data: Any = None) -> Any:
        return await self.request("PATCH", endpoint, json=data)

    async def delete(self, endpoint: str) -> Any:
        return await self.request("DELETE", endpoint)
