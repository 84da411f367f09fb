# ABOUTME: Thin async HTTP executor for the WordPress REST API
# ABOUTME: Classifies failures into fatal transport/status errors and soft authorization errors

from dataclasses import dataclass
from typing import Any

import httpx

from wordpress_source.errors import ApiStatusError, TransportError
from wordpress_source.utils.logging import get_logger

SOFT_STATUSES = (401, 403)


def _parse_count(value: str | None) -> int:
    try:
        return int(value) if value is not None else 0
    except ValueError:
        return 0


@dataclass(slots=True)
class ApiResponse:
    """Decoded body plus the headers pagination needs."""

    data: Any
    headers: httpx.Headers

    @property
    def total_items(self) -> int:
        return _parse_count(self.headers.get("x-wp-total"))

    @property
    def total_pages(self) -> int:
        return _parse_count(self.headers.get("x-wp-totalpages"))


class WordPressClient:
    """HTTP client bound to one site's REST API root."""

    def __init__(
        self,
        base_url: str,
        api_base: str = "wp-json",
        client: httpx.AsyncClient | None = None,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_url = f"{self.base_url}/{api_base.strip('/')}"
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": "wordpress-source/0.1"},
            timeout=timeout,
        )
        self.logger = get_logger(__name__)

    def url_for(self, path: str) -> str:
        return f"{self.api_url}/{path.lstrip('/')}"

    async def fetch(self, path: str, params: dict[str, Any] | None = None, fallback: Any = None) -> ApiResponse:
        """GET a REST path.

        Args:
            path: Path below the API root, may carry its own query string
            params: Extra query parameters merged into the URL
            fallback: Data returned when the API denies access (401/403)

        Returns:
            The decoded response

        Raises:
            TransportError: No response was received
            ApiStatusError: The API reported an error other than 401/403
        """
        url = self.url_for(path)

        try:
            response = await self.http_client.get(url, params=params)
        except httpx.TransportError as e:
            raise TransportError(url, type(e).__name__) from e

        if response.is_error:
            status = self._reported_status(response)
            if status in SOFT_STATUSES:
                self.logger.warning("Access denied, treating as empty", status=status, url=str(response.url))
                return ApiResponse(data=[] if fallback is None else fallback, headers=response.headers)
            raise ApiStatusError(status, str(response.url))

        return ApiResponse(data=self._decode(response), headers=response.headers)

    @staticmethod
    def _reported_status(response: httpx.Response) -> int:
        """Prefer the status WordPress puts in its error payload over the HTTP one."""
        try:
            payload = response.json()
        except ValueError:
            return response.status_code
        if isinstance(payload, dict) and isinstance(payload.get("data"), dict):
            status = payload["data"].get("status")
            if isinstance(status, int):
                return status
        return response.status_code

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return response.text

    async def close(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()
