"""
Async HTTP client for the chapter site API.
"""
from typing import Any, Dict, List, Optional
import logging

import httpx

logger = logging.getLogger(__name__)


class SiteClientError(Exception):
    """Request failed at the transport level or the API answered with an error."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class SiteClient:
    """
    Thin wrapper over httpx.AsyncClient for the /api routes.

    Usage:
        async with SiteClient("https://example.org") as client:
            content = await client.get_content()
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "SiteClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise SiteClientError(str(e)) from e

        try:
            body = response.json()
        except ValueError:
            body = {}

        if response.is_error:
            message = body.get("error") if isinstance(body, dict) else None
            raise SiteClientError(message or f"HTTP {response.status_code}", response.status_code)

        return body

    async def get_content(self) -> Dict[str, Any]:
        """Landing page content in list mode."""
        return await self._request("GET", "/api/content")

    async def get_entity_images(self, kind: str, entity_id: int) -> List[str]:
        """
        Full image list for one entity.

        kind is the bare entity kind ("project", "event", "gallery",
        "timeline"); it is sent with the "_details" suffix the API accepts.
        """
        body = await self._request(
            "GET", "/api/content", params={"type": f"{kind}_details", "id": str(entity_id)}
        )
        return body.get("images", [])

    async def get_enrollment_status(self) -> bool:
        body = await self._request("GET", "/api/button-status")
        return bool(body.get("enabled", False))

    async def submit_application(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Submit the application form. Returns the stored row."""
        body = await self._request("POST", "/api/apply", json=payload)
        return body["data"]
