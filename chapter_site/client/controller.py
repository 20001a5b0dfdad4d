"""
Page-level orchestration over SiteClient and SiteState.

Content loads once with thumbnails only; full image lists are fetched the
first time a details view or gallery opens and are kept in DetailsCache.
"""
from typing import Any, Dict, List, Optional, Tuple
import logging

from chapter_site.client import state as site_state
from chapter_site.client.api_client import SiteClient, SiteClientError
from chapter_site.client.state import SiteState

logger = logging.getLogger(__name__)


class DetailsCache:
    """
    Full image lists keyed by (entity kind, id).
    Nothing is evicted; the content is small and rarely changes.
    """

    def __init__(self, client: SiteClient):
        self._client = client
        self._images: Dict[Tuple[str, Any], List[str]] = {}

    def __contains__(self, key: Tuple[str, Any]) -> bool:
        return key in self._images

    def __len__(self) -> int:
        return len(self._images)

    @staticmethod
    def needs_details(item: Dict[str, Any]) -> bool:
        images = item.get("images") or []
        return (item.get("totalImages") or 0) > len(images) and not item.get("detailsLoaded", False)

    async def get(self, kind: str, item_id: Any) -> Optional[List[str]]:
        """
        Cached image list, fetching it on first use.
        Returns None when the fetch fails; failures are not cached.
        """
        key = (kind, item_id)
        if key in self._images:
            return self._images[key]

        try:
            images = await self._client.get_entity_images(kind, item_id)
        except SiteClientError as e:
            logger.error(f"Failed to fetch details for {kind} {item_id}: {e.message}")
            return None

        self._images[key] = images
        return images

    async def complete(self, kind: str, item: Dict[str, Any]) -> Dict[str, Any]:
        """Item with its full image list when one is needed and obtainable; else the item itself."""
        if not self.needs_details(item):
            return item

        images = await self.get(kind, item.get("id"))
        if images is None:
            return item
        return site_state.with_images(item, images)


class SiteController:
    """Drives SiteState from user actions, mirroring the landing page handlers."""

    def __init__(self, client: SiteClient, initial: Optional[SiteState] = None):
        self.client = client
        self.cache = DetailsCache(client)
        self.state = initial or SiteState()

    async def load(self) -> SiteState:
        """Initial page load. Either request may fail without blocking the other."""
        try:
            content = await self.client.get_content()
            self.state = site_state.content_loaded(self.state, content)
        except SiteClientError as e:
            logger.error(f"Content load failed: {e.message}")

        try:
            enabled = await self.client.get_enrollment_status()
            self.state = site_state.enrollment_loaded(self.state, enabled)
        except SiteClientError as e:
            logger.error(f"Enrollment status load failed: {e.message}")

        return self.state

    async def show_details(self, kind: str, item: Dict[str, Any]) -> SiteState:
        self.state = site_state.open_details(self.state, kind, item)

        full = await self.cache.complete(kind, item)
        if full is not item:
            self.state = site_state.details_loaded(self.state, kind, item.get("id"), full["images"])
        return self.state

    async def open_gallery(self, item: Dict[str, Any]) -> SiteState:
        """Open the viewer on the thumbnail at once, then swap in the full album."""
        self.state = site_state.open_viewer(self.state, item.get("images") or [])

        full = await self.cache.complete("gallery", item)
        if full is not item and len(full["images"]) > len(item.get("images") or []):
            self.state = site_state.details_loaded(self.state, "gallery", item.get("id"), full["images"])
            self.state = self.state.model_copy(
                update={"viewer": self.state.viewer.model_copy(update={"gallery": tuple(full["images"])})}
            )
        return self.state

    def close_details(self) -> SiteState:
        self.state = site_state.close_details(self.state)
        return self.state

    def close_viewer(self) -> SiteState:
        self.state = site_state.close_viewer(self.state)
        return self.state

    def open_application(self) -> SiteState:
        self.state = site_state.open_application(self.state)
        return self.state

    async def submit_application(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit the form and close it on success.

        Raises:
            SiteClientError: With the server's error message; the form stays open
        """
        row = await self.client.submit_application(payload)
        self.state = site_state.close_application(self.state)
        return row
