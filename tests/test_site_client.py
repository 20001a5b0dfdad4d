"""Tests for the site client, its view state and the details cache"""

import httpx
import pytest
import pytest_asyncio

from chapter_site.client import state as site_state
from chapter_site.client.api_client import SiteClient, SiteClientError
from chapter_site.client.controller import DetailsCache, SiteController
from chapter_site.client.state import SiteState
from chapter_site.main import app
from chapter_site.models import EntityType, GalleryAlbum, Project, SiteConfig, MediaAsset


@pytest_asyncio.fixture
async def site_client(override_dependencies):
    transport = httpx.ASGITransport(app=app)
    async with SiteClient("http://testserver", transport=transport) as client:
        yield client


class CountingClient:
    """Stand-in for SiteClient that records detail fetches"""

    def __init__(self, images=None, fail=False):
        self.images = images or []
        self.fail = fail
        self.calls = []

    async def get_entity_images(self, kind, entity_id):
        self.calls.append((kind, entity_id))
        if self.fail:
            raise SiteClientError("unavailable", 503)
        return list(self.images)


@pytest.mark.unit
class TestSiteState:

    def test_content_loaded_fills_missing_groups(self):
        state = site_state.content_loaded(SiteState(), {"projectsData": [{"id": 1}]})

        assert state.content["projectsData"] == [{"id": 1}]
        assert state.content["events"] == {"upcoming": [], "past": []}
        assert state.content["partnersData"] == []

    def test_transitions_do_not_mutate(self):
        before = SiteState()
        after = site_state.open_application(before)

        assert before.application_open is False
        assert after.application_open is True
        assert site_state.close_application(after).application_open is False

    def test_details_loaded_updates_group_and_modal(self):
        item = {"id": 5, "images": ["thumb.jpg"], "totalImages": 3, "detailsLoaded": False}
        state = site_state.content_loaded(SiteState(), {"events": {"upcoming": [], "past": [item]}})
        state = site_state.open_details(state, "event", item)

        state = site_state.details_loaded(state, "event", 5, ["a.jpg", "b.jpg", "c.jpg"])

        stored = state.content["events"]["past"][0]
        assert stored["images"] == ["a.jpg", "b.jpg", "c.jpg"]
        assert stored["detailsLoaded"] is True
        assert state.details.item["images"] == ["a.jpg", "b.jpg", "c.jpg"]

    def test_open_viewer_clamps_start_index(self):
        state = site_state.open_viewer(SiteState(), ["a.jpg", "b.jpg"], start_index=9)

        assert state.viewer.is_open is True
        assert state.viewer.start_index == 1
        assert site_state.close_viewer(state).viewer.gallery == ()

    def test_round_trips_through_dict(self):
        state = site_state.open_viewer(site_state.enrollment_loaded(SiteState(), True), ["a.jpg"])

        restored = SiteState.from_dict(state.to_dict())

        assert restored == state


@pytest.mark.unit
class TestDetailsCache:

    @pytest.mark.parametrize("item, expected", [
        ({"images": ["t.jpg"], "totalImages": 3, "detailsLoaded": False}, True),
        ({"images": ["t.jpg"], "totalImages": 1, "detailsLoaded": True}, False),
        ({"images": ["a.jpg", "b.jpg"], "totalImages": 2, "detailsLoaded": False}, False),
        ({"images": ["t.jpg"], "totalImages": 3, "detailsLoaded": True}, False),
    ])
    def test_needs_details(self, item, expected):
        assert DetailsCache.needs_details(item) is expected

    async def test_fetches_once_per_key(self):
        client = CountingClient(images=["a.jpg", "b.jpg"])
        cache = DetailsCache(client)
        item = {"id": 1, "images": ["a.jpg"], "totalImages": 2, "detailsLoaded": False}

        first = await cache.complete("project", item)
        second = await cache.complete("project", item)

        assert first["images"] == ["a.jpg", "b.jpg"]
        assert second == first
        assert client.calls == [("project", 1)]
        assert ("project", 1) in cache

    async def test_failed_fetch_leaves_item_and_is_not_cached(self):
        client = CountingClient(fail=True)
        cache = DetailsCache(client)
        item = {"id": 1, "images": ["a.jpg"], "totalImages": 2, "detailsLoaded": False}

        assert await cache.complete("project", item) is item
        assert len(cache) == 0

    async def test_loaded_item_is_not_fetched(self):
        client = CountingClient()
        item = {"id": 1, "images": ["a.jpg"], "totalImages": 1, "detailsLoaded": True}

        assert await DetailsCache(client).complete("gallery", item) is item
        assert client.calls == []


class TestSiteClientAgainstApp:

    async def test_load_and_open_gallery(self, site_client, add_rows):
        album, = await add_rows(GalleryAlbum(title="IASF 2025"))
        await add_rows(
            MediaAsset(entity_type=EntityType.GALLERY, entity_id=album.id, image_url="cover.jpg", is_primary=True),
            MediaAsset(entity_type=EntityType.GALLERY, entity_id=album.id, image_url="stage.jpg"),
            SiteConfig(key_name="enrollment_open", value_boolean=True),
        )
        controller = SiteController(site_client)

        state = await controller.load()
        assert state.enrollment_open is True
        item = state.content["gallery"][0]
        assert item["images"] == ["cover.jpg"]

        state = await controller.open_gallery(item)

        assert state.viewer.gallery == ("cover.jpg", "stage.jpg")
        assert state.content["gallery"][0]["detailsLoaded"] is True

    async def test_show_details_for_project(self, site_client, add_rows):
        project, = await add_rows(Project(title="Solar Dryer", sort_order=1))
        await add_rows(
            MediaAsset(entity_type=EntityType.PROJECT, entity_id=project.id, image_url="a.jpg", is_primary=True),
            MediaAsset(entity_type=EntityType.PROJECT, entity_id=project.id, image_url="b.jpg"),
        )
        controller = SiteController(site_client)
        state = await controller.load()

        state = await controller.show_details("project", state.content["projectsData"][0])

        assert state.details.is_open is True
        assert state.details.item["images"] == ["a.jpg", "b.jpg"]
        assert controller.close_details().details.is_open is False

    async def test_submit_application(self, site_client):
        controller = SiteController(site_client)
        controller.open_application()

        row = await controller.submit_application(
            {"name": "Asha", "email": "asha@example.com", "prn": "1", "branch": "CS"}
        )

        assert row["name"] == "Asha"
        assert controller.state.application_open is False

    async def test_rejected_application_raises_with_server_message(self, site_client):
        controller = SiteController(site_client)
        controller.open_application()

        with pytest.raises(SiteClientError) as exc_info:
            await controller.submit_application({"name": "Asha"})

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Missing required fields"
        assert controller.state.application_open is True
