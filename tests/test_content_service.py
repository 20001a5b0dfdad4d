"""Tests for content aggregation"""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy import text

from chapter_site.config import settings
from chapter_site.models import EntityType, Project, Event, GalleryAlbum, Partner, MediaAsset
from chapter_site.schemas import EventOut
from chapter_site.services.content_service import (
    attach_media,
    build_media_index,
    entity_type_for,
    fetch_content,
    fetch_entity_images,
    partition_events,
)


def media(entity_type, entity_id, url, is_primary=False):
    return {"entity_type": entity_type, "entity_id": entity_id, "image_url": url, "is_primary": is_primary}


def event(event_id, date):
    return EventOut(id=event_id, title=f"Event {event_id}", images=["x"], totalImages=1, detailsLoaded=True, date=date)


@pytest.mark.unit
class TestMediaIndex:

    def test_no_media_gets_placeholder(self):
        item = attach_media({"id": 1}, EntityType.PROJECT, {})
        assert item["images"] == [settings.PLACEHOLDER_IMAGE_URL]
        assert item["totalImages"] == 1
        assert item["detailsLoaded"] is True

    def test_single_non_primary_asset_stands_in(self):
        index = build_media_index([media(EntityType.PROJECT, 1, "only.jpg")])
        item = attach_media({"id": 1}, EntityType.PROJECT, index)
        assert item["images"] == ["only.jpg"]
        assert item["totalImages"] == 1
        assert item["detailsLoaded"] is True

    def test_primary_wins_regardless_of_row_order(self):
        index = build_media_index([
            media(EntityType.EVENT, 4, "first.jpg"),
            media(EntityType.EVENT, 4, "cover.jpg", is_primary=True),
            media(EntityType.EVENT, 4, "third.jpg"),
        ])
        item = attach_media({"id": 4}, EntityType.EVENT, index)
        assert item["images"] == ["cover.jpg"]
        assert item["totalImages"] == 3
        assert item["detailsLoaded"] is False

    def test_first_asset_used_when_none_primary(self):
        index = build_media_index([
            media(EntityType.GALLERY, 2, "a.jpg"),
            media(EntityType.GALLERY, 2, "b.jpg"),
        ])
        assert attach_media({"id": 2}, EntityType.GALLERY, index)["images"] == ["a.jpg"]

    def test_keys_do_not_cross_entity_types(self):
        index = build_media_index([media(EntityType.PROJECT, 1, "project.jpg")])
        item = attach_media({"id": 1}, EntityType.TIMELINE, index)
        assert item["images"] == [settings.PLACEHOLDER_IMAGE_URL]


@pytest.mark.unit
class TestEventPartition:

    def test_disjoint_cover(self):
        now = datetime(2026, 6, 1, tzinfo=timezone.utc)
        events = [
            event(1, now - timedelta(days=1)),
            event(2, now),
            event(3, now + timedelta(days=30)),
            event(4, datetime(2020, 1, 1)),  # naive, read as UTC
        ]
        partition = partition_events(events, now)

        assert [e.id for e in partition.upcoming] == [2, 3]
        assert [e.id for e in partition.past] == [1, 4]

    def test_undated_event_is_upcoming(self):
        partition = partition_events([event(1, None)], datetime(2026, 6, 1, tzinfo=timezone.utc))
        assert [e.id for e in partition.upcoming] == [1]
        assert partition.past == []


@pytest.mark.unit
@pytest.mark.parametrize("kind, expected", [
    ("project_details", EntityType.PROJECT),
    ("event_details", EntityType.EVENT),
    ("gallery", EntityType.GALLERY),
    ("timeline_details", EntityType.TIMELINE),
    ("Project", None),
    ("team", None),
    ("", None),
    (None, None),
])
def test_entity_type_for(kind, expected):
    assert entity_type_for(kind) == expected


async def test_fetch_content_orders_and_renames(session_factory, add_rows):
    await add_rows(
        Project(title="Second", sort_order=2, project_year="2024", technologies=["Python"]),
        Project(title="First", sort_order=1, contributors=["Asha", "Ravi"]),
        GalleryAlbum(title="Old", event_date=datetime(2023, 1, 1, tzinfo=timezone.utc)),
        GalleryAlbum(title="New", event_date=datetime(2025, 1, 1, tzinfo=timezone.utc)),
    )

    content = await fetch_content(session_factory)

    assert [p.title for p in content.projects_data] == ["First", "Second"]
    first, second = content.projects_data
    assert first.technologies == []
    assert first.team_members == ["Asha", "Ravi"]
    assert second.year == "2024"
    assert second.technologies == ["Python"]
    assert [g.title for g in content.gallery] == ["New", "Old"]


async def test_fetch_content_survives_failed_group(test_engine, session_factory, add_rows):
    await add_rows(
        Project(title="Kept", sort_order=1),
        Partner(name="Gone", sort_order=1),
    )
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE partners"))

    content = await fetch_content(session_factory)

    assert [p.title for p in content.projects_data] == ["Kept"]
    assert content.partners_data == []


async def test_fetch_content_without_media_table_uses_placeholder(test_engine, session_factory, add_rows):
    await add_rows(Event(title="Meetup", sort_order=1, event_date=datetime(2999, 1, 1, tzinfo=timezone.utc)))
    async with test_engine.begin() as conn:
        await conn.execute(text("DROP TABLE media_gallery"))

    content = await fetch_content(session_factory)

    upcoming = content.events.upcoming
    assert len(upcoming) == 1
    assert upcoming[0].images == [settings.PLACEHOLDER_IMAGE_URL]
    assert upcoming[0].details_loaded is True


async def test_fetch_entity_images_primary_first(session_factory, add_rows):
    await add_rows(
        MediaAsset(entity_type=EntityType.TIMELINE, entity_id=7, image_url="one.jpg"),
        MediaAsset(entity_type=EntityType.TIMELINE, entity_id=7, image_url="two.jpg"),
        MediaAsset(entity_type=EntityType.TIMELINE, entity_id=7, image_url="cover.jpg", is_primary=True),
        MediaAsset(entity_type=EntityType.PROJECT, entity_id=7, image_url="other.jpg"),
    )

    result = await fetch_entity_images(session_factory, "timeline_details", "7")

    assert result.images == ["cover.jpg", "one.jpg", "two.jpg"]


async def test_fetch_entity_images_bad_id(session_factory):
    result = await fetch_entity_images(session_factory, "project_details", "abc")
    assert result.images == []
