"""
Content aggregation for the landing page.

List mode loads the eight content collections and every media_gallery row
concurrently, attaches a thumbnail plus image counts to the entities that own
media, and renames columns to the shape the front end reads. Detail mode
returns the full image list of a single entity.

The queries run on separate sessions and are not wrapped in a transaction,
so a CMS edit landing mid-request can yield a mixed snapshot.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple
import asyncio
import logging

from sqlalchemy import select, inspect
from sqlalchemy.ext.asyncio import async_sessionmaker

from chapter_site.config import settings
from chapter_site.models import (
    EntityType,
    Project,
    Event,
    GalleryAlbum,
    TeamMember,
    Alumnus,
    TimelineEvent,
    Achievement,
    Partner,
    MediaAsset,
)
from chapter_site.schemas import (
    ContentResponse,
    EntityImagesResponse,
    EventsPartition,
    ProjectOut,
    EventOut,
    GalleryAlbumOut,
    TimelineEventOut,
    TeamMemberOut,
    AlumnusOut,
    AchievementOut,
    PartnerOut,
)
from chapter_site.services.image_service import resolve, THUMBNAIL, PORTRAIT, LOGO, FULLSCREEN

logger = logging.getLogger(__name__)

MediaKey = Tuple[EntityType, int]

# Checked in order; the first substring found in the requested type wins
DETAIL_TYPES = (
    ("project", EntityType.PROJECT),
    ("event", EntityType.EVENT),
    ("gallery", EntityType.GALLERY),
    ("timeline", EntityType.TIMELINE),
)

DEFAULT_ACHIEVEMENT_ICON = "award"


class MediaGroup:
    """Thumbnail and image count of one entity, built from its media rows."""

    __slots__ = ("primary_url", "first_url", "count")

    def __init__(self):
        self.primary_url: Optional[str] = None
        self.first_url: Optional[str] = None
        self.count = 0

    @property
    def thumbnail(self) -> Optional[str]:
        return self.primary_url or self.first_url


def _row_to_dict(row) -> Dict[str, Any]:
    return {attr.key: getattr(row, attr.key) for attr in inspect(row).mapper.column_attrs}


async def _fetch_rows(session_factory: async_sessionmaker, query) -> List[Dict[str, Any]]:
    async with session_factory() as session:
        result = await session.execute(query)
        return [_row_to_dict(row) for row in result.scalars().all()]


def build_media_index(media_rows: List[Dict[str, Any]]) -> Dict[MediaKey, MediaGroup]:
    """
    Group media rows by owning entity.

    The primary row supplies the thumbnail; without one the first row seen
    stands in. Counts include every row of the entity.
    """
    index: Dict[MediaKey, MediaGroup] = {}
    for media in media_rows:
        key = (EntityType(media["entity_type"]), media["entity_id"])
        summary = index.get(key)
        if summary is None:
            summary = index[key] = MediaGroup()

        summary.count += 1
        if summary.first_url is None:
            summary.first_url = media["image_url"]
        if media["is_primary"] and summary.primary_url is None:
            summary.primary_url = media["image_url"]

    return index


def attach_media(item: Dict[str, Any], entity_type: EntityType, media_index: Dict[MediaKey, MediaGroup]) -> Dict[str, Any]:
    """Add images/totalImages/detailsLoaded to a content row."""
    summary = media_index.get((entity_type, item["id"]))

    if summary is None or summary.thumbnail is None:
        images = [settings.PLACEHOLDER_IMAGE_URL]
        total = 1
    else:
        images = [resolve(summary.thumbnail, THUMBNAIL)]
        total = summary.count

    return {
        **item,
        "images": images,
        "totalImages": total,
        "detailsLoaded": total <= 1,
    }


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; stored values are UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def partition_events(events: List[EventOut], now: Optional[datetime] = None) -> EventsPartition:
    """
    Split events into upcoming (date >= now) and past (date < now).
    Undated events have not happened yet and are listed as upcoming.
    """
    now = _as_utc(now or datetime.now(timezone.utc))
    partition = EventsPartition()
    for event in events:
        if event.date is None or _as_utc(event.date) >= now:
            partition.upcoming.append(event)
        else:
            partition.past.append(event)
    return partition


def _project(row: Dict[str, Any], media_index) -> ProjectOut:
    item = attach_media(row, EntityType.PROJECT, media_index)
    technologies = row.get("technologies") or []
    contributors = row.get("contributors") or []
    return ProjectOut.model_validate({
        **item,
        "technologies": technologies,
        "contributors": contributors,
        "year": row.get("project_year"),
        "teamMembers": contributors,
    })


def _event(row: Dict[str, Any], media_index) -> EventOut:
    item = attach_media(row, EntityType.EVENT, media_index)
    return EventOut.model_validate({**item, "date": row.get("event_date")})


def _team_member(row: Dict[str, Any]) -> TeamMemberOut:
    return TeamMemberOut.model_validate({
        **row,
        "role": row.get("team_role"),
        "image": resolve(row.get("image_url"), PORTRAIT),
    })


def _alumnus(row: Dict[str, Any]) -> AlumnusOut:
    return AlumnusOut.model_validate({
        **row,
        "currentRole": row.get("job_title"),
        "year": row.get("graduation_year"),
        "image": resolve(row.get("image_url"), PORTRAIT),
        "link": row.get("linkedin_url"),
    })


def _achievement(row: Dict[str, Any]) -> AchievementOut:
    return AchievementOut.model_validate({**row, "icon": row.get("icon") or DEFAULT_ACHIEVEMENT_ICON})


def _partner(row: Dict[str, Any]) -> PartnerOut:
    return PartnerOut.model_validate({
        **row,
        "logoUrl": resolve(row.get("logo_url"), LOGO),
        "websiteUrl": row.get("website_url"),
    })


async def fetch_content(session_factory: async_sessionmaker, now: Optional[datetime] = None) -> ContentResponse:
    """
    Load every landing page collection in one round of concurrent queries.

    A collection whose query fails is logged and returned empty; a failed
    media query leaves every entity on the placeholder image.

    Args:
        session_factory: Factory used to open one session per query
        now: Instant events are partitioned against (defaults to current time)

    Returns:
        ContentResponse: All groups, denormalized and renamed
    """
    queries = {
        "media": select(MediaAsset).order_by(MediaAsset.is_primary.desc(), MediaAsset.id.asc()),
        "projects": select(Project).order_by(Project.sort_order.asc()),
        "events": select(Event).order_by(Event.sort_order.asc()),
        "gallery": select(GalleryAlbum).order_by(GalleryAlbum.event_date.desc().nullslast()),
        "team": select(TeamMember).order_by(TeamMember.sort_order.asc()),
        "alumni": select(Alumnus).order_by(Alumnus.sort_order.asc()),
        "timeline": select(TimelineEvent).order_by(TimelineEvent.sort_order.asc()),
        "achievements": select(Achievement).order_by(Achievement.sort_order.asc()),
        "partners": select(Partner).order_by(Partner.sort_order.asc()),
    }

    results = await asyncio.gather(
        *(_fetch_rows(session_factory, query) for query in queries.values()),
        return_exceptions=True
    )

    rows: Dict[str, List[Dict[str, Any]]] = {}
    failed = []
    for name, result in zip(queries, results):
        if isinstance(result, Exception):
            logger.error(f"Failed to load {name}: {str(result)}", exc_info=result)
            failed.append(name)
            rows[name] = []
        else:
            rows[name] = result

    if failed:
        logger.warning(f"Content served with empty groups: {', '.join(failed)}")

    media_index = build_media_index(rows["media"])

    events = [_event(row, media_index) for row in rows["events"]]

    response = ContentResponse(
        projects_data=[_project(row, media_index) for row in rows["projects"]],
        gallery=[
            GalleryAlbumOut.model_validate(attach_media(row, EntityType.GALLERY, media_index))
            for row in rows["gallery"]
        ],
        events=partition_events(events, now),
        team=[_team_member(row) for row in rows["team"]],
        alumni=[_alumnus(row) for row in rows["alumni"]],
        timeline_events=[
            TimelineEventOut.model_validate(attach_media(row, EntityType.TIMELINE, media_index))
            for row in rows["timeline"]
        ],
        achievements=[_achievement(row) for row in rows["achievements"]],
        partners_data=[_partner(row) for row in rows["partners"]],
    )

    logger.info(
        f"Aggregated content: {len(response.projects_data)} projects, "
        f"{len(events)} events, {len(response.gallery)} albums, "
        f"{len(rows['media'])} media rows"
    )
    return response


def entity_type_for(kind: Optional[str]) -> Optional[EntityType]:
    """
    Map a detail request type such as "project_details" to its media entity type.
    Matching is by case-sensitive substring to accept the suffixed values the
    front end sends.
    """
    if not kind:
        return None
    for needle, entity_type in DETAIL_TYPES:
        if needle in kind:
            return entity_type
    return None


async def fetch_entity_images(session_factory: async_sessionmaker, kind: str, entity_id: str) -> EntityImagesResponse:
    """
    Return every image of one entity, primary first, sized for full-screen display.

    Unknown types, non-numeric ids and read failures all yield an empty list.
    """
    entity_type = entity_type_for(kind)
    if entity_type is None:
        logger.info(f"Image request for unknown content type: {kind}")
        return EntityImagesResponse(images=[])

    try:
        key = int(entity_id)
    except (TypeError, ValueError):
        logger.info(f"Image request with non-numeric id: {entity_id}")
        return EntityImagesResponse(images=[])

    query = (
        select(MediaAsset)
        .where(MediaAsset.entity_type == entity_type, MediaAsset.entity_id == key)
        .order_by(MediaAsset.is_primary.desc(), MediaAsset.id.asc())
    )

    try:
        media_rows = await _fetch_rows(session_factory, query)
    except Exception as e:
        logger.error(f"Failed to load images for {entity_type.value} {key}: {str(e)}", exc_info=True)
        return EntityImagesResponse(images=[])

    return EntityImagesResponse(images=[resolve(m["image_url"], FULLSCREEN) for m in media_rows])
