"""
Client-side view state of the landing page.

SiteState is an immutable, serializable snapshot; every transition is a
plain function that takes a state and returns a new one.
"""
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

# Entity kind -> content group(s) holding items of that kind
CONTENT_GROUPS = {
    "project": (("projectsData",),),
    "event": (("events", "upcoming"), ("events", "past")),
    "gallery": (("gallery",),),
    "timeline": (("timelineEvents",),),
}


class DetailsModal(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_open: bool = False
    kind: str = ""
    item: Optional[Dict[str, Any]] = None


class FullscreenViewer(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_open: bool = False
    gallery: Tuple[str, ...] = ()
    start_index: int = 0


class SiteState(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: Dict[str, Any] = {}
    enrollment_open: bool = False
    details: DetailsModal = DetailsModal()
    application_open: bool = False
    viewer: FullscreenViewer = FullscreenViewer()

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SiteState":
        return cls.model_validate(data)


def _empty_content() -> Dict[str, Any]:
    return {
        "projectsData": [],
        "gallery": [],
        "events": {"upcoming": [], "past": []},
        "team": [],
        "alumni": [],
        "timelineEvents": [],
        "achievements": [],
        "partnersData": [],
    }


def content_loaded(state: SiteState, content: Dict[str, Any]) -> SiteState:
    """Replace loaded content; groups missing from the response become empty."""
    merged = _empty_content()
    for key, value in content.items():
        if key == "events":
            merged["events"] = {
                "upcoming": list((value or {}).get("upcoming") or []),
                "past": list((value or {}).get("past") or []),
            }
        elif key in merged:
            merged[key] = list(value or [])
    return state.model_copy(update={"content": merged})


def enrollment_loaded(state: SiteState, enabled: bool) -> SiteState:
    return state.model_copy(update={"enrollment_open": bool(enabled)})


def open_details(state: SiteState, kind: str, item: Dict[str, Any]) -> SiteState:
    return state.model_copy(update={"details": DetailsModal(is_open=True, kind=kind, item=dict(item))})


def close_details(state: SiteState) -> SiteState:
    return state.model_copy(update={"details": DetailsModal()})


def with_images(item: Dict[str, Any], images: List[str]) -> Dict[str, Any]:
    """Item with its full image list merged in and marked as loaded."""
    return {**item, "images": list(images), "detailsLoaded": True}


def details_loaded(state: SiteState, kind: str, item_id: Any, images: List[str]) -> SiteState:
    """
    Record the full image list of one entity.

    Updates the matching item in its content group and, when it is the item
    shown in the details modal, the modal copy as well.
    """
    content = dict(state.content)
    for path in CONTENT_GROUPS.get(kind, ()):
        if path[0] not in content:
            continue
        if len(path) == 1:
            content[path[0]] = [
                with_images(i, images) if i.get("id") == item_id else i
                for i in content[path[0]]
            ]
        else:
            group = dict(content[path[0]])
            group[path[1]] = [
                with_images(i, images) if i.get("id") == item_id else i
                for i in group.get(path[1], [])
            ]
            content[path[0]] = group

    update: Dict[str, Any] = {"content": content}
    details = state.details
    if details.is_open and details.kind == kind and details.item and details.item.get("id") == item_id:
        update["details"] = details.model_copy(update={"item": with_images(details.item, images)})

    return state.model_copy(update=update)


def open_application(state: SiteState) -> SiteState:
    return state.model_copy(update={"application_open": True})


def close_application(state: SiteState) -> SiteState:
    return state.model_copy(update={"application_open": False})


def open_viewer(state: SiteState, images: List[str], start_index: int = 0) -> SiteState:
    images = tuple(images)
    if images:
        start_index = max(0, min(start_index, len(images) - 1))
    else:
        start_index = 0
    return state.model_copy(update={"viewer": FullscreenViewer(is_open=True, gallery=images, start_index=start_index)})


def close_viewer(state: SiteState) -> SiteState:
    return state.model_copy(update={"viewer": FullscreenViewer()})
