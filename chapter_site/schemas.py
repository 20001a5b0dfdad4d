"""
Pydantic schemas for request and response data validation.
Defines data structures for API endpoints with automatic validation and serialization.

Response fields consumed by the site front end use camelCase aliases
(totalImages, currentRole, ...); snake_case column names are passed through
alongside them.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import datetime
from typing import ClassVar, Optional, List, Tuple


class _ContentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class MediaSummary(_ContentModel):
    """
    Thumbnail fields attached to entities that own media_gallery rows.

    images holds only the resolved thumbnail until the client fetches the
    full set through detail mode.
    """
    images: List[str]
    total_images: int = Field(alias="totalImages")
    details_loaded: bool = Field(alias="detailsLoaded")


class ProjectOut(MediaSummary):
    id: int
    title: str
    description: Optional[str] = None
    sort_order: int = 0
    project_year: Optional[str] = None
    technologies: List[str] = []
    contributors: List[str] = []
    github_url: Optional[str] = None
    created_at: Optional[datetime] = None
    year: Optional[str] = None
    team_members: List[str] = Field(default_factory=list, alias="teamMembers")


class EventOut(MediaSummary):
    id: int
    title: str
    description: Optional[str] = None
    event_date: Optional[datetime] = None
    location: Optional[str] = None
    registration_url: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None
    date: Optional[datetime] = None


class GalleryAlbumOut(MediaSummary):
    id: int
    title: str
    description: Optional[str] = None
    event_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


class TimelineEventOut(MediaSummary):
    id: int
    title: str
    description: Optional[str] = None
    year: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None


class TeamMemberOut(_ContentModel):
    id: int
    name: str
    team_role: Optional[str] = None
    department: Optional[str] = None
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None
    role: Optional[str] = None
    image: Optional[str] = None


class AlumnusOut(_ContentModel):
    id: int
    name: str
    job_title: Optional[str] = None
    company: Optional[str] = None
    graduation_year: Optional[str] = None
    image_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None
    current_role: Optional[str] = Field(None, alias="currentRole")
    year: Optional[str] = None
    image: Optional[str] = None
    link: Optional[str] = None


class AchievementOut(_ContentModel):
    id: int
    title: str
    description: Optional[str] = None
    icon: str = "award"
    link: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None


class PartnerOut(_ContentModel):
    id: int
    name: str
    logo_url: Optional[str] = None
    website_url: Optional[str] = None
    sort_order: int = 0
    created_at: Optional[datetime] = None
    resolved_logo_url: Optional[str] = Field(None, alias="logoUrl")
    resolved_website_url: Optional[str] = Field(None, alias="websiteUrl")


class EventsPartition(BaseModel):
    upcoming: List[EventOut] = []
    past: List[EventOut] = []


class ContentResponse(_ContentModel):
    """
    Response schema for GET /api/content in list mode.
    Every group is present; a group whose query failed is empty.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    projects_data: List[ProjectOut] = Field(default_factory=list, alias="projectsData")
    gallery: List[GalleryAlbumOut] = []
    events: EventsPartition = Field(default_factory=EventsPartition)
    team: List[TeamMemberOut] = []
    alumni: List[AlumnusOut] = []
    timeline_events: List[TimelineEventOut] = Field(default_factory=list, alias="timelineEvents")
    achievements: List[AchievementOut] = []
    partners_data: List[PartnerOut] = Field(default_factory=list, alias="partnersData")


class EntityImagesResponse(BaseModel):
    """Response schema for GET /api/content in detail mode."""
    images: List[str] = []

    # Keeps the two /api/content shapes from validating as each other
    model_config = ConfigDict(extra="forbid")


class ButtonStatusResponse(BaseModel):
    enabled: bool


class ApplicationCreate(BaseModel):
    """
    Request schema for POST /api/apply.

    Every field is optional at the schema level so that a missing required
    field is reported as "Missing required fields" rather than a per-field
    validation error; see missing_required_fields().
    """
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    prn: Optional[str] = None
    branch: Optional[str] = None
    year: Optional[str] = None
    motivation: Optional[str] = None
    experience: Optional[str] = None

    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "email", "prn", "branch")

    @field_validator("*", mode="before")
    @classmethod
    def coerce_numbers(cls, v):
        # HTML forms may post year or prn as numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    def missing_required_fields(self) -> List[str]:
        return [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]


class ApplicationResponse(BaseModel):
    """Inserted application row, including generated id and timestamp."""
    id: int
    name: str
    email: str
    phone: Optional[str] = None
    prn: str
    branch: str
    year: Optional[str] = None
    motivation: Optional[str] = None
    experience: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ApplicationSubmitResponse(BaseModel):
    message: str
    data: ApplicationResponse
