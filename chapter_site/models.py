"""
SQLAlchemy models for the application.
All database models inherit from Base (declarative base).

Content tables are maintained through the external CMS and only read here;
applications are insert-only.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, Enum, JSON, Index
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.sql import func
from chapter_site.database import Base

# text[] on PostgreSQL, JSON-encoded list on SQLite
StringList = ARRAY(String).with_variant(JSON(), "sqlite")


class EntityType(str, enum.Enum):
    """Kinds of content that can own rows in media_gallery."""
    PROJECT = "PROJECT"
    EVENT = "EVENT"
    GALLERY = "GALLERY"
    TIMELINE = "TIMELINE"


class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    project_year = Column(String, nullable=True)
    technologies = Column(StringList, nullable=True)
    contributors = Column(StringList, nullable=True)
    github_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Event(Base):
    """
    Chapter event. event_date is stored timezone-qualified so that
    upcoming/past partitioning compares instants, not local wall times.
    """
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True)
    location = Column(String, nullable=True)
    registration_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class GalleryAlbum(Base):
    __tablename__ = "gallery_albums"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(DateTime(timezone=True), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TeamMember(Base):
    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    team_role = Column(String, nullable=True)
    department = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Alumnus(Base):
    __tablename__ = "alumni"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    job_title = Column(String, nullable=True)
    company = Column(String, nullable=True)
    graduation_year = Column(String, nullable=True)
    image_url = Column(String, nullable=True)
    linkedin_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class TimelineEvent(Base):
    __tablename__ = "timeline_events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    year = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Achievement(Base):
    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String, nullable=True)
    link = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Partner(Base):
    __tablename__ = "partners"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    logo_url = Column(String, nullable=True)
    website_url = Column(String, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class MediaAsset(Base):
    """
    Image attached to a project, event, gallery album or timeline entry.
    Rows are keyed to their owner by (entity_type, entity_id).
    """
    __tablename__ = "media_gallery"
    __table_args__ = (
        Index("ix_media_gallery_entity", "entity_type", "entity_id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(Enum(EntityType, name="media_entity_type"), nullable=False)
    entity_id = Column(Integer, nullable=False)
    image_url = Column(String, nullable=False)
    is_primary = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Application(Base):
    """Membership application submitted through the site form."""
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    prn = Column(String, nullable=False)
    branch = Column(String, nullable=False)
    year = Column(String, nullable=True)
    motivation = Column(Text, nullable=True)
    experience = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class SiteConfig(Base):
    """Named boolean switches flipped from the CMS (e.g. enrollment_open)."""
    __tablename__ = "site_config"

    id = Column(Integer, primary_key=True, index=True)
    key_name = Column(String, nullable=False, unique=True)
    value_boolean = Column(Boolean, nullable=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
