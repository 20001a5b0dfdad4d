"""create_site_tables

Revision ID: 3c9e1f7a2b64
Revises:
Create Date: 2026-10-19 10:12:41.508219

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3c9e1f7a2b64'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CONTENT_TABLES = (
    'projects', 'events', 'gallery_albums', 'team_members', 'alumni',
    'timeline_events', 'achievements', 'partners',
)


def _created_at() -> sa.Column:
    return sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)


def _sort_order() -> sa.Column:
    return sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0')


def upgrade() -> None:
    op.create_table(
        'projects',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('project_year', sa.String(), nullable=True),
        sa.Column('technologies', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('contributors', postgresql.ARRAY(sa.String()), nullable=True),
        sa.Column('github_url', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('registration_url', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'gallery_albums',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('event_date', sa.DateTime(timezone=True), nullable=True),
        _created_at(),
    )
    op.create_index(op.f('ix_gallery_albums_event_date'), 'gallery_albums', ['event_date'], unique=False)
    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('team_role', sa.String(), nullable=True),
        sa.Column('department', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('linkedin_url', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'alumni',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('job_title', sa.String(), nullable=True),
        sa.Column('company', sa.String(), nullable=True),
        sa.Column('graduation_year', sa.String(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        sa.Column('linkedin_url', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'timeline_events',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('year', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'achievements',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('icon', sa.String(), nullable=True),
        sa.Column('link', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )
    op.create_table(
        'partners',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('logo_url', sa.String(), nullable=True),
        sa.Column('website_url', sa.String(), nullable=True),
        _sort_order(),
        _created_at(),
    )

    for table in CONTENT_TABLES:
        if table != 'gallery_albums':
            op.create_index(op.f(f'ix_{table}_sort_order'), table, ['sort_order'], unique=False)

    op.create_table(
        'media_gallery',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column(
            'entity_type',
            sa.Enum('PROJECT', 'EVENT', 'GALLERY', 'TIMELINE', name='media_entity_type'),
            nullable=False
        ),
        sa.Column('entity_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.String(), nullable=False),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        _created_at(),
    )
    op.create_index('ix_media_gallery_entity', 'media_gallery', ['entity_type', 'entity_id'], unique=False)

    # At most one primary image per entity
    op.create_index(
        'uq_media_gallery_primary',
        'media_gallery',
        ['entity_type', 'entity_id'],
        unique=True,
        postgresql_where=sa.text('is_primary'),
    )

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('prn', sa.String(), nullable=False),
        sa.Column('branch', sa.String(), nullable=False),
        sa.Column('year', sa.String(), nullable=True),
        sa.Column('motivation', sa.Text(), nullable=True),
        sa.Column('experience', sa.Text(), nullable=True),
        _created_at(),
    )

    op.create_table(
        'site_config',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('key_name', sa.String(), nullable=False, unique=True),
        sa.Column('value_boolean', sa.Boolean(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    )

    # Applications start closed until the CMS opens them
    op.execute("INSERT INTO site_config (key_name, value_boolean) VALUES ('enrollment_open', false)")


def downgrade() -> None:
    op.drop_table('site_config')
    op.drop_table('applications')
    op.drop_index('uq_media_gallery_primary', table_name='media_gallery')
    op.drop_index('ix_media_gallery_entity', table_name='media_gallery')
    op.drop_table('media_gallery')
    sa.Enum(name='media_entity_type').drop(op.get_bind(), checkfirst=True)

    for table in reversed(CONTENT_TABLES):
        if table == 'gallery_albums':
            op.drop_index(op.f('ix_gallery_albums_event_date'), table_name=table)
        else:
            op.drop_index(op.f(f'ix_{table}_sort_order'), table_name=table)
        op.drop_table(table)
