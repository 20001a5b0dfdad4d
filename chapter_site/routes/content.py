"""
Content routes for the landing page.
Provides the aggregated content load and the per-entity image lookup.
"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import async_sessionmaker
from typing import Optional, Union
import logging

from chapter_site.database import get_session_factory
from chapter_site.exceptions import ServerError
from chapter_site.schemas import ContentResponse, EntityImagesResponse
from chapter_site.services.content_service import fetch_content, fetch_entity_images

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/content", response_model=Union[EntityImagesResponse, ContentResponse])
async def get_content(
    type: Optional[str] = Query(None, description="Entity kind for detail mode, e.g. project_details"),
    id: Optional[str] = Query(None, description="Entity id for detail mode"),
    session_factory: async_sessionmaker = Depends(get_session_factory)
):
    """
    Get landing page content.

    Without parameters, returns every content group with a thumbnail per
    entity (list mode). With both type and id, returns the full image list
    of that entity (detail mode).

    Args:
        type: Entity kind; matched by substring (project, event, gallery, timeline)
        id: Entity id
        session_factory: Session factory (injected by FastAPI dependency)

    Returns:
        EntityImagesResponse in detail mode, ContentResponse otherwise

    Raises:
        ServerError: 500 if the response cannot be assembled at all
    """
    if type and id:
        return await fetch_entity_images(session_factory, type, id)

    try:
        return await fetch_content(session_factory)
    except Exception as e:
        logger.error(f"Content aggregation failed: {str(e)}", exc_info=True)
        raise ServerError("Server Error")
