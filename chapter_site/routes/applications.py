"""
Membership application routes.
Enrollment status lookup for the apply button and the application form submission.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from chapter_site.config import settings
from chapter_site.database import get_db
from chapter_site.exceptions import ServerError
from chapter_site.schemas import ApplicationResponse, ApplicationSubmitResponse, ButtonStatusResponse
from chapter_site.services.application_service import parse_application, submit_application
from chapter_site.services.site_config_service import get_flag
from chapter_site.utils.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/button-status", response_model=ButtonStatusResponse)
async def get_button_status(db: AsyncSession = Depends(get_db)):
    """
    Report whether membership applications are open.
    Always answers; a missing or unreadable flag reports enabled=false.
    """
    enabled = await get_flag(db, settings.ENROLLMENT_FLAG_KEY)
    return ButtonStatusResponse(enabled=enabled)


@router.post("/apply", response_model=ApplicationSubmitResponse)
@limiter.limit(settings.APPLY_RATE_LIMIT)
async def apply(request: Request, db: AsyncSession = Depends(get_db)):
    """
    Submit a membership application.

    The body is read as raw JSON rather than bound to a schema so that
    missing fields produce the form's single "Missing required fields" error.

    Args:
        request: Incoming request carrying the JSON body
        db: Database session (injected by FastAPI dependency)

    Returns:
        ApplicationSubmitResponse: Confirmation message and the stored row

    Raises:
        ValidationError: 400 if required fields are missing
        StorageError: 500 with the store's message if the insert fails
        ServerError: 500 if the body is not valid JSON
    """
    try:
        body = await request.json()
    except ValueError as e:
        logger.error(f"Unreadable application body: {str(e)}")
        raise ServerError()

    payload = parse_application(body)
    application = await submit_application(db, payload)

    return ApplicationSubmitResponse(
        message="Application submitted successfully",
        data=ApplicationResponse.model_validate(application)
    )
