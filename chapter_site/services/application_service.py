"""
Membership application intake.
Validates submitted form data and stores exactly one applications row per call.
"""
from typing import Any
import logging

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from chapter_site.exceptions import ValidationError, StorageError
from chapter_site.models import Application
from chapter_site.schemas import ApplicationCreate

logger = logging.getLogger(__name__)


def parse_application(body: Any) -> ApplicationCreate:
    """
    Turn a decoded JSON body into a validated ApplicationCreate.

    Args:
        body: Whatever the client sent, already JSON-decoded

    Returns:
        ApplicationCreate with every required field present and non-blank

    Raises:
        ValidationError: If the body is not an object, a field has an
            unusable type, or a required field is missing or blank
    """
    if not isinstance(body, dict):
        logger.warning(f"Application body is not an object: {type(body).__name__}")
        raise ValidationError()

    try:
        payload = ApplicationCreate.model_validate(body)
    except SchemaValidationError as e:
        logger.warning(f"Application fields failed validation: {e.errors()}")
        raise ValidationError("Invalid application fields")

    missing = payload.missing_required_fields()
    if missing:
        logger.info(f"Rejected application missing fields: {', '.join(missing)}")
        raise ValidationError()

    return payload


def _store_message(error: SQLAlchemyError) -> str:
    # Prefer the driver's own message over SQLAlchemy's wrapped statement dump
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)


async def submit_application(db: AsyncSession, payload: ApplicationCreate) -> Application:
    """
    Insert one application row.

    Submissions are not deduplicated; each call stores a new row.

    Returns:
        Application: The inserted row with generated id and created_at

    Raises:
        StorageError: If the insert fails; carries the store's message
    """
    application = Application(**payload.model_dump())

    try:
        db.add(application)
        await db.flush()
        await db.refresh(application)
        await db.commit()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Failed to store application for {payload.email}: {str(e)}", exc_info=True)
        raise StorageError(_store_message(e))

    logger.info(f"Stored application {application.id} ({payload.branch})")
    return application
