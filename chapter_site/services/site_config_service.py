"""
Reads boolean switches from the site_config table.
"""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from chapter_site.models import SiteConfig

logger = logging.getLogger(__name__)


async def get_flag(db: AsyncSession, key_name: str) -> bool:
    """
    Read a named boolean from site_config.

    Any failure (missing table, missing row, null value, connection error)
    reads as False so the site keeps the feature switched off instead of erroring.
    """
    try:
        result = await db.execute(
            select(SiteConfig.value_boolean).where(SiteConfig.key_name == key_name)
        )
        value = result.scalar_one_or_none()
    except Exception as e:
        logger.error(f"Could not read site_config flag '{key_name}': {str(e)}")
        try:
            await db.rollback()
        except Exception as rollback_error:
            logger.warning(f"Rollback after failed flag read also failed: {str(rollback_error)}")
        return False

    if value is None:
        logger.info(f"site_config flag '{key_name}' is not set, treating as disabled")
        return False

    return bool(value)
