"""
Image URL resolution for the image hosts the CMS stores URLs from.
Appends resize/quality directives so the site requests a rendition sized for
where the image is shown. Unknown hosts and URLs that already carry
directives are returned untouched, so resolving a URL twice is harmless.
"""
import cloudinary
import logging
import re
from typing import Optional, Tuple
from urllib.parse import urlparse

from chapter_site.config import settings

logger = logging.getLogger(__name__)

# (width, quality) per display context
THUMBNAIL = (600, 80)
PORTRAIT = (400, 85)
LOGO = (300, 90)
FULLSCREEN = (1920, 90)

CLOUDINARY_HOST = "res.cloudinary.com"

# res.cloudinary.com/{cloud_name}/image/upload/{rest}
_CLOUDINARY_PATH = re.compile(r'^/(?P<cloud_name>[^/]+)/image/upload/(?P<rest>.+)$')
_VERSION_SEGMENT = re.compile(r'^v\d+$')
# A path segment made only of transformation parameters, e.g. "c_limit,w_600"
_TRANSFORMATION_PARAM = re.compile(r'^(?:ar|b|bo|c|co|dpr|e|f|fl|g|h|l|o|q|r|t|w|x|y|z)_[^/]+$')


def _is_transformation_segment(segment: str) -> bool:
    return all(_TRANSFORMATION_PARAM.match(part) for part in segment.split(","))


def parse_cloudinary_url(path: str) -> Optional[Tuple[str, Optional[str], str, Optional[str]]]:
    """
    Split a Cloudinary delivery path into its parts.

    Args:
        path: URL path, e.g. "/demo/image/upload/v1700000000/gallery/photo.jpg"

    Returns:
        (cloud_name, version, public_id, format), or None when the path is not
        a plain upload URL or already carries a transformation segment.
    """
    match = _CLOUDINARY_PATH.match(path)
    if not match:
        return None

    segments = match.group("rest").split("/")
    if _is_transformation_segment(segments[0]):
        return None

    version = None
    if _VERSION_SEGMENT.match(segments[0]):
        version = segments[0][1:]
        segments = segments[1:]

    if not segments or not segments[-1]:
        return None

    # Extension is delivered as the format, not part of the public_id
    fmt = None
    if "." in segments[-1]:
        segments[-1], fmt = segments[-1].rsplit(".", 1)

    return match.group("cloud_name"), version, "/".join(segments), fmt


def _cloudinary_rendition(path: str, width: int, quality: int) -> Optional[str]:
    parts = parse_cloudinary_url(path)
    if parts is None:
        return None

    cloud_name, version, public_id, fmt = parts
    options = {
        "cloud_name": cloud_name,
        "secure": True,
        "analytics": False,
        "transformation": [
            {"width": width, "crop": "limit"},
            {"quality": quality, "fetch_format": "auto"},
        ],
    }
    if version:
        options["version"] = version
    if fmt:
        options["format"] = fmt

    return cloudinary.CloudinaryImage(public_id).build_url(**options)


def optimize_image_url(url: Optional[str], width: int = THUMBNAIL[0], quality: int = THUMBNAIL[1]) -> Optional[str]:
    """
    Resolve a stored image URL to a resized rendition.

    Args:
        url: URL as stored in the database (may be None)
        width: Target width in pixels
        quality: Target quality (0-100)

    Returns:
        The rendition URL for Supabase storage and Cloudinary URLs without
        existing parameters; the input unchanged otherwise.
    """
    if not url or "?" in url:
        return url

    parsed = urlparse(url)
    host = (parsed.hostname or "").lower()

    if host.endswith(settings.SUPABASE_STORAGE_HOST_SUFFIX):
        return f"{url}?width={width}&resize=contain&quality={quality}"

    if host == CLOUDINARY_HOST:
        try:
            rendition = _cloudinary_rendition(parsed.path, width, quality)
        except Exception as e:
            logger.warning(f"Could not build Cloudinary rendition for {url}: {str(e)}")
            return url
        return rendition or url

    return url


def resolve(url: Optional[str], size: Tuple[int, int]) -> Optional[str]:
    """Shorthand for optimize_image_url with one of the size presets."""
    width, quality = size
    return optimize_image_url(url, width=width, quality=quality)
