"""
Guards that decide whether a response is passed through untouched.

Cheap checks on the event come first; the object-level checks need the
fetched object and run only after the storage call.
"""
import re
import logging
from typing import Callable

from formats import ORIGINAL
from models import EdgeRequest, StorageLocation, StoredObject, TransformDirectives
from settings import ALLOWED_CONTENT_TYPES, GIF_CONTENT_TYPE

logger = logging.getLogger(__name__)

# <bucket>.s3[.<region>].amazonaws.com
_S3_HOST = re.compile(r"([^.]*)\.s3(\.[^.]*)?\.amazonaws\.com", re.IGNORECASE)

SUCCESS_STATUS = "200"


def parse_storage_location(host: str) -> StorageLocation | None:
    match = _S3_HOST.search(host or "")
    if not match or not match.group(1):
        return None
    region = match.group(2)[1:] if match.group(2) else None
    return StorageLocation(bucket=match.group(1), region=region)


def check_request(request: EdgeRequest, response: dict) -> StorageLocation | None:
    """
    Run the pre-fetch guards.

    Returns the storage location to fetch from, or None to pass through.
    """
    if response.get("status") != SUCCESS_STATUS:
        logger.debug("Passthrough: status %r", response.get("status"))
        return None

    host = request.storage_host
    if not host:
        logger.debug("Passthrough: origin is not an S3 origin")
        return None

    location = parse_storage_location(host)
    if location is None:
        logger.debug("Passthrough: %r is not an S3 host", host)
    return location


def check_object(
    stored: StoredObject,
    directives: TransformDirectives,
    is_animated: Callable[[bytes], bool],
) -> bool:
    """Run the post-fetch guards. True means the object may be transformed."""
    if stored.content_type not in ALLOWED_CONTENT_TYPES:
        logger.debug("Passthrough: content type %r", stored.content_type)
        return False

    if stored.content_type != GIF_CONTENT_TYPE:
        return True

    if is_animated(stored.body):
        logger.debug("Passthrough: animated GIF")
        return False

    if directives.format == ORIGINAL:
        logger.debug("Passthrough: GIF with format=original")
        return False

    return True
