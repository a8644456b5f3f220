"""
Lambda@Edge origin-response handler.

CloudFront calls handler() after a successful S3 fetch. The image is either
passed through untouched or replaced by a resized / re-encoded copy, driven by
the query string (width, height, quality, format, cropped) and the viewer's
Accept header.
"""
import logging
from urllib.parse import unquote

import image_processor
from directives import parse_directives
from eligibility import check_object, check_request
from models import unpack_event
from settings import configure_logging
from storage_client import S3Storage
from transform import apply_plan, build_plan

configure_logging()
logger = logging.getLogger(__name__)


def _log_error(context: str, exc: Exception) -> None:
    """Write one diagnostic line (with traceback) for a failed invocation."""
    logger.error("%s: %s: %s", context, type(exc).__name__, exc, exc_info=exc)


def object_key(uri: str) -> str:
    return unquote(uri[1:] if uri.startswith("/") else uri)


class ImageProxy:
    """
    The transform pipeline with its collaborators injected.

    storage — object with fetch(location, key) -> StoredObject
    codec   — object with is_animated(bytes), render(bytes, plan)
    """

    def __init__(self, storage, codec=image_processor):
        self.storage = storage
        self.codec   = codec

    def process(self, event: dict) -> dict:
        """Run the pipeline. Collaborator errors propagate to the caller."""
        request, response = unpack_event(event)

        location = check_request(request, response)
        if location is None:
            return response

        directives = parse_directives(request.querystring)
        key        = object_key(request.uri)
        stored     = self.storage.fetch(location, key)

        if not check_object(stored, directives, self.codec.is_animated):
            return response

        plan = build_plan(request, directives, stored.content_type)
        logger.info("Transforming s3://%s/%s with %s", location.bucket, key, plan)
        return apply_plan(response, stored.body, plan, self.codec)

    def handle(self, event: dict) -> dict | None:
        """
        Failure boundary: any error aborts the invocation with no response.

        Returning None (rather than the original response) leaves CloudFront
        to its own default handling.
        """
        try:
            return self.process(event)
        except Exception as e:
            _log_error("Image processing failed", e)
            return None


_proxy: ImageProxy | None = None


def get_proxy() -> ImageProxy:
    global _proxy
    if _proxy is None:
        _proxy = ImageProxy(storage=S3Storage())
    return _proxy


def handler(event, context):
    return get_proxy().handle(event)
