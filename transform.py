"""
Decide-then-execute: build an immutable TransformPlan, then apply it once.
"""
import base64
import logging

from directives import effective_quality
from formats import resolve_format
from geometry import resolve_resize
from models import EdgeRequest, TransformDirectives, TransformPlan
from settings import MAX_BODY_SIZE

logger = logging.getLogger(__name__)


def build_plan(request: EdgeRequest, directives: TransformDirectives, content_type: str) -> TransformPlan:
    encoding, header = resolve_format(content_type, directives.format, request.headers)
    return TransformPlan(
        encoding=encoding,
        quality=effective_quality(directives),
        content_type=header,
        resize=resolve_resize(directives),
    )


def apply_plan(response: dict, source: bytes, plan: TransformPlan, codec) -> dict:
    """
    Render the plan and commit it to the response.

    If the base64 body would exceed the edge runtime's limit the response is
    returned untouched instead.
    """
    output = codec.render(source, plan)
    body   = base64.b64encode(output).decode("utf-8")

    if len(body.encode("utf-8")) > MAX_BODY_SIZE:
        logger.info("Passthrough: transformed body is %d bytes (limit %d)", len(body), MAX_BODY_SIZE)
        return response

    if not plan.is_noop:
        logger.info("Transformed image: %s px, %d bytes", codec.measure(output), len(output))

    if plan.content_type:
        response.setdefault("headers", {})["content-type"] = [
            {"key": "Content-Type", "value": plan.content_type},
        ]

    response["body"]         = body
    response["bodyEncoding"] = "base64"
    return response
