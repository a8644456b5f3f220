"""
Pillow-backed codec: decode, resize, re-encode, measure.

The module itself is the default codec handed to app.ImageProxy; any object
exposing is_animated(), measure() and render() can stand in for it.
"""
import io
import logging

from PIL import Image

from errors import ImageTransformError
from formats import FORMATS
from geometry import crop_box, scaled_size
from models import ResizeSpec, TransformPlan

logger = logging.getLogger(__name__)

# Modes each encoder writes without conversion
_NATIVE_MODES = {
    "JPEG": {"RGB", "L", "CMYK"},
    "WEBP": {"RGB", "RGBA"},
    "PNG":  {"1", "L", "LA", "I", "I;16", "P", "RGB", "RGBA"},
}


def open_image(data: bytes) -> Image.Image:
    return Image.open(io.BytesIO(data))


def _has_alpha(image: Image.Image) -> bool:
    return "A" in image.getbands() or "transparency" in image.info


def _flatten_palette(image: Image.Image) -> Image.Image:
    if image.mode in ("P", "PA", "1"):
        return image.convert("RGBA" if _has_alpha(image) else "RGB")
    return image


def _prepare_mode(image: Image.Image, pillow_format: str) -> Image.Image:
    native = _NATIVE_MODES.get(pillow_format)
    if native is None or image.mode in native:
        return image
    if pillow_format in ("WEBP", "PNG") and _has_alpha(image):
        return image.convert("RGBA")
    return image.convert("RGB")


def is_animated(data: bytes) -> bool:
    """True when the image holds more than one frame."""
    with open_image(data) as image:
        return bool(getattr(image, "is_animated", False))


def measure(data: bytes) -> tuple[int, int]:
    with open_image(data) as image:
        return image.size


def resize(image: Image.Image, spec: ResizeSpec) -> Image.Image:
    """Apply a fit-inside / cover resize. Never upscales; returns the input if nothing changes."""
    size = scaled_size(image.size, spec)
    if size != image.size:
        image = _flatten_palette(image).resize(size, Image.LANCZOS)

    box = crop_box(image.size, spec)
    if box is not None:
        image = image.crop(box)
    return image


def render(data: bytes, plan: TransformPlan) -> bytes:
    """
    Materialize the plan into a single output buffer.

    A plan with neither encoding nor resize returns the source bytes untouched.
    Otherwise the image is decoded once, resized, and saved once in the forced
    format or, failing that, in the decoded source format.
    """
    if plan.is_noop:
        return data

    try:
        image         = open_image(data)
        source_format = image.format

        if plan.resize is not None:
            image = resize(image, plan.resize)

        if plan.encoding is not None:
            target = FORMATS[plan.encoding]["pillow_format"]
            lossy  = FORMATS[plan.encoding]["lossy"]
        else:
            # source-format re-encodes keep the encoder defaults
            target = source_format
            lossy  = False

        if not target:
            raise ImageTransformError("Could not determine the source image format")

        options = {"quality": plan.quality} if lossy else {}
        image   = _prepare_mode(_flatten_palette(image) if target != "PNG" else image, target)

        buffer = io.BytesIO()
        image.save(buffer, format=target, **options)
    except (OSError, ValueError) as e:
        raise ImageTransformError(f"Image transform failed: {e}") from e

    logger.debug("Rendered %s image, %d -> %d bytes", target, len(data), buffer.tell())
    return buffer.getvalue()
