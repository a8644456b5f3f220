"""
Query-string directive parsing.

Recognized parameters: width, height, quality, format, cropped.
Numeric values are read the lenient way browsers/CDNs usually do ("150px" -> 150);
anything that yields no leading integer is treated as absent, never as zero.
"""
import re
from urllib.parse import parse_qs

from models import TransformDirectives
from settings import DEFAULT_QUALITY

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(raw: str | None) -> int | None:
    if raw is None:
        return None
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else None


def _positive(value: int | None) -> int | None:
    return value if value is not None and value > 0 else None


def parse_directives(querystring: str) -> TransformDirectives:
    params = parse_qs(querystring or "", keep_blank_values=True)

    def first(name: str) -> str | None:
        values = params.get(name)
        return values[0] if values else None

    fmt = first("format")
    return TransformDirectives(
        format=fmt.strip().lower() if fmt else None,
        width=_positive(_parse_int(first("width"))),
        height=_positive(_parse_int(first("height"))),
        quality=_parse_int(first("quality")),
        cropped="cropped" in params,
        resize_requested="width" in params or "height" in params,
    )


def effective_quality(directives: TransformDirectives) -> int:
    """Requested quality clamped to 0..100; defaults to 82 when absent or non-numeric."""
    if directives.quality is None:
        return DEFAULT_QUALITY
    return max(0, min(100, directives.quality))
