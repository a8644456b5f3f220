# ─────────────────────────────────────────────────────────────────────────────
#  Output format registry and negotiation
#
#  Each entry maps a `format=` directive value to how the codec encodes it.
#
#  Per-format fields:
#    pillow_format — format name passed to PIL.Image.save
#    content_type  — canonical MIME string written to the response header
#    lossy         — whether the quality directive applies
# ─────────────────────────────────────────────────────────────────────────────
from settings import GIF_CONTENT_TYPE

ORIGINAL = "original"

FORMATS: dict[str, dict] = {

    "webp": {
        "pillow_format": "WEBP",
        "content_type":  "image/webp",
        "lossy":         True,
    },

    "png": {
        "pillow_format": "PNG",
        "content_type":  "image/png",
        "lossy":         False,
    },

    "jpeg": {
        "pillow_format": "JPEG",
        "content_type":  "image/jpeg",
        "lossy":         True,
    },

}

# Directive spellings accepted for an explicit format
ALIASES = {"jpg": "jpeg"}


def canonical_format(value: str | None) -> str | None:
    """Return the registry key for an explicit format directive, or None if unrecognized."""
    if not value:
        return None
    value = ALIASES.get(value, value)
    return value if value in FORMATS else None


def accepts_webp(headers: dict) -> bool:
    """True when the first Accept header entry advertises WebP support."""
    entries = headers.get("accept") or []
    if not entries:
        return False
    return "image/webp" in (entries[0].value or "")


def resolve_format(source_type: str, requested: str | None, headers: dict) -> tuple[str | None, str | None]:
    """
    Decide the encoding to force and the Content-Type to emit.

    Returns (encoding, content_type); (None, None) leaves the source encoding
    and the response's existing header alone.

    `format=original` and an explicit recognized format short-circuit.
    Otherwise GIFs are flattened to PNG, and a WebP-capable client overrides
    that (the later rule wins).
    """
    if requested == ORIGINAL:
        return None, None

    explicit = canonical_format(requested)
    if explicit:
        return explicit, FORMATS[explicit]["content_type"]

    encoding = None
    if source_type == GIF_CONTENT_TYPE:
        encoding = "png"
    if accepts_webp(headers):
        encoding = "webp"

    if encoding is None:
        return None, None
    return encoding, FORMATS[encoding]["content_type"]
