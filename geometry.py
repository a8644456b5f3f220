"""
Geometry: resize decisions and the pixel math behind them.

Two fit modes:
  inside — shrink to fit within the box, aspect preserved
  cover  — shrink until the box is filled, then centre-crop to it
Images are NEVER upscaled; an image that already fits is left as is.
"""
from models import ResizeSpec, TransformDirectives


def resolve_resize(directives: TransformDirectives) -> ResizeSpec | None:
    """Return the requested resize, or None when no usable width/height was given."""
    if not directives.resize_requested:
        return None
    if directives.width is None and directives.height is None:
        return None
    return ResizeSpec(
        width=directives.width,
        height=directives.height,
        fit="cover" if directives.cropped else "inside",
        without_enlargement=True,
    )


def _ratios(size: tuple[int, int], spec: ResizeSpec) -> list[float]:
    w, h = size
    ratios = []
    if spec.width:
        ratios.append(spec.width / w)
    if spec.height:
        ratios.append(spec.height / h)
    return ratios


def scaled_size(size: tuple[int, int], spec: ResizeSpec) -> tuple[int, int]:
    """Size the source is scaled to before any crop."""
    w, h   = size
    ratios = _ratios(size, spec)
    if not ratios:
        return size

    ratio = max(ratios) if spec.fit == "cover" else min(ratios)
    if spec.without_enlargement and ratio >= 1:
        return size

    return max(1, round(w * ratio)), max(1, round(h * ratio))


def crop_box(size: tuple[int, int], spec: ResizeSpec) -> tuple[int, int, int, int] | None:
    """Centred crop applied after scaling in cover mode, or None when nothing is cut."""
    if spec.fit != "cover":
        return None

    w, h     = size
    target_w = min(spec.width or w, w)
    target_h = min(spec.height or h, h)
    if (target_w, target_h) == (w, h):
        return None

    left = (w - target_w) // 2
    top  = (h - target_h) // 2
    return left, top, left + target_w, top + target_h
