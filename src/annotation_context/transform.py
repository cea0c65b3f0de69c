"""PDF space to pixel space rectangle transforms.

PDF coordinates have their origin at the bottom-left of the page and are
measured in points; the rendered page has its origin at the top-left and is
scaled by ``scale_up_factor``. Two transforms are provided:

- subimage_rect: the outer crop, with a context border and page clamping
- annotation_rect: one quad re-expressed inside an existing crop, with no
  border and no clamping, used to place overlays
"""
import math
from typing import Optional, Sequence

from schemas.enums import MarkupKind, context_multiplier
from schemas.geometry import PixelRect

from .config import ContextImageConfig
from .quads import max_x, max_y, min_x, min_y

DEFAULT_CONFIG = ContextImageConfig()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going toward +infinity."""
    return int(math.floor(value + 0.5))


def subimage_rect(
    points: Sequence[float],
    page_width: int,
    page_height: int,
    markup: MarkupKind = MarkupKind.NONE,
    config: Optional[ContextImageConfig] = None,
) -> PixelRect:
    """Compute the crop rectangle around all quads of an annotation.

    Args:
        points: Flat QuadPoints array (8*n values) in PDF points
        page_width: Rendered page width in pixels
        page_height: Rendered page height in pixels
        markup: Markup kind, selects the context multiplier
        config: Border and scale settings

    Returns:
        PixelRect in top-left pixel space. Width and height are clamped to
        the page and the Y flip uses the clamped height.
    """
    config = config or DEFAULT_CONFIG
    scale = config.scale_up_factor

    # upper left corner of the union box, still bottom-left oriented
    lo_x = min_x(points)
    lo_y = min_y(points)

    scaled_border = config.border_width * context_multiplier(markup)

    x = max(round_half_up((lo_x - scaled_border) * scale), 0)
    y = max(round_half_up((lo_y - scaled_border) * scale), 0)

    width = round_half_up((max_x(points) - lo_x + 2 * scaled_border) * scale)
    width = min(width, page_width - x)
    height = round_half_up((max_y(points) - lo_y + 2 * scaled_border) * scale)
    height = min(height, page_height - y)

    # y was counted from the bottom
    y = page_height - y - height
    return PixelRect(x, y, width, height)


def annotation_rect(
    quad: Sequence[float],
    subimage: PixelRect,
    page_height: int,
    config: Optional[ContextImageConfig] = None,
) -> PixelRect:
    """Place one quad inside the crop described by ``subimage``.

    The Y flip subtracts from the full page height rather than the crop
    height; the crop offset ``subimage.y`` makes up the difference.
    """
    config = config or DEFAULT_CONFIG
    scale = config.scale_up_factor

    x = min_x(quad)
    y = min_y(quad)

    width = round_half_up((max_x(quad) - x) * scale)
    height = round_half_up((max_y(quad) - y) * scale)

    x = int(x * scale)
    y = int(y * scale)

    x -= subimage.x
    y = page_height - y - subimage.y - height
    return PixelRect(x, y, width, height)
