"""Markup overlays painted onto an extracted context image.

Overlays are placed with annotation_rect, so their rectangles live in the
crop's own coordinate frame. Rectangles may poke outside the crop when the
crop was clamped at a page edge; painting is clipped to the crop.

Blending is non-premultiplied source-over, matching how a translucent
color is drawn onto an RGB or RGBA canvas.
"""

import logging
from typing import Optional, Sequence

import cv2
import numpy as np

from schemas.enums import MarkupKind
from schemas.geometry import PixelRect

from .config import ContextImageConfig
from .quads import iter_quads
from .rendering import to_uint8
from .transform import DEFAULT_CONFIG, annotation_rect

logger = logging.getLogger(__name__)

# ITU-R BT.601 luma weights, for painting onto grayscale pages
_LUMA = np.array([0.299, 0.587, 0.114], dtype=np.float32)


def render_overlay(
    img: np.ndarray,
    points: Sequence[float],
    subimage: PixelRect,
    page_height: int,
    markup: MarkupKind,
    config: Optional[ContextImageConfig] = None,
    overlay_asset: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Paint the overlay for ``markup`` onto ``img`` in place.

    Args:
        img: Freshly cropped context image (modified in place)
        points: Flat QuadPoints array of the annotation, in PDF points
        subimage: Crop rectangle ``img`` was cut from
        page_height: Height of the full rendered page in pixels
        markup: Which overlay to paint
        config: Scale and color settings
        overlay_asset: Comment-box image, only used for popups

    Returns:
        The same ``img`` array, for chaining
    """
    config = config or DEFAULT_CONFIG
    markup = MarkupKind(markup)

    if markup == MarkupKind.HIGHLIGHT:
        for quad in iter_quads(points):
            rect = annotation_rect(quad, subimage, page_height, config)
            paint_highlight(img, rect, config.highlight_color)

    elif markup == MarkupKind.POPUP:
        # popups always carry a single quad
        rect = annotation_rect(points[:8], subimage, page_height, config)
        paint_comment_box(img, rect, overlay_asset, config)

    return img


def paint_highlight(img: np.ndarray, rect: PixelRect, color: Sequence[int]) -> None:
    """Fill ``rect`` with a translucent RGBA color, clipped to the image."""
    h, w = img.shape[:2]
    clipped = rect.clip(w, h)
    if clipped.is_empty:
        logger.debug(f"Highlight {rect} falls outside {w}x{h} image")
        return

    region = img[clipped.y:clipped.bottom, clipped.x:clipped.right]
    region[...] = _source_over(region, color[:3], color[3] / 255.0)


def paint_comment_box(
    img: np.ndarray,
    rect: PixelRect,
    comment_box: Optional[np.ndarray],
    config: Optional[ContextImageConfig] = None,
) -> None:
    """Stretch the comment-box image over ``rect``.

    Without an image, a stroked outline in the highlight color stands in
    for it.
    """
    config = config or DEFAULT_CONFIG

    if comment_box is None:
        logger.debug("No comment box image available, drawing outline instead")
        paint_outline(img, rect, config.highlight_color, config.outline_thickness)
        return

    if rect.is_empty:
        logger.debug(f"Comment box {rect} has no area, skipping")
        return

    # alpha and color are blended on the 0..255 scale
    patch = cv2.resize(to_uint8(comment_box), (rect.width, rect.height), interpolation=cv2.INTER_LINEAR)
    _paste(img, patch, rect)


def paint_outline(img: np.ndarray, rect: PixelRect, color: Sequence[int], thickness: int) -> None:
    """Stroke the border of ``rect`` with a translucent RGBA color."""
    h, w = img.shape[:2]
    mask = np.zeros((h, w), dtype=np.uint8)
    # cv2 clips points outside the mask and centers the stroke on the edge
    cv2.rectangle(mask, (rect.x, rect.y), (rect.right, rect.bottom), 255, thickness)

    alpha = (mask > 0).astype(np.float32) * (color[3] / 255.0)
    img[...] = _source_over(img, color[:3], alpha)


def _paste(img: np.ndarray, patch: np.ndarray, rect: PixelRect) -> None:
    """Composite ``patch`` (sized to ``rect``) onto ``img``, clipped."""
    h, w = img.shape[:2]
    clipped = rect.clip(w, h)
    if clipped.is_empty:
        return

    # matching window inside the patch
    px = clipped.x - rect.x
    py = clipped.y - rect.y
    patch = patch[py:py + clipped.height, px:px + clipped.width]

    if patch.ndim == 2:
        rgb = np.repeat(patch[..., None], 3, axis=2)
        alpha = 1.0
    elif patch.shape[2] == 4:
        rgb = patch[..., :3]
        alpha = patch[..., 3].astype(np.float32) / 255.0
    else:
        rgb = patch
        alpha = 1.0

    region = img[clipped.y:clipped.bottom, clipped.x:clipped.right]
    region[...] = _source_over(region, rgb, alpha)


def _source_over(dst: np.ndarray, src_rgb, src_alpha) -> np.ndarray:
    """Blend an RGB source with per-pixel or scalar alpha over ``dst``.

    ``dst`` may be grayscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4); the
    result has the same shape and dtype.
    """
    shape = dst.shape[:2]
    rgb = np.broadcast_to(np.asarray(src_rgb, dtype=np.float32), shape + (3,))
    a = np.broadcast_to(np.asarray(src_alpha, dtype=np.float32), shape)
    base = dst.astype(np.float32)

    if dst.ndim == 2:
        out = (rgb @ _LUMA) * a + base * (1.0 - a)

    elif dst.shape[2] == 3:
        a3 = a[..., None]
        out = rgb * a3 + base * (1.0 - a3)

    else:
        dst_a = base[..., 3] / 255.0
        out_a = a + dst_a * (1.0 - a)
        safe_a = np.where(out_a > 0, out_a, 1.0)[..., None]
        color = (rgb * a[..., None] + base[..., :3] * (dst_a * (1.0 - a))[..., None]) / safe_a
        out = np.concatenate([color, (out_a * 255.0)[..., None]], axis=2)

    return np.clip(np.rint(out), 0, 255).astype(dst.dtype)
