"""Cut a context image around a PDF annotation out of a rendered page.

The page must have been rendered at ``config.scale_up_factor`` pixels per
PDF point. The extracted image keeps the page's pixel format (dtype and
channel count) and the page array itself is never modified.
"""

import logging
from typing import Optional, Sequence

import numpy as np

from schemas.enums import MarkupKind
from schemas.geometry import PDFRect

from .config import ContextImageConfig
from .debug import DebugSink
from .overlay import render_overlay
from .quads import InvalidQuadPoints, rect_to_quad, require_quad
from .transform import subimage_rect

logger = logging.getLogger(__name__)


class SubImageExtractor:
    """Builds context images with a fixed config and optional debug sink.

    Instances hold no per-call state and can be shared across threads.
    """

    def __init__(
        self,
        config: Optional[ContextImageConfig] = None,
        debug_sink: Optional[DebugSink] = None,
    ):
        self.config = config or ContextImageConfig()
        self.debug_sink = debug_sink

    def make_plain_sub_image(self, page: np.ndarray, rect: PDFRect) -> np.ndarray:
        """Annotation area plus context, no overlay."""
        return self.make_sub_image(page, rect_to_quad(rect), MarkupKind.NONE)

    def make_highlighted_sub_image(self, page: np.ndarray, quad_points: Sequence[float]) -> np.ndarray:
        """Highlight context with every quad tinted."""
        return self.make_sub_image(page, quad_points, MarkupKind.HIGHLIGHT)

    def make_popup_sub_image(
        self,
        page: np.ndarray,
        rect: PDFRect,
        comment_box: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Popup context with the comment-box image (or an outline) drawn on."""
        return self.make_sub_image(page, rect_to_quad(rect), MarkupKind.POPUP, comment_box)

    def make_sub_image(
        self,
        page: np.ndarray,
        quad_points: Sequence[float],
        markup: MarkupKind = MarkupKind.NONE,
        overlay_asset: Optional[np.ndarray] = None,
    ) -> np.ndarray:
        """Extract the annotation's surroundings and paint its overlay.

        Args:
            page: Full rendered page, (H, W), (H, W, 3) or (H, W, 4)
            quad_points: Flat QuadPoints array (8*n values) in PDF points
            markup: Overlay to paint
            overlay_asset: Comment-box image, only used for popups

        Returns:
            New array holding the context image

        Raises:
            InvalidQuadPoints: Fewer than 8 values, or the annotation lies
                entirely off the page, so there is nothing to extract
        """
        require_quad(quad_points)
        markup = MarkupKind(markup)

        page_height, page_width = page.shape[:2]
        rect = subimage_rect(quad_points, page_width, page_height, markup, self.config)
        if rect.is_empty:
            raise InvalidQuadPoints(
                f"Annotation falls outside the {page_width}x{page_height} page ({rect})"
            )

        logger.debug(f"Extracting {markup.value} context {rect} from {page_width}x{page_height} page")

        sub_image = page[rect.y:rect.bottom, rect.x:rect.right].copy()
        render_overlay(
            sub_image,
            quad_points,
            rect,
            page_height,
            markup,
            self.config,
            overlay_asset,
        )

        self._emit_debug(sub_image)
        return sub_image

    def _emit_debug(self, img: np.ndarray) -> None:
        if self.debug_sink is None:
            return
        try:
            self.debug_sink(img)
        except Exception as e:
            logger.warning(f"Debug image sink failed: {e}")


_default_extractor = SubImageExtractor()


def make_plain_sub_image(page: np.ndarray, rect: PDFRect) -> np.ndarray:
    return _default_extractor.make_plain_sub_image(page, rect)


def make_highlighted_sub_image(page: np.ndarray, quad_points: Sequence[float]) -> np.ndarray:
    return _default_extractor.make_highlighted_sub_image(page, quad_points)


def make_popup_sub_image(
    page: np.ndarray,
    rect: PDFRect,
    comment_box: Optional[np.ndarray] = None,
) -> np.ndarray:
    return _default_extractor.make_popup_sub_image(page, rect, comment_box)
