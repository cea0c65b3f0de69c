"""Annotation context images - crops around PDF annotations with markup overlays.

Public API:
    SubImageExtractor: Configured extractor producing context images
    make_plain_sub_image: Context around a rectangle, no overlay
    make_highlighted_sub_image: Context around highlight quads, tinted
    make_popup_sub_image: Context around a popup with its comment box
    subimage_rect / annotation_rect: PDF-space to pixel-space transforms
    render_page_to_numpy: Convert PDF page to NumPy array
"""

from .config import ContextImageConfig, BORDER_WIDTH, SCALE_UP_FACTOR, HIGHLIGHT_COLOR
from .debug import DebugImageWriter, DebugSink
from .extract import (
    SubImageExtractor,
    make_plain_sub_image,
    make_highlighted_sub_image,
    make_popup_sub_image,
)
from .quads import InvalidQuadPoints, rect_to_quad
from .rendering import render_page_to_numpy, load_image, save_image
from .transform import subimage_rect, annotation_rect

__all__ = [
    "ContextImageConfig",
    "BORDER_WIDTH",
    "SCALE_UP_FACTOR",
    "HIGHLIGHT_COLOR",
    "DebugImageWriter",
    "DebugSink",
    "SubImageExtractor",
    "make_plain_sub_image",
    "make_highlighted_sub_image",
    "make_popup_sub_image",
    "InvalidQuadPoints",
    "rect_to_quad",
    "render_page_to_numpy",
    "load_image",
    "save_image",
    "subimage_rect",
    "annotation_rect",
]
