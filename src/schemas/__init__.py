"""Annotation context schemas - markup kinds, geometry and batch manifests."""
from .enums import MarkupKind, CONTEXT_MULTIPLIERS, context_multiplier
from .geometry import PDFRect, PixelRect
from .manifest import Manifest, ManifestEntry

__all__ = [
    # Markup
    "MarkupKind",
    "CONTEXT_MULTIPLIERS",
    "context_multiplier",
    # Geometry
    "PDFRect",
    "PixelRect",
    # Batch
    "Manifest",
    "ManifestEntry",
]
