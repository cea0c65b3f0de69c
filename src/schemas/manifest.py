"""Pydantic models for batch extraction manifests.

Example manifest.yaml:

    entries:
      - pdf: paper.pdf
        page: 3
        markup: highlight
        quads: [100, 230, 150, 230, 100, 200, 150, 200]
      - pdf: paper.pdf
        page: 4
        markup: popup
        rect: {x0: 400, y0: 700, x1: 420, y1: 720}
        comment_box: assets/comment.png
"""
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, FiniteFloat, Field, model_validator

from .enums import MarkupKind
from .geometry import PDFRect


class ManifestEntry(BaseModel):
    """One annotation to turn into a context image."""
    pdf: Path = Field(description="PDF path, relative to the manifest file")
    page: int = Field(ge=1, description="Page number (1-indexed)")
    markup: MarkupKind = Field(default=MarkupKind.NONE)
    rect: Optional[PDFRect] = Field(default=None, description="Annotation bounds")
    quads: Optional[List[FiniteFloat]] = Field(default=None, description="Flat QuadPoints array")
    comment_box: Optional[Path] = Field(default=None, description="Popup overlay asset")
    name: Optional[str] = Field(default=None, description="Output file stem")

    @model_validator(mode="after")
    def check_one_geometry(self):
        # Short quad lists are let through on purpose; the extractor reports
        # them as having nothing to extract.
        if (self.rect is None) == (self.quads is None):
            raise ValueError("Exactly one of 'rect' or 'quads' must be given")
        return self


class Manifest(BaseModel):
    entries: List[ManifestEntry] = Field(default_factory=list)
