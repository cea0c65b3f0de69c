"""Shared test fixtures and configuration."""
import numpy as np
import pymupdf
import pytest
from pathlib import Path

# A page of 600x800 points rendered at the default 2x scale
PAGE_WIDTH_PT = 600
PAGE_HEIGHT_PT = 800
PAGE_WIDTH_PX = 1200
PAGE_HEIGHT_PX = 1600


@pytest.fixture
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def white_page():
    """Blank rendered page, RGB."""
    return np.full((PAGE_HEIGHT_PX, PAGE_WIDTH_PX, 3), 255, dtype=np.uint8)


@pytest.fixture
def gradient_page():
    """Rendered page whose pixels encode their own position."""
    rows = np.arange(PAGE_HEIGHT_PX, dtype=np.uint32)[:, None]
    cols = np.arange(PAGE_WIDTH_PX, dtype=np.uint32)[None, :]
    img = np.zeros((PAGE_HEIGHT_PX, PAGE_WIDTH_PX, 3), dtype=np.uint8)
    img[..., 0] = (rows % 256).astype(np.uint8)
    img[..., 1] = (cols % 256).astype(np.uint8)
    img[..., 2] = ((rows // 256) * 16 + cols // 256).astype(np.uint8)
    return img


@pytest.fixture
def sample_pdf(tmp_path):
    """One-page PDF with a black box at PDF rect (100, 200, 150, 230).

    PyMuPDF page coordinates have a top-left origin, so the box is drawn at
    y = 800 - 230 .. 800 - 200.
    """
    pdf_path = tmp_path / "sample.pdf"
    doc = pymupdf.open()
    page = doc.new_page(width=PAGE_WIDTH_PT, height=PAGE_HEIGHT_PT)
    page.draw_rect(pymupdf.Rect(100, 570, 150, 600), color=(0, 0, 0), fill=(0, 0, 0))
    doc.save(str(pdf_path))
    doc.close()
    return pdf_path
