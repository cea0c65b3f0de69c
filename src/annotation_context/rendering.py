"""Page rendering and image file I/O for context extraction.

Uses PyMuPDF to render PDF pages as raster images and OpenCV to read and
write image files. All arrays are RGB (or RGBA) ordered; OpenCV's BGR order
never leaks out of this module.
"""

from pathlib import Path

import cv2
import numpy as np
import pymupdf


def render_page_to_numpy(
    pdf_path: str,
    page_num: int,
    zoom: float = 2.0,
    alpha: bool = False,
) -> np.ndarray:
    """Rasterize one PDF page at ``zoom`` pixels per PDF point.

    Args:
        pdf_path: Path to the PDF file
        page_num: Page number (1-indexed)
        zoom: Pixels per PDF point. Must match the extractor's
            scale_up_factor or crops land in the wrong place.
        alpha: Render onto a transparent background and return RGBA

    Returns:
        uint8 array of shape (height, width, 3), or (height, width, 4)
        with ``alpha``

    Raises:
        FileNotFoundError: If the PDF doesn't exist
        pymupdf.FileDataError: If the file is not a readable PDF
        IndexError: If the page number is out of range
    """
    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(f"PDF not found: {pdf_path}")

    with pymupdf.open(str(pdf_path)) as doc:
        if not 1 <= page_num <= doc.page_count:
            raise IndexError(f"Page {page_num} out of range (PDF has {doc.page_count} pages)")

        pix = doc[page_num - 1].get_pixmap(matrix=pymupdf.Matrix(zoom, zoom), alpha=alpha)
        # frombuffer over the bytes copy is read-only
        samples = np.frombuffer(pix.samples, dtype=np.uint8)
        return samples.reshape(pix.height, pix.width, pix.n).copy()


def to_uint8(img: np.ndarray) -> np.ndarray:
    """Rescale a 16/32-bit integer image to the 0..255 range of uint8."""
    if img.dtype == np.uint8:
        return img
    if not np.issubdtype(img.dtype, np.integer):
        raise TypeError(f"Expected an integer image, got {img.dtype}")
    scale = 255.0 / np.iinfo(img.dtype).max
    return np.clip(np.rint(img.astype(np.float64) * scale), 0, 255).astype(np.uint8)


def load_image(path: str) -> np.ndarray:
    """Read an image file (e.g. a comment-box glyph) as 8-bit RGB or RGBA.

    16-bit files are scaled down to 8 bits per channel.

    Raises:
        FileNotFoundError: If the file is missing or OpenCV cannot decode it
    """
    path = Path(path)
    img = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if img is None:
        raise FileNotFoundError(f"Image not found or unreadable: {path}")

    img = to_uint8(img)
    if img.ndim == 3 and img.shape[2] == 4:
        return cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    if img.ndim == 3:
        return cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    return img


def save_image(path: str, img: np.ndarray) -> Path:
    """Write an RGB/RGBA/grayscale array to disk; format follows the suffix.

    Raises:
        OSError: If OpenCV fails to encode or write the file
    """
    path = Path(path)
    if img.ndim == 3 and img.shape[2] == 4:
        out = cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    elif img.ndim == 3:
        out = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    else:
        out = img

    if not cv2.imwrite(str(path), out):
        raise OSError(f"Failed to write image: {path}")
    return path
