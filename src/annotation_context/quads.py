"""Bounding-extent helpers for PDF QuadPoints arrays.

A QuadPoints array holds 8*n floats describing n quadrilaterals, one per
line of selected text for a highlight. Every quadrilateral is treated as an
axis-aligned rectangle; multi-column selections are not handled.

X values live on the even indices, Y values on the odd indices.
"""

import math
import sys
from typing import Iterator, List, Sequence

from schemas.geometry import PDFRect

QUAD_LENGTH = 8


class InvalidQuadPoints(ValueError):
    """Raised when a QuadPoints array cannot describe anything to extract."""


def require_quad(points: Sequence[float]) -> None:
    """Raise InvalidQuadPoints unless at least one full, finite quad is present."""
    if len(points) < QUAD_LENGTH:
        raise InvalidQuadPoints(
            f"QuadPoints needs at least {QUAD_LENGTH} values, got {len(points)}"
        )
    if not all(math.isfinite(value) for value in points):
        raise InvalidQuadPoints(f"QuadPoints must be finite numbers, got {list(points)}")


def rect_to_quad(rect: PDFRect) -> List[float]:
    """Replicate the corners of a rectangle into a single quad."""
    return [
        rect.x0, rect.y0,
        rect.x1, rect.y0,
        rect.x0, rect.y1,
        rect.x1, rect.y1,
    ]


def iter_quads(points: Sequence[float]) -> Iterator[List[float]]:
    """Yield each 8-value quad segment of a QuadPoints array."""
    for n in range(0, len(points), QUAD_LENGTH):
        yield list(points[n:n + QUAD_LENGTH])


# The running extreme is stored truncated toward zero, so boxes are biased
# toward the origin by up to one unit.

def min_x(points: Sequence[float]) -> int:
    low = sys.maxsize
    for value in points[0::2]:
        if value < low:
            low = int(value)
    return low


def min_y(points: Sequence[float]) -> int:
    low = sys.maxsize
    for value in points[1::2]:
        if value < low:
            low = int(value)
    return low


def max_x(points: Sequence[float]) -> int:
    """Largest X coordinate; starts at 0, so all-negative input yields 0."""
    high = 0
    for value in points[0::2]:
        if value > high:
            high = int(value)
    return high


def max_y(points: Sequence[float]) -> int:
    """Largest Y coordinate; starts at 0, so all-negative input yields 0."""
    high = 0
    for value in points[1::2]:
        if value > high:
            high = int(value)
    return high
