"""Rectangles in PDF point space and in pixel space."""
from dataclasses import dataclass

from pydantic import BaseModel, FiniteFloat, Field, model_validator


class PDFRect(BaseModel):
    """Annotation bounds in PDF space (origin bottom-left, Y grows upward)."""
    x0: FiniteFloat = Field(description="Lower-left X in points")
    y0: FiniteFloat = Field(description="Lower-left Y in points")
    x1: FiniteFloat = Field(description="Upper-right X in points")
    y1: FiniteFloat = Field(description="Upper-right Y in points")

    @model_validator(mode="after")
    def check_corners(self):
        if self.x1 < self.x0 or self.y1 < self.y0:
            raise ValueError(
                f"Upper-right corner ({self.x1}, {self.y1}) lies below/left of "
                f"lower-left corner ({self.x0}, {self.y0})"
            )
        return self


@dataclass(frozen=True)
class PixelRect:
    """Axis-aligned rectangle in pixel space (origin top-left, Y grows downward)."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def clip(self, width: int, height: int) -> "PixelRect":
        """Intersect with the (0, 0, width, height) canvas.

        The result may be empty when the rectangle lies outside the canvas.
        """
        x0 = min(max(self.x, 0), width)
        y0 = min(max(self.y, 0), height)
        x1 = min(max(self.right, 0), width)
        y1 = min(max(self.bottom, 0), height)
        return PixelRect(x0, y0, max(x1 - x0, 0), max(y1 - y0, 0))

    def as_tuple(self):
        return (self.x, self.y, self.width, self.height)
